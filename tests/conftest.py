import json

import pytest

from tests.helpers import SAMPLE_SIMULATION


@pytest.fixture
def sample_simulation_dict() -> dict:
    return json.loads(SAMPLE_SIMULATION.read_text(encoding="utf-8"))
