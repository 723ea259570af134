import copy
import json
from pathlib import Path

from fundsim.schema import Fund, FundCosts, Scenario, TaxSettings

SAMPLE_SIMULATION = Path(__file__).resolve().parents[1] / "sample_simulation.json"


def write_simulation(tmp_path: Path, data: dict, filename: str = "simulation.json") -> Path:
    path = tmp_path / filename
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def clone_simulation(data: dict) -> dict:
    return copy.deepcopy(data)


def make_fund(
    fund_id: str = "f1",
    *,
    unit_price: float = 100.0,
    quantity: float = 1000.0,
    yearly_return_pct: float = 5.0,
    exit_costs=None,
    **costs: float,
) -> Fund:
    return Fund(
        id=fund_id,
        name=f"Fund {fund_id}",
        unit_price=unit_price,
        quantity=quantity,
        yearly_return_pct=yearly_return_pct,
        costs=FundCosts(**costs),
        exit_costs=exit_costs,
    )


def make_scenario(*funds: Fund, exit_costs=(), tax_settings: TaxSettings | None = None) -> Scenario:
    return Scenario(
        id="s1",
        name="Scenario 1",
        funds=tuple(funds),
        exit_costs=tuple(exit_costs),
        tax_settings=tax_settings or TaxSettings(),
    )
