import pytest

from fundsim.schema import load_simulation
from fundsim.validate import validate_simulation
from tests.helpers import SAMPLE_SIMULATION, clone_simulation, write_simulation


def _run_validation(tmp_path, sample_simulation_dict, mutator):
    data = clone_simulation(sample_simulation_dict)
    mutator(data)
    path = write_simulation(tmp_path, data)
    return validate_simulation(load_simulation(path))


def _add_scenario(data):
    extra = clone_simulation(data["scenarios"][1])
    extra["id"] = "extra"
    data["scenarios"].extend([extra, clone_simulation(extra) | {"id": "extra-2"}])


def _add_funds(data):
    fund = data["scenarios"][1]["funds"][0]
    data["scenarios"][1]["funds"] = [dict(fund, id=f"f{idx}", quantity=10) for idx in range(6)]


def test_sample_simulation_validates():
    result = validate_simulation(load_simulation(SAMPLE_SIMULATION))
    assert result.errors == []
    assert result.warnings == []


@pytest.mark.parametrize(
    ("mutator", "expected_error"),
    [
        (
            lambda d: d.update({"time_horizon": 4}),
            "time_horizon: must be >= 5",
        ),
        (
            lambda d: d.update({"time_horizon": 31}),
            "time_horizon: must be <= 30",
        ),
        (
            lambda d: d.update({"scenarios": []}),
            "scenarios: at least one scenario is required",
        ),
        (
            _add_scenario,
            "scenarios: at most 3 scenarios are supported",
        ),
        (
            _add_funds,
            "scenarios[1].funds: at most 5 funds are supported",
        ),
        (
            lambda d: d["scenarios"][1].update({"id": "realistic"}),
            "scenarios[1].id: duplicate scenario id 'realistic'",
        ),
        (
            lambda d: d["scenarios"][0]["funds"][1].update({"id": "world-equity"}),
            "scenarios[0].funds[1].id: duplicate fund id 'world-equity'",
        ),
        (
            lambda d: d["scenarios"][0]["funds"][0].update({"quantity": -1}),
            "scenarios[0].funds[0].quantity: must be >= 0",
        ),
        (
            lambda d: d["scenarios"][0]["tax_settings"].update({"realization_years": [10, 5]}),
            "scenarios[0].tax_settings.realization_years: must be strictly ascending without duplicates",
        ),
        (
            lambda d: d["scenarios"][0]["tax_settings"].update({"realization_years": [5, 5]}),
            "scenarios[0].tax_settings.realization_years: must be strictly ascending without duplicates",
        ),
        (
            lambda d: d["scenarios"][0]["tax_settings"].update({"realization_years": [0, 5]}),
            "scenarios[0].tax_settings.realization_years[0]: must be >= 1",
        ),
        (
            lambda d: d["scenarios"][0]["tax_settings"].update({"tax_rate_pct": 120}),
            "scenarios[0].tax_settings.tax_rate_pct: must be <= 100",
        ),
        (
            lambda d: d["scenarios"][0]["tax_settings"].update({"jurisdiction": "XX"}),
            "scenarios[0].tax_settings.jurisdiction: 'XX' is not valid; expected one of [BE, FLAT]",
        ),
        (
            lambda d: d["scenarios"][0]["exit_costs"].append({"year": 0, "exit_fee_pct": 1}),
            "scenarios[0].exit_costs[3].year: must be >= 1",
        ),
        (
            lambda d: d["scenarios"][0]["exit_costs"].append({"year": 2, "exit_fee_pct": 1}),
            "scenarios[0].exit_costs[3].year: duplicate exit cost year 2",
        ),
    ],
)
def test_validation_errors(tmp_path, sample_simulation_dict, mutator, expected_error):
    result = _run_validation(tmp_path, sample_simulation_dict, mutator)
    assert expected_error in result.errors
    assert not result.is_valid


@pytest.mark.parametrize(
    ("mutator", "expected_warning"),
    [
        (
            lambda d: d["scenarios"][0]["funds"][0]["costs"].update({"ter_pct": -0.5}),
            "scenarios[0].funds[0].costs.ter_pct: negative or missing rate is treated as 0",
        ),
        (
            lambda d: d["scenarios"][0]["exit_costs"][0].update({"exit_fee_pct": -1}),
            "scenarios[0].exit_costs[0].exit_fee_pct: negative or missing rate is treated as 0",
        ),
        (
            lambda d: d["scenarios"][0]["tax_settings"].update({"realization_years": [5, 11]}),
            "scenarios[0].tax_settings.realization_years[1]: 11 is beyond the time horizon 1-10 and is ignored",
        ),
        (
            lambda d: d["scenarios"][0]["exit_costs"].append({"year": 12, "exit_fee_pct": 1}),
            "scenarios[0].exit_costs[3].year: 12 is beyond the time horizon 1-10 and is ignored",
        ),
        (
            lambda d: d["scenarios"][0]["funds"][1].update({"exit_costs": [{"year": 15, "exit_fee_pct": 1}]}),
            "scenarios[0].funds[1].exit_costs[0].year: 15 is beyond the time horizon 1-10 and is ignored",
        ),
        (
            lambda d: d["scenarios"][1].update({"funds": []}),
            "scenarios[1].funds: scenario 'Low-cost Index' has no funds",
        ),
        (
            lambda d: d["scenarios"][1]["funds"][0].update({"quantity": 1300}),
            "scenarios[1].funds: allocated 130,000.00 exceeds initial capital 120,000.00",
        ),
    ],
)
def test_validation_warnings_do_not_block(tmp_path, sample_simulation_dict, mutator, expected_warning):
    result = _run_validation(tmp_path, sample_simulation_dict, mutator)
    assert expected_warning in result.warnings
    assert result.is_valid
