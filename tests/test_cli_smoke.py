import json

from fundsim.__main__ import main
from tests.helpers import SAMPLE_SIMULATION, clone_simulation, write_simulation


def test_validate_mode_exits_zero(capsys):
    code = main([str(SAMPLE_SIMULATION), "--validate"])

    assert code == 0
    assert "Simulation is valid." in capsys.readouterr().out


def test_invalid_simulation_returns_one(tmp_path, sample_simulation_dict, capsys):
    data = clone_simulation(sample_simulation_dict)
    data["time_horizon"] = 3
    path = write_simulation(tmp_path, data)

    code = main([str(path), "--validate"])
    assert code == 1
    assert "ERROR: time_horizon: must be >= 5" in capsys.readouterr().err


def test_missing_simulation_file_returns_two(tmp_path):
    missing = tmp_path / "nope.json"
    code = main([str(missing), "--validate"])
    assert code == 2


def test_malformed_simulation_returns_two(tmp_path, sample_simulation_dict, capsys):
    data = clone_simulation(sample_simulation_dict)
    del data["scenarios"][0]["id"]
    path = write_simulation(tmp_path, data)

    code = main([str(path)])
    assert code == 2
    assert "scenarios[0].id: missing required field" in capsys.readouterr().err


def test_out_of_range_horizon_override_returns_two():
    code = main([str(SAMPLE_SIMULATION), "--horizon", "40"])
    assert code == 2


def test_shorter_horizon_override_runs_sample(capsys):
    code = main([str(SAMPLE_SIMULATION), "--horizon", "5", "--summary"])

    assert code == 0
    out = capsys.readouterr().out
    assert "WARNING: scenarios[0].tax_settings.realization_years[1]: 10 is beyond the time horizon 1-5" in out
    assert "Scenario: Realistic Scenario (realistic)" in out


def test_horizon_override_below_realization_years_still_validates(capsys):
    code = main([str(SAMPLE_SIMULATION), "--horizon", "6", "--validate"])

    assert code == 0
    assert "Simulation is valid." in capsys.readouterr().out


def test_summary_mode_prints_scenarios(capsys):
    code = main([str(SAMPLE_SIMULATION), "--summary", "--yearly"])

    assert code == 0
    out = capsys.readouterr().out
    assert "Scenario: Realistic Scenario (realistic)" in out
    assert "Final value after tax:" in out


def test_json_output_writes_results(tmp_path, capsys):
    output_path = tmp_path / "out" / "results.json"
    code = main([str(SAMPLE_SIMULATION), "--json", str(output_path), "--horizon", "12"])

    assert code == 0
    out = capsys.readouterr().out
    assert "Wrote results to" in out
    assert "Scenario:" not in out
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["time_horizon"] == 12
    assert [row["scenarioId"] for row in data["comparison"]] == ["realistic", "index"]
    assert len(data["scenarios"][1]["projection"]["years"]) == 12
