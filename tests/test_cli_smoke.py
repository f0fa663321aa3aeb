"""
Minimal smoke tests for athlete-sim CLI.

Tests basic functionality:
- App runs without errors
- Simulation table and JSON output
- Input validation and input files
- Optimizer and plan comparison
- Reference ranges
"""

import json

import pytest
from typer.testing import CliRunner

from athlete_sim.cli.main import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep a real ~/.athlete-sim/model.yaml from leaking into the tests."""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        """Test that app runs and shows help."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "simulate" in result.output
        assert "optimize" in result.output

    def test_simulate_default(self):
        result = runner.invoke(app, ["simulate"])
        assert result.exit_code == 0
        assert "Projected Trajectory" in result.output

    def test_simulate_with_factors_and_plot(self):
        result = runner.invoke(app, ["simulate", "--factors", "--plot", "strength_index", "-m", "6"])
        assert result.exit_code == 0
        assert "Model Factors" in result.output
        assert "Strength (pts)" in result.output

    def test_simulate_unusual_horizon_warns(self):
        result = runner.invoke(app, ["simulate", "-m", "3"])
        assert result.exit_code == 0
        assert "Warning" in result.output

    def test_simulate_json(self):
        result = runner.invoke(app, ["simulate", "--json", "--months", "6"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["trajectory"]) == 7
        assert data["trajectory"][0]["muscle_mass"] == 30.0
        assert data["report"]["duration_months"] == 6
        assert data["report"]["final_stats"]["month"] == 6

    def test_default_horizon_is_twelve_months(self):
        result = runner.invoke(app, ["simulate", "--json"])
        assert result.exit_code == 0
        assert len(json.loads(result.output)["trajectory"]) == 13

    def test_simulate_out_of_range(self):
        result = runner.invoke(app, ["simulate", "--age", "60"])
        assert result.exit_code == 1
        assert "Age must be between 11 and 50." in result.output

    def test_simulate_negative_months(self):
        result = runner.invoke(app, ["simulate", "--months=-1"])
        assert result.exit_code == 1

    def test_simulate_unknown_plot_metric(self):
        result = runner.invoke(app, ["simulate", "--plot", "bogus"])
        assert result.exit_code == 1
        assert "Unknown metric" in result.output

    def test_simulate_from_input_file(self, tmp_path):
        path = tmp_path / "athlete.json"
        path.write_text(json.dumps({
            "physiology": {
                "age": 40,
                "body_weight": 80,
                "muscle_mass_percentage": 35,
                "body_fat": 20,
                "strength_index": 90,
                "endurance_index": 110,
                "mobility_score": 60,
            },
            "regimen": {"training_hours": 1.5, "intensity": 60, "diet": 80, "sleep_hours": 7},
        }))
        result = runner.invoke(app, ["simulate", "--input", str(path), "--json", "-m", "12"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["report"]["physiology"]["age"] == 40
        assert data["trajectory"][0]["muscle_mass"] == 28.0

    def test_simulate_missing_input_file(self, tmp_path):
        result = runner.invoke(app, ["simulate", "--input", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_optimize_json(self):
        result = runner.invoke(app, ["optimize", "--json", "--months", "12"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["candidates_evaluated"] == 81
        assert len(data["trajectory"]) == 13
        assert data["regimen"]["training_hours"] in (1.5, 3.0, 4.5)
        assert "comparison" not in data

    def test_optimize_compare(self):
        result = runner.invoke(app, ["optimize", "--compare", "--hours", "1", "--json", "-m", "6"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["comparison"]["your_score"] <= data["score"]
        assert [m["metric"] for m in data["comparison"]["metrics"]][0] == "muscle_mass"

    def test_optimize_table_with_comparison(self):
        result = runner.invoke(app, ["optimize", "-c", "-m", "6"])
        assert result.exit_code == 0
        assert "Optimal plan" in result.output
        assert "Your Plan vs Optimal Plan" in result.output

    def test_optimize_bad_user_grid(self, isolated_home):
        config_dir = isolated_home / ".athlete-sim"
        config_dir.mkdir()
        (config_dir / "model.yaml").write_text("optimizer:\n  grid:\n    diet: 80\n")
        result = runner.invoke(app, ["optimize"])
        assert result.exit_code == 1
        assert "Invalid optimizer config" in result.output

    def test_reference_json(self):
        result = runner.invoke(app, ["reference", "40", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["body_fat"] == "Athlete: 11-18%"

    def test_reference_table(self):
        result = runner.invoke(app, ["reference"])
        assert result.exit_code == 0
        assert "Reference Ranges" in result.output

    def test_reference_out_of_range(self):
        result = runner.invoke(app, ["reference", "8"])
        assert result.exit_code == 1
