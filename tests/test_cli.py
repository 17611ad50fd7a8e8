"""Tests für die Click-CLI (main.py)."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from main import cli


def _seed(root: Path) -> None:
    files = {
        "ress-ens.json": [{"id": 1, "name": "Dupont", "subjects": "Math"}],
        "ress-group.json": [{"id": 1, "name": "G1"}],
        "ress-salle.json": [{"id": 1, "name": "R1"}],
        "constraints.json": [{"id": 1, "resource": "Dupont", "day": "lundi",
                              "time": "08:00-10:00", "type": "Indisponible"}],
    }
    for name, data in files.items():
        (root / name).write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def runner():
    return CliRunner()


class TestCliRegistration:
    @pytest.mark.parametrize("command", [
        [], ["generate"], ["export"], ["list"], ["history"], ["show"],
        ["validate"], ["excel"], ["clear"], ["config"], ["config", "show"], ["config", "init"],
    ])
    def test_help(self, runner, command):
        result = runner.invoke(cli, command + ["--help"], obj={})
        assert result.exit_code == 0
        assert "Usage" in result.output


class TestCliWorkflow:
    def test_generate_show_validate_excel_clear(self, runner):
        with runner.isolated_filesystem():
            _seed(Path("."))

            result = runner.invoke(cli, ["generate", "--date", "2024-01-01"], obj={})
            assert result.exit_code == 0, result.output
            assert Path("emploit/timetable_2024-01-01.json").is_file()

            result = runner.invoke(cli, ["history"], obj={})
            assert result.exit_code == 0
            assert "timetable_2024-01-01.json" in result.output

            result = runner.invoke(cli, ["list"], obj={})
            assert result.exit_code == 0
            assert "19/20" in result.output

            result = runner.invoke(cli, ["show", "2024-01-01"], obj={})
            assert result.exit_code == 0
            assert "Dupont" in result.output

            result = runner.invoke(cli, ["validate", "timetable_2024-01-01.json"], obj={})
            assert result.exit_code == 0, result.output

            result = runner.invoke(cli, ["excel", "2024-01-01", "-o", "out/plan.xlsx"], obj={})
            assert result.exit_code == 0
            assert Path("out/plan.xlsx").is_file()

            result = runner.invoke(cli, ["clear", "--yes"], obj={})
            assert result.exit_code == 0
            assert list(Path("emploit").iterdir()) == []

    def test_generate_without_date_fails(self, runner):
        with runner.isolated_filesystem():
            _seed(Path("."))
            result = runner.invoke(cli, ["generate"], obj={})
            assert result.exit_code == 1
            assert "Date requise" in result.output

    def test_generate_without_data_fails(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["generate", "--date", "2024-01-01"], obj={})
            assert result.exit_code == 1
            assert "Données insuffisantes" in result.output

    def test_validate_detects_violation(self, runner):
        with runner.isolated_filesystem():
            _seed(Path("."))
            entries = [{"time": "08:00-10:00", "lundi": "Math (Dupont, G1, R1)",
                        "mardi": "-", "mercredi": "-", "jeudi": "-", "vendredi": "-"}]
            Path("plan.json").write_text(json.dumps(entries), encoding="utf-8")
            result = runner.invoke(cli, ["export", "plan.json", "--date", "manuel"], obj={})
            assert result.exit_code == 0, result.output

            result = runner.invoke(cli, ["validate", "manuel"], obj={})
            assert result.exit_code == 1
            assert "unavailable_resource" in result.output

    def test_show_unknown_fails(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["show", "1999-01-01"], obj={})
            assert result.exit_code == 1
            assert "non trouvé" in result.output

    def test_clear_aborted_without_confirmation(self, runner):
        with runner.isolated_filesystem():
            _seed(Path("."))
            runner.invoke(cli, ["generate", "--date", "x"], obj={})
            result = runner.invoke(cli, ["clear"], input="n\n", obj={})
            assert result.exit_code == 0
            assert Path("emploit/timetable_x.json").is_file()


class TestCliConfig:
    def test_config_init_and_show(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["config", "init"], obj={})
            assert result.exit_code == 0
            assert Path("config/app_config.yaml").is_file()

            result = runner.invoke(cli, ["config", "show"], obj={})
            assert result.exit_code == 0
            assert "08:00-10:00" in result.output
            assert "ress-ens.json" in result.output

    def test_config_init_does_not_overwrite(self, runner):
        with runner.isolated_filesystem():
            Path("config").mkdir()
            Path("config/app_config.yaml").write_text("log_level: ERROR\n", encoding="utf-8")
            result = runner.invoke(cli, ["config", "init"], obj={})
            assert result.exit_code == 0
            assert Path("config/app_config.yaml").read_text(encoding="utf-8") == "log_level: ERROR\n"

    def test_custom_config_path(self, runner):
        with runner.isolated_filesystem():
            Path("daten").mkdir()
            _seed(Path("daten"))
            Path("cfg.yaml").write_text("store:\n  data_dir: daten\n", encoding="utf-8")
            result = runner.invoke(
                cli, ["--config", "cfg.yaml", "generate", "--date", "d", "--quiet"], obj={})
            assert result.exit_code == 0, result.output
            assert Path("daten/emploit/timetable_d.json").is_file()

    def test_invalid_config_aborts(self, runner):
        with runner.isolated_filesystem():
            Path("cfg.yaml").write_text("log_level: LAUT\n", encoding="utf-8")
            result = runner.invoke(cli, ["--config", "cfg.yaml", "list"], obj={})
            assert result.exit_code == 1
            assert "ungültig" in result.output
