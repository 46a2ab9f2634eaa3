import importlib
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

cli_app_module = importlib.import_module("spindle.cli.app")

SCRIPT = [
    {
        "title": "Start",
        "tags": "intro",
        "body": [
            {"line": "Hello, {name}."},
            {"command": "wave"},
            {
                "options": [
                    {"text": "Shop", "jump": "Shop"},
                    {"text": "Leave", "body": [{"line": "Bye."}]},
                ]
            },
        ],
    },
    {
        "title": "Shop",
        "body": [
            {"if": {"var": "$rich"}, "then": [{"line": "Big spender!"}], "else": [{"line": "Just looking?"}]},
        ],
    },
]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("SPINDLE_START_NODE", "SPINDLE_SHOW_COMMANDS", "SPINDLE_STRICT_FUNCTIONS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def script_path(tmp_path: Path) -> Path:
    path = tmp_path / "script.json"
    path.write_text(json.dumps(SCRIPT), encoding="utf-8")
    return path


def test_play_follows_the_chosen_option(script_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["play", str(script_path)], input="1\n")

    assert result.exit_code == 0
    assert "Hello, {name}." in result.output
    assert "<<wave>>" in result.output
    assert "Shop" in result.output
    assert "Leave" in result.output
    assert "Just looking?" in result.output
    assert "Bye." not in result.output


def test_play_reprompts_on_out_of_range_choice(script_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["play", str(script_path)], input="5\n2\n")

    assert result.exit_code == 0
    assert "pick a number between 1 and 2" in result.output
    assert "Bye." in result.output


def test_play_seeds_variables(script_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli_app_module.app,
        ["play", str(script_path), "--start", "Shop", "--var", "$rich=true"],
    )

    assert result.exit_code == 0
    assert "Big spender!" in result.output


def test_play_hides_commands_when_disabled(monkeypatch, script_path: Path) -> None:
    monkeypatch.setenv("SPINDLE_SHOW_COMMANDS", "false")
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["play", str(script_path)], input="2\n")

    assert result.exit_code == 0
    assert "<<wave>>" not in result.output


def test_play_reports_missing_start_node(script_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["play", str(script_path), "-s", "Nowhere"])

    assert result.exit_code == 0
    assert "Dialogue stopped at Nowhere." in result.output


def test_play_rejects_malformed_variable(script_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["play", str(script_path), "--var", "no-equals"])

    assert result.exit_code == 2


def test_play_reports_invalid_script(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["play", str(path)])

    assert result.exit_code == 1
    assert "error: Invalid JSON" in result.output


def test_play_strict_mode_rejects_unknown_functions(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SPINDLE_STRICT_FUNCTIONS", "true")
    path = tmp_path / "calls.json"
    path.write_text(json.dumps([{"title": "Start", "body": [{"call": "ring_bell"}]}]), encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["play", str(path)])

    assert result.exit_code == 1
    assert "Function ring_bell is not defined" in result.output


def test_nodes_lists_script_nodes(script_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["nodes", str(script_path)])

    assert result.exit_code == 0
    assert "Start" in result.output
    assert "Shop" in result.output
    assert "intro" in result.output


def test_parse_variables_decodes_json_scalars() -> None:
    assert cli_app_module._parse_variables(["$a=3", "$b=true", "$c=hello", "$d=[1]", "$e=null"]) == {
        "$a": 3,
        "$b": True,
        "$c": "hello",
        "$d": "[1]",
        "$e": None,
    }
