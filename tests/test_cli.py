"""Tests for the assistcli command-line entry point."""

import json
import logging
import sys

import pytest
from rich.console import Console

from assistcli.cli import main, render_outcome
from assistcli.commands.dispatcher import DispatchOutcome, DispatchStatus
from assistcli.commands.types import DialogAction, DialogKind, MessageAction
from assistcli.core.runtime import ConfigManager


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.setenv("ASSISTCLI_DIR", str(tmp_path / "home"))
    project = tmp_path / "project"
    (project / ".assistcli" / "commands").mkdir(parents=True)
    return project


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["assistcli", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def test_render_not_found():
    console = Console(record=True, width=120)
    outcome = DispatchOutcome(status=DispatchStatus.NOT_FOUND, token="nope")

    assert render_outcome(console, outcome) == 1
    assert "Unknown command: /nope" in console.export_text()


def test_render_dialog_and_error_message():
    console = Console(record=True, width=120)
    dialog = DispatchOutcome(status=DispatchStatus.OK, result=DialogAction(dialog=DialogKind.THEME))
    error = DispatchOutcome(
        status=DispatchStatus.OK, result=MessageAction(content="bad mode", message_type="error")
    )

    assert render_outcome(console, dialog) == 0
    assert render_outcome(console, error) == 1
    text = console.export_text()
    assert "theme" in text
    assert "bad mode" in text


def test_run_custom_command(workspace, monkeypatch, capsys):
    (workspace / ".assistcli" / "commands" / "greet.md").write_text("Say hi to {{args}}")

    code = run_cli(monkeypatch, "-d", str(workspace), "run", "/project:greet Ada")

    assert code == 0
    assert "Say hi to Ada" in capsys.readouterr().out


def test_run_unknown_command_exits_nonzero(workspace, monkeypatch):
    assert run_cli(monkeypatch, "-d", str(workspace), "run", "/unknown-cmd") == 1


def test_commands_lists_builtins_and_custom(workspace, monkeypatch, capsys):
    (workspace / ".assistcli" / "commands" / "review.md").write_text("Review")

    assert run_cli(monkeypatch, "-d", str(workspace), "commands") == 0
    out = capsys.readouterr().out
    assert "/help" in out
    assert "/project:review" in out


def test_mode_cycle_save(workspace, monkeypatch):
    assert run_cli(monkeypatch, "-d", str(workspace), "mode", "cycle", "--save") == 0

    saved = json.loads((workspace / ".assistcli" / "settings.json").read_text())
    assert saved["approval_mode"] == "autoEdit"


def test_markup_in_command_file_is_printed_literally(workspace, monkeypatch, capsys):
    (workspace / ".assistcli" / "commands" / "tagged.md").write_text(
        '---\ndescription: "close [/bold] tag"\n---\nBody'
    )

    assert run_cli(monkeypatch, "-d", str(workspace), "commands") == 0
    assert "close [/bold] tag" in capsys.readouterr().out

    assert run_cli(monkeypatch, "-d", str(workspace), "run", "/help") == 0
    assert "close [/bold] tag" in capsys.readouterr().out


def test_unknown_command_with_markup_in_name(workspace, monkeypatch, capsys):
    assert run_cli(monkeypatch, "-d", str(workspace), "run", "/[/red]") == 1
    assert "Unknown command: /[/red]" in capsys.readouterr().out


def test_command_dir_setting_is_used(workspace, monkeypatch, capsys):
    (workspace / ".assistcli" / "settings.json").write_text(json.dumps({"command_dir": "mycmds"}))
    (workspace / "mycmds").mkdir()
    (workspace / "mycmds" / "a.md").write_text("From the configured directory")

    assert run_cli(monkeypatch, "-d", str(workspace), "run", "/project:a") == 0
    assert "From the configured directory" in capsys.readouterr().out


def test_logging_configured_before_settings_load(workspace, monkeypatch):
    calls = []
    monkeypatch.setattr("assistcli.cli.setup_logging", lambda verbose: calls.append("logging"))
    load_config = ConfigManager.load_config

    def recording_load(self):
        calls.append("settings")
        return load_config(self)

    monkeypatch.setattr(ConfigManager, "load_config", recording_load)

    run_cli(monkeypatch, "-d", str(workspace), "commands")

    assert calls[:2] == ["logging", "settings"]


def test_debug_logging_setting_raises_level(workspace, monkeypatch):
    (workspace / ".assistcli" / "settings.json").write_text(json.dumps({"debug_logging": True}))
    root = logging.getLogger()
    previous = root.level
    try:
        run_cli(monkeypatch, "-d", str(workspace), "commands")
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)
