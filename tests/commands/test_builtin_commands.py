"""Tests for the built-in slash commands."""

import platform

import pytest

from assistcli import __version__
from assistcli.commands.builtin import (
    BUILTIN_COMMANDS,
    about_command,
    clear_command,
    editor_command,
    help_command,
    mode_command,
    privacy_command,
    quit_command,
)
from assistcli.commands.registry import merge
from assistcli.commands.types import (
    CommandContext,
    CommandKind,
    DialogAction,
    DialogKind,
    HistoryItemType,
    MessageAction,
)
from assistcli.core.runtime.approval import InMemoryApprovalConfig
from assistcli.models.approval import ApprovalMode


@pytest.fixture
def context():
    return CommandContext(
        config=InMemoryApprovalConfig(ApprovalMode.PLAN),
        registry=merge(BUILTIN_COMMANDS, []).snapshot,
    )


def test_builtins_are_built_in_kind():
    assert all(command.kind == CommandKind.BUILT_IN for command in BUILTIN_COMMANDS)


def test_builtin_tokens_are_unique():
    tokens = [token for command in BUILTIN_COMMANDS for token in command.tokens]
    assert len(tokens) == len(set(tokens))


class TestDialogCommands:
    def test_editor_command(self, context):
        assert editor_command.name == "editor"
        assert editor_command.description == "set external editor preference"
        assert editor_command.action(context, "") == DialogAction(dialog=DialogKind.EDITOR)

    def test_privacy_command(self, context):
        assert privacy_command.name == "privacy"
        assert privacy_command.description == "Display the privacy notice"
        assert privacy_command.action(context, "") == DialogAction(dialog=DialogKind.PRIVACY)


class TestHistoryCommands:
    def test_help_lists_registry(self, context):
        result = help_command.action(context, "")

        assert result.type == "history-item"
        assert result.item.type == HistoryItemType.HELP
        entry = next(c for c in result.item.data["commands"] if c["name"] == "help")
        assert entry["alt_name"] == "?"
        assert entry["kind"] == "built-in"

    def test_help_without_registry(self):
        result = help_command.action(CommandContext(config=InMemoryApprovalConfig()), "")
        assert result.item.data["commands"] == []

    def test_about_reports_versions_and_mode(self, context):
        data = about_command.action(context, "").item.data

        assert data["cli_version"] == __version__
        assert data["os_version"] == platform.system()
        assert data["approval_mode"] == "plan"

    def test_clear_and_quit(self, context):
        assert clear_command.action(context, "").item.type == HistoryItemType.CLEAR
        assert quit_command.action(context, "").item.type == HistoryItemType.QUIT
        assert quit_command.alt_name == "exit"


class TestModeCommand:
    def test_show_current_mode(self, context):
        result = mode_command.action(context, "")

        assert isinstance(result, MessageAction)
        assert "Plan" in result.content

    @pytest.mark.parametrize(
        "arg, expected",
        [
            ("yolo", ApprovalMode.YOLO),
            ("auto_edit", ApprovalMode.AUTO_EDIT),
            ("autoEdit", ApprovalMode.AUTO_EDIT),
            ("auto-edit", ApprovalMode.AUTO_EDIT),
            ("DEFAULT", ApprovalMode.DEFAULT),
        ],
    )
    def test_set_mode(self, context, arg, expected):
        result = mode_command.action(context, arg)

        assert result.message_type == "info"
        assert context.config.get_approval_mode() == expected

    def test_unknown_mode(self, context):
        result = mode_command.action(context, "reckless")

        assert result.message_type == "error"
        assert "reckless" in result.content
        assert context.config.get_approval_mode() == ApprovalMode.PLAN
