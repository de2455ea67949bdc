"""Built-in slash commands.

Built-ins are always present in the registry and can never be shadowed by a
custom command with the same name or alias.
"""

from __future__ import annotations

import platform

from assistcli import __version__
from assistcli.commands.types import (
    CommandContext,
    CommandDescriptor,
    DialogAction,
    DialogKind,
    HistoryItem,
    HistoryItemAction,
    HistoryItemType,
    MessageAction,
)
from assistcli.models.approval import ApprovalMode


def _open_dialog(dialog: DialogKind):
    def action(context: CommandContext, args: str) -> DialogAction:
        return DialogAction(dialog=dialog)

    return action


def _help_action(context: CommandContext, args: str) -> HistoryItemAction:
    commands = []
    if context.registry is not None:
        commands = [
            {
                "name": command.name,
                "alt_name": command.alt_name,
                "description": command.description,
                "kind": command.kind.value,
            }
            for command in context.registry
        ]
    return HistoryItemAction(
        item=HistoryItem(type=HistoryItemType.HELP, data={"commands": commands})
    )


def _about_action(context: CommandContext, args: str) -> HistoryItemAction:
    data = {
        "cli_version": __version__,
        "os_version": platform.system(),
        "python_version": platform.python_version(),
        "approval_mode": context.config.get_approval_mode().value,
    }
    return HistoryItemAction(item=HistoryItem(type=HistoryItemType.ABOUT, data=data))


def _clear_action(context: CommandContext, args: str) -> HistoryItemAction:
    return HistoryItemAction(item=HistoryItem(type=HistoryItemType.CLEAR))


def _quit_action(context: CommandContext, args: str) -> HistoryItemAction:
    return HistoryItemAction(item=HistoryItem(type=HistoryItemType.QUIT))


def _mode_action(context: CommandContext, args: str) -> MessageAction:
    """Show the approval mode, or switch to the named one."""
    if not args:
        mode = context.config.get_approval_mode()
        available = ", ".join(m.value for m in ApprovalMode)
        return MessageAction(content=f"Approval mode: {mode.label} (available: {available})")

    try:
        mode = ApprovalMode.parse(args)
    except ValueError as e:
        return MessageAction(content=str(e), message_type="error")

    context.config.set_approval_mode(mode)
    return MessageAction(content=f"Approval mode set to {mode.label}")


help_command = CommandDescriptor(
    name="help",
    alt_name="?",
    description="for help on assistcli",
    action=_help_action,
)

about_command = CommandDescriptor(
    name="about",
    description="Show version info",
    action=_about_action,
)

auth_command = CommandDescriptor(
    name="auth",
    description="change the auth method",
    action=_open_dialog(DialogKind.AUTH),
)

editor_command = CommandDescriptor(
    name="editor",
    description="set external editor preference",
    action=_open_dialog(DialogKind.EDITOR),
)

privacy_command = CommandDescriptor(
    name="privacy",
    description="Display the privacy notice",
    action=_open_dialog(DialogKind.PRIVACY),
)

settings_command = CommandDescriptor(
    name="settings",
    description="View and edit assistcli settings",
    action=_open_dialog(DialogKind.SETTINGS),
)

theme_command = CommandDescriptor(
    name="theme",
    description="change the theme",
    action=_open_dialog(DialogKind.THEME),
)

clear_command = CommandDescriptor(
    name="clear",
    description="clear the screen and conversation history",
    action=_clear_action,
)

mode_command = CommandDescriptor(
    name="mode",
    description="show or set the approval mode (default, autoEdit, plan, yolo)",
    action=_mode_action,
)

quit_command = CommandDescriptor(
    name="quit",
    alt_name="exit",
    description="exit the cli",
    action=_quit_action,
)

BUILTIN_COMMANDS: tuple[CommandDescriptor, ...] = (
    help_command,
    about_command,
    auth_command,
    clear_command,
    editor_command,
    mode_command,
    privacy_command,
    settings_command,
    theme_command,
    quit_command,
)


def get_builtin_commands() -> list[CommandDescriptor]:
    return list(BUILTIN_COMMANDS)
