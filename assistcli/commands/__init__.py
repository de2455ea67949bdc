"""Slash command registry, discovery and dispatch."""

from assistcli.commands.builtin import BUILTIN_COMMANDS, get_builtin_commands
from assistcli.commands.dispatcher import (
    CommandDispatcher,
    DispatchOutcome,
    DispatchStatus,
    parse_command_line,
)
from assistcli.commands.errors import (
    CommandError,
    CommandParseError,
    DuplicateCommandError,
    InvalidActionResultError,
)
from assistcli.commands.loader import CustomCommandLoader
from assistcli.commands.registry import (
    CommandRegistry,
    MergeReport,
    MergeResult,
    RegistryHolder,
    RegistrySnapshot,
    merge,
)
from assistcli.commands.service import CommandService
from assistcli.commands.types import (
    ActionResult,
    CommandContext,
    CommandDescriptor,
    CommandKind,
    DialogAction,
    DialogKind,
    HistoryItem,
    HistoryItemAction,
    HistoryItemType,
    MessageAction,
    NoAction,
    SubmitPromptAction,
)

__all__ = [
    "ActionResult",
    "BUILTIN_COMMANDS",
    "CommandContext",
    "CommandDescriptor",
    "CommandDispatcher",
    "CommandError",
    "CommandKind",
    "CommandParseError",
    "CommandRegistry",
    "CommandService",
    "CustomCommandLoader",
    "DialogAction",
    "DialogKind",
    "DispatchOutcome",
    "DispatchStatus",
    "DuplicateCommandError",
    "HistoryItem",
    "HistoryItemAction",
    "HistoryItemType",
    "InvalidActionResultError",
    "MergeReport",
    "MergeResult",
    "MessageAction",
    "NoAction",
    "RegistryHolder",
    "RegistrySnapshot",
    "SubmitPromptAction",
    "get_builtin_commands",
    "merge",
    "parse_command_line",
]
