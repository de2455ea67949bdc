"""Data types shared by the command registry, loader and dispatcher.

Every command action returns one member of the closed ``ActionResult``
union. Each member carries a ``type`` tag so the UI shell can branch on
``result.type`` (or ``match`` on the class) without inspecting shapes:

- ``DialogAction``      ``type="dialog"``         ask the shell to open a dialog
- ``HistoryItemAction`` ``type="history-item"``   append an item to the history
- ``MessageAction``     ``type="message"``        show an info or error line
- ``SubmitPromptAction`` ``type="submit_prompt"`` send text to the model
- ``NoAction``          ``type="none"``           nothing further to do
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Literal, Optional, Union

if TYPE_CHECKING:  # pragma: no cover
    from assistcli.commands.registry import RegistrySnapshot
    from assistcli.core.runtime.approval import ApprovalModeConfig


class CommandKind(str, Enum):
    """Where a command comes from."""

    BUILT_IN = "built-in"
    CUSTOM = "custom"


class DialogKind(str, Enum):
    """Dialogs the UI shell knows how to open."""

    AUTH = "auth"
    EDITOR = "editor"
    HELP = "help"
    PRIVACY = "privacy"
    SETTINGS = "settings"
    THEME = "theme"


class HistoryItemType(str, Enum):
    """Kinds of history items a command can append."""

    HELP = "help"
    ABOUT = "about"
    INFO = "info"
    ERROR = "error"
    CLEAR = "clear"
    QUIT = "quit"


@dataclass(frozen=True)
class HistoryItem:
    """An entry the UI shell appends to the conversation history."""

    type: HistoryItemType
    text: str = ""
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)


# ---------------------------------------------------------------------------
# Action results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DialogAction:
    dialog: DialogKind
    type: Literal["dialog"] = field(default="dialog", init=False)


@dataclass(frozen=True)
class HistoryItemAction:
    item: HistoryItem
    type: Literal["history-item"] = field(default="history-item", init=False)


@dataclass(frozen=True)
class MessageAction:
    content: str
    message_type: Literal["info", "error"] = "info"
    type: Literal["message"] = field(default="message", init=False)


@dataclass(frozen=True)
class SubmitPromptAction:
    content: str
    type: Literal["submit_prompt"] = field(default="submit_prompt", init=False)


@dataclass(frozen=True)
class NoAction:
    type: Literal["none"] = field(default="none", init=False)


ActionResult = Union[DialogAction, HistoryItemAction, MessageAction, SubmitPromptAction, NoAction]

ACTION_RESULT_TYPES = (DialogAction, HistoryItemAction, MessageAction, SubmitPromptAction, NoAction)

NO_ACTION = NoAction()


# ---------------------------------------------------------------------------
# Context and descriptor
# ---------------------------------------------------------------------------


@dataclass
class CommandContext:
    """Services handed to every command action.

    Attributes:
        config: Authoritative approval mode store
        registry: Snapshot the command was resolved from, for commands
            that list other commands
        working_dir: Project directory the session runs in
        services: Extra collaborators supplied by the host application
    """

    config: "ApprovalModeConfig"
    registry: Optional["RegistrySnapshot"] = None
    working_dir: Path = field(default_factory=Path.cwd)
    services: dict[str, Any] = field(default_factory=dict)


CommandAction = Callable[
    [CommandContext, str],
    Union[ActionResult, None, Awaitable[Union[ActionResult, None]]],
]


@dataclass(frozen=True)
class CommandDescriptor:
    """One invocable slash command.

    Attributes:
        name: Primary token, unique and case-sensitive
        description: One-line summary shown in help and completion
        action: Callable ``(context, args)`` returning an ActionResult,
            ``None`` or an awaitable of either
        alt_name: Optional alias, unique across the registry
        kind: Built-in or custom
        source_path: File a custom command was loaded from
    """

    name: str
    description: str
    action: CommandAction
    alt_name: Optional[str] = None
    kind: CommandKind = CommandKind.BUILT_IN
    source_path: Optional[Path] = None

    def __post_init__(self) -> None:
        for token in self.tokens:
            if not token or token.startswith("/") or any(ch.isspace() for ch in token):
                raise ValueError(f"Invalid command token: {token!r}")
        if self.alt_name == self.name:
            raise ValueError(f"Alias of '{self.name}' repeats its name")

    @property
    def tokens(self) -> tuple[str, ...]:
        """All tokens the command answers to, primary name first."""
        if self.alt_name is None:
            return (self.name,)
        return (self.name, self.alt_name)
