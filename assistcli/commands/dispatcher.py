"""Resolve typed command lines and run the matching command."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Union

from assistcli.commands.errors import InvalidActionResultError
from assistcli.commands.registry import RegistryHolder, RegistrySnapshot
from assistcli.commands.types import (
    ACTION_RESULT_TYPES,
    NO_ACTION,
    ActionResult,
    CommandContext,
    CommandDescriptor,
)

logger = logging.getLogger(__name__)

COMMAND_PREFIX = "/"


class DispatchStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of dispatching one command line.

    Attributes:
        status: What happened
        token: Command token typed by the user
        args: Argument string after the token
        command: Resolved descriptor (OK and ERROR only)
        result: ActionResult produced by the command (OK only)
        error: Exception raised by the command (ERROR only)
    """

    status: DispatchStatus
    token: str = ""
    args: str = ""
    command: Optional[CommandDescriptor] = None
    result: ActionResult = NO_ACTION
    error: Optional[BaseException] = None

    @property
    def success(self) -> bool:
        return self.status == DispatchStatus.OK

    @property
    def message(self) -> Optional[str]:
        """Human readable summary for non-OK outcomes."""
        if self.status == DispatchStatus.NOT_FOUND:
            return f"Unknown command: {COMMAND_PREFIX}{self.token}"
        if self.status == DispatchStatus.ERROR:
            return f"Command {COMMAND_PREFIX}{self.token} failed: {self.error}"
        if self.status == DispatchStatus.EMPTY:
            return "No command given"
        return None


def parse_command_line(raw_input: str) -> tuple[str, str]:
    """Split a command line into ``(token, args)``.

    One leading ``/`` is dropped. The token is the first whitespace-delimited
    word; args is the stripped remainder.
    """
    text = raw_input.strip()
    if text.startswith(COMMAND_PREFIX):
        text = text[len(COMMAND_PREFIX):]
    parts = text.split(maxsplit=1)
    if not parts:
        return "", ""
    token = parts[0]
    args = parts[1].strip() if len(parts) > 1 else ""
    return token, args


def is_command_line(raw_input: str) -> bool:
    return raw_input.lstrip().startswith(COMMAND_PREFIX)


RegistrySource = Union[RegistryHolder, RegistrySnapshot, Callable[[], RegistrySnapshot]]


class CommandDispatcher:
    """Runs commands resolved from the currently published registry.

    The dispatcher performs no UI work of its own: every effect of a command
    is carried by the returned ``DispatchOutcome``.
    """

    def __init__(self, registry: RegistrySource):
        """Initialize the dispatcher.

        Args:
            registry: Holder, fixed snapshot, or callable returning the
                snapshot to resolve against
        """
        self._registry = registry

    def current_snapshot(self) -> RegistrySnapshot:
        if isinstance(self._registry, RegistryHolder):
            return self._registry.snapshot
        if isinstance(self._registry, RegistrySnapshot):
            return self._registry
        return self._registry()

    def resolve(self, raw_input: str) -> Optional[CommandDescriptor]:
        token, _ = parse_command_line(raw_input)
        if not token:
            return None
        return self.current_snapshot().lookup(token)

    async def dispatch(self, raw_input: str, context: CommandContext) -> DispatchOutcome:
        """Resolve and run one command line.

        Unknown tokens and failing actions are reported through the outcome
        status rather than raised.
        """
        token, args = parse_command_line(raw_input)
        if not token:
            return DispatchOutcome(status=DispatchStatus.EMPTY)

        snapshot = self.current_snapshot()
        command = snapshot.lookup(token)
        if command is None:
            logger.debug(f"No command matches '{token}'")
            return DispatchOutcome(status=DispatchStatus.NOT_FOUND, token=token, args=args)

        if context.registry is None:
            context = replace(context, registry=snapshot)

        try:
            result = command.action(context, args)
            if inspect.isawaitable(result):
                result = await result
            if result is None:
                result = NO_ACTION
            if not isinstance(result, ACTION_RESULT_TYPES):
                raise InvalidActionResultError(
                    f"Command '{command.name}' returned {type(result).__name__}"
                )
        except Exception as e:
            logger.exception(f"Command '{command.name}' failed")
            return DispatchOutcome(
                status=DispatchStatus.ERROR,
                token=token,
                args=args,
                command=command,
                error=e,
            )

        return DispatchOutcome(
            status=DispatchStatus.OK,
            token=token,
            args=args,
            command=command,
            result=result,
        )
