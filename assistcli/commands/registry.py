"""Slash command registry.

Lookups never see a half-merged registry. The merged command set is built off
to the side as a ``RegistrySnapshot`` and then published with a single
reference assignment in ``RegistryHolder.publish``. A snapshot is never
mutated once built.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from assistcli.commands.errors import DuplicateCommandError
from assistcli.commands.types import CommandDescriptor, CommandKind

logger = logging.getLogger(__name__)


class RegistrySnapshot:
    """Immutable, fully merged view of every resolvable command."""

    def __init__(self, commands: Iterable[CommandDescriptor] = ()):
        ordered = tuple(commands)
        by_name: dict[str, CommandDescriptor] = {}
        by_alt: dict[str, CommandDescriptor] = {}
        for command in ordered:
            for token in command.tokens:
                owner = by_name.get(token) or by_alt.get(token)
                if owner is not None and owner is not command:
                    raise DuplicateCommandError(token, owner.name, command.name)
            by_name[command.name] = command
            if command.alt_name is not None:
                by_alt[command.alt_name] = command

        self._commands = ordered
        self._by_name: Mapping[str, CommandDescriptor] = MappingProxyType(by_name)
        self._by_alt: Mapping[str, CommandDescriptor] = MappingProxyType(by_alt)

    def lookup(self, token: str) -> Optional[CommandDescriptor]:
        """Resolve a token by exact name, then by exact alias.

        Returns:
            The matching descriptor, or None when nothing matches
        """
        command = self._by_name.get(token)
        if command is not None:
            return command
        return self._by_alt.get(token)

    @property
    def commands(self) -> tuple[CommandDescriptor, ...]:
        return self._commands

    def tokens(self) -> frozenset[str]:
        """Every name and alias that resolves in this snapshot."""
        return frozenset(self._by_name) | frozenset(self._by_alt)

    def of_kind(self, kind: CommandKind) -> list[CommandDescriptor]:
        return [command for command in self._commands if command.kind == kind]

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.lookup(token) is not None

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        return f"RegistrySnapshot({[command.name for command in self._commands]!r})"


class CommandRegistry:
    """Mutable builder used to assemble a command set before publishing it."""

    def __init__(self) -> None:
        self._commands: dict[str, CommandDescriptor] = {}

    def register(self, command: CommandDescriptor) -> None:
        """Insert a command, replacing any existing command with the same name.

        Raises:
            DuplicateCommandError: If the command's alias is already claimed
                by a different command
        """
        for token in command.tokens:
            owner = self._owner_of(token)
            if owner is not None and owner.name != command.name:
                raise DuplicateCommandError(token, owner.name, command.name)
        self._commands[command.name] = command

    def lookup(self, token: str) -> Optional[CommandDescriptor]:
        return self._owner_of(token)

    def get_commands(self) -> list[CommandDescriptor]:
        return list(self._commands.values())

    def snapshot(self) -> RegistrySnapshot:
        return RegistrySnapshot(self._commands.values())

    def _owner_of(self, token: str) -> Optional[CommandDescriptor]:
        command = self._commands.get(token)
        if command is not None:
            return command
        for command in self._commands.values():
            if command.alt_name == token:
                return command
        return None


@dataclass(frozen=True)
class MergeReport:
    """What a merge left out.

    Attributes:
        rejected: Discovered commands dropped because a built-in owns one
            of their tokens
        replaced: Discovered commands displaced by a later discovered
            command sharing a token
    """

    rejected: tuple[CommandDescriptor, ...] = ()
    replaced: tuple[CommandDescriptor, ...] = ()


@dataclass(frozen=True)
class MergeResult:
    snapshot: RegistrySnapshot
    report: MergeReport = field(default_factory=MergeReport)


def merge(
    builtins: Iterable[CommandDescriptor],
    discovered: Iterable[CommandDescriptor],
) -> MergeResult:
    """Combine built-in and discovered commands into a new snapshot.

    Built-ins always win: a discovered command whose name or alias matches
    any built-in token is rejected. Among discovered commands the later one
    in discovery order wins, and the earlier one is removed entirely so none
    of its tokens remain resolvable.

    Raises:
        DuplicateCommandError: If two built-ins share a token
    """
    builtin_list = list(builtins)
    builtin_snapshot = RegistrySnapshot(builtin_list)
    reserved = builtin_snapshot.tokens()

    accepted: dict[str, CommandDescriptor] = {}  # name -> command, discovery order
    rejected: list[CommandDescriptor] = []
    replaced: list[CommandDescriptor] = []

    for command in discovered:
        clash = next((token for token in command.tokens if token in reserved), None)
        if clash is not None:
            logger.warning(
                f"Ignoring custom command '{command.name}': '{clash}' is a built-in command"
            )
            rejected.append(command)
            continue

        for existing in list(accepted.values()):
            if set(existing.tokens) & set(command.tokens):
                logger.info(
                    f"Custom command '{command.name}' overrides '{existing.name}'"
                    + (f" from {existing.source_path}" if existing.source_path else "")
                )
                del accepted[existing.name]
                replaced.append(existing)
        accepted[command.name] = command

    snapshot = RegistrySnapshot([*builtin_list, *accepted.values()])
    return MergeResult(
        snapshot=snapshot,
        report=MergeReport(rejected=tuple(rejected), replaced=tuple(replaced)),
    )


class RegistryHolder:
    """Holds the currently published snapshot.

    ``publish`` swaps the reference in one assignment; readers grab the
    reference once and work against that snapshot for the whole lookup.
    """

    def __init__(self, snapshot: Optional[RegistrySnapshot] = None):
        self._snapshot = snapshot if snapshot is not None else RegistrySnapshot()
        self._generation = 0

    @property
    def snapshot(self) -> RegistrySnapshot:
        return self._snapshot

    @property
    def generation(self) -> int:
        """Number of snapshots published so far."""
        return self._generation

    def publish(self, snapshot: RegistrySnapshot) -> None:
        self._snapshot = snapshot
        self._generation += 1

    def lookup(self, token: str) -> Optional[CommandDescriptor]:
        return self._snapshot.lookup(token)
