"""Keeps the published registry in sync with discovered custom commands."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional

from assistcli.commands.dispatcher import CommandDispatcher, DispatchOutcome
from assistcli.commands.loader import CustomCommandLoader
from assistcli.commands.registry import (
    MergeReport,
    RegistryHolder,
    RegistrySnapshot,
    merge,
)
from assistcli.commands.types import CommandContext, CommandDescriptor

logger = logging.getLogger(__name__)


class CommandService:
    """Owns the built-in commands, the loader and the published registry.

    Built-ins are published immediately on construction. ``refresh`` runs a
    discovery pass and publishes the merged result, unless a newer pass was
    started while it was running, in which case its result is dropped.
    """

    def __init__(
        self,
        builtins: Iterable[CommandDescriptor],
        loader: Optional[CustomCommandLoader] = None,
    ) -> None:
        self._builtins = tuple(builtins)
        self._loader = loader or CustomCommandLoader()
        self._holder = RegistryHolder(merge(self._builtins, ()).snapshot)
        self._dispatcher = CommandDispatcher(self._holder)
        self._started = 0  # Sequence number of the newest pass started
        self._applied = 0  # Sequence number of the pass currently published
        self._last_report = MergeReport()
        self._task: Optional[asyncio.Task[bool]] = None

    @property
    def snapshot(self) -> RegistrySnapshot:
        return self._holder.snapshot

    @property
    def holder(self) -> RegistryHolder:
        return self._holder

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    @property
    def last_report(self) -> MergeReport:
        """Merge report of the published discovery pass."""
        return self._last_report

    @property
    def applied_pass(self) -> int:
        return self._applied

    def lookup(self, token: str) -> Optional[CommandDescriptor]:
        return self._holder.lookup(token)

    async def dispatch(self, raw_input: str, context: CommandContext) -> DispatchOutcome:
        return await self._dispatcher.dispatch(raw_input, context)

    async def refresh(self) -> bool:
        """Run one discovery pass and publish it if still current.

        Returns:
            True if the pass was published, False if a newer pass superseded it
        """
        self._started += 1
        sequence = self._started

        discovered = await self._loader.discover()

        if sequence != self._started:
            logger.debug(
                f"Discarding discovery pass {sequence}; pass {self._started} is newer"
            )
            return False

        result = merge(self._builtins, discovered)
        self._holder.publish(result.snapshot)
        self._applied = sequence
        self._last_report = result.report
        logger.debug(
            f"Published discovery pass {sequence}: {len(result.snapshot)} commands, "
            f"{len(result.report.rejected)} rejected"
        )
        return True

    def schedule_refresh(self) -> asyncio.Task[bool]:
        """Start a discovery pass in the background on the running loop.

        Keyboard handling keeps running while the pass waits on file I/O.
        """
        self._task = asyncio.get_running_loop().create_task(self.refresh())
        self._task.add_done_callback(self._log_task_failure)
        return self._task

    @staticmethod
    def _log_task_failure(task: asyncio.Task[bool]) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Custom command discovery failed: {error}")
