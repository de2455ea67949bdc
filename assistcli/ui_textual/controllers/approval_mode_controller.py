"""Keyboard-driven approval mode switching.

Shortcuts:
    ctrl+y     toggle YOLO. Any other mode goes to YOLO; YOLO goes to DEFAULT.
    shift+tab  cycle DEFAULT -> AUTO_EDIT -> PLAN -> DEFAULT. From YOLO the
               next press lands on DEFAULT.

The configuration store is the only authority on the active mode. Every
keypress reads it fresh, writes the next mode back, and only then updates
``display_mode``, the copy the UI renders from.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from assistcli.core.runtime.approval import (
    ApprovalModeConfig,
    next_cycle_mode,
    next_toggle_mode,
)
from assistcli.models.approval import ApprovalMode

logger = logging.getLogger(__name__)

ModeListener = Callable[[ApprovalMode], None]


@dataclass(frozen=True)
class KeyPress:
    """A single key event with modifier flags."""

    key: str
    ctrl: bool = False
    shift: bool = False

    @classmethod
    def parse(cls, combo: str) -> "KeyPress":
        """Build a KeyPress from a Textual key string such as ``shift+tab``."""
        parts = combo.lower().split("+")
        modifiers = set(parts[:-1])
        return cls(key=parts[-1], ctrl="ctrl" in modifiers, shift="shift" in modifiers)


YOLO_TOGGLE = KeyPress("y", ctrl=True)
MODE_CYCLE = KeyPress("tab", shift=True)


class ApprovalModeController:
    """Approval mode state machine bound to keyboard shortcuts."""

    def __init__(self, config: ApprovalModeConfig) -> None:
        self._config = config
        self._lock = threading.Lock()
        self._listeners: list[ModeListener] = []
        self._display_mode = config.get_approval_mode()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def display_mode(self) -> ApprovalMode:
        """Mode last seen by this controller, for rendering only."""
        return self._display_mode

    @property
    def current_mode(self) -> ApprovalMode:
        """Authoritative mode, read from the configuration store."""
        return self._config.get_approval_mode()

    def add_listener(self, listener: ModeListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ModeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def handle_key(self, key: KeyPress | str) -> Optional[ApprovalMode]:
        """Apply a mode shortcut.

        Args:
            key: KeyPress or Textual key string

        Returns:
            The new mode, or None if the key is not a mode shortcut
        """
        if isinstance(key, str):
            key = KeyPress.parse(key)
        if key == YOLO_TOGGLE:
            return self.toggle_yolo()
        if key == MODE_CYCLE:
            return self.cycle()
        return None

    def toggle_yolo(self) -> ApprovalMode:
        return self._transition(next_toggle_mode)

    def cycle(self) -> ApprovalMode:
        return self._transition(next_cycle_mode)

    def refresh(self) -> ApprovalMode:
        """Re-read the store after it may have changed elsewhere (e.g. /mode)."""
        mode = self._config.get_approval_mode()
        if mode != self._display_mode:
            self._set_display(mode)
        return mode

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _transition(self, step: Callable[[ApprovalMode], ApprovalMode]) -> ApprovalMode:
        with self._lock:
            current = self._config.get_approval_mode()
            new_mode = step(current)
            self._config.set_approval_mode(new_mode)
            self._display_mode = new_mode
        logger.info(f"Approval mode {current.value} -> {new_mode.value}")
        self._notify(new_mode)
        return new_mode

    def _set_display(self, mode: ApprovalMode) -> None:
        self._display_mode = mode
        self._notify(mode)

    def _notify(self, mode: ApprovalMode) -> None:
        # Called without the lock held; listeners may switch modes themselves
        for listener in list(self._listeners):
            try:
                listener(mode)
            except Exception:
                logger.exception(f"Approval mode listener {listener!r} failed")
