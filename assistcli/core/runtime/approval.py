"""Approval modes and the configuration port that holds the active one."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from assistcli.models.approval import ApprovalMode

# Modes reachable with the cycle shortcut; YOLO is outside it.
CYCLE_ORDER = (ApprovalMode.DEFAULT, ApprovalMode.AUTO_EDIT, ApprovalMode.PLAN)


def next_cycle_mode(current: ApprovalMode) -> ApprovalMode:
    """Next mode for the cycle shortcut.

    DEFAULT -> AUTO_EDIT -> PLAN -> DEFAULT. YOLO sits outside the cycle and
    falls back to DEFAULT.
    """
    if current not in CYCLE_ORDER:
        return ApprovalMode.DEFAULT
    index = CYCLE_ORDER.index(current)
    return CYCLE_ORDER[(index + 1) % len(CYCLE_ORDER)]


def next_toggle_mode(current: ApprovalMode) -> ApprovalMode:
    """Next mode for the YOLO toggle: YOLO -> DEFAULT, anything else -> YOLO."""
    if current == ApprovalMode.YOLO:
        return ApprovalMode.DEFAULT
    return ApprovalMode.YOLO


@runtime_checkable
class ApprovalModeConfig(Protocol):
    """Authoritative store for the active approval mode."""

    def get_approval_mode(self) -> ApprovalMode: ...

    def set_approval_mode(self, mode: ApprovalMode) -> None: ...


class InMemoryApprovalConfig:
    """Process-local approval mode store.

    Used by tests and by embedders that keep no settings on disk.
    """

    def __init__(self, mode: ApprovalMode = ApprovalMode.DEFAULT):
        self._mode = mode

    def get_approval_mode(self) -> ApprovalMode:
        return self._mode

    def set_approval_mode(self, mode: ApprovalMode) -> None:
        self._mode = ApprovalMode(mode)
