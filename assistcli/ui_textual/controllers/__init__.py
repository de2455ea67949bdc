"""Controllers that own UI state machines."""

from assistcli.ui_textual.controllers.approval_mode_controller import (
    ApprovalModeController,
    KeyPress,
)

__all__ = ["ApprovalModeController", "KeyPress"]
