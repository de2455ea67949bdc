"""Approval mode indicator for the AssistCLI Textual UI."""

from __future__ import annotations

from rich.text import Text
from textual import events
from textual.widgets import Static

from assistcli.models.approval import ApprovalMode
from assistcli.ui_textual.controllers.approval_mode_controller import ApprovalModeController
from assistcli.ui_textual.style_tokens import APPROVAL_MODE_COLORS, GREY

_HINTS = {
    ApprovalMode.DEFAULT: "shift+tab to accept edits",
    ApprovalMode.AUTO_EDIT: "accepting edits (shift+tab to cycle)",
    ApprovalMode.PLAN: "plan mode (shift+tab to cycle)",
    ApprovalMode.YOLO: "YOLO mode (ctrl+y to toggle)",
}


def build_indicator_text(mode: ApprovalMode) -> Text:
    """Render the indicator line for a mode."""
    color = APPROVAL_MODE_COLORS.get(mode.value, GREY)
    text = Text()
    text.append("Approval: ", style=GREY)
    text.append(mode.label, style=f"bold {color}")
    text.append(f"  {_HINTS[mode]}", style=GREY)
    return text


class ApprovalIndicator(Static):
    """Shows the approval mode and forwards mode shortcuts to the controller."""

    can_focus = True

    def __init__(self, controller: ApprovalModeController, **kwargs):
        super().__init__(build_indicator_text(controller.display_mode), **kwargs)
        self.controller = controller

    def on_mount(self) -> None:
        self.controller.add_listener(self._on_mode_changed)
        self._on_mode_changed(self.controller.refresh())

    def on_unmount(self) -> None:
        self.controller.remove_listener(self._on_mode_changed)

    def on_key(self, event: events.Key) -> None:
        if self.controller.handle_key(event.key) is not None:
            event.stop()
            event.prevent_default()

    def _on_mode_changed(self, mode: ApprovalMode) -> None:
        self.update(build_indicator_text(mode))
