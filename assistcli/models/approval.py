"""Approval mode model."""

from enum import Enum


class ApprovalMode(str, Enum):
    """How much confirmation the assistant needs before acting."""

    DEFAULT = "default"  # Ask before every edit or command
    AUTO_EDIT = "autoEdit"  # Apply file edits without asking
    PLAN = "plan"  # Read-only planning, nothing is executed
    YOLO = "yolo"  # Approve everything

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: str) -> "ApprovalMode":
        """Resolve a user-typed mode name.

        Accepts the stored value (``autoEdit``), the member name
        (``AUTO_EDIT``) and dashed/underscored spellings (``auto-edit``).

        Raises:
            ValueError: If the name matches no mode
        """
        key = value.strip().lower().replace("-", "").replace("_", "")
        for mode in cls:
            if key in (mode.value.lower(), mode.name.lower().replace("_", "")):
                return mode
        raise ValueError(f"Unknown approval mode: {value}")


_LABELS = {
    ApprovalMode.DEFAULT: "Default",
    ApprovalMode.AUTO_EDIT: "Auto-accept edits",
    ApprovalMode.PLAN: "Plan",
    ApprovalMode.YOLO: "YOLO",
}
