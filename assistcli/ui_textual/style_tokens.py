"""Shared styling tokens for Textual UI surfaces."""

# =============================================================================
# Colors
# =============================================================================

GREY = "#7a7e86"
ERROR = "#ff5c57"
WARNING = "#ffb347"
SUCCESS = "#6ad18f"

GREEN_LIGHT = "#89d185"  # Plan mode indicator
ORANGE = "#ff8c00"  # Default mode indicator
ORANGE_CAUTION = "#ffa500"  # Auto-accept edits indicator
RED_ALERT = "#ff3b30"  # YOLO indicator

# =============================================================================
# Approval mode colors
# =============================================================================

APPROVAL_MODE_COLORS = {
    "default": ORANGE,
    "autoEdit": ORANGE_CAUTION,
    "plan": GREEN_LIGHT,
    "yolo": RED_ALERT,
}
