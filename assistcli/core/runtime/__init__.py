"""Runtime subsystem for AssistCLI.

This package manages runtime/operational concerns:
- approval.py: Approval modes and the store interface for the active mode
- config.py: Configuration management
"""

from assistcli.core.runtime.approval import (
    ApprovalMode,
    ApprovalModeConfig,
    InMemoryApprovalConfig,
    next_cycle_mode,
    next_toggle_mode,
)
from assistcli.core.runtime.config import ConfigManager

__all__ = [
    "ApprovalMode",
    "ApprovalModeConfig",
    "ConfigManager",
    "InMemoryApprovalConfig",
    "next_cycle_mode",
    "next_toggle_mode",
]
