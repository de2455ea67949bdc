"""Centralized path management for AssistCLI.

Every settings file and command directory the command layer touches is
resolved here, so tests can point the whole application at a temporary tree
with ``set_paths(Paths(working_dir=tmp_path))`` or the ``ASSISTCLI_DIR``
environment variable.

Example:
    from assistcli.core.paths import get_paths

    paths = get_paths()
    settings_file = paths.global_settings

    # Or with a specific working directory
    paths = get_paths(working_dir=Path.cwd())
    project_commands = paths.project_commands_dir
"""

from __future__ import annotations

import os
from functools import cached_property
from pathlib import Path
from typing import Optional

# ============================================================================
# Constants
# ============================================================================

APP_DIR_NAME = ".assistcli"
COMMANDS_DIR_NAME = "commands"
SETTINGS_FILE_NAME = "settings.json"

# Environment variable names for overrides
ENV_ASSISTCLI_DIR = "ASSISTCLI_DIR"


# ============================================================================
# Paths Class
# ============================================================================


class Paths:
    """Centralized path management.

    Provides access to:
    - Global paths (~/.assistcli/...)
    - Project paths (<working_dir>/.assistcli/...)
    - Environment variable overrides
    """

    def __init__(self, working_dir: Optional[Path] = None, command_dir: Optional[str] = None):
        """Initialize paths manager.

        Args:
            working_dir: Working directory for project-level paths.
                        Defaults to current working directory.
            command_dir: Project command directory from settings. Relative
                        paths are resolved against the working directory.
        """
        self._working_dir = working_dir or Path.cwd()
        self._command_dir = command_dir

    @property
    def working_dir(self) -> Path:
        """Get the working directory."""
        return self._working_dir

    # ========================================================================
    # Global Paths (User-level, in ~/.assistcli/)
    # ========================================================================

    @cached_property
    def global_dir(self) -> Path:
        """Get the global assistcli directory.

        Can be overridden with ASSISTCLI_DIR environment variable.
        Default: ~/.assistcli/
        """
        env_override = os.environ.get(ENV_ASSISTCLI_DIR)
        if env_override:
            return Path(env_override)
        return Path.home() / APP_DIR_NAME

    @cached_property
    def global_settings(self) -> Path:
        """Default: ~/.assistcli/settings.json"""
        return self.global_dir / SETTINGS_FILE_NAME

    @cached_property
    def global_commands_dir(self) -> Path:
        """Get user custom commands directory.

        Default: ~/.assistcli/commands/
        """
        return self.global_dir / COMMANDS_DIR_NAME

    # ========================================================================
    # Project Paths (Project-level, in <working_dir>/.assistcli/)
    # ========================================================================

    @cached_property
    def project_dir(self) -> Path:
        """Default: <working_dir>/.assistcli/"""
        return self._working_dir / APP_DIR_NAME

    @cached_property
    def project_settings(self) -> Path:
        """Default: <working_dir>/.assistcli/settings.json"""
        return self.project_dir / SETTINGS_FILE_NAME

    @cached_property
    def project_commands_dir(self) -> Path:
        """Get project custom commands directory.

        Uses the configured ``command_dir`` when one was given.
        Default: <working_dir>/.assistcli/commands/
        """
        if self._command_dir:
            configured = Path(self._command_dir).expanduser()
            if configured.is_absolute():
                return configured
            return self._working_dir / configured
        return self.project_dir / COMMANDS_DIR_NAME

    # ========================================================================
    # Helper Methods
    # ========================================================================

    def get_command_dirs(self) -> list[tuple[str, Path]]:
        """Get custom command directories in discovery order.

        User commands come first so that project commands, discovered later,
        win name collisions between the two scopes.

        Returns:
            List of ``(scope, directory)`` pairs. Directories may not exist.
        """
        return [
            ("user", self.global_commands_dir),
            ("project", self.project_commands_dir),
        ]


# ============================================================================
# Singleton Access
# ============================================================================

_paths: Optional[Paths] = None


def get_paths(working_dir: Optional[Path] = None, command_dir: Optional[str] = None) -> Paths:
    """Get the global Paths instance.

    Creates a singleton instance on first call. If working_dir is provided,
    creates a new instance with that working directory.

    Args:
        working_dir: Optional working directory. If provided, creates a new
                    Paths instance with this directory (not cached as singleton).
        command_dir: Optional project command directory, only used together
                    with working_dir.

    Returns:
        Paths instance
    """
    global _paths

    if working_dir is not None:
        return Paths(working_dir, command_dir=command_dir)

    if _paths is None:
        _paths = Paths()

    return _paths


def set_paths(paths: Optional[Paths]) -> None:
    """Set the global Paths instance.

    Args:
        paths: Paths instance to set as global, or None to reset
    """
    global _paths
    _paths = paths


def reset_paths() -> None:
    """Reset the global Paths instance.

    Forces recreation on next get_paths() call.
    """
    global _paths
    _paths = None
