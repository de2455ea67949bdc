"""Configuration management with hierarchical loading."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from assistcli.core.paths import get_paths
from assistcli.models.approval import ApprovalMode
from assistcli.models.config import USER_FIELDS, AppConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages hierarchical configuration loading and merging.

    Also serves as the authoritative approval mode store for the session:
    ``get_approval_mode``/``set_approval_mode`` read and write the loaded
    ``AppConfig`` in memory. The mode is only written to disk when
    ``persist_approval_mode`` is called.
    """

    def __init__(self, working_dir: Path | None = None):
        """Initialize config manager.

        Args:
            working_dir: Current working directory (defaults to cwd)
        """
        self.working_dir = working_dir or Path.cwd()
        self._config: AppConfig | None = None
        self._lock = threading.Lock()

    def load_config(self) -> AppConfig:
        """Load and merge configuration from multiple sources.

        Priority (highest to lowest):
        1. Local project config (.assistcli/settings.json)
        2. Global user config (~/.assistcli/settings.json)
        3. Default values
        """
        config_data: dict[str, Any] = {}

        paths = get_paths(self.working_dir)
        for settings_file in (paths.global_settings, paths.project_settings):
            config_data.update(self._read_settings(settings_file))

        try:
            self._config = AppConfig(**config_data)
        except ValidationError as e:
            logger.warning(f"Invalid settings, falling back to defaults: {e}")
            self._config = AppConfig()

        return self._config

    def get_config(self) -> AppConfig:
        """Get current config, loading if necessary."""
        if self._config is None:
            return self.load_config()
        return self._config

    def save_config(self, config: AppConfig, global_config: bool = False) -> None:
        """Save configuration to file.

        Existing keys in the target file are preserved; only user-facing
        settings are written over them.

        Args:
            config: Configuration to save
            global_config: If True, save to global config; otherwise save to local project
        """
        paths = get_paths(self.working_dir)
        config_path = paths.global_settings if global_config else paths.project_settings
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = self._read_settings(config_path)
        data.update(
            {
                k: v
                for k, v in config.model_dump(mode="json").items()
                if k in USER_FIELDS and v is not None
            }
        )
        with open(config_path, "w") as f:
            json.dump(data, f, indent=2)

    # ===== Approval mode store =====

    def get_approval_mode(self) -> ApprovalMode:
        return self.get_config().approval_mode

    def set_approval_mode(self, mode: ApprovalMode) -> None:
        with self._lock:
            config = self.get_config()
            config.approval_mode = ApprovalMode(mode)
        logger.debug(f"Approval mode set to {config.approval_mode.value}")

    def persist_approval_mode(self, global_config: bool = False) -> None:
        """Write the current approval mode to the settings file."""
        self.save_config(self.get_config(), global_config=global_config)

    # ===== Helpers =====

    @staticmethod
    def _read_settings(path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load settings from {path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {path}: expected a JSON object")
            return {}
        return data
