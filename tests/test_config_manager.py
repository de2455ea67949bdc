"""Tests for hierarchical settings and the approval mode store."""

import json

import pytest

from assistcli.core.runtime import ApprovalModeConfig, ConfigManager
from assistcli.models.approval import ApprovalMode


@pytest.fixture
def home(tmp_path, monkeypatch):
    global_dir = tmp_path / "home"
    monkeypatch.setenv("ASSISTCLI_DIR", str(global_dir))
    return global_dir


@pytest.fixture
def project(tmp_path):
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    return project_dir


def write_settings(directory, data):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "settings.json").write_text(json.dumps(data))


def test_defaults_without_settings(home, project):
    config = ConfigManager(project).load_config()

    assert config.approval_mode == ApprovalMode.DEFAULT
    assert config.debug_logging is False


def test_project_overrides_global(home, project):
    write_settings(home, {"approval_mode": "autoEdit", "debug_logging": True, "command_dir": "cmds"})
    write_settings(project / ".assistcli", {"approval_mode": "plan"})

    config = ConfigManager(project).load_config()

    assert config.approval_mode == ApprovalMode.PLAN
    assert config.debug_logging is True
    assert config.command_dir == "cmds"


def test_corrupt_settings_are_ignored(home, project):
    home.mkdir(parents=True)
    (home / "settings.json").write_text("{not json")

    assert ConfigManager(project).load_config().approval_mode == ApprovalMode.DEFAULT


def test_invalid_values_fall_back_to_defaults(home, project):
    write_settings(home, {"approval_mode": "reckless"})

    assert ConfigManager(project).load_config().approval_mode == ApprovalMode.DEFAULT


def test_is_an_approval_mode_store(home, project):
    manager = ConfigManager(project)
    assert isinstance(manager, ApprovalModeConfig)

    manager.set_approval_mode(ApprovalMode.YOLO)
    assert manager.get_approval_mode() == ApprovalMode.YOLO


def test_mode_not_persisted_implicitly(home, project):
    manager = ConfigManager(project)
    manager.set_approval_mode(ApprovalMode.PLAN)

    assert not (project / ".assistcli" / "settings.json").exists()


def test_persist_approval_mode_preserves_other_keys(home, project):
    write_settings(project / ".assistcli", {"custom_key": 1})
    manager = ConfigManager(project)
    manager.set_approval_mode(ApprovalMode.AUTO_EDIT)
    manager.persist_approval_mode()

    saved = json.loads((project / ".assistcli" / "settings.json").read_text())
    assert saved["approval_mode"] == "autoEdit"
    assert saved["custom_key"] == 1
    assert ConfigManager(project).load_config().approval_mode == ApprovalMode.AUTO_EDIT
