"""Tests for centralized paths module."""

from pathlib import Path

from assistcli.core.paths import (
    APP_DIR_NAME,
    COMMANDS_DIR_NAME,
    ENV_ASSISTCLI_DIR,
    SETTINGS_FILE_NAME,
    Paths,
    get_paths,
    reset_paths,
    set_paths,
)


class TestPathsConstants:
    """Test path constants."""

    def test_app_dir_name(self):
        assert APP_DIR_NAME == ".assistcli"

    def test_settings_file_name(self):
        assert SETTINGS_FILE_NAME == "settings.json"

    def test_commands_dir_name(self):
        assert COMMANDS_DIR_NAME == "commands"


class TestPathsGlobal:
    """Test global paths."""

    def test_global_dir_default(self, tmp_path, monkeypatch):
        """Test global dir defaults to ~/.assistcli/."""
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.delenv(ENV_ASSISTCLI_DIR, raising=False)
        reset_paths()
        paths = Paths()
        assert paths.global_dir == tmp_path / ".assistcli"

    def test_global_dir_env_override(self, tmp_path, monkeypatch):
        """Test ASSISTCLI_DIR environment variable overrides default."""
        custom_dir = tmp_path / "custom-assistcli"
        monkeypatch.setenv(ENV_ASSISTCLI_DIR, str(custom_dir))
        paths = Paths()
        assert paths.global_dir == custom_dir
        assert paths.global_commands_dir == custom_dir / "commands"

    def test_global_settings(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.delenv(ENV_ASSISTCLI_DIR, raising=False)
        paths = Paths()
        assert paths.global_settings == tmp_path / ".assistcli" / "settings.json"


class TestPathsProject:
    """Test project paths."""

    def test_project_commands_dir(self, tmp_path):
        paths = Paths(working_dir=tmp_path)
        assert paths.project_commands_dir == tmp_path / ".assistcli" / "commands"
        assert paths.project_settings == tmp_path / ".assistcli" / "settings.json"

    def test_configured_command_dir_relative(self, tmp_path):
        paths = Paths(working_dir=tmp_path, command_dir="mycmds")
        assert paths.project_commands_dir == tmp_path / "mycmds"
        assert paths.project_settings == tmp_path / ".assistcli" / "settings.json"

    def test_configured_command_dir_absolute(self, tmp_path):
        elsewhere = tmp_path / "shared" / "commands"
        paths = Paths(working_dir=tmp_path / "project", command_dir=str(elsewhere))
        assert paths.project_commands_dir == elsewhere

    def test_command_dirs_user_before_project(self, tmp_path, monkeypatch):
        """Project commands are discovered last so they win name clashes."""
        monkeypatch.setenv(ENV_ASSISTCLI_DIR, str(tmp_path / "home"))
        paths = Paths(working_dir=tmp_path / "project")
        assert paths.get_command_dirs() == [
            ("user", tmp_path / "home" / "commands"),
            ("project", tmp_path / "project" / ".assistcli" / "commands"),
        ]


class TestPathsSingleton:
    """Test singleton access."""

    def test_get_paths_singleton(self):
        reset_paths()
        assert get_paths() is get_paths()

    def test_get_paths_with_working_dir_is_fresh(self, tmp_path):
        paths = get_paths(tmp_path)
        assert paths.working_dir == tmp_path
        assert paths is not get_paths()

    def test_set_paths(self, tmp_path):
        custom = Paths(working_dir=tmp_path)
        set_paths(custom)
        try:
            assert get_paths() is custom
        finally:
            reset_paths()

    def test_default_working_dir_is_cwd(self):
        assert Paths().working_dir == Path.cwd()
