"""Unit tests for SettingsManager."""

import os
import tempfile
from pathlib import Path

import pytest

from comic_tracker.services import SettingsManager

SETTING_NAMES = (
    "COMIC_TRACKER_DATA_DIR",
    "COMIC_TRACKER_KEEP_BACKUPS",
    "COMIC_TRACKER_AUTO_SAVE",
    "COMIC_TRACKER_MAX_DISPLAY_LENGTH",
)


@pytest.fixture
def temp_env_dir():
    """Provide a temporary directory for .env files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_env():
    """Clear the comic tracker settings from the environment before and after test."""
    saved = {name: os.environ.pop(name, None) for name in SETTING_NAMES}
    yield
    for name, value in saved.items():
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)


def make_settings(directory: Path, text: str) -> SettingsManager:
    (directory / ".env").write_text(text)
    return SettingsManager(project_root=directory)


class TestDefaults:
    """Without a .env file every setting has a default."""

    def test_defaults(self, temp_env_dir, clean_env):
        settings = SettingsManager(project_root=temp_env_dir)

        assert settings.get_data_root() is None
        assert settings.get_keep_backups() == 5
        assert settings.get_max_display_length() == 30
        assert settings.is_auto_save_enabled() is True


class TestDataRoot:
    def test_data_root_from_env_file(self, temp_env_dir, clean_env):
        settings = make_settings(temp_env_dir, f"COMIC_TRACKER_DATA_DIR={temp_env_dir / 'backups'}\n")
        assert settings.get_data_root() == temp_env_dir / "backups"

    def test_blank_data_root_means_documents_folder(self, temp_env_dir, clean_env):
        settings = make_settings(temp_env_dir, "COMIC_TRACKER_DATA_DIR=   \n")
        assert settings.get_data_root() is None

    def test_process_environment_wins_over_env_file(self, temp_env_dir, clean_env):
        os.environ["COMIC_TRACKER_DATA_DIR"] = "/from/process"
        settings = make_settings(temp_env_dir, "COMIC_TRACKER_DATA_DIR=/from/file\n")
        assert settings.get_data_root() == Path("/from/process")


class TestNumbers:
    def test_keep_backups_from_env_file(self, temp_env_dir, clean_env):
        settings = make_settings(temp_env_dir, "COMIC_TRACKER_KEEP_BACKUPS=9\n")
        assert settings.get_keep_backups() == 9

    @pytest.mark.parametrize("value", ["zero", "0", "-2", "3.5"])
    def test_invalid_keep_backups_falls_back(self, temp_env_dir, clean_env, value):
        settings = make_settings(temp_env_dir, f"COMIC_TRACKER_KEEP_BACKUPS={value}\n")
        assert settings.get_keep_backups() == 5

    def test_max_display_length(self, temp_env_dir, clean_env):
        settings = make_settings(temp_env_dir, "COMIC_TRACKER_MAX_DISPLAY_LENGTH= 24 \n")
        assert settings.get_max_display_length() == 24


class TestAutoSave:
    @pytest.mark.parametrize("value", ["0", "false", "No", "OFF"])
    def test_auto_save_can_be_disabled(self, temp_env_dir, clean_env, value):
        settings = make_settings(temp_env_dir, f"COMIC_TRACKER_AUTO_SAVE={value}\n")
        assert settings.is_auto_save_enabled() is False

    @pytest.mark.parametrize("value", ["1", "true", "yes"])
    def test_auto_save_enabled_values(self, temp_env_dir, clean_env, value):
        settings = make_settings(temp_env_dir, f"COMIC_TRACKER_AUTO_SAVE={value}\n")
        assert settings.is_auto_save_enabled() is True


class TestReload:
    def test_reload_env_picks_up_changes(self, temp_env_dir, clean_env):
        settings = make_settings(temp_env_dir, "COMIC_TRACKER_KEEP_BACKUPS=3\n")
        assert settings.get_keep_backups() == 3

        (temp_env_dir / ".env").write_text("COMIC_TRACKER_KEEP_BACKUPS=7\n")
        settings.reload_env()

        assert settings.get_keep_backups() == 7
