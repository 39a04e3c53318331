"""Settings Manager - Handles backup location and save behaviour configuration."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_KEEP_BACKUPS = 5
DEFAULT_MAX_DISPLAY_LENGTH = 30

_FALSE_VALUES = {"0", "false", "no", "off"}


class SettingsManager:
    """
    Manages application settings.

    Reads values from a .env file in the project root, falling back to the
    process environment and then to built-in defaults.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_data_root(self) -> Optional[Path]:
        """Backup root override, None to use the platform documents folder."""
        value = os.getenv("COMIC_TRACKER_DATA_DIR")
        return Path(value.strip()).expanduser() if value and value.strip() else None

    def get_keep_backups(self) -> int:
        """Number of dated backup folders kept by rotation."""
        return self._get_positive_int("COMIC_TRACKER_KEEP_BACKUPS", DEFAULT_KEEP_BACKUPS)

    def get_max_display_length(self) -> int:
        """Longest name shown before a short form is required."""
        return self._get_positive_int("COMIC_TRACKER_MAX_DISPLAY_LENGTH", DEFAULT_MAX_DISPLAY_LENGTH)

    def is_auto_save_enabled(self) -> bool:
        """Save after every change. Turn off when entering many comics at once."""
        value = os.getenv("COMIC_TRACKER_AUTO_SAVE")
        if value is None:
            return True
        return value.strip().lower() not in _FALSE_VALUES

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)

    @staticmethod
    def _get_positive_int(name: str, default: int) -> int:
        value = os.getenv(name)
        if not value:
            return default
        try:
            parsed = int(value.strip())
        except ValueError:
            return default
        return parsed if parsed >= 1 else default
