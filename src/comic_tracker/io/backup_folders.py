"""Dated backup folder discovery, creation and rotation.

Backups live one folder per calendar day under a single root::

    <root>/<D-M-YYYY>/backup_comic_data.json

Anything in the root whose name is not a strict day-month-year triple is
ignored by both loading and rotation.
"""

import logging
import shutil
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

from PySide6.QtCore import QStandardPaths

from comic_tracker.core import EntityKind

logger = logging.getLogger(__name__)

ROOT_FOLDER_NAME = "Comic Tracker"
DEFAULT_KEEP_BACKUPS = 5


def resolve_root(override: Optional[Path] = None) -> Path:
    """Return the backup root, the user's documents folder unless overridden.

    Raises:
        RuntimeError: If the platform reports no documents location.
    """
    if override is not None:
        return Path(override)

    documents = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.DocumentsLocation)
    if not documents:
        raise RuntimeError("Could not find a documents directory for backups")
    return Path(documents) / ROOT_FOLDER_NAME


def backup_filename(kind: EntityKind) -> str:
    return f"backup_{kind.value}.json"


def has_backup_files(folder: Path) -> bool:
    """True when folder holds at least one of the per-kind backup files."""
    return any((folder / backup_filename(kind)).is_file() for kind in EntityKind)


def format_folder_date(day: date) -> str:
    """Format a day as an unpadded ``D-M-YYYY`` folder name."""
    return f"{day.day}-{day.month}-{day.year}"


def parse_folder_date(name: str) -> Optional[date]:
    """Parse a ``D-M-YYYY`` folder name, returning None for anything else."""
    parts = name.split("-")
    if len(parts) != 3 or not all(part.isascii() and part.isdigit() for part in parts):
        return None
    day, month, year = (int(part) for part in parts)
    try:
        return date(year, month, day)
    except ValueError:
        return None


def list_dated_folders(root: Path) -> List[Tuple[date, Path]]:
    """Dated subfolders of root that hold backups, newest first.

    A dated folder without any backup file (left behind by a save that
    never happened) is skipped so it cannot shadow an older real backup.
    """
    if not root.is_dir():
        return []

    dated = []
    for entry in root.iterdir():
        if entry.name.startswith(".") or not entry.is_dir():
            continue
        folder_date = parse_folder_date(entry.name)
        if folder_date is None:
            continue
        if not has_backup_files(entry):
            logger.info("Skipping backup folder without backup files: %s", entry)
            continue
        dated.append((folder_date, entry))
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return dated


def resolve_load_folder(root: Path, keep: int = DEFAULT_KEEP_BACKUPS) -> Optional[Path]:
    """Return the newest dated backup folder, pruning all but the ``keep`` newest.

    Returns:
        The most recent dated folder holding backups, or None when there is none.
    """
    dated = list_dated_folders(root)

    for _, stale in reversed(dated[keep:]):
        try:
            shutil.rmtree(stale)
            logger.info("Deleted old backup folder: %s", stale)
        except OSError as e:
            logger.warning("Failed to delete backup folder %s: %s", stale, e)

    if not dated:
        logger.info("No backup folder to load from in %s", root)
        return None

    newest = dated[0][1]
    logger.info("Most recent backup folder to load: %s", newest)
    return newest


def resolve_save_folder(root: Path, today: Optional[date] = None) -> Path:
    """Return today's folder under root, creating it if needed.

    Raises:
        RuntimeError: If the folder cannot be created.
    """
    folder = root / format_folder_date(today or date.today())
    if not folder.is_dir():
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RuntimeError(f"Could not create save folder {folder}: {e}") from e
        logger.info("Created new save folder: %s", folder)
    return folder
