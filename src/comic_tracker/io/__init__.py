"""I/O layer - Backup files and dated folder management."""

from .backup_folders import (
    backup_filename,
    format_folder_date,
    parse_folder_date,
    resolve_load_folder,
    resolve_root,
    resolve_save_folder,
)
from .backup_store import BackupStatus, BackupStore, LoadResult, ReadResult

__all__ = [
    "BackupStore",
    "BackupStatus",
    "LoadResult",
    "ReadResult",
    "backup_filename",
    "resolve_root",
    "resolve_load_folder",
    "resolve_save_folder",
    "format_folder_date",
    "parse_folder_date",
]
