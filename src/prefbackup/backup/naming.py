"""Default backup file naming."""

from __future__ import annotations

from datetime import datetime

BACKUP_FILE_PREFIX = "florisboard_settings_"
BACKUP_FILE_SUFFIX = ".json"
_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def generate_backup_file_name(now: datetime | None = None) -> str:
    """Return a sortable backup file name stamped with local date and time.

    Args:
        now: Clock value to embed; defaults to current local time.

    Returns:
        File name like ``florisboard_settings_2024-01-02_03-04-05.json``.
    """
    stamp = (now or datetime.now()).strftime(_TIMESTAMP_FORMAT)
    return f"{BACKUP_FILE_PREFIX}{stamp}{BACKUP_FILE_SUFFIX}"
