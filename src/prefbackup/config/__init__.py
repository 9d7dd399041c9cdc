"""Backup tool configuration loading."""

from prefbackup.config.backup_config import (
    DEFAULT_STORE_NAME,
    AppSettings,
    BackupConfig,
    BackupConfigError,
    BackupSettings,
    StoreSettings,
    load_backup_config,
)

__all__ = [
    "DEFAULT_STORE_NAME",
    "AppSettings",
    "BackupConfig",
    "BackupConfigError",
    "BackupSettings",
    "StoreSettings",
    "load_backup_config",
]
