"""Backup tool config models and loading helpers."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_STORE_NAME = "florisboard-app-prefs"


class StoreSettings(BaseModel):
    """Live preference store location."""

    model_config = ConfigDict(extra="forbid")

    directory: str = ".prefs/datastore"
    name: str = Field(default=DEFAULT_STORE_NAME, min_length=1)


class BackupSettings(BaseModel):
    """Default export destination."""

    model_config = ConfigDict(extra="forbid")

    directory: str = ".prefs/backups"


class AppSettings(BaseModel):
    """Producing application identity."""

    model_config = ConfigDict(extra="forbid")

    distribution: str = "prefbackup"


class BackupConfig(BaseModel):
    """Root backup tool configuration model."""

    model_config = ConfigDict(extra="forbid")

    store: StoreSettings = StoreSettings()
    backup: BackupSettings = BackupSettings()
    app: AppSettings = AppSettings()


class BackupConfigError(RuntimeError):
    """Raised when backup config cannot be decoded or validated."""


def _decode_config_payload(path: Path) -> dict[str, object]:
    """Decode config payload from JSON or YAML.

    Args:
        path: Config file path.

    Returns:
        Parsed mapping payload.

    Raises:
        BackupConfigError: If decode fails or payload is not an object.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise BackupConfigError(f"Cannot read backup config: {exc}") from exc
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise BackupConfigError(f"Invalid backup config JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise BackupConfigError(f"Invalid backup config YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise BackupConfigError("Invalid backup config payload: root must be an object")
    return payload


def load_backup_config(path: Path) -> BackupConfig:
    """Load backup config from disk, defaulting when missing.

    Args:
        path: Config file path.

    Returns:
        Parsed config payload, or defaults when file does not exist.

    Raises:
        BackupConfigError: If payload decode or validation fails.
    """
    if not path.exists():
        return BackupConfig()
    payload = _decode_config_payload(path)
    try:
        return BackupConfig.model_validate(payload)
    except ValidationError as exc:
        raise BackupConfigError(f"Invalid backup config payload: {exc}") from exc
