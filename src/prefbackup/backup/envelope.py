"""Backup envelope: versioned wrapper around an opaque preference payload (pure data)."""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field

# Version of the envelope schema itself, not of the wrapped preference content.
FORMAT_VERSION = "1.0"
UNKNOWN_PRODUCER_VERSION = "unknown"
EMPTY_PAYLOAD = "{}"


def now_millis() -> int:
    """Return current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class BackupEnvelope(BaseModel):
    """Settings backup envelope. Pure data; no IO.

    Field aliases are the wire names used in backup files. ``payload`` is the
    verbatim store content and is never parsed.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        strict=True,
    )

    format_version: str = Field(default=FORMAT_VERSION, alias="version")
    created_at: int = Field(default_factory=now_millis, alias="timestamp")
    producer_version: str = Field(alias="appVersion")
    payload: str = Field(alias="preferences")
