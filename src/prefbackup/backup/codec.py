"""Envelope codec: backup envelope <-> UTF-8 pretty-printed JSON bytes."""

from __future__ import annotations

import json
import re

from pydantic import ValidationError

from prefbackup.backup.envelope import FORMAT_VERSION, BackupEnvelope
from prefbackup.backup.errors import MalformedEnvelope, UnsupportedEnvelopeVersion

SUPPORTED_FORMAT_MAJOR = 1
_VERSION_KEY = "version"
_INDENT = 4
_VERSION_PATTERN = re.compile(r"\d+(?:\.\d+)*", re.ASCII)


def encode_envelope(envelope: BackupEnvelope) -> bytes:
    """Serialize envelope to pretty-printed UTF-8 JSON.

    Args:
        envelope: Envelope to serialize.

    Returns:
        Encoded backup bytes containing exactly the four envelope fields.
    """
    return envelope.model_dump_json(indent=_INDENT, by_alias=True).encode("utf-8")


def decode_envelope(raw: bytes | str) -> BackupEnvelope:
    """Parse backup bytes/text into an envelope.

    The format version is checked before any other field is validated.
    Unrecognized sibling fields are ignored.

    Args:
        raw: Encoded backup content.

    Returns:
        Decoded envelope.

    Raises:
        MalformedEnvelope: If content is not a JSON object or required fields
            are missing or mistyped.
        UnsupportedEnvelopeVersion: If the format version is not readable.
    """
    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedEnvelope(f"Backup is not valid UTF-8: {exc}") from exc
    else:
        text = raw
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedEnvelope(f"Invalid backup JSON: {exc}") from exc
    if not isinstance(decoded, dict):
        raise MalformedEnvelope("Invalid backup payload: expected JSON object.")

    _check_format_version(decoded.get(_VERSION_KEY, FORMAT_VERSION))
    try:
        return BackupEnvelope.model_validate(decoded)
    except ValidationError as exc:
        raise MalformedEnvelope(f"Invalid backup envelope: {exc}") from exc


def _check_format_version(version: object) -> None:
    """Validate envelope format version compatibility.

    Args:
        version: Raw ``version`` value from decoded payload.

    Raises:
        MalformedEnvelope: If version is not a string.
        UnsupportedEnvelopeVersion: If major version is not supported.
    """
    if not isinstance(version, str):
        raise MalformedEnvelope(
            f"Invalid backup envelope: version must be a string, got {version!r}."
        )
    if _VERSION_PATTERN.fullmatch(version) is None:
        raise UnsupportedEnvelopeVersion(
            f"Unsupported backup format version: {version!r}.",
            data={"version": version},
        )
    major = version.split(".", 1)[0].lstrip("0") or "0"
    if major != str(SUPPORTED_FORMAT_MAJOR):
        raise UnsupportedEnvelopeVersion(
            f"Unsupported backup format version: {version!r}. "
            f"Expected {SUPPORTED_FORMAT_MAJOR}.x.",
            data={"version": version},
        )
