"""Deterministic backup error contracts."""

from __future__ import annotations

from enum import StrEnum


class BackupErrorCode(StrEnum):
    """Stable export/import error codes."""

    MALFORMED_ENVELOPE = "backup_malformed_envelope"
    UNSUPPORTED_VERSION = "backup_unsupported_version"
    EXPORT_FAILED = "backup_export_failed"
    IMPORT_FAILED = "backup_import_failed"
    STREAM_UNAVAILABLE = "backup_stream_unavailable"


class BackupError(RuntimeError):
    """Backup failure with stable deterministic code."""

    default_code = BackupErrorCode.EXPORT_FAILED

    def __init__(
        self,
        message: str,
        *,
        code: BackupErrorCode | None = None,
        data: dict[str, object] | None = None,
    ) -> None:
        """Create backup failure.

        Args:
            message: Human-readable error message.
            code: Optional code override; defaults to the class code.
            data: Optional structured payload for diagnostics.
        """
        super().__init__(message)
        self.code = code or self.default_code
        self.data = data or {}


class MalformedEnvelope(BackupError):
    """Raised when backup content is not a structurally valid envelope."""

    default_code = BackupErrorCode.MALFORMED_ENVELOPE


class UnsupportedEnvelopeVersion(MalformedEnvelope):
    """Raised when the envelope format version is not readable by this codec."""

    default_code = BackupErrorCode.UNSUPPORTED_VERSION


class ExportFailed(BackupError):
    """Raised when reading, encoding or writing a backup fails."""

    default_code = BackupErrorCode.EXPORT_FAILED


class ImportFailed(BackupError):
    """Raised when reading, decoding or restoring a backup fails."""

    default_code = BackupErrorCode.IMPORT_FAILED


class StreamUnavailable(BackupError):
    """Raised when a destination/source cannot be opened as a byte stream."""

    default_code = BackupErrorCode.STREAM_UNAVAILABLE
