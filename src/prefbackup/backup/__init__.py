"""Settings backup envelope, codec and export/import orchestration."""

from prefbackup.backup.codec import (
    SUPPORTED_FORMAT_MAJOR,
    decode_envelope,
    encode_envelope,
)
from prefbackup.backup.envelope import (
    EMPTY_PAYLOAD,
    FORMAT_VERSION,
    UNKNOWN_PRODUCER_VERSION,
    BackupEnvelope,
)
from prefbackup.backup.errors import (
    BackupError,
    BackupErrorCode,
    ExportFailed,
    ImportFailed,
    MalformedEnvelope,
    StreamUnavailable,
    UnsupportedEnvelopeVersion,
)
from prefbackup.backup.naming import generate_backup_file_name
from prefbackup.backup.result import BackupResult
from prefbackup.backup.service import (
    SettingsBackupService,
    approximate_preference_count,
)
from prefbackup.backup.streams import (
    STDIO_MARKER,
    FileStreamResolver,
    StreamResolver,
)

__all__ = [
    "EMPTY_PAYLOAD",
    "FORMAT_VERSION",
    "STDIO_MARKER",
    "SUPPORTED_FORMAT_MAJOR",
    "UNKNOWN_PRODUCER_VERSION",
    "BackupEnvelope",
    "BackupError",
    "BackupErrorCode",
    "BackupResult",
    "ExportFailed",
    "FileStreamResolver",
    "ImportFailed",
    "MalformedEnvelope",
    "SettingsBackupService",
    "StreamResolver",
    "StreamUnavailable",
    "UnsupportedEnvelopeVersion",
    "approximate_preference_count",
    "decode_envelope",
    "encode_envelope",
    "generate_backup_file_name",
]
