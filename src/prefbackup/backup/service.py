"""Settings backup orchestration: export and import of the live preference store."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from prefbackup.backup.codec import decode_envelope, encode_envelope
from prefbackup.backup.envelope import (
    EMPTY_PAYLOAD,
    FORMAT_VERSION,
    UNKNOWN_PRODUCER_VERSION,
    BackupEnvelope,
    now_millis,
)
from prefbackup.backup.errors import (
    BackupError,
    ExportFailed,
    ImportFailed,
    MalformedEnvelope,
)
from prefbackup.backup.result import BackupResult
from prefbackup.backup.streams import FileStreamResolver, StreamResolver
from prefbackup.environment import AppVersionLookup
from prefbackup.store.ports import PreferenceStore

_LOGGER = logging.getLogger(__name__)
_QUOTES_PER_ENTRY = 4


def approximate_preference_count(payload: str) -> int:
    """Estimate how many entries a payload holds.

    Counts double-quote characters and divides by four, assuming one quoted
    key and one quoted value per entry. Intended for user-facing feedback
    only; it is not an exact entry count.

    Args:
        payload: Verbatim store content.

    Returns:
        Non-negative approximate entry count.
    """
    return payload.count('"') // _QUOTES_PER_ENTRY


class SettingsBackupService:
    """Export the live preference store into a backup and restore it again.

    Calls are single-shot and not safe to run concurrently against the same
    store; callers serialize export/import themselves.
    """

    def __init__(
        self,
        *,
        store: PreferenceStore,
        version_lookup: AppVersionLookup,
        stream_resolver: StreamResolver | None = None,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        """Create service bound to one live store.

        Args:
            store: Live preference store collaborator.
            version_lookup: Producing application version lookup.
            stream_resolver: Destination/source resolver for ``export_to`` and
                ``import_from``; defaults to filesystem paths.
            clock: Epoch-millisecond clock for envelope timestamps.
        """
        self._store = store
        self._version_lookup = version_lookup
        self._stream_resolver = stream_resolver or FileStreamResolver()
        self._clock = clock

    def export_settings(self, output: BinaryIO) -> BackupResult[None]:
        """Write a backup of the live store to output, then close output.

        Args:
            output: Destination byte stream; always closed by this call.

        Returns:
            Success, or failure holding ``ExportFailed``.
        """
        try:
            size = self._export(output)
        except ExportFailed as exc:
            _LOGGER.error("Settings export failed: %s", exc)
            return BackupResult.failure(exc)
        _LOGGER.info(
            "Exported preference store '%s' (%d bytes)", self._store.name, size
        )
        return BackupResult.success(None)

    def import_settings(self, source: BinaryIO) -> BackupResult[int]:
        """Restore the live store from a backup read from source.

        The source stream is read fully but not closed.

        Args:
            source: Readable byte stream holding an encoded backup.

        Returns:
            Approximate restored entry count, or failure holding
            ``ImportFailed``.
        """
        try:
            count = self._import(source)
        except ImportFailed as exc:
            _LOGGER.error("Settings import failed: %s", exc)
            return BackupResult.failure(exc)
        _LOGGER.info(
            "Imported preference store '%s' (~%d preferences)",
            self._store.name,
            count,
        )
        return BackupResult.success(count)

    def export_to(self, target: str | Path) -> BackupResult[None]:
        """Resolve target into a stream and export into it.

        Args:
            target: Opaque destination identifier for the stream resolver.

        Returns:
            Success, or failure holding ``StreamUnavailable``/``ExportFailed``.
        """
        try:
            output = self._stream_resolver.open_output(target)
        except BackupError as exc:
            _LOGGER.error("Settings export failed: %s", exc)
            return BackupResult.failure(exc)
        return self.export_settings(output)

    def import_from(self, source: str | Path) -> BackupResult[int]:
        """Resolve source into a stream, import from it and close it.

        Args:
            source: Opaque source identifier for the stream resolver.

        Returns:
            Approximate restored entry count, or failure holding
            ``StreamUnavailable``/``ImportFailed``.
        """
        try:
            stream = self._stream_resolver.open_input(source)
        except BackupError as exc:
            _LOGGER.error("Settings import failed: %s", exc)
            return BackupResult.failure(exc)
        with stream:
            return self.import_settings(stream)

    def _export(self, output: BinaryIO) -> int:
        """Build, encode and write one envelope; close output on all paths.

        Returns:
            Number of bytes written.

        Raises:
            ExportFailed: If reading, encoding, writing or closing fails.
        """
        try:
            try:
                envelope = BackupEnvelope(
                    format_version=FORMAT_VERSION,
                    created_at=self._clock(),
                    producer_version=self._producer_version(),
                    payload=self._read_live_content(),
                )
                encoded = encode_envelope(envelope)
                output.write(encoded)
                output.flush()
            finally:
                output.close()
        except Exception as exc:
            raise ExportFailed(
                f"Cannot export preference store '{self._store.name}': {exc}"
            ) from exc
        return len(encoded)

    def _read_live_content(self) -> str:
        """Read live store content, or the empty-object placeholder if absent."""
        handle = self._store.locate(self._store.name)
        if not self._store.exists(handle):
            _LOGGER.debug("No store content at %s; exporting empty store", handle)
            return EMPTY_PAYLOAD
        return self._store.read_all(handle)

    def _producer_version(self) -> str:
        """Return producing app version, or the unknown sentinel.

        A lookup that raises counts as unavailable; it never aborts an export.
        """
        try:
            version = self._version_lookup.lookup()
        except Exception as exc:
            _LOGGER.debug("App version lookup failed: %s", exc)
            version = None
        if not version:
            _LOGGER.debug(
                "App version unavailable; using '%s'", UNKNOWN_PRODUCER_VERSION
            )
            return UNKNOWN_PRODUCER_VERSION
        return version

    def _import(self, source: BinaryIO) -> int:
        """Read, decode, overwrite and re-activate the live store.

        Returns:
            Approximate restored entry count.

        Raises:
            ImportFailed: If reading, decoding, overwriting or reloading fails.
        """
        try:
            raw = source.read()
        except (OSError, ValueError) as exc:
            raise ImportFailed(f"Cannot read settings backup: {exc}") from exc
        try:
            envelope = decode_envelope(raw)
        except MalformedEnvelope as exc:
            raise ImportFailed(
                f"Invalid settings backup: {exc}",
                data={"reason": exc.code.value},
            ) from exc

        try:
            handle = self._store.locate(self._store.name)
            self._store.write_all(handle, envelope.payload)
        except Exception as exc:
            raise ImportFailed(
                f"Cannot restore preference store '{self._store.name}': {exc}"
            ) from exc

        handler = self._store.persistence_handler
        if handler is None:
            _LOGGER.debug("Preference store not loaded; reload deferred to next load")
        else:
            try:
                handler.reload(handle, is_first_load=False)
                handler.persist()
            except Exception as exc:
                raise ImportFailed(
                    f"Cannot reload preference store '{self._store.name}': {exc}"
                ) from exc
        return approximate_preference_count(envelope.payload)
