"""Resolve backup destinations/sources into scoped byte streams."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import BinaryIO, Protocol, cast

from prefbackup.backup.errors import StreamUnavailable

STDIO_MARKER = "-"


class StreamResolver(Protocol):
    """Turns opaque destination/source identifiers into byte streams."""

    def open_output(self, target: str | Path) -> BinaryIO:
        """Open writable byte stream for target."""
        ...

    def open_input(self, source: str | Path) -> BinaryIO:
        """Open readable byte stream for source."""
        ...


class _BorrowedStream(io.BufferedIOBase):
    """Wrapper whose close flushes but leaves the process stream open."""

    def __init__(self, inner: BinaryIO) -> None:
        """Wrap a process stream.

        Args:
            inner: Binary stdout/stdin buffer left open on close.
        """
        super().__init__()
        self._inner = inner

    def readable(self) -> bool:
        """Report whether the wrapped stream is readable."""
        return self._inner.readable()

    def writable(self) -> bool:
        """Report whether the wrapped stream is writable."""
        return self._inner.writable()

    def read(self, size: int | None = -1) -> bytes:
        """Read up to size bytes; ``None`` or negative reads to EOF."""
        return self._inner.read(-1 if size is None else size)

    def write(self, data: bytes) -> int:  # type: ignore[override]
        """Write data to the wrapped stream and return bytes written."""
        return self._inner.write(data)

    def flush(self) -> None:
        """Flush the wrapped stream unless this wrapper is closed."""
        if not self.closed:
            self._inner.flush()


class FileStreamResolver:
    """Filesystem paths, with ``-`` meaning stdout/stdin."""

    def open_output(self, target: str | Path) -> BinaryIO:
        """Open target for binary writing, creating parent directories.

        Args:
            target: File path or ``-`` for stdout.

        Returns:
            Writable byte stream owned by the caller.

        Raises:
            StreamUnavailable: If the target cannot be opened.
        """
        if str(target) == STDIO_MARKER:
            return cast(BinaryIO, _BorrowedStream(sys.stdout.buffer))
        path = Path(target)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            return path.open("wb")
        except OSError as exc:
            raise StreamUnavailable(
                f"Cannot open backup destination '{path}': {exc}",
                data={"target": str(path)},
            ) from exc

    def open_input(self, source: str | Path) -> BinaryIO:
        """Open source for binary reading.

        Args:
            source: File path or ``-`` for stdin.

        Returns:
            Readable byte stream owned by the caller.

        Raises:
            StreamUnavailable: If the source cannot be opened.
        """
        if str(source) == STDIO_MARKER:
            return cast(BinaryIO, _BorrowedStream(sys.stdin.buffer))
        path = Path(source)
        try:
            return path.open("rb")
        except OSError as exc:
            raise StreamUnavailable(
                f"Cannot open backup source '{path}': {exc}",
                data={"source": str(path)},
            ) from exc
