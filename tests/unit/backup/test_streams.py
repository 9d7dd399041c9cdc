"""Unit tests for backup stream resolution."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from _pytest.monkeypatch import MonkeyPatch

from prefbackup.backup import STDIO_MARKER, FileStreamResolver, StreamUnavailable


class _FakeStdio:
    """Text stream stand-in exposing a binary buffer."""

    def __init__(self, initial: bytes = b"") -> None:
        self.buffer = io.BytesIO(initial)


@pytest.mark.unit
def test_open_output_creates_parent_directories(tmp_path: Path) -> None:
    """Output resolution should create missing parents."""
    target = tmp_path / "a" / "b" / "backup.json"

    with FileStreamResolver().open_output(target) as stream:
        stream.write(b"data")

    assert target.read_bytes() == b"data"


@pytest.mark.unit
def test_open_input_missing_file_raises(tmp_path: Path) -> None:
    """Missing source should raise StreamUnavailable with source data."""
    missing = tmp_path / "nope.json"

    with pytest.raises(StreamUnavailable) as exc_info:
        FileStreamResolver().open_input(missing)

    assert exc_info.value.data == {"source": str(missing)}
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


@pytest.mark.unit
def test_open_output_directory_target_raises(tmp_path: Path) -> None:
    """Directory destination cannot be opened for writing."""
    with pytest.raises(StreamUnavailable):
        FileStreamResolver().open_output(tmp_path)


@pytest.mark.unit
def test_stdout_marker_close_keeps_process_stream_open(
    monkeypatch: MonkeyPatch,
) -> None:
    """Closing the stdout stream must not close the process stdout."""
    # Arrange - fake stdout
    fake = _FakeStdio()
    monkeypatch.setattr(sys, "stdout", fake)

    # Act - write and close
    stream = FileStreamResolver().open_output(STDIO_MARKER)
    stream.write(b"backup")
    stream.close()

    # Assert - data forwarded, underlying buffer still open
    assert stream.closed
    assert not fake.buffer.closed
    assert fake.buffer.getvalue() == b"backup"


@pytest.mark.unit
def test_stdin_marker_reads_process_stdin(monkeypatch: MonkeyPatch) -> None:
    """Stdin marker should read the process stdin buffer."""
    fake = _FakeStdio(b'{"appVersion": "1"}')
    monkeypatch.setattr(sys, "stdin", fake)

    with FileStreamResolver().open_input(STDIO_MARKER) as stream:
        raw = stream.read()

    assert raw == b'{"appVersion": "1"}'
    assert not fake.buffer.closed
