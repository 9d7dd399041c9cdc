"""Atomic text write with fsync for preference store files."""

from __future__ import annotations

import os
import uuid
from pathlib import Path


def atomic_write_text(final_path: Path, content: str, *, temp_prefix: str) -> None:
    """Write text to final_path atomically: temp -> fsync -> rename -> fsync dir.

    Temp file is created next to final_path so rename is atomic. On failure,
    temp is removed and final_path keeps its prior content.

    Args:
        final_path: Destination store file.
        content: Full replacement content, written as UTF-8.
        temp_prefix: Prefix for temp filename, e.g. the store name.
    """
    parent = final_path.parent
    parent.mkdir(parents=True, exist_ok=True)
    temp_path = parent / f".{temp_prefix}.{os.getpid()}.{uuid.uuid4().hex[:8]}.tmp"
    content_bytes = content.encode("utf-8")
    try:
        fd = os.open(
            str(temp_path),
            os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
            0o644,
        )
        try:
            view = memoryview(content_bytes)
            while view:
                written = os.write(fd, view)
                view = view[written:]
            os.fsync(fd)
        finally:
            os.close(fd)
        os.replace(temp_path, final_path)
        try:
            dir_fd = os.open(str(parent), os.O_RDONLY)
            try:
                os.fsync(dir_fd)
            finally:
                os.close(dir_fd)
        except OSError:
            pass  # e.g. Windows: directory fsync best-effort
    finally:
        if temp_path.exists():
            temp_path.unlink(missing_ok=True)
