"""Shared in-memory collaborators for backup unit tests."""

from __future__ import annotations

import io
from pathlib import Path


class RecordingHandler:
    """Persistence handler that records reload/persist calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def reload(self, handle: Path, *, is_first_load: bool) -> None:
        self.calls.append(("reload", (handle, is_first_load)))

    def persist(self) -> None:
        self.calls.append(("persist", None))


class InMemoryPreferenceStore:
    """Preference store keeping backing content in a dict keyed by handle."""

    def __init__(
        self,
        *,
        name: str = "test-prefs",
        content: str | None = None,
        handler: RecordingHandler | None = None,
        fail_write: bool = False,
    ) -> None:
        self._name = name
        self.contents: dict[Path, str] = {}
        if content is not None:
            self.contents[self.locate(name)] = content
        self.handler = handler
        self.fail_write = fail_write

    @property
    def name(self) -> str:
        return self._name

    @property
    def persistence_handler(self) -> RecordingHandler | None:
        return self.handler

    def locate(self, name: str) -> Path:
        return Path("/virtual") / f"{name}.json"

    def exists(self, handle: Path) -> bool:
        return handle in self.contents

    def read_all(self, handle: Path) -> str:
        return self.contents[handle]

    def write_all(self, handle: Path, content: str) -> None:
        if self.fail_write:
            raise OSError("disk full")
        self.contents[handle] = content

    @property
    def current(self) -> str | None:
        """Backing content of the active store."""
        return self.contents.get(self.locate(self._name))


class CapturingStream(io.BytesIO):
    """BytesIO that keeps its content readable after close."""

    def __init__(self, initial: bytes = b"", *, fail_write: bool = False) -> None:
        super().__init__(initial)
        self.captured = b""
        self.fail_write = fail_write

    def write(self, data: bytes) -> int:  # type: ignore[override]
        if self.fail_write:
            raise OSError("stream broken")
        return super().write(data)

    def close(self) -> None:
        if not self.closed:
            self.captured = self.getvalue()
        super().close()
