"""Collaborator protocols for the live preference store."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class PersistenceHandler(Protocol):
    """In-memory preference model that can reload from and persist to disk."""

    def reload(self, handle: Path, *, is_first_load: bool) -> None:
        """Reload in-memory state from the store file.

        Args:
            handle: Backing store file.
            is_first_load: Whether this is the store's very first load, which
                enables first-run default seeding.
        """

    def persist(self) -> None:
        """Write in-memory state back to the store file immediately."""


class PreferenceStore(Protocol):
    """Live key/value preference store accessed as an opaque text blob."""

    @property
    def name(self) -> str:
        """Current store name."""
        ...

    @property
    def persistence_handler(self) -> PersistenceHandler | None:
        """Reload/persist handler, or None when the store is not loaded."""
        ...

    def locate(self, name: str) -> Path:
        """Return backing content handle for one store name."""
        ...

    def exists(self, handle: Path) -> bool:
        """Return whether backing content exists at handle."""
        ...

    def read_all(self, handle: Path) -> str:
        """Read backing content verbatim."""
        ...

    def write_all(self, handle: Path, content: str) -> None:
        """Replace backing content in full."""
        ...
