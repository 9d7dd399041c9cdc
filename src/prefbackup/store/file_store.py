"""JSON-file backed live preference store."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from prefbackup.store.atomic_write import atomic_write_text

STORE_FILE_EXT = "json"

_LOGGER = logging.getLogger(__name__)


class PreferenceStoreError(RuntimeError):
    """Raised when the store file cannot be located, read, written or parsed."""


class JsonPreferenceModel:
    """In-memory preference values bound to one store file."""

    def __init__(
        self,
        *,
        store_name: str,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        """Create empty model.

        Args:
            store_name: Owning store name, used for temp file naming.
            defaults: Values seeded on first-ever load when no file exists.
        """
        self._store_name = store_name
        self._defaults = dict(defaults or {})
        self._values: dict[str, Any] = {}
        self._handle: Path | None = None

    @property
    def values(self) -> dict[str, Any]:
        """Snapshot copy of current preference values."""
        return dict(self._values)

    def get(self, key: str, default: Any = None) -> Any:
        """Return one preference value."""
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set one preference value in memory; call ``persist`` to save."""
        self._values[key] = value

    def reload(self, handle: Path, *, is_first_load: bool) -> None:
        """Reload values from handle.

        A missing file seeds defaults (and persists them) only on the first
        load; any later reload of a missing file yields an empty model.

        Args:
            handle: Store file path.
            is_first_load: Whether first-run default seeding applies.

        Raises:
            PreferenceStoreError: If the file cannot be read or is not a JSON
                object.
        """
        self._handle = handle
        if not handle.exists():
            if is_first_load:
                _LOGGER.debug("Seeding default preferences into %s", handle)
                self._values = dict(self._defaults)
                self.persist()
            else:
                self._values = {}
            return
        try:
            raw = handle.read_text(encoding="utf-8")
        except OSError as exc:
            raise PreferenceStoreError(f"Cannot read preference store: {exc}") from exc
        try:
            decoded = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as exc:
            raise PreferenceStoreError(f"Invalid preference store JSON: {exc}") from exc
        if not isinstance(decoded, dict):
            raise PreferenceStoreError(
                "Invalid preference store payload: root must be an object"
            )
        self._values = decoded

    def persist(self) -> None:
        """Write current values back to the bound store file.

        Raises:
            PreferenceStoreError: If the model was never loaded or the write
                fails.
        """
        if self._handle is None:
            raise PreferenceStoreError("Preference model has not been loaded.")
        try:
            atomic_write_text(
                self._handle,
                json.dumps(self._values, indent=2, sort_keys=True),
                temp_prefix=self._store_name,
            )
        except OSError as exc:
            raise PreferenceStoreError(
                f"Cannot persist preference store: {exc}"
            ) from exc


class JsonFilePreferenceStore:
    """Preference store keeping ``<name>.json`` files under one directory."""

    def __init__(
        self,
        *,
        root_dir: Path,
        name: str,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        """Create store for one root directory and active store name.

        Args:
            root_dir: Directory holding store files.
            name: Active store name.
            defaults: First-run default values for the active store.
        """
        self._root_dir = root_dir
        self._name = name
        self._defaults = defaults
        self._model: JsonPreferenceModel | None = None

    @property
    def name(self) -> str:
        """Active store name."""
        return self._name

    @property
    def persistence_handler(self) -> JsonPreferenceModel | None:
        """Loaded preference model, or None before ``load`` is called."""
        return self._model

    def load(self) -> JsonPreferenceModel:
        """Load active store into memory as its first-ever load.

        Returns:
            Loaded preference model.
        """
        model = JsonPreferenceModel(store_name=self._name, defaults=self._defaults)
        model.reload(self.locate(self._name), is_first_load=True)
        self._model = model
        return model

    def locate(self, name: str) -> Path:
        """Resolve store file for name.

        Args:
            name: Store name.

        Returns:
            Store file path under root directory.

        Raises:
            PreferenceStoreError: If name is empty or contains path parts.
        """
        if not name or Path(name).name != name or name in {".", ".."}:
            raise PreferenceStoreError(f"Invalid preference store name: {name!r}")
        return self._root_dir / f"{name}.{STORE_FILE_EXT}"

    def exists(self, handle: Path) -> bool:
        """Return whether the store file exists."""
        return handle.is_file()

    def read_all(self, handle: Path) -> str:
        """Read store file verbatim, without newline translation.

        Raises:
            PreferenceStoreError: If the file cannot be read or is not UTF-8.
        """
        try:
            return handle.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PreferenceStoreError(f"Cannot read preference store: {exc}") from exc

    def write_all(self, handle: Path, content: str) -> None:
        """Atomically replace store file content.

        Raises:
            PreferenceStoreError: If the file cannot be written.
        """
        try:
            atomic_write_text(handle, content, temp_prefix=self._name)
        except OSError as exc:
            raise PreferenceStoreError(
                f"Cannot write preference store: {exc}"
            ) from exc
