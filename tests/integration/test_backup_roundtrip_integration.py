"""Integration tests: export/import against the JSON file store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from prefbackup.backup import SettingsBackupService, decode_envelope
from prefbackup.environment import StaticVersionLookup
from prefbackup.store import JsonFilePreferenceStore


@pytest.mark.integration
def test_export_then_import_restores_and_reactivates(tmp_path: Path) -> None:
    """Restored backup replaces edited values in memory and on disk."""
    # Arrange - loaded store with user values, exported to a backup file
    store = JsonFilePreferenceStore(
        root_dir=tmp_path / "datastore",
        name="prefs",
        defaults={"theme": "default"},
    )
    model = store.load()
    model.set("theme", "midnight")
    model.set("vibration", True)
    model.persist()
    service = SettingsBackupService(
        store=store, version_lookup=StaticVersionLookup("0.5.0")
    )
    backup_path = tmp_path / "backups" / "settings.json"
    assert service.export_to(backup_path).ok
    exported_payload = decode_envelope(backup_path.read_bytes()).payload

    # Act - change values, then import the backup
    model.set("theme", "sunrise")
    model.set("haptics", "strong")
    model.persist()
    result = service.import_from(backup_path)

    # Assert - model reloaded from payload and re-persisted
    assert result.ok
    assert result.unwrap() == 1
    assert model.values == {"theme": "midnight", "vibration": True}
    store_file = store.locate("prefs")
    assert json.loads(store_file.read_text(encoding="utf-8")) == model.values
    assert json.loads(exported_payload) == model.values


@pytest.mark.integration
def test_import_into_unloaded_store_writes_payload_verbatim(tmp_path: Path) -> None:
    """Without a loaded model the payload stays byte-exact on disk."""
    # Arrange - source store file with CRLF formatting, empty target store
    source_store = JsonFilePreferenceStore(root_dir=tmp_path / "a", name="prefs")
    source_handle = source_store.locate("prefs")
    source_store.write_all(source_handle, '{\r\n  "layout": "dvorak"\r\n}')
    target_store = JsonFilePreferenceStore(root_dir=tmp_path / "b", name="prefs")
    backup_path = tmp_path / "backup.json"

    # Act - export from source, import into target
    SettingsBackupService(
        store=source_store, version_lookup=StaticVersionLookup(None)
    ).export_to(backup_path)
    result = SettingsBackupService(
        store=target_store, version_lookup=StaticVersionLookup(None)
    ).import_from(backup_path)

    # Assert - exact bytes replayed, unknown producer recorded
    assert result.ok
    target_handle = target_store.locate("prefs")
    assert target_handle.read_bytes() == source_handle.read_bytes()
    assert decode_envelope(backup_path.read_bytes()).producer_version == "unknown"
