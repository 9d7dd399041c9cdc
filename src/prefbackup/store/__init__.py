"""Live preference store collaborators."""

from prefbackup.store.file_store import (
    STORE_FILE_EXT,
    JsonFilePreferenceStore,
    JsonPreferenceModel,
    PreferenceStoreError,
)
from prefbackup.store.ports import PersistenceHandler, PreferenceStore

__all__ = [
    "STORE_FILE_EXT",
    "JsonFilePreferenceStore",
    "JsonPreferenceModel",
    "PersistenceHandler",
    "PreferenceStore",
    "PreferenceStoreError",
]
