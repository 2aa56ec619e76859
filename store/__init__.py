"""Snapshot stores holding serialized reference values."""

from store.base import SnapshotStore, StoreError
from store.memory_store import InMemorySnapshotStore
from store.syrupy_store import (
    PredicateSnapshotExtension,
    SyrupySnapshotStore,
    discover_snapshot_files,
    load_snapshot_file,
)

__all__ = [
    "SnapshotStore",
    "StoreError",
    "InMemorySnapshotStore",
    "PredicateSnapshotExtension",
    "SyrupySnapshotStore",
    "discover_snapshot_files",
    "load_snapshot_file",
]
