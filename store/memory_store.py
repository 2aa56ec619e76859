"""In-memory snapshot store."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from models.schemas import SnapshotKey
from store.base import SnapshotStore


class InMemorySnapshotStore(SnapshotStore):
    """Dict-backed store. ``flush`` only counts how often it ran."""

    def __init__(self, initial: Mapping[SnapshotKey, str] | None = None) -> None:
        super().__init__()
        self._data: dict[SnapshotKey, str] = dict(initial or {})
        self.flush_count = 0

    @property
    def name(self) -> str:
        return "memory"

    def get(self, key: SnapshotKey) -> str | None:
        return self._data.get(key)

    def _write(self, key: SnapshotKey, serialized: str) -> None:
        self._data[key] = serialized

    def keys(self) -> Iterator[SnapshotKey]:
        return iter(list(self._data))

    def _persist(self) -> None:
        self.flush_count += 1

    def snapshot_data(self) -> dict[SnapshotKey, str]:
        """Copy of the stored references."""
        return dict(self._data)
