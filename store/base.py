"""Base snapshot store with dirty tracking."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator

from models.schemas import SnapshotKey


class StoreError(Exception):
    """Base exception for snapshot store errors."""

    def __init__(self, message: str, store_name: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.store_name = store_name
        self.recoverable = recoverable


class SnapshotStore(ABC):
    """
    Keyed mapping from test identity to serialized reference text.

    ``set`` only changes the in-memory view and raises the dirty flag;
    writing to durable storage happens in ``flush``.
    """

    def __init__(self) -> None:
        self._dirty = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Store name for logging and error reporting."""
        ...

    @property
    def dirty(self) -> bool:
        """True when there are changes not yet flushed."""
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True

    @abstractmethod
    def get(self, key: SnapshotKey) -> str | None:
        """Return the serialized reference for ``key``, or None when absent."""
        ...

    def set(self, key: SnapshotKey, serialized: str) -> None:
        """Store a serialized reference and mark the store dirty."""
        self._write(key, serialized)
        self.mark_dirty()

    @abstractmethod
    def _write(self, key: SnapshotKey, serialized: str) -> None:
        """Record the value in the in-memory view."""
        ...

    @abstractmethod
    def keys(self) -> Iterator[SnapshotKey]:
        """Iterate over every key currently known to the store."""
        ...

    def flush(self) -> bool:
        """Persist pending changes. Returns True if anything was written."""
        if not self._dirty:
            return False
        self._persist()
        self._dirty = False
        return True

    @abstractmethod
    def _persist(self) -> None:
        """Write pending changes to durable storage."""
        ...

    def __contains__(self, key: object) -> bool:
        return isinstance(key, SnapshotKey) and self.get(key) is not None
