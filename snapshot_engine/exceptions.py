"""Exceptions raised by the snapshot engine."""

from __future__ import annotations


class SnapshotError(Exception):
    """Base exception for snapshot engine errors."""


class SnapshotEnvironmentError(SnapshotError):
    """The snapshot store is missing or cannot be read. Aborts the assertion."""


class SnapshotSerializationError(SnapshotError):
    """A received value cannot be represented as JSON."""

    def __init__(self, message: str, value_type: str | None = None) -> None:
        super().__init__(message)
        self.value_type = value_type


class MalformedSnapshotError(SnapshotError):
    """Stored reference text is not valid JSON."""

    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text
