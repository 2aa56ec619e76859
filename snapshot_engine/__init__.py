"""Snapshot comparison and conditional-update engine."""

from snapshot_engine.comparator import Comparator, deep_equal
from snapshot_engine.diff import render_diff
from snapshot_engine.exceptions import (
    MalformedSnapshotError,
    SnapshotEnvironmentError,
    SnapshotError,
    SnapshotSerializationError,
)
from snapshot_engine.matcher import SnapshotContext, match_snapshot_predicate
from snapshot_engine.update_policy import UpdatePolicy

__all__ = [
    "Comparator",
    "MalformedSnapshotError",
    "SnapshotContext",
    "SnapshotEnvironmentError",
    "SnapshotError",
    "SnapshotSerializationError",
    "UpdatePolicy",
    "deep_equal",
    "match_snapshot_predicate",
    "render_diff",
]
