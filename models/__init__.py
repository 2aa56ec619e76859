"""Models module containing Pydantic schemas for all data structures."""

from models.schemas import (
    ComparisonOutcome,
    ComparisonResult,
    ExactMatch,
    FieldMismatch,
    FieldRule,
    FieldRules,
    ResultStatus,
    SnapshotKey,
    SnapshotPredicate,
    create_snapshot_predicate,
)

__all__ = [
    "ComparisonOutcome",
    "ComparisonResult",
    "ExactMatch",
    "FieldMismatch",
    "FieldRule",
    "FieldRules",
    "ResultStatus",
    "SnapshotKey",
    "SnapshotPredicate",
    "create_snapshot_predicate",
]
