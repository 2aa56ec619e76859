"""Pydantic schemas for snapshot keys, field rules and comparison results."""

from __future__ import annotations

from typing import Annotated, Any, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Identity
# =============================================================================


class SnapshotKey(BaseModel):
    """Identity of a stored reference value."""

    model_config = ConfigDict(frozen=True)

    test_path: str = Field(description="Test file path, relative to the project root")
    test_name: str = Field(description="Test name, unique within its file")

    def __str__(self) -> str:
        return f"{self.test_path}::{self.test_name}"


# =============================================================================
# Field Rules
# =============================================================================


class ExactMatch(BaseModel):
    """Deep structural equality; the rule used for any field without a predicate."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["exact"] = "exact"


class SnapshotPredicate(BaseModel):
    """
    Pluggable comparison for one field, or for the whole value.

    ``match(reference, received)`` returns True when the received value is
    acceptable. ``update(reference, received)`` returns True when the
    reference should be replaced; without it, a passing predicate never
    rewrites the stored snapshot.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["predicate"] = "predicate"
    match: Callable[[Any, Any], bool] = Field(description="Acceptance check")
    update: Callable[[Any, Any], bool] | None = Field(
        default=None, description="Reference replacement check"
    )


FieldRule = Annotated[Union[ExactMatch, SnapshotPredicate], Field(discriminator="kind")]


class FieldRules(BaseModel):
    """Validated mapping of field name to rule."""

    rules: dict[str, FieldRule] = Field(default_factory=dict)


def create_snapshot_predicate(
    match: Callable[[Any, Any], bool],
    update: Callable[[Any, Any], bool] | None = None,
) -> SnapshotPredicate:
    """Build a predicate rule for use as a field rule or as the whole-value rule."""
    return SnapshotPredicate(match=match, update=update)


# =============================================================================
# Results
# =============================================================================


ResultStatus = Literal["passed", "failed", "created", "missing", "invalid"]


class FieldMismatch(BaseModel):
    """One value that did not satisfy its rule."""

    field: str | None = Field(default=None, description="Field name, None for the whole value")
    rule: Literal["exact", "predicate", "missing"] = Field(
        description="Rule that rejected the value"
    )
    reference: Any = Field(default=None, description="Stored value")
    received: Any = Field(default=None, description="Received value")

    def describe(self) -> str:
        target = f"field '{self.field}'" if self.field is not None else "value"
        if self.rule == "missing":
            return f"{target}: not present in snapshot"
        if self.rule == "predicate":
            return f"{target}: predicate rejected {self.received!r} (snapshot {self.reference!r})"
        return f"{target}: expected {self.reference!r}, received {self.received!r}"


class ComparisonOutcome(BaseModel):
    """Pass/fail decision produced by the comparator."""

    passed: bool
    mismatches: list[FieldMismatch] = Field(default_factory=list)


class ComparisonResult(BaseModel):
    """Result of one snapshot assertion."""

    key: SnapshotKey
    passed: bool = Field(description="True only when the received value matched a reference")
    status: ResultStatus
    updated: bool = Field(
        default=False, description="Stored reference now holds a different value than before"
    )
    message: str = Field(default="", description="Human-readable explanation")
    mismatches: list[FieldMismatch] = Field(default_factory=list)

    @property
    def is_failure(self) -> bool:
        """Whether the test runner should mark the assertion failed."""
        return self.status in ("failed", "missing", "invalid")
