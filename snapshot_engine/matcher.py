"""Snapshot assertion: load the reference, compare, decide on the update."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from config.settings import Settings, UpdateMode, get_settings
from models.schemas import (
    ComparisonOutcome,
    ComparisonResult,
    FieldRules,
    SnapshotKey,
    SnapshotPredicate,
)
from snapshot_engine.comparator import Comparator, Rules
from snapshot_engine.diff import render_diff
from snapshot_engine.exceptions import MalformedSnapshotError, SnapshotEnvironmentError
from snapshot_engine.serialization import normalize_value, parse_reference, pretty
from snapshot_engine.update_policy import UpdatePolicy
from store.base import SnapshotStore, StoreError

logger = logging.getLogger(__name__)

MISSING_MESSAGE = (
    "No snapshot exists for this test. Run with --snapshot-update to create one."
)


class SnapshotContext(BaseModel):
    """Everything an assertion needs to know about where it runs."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    key: SnapshotKey
    store: SnapshotStore | None = Field(default=None, description="Reference store")
    update_mode: UpdateMode = Field(default="none")
    expand: bool = Field(default=False, description="Show full values in diffs")
    report_all_fields: bool = Field(default=False, description="Collect every field mismatch")
    diff_context_lines: int = Field(default=3, ge=0)

    @classmethod
    def from_settings(
        cls,
        key: SnapshotKey,
        store: SnapshotStore | None,
        settings: Settings | None = None,
        **overrides: Any,
    ) -> SnapshotContext:
        """Build a context using configured defaults."""
        settings = settings or get_settings()
        values: dict[str, Any] = {
            "update_mode": settings.snapshot_update_mode,
            "expand": settings.snapshot_expand_diff,
            "report_all_fields": settings.snapshot_report_all_fields,
            "diff_context_lines": settings.diff_context_lines,
        }
        values.update(overrides)
        return cls(key=key, store=store, **values)


def _validate_rules(rules: Any) -> Rules:
    if rules is None or isinstance(rules, SnapshotPredicate):
        return rules
    if isinstance(rules, Mapping):
        return FieldRules(rules=dict(rules)).rules
    raise TypeError(
        "Snapshot rules must be a SnapshotPredicate or a mapping of field name "
        f"to rule, got {type(rules).__name__}"
    )


def _read_reference(store: SnapshotStore | None, key: SnapshotKey) -> str | None:
    if store is None:
        raise SnapshotEnvironmentError("Snapshot store is not available.")
    try:
        return store.get(key)
    except StoreError as e:
        raise SnapshotEnvironmentError(
            f"Snapshot store '{e.store_name}' is not available: {e}"
        ) from e


def _failure_message(
    outcome: ComparisonOutcome,
    received: Any,
    reference: Any,
    context: SnapshotContext,
) -> str:
    lines = ["Snapshot comparison failed:", ""]
    lines.extend(f"  {m.describe()}" for m in outcome.mismatches)
    if outcome.mismatches:
        lines.append("")
    lines.append(
        render_diff(
            pretty(received),
            pretty(reference),
            expand=context.expand,
            context_lines=context.diff_context_lines,
        )
    )
    return "\n".join(lines)


def match_snapshot_predicate(
    received: Any,
    rules: Any = None,
    *,
    context: SnapshotContext,
) -> ComparisonResult:
    """
    Compare ``received`` against the stored snapshot for ``context.key``.

    ``rules`` is None for exact matching, a ``SnapshotPredicate`` governing
    the whole value, or a mapping of field name to rule.

    Raises SnapshotEnvironmentError when the store is unavailable and
    SnapshotSerializationError when ``received`` is not JSON data. Every
    other outcome, including a missing or unparseable reference, is
    reported through the returned result.
    """
    checked_rules = _validate_rules(rules)
    serialized_received, received_value = normalize_value(received)
    store = context.store
    stored = _read_reference(store, context.key)

    if stored is None:
        if context.update_mode == "none":
            logger.debug("No snapshot for %s", context.key)
            return ComparisonResult(
                key=context.key, passed=False, status="missing", message=MISSING_MESSAGE
            )
        store.set(context.key, serialized_received)
        logger.info("Created snapshot %s", context.key)
        return ComparisonResult(
            key=context.key,
            passed=False,
            status="created",
            updated=True,
            message=f"Snapshot created for {context.key}.",
        )

    try:
        reference_value = parse_reference(stored)
    except MalformedSnapshotError as e:
        logger.warning("Unparseable snapshot for %s", context.key)
        return ComparisonResult(
            key=context.key, passed=False, status="invalid", message=str(e)
        )

    outcome = Comparator.compare(
        received_value,
        reference_value,
        checked_rules,
        exhaustive=context.report_all_fields,
    )
    logger.debug(
        "Compared %s: passed=%s mismatches=%d",
        context.key,
        outcome.passed,
        len(outcome.mismatches),
    )

    persist = UpdatePolicy.should_persist(
        update_mode=context.update_mode,
        passed=outcome.passed,
        reference_exists=True,
        rules=checked_rules,
        reference=reference_value,
        received=received_value,
    )
    changed = False
    if persist:
        store.set(context.key, serialized_received)
        changed = serialized_received != stored
        if changed:
            logger.info("Updated snapshot %s", context.key)

    if outcome.passed:
        return ComparisonResult(
            key=context.key, passed=True, status="passed", updated=changed
        )

    message = _failure_message(outcome, received_value, reference_value, context)
    if changed:
        message += f"\n\nSnapshot overwritten with the received value (update mode '{context.update_mode}')."
    return ComparisonResult(
        key=context.key,
        passed=False,
        status="failed",
        updated=changed,
        message=message,
        mismatches=outcome.mismatches,
    )
