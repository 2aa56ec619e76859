"""Pass/fail decision between a received value and its stored reference."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from models.schemas import (
    ComparisonOutcome,
    ExactMatch,
    FieldMismatch,
    SnapshotPredicate,
)

Rules = Optional[Union[SnapshotPredicate, Mapping[str, Union[ExactMatch, SnapshotPredicate]]]]


def deep_equal(left: Any, right: Any) -> bool:
    """
    Structural equality over JSON data.

    Booleans never equal numbers. Ints and floats compare by value since the
    JSON text of a reference does not preserve the difference.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if left.keys() != right.keys():
            return False
        return all(deep_equal(left[k], right[k]) for k in left)
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if len(left) != len(right):
            return False
        return all(deep_equal(a, b) for a, b in zip(left, right))
    if type(left) is not type(right):
        return False
    return left == right


class Comparator:
    """Applies field rules to decide whether a received value matches its reference."""

    @staticmethod
    def compare(
        received: Any,
        reference: Any,
        rules: Rules = None,
        exhaustive: bool = False,
    ) -> ComparisonOutcome:
        """
        Compare ``received`` against ``reference``.

        Rules:
        - IF both values are mappings: each received field is checked with its
          field predicate, or deep equality when it has none. A top-level
          SnapshotPredicate names no field, so every field is then exact
        - IF rules is a SnapshotPredicate: its match function decides for the whole value
        - ELSE: deep equality

        Field scanning stops at the first failure unless ``exhaustive`` is set,
        in which case every failing field is collected. The pass/fail answer
        is the same in both modes.
        """
        if isinstance(received, Mapping) and isinstance(reference, Mapping):
            field_rules = rules if isinstance(rules, Mapping) else {}
            return Comparator._compare_fields(received, reference, field_rules, exhaustive)

        if isinstance(rules, SnapshotPredicate):
            if rules.match(reference, received):
                return ComparisonOutcome(passed=True)
            return ComparisonOutcome(
                passed=False,
                mismatches=[
                    FieldMismatch(rule="predicate", reference=reference, received=received)
                ],
            )

        if deep_equal(received, reference):
            return ComparisonOutcome(passed=True)
        return ComparisonOutcome(
            passed=False,
            mismatches=[FieldMismatch(rule="exact", reference=reference, received=received)],
        )

    @staticmethod
    def _compare_fields(
        received: Mapping[str, Any],
        reference: Mapping[str, Any],
        rules: Mapping[str, ExactMatch | SnapshotPredicate],
        exhaustive: bool,
    ) -> ComparisonOutcome:
        mismatches: list[FieldMismatch] = []

        # Fields that only exist in the reference are not inspected.
        for name, received_field in received.items():
            mismatch = Comparator._check_field(name, received_field, reference, rules.get(name))
            if mismatch is None:
                continue
            mismatches.append(mismatch)
            if not exhaustive:
                break

        return ComparisonOutcome(passed=not mismatches, mismatches=mismatches)

    @staticmethod
    def _check_field(
        name: str,
        received_field: Any,
        reference: Mapping[str, Any],
        rule: ExactMatch | SnapshotPredicate | None,
    ) -> FieldMismatch | None:
        # Predicates see None for fields the reference does not have yet.
        reference_field = reference.get(name)
        if isinstance(rule, SnapshotPredicate):
            if rule.match(reference_field, received_field):
                return None
            return FieldMismatch(
                field=name,
                rule="predicate",
                reference=reference_field,
                received=received_field,
            )

        if name not in reference:
            return FieldMismatch(field=name, rule="missing", received=received_field)
        if deep_equal(received_field, reference_field):
            return None
        return FieldMismatch(
            field=name, rule="exact", reference=reference_field, received=received_field
        )
