"""Rules for replacing a stored reference with the received value."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from config.settings import UpdateMode
from models.schemas import SnapshotPredicate
from snapshot_engine.comparator import Rules


def has_predicates(rules: Rules) -> bool:
    """Whether any part of the request is governed by a predicate."""
    if rules is None:
        return False
    if isinstance(rules, SnapshotPredicate):
        return True
    if isinstance(rules, Mapping):
        return any(isinstance(rule, SnapshotPredicate) for rule in rules.values())
    return False


class UpdatePolicy:
    """Decides whether a snapshot is persisted after a comparison attempt."""

    @staticmethod
    def should_persist(
        update_mode: UpdateMode,
        passed: bool,
        reference_exists: bool,
        rules: Rules,
        reference: Any,
        received: Any,
    ) -> bool:
        """
        Apply the update rules in priority order.

        Rules:
        - IF update mode is "all" or "new": persist unconditionally
        - IF passed against an existing reference with exact rules only: persist
        - IF passed against an existing reference and the whole value is
          predicate-governed: persist only when its update function returns True
        - ELSE: keep the stored reference

        Update functions attached to individual fields are not consulted;
        persistence is decided for the whole value.
        """
        if update_mode in ("all", "new"):
            return True

        if not passed or not reference_exists:
            return False

        if not has_predicates(rules):
            return True

        if isinstance(rules, SnapshotPredicate) and rules.update is not None:
            return bool(rules.update(reference, received))

        return False
