"""Tests for value serialization and diff rendering."""

from __future__ import annotations

import pytest

from snapshot_engine.diff import render_diff
from snapshot_engine.exceptions import MalformedSnapshotError, SnapshotSerializationError
from snapshot_engine.serialization import normalize_value, parse_reference, pretty, serialize_value


class TestSerialization:
    """Test the JSON precondition on snapshot values."""

    def test_compact_text(self) -> None:
        """Test: References are stored as compact JSON keeping key order."""
        assert serialize_value({"foo": 1, "bar": "abcde"}) == '{"foo": 1, "bar": "abcde"}'

    def test_unicode_kept_readable(self) -> None:
        """Test: Non-ASCII text is not escaped."""
        assert serialize_value("café") == '"café"'

    def test_normalize_converts_tuples(self) -> None:
        """Test: Normalized values have the shape of a loaded reference."""
        text, value = normalize_value({"pair": (1, 2)})

        assert text == '{"pair": [1, 2]}'
        assert value == {"pair": [1, 2]}

    @pytest.mark.parametrize("value", [float("inf"), b"bytes", {("a", "b"): 1}])
    def test_rejects_non_json(self, value: object) -> None:
        """Test: Non-data values raise SnapshotSerializationError."""
        with pytest.raises(SnapshotSerializationError) as exc_info:
            serialize_value(value)

        assert exc_info.value.value_type == type(value).__name__

    def test_parse_reference_error(self) -> None:
        """Test: Malformed text names the parse error."""
        with pytest.raises(MalformedSnapshotError, match="Invalid snapshot format") as exc_info:
            parse_reference('{"foo": ')

        assert exc_info.value.text == '{"foo": '


class TestDiff:
    """Test the textual diff renderer."""

    def test_unified_diff_headers(self) -> None:
        """Test: Diff is labelled snapshot to received."""
        diff = render_diff(pretty({"a": 2}), pretty({"a": 1}))

        assert diff.startswith("--- - Snapshot\n+++ + Received")
        assert '-  "a": 1' in diff
        assert '+  "a": 2' in diff

    def test_identical_values_have_empty_diff(self) -> None:
        """Test: No hunks for equal text."""
        assert render_diff("1", "1") == ""

    def test_expand_shows_all_lines(self) -> None:
        """Test: Expanded diffs keep distant unchanged lines."""
        reference = pretty({f"k{i}": i for i in range(20)})
        received = pretty({**{f"k{i}": i for i in range(20)}, "k19": -1})

        compact = render_diff(received, reference, context_lines=1)
        expanded = render_diff(received, reference, expand=True)

        assert '"k0": 0' not in compact
        assert '"k0": 0' in expanded
