"""Textual diff of serialized received and reference values."""

from __future__ import annotations

import difflib

# Large enough that difflib keeps every unchanged line in a single hunk.
_EXPANDED_CONTEXT = 1_000_000


def render_diff(
    received_text: str,
    reference_text: str,
    expand: bool = False,
    context_lines: int = 3,
) -> str:
    """
    Render a unified diff from the stored snapshot to the received value.

    Both arguments are serialized representations, typically the indented
    JSON from ``serialization.pretty``. ``expand`` shows every line instead
    of ``context_lines`` around each change.
    """
    context = _EXPANDED_CONTEXT if expand else context_lines
    lines = difflib.unified_diff(
        reference_text.splitlines(),
        received_text.splitlines(),
        fromfile="- Snapshot",
        tofile="+ Received",
        n=context,
        lineterm="",
    )
    return "\n".join(lines)
