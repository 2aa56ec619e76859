"""Run-level summary of snapshot assertion results."""

from __future__ import annotations

from collections import Counter

from rich.table import Table

from models.schemas import ComparisonResult

_STATUS_STYLE = {
    "passed": "green",
    "created": "cyan",
    "failed": "red",
    "missing": "yellow",
    "invalid": "red",
}


class SnapshotReport:
    """Collect assertion results and summarize them."""

    def __init__(self) -> None:
        self.results: list[ComparisonResult] = []

    def record(self, result: ComparisonResult) -> None:
        self.results.append(result)

    @property
    def counts(self) -> Counter[str]:
        counts: Counter[str] = Counter(r.status for r in self.results)
        counts["updated"] = sum(
            1 for r in self.results if r.updated and r.status != "created"
        )
        return counts

    @property
    def failures(self) -> list[ComparisonResult]:
        return [r for r in self.results if r.is_failure]

    def summary_lines(self) -> list[str]:
        """Plain lines for the pytest terminal summary. Empty when nothing ran."""
        if not self.results:
            return []

        counts = self.counts
        parts = [
            f"{counts[name]} {name}"
            for name in ("passed", "created", "updated", "failed", "missing", "invalid")
            if counts[name]
        ]
        lines = [f"{len(self.results)} snapshot assertions: " + ", ".join(parts)]

        for result in self.failures:
            lines.append(f"  {result.status.upper()}: {result.key}")
        if counts["missing"]:
            lines.append("Run with --snapshot-update to create missing snapshots.")
        return lines

    def as_table(self) -> Table:
        """Render every recorded result as a rich table."""
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Test", style="dim")
        table.add_column("Snapshot")
        table.add_column("Status", justify="center")
        table.add_column("Updated", justify="center")

        for result in self.results:
            style = _STATUS_STYLE.get(result.status, "white")
            table.add_row(
                result.key.test_path,
                result.key.test_name,
                f"[{style}]{result.status.upper()}[/{style}]",
                "yes" if result.updated else "-",
            )
        return table
