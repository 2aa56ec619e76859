"""Reporting of snapshot assertion results."""

from reporting.summary import SnapshotReport

__all__ = ["SnapshotReport"]
