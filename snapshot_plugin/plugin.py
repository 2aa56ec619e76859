"""pytest plugin exposing the ``snapshot_predicate`` fixture.

Installed as a ``pytest11`` entry point next to syrupy, whose
``--snapshot-update`` flag also creates and overwrites these snapshots::

    def test_latency(snapshot_predicate):
        snapshot_predicate(
            {"latency_ms": measure(), "status": "ok"},
            {"latency_ms": create_snapshot_predicate(lambda old, new: new <= old)},
        )
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from syrupy.assertion import SnapshotAssertion
from syrupy.location import PyTestLocation

from config.logging_setup import configure_logging
from config.settings import UpdateMode, get_settings
from models.schemas import ComparisonResult
from reporting.summary import SnapshotReport
from snapshot_engine.matcher import SnapshotContext, match_snapshot_predicate
from store.syrupy_store import SyrupySnapshotStore

UPDATE_MODES: tuple[UpdateMode, ...] = ("none", "all", "new")


class SnapshotSession:
    """Per-run state: one store for every snapshot file and the result report."""

    def __init__(
        self,
        store: SyrupySnapshotStore,
        update_mode: UpdateMode | None,
        expand: bool,
        details: bool = False,
    ) -> None:
        self.store = store
        self.update_mode = update_mode
        self.expand = expand
        self.details = details
        self.report = SnapshotReport()

    def resolve_update_mode(self, syrupy_update: bool) -> UpdateMode:
        """
        --snapshot-update-mode wins, then syrupy's --snapshot-update, then
        SNAPSHOT_UPDATE_MODE.
        """
        if self.update_mode is not None:
            return self.update_mode
        if syrupy_update:
            return "all"
        return get_settings().snapshot_update_mode


session_key = pytest.StashKey[SnapshotSession]()


class PredicateAssertion:
    """
    Callable bound to one test.

    Each call is a separate snapshot named the way syrupy names them:
    ``TestClass.test_name`` for the first call, then ``.1``, ``.2`` and so on.
    """

    def __init__(
        self,
        session: SnapshotSession,
        test_location: PyTestLocation,
        test_path: str,
        update_mode: UpdateMode,
    ) -> None:
        self.session = session
        self.test_location = test_location
        self.test_path = test_path
        self.update_mode = update_mode
        self._index = 0

    def __call__(self, received: Any, rules: Any = None) -> ComparisonResult:
        key = self.session.store.key_for(self.test_location, self._index, self.test_path)
        self._index += 1
        context = SnapshotContext.from_settings(
            key,
            self.session.store,
            update_mode=self.update_mode,
            expand=self.session.expand,
        )
        result = match_snapshot_predicate(received, rules, context=context)
        self.session.report.record(result)
        if result.is_failure:
            raise AssertionError(result.message)
        return result


def _relative_test_path(path: Path, rootpath: Path) -> str:
    try:
        return path.relative_to(rootpath).as_posix()
    except ValueError:
        return path.as_posix()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("snapshot-predicate", "predicate-aware snapshot assertions")
    group.addoption(
        "--snapshot-update-mode",
        choices=UPDATE_MODES,
        dest="snapshot_update_mode",
        default=None,
        help="Update mode: none, all or new (default: all with --snapshot-update, "
        "else SNAPSHOT_UPDATE_MODE or none).",
    )
    group.addoption(
        "--snapshot-expand",
        action="store_true",
        default=False,
        help="Show full values instead of context hunks in snapshot diffs.",
    )
    group.addoption(
        "--snapshot-details",
        action="store_true",
        default=False,
        help="Print a table of every snapshot assertion at the end of the run.",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    config.stash[session_key] = SnapshotSession(
        store=SyrupySnapshotStore(),
        update_mode=config.getoption("snapshot_update_mode"),
        expand=config.getoption("snapshot_expand") or settings.snapshot_expand_diff,
        details=config.getoption("snapshot_details"),
    )


def pytest_sessionfinish(session: pytest.Session) -> None:
    snapshot_session = session.config.stash.get(session_key, None)
    if snapshot_session is not None:
        snapshot_session.store.flush()


def pytest_terminal_summary(terminalreporter: Any, config: pytest.Config) -> None:
    snapshot_session = config.stash.get(session_key, None)
    if snapshot_session is None:
        return
    lines = snapshot_session.report.summary_lines()
    if not lines:
        return

    terminalreporter.section("snapshot summary")
    for line in lines:
        terminalreporter.write_line(line)

    if snapshot_session.details:
        buffer = io.StringIO()
        Console(file=buffer, width=120, color_system=None).print(
            snapshot_session.report.as_table()
        )
        terminalreporter.write(buffer.getvalue())


@pytest.fixture
def snapshot_predicate(
    request: pytest.FixtureRequest, snapshot: SnapshotAssertion
) -> PredicateAssertion:
    """Assert values against their stored snapshots, with optional predicates."""
    snapshot_session = request.config.stash[session_key]
    return PredicateAssertion(
        snapshot_session,
        snapshot.test_location,
        _relative_test_path(request.node.path, request.config.rootpath),
        snapshot_session.resolve_update_mode(snapshot.update_snapshots),
    )
