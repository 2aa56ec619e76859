"""Tests for the snapshot inspection CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from main import cli


@pytest.fixture
def snapshot_root(tmp_path: Path) -> Path:
    """Project tree with two test modules' snapshots, one of them malformed."""
    snapshots = tmp_path / "tests" / "__snapshot_predicates__"
    api = snapshots / "test_api"
    bad = snapshots / "test_bad"
    api.mkdir(parents=True)
    bad.mkdir(parents=True)
    (api / "test_latency.json").write_text('{"latency_ms": 120}', encoding="utf-8")
    (api / "test_status.json").write_text('"ok"', encoding="utf-8")
    (bad / "test_broken.json").write_text("{oops", encoding="utf-8")
    return tmp_path


@pytest.fixture
def api_dir(snapshot_root: Path) -> Path:
    return snapshot_root / "tests" / "__snapshot_predicates__" / "test_api"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestListCommand:
    """Test the list command."""

    def test_lists_modules_and_counts(self, runner: CliRunner, snapshot_root: Path) -> None:
        """Test: Every test module directory is listed with its snapshot count."""
        result = runner.invoke(cli, ["list", str(snapshot_root)])

        assert result.exit_code == 0
        assert "test_api" in result.output
        assert "test_bad" in result.output
        assert "3 snapshots in 2 test modules" in result.output

    def test_empty_tree(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test: No files is not an error."""
        result = runner.invoke(cli, ["list", str(tmp_path)])

        assert result.exit_code == 0
        assert "No snapshot files found" in result.output


class TestShowCommand:
    """Test the show command."""

    def test_show_single_file(self, runner: CliRunner, api_dir: Path) -> None:
        """Test: One snapshot file is pretty printed."""
        result = runner.invoke(cli, ["show", str(api_dir / "test_latency.json")])

        assert result.exit_code == 0
        assert "test_latency" in result.output
        assert "latency_ms" in result.output
        assert "test_status" not in result.output

    def test_show_directory(self, runner: CliRunner, api_dir: Path) -> None:
        """Test: A directory shows every snapshot in it."""
        result = runner.invoke(cli, ["show", str(api_dir)])

        assert result.exit_code == 0
        assert "test_latency" in result.output
        assert "test_status" in result.output

    def test_show_malformed_snapshot(self, runner: CliRunner, snapshot_root: Path) -> None:
        """Test: Malformed snapshots are shown raw with the parse error."""
        path = snapshot_root / "tests" / "__snapshot_predicates__" / "test_bad" / "test_broken.json"

        result = runner.invoke(cli, ["show", str(path)])

        assert result.exit_code == 0
        assert "Invalid snapshot format" in result.output
        assert "{oops" in result.output


class TestCheckCommand:
    """Test the check command."""

    def test_valid_directory(self, runner: CliRunner, api_dir: Path) -> None:
        """Test: Valid snapshots pass the check."""
        result = runner.invoke(cli, ["check", str(api_dir)])

        assert result.exit_code == 0
        assert "2 snapshots OK" in result.output

    def test_malformed_snapshot_fails(self, runner: CliRunner, snapshot_root: Path) -> None:
        """Test: One malformed snapshot fails the check."""
        snapshots = snapshot_root / "tests" / "__snapshot_predicates__"

        result = runner.invoke(cli, ["check", str(snapshots / "test_api"), str(snapshots / "test_bad")])

        assert result.exit_code == 1
        assert "test_broken.json" in result.output
        assert "1 of 3 snapshots are malformed" in result.output

    def test_unreadable_file_exits_2(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test: Snapshot files that cannot be decoded exit with status 2."""
        path = tmp_path / "broken.json"
        path.write_bytes(b"\xff\xfe\x00")

        result = runner.invoke(cli, ["check", str(path)])

        assert result.exit_code == 2
        assert "Cannot read snapshot file" in result.output
