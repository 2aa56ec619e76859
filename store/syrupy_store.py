"""Snapshot store on top of syrupy's single-file JSON extension."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from syrupy.exceptions import SnapshotDoesNotExist
from syrupy.extensions.json import JSONSnapshotExtension
from syrupy.location import PyTestLocation

from config.settings import get_settings
from models.schemas import SnapshotKey
from store.base import SnapshotStore, StoreError

logger = logging.getLogger(__name__)

SNAPSHOT_SUFFIX = ".json"


class PredicateSnapshotExtension(JSONSnapshotExtension):
    """
    One ``.json`` file per snapshot holding the serialized reference text.

    Files for ``tests/test_api.py::TestLatency::test_p95`` live in
    ``tests/<SNAPSHOT_DIR_NAME>/test_api/TestLatency.test_p95.json``. The
    directory differs from syrupy's ``__snapshots__`` so these files are
    never claimed by the ``snapshot`` fixture's own extensions.
    """

    @classmethod
    def dirname(cls, *, test_location: PyTestLocation) -> str:
        test_dir = Path(test_location.filepath).parent
        return str(test_dir / get_settings().snapshot_dir_name / test_location.basename)


class SyrupySnapshotStore(SnapshotStore):
    """
    Store that reads and writes references through a syrupy extension.

    Keys are handed out by ``key_for``, which remembers the syrupy test
    location behind each key. Writes are kept in memory until ``flush``.
    """

    def __init__(self, extension: PredicateSnapshotExtension | None = None) -> None:
        super().__init__()
        self.extension = extension or PredicateSnapshotExtension()
        self._locations: dict[SnapshotKey, tuple[PyTestLocation, int]] = {}
        self._read: dict[SnapshotKey, str | None] = {}
        self._pending: dict[SnapshotKey, str] = {}

    @property
    def name(self) -> str:
        return "syrupy"

    def key_for(self, test_location: PyTestLocation, index: int, test_path: str) -> SnapshotKey:
        """Key for the ``index``-th snapshot taken by the test at ``test_location``."""
        test_name = self.extension.get_snapshot_name(test_location=test_location, index=index)
        key = SnapshotKey(test_path=test_path, test_name=test_name)
        self._locations[key] = (test_location, index)
        return key

    def snapshot_path(self, key: SnapshotKey) -> Path:
        test_location, index = self._location(key)
        return Path(self.extension.get_location(test_location=test_location, index=index))

    def _location(self, key: SnapshotKey) -> tuple[PyTestLocation, int]:
        try:
            return self._locations[key]
        except KeyError:
            raise StoreError(f"No test location registered for {key}", self.name) from None

    def get(self, key: SnapshotKey) -> str | None:
        if key in self._pending:
            return self._pending[key]
        if key not in self._read:
            self._read[key] = self._read_snapshot(key)
        return self._read[key]

    def _read_snapshot(self, key: SnapshotKey) -> str | None:
        test_location, index = self._location(key)
        try:
            text = self.extension.read_snapshot(
                test_location=test_location, index=index, session_id=str(id(self))
            )
        except SnapshotDoesNotExist:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(f"Cannot read snapshot for {key}: {e}", self.name) from e
        logger.debug("Loaded snapshot %s", key)
        return text

    def _write(self, key: SnapshotKey, serialized: str) -> None:
        self._location(key)
        self._pending[key] = serialized

    def keys(self) -> Iterator[SnapshotKey]:
        yield from self._locations

    def _persist(self) -> None:
        for key in sorted(self._pending, key=str):
            test_location, index = self._locations[key]
            path = self.snapshot_path(key)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                self.extension.write_snapshot(
                    snapshot_location=str(path),
                    snapshots=[(self._pending[key], test_location, index)],
                )
            except OSError as e:
                raise StoreError(f"Cannot write snapshot file {path}: {e}", self.name) from e
            self._read[key] = self._pending[key]
            logger.info("Wrote snapshot %s to %s", key, path)
        self._pending.clear()


def load_snapshot_file(path: Path, store_name: str = "syrupy") -> str:
    """Raw reference text of one snapshot file."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StoreError(f"Cannot read snapshot file {path}: {e}", store_name) from e


def discover_snapshot_files(root: Path, dir_name: str | None = None) -> list[Path]:
    """Find every snapshot file below ``root``, grouped under its test module directory."""
    dir_name = dir_name or get_settings().snapshot_dir_name
    return sorted(
        p for p in root.rglob(f"{dir_name}/*/*{SNAPSHOT_SUFFIX}") if p.is_file()
    )
