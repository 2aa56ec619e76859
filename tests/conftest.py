"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

tests_dir = Path(__file__).parent
project_root = tests_dir.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(tests_dir))

os.environ.setdefault("SNAPSHOT_UPDATE_MODE", "none")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from factories import make_key  # noqa: E402
from models.schemas import SnapshotKey  # noqa: E402


@pytest.fixture
def key() -> SnapshotKey:
    """Key used by the factory defaults."""
    return make_key()


@pytest.fixture
def latency_predicate_rules() -> dict[str, Callable[[Any, Any], bool]]:
    """Match/update pair: accept no regression, ratchet on a 10% improvement."""
    return {
        "match": lambda old, new: new <= old,
        "update": lambda old, new: new / old < 0.9,
    }
