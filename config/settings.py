"""Configuration settings loaded from environment variables."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


UpdateMode = Literal["none", "all", "new"]


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Snapshot settings loaded from environment variables."""

    # Snapshot update behaviour
    snapshot_update_mode: UpdateMode = Field(
        default="none",
        description="Global update mode: none, all (overwrite) or new (create missing)",
    )
    snapshot_dir_name: str = Field(
        default="__snapshot_predicates__",
        min_length=1,
        description="Directory created next to each test file to hold its snapshots",
    )

    # Failure diagnostics
    snapshot_expand_diff: bool = Field(
        default=False,
        description="Show the full serialized values in failure diffs",
    )
    snapshot_report_all_fields: bool = Field(
        default=False,
        description="Keep scanning after the first failing field to report every mismatch",
    )
    diff_context_lines: int = Field(
        default=3,
        ge=0,
        description="Unchanged lines shown around each diff hunk",
    )

    log_level: str = Field(default="INFO", description="Logging level")

    model_config = {"extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance loaded from environment."""
    return Settings(
        snapshot_update_mode=os.getenv("SNAPSHOT_UPDATE_MODE", "none"),  # type: ignore[arg-type]
        snapshot_dir_name=os.getenv("SNAPSHOT_DIR_NAME", "__snapshot_predicates__"),
        snapshot_expand_diff=_env_flag("SNAPSHOT_EXPAND_DIFF"),
        snapshot_report_all_fields=_env_flag("SNAPSHOT_REPORT_ALL_FIELDS"),
        diff_context_lines=int(os.getenv("SNAPSHOT_DIFF_CONTEXT_LINES", "3")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
