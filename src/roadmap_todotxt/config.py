"""
Compiler configuration.

Settings come from environment variables (see ENV_VARS) and can be
overridden from the command line. CompilerConfig validates both.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from roadmap_todotxt.parsers.headings import DEFAULT_DEFINITIONS_HEADING
from roadmap_todotxt.sorting.sorter import SortMode


class RunMode(str, Enum):
    """Which triggers are allowed to regenerate the output file."""

    GIT = "git-triggered"
    WATCHER = "watcher-triggered"
    MANUAL = "manual-only"


# Legacy LIST_GENERATION spellings
RUN_MODE_ALIASES: Dict[str, RunMode] = {
    "GIT": RunMode.GIT,
    "FILE_SAVE": RunMode.WATCHER,
    "MANUAL": RunMode.MANUAL,
}

# CompilerConfig field -> environment variable
ENV_VARS: Dict[str, str] = {
    "roadmap_path": "ROADMAP_PATH",
    "output_path": "TODOTXT_PATH",
    "run_mode": "LIST_GENERATION",
    "sort_mode": "SORT_MODE",
    "definitions_heading": "DEFINITIONS_HEADING",
    "poll_interval": "POLL_INTERVAL",
}


class CompilerConfig(BaseModel):
    roadmap_path: Path = Path("md-docs/ROADMAP_TASKS.md")
    output_path: Path = Path("md-docs/todotasks.txt")
    run_mode: RunMode = RunMode.GIT
    sort_mode: SortMode = SortMode.RWS
    definitions_heading: str = Field(default=DEFAULT_DEFINITIONS_HEADING, min_length=1)
    poll_interval: float = Field(default=0.5, gt=0)

    @field_validator("run_mode", mode="before")
    @classmethod
    def _normalize_run_mode(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return RUN_MODE_ALIASES.get(value.upper(), value.lower())
        return value

    @field_validator("sort_mode", mode="before")
    @classmethod
    def _normalize_sort_mode(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides,
    ) -> "CompilerConfig":
        """
        Build a config from environment variables plus explicit overrides.

        Overrides whose value is None are ignored, so argparse defaults can
        be passed straight through.

        Raises:
            pydantic.ValidationError: if any value is invalid
        """
        environ = os.environ if environ is None else environ
        values = {
            field: environ[var]
            for field, var in ENV_VARS.items()
            if environ.get(var)
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
