"""
Core task data models.

A Task is created once per valid roadmap line and never mutated afterwards.
Priority letters are assigned after sorting and travel alongside the task
(see sorting.priority) rather than on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class TaskStatus(str, Enum):
    PAUSED = "paused"
    TESTING = "testing"
    IN_PROGRESS = "inprogress"
    PENDING = "pending"
    BLOCKED = "blocked"
    PENDING_TESTING = "pendingtesting"
    COMPLETED = "completed"
    REWORK = "rework"

    @property
    def priority_group(self) -> int:
        return PRIORITY_GROUPS[self]


# Lower group = picked up sooner. Rework is worked like in-progress.
PRIORITY_GROUPS: Dict[TaskStatus, int] = {
    TaskStatus.PAUSED: 1,
    TaskStatus.TESTING: 2,
    TaskStatus.IN_PROGRESS: 3,
    TaskStatus.REWORK: 3,
    TaskStatus.PENDING: 4,
    TaskStatus.BLOCKED: 5,
    TaskStatus.PENDING_TESTING: 99,
    TaskStatus.COMPLETED: 100,
}

IN_PROGRESS_GROUP = PRIORITY_GROUPS[TaskStatus.IN_PROGRESS]

# Roadmap status symbol -> status. Keys carry no U+FE0F variation selector;
# lookups strip it from the token first (see status_for_symbol).
STATUS_SYMBOLS: Dict[str, TaskStatus] = {
    "\u23f8": TaskStatus.PAUSED,            # ⏸️
    "\U0001f9ea": TaskStatus.TESTING,       # 🧪
    "\U0001f504": TaskStatus.IN_PROGRESS,   # 🔄
    "\u23f3": TaskStatus.PENDING,           # ⏳
    "\u274c": TaskStatus.BLOCKED,           # ❌
    "\U0001f52c": TaskStatus.PENDING_TESTING,  # 🔬
    "\u2705": TaskStatus.COMPLETED,         # ✅
    "\U0001f527": TaskStatus.REWORK,        # 🔧
}


def status_for_symbol(token: str) -> Optional[TaskStatus]:
    """Return the status for a roadmap status symbol, or None if unknown."""
    return STATUS_SYMBOLS.get(token.replace("\ufe0f", ""))


@dataclass(frozen=True)
class Task:
    """
    A single task parsed from the roadmap.

    ``insertion_order`` is assigned at parse time and is the only field that
    guarantees reproducible output when every other sort criterion ties.
    """

    id: str
    description: str
    status: TaskStatus
    insertion_order: int
    rank: Optional[str] = None
    due_date: Optional[str] = None
    done_date: Optional[str] = None
    timestamp: Optional[str] = None
    depth: int = 0
    source_tag: str = ""
    line_number: int = 0

    @property
    def priority_group(self) -> int:
        return self.status.priority_group

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem found on one roadmap line."""

    line_number: int
    message: str

    def __str__(self) -> str:
        return f"Line {self.line_number}: {self.message}"


@dataclass
class ParseResult:
    """Tasks in document order plus every warning raised while parsing."""

    tasks: List[Task]
    diagnostics: List[Diagnostic]
