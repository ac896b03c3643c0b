from .task import (
    Diagnostic,
    ParseResult,
    PRIORITY_GROUPS,
    STATUS_SYMBOLS,
    Task,
    TaskStatus,
    status_for_symbol,
)

__all__ = [
    "Diagnostic",
    "ParseResult",
    "PRIORITY_GROUPS",
    "STATUS_SYMBOLS",
    "Task",
    "TaskStatus",
    "status_for_symbol",
]
