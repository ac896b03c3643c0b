"""
Inline metadata extractors for roadmap task lines.

Each extractor is a pure function returning ``(value, remaining_text,
warnings)``. The task line parser applies them in a fixed order:
ID -> rank -> due date -> done date -> timestamp. A tag type may appear at
most once; extra occurrences raise a warning, the first one wins and every
occurrence is stripped from the text.

Roadmap syntax:
    - 🔄 [ UI-3.2 ] Build login form • [ rnk:A ] • [ due:04.22.25 ]
    - ✅ [ UI-1 ] Fix bug • [ done:04.10.25 ] 04.10.25 | 10:00 AM PDT
    - ⏸️ [ UI-2 ] Refactor [Paused: SWS - 04.11.25 | 3:15 PM PDT]
"""

import re
from typing import List, Optional, Pattern, Tuple

from roadmap_todotxt.models.task import TaskStatus
from roadmap_todotxt.utils.dates import is_valid_mmddyy

ExtractResult = Tuple[Optional[str], str, List[str]]

MAX_ID_SEGMENTS = 3

# A bracketed ID with the required interior whitespace: "[ UI-3.2.1 ]".
# The capture is deliberately loose; validate_task_id does the strict checks.
ID_GROUP = re.compile(r"\[\s+([A-Z0-9]+-[^\s\]]*)\s+\]")
ID_PREFIX = re.compile(r"^[A-Z0-9]{3,6}$")
ID_SEGMENT = re.compile(r"^[0-9]+$")

RANK_TAG = re.compile(r"\s*•\s*\[\s*rnk:([^\]]*?)\s*\]")
DUE_TAG = re.compile(r"\s*•\s*\[\s*due:([^\]]*?)\s*\]")
DONE_TAG = re.compile(r"\s*•\s*\[\s*done:([^\]]*?)\s*\]")
RANK_VALUE = re.compile(r"^[A-Z]$")

_CLOCK = r"[0-9]{2}\.[0-9]{2}\.[0-9]{2}\s*\|\s*[0-9]{1,2}:[0-9]{2}\s*(?:AM|PM)\s*[A-Z]{3,}"
COMPLETION_TIMESTAMP = re.compile(rf"({_CLOCK})\s*$")
PAUSED_TIMESTAMP = re.compile(rf"(\[Paused:\s*SWS\s*-\s*{_CLOCK}\])\s*$")


def _strip_span(text: str, start: int, end: int) -> str:
    """Remove text[start:end], leaving a single space at the seam."""
    return f"{text[:start].rstrip()} {text[end:].lstrip()}".strip()


# ---------------------------------------------------------------------------
# Task ID
# ---------------------------------------------------------------------------

def validate_task_id(task_id: str) -> Optional[str]:
    """
    Check a captured task ID against the PREFIX-N[.N[.N]] rules.

    Returns:
        None if the ID is valid, otherwise a warning message
    """
    parts = task_id.split("-")
    if len(parts) != 2:
        return f"Task ID prefix/number split invalid: {task_id}"

    prefix, number = parts
    if not ID_PREFIX.match(prefix):
        return f"Task ID prefix must be 3-6 uppercase letters or digits: {task_id}"

    segments = number.split(".")
    if len(segments) > MAX_ID_SEGMENTS:
        return f"Task ID too deep (max {MAX_ID_SEGMENTS} levels): {task_id}"
    if not all(ID_SEGMENT.match(seg) for seg in segments):
        return f"Task ID contains non-integer segment: {task_id}"

    return None


def extract_task_id(text: str) -> ExtractResult:
    """
    Extract the mandatory ``[ PREFIX-N[.N[.N]] ]`` ID.

    A None value means the line must be discarded; the warning explains why.
    """
    m = ID_GROUP.search(text)
    if not m:
        return None, text, [
            "Missing or malformed task ID (must match '[ PREFIX-Num[.SubNum[.SubSubNum]] ]' "
            "with spaces inside the brackets)"
        ]

    task_id = m.group(1)
    problem = validate_task_id(task_id)
    if problem:
        return None, text, [problem]

    return task_id, _strip_span(text, m.start(), m.end()), []


# ---------------------------------------------------------------------------
# Bullet tags: • [ name:value ]
# ---------------------------------------------------------------------------

def _extract_tag(text: str, pattern: Pattern, label: str) -> ExtractResult:
    """Find every occurrence of a bullet tag, keep the first, strip them all."""
    matches = list(pattern.finditer(text))
    if not matches:
        return None, text, []

    value = matches[0].group(1).strip()
    warnings = []
    if len(matches) > 1:
        warnings.append(f"Multiple {label} tags found. Using first: {value}")

    return value, pattern.sub("", text).strip(), warnings


def extract_rank(text: str) -> ExtractResult:
    """Extract ``• [ rnk:X ]`` where X is a single uppercase letter."""
    value, remaining, warnings = _extract_tag(text, RANK_TAG, "rank")
    if value is not None and not RANK_VALUE.match(value):
        warnings.append(f"Malformed rank tag: {value}. Expected a single uppercase letter")
        value = None
    return value, remaining, warnings


def extract_due_date(text: str) -> ExtractResult:
    """Extract ``• [ due:MM.DD.YY ]``; malformed dates are dropped."""
    value, remaining, warnings = _extract_tag(text, DUE_TAG, "due date")
    if value is not None and not is_valid_mmddyy(value):
        warnings.append(f"Malformed due date format: {value}. Expected MM.DD.YY")
        value = None
    return value, remaining, warnings


def extract_done_date(text: str, status: TaskStatus) -> ExtractResult:
    """
    Extract ``• [ done:MM.DD.YY ]`` and cross-check it against the status.

    A done date on an unfinished task is kept but reported. A completed task
    without any done tag is reported too; neither case drops the task.
    """
    value, remaining, warnings = _extract_tag(text, DONE_TAG, "done date")

    if value is None:
        if status is TaskStatus.COMPLETED:
            warnings.append("Completed task is missing the required '• [ done:MM.DD.YY ]' tag")
        return None, remaining, warnings

    if not is_valid_mmddyy(value):
        warnings.append(f"Malformed done date format: {value}. Expected MM.DD.YY")
        return None, remaining, warnings

    if status is not TaskStatus.COMPLETED:
        warnings.append(
            f"Found done date tag [done:{value}] on a non-completed task (status: {status.value})"
        )

    return value, remaining, warnings


# ---------------------------------------------------------------------------
# Trailing timestamp
# ---------------------------------------------------------------------------

def extract_timestamp(text: str, status: TaskStatus) -> ExtractResult:
    """
    Extract the trailing timestamp allowed for the task's status.

    Completed tasks may end in ``MM.DD.YY | H:MM AM TZ``; paused tasks in
    ``[Paused: SWS - MM.DD.YY | H:MM AM TZ]``. Anything else is left alone.
    """
    if status is TaskStatus.COMPLETED:
        pattern = COMPLETION_TIMESTAMP
    elif status is TaskStatus.PAUSED:
        pattern = PAUSED_TIMESTAMP
    else:
        return None, text, []

    m = pattern.search(text)
    if not m:
        return None, text, []
    return m.group(1).strip(), text[:m.start()].strip(), []
