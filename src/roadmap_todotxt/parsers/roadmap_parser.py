"""
Parser for Markdown roadmap files.

Main API:
    parse_content(content)  -> ParseResult
    parse_file(path)        -> ParseResult
    parse_task_line(stripped, state, insertion_order) -> (Task | None, warnings)

Features:
- Single pass over the document; headings advance an immutable HeadingState
- Status symbol recognition (lines with an unknown symbol are not tasks)
- Mandatory [ PREFIX-N[.N[.N]] ] IDs; lines without one are dropped
- Rank, due date, done date and timestamp extraction (see parsers.tags)
- Every recoverable problem becomes a Diagnostic and a logged warning
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

from roadmap_todotxt.models.task import Diagnostic, ParseResult, Task, status_for_symbol
from roadmap_todotxt.parsers.headings import (
    DEFAULT_DEFINITIONS_HEADING,
    HeadingState,
    advance_heading,
    parse_heading_line,
)
from roadmap_todotxt.parsers.tags import (
    extract_done_date,
    extract_due_date,
    extract_rank,
    extract_task_id,
    extract_timestamp,
)

log = logging.getLogger(__name__)

THEMATIC_BREAK = re.compile(r"^-{3,}$")


def parse_task_line(
    stripped: str,
    state: HeadingState,
    insertion_order: int,
    line_number: int = 0,
) -> Tuple[Optional[Task], List[str]]:
    """
    Parse a single ``- <symbol> ...`` line.

    Args:
        stripped: The trimmed line, starting with "- "
        state: Heading hierarchy in effect for this line
        insertion_order: Value to stamp on the task if one is produced
        line_number: 1-based source line (diagnostics only)

    Returns:
        (task, warnings). task is None when the line is not a task or was
        rejected; a rejected line always carries at least one warning.
    """
    parts = stripped[2:].strip().split(None, 1)
    if len(parts) < 2:
        return None, []

    symbol, rest = parts
    status = status_for_symbol(symbol)
    if status is None:
        return None, []

    task_id, text, warnings = extract_task_id(rest)
    if task_id is None:
        return None, warnings

    rank, text, found = extract_rank(text)
    warnings.extend(found)
    due_date, text, found = extract_due_date(text)
    warnings.extend(found)
    done_date, text, found = extract_done_date(text, status)
    warnings.extend(found)
    timestamp, text, found = extract_timestamp(text, status)
    warnings.extend(found)

    task = Task(
        id=task_id,
        description=text.strip(),
        status=status,
        insertion_order=insertion_order,
        rank=rank,
        due_date=due_date,
        done_date=done_date,
        timestamp=timestamp,
        depth=state.depth,
        source_tag=state.source_tag,
        line_number=line_number,
    )
    return task, warnings


def parse_content(
    content: str,
    definitions_heading: str = DEFAULT_DEFINITIONS_HEADING,
) -> ParseResult:
    """
    Parse roadmap markdown into tasks, in document order.

    Args:
        content: Full roadmap text
        definitions_heading: Heading text that opens the status legend,
            whose list items are never parsed as tasks

    Returns:
        ParseResult with tasks and diagnostics
    """
    state = HeadingState()
    tasks: List[Task] = []
    diagnostics: List[Diagnostic] = []

    def _report(line_number: int, message: str, stripped: str) -> None:
        diagnostics.append(Diagnostic(line_number, message))
        log.warning("Line %d: %s. Line: %r", line_number, message, stripped)

    # Only "\n" ends a line; a trailing "\r" goes with strip()
    for line_number, line in enumerate(content.split("\n"), start=1):
        stripped = line.strip()
        if not stripped:
            continue

        heading = parse_heading_line(stripped)
        if heading:
            level, text = heading
            state = advance_heading(state, level, text, definitions_heading)
            continue

        if state.skipping:
            continue

        if stripped.startswith("- "):
            task, warnings = parse_task_line(stripped, state, len(tasks), line_number)
            for message in warnings:
                _report(line_number, message, stripped)
            if task:
                log.debug("Line %d: parsed task %s - %s", task.line_number, task.id, task.description)
                tasks.append(task)

        elif stripped.startswith("-") and not THEMATIC_BREAK.match(stripped.replace(" ", "")):
            _report(line_number, "Line does not match task syntax", stripped)

    log.info("Total tasks parsed: %d", len(tasks))
    return ParseResult(tasks=tasks, diagnostics=diagnostics)


def parse_file(
    file_path: Path,
    definitions_heading: str = DEFAULT_DEFINITIONS_HEADING,
) -> ParseResult:
    """Parse a roadmap file."""
    return parse_content(file_path.read_text(encoding="utf-8"), definitions_heading)
