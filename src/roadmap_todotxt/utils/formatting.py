"""
Canonical todo.txt line rendering.

This module is the single source of truth for how a task is written to the
output list:

    [x |(P) ]@<status> <description>[ - src:+<tag>][ - due:<date>][ - done:<date>][ - ts:<stamp>]

Metadata always appears in that order, joined by " - ".
"""

import re
from typing import List, Optional

from roadmap_todotxt.models.task import Task
from roadmap_todotxt.utils.dates import mmddyy_to_iso

METADATA_SEPARATOR = " - "
TIMESTAMP_PIPE = re.compile(r"\s*\|\s*")


def render_metadata(task: Task) -> List[str]:
    """
    Render the metadata tags present on a task, in canonical order.

    Dates that cannot be converted are left out; they were already
    reported when the roadmap was parsed.
    """
    metadata = []

    if task.source_tag:
        metadata.append(f"src:+{task.source_tag}")

    due = mmddyy_to_iso(task.due_date)
    if due:
        metadata.append(f"due:{due}")

    if task.is_completed:
        done = mmddyy_to_iso(task.done_date)
        if done:
            metadata.append(f"done:{done}")

    if task.timestamp:
        metadata.append(f"ts:{TIMESTAMP_PIPE.sub('_', task.timestamp)}")

    return metadata


def format_task_line(task: Task, priority: Optional[str] = None) -> str:
    """
    Format a task as a todo.txt line.

    Args:
        task: Parsed task
        priority: Priority letter from the allocator, if any. Ignored for
            completed tasks, which take the "x " marker instead.

    Returns:
        The output line (no line terminator)
    """
    if task.is_completed:
        line = "x "
    elif priority:
        line = f"({priority}) "
    else:
        line = ""

    line += f"@{task.status.value} {task.description}"

    metadata = render_metadata(task)
    if metadata:
        line += METADATA_SEPARATOR + METADATA_SEPARATOR.join(metadata)

    return line
