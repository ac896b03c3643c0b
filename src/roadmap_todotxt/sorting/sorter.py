"""
Task ordering strategies.

Every mode moves completed tasks to the end in their original relative order
and sorts only the unfinished ones. Modes are built from small comparators
(negative / zero / positive, like ``cmp``) chained lexicographically.

RWS ("Resume Work Session") is the default and the one the others lean on:
    1. ranked tasks before unranked ones
    2. rank letter
    3. status priority group
    4. depth, deeper first, when both tasks are in progress
    5. insertion order
"""

import logging
from enum import Enum
from functools import cmp_to_key
from typing import Callable, Dict, List, Sequence

from roadmap_todotxt.models.task import IN_PROGRESS_GROUP, Task

log = logging.getLogger(__name__)

Comparator = Callable[[Task, Task], int]


class SortMode(str, Enum):
    RWS = "RWS"
    ALPHA = "ALPHA"
    STATUS = "STATUS"
    SOURCE = "SOURCE"


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def chain(*comparators: Comparator) -> Comparator:
    """Combine comparators; the first non-zero result decides."""
    def compare(a: Task, b: Task) -> int:
        for comparator in comparators:
            result = comparator(a, b)
            if result:
                return result
        return 0
    return compare


# ---------------------------------------------------------------------------
# Single-criterion comparators
# ---------------------------------------------------------------------------

def by_ranked_first(a: Task, b: Task) -> int:
    return _cmp(a.rank is None, b.rank is None)


def by_rank_letter(a: Task, b: Task) -> int:
    if a.rank is None or b.rank is None:
        return 0
    return _cmp(a.rank, b.rank)


def by_priority_group(a: Task, b: Task) -> int:
    return _cmp(a.priority_group, b.priority_group)


def by_depth_when_in_progress(a: Task, b: Task) -> int:
    if a.priority_group == IN_PROGRESS_GROUP and b.priority_group == IN_PROGRESS_GROUP:
        return _cmp(b.depth, a.depth)
    return 0


def by_insertion_order(a: Task, b: Task) -> int:
    return _cmp(a.insertion_order, b.insertion_order)


def by_description(a: Task, b: Task) -> int:
    return _cmp(a.description, b.description)


def by_source_tag(a: Task, b: Task) -> int:
    return _cmp(a.source_tag or "", b.source_tag or "")


compare_rws = chain(
    by_ranked_first,
    by_rank_letter,
    by_priority_group,
    by_depth_when_in_progress,
    by_insertion_order,
)

COMPARATORS: Dict[SortMode, Comparator] = {
    SortMode.RWS: compare_rws,
    SortMode.ALPHA: chain(by_description, by_insertion_order),
    SortMode.STATUS: chain(by_priority_group, by_insertion_order),
    SortMode.SOURCE: chain(by_source_tag, compare_rws),
}


def sort_tasks(tasks: Sequence[Task], mode: SortMode = SortMode.RWS) -> List[Task]:
    """
    Order tasks for output.

    Args:
        tasks: Parsed tasks in document order
        mode: Sort strategy

    Returns:
        New list: sorted unfinished tasks followed by completed tasks in
        their original relative order
    """
    log.info("Sorting tasks using mode: %s", mode.value)
    open_tasks = [t for t in tasks if not t.is_completed]
    completed = [t for t in tasks if t.is_completed]
    return sorted(open_tasks, key=cmp_to_key(COMPARATORS[mode])) + completed
