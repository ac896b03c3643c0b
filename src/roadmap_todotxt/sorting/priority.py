"""
Priority letter allocation for RWS output.

Explicit ranks keep their letters. Unranked tasks get sequential letters
starting right after the highest explicit rank, so an automatic letter can
never equal or precede a hand-assigned one. Once the cursor passes Z the
remaining unranked tasks go out without a priority.
"""

from typing import List, Optional, Sequence, Tuple

from roadmap_todotxt.models.task import Task

FIRST_LETTER = "A"
LAST_LETTER = "Z"


def seed_letter(tasks: Sequence[Task]) -> str:
    """First automatic letter: one past the highest explicit rank, else A."""
    ranks = [t.rank for t in tasks if t.rank]
    if not ranks:
        return FIRST_LETTER
    return chr(ord(max(ranks)) + 1)


def allocate_priorities(sorted_tasks: Sequence[Task]) -> List[Tuple[Task, Optional[str]]]:
    """
    Pair each task with its output priority letter.

    Args:
        sorted_tasks: Tasks already in output order

    Returns:
        (task, letter) pairs in the same order; completed tasks and tasks
        past the end of the alphabet get None
    """
    cursor = ord(seed_letter(sorted_tasks))
    allocated: List[Tuple[Task, Optional[str]]] = []

    for task in sorted_tasks:
        letter = None
        if not task.is_completed:
            if task.rank:
                letter = task.rank
            elif cursor <= ord(LAST_LETTER):
                letter = chr(cursor)
                cursor += 1
        allocated.append((task, letter))

    return allocated
