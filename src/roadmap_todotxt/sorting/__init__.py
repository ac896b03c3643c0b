from .priority import allocate_priorities, seed_letter
from .sorter import SortMode, compare_rws, sort_tasks

__all__ = [
    "SortMode",
    "allocate_priorities",
    "compare_rws",
    "seed_letter",
    "sort_tasks",
]
