from .dates import expand_year, is_valid_mmddyy, mmddyy_to_iso
from .formatting import format_task_line, render_metadata

__all__ = [
    "expand_year",
    "is_valid_mmddyy",
    "mmddyy_to_iso",
    "format_task_line",
    "render_metadata",
]
