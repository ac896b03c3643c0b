from .headings import DEFAULT_DEFINITIONS_HEADING, HeadingState, advance_heading, sanitize_heading
from .roadmap_parser import parse_content, parse_file, parse_task_line

__all__ = [
    "DEFAULT_DEFINITIONS_HEADING",
    "HeadingState",
    "advance_heading",
    "sanitize_heading",
    "parse_content",
    "parse_file",
    "parse_task_line",
]
