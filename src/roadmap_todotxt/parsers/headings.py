"""
Heading hierarchy tracking.

The roadmap's ``##``/``###``/... headings form the section path that becomes
each task's ``src:+`` tag. The tracker is an immutable value: every heading
produces a new HeadingState, so parsing stays a fold over the lines.
"""

import re
from dataclasses import dataclass, replace
from typing import Optional, Tuple

DEFAULT_DEFINITIONS_HEADING = "Status Emojis (MUST)"
DEFINITIONS_LEVEL = 3

HEADING_LINE = re.compile(r"^(#+)\s*(.*)")
HEADING_PREFIX = re.compile(r"^(Phase|Task|Subtask)\s*\d+(\.\d+)*:?\s*")
HEADING_NOISE = re.compile(r"[\s&]+")


@dataclass(frozen=True)
class HeadingState:
    """Current section path and whether task parsing is suspended."""

    stack: Tuple[str, ...] = ()
    skipping: bool = False

    @property
    def source_tag(self) -> str:
        return "_".join(self.stack)

    @property
    def depth(self) -> int:
        return len(self.stack)


def parse_heading_line(stripped: str) -> Optional[Tuple[int, str]]:
    """Return (level, text) or None if the stripped line is not a heading."""
    m = HEADING_LINE.match(stripped)
    if not m:
        return None
    return len(m.group(1)), m.group(2).strip()


def sanitize_heading(text: str) -> str:
    """
    Turn heading text into a source tag segment.

    "Task 3.2: Auth & Sessions" -> "AuthSessions"
    """
    return HEADING_NOISE.sub("", HEADING_PREFIX.sub("", text))


def advance_heading(
    state: HeadingState,
    level: int,
    text: str,
    definitions_heading: str = DEFAULT_DEFINITIONS_HEADING,
) -> HeadingState:
    """
    Apply one heading to the hierarchy.

    A level-3 definitions heading (the status legend at the top of the
    roadmap) starts a skip region that lasts until the next heading of
    level <= 2.
    Only headings of level >= 2 take part in the section path; a level-N
    heading keeps the first N-2 entries and pushes its own sanitized text.
    """
    is_definitions = level == DEFINITIONS_LEVEL and text.startswith(definitions_heading)
    skipping = state.skipping
    if is_definitions:
        skipping = True
    elif skipping and level <= 2:
        skipping = False

    if skipping or level < 2:
        return replace(state, skipping=skipping)

    stack = state.stack[: level - 2]
    segment = sanitize_heading(text)
    if segment:
        stack = stack + (segment,)
    return HeadingState(stack=stack, skipping=skipping)
