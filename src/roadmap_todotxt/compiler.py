"""
Roadmap -> todo.txt generation.

Pipeline:
1. Check the run mode (manual-only refuses automated invocations)
2. Read the whole roadmap
3. Parse, sort, allocate priorities (RWS only), format
4. Write the complete output once, replacing any previous content

compile_roadmap() is the pure part; generate_todotxt() adds the gate and I/O.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Sequence

from roadmap_todotxt.config import CompilerConfig, RunMode
from roadmap_todotxt.models.task import Diagnostic, Task
from roadmap_todotxt.parsers.headings import DEFAULT_DEFINITIONS_HEADING
from roadmap_todotxt.parsers.roadmap_parser import parse_content
from roadmap_todotxt.sorting.priority import allocate_priorities
from roadmap_todotxt.sorting.sorter import SortMode, sort_tasks
from roadmap_todotxt.utils.formatting import format_task_line

log = logging.getLogger(__name__)


class CompileError(Exception):
    """The roadmap could not be read or the output could not be written."""


@dataclass
class CompileResult:
    tasks: List[Task]
    lines: List[str]
    diagnostics: List[Diagnostic]
    text: str


def compile_roadmap(
    content: str,
    sort_mode: SortMode = SortMode.RWS,
    definitions_heading: str = DEFAULT_DEFINITIONS_HEADING,
    line_ending: str = os.linesep,
) -> CompileResult:
    """
    Turn roadmap markdown into todo.txt text.

    Args:
        content: Full roadmap document
        sort_mode: Output ordering
        definitions_heading: Heading that opens the status legend
        line_ending: Separator between output lines (host native by default)

    Returns:
        CompileResult with the ordered tasks, their lines and the joined text
    """
    parsed = parse_content(content, definitions_heading)
    ordered = sort_tasks(parsed.tasks, sort_mode)

    if sort_mode is SortMode.RWS:
        prioritized = allocate_priorities(ordered)
    else:
        prioritized = [(task, None) for task in ordered]

    lines = [format_task_line(task, letter) for task, letter in prioritized]
    log.info("Total todo.txt lines: %d", len(lines))

    return CompileResult(
        tasks=ordered,
        lines=lines,
        diagnostics=parsed.diagnostics,
        text=line_ending.join(lines),
    )


def should_generate(run_mode: RunMode, invocation_args: Sequence[str]) -> bool:
    """
    Decide whether this invocation may regenerate the output.

    Under manual-only, automated triggers (git hooks, the watcher) call the
    tool without arguments; a person running it directly passes at least
    one. Every other mode always proceeds.
    """
    if run_mode is not RunMode.MANUAL:
        return True
    if invocation_args:
        log.info("Run mode is %s and the tool was invoked directly. Proceeding", run_mode.value)
        return True
    log.info("Run mode is %s. Skipping automatic generation", run_mode.value)
    return False


def generate_todotxt(
    config: CompilerConfig,
    invocation_args: Sequence[str] = (),
    dry_run: bool = False,
) -> Optional[CompileResult]:
    """
    Regenerate the todo.txt file from the roadmap.

    Args:
        config: Paths and modes
        invocation_args: Command line arguments of this invocation (without
            the program name); only consulted under manual-only
        dry_run: Compile but do not write the output file

    Returns:
        The CompileResult, or None if the run mode refused to run

    Raises:
        CompileError: if the roadmap cannot be read or the output written
    """
    if not should_generate(config.run_mode, invocation_args):
        return None

    log.info(
        "Starting todo.txt generation (run mode: %s, sort mode: %s)",
        config.run_mode.value,
        config.sort_mode.value,
    )

    log.info("Reading roadmap: %s", config.roadmap_path)
    try:
        content = config.roadmap_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CompileError(f"Cannot read roadmap {config.roadmap_path}: {e}") from e

    result = compile_roadmap(content, config.sort_mode, config.definitions_heading)

    if dry_run:
        log.info("Dry run: not writing %s", config.output_path)
        return result

    log.info("Writing %d lines to %s", len(result.lines), config.output_path)
    try:
        config.output_path.write_text(result.text, encoding="utf-8", newline="")
    except OSError as e:
        raise CompileError(f"Cannot write {config.output_path}: {e}") from e

    log.info("%s generated successfully", config.output_path)
    return result
