"""
Roadmap -> todo.txt compiler.

Main API:
    from roadmap_todotxt import compile_roadmap, generate_todotxt, CompilerConfig

    # Compile markdown text
    result = compile_roadmap(Path("ROADMAP_TASKS.md").read_text(), SortMode.RWS)
    print(result.text)

    # Or run the whole read -> compile -> write cycle
    generate_todotxt(CompilerConfig.from_env())
"""

from .compiler import CompileError, CompileResult, compile_roadmap, generate_todotxt, should_generate
from .config import CompilerConfig, RunMode
from .models import Diagnostic, ParseResult, Task, TaskStatus
from .parsers import parse_content, parse_file
from .sorting import SortMode, allocate_priorities, sort_tasks
from .utils import format_task_line, mmddyy_to_iso

__version__ = "0.1.0"
__all__ = [
    # Pipeline
    'compile_roadmap',
    'generate_todotxt',
    'should_generate',
    'CompileError',
    'CompileResult',
    # Configuration
    'CompilerConfig',
    'RunMode',
    'SortMode',
    # Models
    'Diagnostic',
    'ParseResult',
    'Task',
    'TaskStatus',
    # Stages
    'parse_content',
    'parse_file',
    'sort_tasks',
    'allocate_priorities',
    'format_task_line',
    'mmddyy_to_iso',
]
