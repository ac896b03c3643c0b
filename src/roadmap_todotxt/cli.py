#!/usr/bin/env python3
"""
roadmap-todotxt - generate a prioritized todo.txt from a Markdown roadmap

Usage:
    roadmap-todotxt [options] [generate [--dry-run]]
    roadmap-todotxt [options] watch [--interval SECONDS]

Examples:
    roadmap-todotxt                                   Regenerate (what git hooks run)
    roadmap-todotxt generate --dry-run                Print the list, write nothing
    roadmap-todotxt --sort SOURCE generate            Group output by roadmap section
    roadmap-todotxt --run-mode watcher-triggered watch

Every option falls back to its environment variable (ROADMAP_PATH,
TODOTXT_PATH, LIST_GENERATION, SORT_MODE, POLL_INTERVAL) and then to the
built-in default.
"""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from roadmap_todotxt.compiler import CompileError, generate_todotxt
from roadmap_todotxt.config import CompilerConfig, RunMode
from roadmap_todotxt.sorting.sorter import SortMode
from roadmap_todotxt.watcher.roadmap_watcher import RoadmapWatcher

log = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# --- commands ---

def generate_cmd(args, config: CompilerConfig, argv: List[str]) -> int:
    try:
        result = generate_todotxt(config, argv, dry_run=getattr(args, "dry_run", False))
    except CompileError as e:
        log.error("Error generating todo.txt: %s", e)
        return 1

    if result is not None and getattr(args, "dry_run", False):
        print("\n".join(result.lines))
    return 0


def watch_cmd(args, config: CompilerConfig, argv: List[str]) -> int:
    if config.run_mode is RunMode.MANUAL:
        log.warning(
            "Run mode is %s: roadmap changes will not regenerate %s",
            config.run_mode.value,
            config.output_path,
        )

    def _regenerate() -> None:
        # Watcher-triggered runs carry no invocation arguments
        try:
            generate_todotxt(config)
        except CompileError as e:
            log.error("Error generating todo.txt: %s", e)

    watcher = RoadmapWatcher(config.roadmap_path, _regenerate, config.poll_interval)
    watcher.start()
    log.info("Press CTRL+C to stop watching")
    try:
        while watcher.is_running:
            watcher.wait(1.0)
    except KeyboardInterrupt:
        log.info("Interrupted")
    finally:
        watcher.stop()
    return 0


# --- entry point ---

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadmap-todotxt",
        description="Generate a prioritized todo.txt from a Markdown roadmap",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--roadmap", help="Roadmap markdown file (env: ROADMAP_PATH)")
    parser.add_argument("--output", help="todo.txt file to overwrite (env: TODOTXT_PATH)")
    parser.add_argument("--sort", choices=[m.value for m in SortMode],
                        type=str.upper, help="Sort mode (env: SORT_MODE, default: RWS)")
    parser.add_argument("--run-mode", choices=[m.value for m in RunMode],
                        help="Which triggers may regenerate (env: LIST_GENERATION)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    generate_p = subparsers.add_parser("generate", help="Generate the todo.txt once (default)")
    generate_p.add_argument("--dry-run", action="store_true",
                            help="Print the result instead of writing it")
    generate_p.set_defaults(func=generate_cmd)

    watch_p = subparsers.add_parser("watch", help="Regenerate whenever the roadmap changes")
    watch_p.add_argument("--interval", type=float,
                         help="Polling interval in seconds (env: POLL_INTERVAL)")
    watch_p.set_defaults(func=watch_cmd)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = CompilerConfig.from_env(
            roadmap_path=args.roadmap,
            output_path=args.output,
            run_mode=args.run_mode,
            sort_mode=args.sort,
            poll_interval=getattr(args, "interval", None),
        )
    except ValidationError as e:
        log.error("Invalid configuration: %s", e)
        return 1

    func = getattr(args, "func", generate_cmd)
    return func(args, config, argv)


if __name__ == "__main__":
    sys.exit(main())
