from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .diagram import render_diagram
from .errors import CrateStackError
from .events import format_transfer
from .logging_config import setup_logging
from .modes import ExecutionMode
from .report import empty_stacks
from .runtime import prepare_engine, read_puzzle, run_source

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _selected_modes(name: str) -> List[ExecutionMode]:
    if name == "both":
        return [ExecutionMode.SINGLE, ExecutionMode.BLOCK]
    return [ExecutionMode.parse(name)]


def _describe_empty(indices: List[int]) -> str:
    if len(indices) == 1:
        return f"stack {indices[0]} is empty"
    return "stacks " + ", ".join(str(i) for i in indices) + " are empty"


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="crate-stacks", description="Replay crate moves against a stack diagram")
    parser.add_argument("puzzle", nargs="?", help="Puzzle file: diagram, blank line, then move instructions (default: stdin)")
    parser.add_argument(
        "--mode",
        "-m",
        choices=["single", "block", "both"],
        default="both",
        help="Move crates one at a time (single), as a block (block), or report both",
    )
    parser.add_argument("--trace", action="store_true", help="Print every applied transfer")
    parser.add_argument("--show-final", action="store_true", help="Print the final stack diagram")
    parser.add_argument(
        "--visualize",
        nargs="?",
        const="gui",
        choices=["gui", "curses"],
        help="Step through the run interactively (optional mode: gui or curses)",
    )
    parser.add_argument("--debug", action="store_true", help="Print stack traces when parsing or execution fails")
    parser.add_argument("--log-level", default="WARNING", choices=_LOG_LEVELS, help="Logging level (default: WARNING)")
    parser.add_argument("--log-file", help="Also write log records to this file")
    args = parser.parse_args(argv)

    try:
        setup_logging(args.log_level, args.log_file)
        if args.puzzle:
            text = read_puzzle(args.puzzle)
        else:
            text = sys.stdin.read()
        modes = _selected_modes(args.mode)

        if args.visualize:
            return _visualize(text, modes[0], args.visualize)

        status = 0
        for mode in modes:
            result = run_source(text, mode)
            if args.trace:
                for event in result.events:
                    print(f"  {format_transfer(event)}")
            if args.show_final:
                for line in render_diagram(result.arrangement):
                    print(line)
            if result.label is None:
                print(f"{mode.value}: {_describe_empty(empty_stacks(result.arrangement))}", file=sys.stderr)
                status = 1
            else:
                print(f"{mode.value}: {result.label}")
        return status
    except (CrateStackError, OSError, UnicodeDecodeError) as exc:
        if args.debug:
            import traceback

            traceback.print_exc()
        else:
            print(f"crate-stacks failed: {exc}", file=sys.stderr)
        return 1


def _visualize(text: str, mode: ExecutionMode, selected_mode: str) -> int:
    engine = prepare_engine(text, mode)

    visualizer = None
    gui_exc: Exception | None = None
    if selected_mode == "gui":
        try:
            from .visualizer import StackVisualizer as GuiVisualizer

            visualizer = GuiVisualizer(engine)
        except Exception as e:  # pygame missing or no display
            gui_exc = e
            selected_mode = "curses"

    if selected_mode == "curses":
        try:
            from .visualizer_headless import StackVisualizer as HeadlessVisualizer

            visualizer = HeadlessVisualizer(engine)
        except ImportError as headless_exc:  # pragma: no cover - no curses on this platform
            if gui_exc is not None:
                print(
                    "Visualizer unavailable. GUI error: "
                    f"{gui_exc}; Headless error: {headless_exc}",
                    file=sys.stderr,
                )
            else:
                print(f"Visualizer unavailable: {headless_exc}", file=sys.stderr)
            return 1

    assert visualizer is not None
    visualizer.run()
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
