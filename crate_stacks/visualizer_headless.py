from __future__ import annotations

import curses
from typing import Optional

from .diagram import render_panels
from .engine import StackEngine
from .session import StepSession


class StackVisualizer:
    """Curses-based step-through viewer for a StackEngine.

    Controls:
      - SPACE / p : toggle auto-run
      - n / →     : single-step
      - r         : reset to the initial arrangement
      - q         : quit

    Designed for environments without pygame but with a terminal.
    """

    def __init__(self, engine: StackEngine, max_steps: Optional[int] = None, per_row: int = 9):
        self.session = StepSession(engine, max_steps=max_steps)
        self.per_row = per_row

    # ---------------------------- public API ----------------------------- #
    def run(self) -> None:  # pragma: no cover - interactive utility
        curses.wrapper(self._main)

    def handle_key(self, key: int) -> bool:
        """Apply one key press; returns False when the viewer should exit."""
        session = self.session
        if key in (ord("q"), ord("Q")):
            return False
        if key in (ord(" "), ord("p"), ord("P")):
            session.toggle_auto()
        elif key in (ord("n"), curses.KEY_RIGHT):
            session.advance(auto=False)
        elif key in (ord("r"), ord("R")):
            session.reset()
        elif key != -1:
            session.message = f"Unhandled key: {key}."
        return True

    # --------------------------- internal helpers ------------------------ #
    def _main(self, stdscr: "curses._CursesWindow") -> None:  # pragma: no cover - interactive utility
        curses.curs_set(0)
        stdscr.nodelay(False)
        while True:
            self._draw(stdscr)
            session = self.session
            stdscr.timeout(120 if (session.auto_run and not session.halted) else -1)
            key = stdscr.getch()
            if key == -1:
                if session.auto_run and not session.halted:
                    session.advance(auto=True)
                continue
            if not self.handle_key(key):
                break

    def _draw(self, stdscr: "curses._CursesWindow") -> None:  # pragma: no cover - interactive utility
        session = self.session
        stdscr.erase()
        height, width = stdscr.getmaxyx()
        self._write(stdscr, 0, 0, "Instructions (SPACE: run/pause, n: step, r: reset, q: quit)")

        row = 2
        inst_view_height = min(10, max(1, height - 12))
        for line in session.instruction_window(inst_view_height):
            attr = curses.A_REVERSE if line.startswith("→") else curses.A_NORMAL
            self._write(stdscr, row, 0, line, attr)
            row += 1

        row += 1
        engine = session.engine
        self._write(
            stdscr,
            row,
            0,
            f"Step: {engine.pc}/{len(engine.instructions)} | Mode: {engine.mode.value} | "
            f"Auto: {session.auto_run} | Halted: {session.halted}",
        )

        row += 2
        self._write(stdscr, row, 0, "Stacks:")
        row += 1
        for panel in render_panels(engine.arrangement, self.per_row):
            for line in panel:
                self._write(stdscr, row, 2, line)
                row += 1
            row += 1

        self._write(stdscr, row, 0, f"Tops: {session.tops_line()}")
        row += 2

        self._write(stdscr, row, 0, "Events:")
        for i, line in enumerate(reversed(session.event_log[-5:])):
            self._write(stdscr, row + 1 + i, 2, line)

        self._write(stdscr, height - 2, 0, session.message[: width - 1])
        stdscr.refresh()

    def _write(self, stdscr: "curses._CursesWindow", y: int, x: int, text: str, attr: int = curses.A_NORMAL) -> None:
        height, width = stdscr.getmaxyx()
        if 0 <= y < height:
            try:
                stdscr.addnstr(y, x, text, max(0, width - x - 1), attr)
            except curses.error:
                pass


__all__ = ["StackVisualizer"]
