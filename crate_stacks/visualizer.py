from typing import Optional, Tuple

import pygame

from .engine import StackEngine
from .session import StepSession
from .utils import chunk

# Constants
SCREEN_WIDTH = 1200
SCREEN_HEIGHT = 800
BACKGROUND_COLOR = (240, 240, 240)
FONT_COLOR = (10, 10, 10)
PC_COLOR = (200, 255, 200)
CRATE_COLOR = (222, 184, 135)
CRATE_BORDER_COLOR = (120, 80, 40)
MOVED_COLOR = (255, 220, 200)
ERROR_COLOR = (200, 40, 40)
FONT_SIZE = 18
LINE_HEIGHT = 22
MARGIN = 20
CRATE_SIZE = 28
STACKS_PER_ROW = 9


class StackVisualizer:
    """pygame viewer: instruction list on the left, crates drawn bottom-up on the right.

    P toggles auto-run, SPACE or RIGHT steps, R resets, Q quits.
    """

    def __init__(self, engine: StackEngine, max_steps: Optional[int] = None):
        self.session = StepSession(engine, max_steps=max_steps)
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Crate Stack Visualizer")
        self.font = pygame.font.SysFont("monospace", FONT_SIZE)
        self.clock = pygame.time.Clock()
        self.running = True

    def _draw_text(self, text: str, x: int, y: int, color=FONT_COLOR, background=None):
        surface = self.font.render(text, True, color, background)
        self.screen.blit(surface, (x, y))

    def _draw_crate(self, label: str, x: int, y: int, color: Tuple[int, int, int]) -> None:
        rect = pygame.Rect(x, y, CRATE_SIZE, CRATE_SIZE)
        pygame.draw.rect(self.screen, color, rect)
        pygame.draw.rect(self.screen, CRATE_BORDER_COLOR, rect, 2)
        self._draw_text(label, x + CRATE_SIZE // 3, y + 4)

    def _draw_instructions(self) -> None:
        self._draw_text("Instructions", MARGIN, MARGIN)
        y = MARGIN + LINE_HEIGHT * 2
        visible = (SCREEN_HEIGHT - 4 * MARGIN) // LINE_HEIGHT - 4
        for line in self.session.instruction_window(visible):
            background = PC_COLOR if line.startswith("→") else None
            self._draw_text(line, MARGIN, y, background=background)
            y += LINE_HEIGHT

    def _draw_stacks(self) -> None:
        engine = self.session.engine
        left = SCREEN_WIDTH // 3
        self._draw_text(f"Stacks ({engine.mode.value})  step {engine.pc}/{len(engine.instructions)}", left, MARGIN)
        moved_on: Optional[int] = None
        moved_count = 0
        if engine.pc > 0 and not self.session.state.failed:
            last = engine.instructions[engine.pc - 1]
            moved_on, moved_count = last.target, last.quantity

        stacks = engine.arrangement.stacks
        tallest = max(engine.arrangement.heights(), default=0)
        row_height = (tallest + 2) * CRATE_SIZE
        pitch = CRATE_SIZE + 14
        for row, group in enumerate(chunk(range(1, len(stacks) + 1), STACKS_PER_ROW)):
            base_y = MARGIN * 3 + (row + 1) * row_height
            for col, index in enumerate(group):
                x = left + col * pitch
                stack = stacks[index - 1]
                for level, label in enumerate(stack):
                    fresh = index == moved_on and level >= len(stack) - moved_count
                    self._draw_crate(label, x, base_y - (level + 1) * CRATE_SIZE, MOVED_COLOR if fresh else CRATE_COLOR)
                self._draw_text(str(index), x + CRATE_SIZE // 3, base_y + 4)

    def _draw_ui(self) -> None:
        session = self.session
        self.screen.fill(BACKGROUND_COLOR)
        self._draw_instructions()
        self._draw_stacks()
        left = SCREEN_WIDTH // 3
        y = SCREEN_HEIGHT - MARGIN - LINE_HEIGHT * 8
        self._draw_text(f"Tops: {session.tops_line()}", left, y)
        for i, line in enumerate(reversed(session.event_log[-4:])):
            self._draw_text(line, left, y + (i + 1) * LINE_HEIGHT)
        color = ERROR_COLOR if session.state.failed else FONT_COLOR
        self._draw_text(session.message, MARGIN, SCREEN_HEIGHT - MARGIN - LINE_HEIGHT, color)
        pygame.display.flip()

    def _handle_events(self) -> None:
        session = self.session
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    self.running = False
                elif event.key in (pygame.K_SPACE, pygame.K_RIGHT):
                    session.auto_run = False
                    session.advance(auto=False)
                elif event.key == pygame.K_p:
                    session.toggle_auto()
                elif event.key == pygame.K_r:
                    session.reset()

    def run(self) -> None:
        while self.running:
            self._handle_events()
            if self.session.auto_run:
                self.session.advance(auto=True)
            self._draw_ui()
            self.clock.tick(10)  # Limit frame rate
        pygame.quit()


__all__ = ["StackVisualizer"]
