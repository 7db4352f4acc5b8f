"""Layout constants for the number match UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Button bar metrics
BUTTON_AREA_HEIGHT: int = 60
BUTTON_WIDTH: int = 110
BUTTON_HEIGHT: int = 40
BUTTON_SPACING: int = 12
BAR_PADDING: int = 10

FEEDBACK_FONT_SIZE_BASE: int = 30
FEEDBACK_FONT_SIZE_MIN: int = 18
BUTTON_FONT_SIZE: int = 24

# Colors expressed as RGB(A) tuples
CANVAS_COLOR: Tuple[int, int, int] = (255, 255, 255)
BAR_COLOR: Tuple[int, int, int] = (236, 240, 246)
BUTTON_COLOR: Tuple[int, int, int] = (70, 110, 200)
BUTTON_TEXT_COLOR: Tuple[int, int, int] = (255, 255, 255)
TEXT_COLOR: Tuple[int, int, int] = (0, 0, 0)
CORRECT_COLOR: Tuple[int, int, int] = (0, 150, 60)
WRONG_COLOR: Tuple[int, int, int] = (210, 30, 30)
PAUSE_OVERLAY_COLOR: Tuple[int, int, int, int] = (128, 128, 128, 178)
PAUSE_TEXT_COLOR: Tuple[int, int, int] = (255, 255, 255)

START_PROMPT = "Click 'Start' to Play!"
PAUSED_TEXT = "Paused"


def feedback_font_size(canvas_width: float) -> int:
    return int(max(FEEDBACK_FONT_SIZE_MIN, min(FEEDBACK_FONT_SIZE_BASE, canvas_width / 18)))


@dataclass(frozen=True)
class ScreenGeometry:
    """Pixel rectangles for the major UI regions."""

    bar: Tuple[int, int, int, int]
    canvas: Tuple[int, int, int, int]
    start_button: Tuple[int, int, int, int]
    pause_button: Tuple[int, int, int, int]
    exit_button: Tuple[int, int, int, int]
    feedback: Tuple[int, int, int, int]
    window: Tuple[int, int]

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return (self.canvas[2], self.canvas[3])


def compute_geometry(window_width: int, window_height: int) -> ScreenGeometry:
    """Split the window into the button bar and the play canvas below it."""

    bar_height = min(BUTTON_AREA_HEIGHT, window_height)
    button_y = (bar_height - BUTTON_HEIGHT) // 2

    buttons = []
    x = BAR_PADDING
    for _ in range(3):
        buttons.append((x, button_y, BUTTON_WIDTH, BUTTON_HEIGHT))
        x += BUTTON_WIDTH + BUTTON_SPACING

    feedback_x = x + BAR_PADDING
    feedback_rect = (feedback_x, 0, max(window_width - feedback_x - BAR_PADDING, 0), bar_height)

    return ScreenGeometry(
        bar=(0, 0, window_width, bar_height),
        canvas=(0, bar_height, window_width, max(window_height - bar_height, 0)),
        start_button=buttons[0],
        pause_button=buttons[1],
        exit_button=buttons[2],
        feedback=feedback_rect,
        window=(window_width, window_height),
    )
