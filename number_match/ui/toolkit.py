"""Pygame drawing and input dispatch for the number match game.

Rendering is deterministic for a given controller state so it can be
exercised in automated tests using the SDL ``dummy`` video driver.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from ..audio import AudioPlayer
from ..game import Feedback, GameState, RoundController
from . import layout

# Pygame is imported lazily in ``ensure_pygame`` so test environments can
# control the SDL configuration before the display is initialised.
_PYGAME = None


def ensure_pygame():
    global _PYGAME
    if _PYGAME is None:
        _PYGAME = __import__("pygame")
        _PYGAME.display.init()
        _PYGAME.font.init()
    return _PYGAME


class FontCache:
    """Default-font instances per size, also used to measure number labels."""

    def __init__(self) -> None:
        self._fonts: Dict[Tuple[int, bool], object] = {}

    def get(self, size: int, bold: bool = False):
        key = (size, bold)
        font = self._fonts.get(key)
        if font is None:
            pygame = ensure_pygame()
            font = pygame.font.Font(None, size)
            font.set_bold(bold)
            self._fonts[key] = font
        return font

    def measure(self, font_size: int, text: str) -> Tuple[float, float]:
        width, height = self.get(font_size, bold=True).size(text)
        return float(width), float(height)


class NumberMatchUI:
    """Draws the controller state and feeds pointer/key input back into it."""

    def __init__(
        self,
        controller: RoundController,
        *,
        window_size: Tuple[int, int] = (960, 720),
        surface=None,
        use_display: bool = False,
        fonts: Optional[FontCache] = None,
        audio: Optional[AudioPlayer] = None,
    ) -> None:
        pygame = ensure_pygame()
        self.controller = controller
        self.audio = audio
        self.fonts = fonts or FontCache()
        if surface is not None:
            window_size = surface.get_size()
        self.screen = None
        if use_display:
            self.screen = pygame.display.set_mode(window_size, pygame.RESIZABLE)
        self.surface = surface or pygame.Surface(window_size)
        self.geometry = layout.compute_geometry(*window_size)
        self.controller.resize(*self.geometry.canvas_size)

    def resize(self, window_size: Tuple[int, int]) -> None:
        pygame = ensure_pygame()
        if self.screen is not None:
            self.screen = pygame.display.set_mode(window_size, pygame.RESIZABLE)
        self.surface = pygame.Surface(window_size)
        self.geometry = layout.compute_geometry(*window_size)
        self.controller.resize(*self.geometry.canvas_size)

    # ------------------------------------------------------------------
    # Input handling
    def process_events(self, events: Iterable[object]) -> None:
        pygame = ensure_pygame()
        for event in events:
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                # SDL also reports touches as mouse clicks; FINGERDOWN handles those.
                if getattr(event, "touch", False):
                    continue
                self.handle_pointer(event.pos)
            elif event.type == pygame.FINGERDOWN:
                width, height = self.geometry.window
                self.handle_pointer((int(event.x * width), int(event.y * height)))
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def handle_pointer(self, pos: Tuple[float, float]) -> None:
        pygame = ensure_pygame()
        self._note_interaction()
        geometry = self.geometry
        if pygame.Rect(geometry.start_button).collidepoint(pos):
            self.controller.start()
        elif pygame.Rect(geometry.pause_button).collidepoint(pos):
            self.controller.toggle_pause()
        elif pygame.Rect(geometry.exit_button).collidepoint(pos):
            self.controller.exit()
        elif pygame.Rect(geometry.canvas).collidepoint(pos):
            canvas_x, canvas_y = geometry.canvas[:2]
            self.controller.tap(pos[0] - canvas_x, pos[1] - canvas_y)

    def _handle_key(self, key: int) -> None:
        pygame = ensure_pygame()
        if key in (pygame.K_SPACE, pygame.K_RETURN):
            self._note_interaction()
            self.controller.start()
        elif key == pygame.K_p:
            self._note_interaction()
            self.controller.toggle_pause()
        elif key == pygame.K_ESCAPE:
            self.controller.exit()

    def _note_interaction(self) -> None:
        if self.audio is not None:
            self.audio.note_interaction()

    # ------------------------------------------------------------------
    # Rendering helpers
    def render(self):
        pygame = ensure_pygame()
        self._draw_bar()
        canvas_rect = pygame.Rect(self.geometry.canvas)
        if canvas_rect.width > 0 and canvas_rect.height > 0:
            self._draw_canvas(self.surface.subsurface(canvas_rect))
        if self.screen:
            self.screen.blit(self.surface, (0, 0))
            pygame.display.flip()
        return self.surface

    def _draw_bar(self) -> None:
        pygame = ensure_pygame()
        geometry = self.geometry
        self.surface.fill(layout.BAR_COLOR, pygame.Rect(geometry.bar))
        pause_label = "Resume" if self.controller.state is GameState.PAUSED else "Pause"
        for rect, label in (
            (geometry.start_button, "Start"),
            (geometry.pause_button, pause_label),
            (geometry.exit_button, "Exit"),
        ):
            button = pygame.Rect(rect)
            pygame.draw.rect(self.surface, layout.BUTTON_COLOR, button, border_radius=8)
            text = self.fonts.get(layout.BUTTON_FONT_SIZE).render(label, True, layout.BUTTON_TEXT_COLOR)
            self.surface.blit(text, text.get_rect(center=button.center))

        feedback = self.controller.feedback
        if feedback is not None:
            color = layout.CORRECT_COLOR if feedback is Feedback.CORRECT else layout.WRONG_COLOR
            font = self.fonts.get(layout.feedback_font_size(geometry.window[0]), bold=True)
            text = font.render(feedback.message, True, color)
            area = pygame.Rect(geometry.feedback)
            self.surface.blit(text, text.get_rect(midleft=area.midleft))

    def _draw_canvas(self, canvas) -> None:
        pygame = ensure_pygame()
        canvas.fill(layout.CANVAS_COLOR)
        width, height = canvas.get_size()
        state = self.controller.state

        if state is GameState.START_MENU:
            font = self.fonts.get(layout.feedback_font_size(width), bold=True)
            prompt = font.render(layout.START_PROMPT, True, layout.TEXT_COLOR)
            canvas.blit(prompt, prompt.get_rect(center=(width // 2, height // 2)))
            return

        self._draw_numbers(canvas)
        if state is GameState.PAUSED:
            overlay = pygame.Surface((width, height), pygame.SRCALPHA)
            overlay.fill(layout.PAUSE_OVERLAY_COLOR)
            canvas.blit(overlay, (0, 0))
            font = self.fonts.get(self.controller.font_size, bold=True)
            text = font.render(layout.PAUSED_TEXT, True, layout.PAUSE_TEXT_COLOR)
            canvas.blit(text, text.get_rect(center=(width // 2, height // 2)))
        elif state is GameState.CORRECT_FEEDBACK:
            self._draw_particles(canvas)

    def _draw_numbers(self, canvas) -> None:
        font = self.fonts.get(self.controller.font_size, bold=True)
        for target in self.controller.numbers_on_screen:
            label = font.render(str(target.value), True, target.color.rgb)
            rect = label.get_rect(center=(round(target.center_x), round(target.center_y)))
            canvas.blit(label, rect)

    def _draw_particles(self, canvas) -> None:
        pygame = ensure_pygame()
        for particle in self.controller.particles.visible():
            size = int(particle.size)
            if size <= 1:
                continue
            alpha = int(255 * min(particle.alpha, 1.0))
            square = pygame.Surface((size, size), pygame.SRCALPHA)
            square.fill((*particle.color, alpha))
            canvas.blit(square, (round(particle.x - size / 2), round(particle.y - size / 2)))


__all__ = ["FontCache", "NumberMatchUI", "ensure_pygame"]
