"""Game state machine and round lifecycle for the number matching game."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Protocol, Tuple

from .cues import FAILURE_CUE, SUCCESS_CUE, Cue
from .particles import PARTICLE_COUNT, ParticleBurst
from .placement import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_PADDING,
    PlacementWarning,
    Target,
    TargetColor,
    TextMeasurer,
    hit_test,
    layout_values,
    number_font_size,
    place_targets,
)
from .scheduler import Scheduler, TimerKey

logger = logging.getLogger(__name__)


class GameState(Enum):
    START_MENU = "START_MENU"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    CORRECT_FEEDBACK = "CORRECT_FEEDBACK"
    WRONG_FEEDBACK = "WRONG_FEEDBACK"


PAUSABLE_STATES = (GameState.PLAYING, GameState.WRONG_FEEDBACK)


class Feedback(Enum):
    """Message shown to the player after a tap."""

    CORRECT = "Good Job!"
    WRONG = "Wrong answer, try again"

    @property
    def message(self) -> str:
        return self.value

    @property
    def state(self) -> GameState:
        if self is Feedback.CORRECT:
            return GameState.CORRECT_FEEDBACK
        return GameState.WRONG_FEEDBACK


@dataclass(frozen=True)
class GameConfig:
    """Tunable parameters of a game session."""

    min_number: int = 1
    max_number: int = 10
    items_on_screen: int = 5
    feedback_duration_ms: int = 2000
    cue_repeat_ms: int = 5000
    cue_lead_in_ms: int = 100
    particle_count: int = PARTICLE_COUNT
    padding: int = DEFAULT_PADDING
    max_placement_attempts: int = DEFAULT_MAX_ATTEMPTS

    def __post_init__(self) -> None:
        if self.min_number > self.max_number:
            raise ValueError(
                f"min_number ({self.min_number}) must not exceed max_number ({self.max_number})"
            )
        if self.items_on_screen < 1:
            raise ValueError("items_on_screen must be at least 1")
        for name in ("feedback_duration_ms", "cue_repeat_ms", "cue_lead_in_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.padding < 0 or self.particle_count < 0 or self.max_placement_attempts < 1:
            raise ValueError("padding, particle_count and max_placement_attempts are out of range")

    @property
    def value_range(self) -> Tuple[int, int]:
        return (self.min_number, self.max_number)


@dataclass
class Round:
    """One round of play.

    ``values`` holds every number still in play, including ones the last
    layout could not fit, and ``colors`` the colour each one was drawn with.
    """

    target_number: int
    numbers_on_screen: List[Target]
    warnings: List[PlacementWarning] = field(default_factory=list)
    values: List[int] = field(default_factory=list)
    colors: Dict[int, TargetColor] = field(default_factory=dict)

    def missing_values(self) -> List[int]:
        on_screen = {target.value for target in self.numbers_on_screen}
        return [value for value in self.values if value not in on_screen]


class AudioSink(Protocol):
    def play(self, cue: Cue) -> object:
        ...


class RoundController:
    """Owns the game state; every change goes through a transition method."""

    def __init__(
        self,
        audio: AudioSink,
        scheduler: Scheduler,
        *,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        canvas_size: Tuple[int, int] = (800, 600),
        measure: Optional[TextMeasurer] = None,
    ) -> None:
        self.audio = audio
        self.scheduler = scheduler
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.canvas_size = canvas_size
        self.measure = measure

        self.state = GameState.START_MENU
        self.paused_from: Optional[GameState] = None
        self.round: Optional[Round] = None
        self.particles = ParticleBurst()
        self.feedback: Optional[Feedback] = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def target_number(self) -> Optional[int]:
        return self.round.target_number if self.round else None

    @property
    def numbers_on_screen(self) -> List[Target]:
        return self.round.numbers_on_screen if self.round else []

    @property
    def font_size(self) -> int:
        return number_font_size(self.canvas_size[0])

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def start(self) -> bool:
        if self.state not in (GameState.START_MENU, GameState.PAUSED):
            logger.debug("Start ignored in state %s", self.state.name)
            return False
        self.paused_from = None
        self.start_new_round()
        return True

    def pause(self) -> bool:
        if self.state not in PAUSABLE_STATES:
            logger.debug("Pause ignored in state %s", self.state.name)
            return False
        self.paused_from = self.state
        self.state = GameState.PAUSED
        self.scheduler.cancel(TimerKey.CUE)
        self.scheduler.cancel(TimerKey.FEEDBACK)
        logger.info("Paused from %s", self.paused_from.name)
        return True

    def resume(self) -> bool:
        if self.state is not GameState.PAUSED or self.paused_from is None:
            return False
        self.state = self.paused_from
        self.paused_from = None
        if self.state is GameState.PLAYING:
            self._schedule_cue()
        elif self.state is GameState.WRONG_FEEDBACK:
            self._show_feedback(Feedback.WRONG)
        logger.info("Resumed into %s", self.state.name)
        return True

    def toggle_pause(self) -> bool:
        if self.state is GameState.PAUSED:
            return self.resume()
        return self.pause()

    def exit(self) -> None:
        self.state = GameState.START_MENU
        self.paused_from = None
        self.round = None
        self.particles.clear()
        self.feedback = None
        self.scheduler.cancel_all()
        logger.info("Returned to start menu")

    def tap(self, x: float, y: float) -> Optional[Target]:
        """Resolve a tap at canvas coordinates; only honoured while playing."""

        if self.state is not GameState.PLAYING or self.round is None:
            return None
        hit = hit_test(self.round.numbers_on_screen, x, y)
        if hit is None:
            return None
        if hit.value == self.round.target_number:
            self._enter_correct_feedback(self.round, hit)
        else:
            self._enter_wrong_feedback(hit)
        return hit

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------
    def start_new_round(self) -> Round:
        config = self.config
        target = self.rng.randint(config.min_number, config.max_number)
        result = place_targets(
            target,
            config.value_range,
            config.items_on_screen,
            self.canvas_size,
            font_size=self.font_size,
            measure=self.measure,
            padding=config.padding,
            max_attempts=config.max_placement_attempts,
            rng=self.rng,
        )
        if target not in result.values:
            logger.warning("Target number %s is not on screen this round", target)
        self.round = Round(
            target,
            result.targets,
            list(result.warnings),
            values=list(result.requested),
            colors={placed.value: placed.color for placed in result.targets},
        )
        self.particles.clear()
        self.feedback = None
        self.scheduler.cancel(TimerKey.FEEDBACK)
        self.state = GameState.PLAYING
        # Short lead-in so the cue does not race the first frame of the layout.
        self.scheduler.schedule(TimerKey.CUE, config.cue_lead_in_ms, self._on_cue_timer)
        logger.info("New round: target %s, numbers %s", target, result.values)
        return self.round

    def update(self, dt_ms: float) -> None:
        if self.state is not GameState.PAUSED:
            self.particles.update(dt_ms)

    def resize(self, width: int, height: int) -> None:
        """Adopt a new canvas size, re-laying out the round only if needed."""

        self.canvas_size = (width, height)
        if self.round is None:
            return
        current = self.round
        fits = all(target.hit_rect.fits_inside(width, height) for target in current.numbers_on_screen)
        if fits and not current.missing_values():
            return
        palette = list(TargetColor)
        for value in current.values:
            if value not in current.colors:
                current.colors[value] = self.rng.choice(palette)
        result = layout_values(
            current.values,
            self.canvas_size,
            font_size=self.font_size,
            measure=self.measure,
            padding=self.config.padding,
            max_attempts=self.config.max_placement_attempts,
            rng=self.rng,
            colors=[current.colors[value] for value in current.values],
        )
        current.numbers_on_screen = result.targets
        current.warnings.extend(result.warnings)
        logger.info("Re-laid out %d numbers for %sx%s canvas", len(result.targets), width, height)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _enter_correct_feedback(self, current: Round, hit: Target) -> None:
        self.state = GameState.CORRECT_FEEDBACK
        current.numbers_on_screen.remove(hit)
        current.values.remove(hit.value)
        self.scheduler.cancel(TimerKey.CUE)
        self.particles.spawn(
            hit.center_x,
            hit.center_y,
            hit.color.rgb,
            count=self.config.particle_count,
            rng=self.rng,
        )
        self.audio.play(SUCCESS_CUE)
        self._show_feedback(Feedback.CORRECT)
        logger.debug("Correct tap on %s", hit.value)

    def _enter_wrong_feedback(self, hit: Target) -> None:
        self.state = GameState.WRONG_FEEDBACK
        self.audio.play(FAILURE_CUE)
        self._show_feedback(Feedback.WRONG)
        logger.debug("Wrong tap on %s (target %s)", hit.value, self.target_number)

    def _show_feedback(self, feedback: Feedback) -> None:
        self.feedback = feedback
        self.scheduler.schedule(
            TimerKey.FEEDBACK,
            self.config.feedback_duration_ms,
            lambda: self._on_feedback_timer(feedback),
        )

    def _on_feedback_timer(self, feedback: Feedback) -> None:
        if self.state is not feedback.state:
            self.feedback = None
            return
        if feedback is Feedback.CORRECT:
            self.start_new_round()
        else:
            self.state = GameState.PLAYING
            self.feedback = None
            self._schedule_cue()

    def _schedule_cue(self) -> None:
        self.scheduler.cancel(TimerKey.CUE)
        if self.state is GameState.PLAYING and self.round is not None:
            self.scheduler.schedule(TimerKey.CUE, self.config.cue_repeat_ms, self._on_cue_timer)

    def _on_cue_timer(self) -> None:
        if self.round is None:
            return
        self.audio.play(self.round.target_number)
        self._schedule_cue()
