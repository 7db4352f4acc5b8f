"""Audio cue playback gated by recent user interaction."""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional, Protocol

import pygame

from .cues import FAILURE_CUE, SUCCESS_CUE, Cue

logger = logging.getLogger(__name__)

DEFAULT_INTERACTION_WINDOW_MS = 10_000


class Playable(Protocol):
    def play(self) -> object:
        ...


class AudioPlayer:
    """Plays loaded sounds by cue id and never lets playback errors escape.

    Number cues are only played when the player interacted with the game
    within ``interaction_window_ms``; success and failure cues always play.
    """

    def __init__(
        self,
        sounds: Mapping[Cue, Playable],
        *,
        clock: Optional[Callable[[], int]] = None,
        interaction_window_ms: int = DEFAULT_INTERACTION_WINDOW_MS,
    ) -> None:
        self.sounds = dict(sounds)
        self.clock = clock or pygame.time.get_ticks
        self.interaction_window_ms = interaction_window_ms
        self.last_interaction: Optional[int] = None

    def note_interaction(self) -> None:
        self.last_interaction = self.clock()

    def interaction_is_recent(self) -> bool:
        if self.last_interaction is None:
            return False
        return self.clock() - self.last_interaction <= self.interaction_window_ms

    def play(self, cue: Cue) -> bool:
        """Play ``cue`` and report whether playback was started."""

        if cue not in (SUCCESS_CUE, FAILURE_CUE) and not self.interaction_is_recent():
            logger.info("Skipping cue %s: no recent user interaction", cue)
            return False
        sound = self.sounds.get(cue)
        if sound is None:
            logger.debug("No sound loaded for cue %s", cue)
            return False
        try:
            sound.play()
        except pygame.error as exc:
            logger.warning("Failed to play cue %s: %s", cue, exc)
            return False
        return True
