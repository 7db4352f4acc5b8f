"""Helpers for loading the spoken number and feedback sounds."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping

import pygame

from ..cues import FAILURE_CUE, SUCCESS_CUE, Cue

logger = logging.getLogger(__name__)

FEEDBACK_SOUND_FILES: Mapping[str, str] = {
    SUCCESS_CUE: "good_job.mp3",
    FAILURE_CUE: "wrong_answer.mp3",
}


def sound_files(min_number: int, max_number: int) -> Dict[Cue, str]:
    """Map every cue to the file name it is loaded from."""

    files: Dict[Cue, str] = {number: f"{number}.mp3" for number in range(min_number, max_number + 1)}
    files.update(FEEDBACK_SOUND_FILES)
    return files


@dataclass
class SoundLibrary:
    """Loaded sounds keyed by cue, plus the cues that stay silent."""

    sounds: Dict[Cue, "pygame.mixer.Sound"] = field(default_factory=dict)
    missing: List[Cue] = field(default_factory=list)

    def __getitem__(self, key: Cue) -> "pygame.mixer.Sound":
        return self.sounds[key]


def _ensure_mixer() -> bool:
    if pygame.mixer.get_init():
        return True
    try:
        pygame.mixer.init()
    except pygame.error as exc:
        logger.error("Audio mixer unavailable, the game will be silent: %s", exc)
        return False
    return True


def load_sound_assets(sound_root: Path, min_number: int, max_number: int) -> SoundLibrary:
    """Load every cue sound found under ``sound_root``.

    Missing or undecodable files are logged and left out; the matching cue is
    silent for the rest of the session.
    """

    files = sound_files(min_number, max_number)
    library = SoundLibrary()
    if not _ensure_mixer():
        library.missing = list(files)
        return library

    for cue, filename in files.items():
        path = Path(sound_root) / filename
        if not path.exists():
            logger.error("Failed to load sound: %s (file not found)", path)
            library.missing.append(cue)
            continue
        try:
            library.sounds[cue] = pygame.mixer.Sound(str(path))
        except pygame.error as exc:
            logger.error("Failed to load sound: %s (%s)", path, exc)
            library.missing.append(cue)

    logger.info("Loaded %d sounds, %d missing", len(library.sounds), len(library.missing))
    return library
