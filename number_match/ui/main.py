"""Interactive pygame application for the number match game."""

from __future__ import annotations

import argparse
import logging
import os
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

import pygame

from ..audio import AudioPlayer
from ..game import GameConfig, RoundController
from ..scheduler import Scheduler
from .assets import load_sound_assets
from .toolkit import FontCache, NumberMatchUI

logger = logging.getLogger(__name__)

SOUND_ENV_VAR = "NUMBER_MATCH_SOUND_ROOT"
DEFAULT_WINDOW_SIZE: Tuple[int, int] = (960, 720)
FPS = 60


@dataclass(frozen=True)
class UIDirectories:
    """Bundle with resolved directories required by the UI."""

    sound_root: Path


def _default_sound_root() -> Path:
    return Path(__file__).resolve().parents[1] / "sounds"


def _read_directory(env_var: str, fallback: Path) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value).expanduser()
    return fallback


def resolve_directories(check_exists: bool = True) -> UIDirectories:
    """Resolve UI directories using environment variables.

    Parameters
    ----------
    check_exists:
        When *True*, raise :class:`FileNotFoundError` if a resolved directory does
        not exist on disk. Disable this in contexts where you want to inspect the
        chosen paths without touching the filesystem.
    """

    sound_root = _read_directory(SOUND_ENV_VAR, _default_sound_root())

    if check_exists and not sound_root.exists():
        raise FileNotFoundError(f"Sound directory does not exist: {sound_root}")

    return UIDirectories(sound_root=sound_root)


def parse_screen_size(value: str) -> Tuple[int, int]:
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected WxH, got '{value}'") from exc
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"Screen size must be positive, got '{value}'")
    return width, height


class NumberMatchApp:
    """Pygame driven application: window, main loop and resize plumbing."""

    def __init__(
        self,
        screen_size: Tuple[int, int] = DEFAULT_WINDOW_SIZE,
        *,
        config: Optional[GameConfig] = None,
        directories: Optional[UIDirectories] = None,
        seed: Optional[int] = None,
    ) -> None:
        pygame.init()
        pygame.display.set_caption("Number Match")
        self.clock = pygame.time.Clock()
        self.config = config or GameConfig()
        self.directories = directories or resolve_directories()

        library = load_sound_assets(
            self.directories.sound_root, self.config.min_number, self.config.max_number
        )
        self.audio = AudioPlayer(library.sounds)
        self.scheduler = Scheduler(now=pygame.time.get_ticks())
        self.fonts = FontCache()
        self.controller = RoundController(
            self.audio,
            self.scheduler,
            config=self.config,
            rng=random.Random(seed),
            measure=self.fonts.measure,
        )
        self.ui = NumberMatchUI(
            self.controller,
            window_size=screen_size,
            use_display=True,
            fonts=self.fonts,
            audio=self.audio,
        )
        self.last_time = pygame.time.get_ticks()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Dispatch one event; return *False* when the window was closed."""

        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.VIDEORESIZE:
            self.ui.resize(event.size)
            logger.info("Window resized to %sx%s", *event.size)
            return True
        self.ui.process_events([event])
        return True

    def step(self) -> None:
        now = pygame.time.get_ticks()
        delta = now - self.last_time
        self.last_time = now
        self.scheduler.tick(now)
        self.controller.update(delta)
        self.ui.render()

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        try:
            while True:
                for event in pygame.event.get():
                    if not self.handle_event(event):
                        return
                self.step()
                self.clock.tick(FPS)
        finally:
            self.scheduler.cancel_all()
            pygame.quit()


def bootstrap_directories() -> UIDirectories:
    """Return resolved directories and print a short bootstrap message."""

    directories = resolve_directories()
    message = (
        "Number Match UI bootstrap\n"
        f"  sounds: {directories.sound_root}\n"
        f"Set {SOUND_ENV_VAR} to point to a custom sound directory if needed."
    )
    print(message)
    return directories


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Number Match launcher")
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print resolved resource directories and exit without launching the UI.",
    )
    parser.add_argument("--min", type=int, default=1, dest="min_number", help="Smallest number")
    parser.add_argument("--max", type=int, default=10, dest="max_number", help="Largest number")
    parser.add_argument(
        "--count", type=int, default=5, help="How many numbers are shown each round"
    )
    parser.add_argument(
        "--size",
        type=parse_screen_size,
        default=DEFAULT_WINDOW_SIZE,
        help="Window size WxH, e.g. 960x720",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible rounds")
    parser.add_argument("--verbose", action="store_true", help="Log round transitions")
    parser.add_argument("--debug", action="store_true", help="Log everything")
    return parser


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.debug)

    try:
        config = GameConfig(
            min_number=args.min_number,
            max_number=args.max_number,
            items_on_screen=args.count,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        directories = bootstrap_directories()
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    if args.info:
        return 0

    app = NumberMatchApp(args.size, config=config, directories=directories, seed=args.seed)
    app.run()
    return 0


def run() -> None:
    """Console script entry point."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - manual invocation entry point
    run()
