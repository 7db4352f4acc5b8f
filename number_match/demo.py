"""Simple command line demo for the number match game logic."""

import random
from typing import List, Optional, Tuple

from .cues import Cue
from .game import RoundController
from .scheduler import Scheduler


class PrintingAudio:
    """Stands in for the speaker by announcing cues on stdout."""

    def __init__(self) -> None:
        self.played: List[Cue] = []

    def play(self, cue: Cue) -> bool:
        self.played.append(cue)
        print(f"  [audio] {cue}")
        return True


def main(seed: Optional[int] = 7, canvas_size: Tuple[int, int] = (800, 540)) -> RoundController:
    scheduler = Scheduler()
    controller = RoundController(
        PrintingAudio(), scheduler, rng=random.Random(seed), canvas_size=canvas_size
    )

    print("=== Number Match Demo ===")
    controller.start()
    scheduler.advance(100)
    print(f"Target: {controller.target_number}")
    print("Numbers on screen:")
    for target in controller.numbers_on_screen:
        print(f"  {target.value:>2} at ({target.center_x:.0f}, {target.center_y:.0f})")

    wrong = next(
        (t for t in controller.numbers_on_screen if t.value != controller.target_number), None
    )
    if wrong is not None:
        controller.tap(wrong.center_x, wrong.center_y)
        print(f"Tapped {wrong.value}: {controller.state.name}")
        scheduler.advance(controller.config.feedback_duration_ms)

    right = next(
        (t for t in controller.numbers_on_screen if t.value == controller.target_number), None
    )
    if right is None:
        print(f"Target {controller.target_number} did not fit on the canvas")
        return controller
    controller.tap(right.center_x, right.center_y)
    print(f"Tapped {right.value}: {controller.state.name} ({len(controller.particles)} particles)")

    scheduler.advance(controller.config.feedback_duration_ms)
    print(f"Next round target: {controller.target_number} ({controller.state.name})")
    return controller


if __name__ == "__main__":
    main()
