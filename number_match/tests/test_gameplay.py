import random
import subprocess
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from number_match.cues import FAILURE_CUE, SUCCESS_CUE
from number_match.game import Feedback, GameConfig, GameState, RoundController
from number_match.placement import Target
from number_match.scheduler import Scheduler, TimerKey


class RecordingAudio:
    def __init__(self) -> None:
        self.played: List[object] = []

    def play(self, cue: object) -> bool:
        self.played.append(cue)
        return True


class ScriptedRandom(random.Random):
    """Random source whose round targets are fixed in advance."""

    def __init__(self, targets: Iterable[int], seed: int = 0) -> None:
        super().__init__(seed)
        self.targets = list(targets)

    def randint(self, a: int, b: int) -> int:
        if self.targets:
            return self.targets.pop(0)
        return super().randint(a, b)


def make_controller(
    targets: Iterable[int] = (7,), **config: int
) -> Tuple[RoundController, Scheduler, RecordingAudio]:
    scheduler = Scheduler()
    audio = RecordingAudio()
    controller = RoundController(
        audio,
        scheduler,
        config=GameConfig(**config),
        rng=ScriptedRandom(targets),
        canvas_size=(1200, 800),
    )
    return controller, scheduler, audio


def find_target(controller: RoundController, matching: bool = True) -> Target:
    return next(
        target
        for target in controller.numbers_on_screen
        if (target.value == controller.target_number) == matching
    )


def tap(controller: RoundController, target: Target):
    return controller.tap(target.center_x, target.center_y)


def test_start_begins_round_with_single_matching_target():
    controller, scheduler, _audio = make_controller()

    assert controller.state is GameState.START_MENU
    assert controller.start()

    assert controller.state is GameState.PLAYING
    assert controller.target_number == 7
    assert len(controller.numbers_on_screen) == 5
    assert [t.value for t in controller.numbers_on_screen].count(7) == 1
    assert scheduler.remaining(TimerKey.CUE) == 100


def test_correct_tap_spawns_particles_and_next_round_follows():
    controller, scheduler, audio = make_controller(targets=(7, 3))
    controller.start()
    correct = find_target(controller)

    assert tap(controller, correct) is correct

    assert controller.state is GameState.CORRECT_FEEDBACK
    assert controller.feedback is Feedback.CORRECT
    assert len(controller.particles) == 50
    assert correct not in controller.numbers_on_screen
    assert len(controller.numbers_on_screen) == 4
    assert audio.played == [SUCCESS_CUE]
    assert not scheduler.is_scheduled(TimerKey.CUE)

    scheduler.advance(1999)
    assert controller.state is GameState.CORRECT_FEEDBACK
    scheduler.advance(1)

    assert controller.state is GameState.PLAYING
    assert controller.target_number == 3
    assert len(controller.numbers_on_screen) == 5
    assert len(controller.particles) == 0
    assert controller.feedback is None


def test_wrong_tap_returns_to_same_round():
    controller, scheduler, audio = make_controller()
    controller.start()
    before = list(controller.numbers_on_screen)
    wrong = find_target(controller, matching=False)

    tap(controller, wrong)

    assert controller.state is GameState.WRONG_FEEDBACK
    assert controller.feedback is Feedback.WRONG
    assert scheduler.is_scheduled(TimerKey.CUE)

    scheduler.advance(2000)

    assert controller.state is GameState.PLAYING
    assert controller.target_number == 7
    assert controller.numbers_on_screen == before
    assert controller.feedback is None
    # The lead-in cue still plays during the wrong-answer feedback.
    assert audio.played == [FAILURE_CUE, 7]
    assert scheduler.remaining(TimerKey.CUE) == 5000


def test_tap_outside_targets_changes_nothing():
    controller, _scheduler, audio = make_controller()
    controller.start()

    assert controller.tap(-1, -1) is None
    assert controller.state is GameState.PLAYING
    assert audio.played == []


def test_taps_are_ignored_outside_playing():
    controller, _scheduler, _audio = make_controller()
    assert controller.tap(10, 10) is None

    controller.start()
    tap(controller, find_target(controller))
    other = controller.numbers_on_screen[0]

    assert tap(controller, other) is None
    assert controller.state is GameState.CORRECT_FEEDBACK


def test_cue_repeats_while_playing():
    controller, scheduler, audio = make_controller()
    controller.start()

    scheduler.advance(100)
    assert audio.played == [7]
    scheduler.advance(5000)
    scheduler.advance(5000)
    assert audio.played == [7, 7, 7]


def test_correct_tap_stops_cue():
    controller, scheduler, audio = make_controller()
    controller.start()
    scheduler.advance(100)

    tap(controller, find_target(controller))
    scheduler.advance(1999)

    assert audio.played == [7, SUCCESS_CUE]


def test_pause_and_resume_reschedules_cue_once():
    controller, scheduler, audio = make_controller()
    controller.start()
    scheduler.advance(100)

    assert controller.pause()
    assert controller.state is GameState.PAUSED
    assert controller.paused_from is GameState.PLAYING
    assert not scheduler.is_scheduled(TimerKey.CUE)
    assert not scheduler.is_scheduled(TimerKey.FEEDBACK)

    scheduler.advance(20000)
    assert audio.played == [7]

    assert controller.resume()
    assert not controller.resume()
    assert controller.state is GameState.PLAYING
    assert scheduler.remaining(TimerKey.CUE) == 5000

    scheduler.advance(5000)
    assert audio.played == [7, 7]


def test_pause_during_wrong_feedback_restores_feedback_on_resume():
    controller, scheduler, _audio = make_controller()
    controller.start()
    tap(controller, find_target(controller, matching=False))

    assert controller.toggle_pause()
    scheduler.advance(5000)
    assert controller.state is GameState.PAUSED

    assert controller.toggle_pause()
    assert controller.state is GameState.WRONG_FEEDBACK
    assert controller.feedback is Feedback.WRONG
    assert scheduler.remaining(TimerKey.FEEDBACK) == 2000

    scheduler.advance(2000)
    assert controller.state is GameState.PLAYING


@pytest.mark.parametrize("prepare", ["menu", "correct"])
def test_pause_is_ignored_outside_pausable_states(prepare: str):
    controller, _scheduler, _audio = make_controller()
    if prepare == "correct":
        controller.start()
        tap(controller, find_target(controller))
    expected = controller.state

    assert not controller.pause()
    assert controller.state is expected


def test_start_from_pause_begins_fresh_round():
    controller, _scheduler, _audio = make_controller(targets=(7, 4))
    controller.start()
    assert not controller.start()
    controller.pause()

    assert controller.start()
    assert controller.state is GameState.PLAYING
    assert controller.target_number == 4
    assert controller.paused_from is None


def test_exit_clears_everything():
    controller, scheduler, audio = make_controller()
    controller.start()
    tap(controller, find_target(controller))

    controller.exit()

    assert controller.state is GameState.START_MENU
    assert controller.round is None
    assert controller.target_number is None
    assert controller.numbers_on_screen == []
    assert len(controller.particles) == 0
    assert controller.feedback is None
    assert not scheduler.is_scheduled(TimerKey.CUE)
    assert not scheduler.is_scheduled(TimerKey.FEEDBACK)

    scheduler.advance(10000)
    assert controller.state is GameState.START_MENU
    assert audio.played == [SUCCESS_CUE]


def test_update_advances_particles_during_feedback():
    controller, _scheduler, _audio = make_controller()
    controller.start()
    tap(controller, find_target(controller))
    before = [particle.alpha for particle in controller.particles.particles]

    controller.update(16)

    assert all(
        particle.alpha < alpha for particle, alpha in zip(controller.particles.particles, before)
    )


def test_resize_keeps_targets_that_still_fit():
    controller, _scheduler, _audio = make_controller()
    controller.start()
    before = list(controller.numbers_on_screen)

    controller.resize(1400, 900)

    assert controller.canvas_size == (1400, 900)
    assert all(a is b for a, b in zip(controller.numbers_on_screen, before))


def test_resize_relays_out_targets_that_no_longer_fit():
    controller, _scheduler, _audio = make_controller()
    controller.start()
    colors = {target.value: target.color for target in controller.numbers_on_screen}

    controller.resize(600, 400)

    assert controller.target_number == 7
    assert controller.state is GameState.PLAYING
    for target in controller.numbers_on_screen:
        assert target.hit_rect.fits_inside(600, 400)
        assert colors[target.value] is target.color


def test_shrinking_then_growing_canvas_restores_round():
    controller, _scheduler, _audio = make_controller()
    controller.start()
    values = sorted(target.value for target in controller.numbers_on_screen)

    controller.resize(1200, 20)
    assert controller.numbers_on_screen == []
    assert controller.state is GameState.PLAYING

    controller.resize(1200, 800)

    restored = [target.value for target in controller.numbers_on_screen]
    assert sorted(restored) == values
    assert restored.count(7) == 1


def test_correctly_tapped_number_stays_gone_after_resize():
    controller, _scheduler, _audio = make_controller()
    controller.start()
    tap(controller, find_target(controller))

    controller.resize(1200, 20)
    controller.resize(1200, 800)

    values = [target.value for target in controller.numbers_on_screen]
    assert 7 not in values
    assert len(values) == 4


def test_tiny_canvas_round_still_starts():
    controller, scheduler, _audio = make_controller()
    controller.resize(10, 10)

    controller.start()

    assert controller.state is GameState.PLAYING
    assert controller.numbers_on_screen == []
    assert controller.round is not None
    assert len(controller.round.warnings) == 5
    assert scheduler.is_scheduled(TimerKey.CUE)


def test_stale_feedback_timer_only_clears_message():
    controller, _scheduler, _audio = make_controller()
    controller.start()
    tap(controller, find_target(controller, matching=False))
    controller.pause()

    controller._on_feedback_timer(Feedback.WRONG)

    assert controller.state is GameState.PAUSED
    assert controller.paused_from is GameState.WRONG_FEEDBACK
    assert controller.feedback is None


def test_game_logic_imports_without_pygame():
    code = "import sys, number_match.game, number_match.demo; print('pygame' in sys.modules)"
    completed = subprocess.run(
        [sys.executable, "-c", code], cwd=ROOT, capture_output=True, text=True, check=True
    )

    assert completed.stdout.strip() == "False"


@pytest.mark.parametrize(
    "config",
    [
        {"min_number": 5, "max_number": 2},
        {"items_on_screen": 0},
        {"feedback_duration_ms": 0},
    ],
)
def test_invalid_config_is_rejected(config):
    with pytest.raises(ValueError):
        GameConfig(**config)
