"""Number Match package."""

from .game import Feedback, GameConfig, GameState, Round, RoundController
from .placement import PlacementResult, Target, hit_test, place_targets
from .scheduler import Scheduler, TimerKey

__all__ = [
    "Feedback",
    "GameConfig",
    "GameState",
    "Round",
    "RoundController",
    "PlacementResult",
    "Target",
    "hit_test",
    "place_targets",
    "Scheduler",
    "TimerKey",
]
