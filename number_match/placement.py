"""Layout of number targets on the play canvas."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PADDING = 15
DEFAULT_MAX_ATTEMPTS = 100

NUMBER_FONT_SIZE_BASE = 60
NUMBER_FONT_SIZE_MIN = 24

# (font_size, text) -> (width, height)
TextMeasurer = Callable[[int, str], Tuple[float, float]]


def number_font_size(canvas_width: float) -> int:
    """Font size of the numbers, scaled with the canvas width."""

    return int(max(NUMBER_FONT_SIZE_MIN, min(NUMBER_FONT_SIZE_BASE, canvas_width / 10)))


def estimate_text_size(font_size: int, text: str) -> Tuple[float, float]:
    """Rough measurement used when no font backend is available."""

    return (0.6 * font_size * len(text), float(font_size))


class TargetColor(Enum):
    """Palette the numbers are drawn with."""

    BLUE = (0, 0, 255)
    RED = (255, 0, 0)
    GREEN = (0, 128, 0)
    BLACK = (0, 0, 0)
    ORANGE = (255, 165, 0)
    PURPLE = (128, 0, 128)

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.value


@dataclass(frozen=True)
class Box:
    """Axis aligned rectangle in canvas pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def overlaps(self, other: "Box") -> bool:
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.right and self.y <= py <= self.bottom

    def fits_inside(self, width: float, height: float) -> bool:
        return self.x >= 0 and self.y >= 0 and self.right <= width and self.bottom <= height


@dataclass(frozen=True)
class Target:
    """A number shown on screen together with its padded hit box."""

    value: int
    center_x: float
    center_y: float
    text_width: float
    text_height: float
    hit_rect: Box
    color: TargetColor


@dataclass(frozen=True)
class PlacementWarning:
    """Non-fatal record of a value that could not be laid out."""

    value: int
    reason: str


@dataclass
class PlacementResult:
    targets: List[Target] = field(default_factory=list)
    warnings: List[PlacementWarning] = field(default_factory=list)
    degenerate: bool = False
    requested: List[int] = field(default_factory=list)

    @property
    def values(self) -> List[int]:
        return [target.value for target in self.targets]


def pick_values(
    target: int,
    value_range: Tuple[int, int],
    count: int,
    rng: random.Random,
) -> List[int]:
    """Return the target plus distinct distractors in random order."""

    low, high = value_range
    pool = [value for value in range(low, high + 1) if value != target]
    distractors = rng.sample(pool, min(len(pool), max(count - 1, 0)))
    values = [target] + distractors
    rng.shuffle(values)
    return values


def layout_values(
    values: Sequence[int],
    canvas_size: Tuple[float, float],
    *,
    font_size: int,
    measure: Optional[TextMeasurer] = None,
    padding: float = DEFAULT_PADDING,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    rng: Optional[random.Random] = None,
    colors: Optional[Sequence[TargetColor]] = None,
) -> PlacementResult:
    """Randomly position ``values`` so that no two padded boxes overlap.

    Values that cannot be placed are skipped and reported in
    :attr:`PlacementResult.warnings`.  When ``colors`` is given it must be
    parallel to ``values``; otherwise colours are drawn from the palette.
    """

    rng = rng or random.Random()
    measure = measure or estimate_text_size
    canvas_width, canvas_height = canvas_size
    palette = list(TargetColor)
    result = PlacementResult(requested=list(values))
    placed: List[Box] = []

    for index, value in enumerate(values):
        text_width, _ = measure(font_size, str(value))
        text_height = float(font_size)
        box_width = text_width + padding * 2
        box_height = text_height + padding * 2

        if box_width > canvas_width or box_height > canvas_height:
            logger.warning(
                "Canvas %sx%s too small for number %s", canvas_width, canvas_height, value
            )
            result.warnings.append(PlacementWarning(value, "canvas too small"))
            result.degenerate = True
            continue

        target: Optional[Target] = None
        for _attempt in range(max_attempts):
            center_x = rng.uniform(box_width / 2, canvas_width - box_width / 2)
            center_y = rng.uniform(box_height / 2, canvas_height - box_height / 2)
            box = Box(center_x - box_width / 2, center_y - box_height / 2, box_width, box_height)
            if any(box.overlaps(existing) for existing in placed):
                continue
            color = colors[index] if colors is not None else rng.choice(palette)
            target = Target(
                value=value,
                center_x=center_x,
                center_y=center_y,
                text_width=text_width,
                text_height=text_height,
                hit_rect=box,
                color=color,
            )
            break

        if target is None:
            logger.warning("Could not place number %s without overlap", value)
            result.warnings.append(PlacementWarning(value, "no free position"))
            continue
        placed.append(target.hit_rect)
        result.targets.append(target)

    return result


def place_targets(
    target: int,
    value_range: Tuple[int, int],
    count: int,
    canvas_size: Tuple[float, float],
    *,
    font_size: int,
    measure: Optional[TextMeasurer] = None,
    padding: float = DEFAULT_PADDING,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    rng: Optional[random.Random] = None,
) -> PlacementResult:
    """Build the numbers of a round: ``target`` plus ``count - 1`` distractors."""

    rng = rng or random.Random()
    values = pick_values(target, value_range, count, rng)
    result = layout_values(
        values,
        canvas_size,
        font_size=font_size,
        measure=measure,
        padding=padding,
        max_attempts=max_attempts,
        rng=rng,
    )
    logger.debug("Placed %s for target %s", result.values, target)
    return result


def hit_test(targets: Iterable[Target], x: float, y: float) -> Optional[Target]:
    """Return the target under ``(x, y)``, preferring the most recently placed."""

    for target in reversed(list(targets)):
        if target.hit_rect.contains(x, y):
            return target
    return None
