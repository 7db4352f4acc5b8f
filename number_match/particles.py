"""Confetti burst shown after a correct answer."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

PARTICLE_COUNT = 50
GRAVITY = 0.15
ALPHA_DECAY = 0.01
STEP_MS = 1000.0 / 60.0  # one physics step per 60 Hz frame
MAX_UPDATE_MS = STEP_MS * 4  # longer stalls are integrated as four frames


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    size: float
    color: Tuple[int, int, int]
    gravity: float = GRAVITY
    alpha: float = 1.0

    @property
    def alive(self) -> bool:
        return self.alpha > 0

    def step(self, scale: float = 1.0) -> None:
        self.vy += self.gravity * scale
        self.x += self.vx * scale
        self.y += self.vy * scale
        self.alpha -= ALPHA_DECAY * scale


@dataclass
class ParticleBurst:
    """Owns the particles of the current feedback animation."""

    particles: List[Particle] = field(default_factory=list)

    def spawn(
        self,
        x: float,
        y: float,
        color: Tuple[int, int, int],
        count: int = PARTICLE_COUNT,
        rng: Optional[random.Random] = None,
    ) -> None:
        rng = rng or random.Random()
        self.particles = [
            Particle(
                x=x,
                y=y,
                vx=rng.uniform(-3.0, 3.0),
                vy=rng.uniform(-1.0, 4.0),  # mostly downwards
                size=rng.uniform(4.0, 9.0),
                color=color,
            )
            for _ in range(count)
        ]

    def update(self, dt_ms: float) -> None:
        if not self.particles or dt_ms <= 0:
            return
        scale = min(dt_ms, MAX_UPDATE_MS) / STEP_MS
        for particle in self.particles:
            particle.step(scale)
        self.particles = [particle for particle in self.particles if particle.alive]

    def visible(self) -> Iterator[Particle]:
        return (particle for particle in self.particles if particle.alive)

    def clear(self) -> None:
        self.particles = []

    def __len__(self) -> int:
        return len(self.particles)
