"""
data_models.py: Data structures for the simulation state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from pygame.math import Vector2 as Vec2

from .collision import Rect


class Phase(str, Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class Ball:
    """The ball owned by a session; only the physics step moves it."""
    pos: Vec2
    vel: Vec2 = field(default_factory=Vec2)
    radius: float = 16.0

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError(f"ball radius must be positive, got {self.radius}")

    @property
    def top(self) -> float:
        return self.pos.y - self.radius

    @property
    def bottom(self) -> float:
        return self.pos.y + self.radius

    def to_render_state(self):
        return {
            "x": round(self.pos.x, 2),
            "y": round(self.pos.y, 2),
            "vx": round(self.vel.x, 2),
            "vy": round(self.vel.y, 2),
            "r": self.radius,
        }


@dataclass
class Platform:
    x: float
    y: float
    width: float
    height: float

    def to_render_state(self):
        return {
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "w": round(self.width, 2),
            "h": self.height,
        }


@dataclass
class Obstacle:
    """A bar sliding back and forth over [base, base + travel]."""
    width: float
    height: float
    y: float
    base: float
    travel: float           # oscillation range
    speed: float
    direction: int = 1
    offset: float = 0.0     # current position within the range

    @property
    def x(self) -> float:
        return self.base + self.offset

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def advance(self, dt: float):
        """Moves along the range, reversing exactly at either end."""
        self.offset += self.direction * self.speed * dt
        if self.offset >= self.travel:
            self.offset = self.travel
            self.direction = -1
        elif self.offset <= 0.0:
            self.offset = 0.0
            self.direction = 1

    def to_render_state(self):
        return {
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "w": round(self.width, 2),
            "h": round(self.height, 2),
        }


@dataclass
class GameWorld:
    """Every entity of one session."""
    ball: Ball
    platform: Platform
    obstacles: List[Obstacle] = field(default_factory=list)


@dataclass
class SessionState:
    score: int = 0
    phase: Phase = Phase.RUNNING

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUNNING
