import random

import pytest
from pygame.math import Vector2 as Vec2

from gyro_bounce.data_models import Ball, GameWorld, Platform
from gyro_bounce.difficulty import EASY, HARD
from gyro_bounce.errors import StorageError
from gyro_bounce.game_config import CFG
from gyro_bounce.physics_engine import PhysicsEngine


class NoJitter(random.Random):
    """Random source whose uniform() always lands in the middle."""

    def uniform(self, a, b):
        return (a + b) / 2


class EdgeJitter(random.Random):
    """Random source whose uniform() always returns one end of the range."""

    def __init__(self, high=True):
        super().__init__(0)
        self.high = high

    def uniform(self, a, b):
        return b if self.high else a


class MemoryStore:
    def __init__(self, values=None):
        self.values = dict(values or {})
        self.writes = []

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value):
        self.writes.append((key, value))
        self.values[key] = value
        return True


class BrokenStore:
    def __init__(self, fail_get=True, fail_set=True):
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.values = {}

    def get(self, key):
        if self.fail_get:
            raise StorageError("disk on fire")
        return self.values.get(key)

    def set(self, key, value):
        if self.fail_set:
            raise StorageError("disk on fire")
        self.values[key] = value
        return True


@pytest.fixture
def config():
    return CFG


@pytest.fixture
def memory_store():
    return MemoryStore


@pytest.fixture
def broken_store():
    return BrokenStore


@pytest.fixture
def no_jitter():
    return NoJitter()


@pytest.fixture
def edge_engine():
    def _make(high=True):
        return PhysicsEngine(profile=HARD, config=CFG, rng=EdgeJitter(high))

    return _make


@pytest.fixture
def hard_engine(no_jitter):
    return PhysicsEngine(profile=HARD, config=CFG, rng=no_jitter)


@pytest.fixture
def easy_engine(no_jitter):
    return PhysicsEngine(profile=EASY, config=CFG, rng=no_jitter)


@pytest.fixture
def make_world(config):
    """World with a centered platform, no obstacles, ball where asked."""

    def _make(x=None, y=300.0, vx=0.0, vy=0.0, platform_width=120.0, obstacles=()):
        if x is None:
            x = config.screen_width / 2
        ball = Ball(pos=Vec2(x, y), vel=Vec2(vx, vy), radius=config.ball_radius)
        platform = Platform(
            x=(config.screen_width - platform_width) / 2,
            y=config.platform_y,
            width=platform_width,
            height=config.platform_height,
        )
        return GameWorld(ball=ball, platform=platform, obstacles=list(obstacles))

    return _make
