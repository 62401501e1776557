"""
session.py: One game session - owns the world, runs the state machine and
commits the best score when the ball is lost.
"""

import logging
import random
from typing import Any, Dict, Optional

from pygame.math import Vector2 as Vec2

from .constants import ACCEL_UPDATE_MS, HIGH_SCORE_BASE_KEY
from .data_models import Ball, GameWorld, Phase, Platform, SessionState
from .difficulty import DEFAULT_DIFFICULTY, DifficultyProfile, get_profile
from .errors import StorageError
from .game_config import CFG, GameConfig
from .obstacles import generate_obstacles
from .physics_engine import PhysicsEngine, StepEvents
from .score_store import ScoreStore
from .tilt import Subscription, TiltRegister

logger = logging.getLogger(__name__)


class FrameClock:
    """Turns host timestamps (seconds) into clamped frame deltas."""

    def __init__(self, max_dt: float = CFG.max_dt):
        self.max_dt = max_dt
        self.last: Optional[float] = None

    def reset(self):
        self.last = None

    def advance(self, now: float) -> float:
        """The first frame after a reset only records its timestamp."""
        if self.last is None:
            self.last = now
            return 0.0
        dt = min(max(now - self.last, 0.0), self.max_dt)
        self.last = now
        return dt


class GameSession:
    """
    Owns every entity of a game. The host calls tick(dt) at its own cadence
    and reads snapshot() to draw.
    """

    def __init__(self,
                 difficulty: str = DEFAULT_DIFFICULTY,
                 config: GameConfig = CFG,
                 store: Optional[ScoreStore] = None,
                 rng: Optional[random.Random] = None,
                 base_key: str = HIGH_SCORE_BASE_KEY):
        self.profile: DifficultyProfile = get_profile(difficulty)
        self.config = config
        self.store = store
        self.rng = rng if rng is not None else random.Random()
        self.base_key = base_key

        self.tilt = TiltRegister()
        self._subscription: Optional[Subscription] = None

        self.engine = PhysicsEngine(profile=self.profile, config=config, rng=self.rng)
        self.state = SessionState()
        self.world = self._build_world()
        self.new_record = False

    # ---------------- Lifecycle ----------------
    @property
    def difficulty(self) -> str:
        return self.profile.name

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def score(self) -> int:
        return self.state.score

    def _build_world(self) -> GameWorld:
        cfg = self.config
        width = self.profile.platform_width(cfg.screen_width)
        platform_y = cfg.platform_y

        ball = Ball(
            pos=Vec2(cfg.screen_width / 2, platform_y - cfg.ball_drop_height),
            vel=Vec2(0, 0),
            radius=cfg.ball_radius,
        )
        platform = Platform(
            x=(cfg.screen_width - width) / 2,
            y=platform_y,
            width=width,
            height=cfg.platform_height,
        )
        obstacles = generate_obstacles(
            self.profile.obstacle_count, self.profile.obstacle_speed, cfg, platform_y, self.rng)
        return GameWorld(ball=ball, platform=platform, obstacles=obstacles)

    def reset_game(self):
        """Fresh entities, score 0, back to Running."""
        self.world = self._build_world()
        self.state = SessionState()
        self.new_record = False
        logger.info("New %s game with %d obstacles.", self.difficulty, len(self.world.obstacles))

    def change_difficulty(self, name: str):
        """Swaps the profile and restarts; an unknown name leaves the session as it was."""
        profile = get_profile(name)
        self.profile = profile
        self.engine = PhysicsEngine(profile=profile, config=self.config, rng=self.rng)
        self.reset_game()

    # ---------------- Frame ----------------
    def tick(self, dt: float) -> Optional[StepEvents]:
        """Advances one frame. While the game is over the world stays frozen."""
        if not self.state.running:
            return None

        events = self.engine.step(self.world, self.state, self.tilt.read(), dt)
        if events.game_over:
            logger.info("Game over on %s, score %d.", self.difficulty, self.state.score)
            self.commit_high_score()
        return events

    def set_tilt(self, value: float):
        self.tilt.write(value)

    # ---------------- Tilt feed ----------------
    def attach_tilt(self, source, interval_ms: int = ACCEL_UPDATE_MS) -> Subscription:
        self.detach_tilt()
        self._subscription = source.subscribe(interval_ms, self.tilt.write)
        return self._subscription

    def detach_tilt(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def close(self):
        self.detach_tilt()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    # ---------------- High scores ----------------
    def high_score_key(self, difficulty: Optional[str] = None) -> str:
        return f"{self.base_key}_{difficulty or self.difficulty}"

    def best_score(self, difficulty: Optional[str] = None) -> int:
        """Stored best for a difficulty; 0 when absent or unreadable."""
        if self.store is None:
            return 0
        if difficulty is not None:
            difficulty = get_profile(difficulty).name
        key = self.high_score_key(difficulty)
        try:
            stored = self.store.get(key)
        except StorageError as e:
            logger.warning("Failed to load high score %s: %s", key, e)
            return 0
        return stored or 0

    def commit_high_score(self) -> bool:
        """Writes the final score only when it beats the stored one."""
        self.new_record = False
        if self.store is None:
            return False

        key = self.high_score_key()
        final = self.state.score
        try:
            stored = self.store.get(key)
        except StorageError as e:
            logger.warning("Failed to load high score %s: %s", key, e)
            stored = None

        if final <= (stored or 0):
            return False

        try:
            written = bool(self.store.set(key, final))
        except StorageError as e:
            logger.warning("Failed to save high score %s: %s", key, e)
            return False

        if written:
            logger.info("New best on %s: %d (was %s).", self.difficulty, final, stored)
        self.new_record = written
        return written

    # ---------------- Render surface ----------------
    def snapshot(self) -> Dict[str, Any]:
        return {
            "ball": self.world.ball.to_render_state(),
            "platform": self.world.platform.to_render_state(),
            "obstacles": [o.to_render_state() for o in self.world.obstacles],
            "score": self.state.score,
            "phase": self.state.phase.value,
            "difficulty": self.difficulty,
            "new_record": self.new_record,
        }
