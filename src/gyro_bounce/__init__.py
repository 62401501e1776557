"""
Gyro Bounce: keep a ball bouncing on a tilt-driven platform.
"""

from .collision import (
    Collision, Rect, circle_rect_collision, clamp, nearest_point_on_rect, reflect_along_normal
)
from .data_models import Ball, GameWorld, Obstacle, Phase, Platform, SessionState
from .difficulty import DifficultyProfile, available_difficulties, get_profile
from .errors import ConfigurationError, GameError, StorageError
from .game_config import CFG, GameConfig
from .obstacles import generate_obstacles
from .physics_engine import PhysicsEngine, StepEvents
from .score_store import ScoreStore, SQLiteScoreStore
from .session import FrameClock, GameSession
from .tilt import KeyboardTilt, PollingTiltSource, TiltRegister

__version__ = "1.0.0"

__all__ = [
    "Ball", "CFG", "Collision", "ConfigurationError", "DifficultyProfile", "FrameClock",
    "GameConfig", "GameError", "GameSession", "GameWorld", "KeyboardTilt", "Obstacle",
    "Phase", "PhysicsEngine", "Platform", "PollingTiltSource", "Rect", "SQLiteScoreStore",
    "ScoreStore", "SessionState", "StepEvents", "StorageError", "TiltRegister",
    "available_difficulties", "circle_rect_collision", "clamp", "generate_obstacles",
    "get_profile", "nearest_point_on_rect", "reflect_along_normal",
]
