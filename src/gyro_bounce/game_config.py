"""
game_config.py: Immutable bundle of the world tuning shared by every session.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from . import constants


@dataclass(frozen=True)
class GameConfig:
    screen_width: float = constants.SCREEN_WIDTH
    screen_height: float = constants.SCREEN_HEIGHT

    max_dt: float = constants.MAX_DT

    ball_radius: float = constants.BALL_RADIUS
    platform_height: float = constants.PLATFORM_HEIGHT
    platform_bottom_offset: float = constants.PLATFORM_BOTTOM_OFFSET
    ball_drop_height: float = constants.BALL_DROP_HEIGHT

    sensitivity: float = constants.ACCEL_SENSITIVITY
    side_friction: float = constants.SIDE_FRICTION
    drive_transfer: float = constants.PLATFORM_DRIVE_TRANSFER
    snap_gap: float = constants.PLATFORM_SNAP_GAP
    platform_jitter: float = constants.PLATFORM_JITTER
    obstacle_jitter: float = constants.OBSTACLE_JITTER

    # obstacle generation
    obstacle_width: Tuple[float, float] = constants.OBSTACLE_WIDTH_RANGE
    obstacle_height: Tuple[float, float] = constants.OBSTACLE_HEIGHT_RANGE
    obstacle_top_margin: float = constants.OBSTACLE_TOP_MARGIN
    obstacle_clearance: float = constants.OBSTACLE_PLATFORM_CLEARANCE
    obstacle_side_margin: float = constants.OBSTACLE_SIDE_MARGIN
    obstacle_min_range: float = constants.OBSTACLE_MIN_RANGE
    obstacle_speed_factor: Tuple[float, float] = constants.OBSTACLE_SPEED_FACTOR

    @property
    def platform_y(self) -> float:
        return self.screen_height - self.platform_bottom_offset

    def for_screen(self, width: float, height: float) -> "GameConfig":
        """Same tuning, different window."""
        return replace(self, screen_width=float(width), screen_height=float(height))


CFG = GameConfig()
