"""
obstacles.py: Procedural placement of the sliding obstacles.
"""

import random
from typing import List

from .data_models import Obstacle
from .game_config import GameConfig


def spawn_obstacle(base_speed: float, config: GameConfig, platform_y: float,
                   rng: random.Random) -> Obstacle:
    """Draws one obstacle; every dimension comes from an independent draw."""
    width = rng.uniform(*config.obstacle_width)
    height = rng.uniform(*config.obstacle_height)

    lowest = max(config.obstacle_top_margin,
                 platform_y - config.obstacle_clearance - height)
    y = rng.uniform(config.obstacle_top_margin, lowest)

    range_max = max(config.obstacle_min_range,
                    config.screen_width - width - 2 * config.obstacle_side_margin)
    travel = rng.uniform(config.obstacle_min_range, range_max)

    # base + travel keeps the whole bar on screen
    base = rng.uniform(0.0, max(0.0, config.screen_width - width - travel))

    speed = base_speed * rng.uniform(*config.obstacle_speed_factor)
    direction = rng.choice((1, -1))

    return Obstacle(
        width=width,
        height=height,
        y=y,
        base=base,
        travel=travel,
        speed=speed,
        direction=direction,
        offset=travel / 2,
    )


def generate_obstacles(count: int, base_speed: float, config: GameConfig,
                       platform_y: float, rng: random.Random) -> List[Obstacle]:
    return [spawn_obstacle(base_speed, config, platform_y, rng) for _ in range(max(0, count))]
