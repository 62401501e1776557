"""
collision.py: Geometric primitives shared by the physics step.
"""

import logging
import math
from dataclasses import dataclass

from pygame.math import Vector2 as Vec2

logger = logging.getLogger(__name__)

# Below this the circle center is treated as lying on (or inside) the rect.
DEGENERATE_DISTANCE = 1e-9

UP = (0.0, -1.0)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned float rectangle (screen coordinates, y grows downward)."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class Collision:
    collided: bool
    normal: Vec2
    distance: float


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(v, hi))


def nearest_point_on_rect(point: Vec2, rect: Rect) -> Vec2:
    """Clamps x and y independently into the rectangle."""
    return Vec2(clamp(point.x, rect.left, rect.right),
                clamp(point.y, rect.top, rect.bottom))


def circle_rect_collision(center: Vec2, radius: float, rect: Rect) -> Collision:
    """
    Tests a circle against a rectangle using the rect's nearest point.

    The normal points from the rectangle toward the circle center. A center
    inside the rect has no usable direction, so the normal falls back to
    straight up with zero distance.
    """
    delta = Vec2(center) - nearest_point_on_rect(center, rect)
    dist_sq = delta.length_squared()
    collided = dist_sq < radius * radius

    distance = math.sqrt(dist_sq)
    if distance <= DEGENERATE_DISTANCE:
        if collided:
            logger.debug("Degenerate collision normal at %s, using up", center)
        return Collision(collided, Vec2(UP), 0.0)

    return Collision(collided, delta / distance, distance)


def reflect_along_normal(velocity: Vec2, normal: Vec2, restitution: float) -> Vec2:
    """v' = v - (1 + e)(v.n)n for a unit normal n."""
    return velocity - normal * ((1.0 + restitution) * velocity.dot(normal))
