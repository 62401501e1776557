"""
physics_core.py: The per-stage kinematics and collision responses.
"""

import random
from dataclasses import dataclass, field

from .collision import circle_rect_collision, clamp, reflect_along_normal
from .data_models import Ball, Obstacle, Platform
from .difficulty import DifficultyProfile
from .game_config import CFG, GameConfig


@dataclass
class PhysicsCore:
    """
    Stage-by-stage physics shared by the engine and by tests.
    Every method mutates the entities it is handed in place.
    """
    profile: DifficultyProfile
    config: GameConfig = CFG
    rng: random.Random = field(default_factory=random.Random)

    def move_platform(self, platform: Platform, tilt: float, dt: float) -> float:
        """Drives the platform from the tilt sample; returns the drive velocity."""
        drive = tilt * self.config.sensitivity
        platform.x += drive * dt
        platform.x = clamp(platform.x, 0.0, self.config.screen_width - platform.width)
        return drive

    def integrate_ball(self, ball: Ball, dt: float):
        """Semi-implicit Euler: velocity first, then position."""
        ball.vel.y += self.profile.gravity * dt
        ball.pos.x += ball.vel.x * dt
        ball.pos.y += ball.vel.y * dt

    def bounce_side_walls(self, ball: Ball) -> bool:
        r = ball.radius
        if ball.pos.x - r < 0:
            ball.pos.x = r
            ball.vel.x = abs(ball.vel.x) * self.config.side_friction
            return True
        if ball.pos.x + r > self.config.screen_width:
            ball.pos.x = self.config.screen_width - r
            ball.vel.x = -abs(ball.vel.x) * self.config.side_friction
            return True
        return False

    def bounce_top_wall(self, ball: Ball) -> bool:
        if ball.top < 0:
            ball.pos.y = ball.radius
            ball.vel.y = abs(ball.vel.y) * self.profile.restitution
            return True
        return False

    def platform_contact(self, ball: Ball, platform: Platform) -> bool:
        """Ball straddles the platform top line, within reach horizontally, falling."""
        nearest_x = clamp(ball.pos.x, platform.x, platform.x + platform.width)
        dist_x = abs(nearest_x - ball.pos.x)
        return (ball.bottom >= platform.y
                and ball.top <= platform.y
                and dist_x <= ball.radius + 0.0001
                and ball.vel.y > 0)

    def collide_platform(self, ball: Ball, platform: Platform, drive: float) -> bool:
        if not self.platform_contact(ball, platform):
            return False

        ball.pos.y = platform.y - ball.radius - self.config.snap_gap
        ball.vel.y = -abs(ball.vel.y) * self.profile.restitution

        jitter = self.config.platform_jitter
        ball.vel.x += drive * self.config.drive_transfer + self.rng.uniform(-jitter, jitter)
        return True

    def collide_obstacle(self, ball: Ball, obstacle: Obstacle) -> bool:
        hit = circle_rect_collision(ball.pos, ball.radius, obstacle.rect)
        if not hit.collided:
            return False

        # push out by the penetration depth
        ball.pos += hit.normal * (ball.radius - hit.distance)

        if ball.vel.dot(hit.normal) < 0:
            ball.vel = reflect_along_normal(ball.vel, hit.normal, self.profile.restitution)

        jitter = self.config.obstacle_jitter
        ball.vel.x += self.rng.uniform(-jitter, jitter)
        ball.vel.y += self.rng.uniform(-jitter, jitter)
        return True

    def keep_on_screen(self, ball: Ball):
        """Clamps x after obstacle push-out; velocity is left alone."""
        ball.pos.x = clamp(ball.pos.x, ball.radius, self.config.screen_width - ball.radius)

    def fell_out(self, ball: Ball) -> bool:
        return ball.top > self.config.screen_height
