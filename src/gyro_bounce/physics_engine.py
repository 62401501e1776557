"""
physics_engine.py: The ordered per-frame simulation step.
"""

from dataclasses import dataclass, field
from typing import List

from .data_models import GameWorld, Phase, SessionState
from .physics_core import PhysicsCore


@dataclass
class StepEvents:
    """What happened during one step, for callers that react to it."""
    dt: float = 0.0
    platform_hit: bool = False
    obstacle_hits: List[int] = field(default_factory=list)
    game_over: bool = False


@dataclass
class PhysicsEngine(PhysicsCore):
    """
    Runs the stages of PhysicsCore in their fixed order.
    Later stages read what earlier ones wrote within the same frame.
    """
    tick_count: int = 0

    def step(self, world: GameWorld, state: SessionState, tilt: float, dt: float) -> StepEvents:
        events = StepEvents()
        if dt <= 0 or not state.running:
            return events

        dt = min(dt, self.config.max_dt)
        events.dt = dt
        self.tick_count += 1

        ball = world.ball
        platform = world.platform

        # 1. Platform follows the tilt
        drive = self.move_platform(platform, tilt, dt)

        # 2. Ball motion
        self.integrate_ball(ball, dt)

        # 3-4. Screen edges
        self.bounce_side_walls(ball)
        self.bounce_top_wall(ball)

        # 5. Platform bounce scores
        if self.collide_platform(ball, platform, drive):
            state.score += 1
            events.platform_hit = True

        # 6. Obstacles move, then push the ball
        for index, obstacle in enumerate(world.obstacles):
            obstacle.advance(dt)
            if self.collide_obstacle(ball, obstacle):
                events.obstacle_hits.append(index)
        if events.obstacle_hits:
            self.keep_on_screen(ball)

        # 7. Fell through the bottom
        if self.fell_out(ball):
            state.phase = Phase.GAME_OVER
            events.game_over = True

        return events
