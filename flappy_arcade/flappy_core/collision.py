"""
Collision Detection
===================

Ground and obstacle overlap tests for the actor. Checks never mutate state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from flappy_arcade.flappy_core.config_loader import GameConfig, get_config
from flappy_arcade.flappy_core.entities import Actor, Obstacle, Session


# (x, y, width, height), y grows downward
Rect = Tuple[float, float, float, float]


def circle_rect_overlap(
    cx: float,
    cy: float,
    radius: float,
    rect: Rect
) -> bool:
    """
    Circle vs axis-aligned rectangle.

    Clamps the centre into the rectangle per axis and compares the squared
    distance to that closest point against the squared radius. Touching
    counts as overlap.
    """
    rx, ry, rw, rh = rect
    closest_x = max(rx, min(cx, rx + rw))
    closest_y = max(ry, min(cy, ry + rh))
    dx = cx - closest_x
    dy = cy - closest_y
    return dx * dx + dy * dy <= radius * radius


@dataclass(frozen=True)
class CollisionResult:
    """Result of a collision check."""
    collided: bool
    reason: str
    obstacle_index: Optional[int] = None

    @staticmethod
    def none() -> "CollisionResult":
        return CollisionResult(False, "")

    @staticmethod
    def ground() -> "CollisionResult":
        return CollisionResult(True, "ground")

    @staticmethod
    def obstacle(index: int) -> "CollisionResult":
        return CollisionResult(True, "obstacle", index)


class CollisionDetector:
    """
    Detects the two failure classes.

    - Ground: lower edge of the actor at or below the ground line
    - Obstacle: actor circle overlaps the solid part above or below a gap

    The ceiling is not a failure; the integrator clamps against it.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize collision detector.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._ground_y = config.ground_y
        self._board_height = float(config.board.height)

    @property
    def ground_y(self) -> float:
        """Y coordinate of the ground line."""
        return self._ground_y

    def obstacle_rects(self, obstacle: Obstacle) -> Tuple[Rect, Rect]:
        """
        Solid regions of an obstacle.

        Returns:
            (top_rect, bottom_rect) as (x, y, width, height).
        """
        top = (obstacle.x, 0.0, obstacle.width, obstacle.gap_top)
        bottom = (
            obstacle.x,
            obstacle.gap_bottom,
            obstacle.width,
            self._board_height - obstacle.gap_bottom
        )
        return top, bottom

    def hits_ground(self, actor: Actor) -> bool:
        return actor.bottom_y >= self._ground_y

    def hits_obstacle(self, actor: Actor, obstacle: Obstacle) -> bool:
        return any(
            circle_rect_overlap(actor.x, actor.y, actor.radius, rect)
            for rect in self.obstacle_rects(obstacle)
        )

    def check(self, session: Session) -> CollisionResult:
        """
        Check all failure conditions.

        Args:
            session: Session to inspect. Only checked while running.

        Returns:
            CollisionResult for the first failure found, ground first.
        """
        if not session.is_running:
            return CollisionResult.none()

        actor = session.actor
        if self.hits_ground(actor):
            return CollisionResult.ground()

        for index, obstacle in enumerate(session.obstacles):
            if self.hits_obstacle(actor, obstacle):
                return CollisionResult.obstacle(index)

        return CollisionResult.none()
