"""
Obstacle Manager
================

Spawns, scrolls, scores and prunes gap obstacles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from flappy_arcade.flappy_core.config_loader import GameConfig, get_config
from flappy_arcade.flappy_core.entities import Obstacle, Session
from flappy_arcade.flappy_core.rng import GapSampler

logger = logging.getLogger(__name__)


@dataclass
class ObstacleUpdate:
    """Result of one obstacle update."""
    spawned: Optional[Obstacle] = None
    scored: List[Obstacle] = field(default_factory=list)
    pruned: int = 0

    @property
    def points(self) -> int:
        """Score gained during the update."""
        return len(self.scored)


class ObstacleManager:
    """
    Runs the obstacle half of a tick.

    Order within one update:
    1. Spawn at the right boundary when the spawn interval has elapsed
    2. Scroll every obstacle left, including one spawned this update
    3. Score obstacles whose trailing edge the actor has passed
    4. Prune obstacles that have fully left the playfield
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        sampler: Optional[GapSampler] = None
    ):
        """
        Initialize obstacle manager.

        Args:
            config: Game configuration. Uses default if None.
            sampler: Gap position source. A fresh unseeded sampler if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._sampler = sampler if sampler is not None else GapSampler(config)
        self._speed = config.obstacles.speed
        self._width = config.obstacles.width
        self._interval_ms = config.obstacles.spawn_interval_ms
        self._spawn_x = float(config.board.width)

    @property
    def sampler(self) -> GapSampler:
        return self._sampler

    def spawn_due(self, session: Session) -> bool:
        """True once strictly more than the spawn interval has elapsed."""
        return session.clock_ms - session.last_spawn_ms > self._interval_ms

    def spawn(self, session: Session) -> Obstacle:
        """
        Append a new obstacle at the right boundary.

        Records the session clock as the last spawn time.
        """
        gap_top, gap_bottom = self._sampler.sample()
        obstacle = Obstacle(
            x=self._spawn_x,
            width=self._width,
            gap_top=gap_top,
            gap_bottom=gap_bottom
        )
        session.obstacles.append(obstacle)
        session.last_spawn_ms = session.clock_ms

        logger.debug(f"Spawned obstacle gap=[{gap_top:.1f}, {gap_bottom:.1f}]")
        return obstacle

    def update(self, session: Session) -> ObstacleUpdate:
        """
        Spawn, scroll, score and prune.

        Does nothing unless the session is running.

        Args:
            session: Session whose obstacles and score are updated.

        Returns:
            ObstacleUpdate describing what changed.
        """
        result = ObstacleUpdate()
        if not session.is_running:
            return result

        if self.spawn_due(session):
            result.spawned = self.spawn(session)

        actor = session.actor
        for obstacle in session.obstacles:
            obstacle.x -= self._speed

            if not obstacle.scored and actor.leading_x > obstacle.right:
                obstacle.scored = True
                session.score += 1
                result.scored.append(obstacle)

        before = len(session.obstacles)
        session.obstacles = [o for o in session.obstacles if not o.is_offscreen]
        result.pruned = before - len(session.obstacles)

        return result
