"""
Entities
========

Plain simulation state: the falling actor, gap obstacles, and the session
aggregate that owns them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from flappy_arcade.flappy_core.config_loader import GameConfig, get_config


class GameState(Enum):
    """Lifecycle state of a session."""
    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass
class Actor:
    """
    The falling entity.

    Only y and vy change after creation; x stays where the actor spawned.
    """
    x: float
    y: float
    vy: float
    radius: float

    @classmethod
    def spawn(cls, config: Optional[GameConfig] = None) -> "Actor":
        """Create an actor at the configured spawn point, at rest."""
        if config is None:
            config = get_config()
        x, y = config.actor_spawn
        return cls(x=x, y=y, vy=0.0, radius=config.actor.radius)

    @property
    def leading_x(self) -> float:
        """Left edge of the collision circle."""
        return self.x - self.radius

    @property
    def bottom_y(self) -> float:
        """Lower edge of the collision circle."""
        return self.y + self.radius


@dataclass
class Obstacle:
    """A scrolling barrier with a vertical gap between gap_top and gap_bottom."""
    x: float
    width: float
    gap_top: float
    gap_bottom: float
    scored: bool = False

    @property
    def right(self) -> float:
        """Trailing (right) edge."""
        return self.x + self.width

    @property
    def gap_size(self) -> float:
        return self.gap_bottom - self.gap_top

    @property
    def is_offscreen(self) -> bool:
        """True once fully scrolled past the left boundary."""
        return self.right <= 0


@dataclass
class Session:
    """
    One playthrough's mutable state.

    Owned exclusively by CoreGame; rebuilt on every transition into RUNNING.
    """
    state: GameState
    actor: Actor
    obstacles: List[Obstacle] = field(default_factory=list)
    score: int = 0
    clock_ms: float = 0.0        # Elapsed session time fed by the driver
    last_spawn_ms: float = 0.0   # clock_ms of the most recent spawn
    ticks: int = 0
    final_score: Optional[int] = None
    termination_reason: str = ""

    @property
    def is_running(self) -> bool:
        return self.state is GameState.RUNNING

    @classmethod
    def fresh(
        cls,
        state: GameState,
        config: Optional[GameConfig] = None
    ) -> "Session":
        """Build a session with a new actor, no obstacles and a zero score."""
        if config is None:
            config = get_config()
        return cls(state=state, actor=Actor.spawn(config))
