"""
State Snapshot
==============

Immutable per-frame view of a session for renderers and other sinks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from flappy_arcade.flappy_core.config_loader import GameConfig, get_config
from flappy_arcade.flappy_core.entities import GameState, Session


@dataclass(frozen=True)
class ActorView:
    x: float
    y: float
    vy: float
    radius: float


@dataclass(frozen=True)
class ObstacleView:
    x: float
    width: float
    gap_top: float
    gap_bottom: float
    scored: bool


@dataclass(frozen=True)
class GameSnapshot:
    """
    Complete frame state.

    Copies values out of the session so a sink can hold on to it while the
    simulation keeps running.
    """
    state: GameState
    actor: ActorView
    obstacles: Tuple[ObstacleView, ...]
    score: int
    ticks: int
    final_score: Optional[int]

    # Board info
    board_width: float
    board_height: float
    ground_y: float

    def get_render_data(self) -> Dict[str, Any]:
        """Flatten into a plain dict."""
        return {
            "state": self.state.value,
            "actor": {
                "x": self.actor.x,
                "y": self.actor.y,
                "vy": self.actor.vy,
                "radius": self.actor.radius,
            },
            "obstacles": [
                {
                    "x": o.x,
                    "width": o.width,
                    "gap_top": o.gap_top,
                    "gap_bottom": o.gap_bottom,
                    "scored": o.scored,
                }
                for o in self.obstacles
            ],
            "score": self.score,
            "ticks": self.ticks,
            "final_score": self.final_score,
            "board_width": self.board_width,
            "board_height": self.board_height,
            "ground_y": self.ground_y,
        }


class SnapshotBuilder:
    """Builds snapshots with board geometry filled in from config."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config

    def build(self, session: Session) -> GameSnapshot:
        actor = session.actor
        return GameSnapshot(
            state=session.state,
            actor=ActorView(actor.x, actor.y, actor.vy, actor.radius),
            obstacles=tuple(
                ObstacleView(o.x, o.width, o.gap_top, o.gap_bottom, o.scored)
                for o in session.obstacles
            ),
            score=session.score,
            ticks=session.ticks,
            final_score=session.final_score,
            board_width=float(self._config.board.width),
            board_height=float(self._config.board.height),
            ground_y=self._config.ground_y,
        )
