"""
Core Game
=========

Lifecycle controller combining physics, obstacles, collisions and feedback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from flappy_arcade.flappy_core.collision import CollisionDetector, CollisionResult
from flappy_arcade.flappy_core.config_loader import GameConfig, get_config
from flappy_arcade.flappy_core.entities import GameState, Session
from flappy_arcade.flappy_core.feedback import FeedbackDispatcher, FeedbackSink
from flappy_arcade.flappy_core.obstacles import ObstacleManager
from flappy_arcade.flappy_core.physics import PhysicsIntegrator
from flappy_arcade.flappy_core.rng import GapSampler
from flappy_arcade.flappy_core.state_snapshot import GameSnapshot, SnapshotBuilder

logger = logging.getLogger(__name__)


class Command(Enum):
    """Commands accepted from the input adapter."""
    START = "start"
    JUMP = "jump"
    RESTART = "restart"


@dataclass
class TickResult:
    """Result of a single tick."""
    state: GameState
    snapshot: GameSnapshot
    advanced: bool
    scored: int
    collision: CollisionResult

    @property
    def terminated(self) -> bool:
        return self.state is GameState.TERMINATED


class CoreGame:
    """
    Main game simulation class.

    Owns the session and orchestrates, once per tick while running:
    - Physics integration
    - Obstacle spawn / scroll / score / prune
    - Collision detection

    Lifecycle:
        IDLE --start--> RUNNING --collision--> TERMINATED --restart--> RUNNING

    The driver calls tick() once per frame and stops calling it once the
    session is terminated. Commands are applied between ticks.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        sinks: Optional[Iterable[FeedbackSink]] = None
    ):
        """
        Initialize game in the IDLE state.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for gap placement.
            sinks: Feedback collaborators to notify.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed

        # Initialize subsystems
        self._sampler = GapSampler(config, seed)
        self._physics = PhysicsIntegrator(config)
        self._obstacles = ObstacleManager(config, self._sampler)
        self._collisions = CollisionDetector(config)
        self._snapshot_builder = SnapshotBuilder(config)
        self._feedback = FeedbackDispatcher(sinks)

        self._frame_ms = config.loop.frame_ms

        # Idle session shows the actor in its spawn pose
        self._session = Session.fresh(GameState.IDLE, config)

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def session(self) -> Session:
        """Current session (owned by the game; do not mutate)."""
        return self._session

    @property
    def state(self) -> GameState:
        """Current lifecycle state."""
        return self._session.state

    @property
    def score(self) -> int:
        """Current score."""
        return self._session.score

    @property
    def is_running(self) -> bool:
        return self._session.state is GameState.RUNNING

    @property
    def is_over(self) -> bool:
        """True if the session has terminated."""
        return self._session.state is GameState.TERMINATED

    @property
    def termination_reason(self) -> str:
        """Reason for game end, or empty string."""
        return self._session.termination_reason

    @property
    def physics(self) -> PhysicsIntegrator:
        return self._physics

    @property
    def obstacles(self) -> ObstacleManager:
        return self._obstacles

    @property
    def collisions(self) -> CollisionDetector:
        return self._collisions

    def add_sink(self, sink: FeedbackSink) -> None:
        """Register a feedback collaborator."""
        self._feedback.add(sink)

    def remove_sink(self, sink: FeedbackSink) -> None:
        self._feedback.remove(sink)

    # Commands

    def start(self, seed: Optional[int] = None) -> bool:
        """
        Begin a new session from IDLE or TERMINATED.

        Args:
            seed: Reseed gap placement. Continues the current sequence if None.

        Returns:
            True if a session started, False if one is already running.
        """
        if self.is_running:
            return False

        if seed is not None:
            self._seed = seed
            self._sampler.reset(seed)

        self._begin_session()
        return True

    def restart(self, seed: Optional[int] = None) -> bool:
        """
        Begin a new session after termination.

        Returns:
            True if restarted, False unless the session is TERMINATED.
        """
        if not self.is_over:
            return False
        return self.start(seed)

    def jump(self) -> bool:
        """
        Apply the jump impulse.

        Returns:
            True if applied. Outside RUNNING there is no simulation effect
            and no feedback.
        """
        if not self.is_running:
            return False

        self._physics.jump(self._session.actor)
        self._feedback.emit("on_jump")
        return True

    def apply(self, command: Command) -> bool:
        """
        Apply a command from the input adapter.

        Returns:
            True if the command was valid in the current state.
        """
        if command is Command.START:
            return self.start()
        if command is Command.JUMP:
            return self.jump()
        if command is Command.RESTART:
            return self.restart()
        raise ValueError(f"Unknown command: {command!r}")

    # Simulation

    def tick(self, elapsed_ms: Optional[float] = None) -> TickResult:
        """
        Execute one tick: physics, obstacles, collisions.

        Args:
            elapsed_ms: Wall-clock time since the previous tick, used only
                for spawn cadence. Defaults to one frame at the target fps.

        Returns:
            TickResult with the new state and a snapshot.
        """
        session = self._session
        if not session.is_running:
            return TickResult(
                state=session.state,
                snapshot=self.snapshot(),
                advanced=False,
                scored=0,
                collision=CollisionResult.none()
            )

        if elapsed_ms is None:
            elapsed_ms = self._frame_ms

        session.clock_ms += elapsed_ms
        session.ticks += 1

        self._physics.step(session)

        update = self._obstacles.update(session)
        for _ in update.scored:
            self._feedback.emit("on_score", session.score)
        if update.scored:
            logger.debug(f"Score: {session.score}")

        collision = self._collisions.check(session)
        if collision.collided:
            self._terminate(collision.reason)
            return TickResult(
                state=session.state,
                snapshot=self.snapshot(),
                advanced=True,
                scored=update.points,
                collision=collision
            )

        snapshot = self.snapshot()
        self._feedback.emit("on_tick", snapshot)
        return TickResult(
            state=session.state,
            snapshot=snapshot,
            advanced=True,
            scored=update.points,
            collision=collision
        )

    def snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return self._snapshot_builder.build(self._session)

    def get_info(self) -> Dict[str, Any]:
        """Summary of the current session."""
        session = self._session
        return {
            "state": session.state.value,
            "score": session.score,
            "ticks": session.ticks,
            "obstacle_count": len(session.obstacles),
            "clock_ms": session.clock_ms,
            "final_score": session.final_score,
            "terminated_reason": session.termination_reason,
        }

    def _begin_session(self) -> None:
        """Reset score, actor, obstacles and spawn baseline, then run."""
        self._session = Session.fresh(GameState.RUNNING, self._config)

        logger.info("Session started")
        self._feedback.emit("on_state_change", GameState.RUNNING, 0)

    def _terminate(self, reason: str) -> None:
        """Freeze the session and report the final score."""
        session = self._session
        session.state = GameState.TERMINATED
        session.final_score = session.score
        session.termination_reason = reason

        logger.info(f"Session over ({reason}) - score {session.score} after {session.ticks} ticks")
        self._feedback.emit("on_terminate", session.score)
        self._feedback.emit("on_state_change", GameState.TERMINATED, session.score)
