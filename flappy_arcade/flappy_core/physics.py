"""
Physics Integrator
==================

Advances the actor's vertical velocity and position one fixed step at a time.
"""

from __future__ import annotations

from typing import Optional

from flappy_arcade.flappy_core.config_loader import GameConfig, get_config
from flappy_arcade.flappy_core.entities import Actor, Session


class PhysicsIntegrator:
    """
    Explicit Euler integration of the actor under constant gravity.

    Velocity is updated before position. The top of the playfield is a soft
    ceiling: the actor is clamped against it and loses its velocity, which
    is not a failure.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize integrator.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._gravity = config.physics.gravity
        self._jump_strength = config.physics.jump_strength
        self._dt = config.physics.dt

    @property
    def gravity(self) -> float:
        return self._gravity

    @property
    def jump_strength(self) -> float:
        return self._jump_strength

    def integrate(self, actor: Actor) -> bool:
        """
        Advance one actor by one step.

        Args:
            actor: Actor to mutate.

        Returns:
            True if the ceiling clamp was applied.
        """
        actor.vy += self._gravity * self._dt
        actor.y += actor.vy * self._dt

        if actor.y - actor.radius < 0:
            actor.y = actor.radius
            actor.vy = 0.0
            return True
        return False

    def step(self, session: Session) -> bool:
        """
        Advance the session's actor by one step.

        Does nothing unless the session is running.

        Returns:
            True if the ceiling clamp was applied.
        """
        if not session.is_running:
            return False
        return self.integrate(session.actor)

    def jump(self, actor: Actor) -> None:
        """Replace the actor's velocity with the upward jump impulse."""
        actor.vy = self._jump_strength
