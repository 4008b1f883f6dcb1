"""
Flappy Core - The heart of the game.

This module provides the core simulation (physics, obstacles, collisions,
lifecycle) and the feedback collaborators that present it.

Main exports:
- CoreGame: Lifecycle controller and tick loop
- Command: Command vocabulary accepted from input
- GameState: IDLE / RUNNING / TERMINATED
- GameConfig: Configuration loaded from game_config.yaml
- FeedbackSink: Base class for render / audio collaborators
- SolidRenderer: numpy frame renderer

Importing this package does not load pygame. The pygame-backed pieces
(audio.AudioFeedback, input_adapter.InputAdapter) are imported from their
modules directly.
"""

from flappy_arcade.flappy_core.config_loader import GameConfig, load_config
from flappy_arcade.flappy_core.entities import Actor, GameState, Obstacle, Session
from flappy_arcade.flappy_core.physics import PhysicsIntegrator
from flappy_arcade.flappy_core.rng import GapSampler
from flappy_arcade.flappy_core.obstacles import ObstacleManager, ObstacleUpdate
from flappy_arcade.flappy_core.collision import (
    CollisionDetector,
    CollisionResult,
    circle_rect_overlap,
)
from flappy_arcade.flappy_core.state_snapshot import GameSnapshot, SnapshotBuilder
from flappy_arcade.flappy_core.feedback import FeedbackDispatcher, FeedbackSink
from flappy_arcade.flappy_core.game import Command, CoreGame, TickResult
from flappy_arcade.flappy_core.render_solid import SolidRenderer

__all__ = [
    "GameConfig",
    "load_config",
    "Actor",
    "GameState",
    "Obstacle",
    "Session",
    "PhysicsIntegrator",
    "GapSampler",
    "ObstacleManager",
    "ObstacleUpdate",
    "CollisionDetector",
    "CollisionResult",
    "circle_rect_overlap",
    "GameSnapshot",
    "SnapshotBuilder",
    "FeedbackDispatcher",
    "FeedbackSink",
    "Command",
    "CoreGame",
    "TickResult",
    "SolidRenderer",
]
