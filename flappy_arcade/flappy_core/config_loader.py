"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml


WAVEFORMS = ("sine", "square", "sawtooth", "triangle")


@dataclass(frozen=True)
class BoardConfig:
    """Playfield geometry."""
    width: int                   # Playfield width in pixels
    height: int                  # Playfield height in pixels
    ground_offset: float         # Height of the ground strip from the bottom

    @property
    def ground_y(self) -> float:
        """Y coordinate of the ground line."""
        return self.height - self.ground_offset


@dataclass(frozen=True)
class PhysicsConfig:
    """Actor integration parameters."""
    gravity: float
    jump_strength: float
    dt: float


@dataclass(frozen=True)
class ActorConfig:
    """Falling actor parameters."""
    radius: float
    spawn_x_ratio: float
    spawn_y_ratio: float


@dataclass(frozen=True)
class ObstacleConfig:
    """Obstacle spawning and scrolling parameters."""
    speed: float
    gap: float
    width: float
    spawn_interval_ms: float
    min_top: float
    ground_clearance: float


@dataclass(frozen=True)
class LoopConfig:
    """Driving loop cadence."""
    target_fps: int

    @property
    def frame_ms(self) -> float:
        """Wall-clock duration of one frame in milliseconds."""
        return 1000.0 / self.target_fps


@dataclass(frozen=True)
class ToneConfig:
    """A single tone within a feedback cue."""
    frequency: float
    duration: float
    waveform: str
    volume: float
    offset_ms: float


@dataclass(frozen=True)
class AudioConfig:
    """Feedback tone parameters."""
    enabled: bool
    sample_rate: int
    master_volume: float
    cues: Dict[str, Tuple[ToneConfig, ...]]


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    physics: PhysicsConfig
    actor: ActorConfig
    obstacles: ObstacleConfig
    loop: LoopConfig
    audio: AudioConfig

    @property
    def ground_y(self) -> float:
        """Y coordinate of the ground line."""
        return self.board.ground_y

    @property
    def max_gap_top(self) -> float:
        """Largest gap top that keeps the gap clear of the ground."""
        return self.ground_y - self.obstacles.gap - self.obstacles.ground_clearance

    @property
    def actor_spawn(self) -> Tuple[float, float]:
        """(x, y) where a fresh actor is placed."""
        return (
            self.board.width * self.actor.spawn_x_ratio,
            self.board.height * self.actor.spawn_y_ratio,
        )


def _parse_tone(tone_data: List) -> ToneConfig:
    """Parse a tone from YAML."""
    if len(tone_data) != 5:
        raise ValueError(
            f"Tone must have 5 values [frequency, duration, waveform, volume, offset_ms], got {tone_data}"
        )
    return ToneConfig(
        frequency=float(tone_data[0]),
        duration=float(tone_data[1]),
        waveform=str(tone_data[2]),
        volume=float(tone_data[3]),
        offset_ms=float(tone_data[4])
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    board = config.board
    if board.width <= 0 or board.height <= 0:
        raise ValueError(f"Board size must be positive, got {board.width}x{board.height}")

    if not 0 <= board.ground_offset < board.height:
        raise ValueError(
            f"ground_offset ({board.ground_offset}) must be in [0, {board.height})"
        )

    if config.physics.dt <= 0:
        raise ValueError(f"physics.dt must be positive, got {config.physics.dt}")

    # Jump is an upward impulse, so it must point toward y = 0
    if config.physics.jump_strength >= 0:
        raise ValueError(
            f"physics.jump_strength must be negative (upward), got {config.physics.jump_strength}"
        )

    if config.actor.radius <= 0:
        raise ValueError(f"actor.radius must be positive, got {config.actor.radius}")

    obstacles = config.obstacles
    for name in ("speed", "gap", "width", "spawn_interval_ms"):
        value = getattr(obstacles, name)
        if value <= 0:
            raise ValueError(f"obstacles.{name} must be positive, got {value}")

    if obstacles.min_top < 0:
        raise ValueError(f"obstacles.min_top must be non-negative, got {obstacles.min_top}")

    if obstacles.ground_clearance < 0:
        raise ValueError(
            f"obstacles.ground_clearance must be non-negative, got {obstacles.ground_clearance}"
        )

    # Gap tops are whole pixels, so the range must hold at least one
    if math.floor(config.max_gap_top) < math.ceil(obstacles.min_top):
        raise ValueError(
            f"Gap does not fit: max gap top ({config.max_gap_top}) is below "
            f"min_top ({obstacles.min_top})"
        )

    if config.loop.target_fps <= 0:
        raise ValueError(f"loop.target_fps must be positive, got {config.loop.target_fps}")

    for cue_name, tones in config.audio.cues.items():
        for tone in tones:
            if tone.waveform not in WAVEFORMS:
                raise ValueError(
                    f"Unknown waveform '{tone.waveform}' in cue '{cue_name}', "
                    f"expected one of {WAVEFORMS}"
                )
            if tone.duration <= 0 or tone.frequency <= 0:
                raise ValueError(f"Tone in cue '{cue_name}' must have positive frequency and duration")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        width=int(board_data["width"]),
        height=int(board_data["height"]),
        ground_offset=float(board_data.get("ground_offset", 80))
    )

    physics_data = raw["physics"]
    physics = PhysicsConfig(
        gravity=float(physics_data["gravity"]),
        jump_strength=float(physics_data["jump_strength"]),
        dt=float(physics_data.get("dt", 1.0))
    )

    actor_data = raw["actor"]
    actor = ActorConfig(
        radius=float(actor_data["radius"]),
        spawn_x_ratio=float(actor_data.get("spawn_x_ratio", 0.3)),
        spawn_y_ratio=float(actor_data.get("spawn_y_ratio", 0.5))
    )

    obstacle_data = raw["obstacles"]
    obstacles = ObstacleConfig(
        speed=float(obstacle_data["speed"]),
        gap=float(obstacle_data["gap"]),
        width=float(obstacle_data["width"]),
        spawn_interval_ms=float(obstacle_data["spawn_interval_ms"]),
        min_top=float(obstacle_data.get("min_top", 80)),
        ground_clearance=float(obstacle_data.get("ground_clearance", 80))
    )

    loop_data = raw.get("loop", {})
    loop = LoopConfig(
        target_fps=int(loop_data.get("target_fps", 60))
    )

    # Audio section is optional; a missing one means silent play
    audio_data = raw.get("audio", {})
    cues = {
        str(name): tuple(_parse_tone(t) for t in tones)
        for name, tones in audio_data.get("cues", {}).items()
    }
    audio = AudioConfig(
        enabled=bool(audio_data.get("enabled", False)),
        sample_rate=int(audio_data.get("sample_rate", 44100)),
        master_volume=float(audio_data.get("master_volume", 1.0)),
        cues=cues
    )

    config = GameConfig(
        board=board,
        physics=physics,
        actor=actor,
        obstacles=obstacles,
        loop=loop,
        audio=audio
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
