"""
Flappy Arcade Package
=====================

This package contains the core game logic, physics, obstacle spawning,
collision detection and feedback collaborators for Flappy Arcade:

- Gravity and jump impulse integration
- Gap obstacle spawning, scrolling and scoring
- Ground and obstacle collision tests
- Idle / running / terminated lifecycle
- Tone synthesis and frame rendering

All tunable parameters are in game_config.yaml and are read once at startup.
"""
