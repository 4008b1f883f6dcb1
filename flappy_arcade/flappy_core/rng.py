"""
RNG - Gap Placement
===================

Provides deterministic, seedable gap positions for spawned obstacles.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional, Tuple

from flappy_arcade.flappy_core.config_loader import GameConfig, get_config


class GapSampler:
    """
    Draws whole-pixel gap tops uniformly from [min_top, max_top].

    max_top keeps the whole gap plus the ground clearance above the ground
    line, so every gap stays reachable. The generator is private to the
    sampler; nothing else draws from it.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize gap sampler.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = random.Random(seed)
        self._min_top = config.obstacles.min_top
        self._max_top = config.max_gap_top
        self._gap = config.obstacles.gap

    @property
    def bounds(self) -> Tuple[float, float]:
        """(min_top, max_top) range for gap tops."""
        return (self._min_top, self._max_top)

    @property
    def gap(self) -> float:
        """Vertical size of every gap."""
        return self._gap

    def sample_top(self) -> float:
        """Draw the next gap top, snapped to a whole pixel."""
        # Integral tops keep top + gap exact in floating point
        lo = math.ceil(self._min_top)
        hi = math.floor(self._max_top)
        return float(self._rng.randint(lo, hi))

    def sample(self) -> Tuple[float, float]:
        """
        Draw the next gap.

        Returns:
            (gap_top, gap_bottom) with gap_bottom - gap_top == gap.
        """
        top = self.sample_top()
        return (top, top + self._gap)

    def peek(self, count: int = 2) -> List[float]:
        """
        Preview upcoming gap tops without consuming them.

        Args:
            count: Number of gap tops to preview.

        Returns:
            List of upcoming gap tops.
        """
        state = self._rng.getstate()
        result = [self.sample_top() for _ in range(count)]
        self._rng.setstate(state)
        return result

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the sampler with optional new seed.

        Args:
            seed: New random seed. Keeps the current sequence if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
