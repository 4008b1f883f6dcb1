"""
Solid Renderer
==============

Fast numpy-based renderer that draws a frame as flat shapes: sky gradient,
ground strip, pipes and the bird. Text (score, overlays) is left to the
window layer.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from flappy_arcade.flappy_core.config_loader import GameConfig, get_config
from flappy_arcade.flappy_core.state_snapshot import GameSnapshot


Color = Tuple[int, int, int]

SKY_STOPS = (
    (0.0, (78, 192, 202)),     # #4ec0ca
    (0.7, (135, 206, 235)),    # #87ceeb
    (1.0, (222, 232, 160)),    # #dee8a0
)
GROUND_COLOR: Color = (222, 184, 135)       # #deb887
GROUND_EDGE_COLOR: Color = (139, 69, 19)    # #8b4513
GROUND_EDGE_HEIGHT = 6
PIPE_COLOR: Color = (39, 174, 96)           # #27ae60
PIPE_OUTLINE_COLOR: Color = (30, 132, 73)   # #1e8449
BIRD_COLOR: Color = (241, 196, 15)          # #f1c40f
BIRD_OUTLINE_COLOR: Color = (183, 149, 11)  # #b7950b
EYE_COLOR: Color = (0, 0, 0)
EYE_OFFSET = (5, -3)
EYE_RADIUS = 4
OUTLINE_THICKNESS = 2


class SolidRenderer:
    """
    Renders a GameSnapshot to an RGB array.

    Draw order is sky, ground, pipes, bird, so pipes overlap the ground.
    The sky and ground layer never changes and is rendered once.
    """

    def __init__(self, config: Optional[GameConfig] = None, scale: float = 1.0):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
            scale: Output pixels per world unit.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._scale = scale
        self._width = int(round(config.board.width * scale))
        self._height = int(round(config.board.height * scale))
        self._background = self._create_background()

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) of rendered frames."""
        return (self._width, self._height)

    def _create_background(self) -> np.ndarray:
        """Sky gradient with the ground strip on top."""
        img = np.zeros((self._height, self._width, 3), dtype=np.uint8)

        t = np.arange(self._height) / max(self._height - 1, 1)
        positions = [p for p, _ in SKY_STOPS]
        for channel in range(3):
            values = [c[channel] for _, c in SKY_STOPS]
            column = np.rint(np.interp(t, positions, values)).astype(np.uint8)
            img[:, :, channel] = column[:, np.newaxis]

        ground_y = int(round(self._config.ground_y * self._scale))
        edge = int(round(GROUND_EDGE_HEIGHT * self._scale))
        img[ground_y:, :] = GROUND_COLOR
        img[ground_y:ground_y + edge, :] = GROUND_EDGE_COLOR
        return img

    def render(self, snapshot: GameSnapshot) -> np.ndarray:
        """
        Render a snapshot.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = self._background.copy()

        for obstacle in snapshot.obstacles:
            top = (obstacle.x, 0.0, obstacle.x + obstacle.width, obstacle.gap_top)
            bottom = (obstacle.x, obstacle.gap_bottom, obstacle.x + obstacle.width, snapshot.board_height)
            for rect in (top, bottom):
                self._draw_rect(img, rect, PIPE_COLOR)
                self._draw_rect_outline(img, rect, PIPE_OUTLINE_COLOR, OUTLINE_THICKNESS)

        actor = snapshot.actor
        s = self._scale
        cx = int(round(actor.x * s))
        cy = int(round(actor.y * s))
        radius = int(round(actor.radius * s))
        self._draw_circle(img, cx, cy, radius, BIRD_COLOR)
        self._draw_circle_outline(img, cx, cy, radius, BIRD_OUTLINE_COLOR, OUTLINE_THICKNESS)
        self._draw_circle(
            img,
            int(round((actor.x + EYE_OFFSET[0]) * s)),
            int(round((actor.y + EYE_OFFSET[1]) * s)),
            int(round(EYE_RADIUS * s)),
            EYE_COLOR
        )

        return img

    def _to_pixels(self, rect: Tuple[float, float, float, float]) -> Tuple[int, int, int, int]:
        """World (x0, y0, x1, y1) to clipped pixel bounds."""
        s = self._scale
        x0 = max(0, int(round(rect[0] * s)))
        y0 = max(0, int(round(rect[1] * s)))
        x1 = min(self._width, int(round(rect[2] * s)))
        y1 = min(self._height, int(round(rect[3] * s)))
        return x0, y0, x1, y1

    def _draw_rect(self, img: np.ndarray, rect, color: Color) -> None:
        """Draw a filled rectangle."""
        x0, y0, x1, y1 = self._to_pixels(rect)
        if x0 >= x1 or y0 >= y1:
            return
        img[y0:y1, x0:x1] = color

    def _draw_rect_outline(self, img: np.ndarray, rect, color: Color, thickness: int = 1) -> None:
        """Draw the border of a rectangle, clipped to the image."""
        x0, y0, x1, y1 = self._to_pixels(rect)
        if x0 >= x1 or y0 >= y1:
            return
        img[y0:min(y0 + thickness, y1), x0:x1] = color
        img[max(y1 - thickness, y0):y1, x0:x1] = color
        img[y0:y1, x0:min(x0 + thickness, x1)] = color
        img[y0:y1, max(x1 - thickness, x0):x1] = color

    def _draw_circle(
        self,
        img: np.ndarray,
        cx: int,
        cy: int,
        radius: int,
        color: Color
    ) -> None:
        """Draw a filled circle using numpy."""
        height, width = img.shape[:2]

        y_min = max(0, cy - radius)
        y_max = min(height, cy + radius + 1)
        x_min = max(0, cx - radius)
        x_max = min(width, cx + radius + 1)

        if y_min >= y_max or x_min >= x_max:
            return

        yy, xx = np.meshgrid(
            np.arange(y_min, y_max),
            np.arange(x_min, x_max),
            indexing='ij'
        )
        mask = (xx - cx)**2 + (yy - cy)**2 <= radius**2
        img[y_min:y_max, x_min:x_max][mask] = color

    def _draw_circle_outline(
        self,
        img: np.ndarray,
        cx: int,
        cy: int,
        radius: int,
        color: Color,
        thickness: int = 1
    ) -> None:
        """Draw circle outline."""
        height, width = img.shape[:2]

        inner_r = max(0, radius - thickness)

        y_min = max(0, cy - radius)
        y_max = min(height, cy + radius + 1)
        x_min = max(0, cx - radius)
        x_max = min(width, cx + radius + 1)

        if y_min >= y_max or x_min >= x_max:
            return

        yy, xx = np.meshgrid(
            np.arange(y_min, y_max),
            np.arange(x_min, x_max),
            indexing='ij'
        )
        dist_sq = (xx - cx)**2 + (yy - cy)**2

        # Ring mask
        mask = (dist_sq <= radius**2) & (dist_sq >= inner_r**2)
        img[y_min:y_max, x_min:x_max][mask] = color
