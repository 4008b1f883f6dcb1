"""
Tests for the numpy frame renderer.
"""

import numpy as np
import pytest

from flappy_arcade.flappy_core.config_loader import load_config
from flappy_arcade.flappy_core.entities import Actor, GameState, Obstacle, Session
from flappy_arcade.flappy_core.render_solid import (
    BIRD_COLOR,
    EYE_COLOR,
    GROUND_COLOR,
    GROUND_EDGE_COLOR,
    PIPE_COLOR,
    PIPE_OUTLINE_COLOR,
    SKY_STOPS,
    SolidRenderer,
)
from flappy_arcade.flappy_core.state_snapshot import SnapshotBuilder


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def renderer(config):
    return SolidRenderer(config)


@pytest.fixture
def snapshot(config):
    session = Session(
        state=GameState.RUNNING,
        actor=Actor(x=120.0, y=300.0, vy=0.0, radius=15.0),
        obstacles=[Obstacle(x=200.0, width=60.0, gap_top=200.0, gap_bottom=340.0)]
    )
    return SnapshotBuilder(config).build(session)


def _pixel(img, x, y):
    return tuple(int(c) for c in img[y, x])


class TestSolidRenderer:

    def test_frame_shape(self, renderer, snapshot):
        img = renderer.render(snapshot)
        assert img.shape == (600, 400, 3)
        assert img.dtype == np.uint8

    def test_scaled_frame_shape(self, config, snapshot):
        img = SolidRenderer(config, scale=0.5).render(snapshot)
        assert img.shape == (300, 200, 3)

    def test_sky_gradient_top(self, renderer, snapshot):
        img = renderer.render(snapshot)
        assert _pixel(img, 0, 0) == SKY_STOPS[0][1]

    def test_ground_strip(self, renderer, snapshot):
        img = renderer.render(snapshot)
        assert _pixel(img, 10, 590) == GROUND_COLOR
        assert _pixel(img, 10, 522) == GROUND_EDGE_COLOR

    def test_bird(self, renderer, snapshot):
        img = renderer.render(snapshot)
        assert _pixel(img, 120, 300) == BIRD_COLOR
        assert _pixel(img, 125, 297) == EYE_COLOR

    def test_pipes_and_gap(self, renderer, snapshot):
        img = renderer.render(snapshot)
        assert _pixel(img, 230, 100) == PIPE_COLOR
        assert _pixel(img, 230, 400) == PIPE_COLOR
        assert _pixel(img, 200, 100) == PIPE_OUTLINE_COLOR
        # Gap shows the sky
        assert _pixel(img, 230, 270) not in (PIPE_COLOR, PIPE_OUTLINE_COLOR)

    def test_offscreen_obstacle_is_clipped(self, config, renderer):
        session = Session(
            state=GameState.RUNNING,
            actor=Actor.spawn(config),
            obstacles=[Obstacle(x=-50.0, width=60.0, gap_top=100.0, gap_bottom=240.0)]
        )
        img = renderer.render(SnapshotBuilder(config).build(session))
        assert _pixel(img, 5, 50) == PIPE_COLOR

    def test_render_does_not_touch_background(self, renderer, snapshot, config):
        first = renderer.render(snapshot)
        empty = SnapshotBuilder(config).build(
            Session(state=GameState.IDLE, actor=Actor(x=-100.0, y=-100.0, vy=0.0, radius=15.0))
        )
        second = renderer.render(empty)
        assert _pixel(second, 230, 100) != PIPE_COLOR
        assert _pixel(first, 230, 100) == PIPE_COLOR
