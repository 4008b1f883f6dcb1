"""
Tests for obstacle spawning, scrolling, scoring and pruning.
"""

import pytest

from flappy_arcade.flappy_core.config_loader import load_config
from flappy_arcade.flappy_core.entities import Actor, GameState, Obstacle, Session
from flappy_arcade.flappy_core.obstacles import ObstacleManager
from flappy_arcade.flappy_core.rng import GapSampler


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def manager(config):
    return ObstacleManager(config, GapSampler(config, seed=42))


@pytest.fixture
def session():
    # Actor leading edge at x = 105
    return Session(
        state=GameState.RUNNING,
        actor=Actor(x=120.0, y=300.0, vy=0.0, radius=15.0)
    )


def _obstacle(x, width=60.0):
    return Obstacle(x=x, width=width, gap_top=200.0, gap_bottom=340.0)


class TestScrolling:
    """Obstacles move left by a fixed speed."""

    def test_ten_ticks_at_speed_three(self, manager, session):
        """x=400 -> x=370 after 10 updates."""
        obstacle = _obstacle(400.0)
        session.obstacles.append(obstacle)

        for _ in range(10):
            manager.update(session)

        assert obstacle.x == pytest.approx(370.0)
        assert session.obstacles == [obstacle]

    def test_noop_when_not_running(self, manager, session):
        session.state = GameState.TERMINATED
        session.clock_ms = 10_000.0
        session.obstacles.append(_obstacle(300.0))

        result = manager.update(session)

        assert result.spawned is None
        assert session.obstacles[0].x == 300.0


class TestPruning:
    """Obstacles are removed iff x + width <= 0 after scrolling."""

    def test_far_offscreen_is_pruned(self, manager, session):
        session.obstacles.append(_obstacle(-61.0))

        result = manager.update(session)

        assert session.obstacles == []
        assert result.pruned == 1

    def test_right_edge_at_zero_is_pruned(self, manager, session):
        # -57 - 3 + 60 == 0
        session.obstacles.append(_obstacle(-57.0))
        manager.update(session)
        assert session.obstacles == []

    def test_partially_visible_is_kept(self, manager, session):
        # -56 - 3 + 60 == 1
        obstacle = _obstacle(-56.0)
        session.obstacles.append(obstacle)

        result = manager.update(session)

        assert session.obstacles == [obstacle]
        assert result.pruned == 0

    def test_order_preserved(self, manager, session):
        first, second, third = _obstacle(-60.0), _obstacle(100.0), _obstacle(300.0)
        session.obstacles.extend([first, second, third])

        manager.update(session)

        assert session.obstacles == [second, third]


class TestScoring:
    """Obstacles score once the actor's leading edge passes their trailing edge."""

    def test_not_scored_at_equal_edges(self, manager, session):
        # After scrolling: x = 45, right edge = 105 == actor leading edge
        obstacle = _obstacle(48.0)
        session.obstacles.append(obstacle)

        result = manager.update(session)

        assert not obstacle.scored
        assert session.score == 0
        assert result.points == 0

    def test_scored_once_passed(self, manager, session):
        obstacle = _obstacle(48.0)
        session.obstacles.append(obstacle)

        manager.update(session)
        result = manager.update(session)

        assert obstacle.scored
        assert session.score == 1
        assert result.scored == [obstacle]

    def test_scored_exactly_once(self, manager, session):
        obstacle = _obstacle(48.0)
        session.obstacles.append(obstacle)

        scores = []
        for _ in range(20):
            manager.update(session)
            scores.append(session.score)

        assert scores[-1] == 1
        assert scores == sorted(scores)

    def test_multiple_obstacles_score_independently(self, manager, session):
        session.obstacles.extend([_obstacle(0.0), _obstacle(20.0), _obstacle(200.0)])

        result = manager.update(session)

        assert result.points == 2
        assert session.score == 2
        assert [o.scored for o in session.obstacles] == [True, True, False]


class TestSpawning:
    """Spawn cadence and placement."""

    def test_no_spawn_at_interval(self, manager, session):
        """Spawning needs strictly more than the interval."""
        session.clock_ms = 1800.0
        result = manager.update(session)

        assert result.spawned is None
        assert session.obstacles == []

    def test_spawn_after_interval(self, manager, session, config):
        session.clock_ms = 1800.5
        result = manager.update(session)

        spawned = result.spawned
        assert spawned is not None
        assert session.obstacles == [spawned]
        assert session.last_spawn_ms == 1800.5
        # Spawned at the right boundary, then scrolled in the same update
        assert spawned.x == pytest.approx(config.board.width - config.obstacles.speed)
        assert spawned.width == config.obstacles.width
        assert not spawned.scored

    def test_spawn_timer_restarts(self, manager, session):
        session.clock_ms = 2000.0
        manager.update(session)

        session.clock_ms = 3000.0
        assert manager.update(session).spawned is None

        session.clock_ms = 3800.5
        assert manager.update(session).spawned is not None
        assert len(session.obstacles) == 2

    def test_spawned_gap_invariant(self, config, session):
        manager = ObstacleManager(config, GapSampler(config, seed=3))

        for i in range(1, 101):
            session.clock_ms = i * 2000.0
            manager.spawn(session)

        for obstacle in session.obstacles:
            assert config.obstacles.min_top <= obstacle.gap_top <= config.max_gap_top
            assert obstacle.gap_size == config.obstacles.gap
            assert 0 <= obstacle.gap_top < obstacle.gap_bottom <= config.board.height

    def test_seeded_placement_is_reproducible(self, config):
        def run(seed):
            manager = ObstacleManager(config, GapSampler(config, seed=seed))
            session = Session(state=GameState.RUNNING, actor=Actor.spawn(config))
            tops = []
            for i in range(1, 6):
                session.clock_ms = i * 1900.0
                tops.append(manager.update(session).spawned.gap_top)
            return tops

        assert run(11) == run(11)
