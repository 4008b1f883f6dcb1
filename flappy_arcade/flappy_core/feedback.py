"""
Feedback Sinks
==============

Interface for collaborators that present the game (drawing, sound, score
display) and the dispatcher that isolates the core from their failures.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional

if TYPE_CHECKING:
    from flappy_arcade.flappy_core.entities import GameState
    from flappy_arcade.flappy_core.state_snapshot import GameSnapshot

logger = logging.getLogger(__name__)


class FeedbackSink:
    """
    Base class for feedback collaborators.

    Every hook is a no-op; subclasses override the events they care about.
    """

    def on_tick(self, snapshot: "GameSnapshot") -> None:
        """A tick completed without collision; draw this frame."""

    def on_jump(self) -> None:
        """The actor jumped while running."""

    def on_score(self, score: int) -> None:
        """An obstacle was passed; score is the new total."""

    def on_terminate(self, final_score: int) -> None:
        """The session ended on a collision."""

    def on_state_change(self, state: "GameState", score: int) -> None:
        """Lifecycle state changed; show or hide overlays."""


class FeedbackDispatcher:
    """
    Fans events out to registered sinks.

    A sink that raises is logged and skipped; the exception never reaches
    the caller, so a broken audio device cannot stop the simulation.
    """

    def __init__(self, sinks: Optional[Iterable[FeedbackSink]] = None):
        self._sinks: List[FeedbackSink] = list(sinks) if sinks else []

    @property
    def sinks(self) -> List[FeedbackSink]:
        return list(self._sinks)

    def add(self, sink: FeedbackSink) -> None:
        if sink not in self._sinks:
            self._sinks.append(sink)

    def remove(self, sink: FeedbackSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def emit(self, event: str, *args) -> int:
        """
        Call hook `event` on every sink.

        Returns:
            Number of sinks whose hook raised.
        """
        failures = 0
        for sink in self._sinks:
            try:
                getattr(sink, event)(*args)
            except Exception:
                failures += 1
                logger.warning(
                    f"Feedback sink {type(sink).__name__}.{event} failed",
                    exc_info=True
                )
        return failures
