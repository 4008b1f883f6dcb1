"""
Input Adapter - Translates raw input to game commands.
This is a THIN ADAPTER - no game logic here.
"""

from __future__ import annotations

from typing import Optional

import pygame

from flappy_arcade.flappy_core.entities import GameState
from flappy_arcade.flappy_core.game import Command, CoreGame


# One physical trigger means a different command in each state
TRIGGER_ROUTES = {
    GameState.IDLE: Command.START,
    GameState.RUNNING: Command.JUMP,
    GameState.TERMINATED: Command.RESTART,
}

TRIGGER_KEYS = (pygame.K_SPACE, pygame.K_UP)
QUIT_KEYS = (pygame.K_ESCAPE,)


def route_trigger(state: GameState) -> Command:
    """Command meant by the single trigger in the given state."""
    return TRIGGER_ROUTES[state]


class InputAdapter:
    """
    Maps pygame events onto the game's command vocabulary.

    Space, up arrow and left click are the trigger. Escape or closing the
    window asks the driver to quit.
    """

    def __init__(self, game: CoreGame):
        self.game = game
        self.quit_requested = False

    def is_trigger(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.KEYDOWN:
            return event.key in TRIGGER_KEYS
        if event.type == pygame.MOUSEBUTTONDOWN:
            return event.button == 1
        return False

    def handle_event(self, event: pygame.event.Event) -> Optional[Command]:
        """
        Handle a single event.

        Returns:
            The command that was applied, or None.
        """
        if event.type == pygame.QUIT:
            self.quit_requested = True
            return None

        if event.type == pygame.KEYDOWN and event.key in QUIT_KEYS:
            self.quit_requested = True
            return None

        if not self.is_trigger(event):
            return None

        command = route_trigger(self.game.state)
        self.game.apply(command)
        return command
