"""
Human Play Mode
================

Play Flappy Arcade in a window with real-time ticks and synthesized sound.

Controls:
    - Space / Up / Click: Start, flap, restart
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--scale SCALE] [--mute]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

import pygame

from flappy_arcade.flappy_core.audio import AudioFeedback
from flappy_arcade.flappy_core.config_loader import GameConfig, load_config
from flappy_arcade.flappy_core.entities import GameState
from flappy_arcade.flappy_core.feedback import FeedbackSink
from flappy_arcade.flappy_core.game import CoreGame
from flappy_arcade.flappy_core.input_adapter import InputAdapter
from flappy_arcade.flappy_core.render_solid import SolidRenderer
from flappy_arcade.flappy_core.state_snapshot import GameSnapshot


class ScreenRenderer:
    """
    Draws frames from the solid renderer plus the text layer:
    live score badge, start screen and game over screen.
    """

    def __init__(self, config: GameConfig, scale: float):
        self._config = config
        self._scale = scale
        self._solid = SolidRenderer(config, scale=scale)
        self._window_width, self._window_height = self._solid.size

        # Colors
        self._text_light = (255, 255, 255)
        self._text_shadow = (40, 40, 50)
        self._panel = (0, 0, 0, 150)

        # Fonts
        pygame.font.init()
        self._font_huge = pygame.font.Font(None, int(56 * scale))
        self._font_large = pygame.font.Font(None, int(42 * scale))
        self._font_medium = pygame.font.Font(None, int(28 * scale))

    @property
    def size(self):
        return (self._window_width, self._window_height)

    def render(
        self,
        screen: pygame.Surface,
        snapshot: GameSnapshot,
        show_start: bool,
        show_game_over: bool,
        show_score: bool,
        final_score: int = 0
    ) -> None:
        """Render the complete scene."""
        frame = self._solid.render(snapshot)
        # surfarray is (width, height, 3)
        surface = pygame.surfarray.make_surface(frame.swapaxes(0, 1))
        screen.blit(surface, (0, 0))

        if show_score:
            self._draw_score_badge(screen, snapshot.score)

        if show_start:
            self._draw_overlay(screen, "FLAPPY", None, "Press Space or Click to start")
        elif show_game_over:
            self._draw_overlay(screen, "GAME OVER", f"Score: {final_score:,}", "Press Space or Click to restart")

    def _draw_text(self, screen: pygame.Surface, font, text: str, center_x: int, y: int) -> None:
        """Draw centered text with a drop shadow."""
        shadow = font.render(text, True, self._text_shadow)
        label = font.render(text, True, self._text_light)
        x = center_x - label.get_width() // 2
        screen.blit(shadow, (x + 2, y + 2))
        screen.blit(label, (x, y))

    def _draw_score_badge(self, screen: pygame.Surface, score: int) -> None:
        self._draw_text(screen, self._font_huge, str(score), self._window_width // 2, int(30 * self._scale))

    def _draw_overlay(
        self,
        screen: pygame.Surface,
        title: str,
        subtitle: Optional[str],
        hint: str
    ) -> None:
        """Draw a translucent panel with a title, optional subtitle and hint."""
        overlay = pygame.Surface((self._window_width, self._window_height), pygame.SRCALPHA)
        overlay.fill(self._panel)
        screen.blit(overlay, (0, 0))

        center_x = self._window_width // 2
        y = self._window_height // 3
        self._draw_text(screen, self._font_huge, title, center_x, y)
        y += int(60 * self._scale)
        if subtitle:
            self._draw_text(screen, self._font_large, subtitle, center_x, y)
            y += int(50 * self._scale)
        self._draw_text(screen, self._font_medium, hint, center_x, y)


class HumanPlayer(FeedbackSink):
    """
    Human-playable game window.

    Acts as the presentation sink: lifecycle events toggle the start /
    game over overlays and the live score badge.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        scale: float = 1.0,
        mute: bool = False
    ):
        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = config.loop.target_fps

        # Initialize pygame
        pygame.init()
        self._renderer = ScreenRenderer(config, scale)
        self._screen = pygame.display.set_mode(self._renderer.size)
        pygame.display.set_caption("Flappy Arcade")
        self._clock = pygame.time.Clock()

        # Audio is optional; failures leave the game silent
        self._audio = AudioFeedback(config, enabled=False if mute else None)
        self._audio.init()

        # Initialize game
        self._game = CoreGame(config=config, seed=seed, sinks=[self, self._audio])
        self._input = InputAdapter(self._game)

        # Overlay state
        self._show_start = True
        self._show_game_over = False
        self._show_score = False
        self._final_score = 0
        self._best_score = 0
        self._frame: GameSnapshot = self._game.snapshot()

    # FeedbackSink hooks

    def on_tick(self, snapshot: GameSnapshot) -> None:
        self._frame = snapshot

    def on_score(self, score: int) -> None:
        print(f"  +1 (Total: {score})")

    def on_state_change(self, state: GameState, score: int) -> None:
        self._show_start = state is GameState.IDLE
        self._show_game_over = state is GameState.TERMINATED
        self._show_score = state is GameState.RUNNING
        if state is GameState.RUNNING:
            print("\n=== Game Started ===\n")
        elif state is GameState.TERMINATED:
            self._final_score = score
            self._best_score = max(self._best_score, score)
            print(f"\nGAME OVER - Score: {score} (Best: {self._best_score})")

    # Loop

    def run(self) -> int:
        """Run the game loop. Returns best score."""
        print("=== Flappy Arcade ===")
        print("Space/Up/Click to start and flap")
        print("ESC to quit")
        print()

        elapsed_ms = 0.0
        while not self._input.quit_requested:
            for event in pygame.event.get():
                self._input.handle_event(event)

            # No ticks are scheduled once terminated
            if self._game.is_running:
                result = self._game.tick(elapsed_ms)
                if result.terminated:
                    self._frame = result.snapshot
            else:
                self._frame = self._game.snapshot()

            self._render()
            elapsed_ms = float(self._clock.tick(self._target_fps))

        self._audio.close()
        pygame.quit()
        return self._best_score

    def _render(self) -> None:
        """Render the current frame."""
        self._renderer.render(
            self._screen,
            self._frame,
            show_start=self._show_start,
            show_game_over=self._show_game_over,
            show_score=self._show_score,
            final_score=self._final_score
        )
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play Flappy Arcade interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for gap placement")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--scale", type=float, default=1.0, help="Window scale (default: 1.0)")
    parser.add_argument("--mute", action="store_true", help="Disable sound")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            scale=args.scale,
            mute=args.mute
        )
        score = player.run()
        print(f"\nBest Score: {score}")
        return 0
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
