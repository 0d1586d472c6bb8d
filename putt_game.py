"""
Interactive putting green.

Run with ``python putt_game.py`` (or the ``putting-green`` script): drag back
from the ball with the mouse or a finger and release to putt.
"""
import argparse
import logging

import numpy as np
import pygame

import putt_input
from putt_config import field_size, load_config
from putt_logging import setup_logging
from putt_physics import step
from putt_render import render, reset_button_rect
from putt_state import GameState

logger = logging.getLogger("putting.game")


class FrameLoop:
    """
    Runs ``advance`` then ``render`` once per frame until stopped.

    With a pygame Clock the loop is throttled to ``fps``; without one it runs
    as fast as possible, which is what headless runs want.
    """

    def __init__(self, advance, render=None, clock=None, fps=60):
        self.advance = advance
        self.render = render
        self.clock = clock
        self.fps = fps
        self.running = False

    def stop(self):
        self.running = False

    def run(self, max_frames=None):
        self.running = True
        frames = 0
        while self.running and (max_frames is None or frames < max_frames):
            self.advance()
            if self.render is not None:
                self.render()
            frames += 1
            if self.clock is not None:
                self.clock.tick(self.fps)
        self.running = False
        return frames


class PuttingGame:
    def __init__(self, config=None, seed=None):
        self.config = config or load_config()
        self.rng = np.random.default_rng(seed)

        pygame.init()
        width, height = field_size(self.config["window_width"], self.config)
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(self.config["caption"])

        self.state = GameState(width, height)
        self.primary_finger = None
        self.loop = FrameLoop(self.advance, self.draw, pygame.time.Clock(), self.config["fps"])

    def run(self):
        try:
            self.loop.run()
        finally:
            pygame.quit()

    def advance(self):
        self.process_input()
        step(self.state, self.rng)

    def draw(self):
        render(self.screen, self.state)
        pygame.display.flip()

    def _finger_pos(self, event):
        # Finger coordinates are normalized to the window
        return (event.x * self.state.width, event.y * self.state.height)

    def process_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                self.loop.stop()
                return

            if event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                self.state.reset()
            elif event.type == pygame.VIDEORESIZE:
                self.handle_resize(event.w)

            # Mouse (touch-generated mouse events are handled as fingers)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, "touch", False):
                self.handle_press(event.pos)
            elif event.type == pygame.MOUSEMOTION and not getattr(event, "touch", False):
                putt_input.on_pointer_move(self.state, event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and not getattr(event, "touch", False):
                putt_input.on_pointer_up(self.state)
            elif event.type in (pygame.WINDOWLEAVE, pygame.WINDOWFOCUSLOST):
                putt_input.on_pointer_leave(self.state)
                self.primary_finger = None

            # Touch: only the first finger down counts
            elif event.type == pygame.FINGERDOWN:
                if self.primary_finger is None:
                    self.primary_finger = event.finger_id
                    self.handle_press(self._finger_pos(event))
            elif event.type == pygame.FINGERMOTION:
                if event.finger_id == self.primary_finger:
                    putt_input.on_pointer_move(self.state, self._finger_pos(event))
            elif event.type == pygame.FINGERUP:
                if event.finger_id == self.primary_finger:
                    self.primary_finger = None
                    putt_input.on_pointer_up(self.state)

    def handle_press(self, pos):
        if self.state.scoreboard.reset_visible and reset_button_rect(self.state).collidepoint(pos):
            self.state.reset()
            return
        putt_input.on_pointer_down(self.state, pos)

    def handle_resize(self, window_width):
        # The window is the field, so no margin here
        width, height = field_size(window_width, self.config, margin=False)
        if (width, height) != self.screen.get_size():
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.state.resize(width, height)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Putt a ball into the hole')
    parser.add_argument('--config', type=str, default=None, help='Path to a JSON config file')
    parser.add_argument('--seed', type=int, default=None, help='Seed for the win message picker')
    parser.add_argument('--log-level', type=str, default='INFO', help='Logging level')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)
    game = PuttingGame(load_config(args.config), seed=args.seed)
    game.run()


if __name__ == "__main__":
    main()
