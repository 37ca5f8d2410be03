#!/usr/bin/env python3
#
# Copyright (c) 2025, 7th software Ltd.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations
import argparse
import pygame
import random
import sys
import time
import traceback
import numpy as np
from typing import Any, Optional, Sequence

from breaker_state import Key, Session, WINDOW_HEIGHT, WINDOW_WIDTH, update


def format_duration(seconds: int) -> str:
    """
    Format a whole number of seconds as hours, minutes, and seconds, omitting leading zero units.

    Args:
        seconds: Duration in seconds.

    Returns:
        str: For example "0s", "42s", "1m5s" or "1h0m3s".
    """

    sign = "-" if seconds < 0 else ""
    minutes, secs = divmod(abs(int(seconds)), 60)
    hours, minutes = divmod(minutes, 60)

    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    elif minutes:
        return f"{sign}{minutes}m{secs}s"
    else:
        return f"{sign}{secs}s"


class Keyboard():
    # Which physical keys drive each logical key
    bindings = {
        Key.MOVE_LEFT: (pygame.K_a, pygame.K_LEFT),
        Key.MOVE_RIGHT: (pygame.K_d, pygame.K_RIGHT),
        Key.RESTART: (pygame.K_SPACE,),
    }

    def poll(self, pressed: Any | None = None) -> frozenset[Key]:
        """
        Take a snapshot of the logical keys currently held.

        Args:
            pressed: Key state indexable by pygame key codes. If not provided, defaults to
                     `pygame.key.get_pressed()`.

        Returns:
            frozenset[Key]: The logical keys with at least one of their bound keys held.
        """

        if pressed is None:
            pressed = pygame.key.get_pressed()

        return frozenset(
            key for key, codes in type(self).bindings.items()
            if any(pressed[code] for code in codes)
        )


class Graphics():
    colours = {
        'black': (0, 0, 0),
        'white': (255, 255, 255),
        'win': (224, 224, 255),
        'die': (255, 164, 164),
        'presskey': (64, 224, 224),
    }

    def __init__(self, monitor: int = 0, width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT) -> None:
        """
        Open the game window and create the surface that frames are rendered into.

        Args:
            monitor: Index of the monitor to display on (0 is primary). Wraps around the number of displays.
            width: Window width in pixels.
            height: Window height in pixels.
        """

        monitors = max(1, len(pygame.display.get_desktop_sizes()))
        monitor = monitor % monitors
        print(f"Open on monitor {monitor}")

        self.window_width, self.window_height = width, height
        print(f"Resolution {self.window_width}x{self.window_height}")

        # Create the display (window) for our game
        self.display_sfc = pygame.display.set_mode((self.window_width, self.window_height), display=monitor)

        # Create a surface to do all of our rendering into
        self.screen = pygame.Surface((self.window_width, self.window_height), 0, 32)

        # Set the name of the window
        pygame.display.set_caption("Breaker")

        self.clock = pygame.time.Clock()
        self.fonts = {}

    def _font(self, size: int) -> pygame.font.Font:
        # Fonts are cached per size because creating one is slow
        font = self.fonts.get(size)
        if font is None:
            font = pygame.font.Font(None, size)
            self.fonts[size] = font
        return font

    def text_at(
        self,
        text: str,
        colour: tuple[int, int, int],
        x: int,
        y: int,
        font_size: int = 36,
        centre: bool = True,
    ) -> pygame.Rect:
        """
        Render text onto the screen surface.

        Args:
            text: Text to render.
            colour: RGB colour triplet.
            x: X coordinate of the text centre (or left edge) in pixels.
            y: Y coordinate of the text centre (or top edge) in pixels.
            font_size: Font size in pixels.
            centre: If True, (x, y) is the centre of the text, otherwise its top-left corner.

        Returns:
            pygame.Rect: Bounding rectangle of the rendered text.
        """

        text_surface = self._font(font_size).render(text, True, colour)
        if centre:
            text_rect = text_surface.get_rect(center=(x, y))
        else:
            text_rect = text_surface.get_rect(topleft=(x, y))
        self.screen.blit(text_surface, text_rect)

        return text_rect

    def draw(self, session: Session, now: float) -> None:
        """
        Render one frame of the game into `self.screen`.

        Args:
            session: The game state to draw. Only read, never changed.
            now: Current wall-clock time (seconds), for the timer display.
        """

        self.screen.fill(Graphics.colours['black'])

        cx, cy = self.window_width // 2, self.window_height // 2

        if session.game_over:
            self.text_at("GAME OVER", Graphics.colours['die'], cx, cy, font_size=48)
            self.text_at(f"Points: {session.points}", Graphics.colours['white'], cx, cy + 40, font_size=24)
            self.text_at("Press SPACE to restart", Graphics.colours['presskey'], cx, cy + 70, font_size=24)
            return

        white = Graphics.colours['white']
        for brick in session.bricks:
            pygame.draw.rect(self.screen, brick.colour, brick.bbox())
        pygame.draw.rect(self.screen, white, session.paddle.bbox())
        pygame.draw.circle(self.screen, white, (session.ball.x, session.ball.y), session.ball.radius)

        self.text_at(f"Points: {session.points}", white, 10, 10, font_size=20, centre=False)
        self.text_at(f"Time: {format_duration(session.elapsed(now))}", white, 10, 30, font_size=20, centre=False)

        if session.cleared:
            self.text_at("YOU WIN!", Graphics.colours['win'], cx, cy - 60, font_size=48)

    def display(self, fps: int = 60) -> None:
        """
        Show the latest frame and wait out the rest of the frame time.

        Args:
            fps: Maximum frame rate.
        """

        self.display_sfc.blit(self.screen, (0, 0))
        pygame.display.flip()
        self.clock.tick(fps)

    def snapshot(self) -> np.ndarray:
        """
        Copy the last rendered frame.

        Returns:
            np.ndarray: Array of shape (width, height, 3), indexed as [x, y], holding RGB values.
        """

        return pygame.surfarray.array3d(self.screen)


def game_loop(gfx: Graphics, keyboard: Keyboard, session: Session, fps: int = 60) -> bool:
    """
    Run the game until the player quits.

    Args:
        gfx: Graphics context.
        keyboard: Input source.
        session: The game state, updated every frame.
        fps: Frame rate cap.

    Returns:
        bool: True if the user quit (window close, Q, or Escape).
    """

    while True:
        # Handle pending events
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return True
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    return True
                elif event.key == pygame.K_ESCAPE:
                    return True

        now = time.time()
        was_over = session.game_over
        update(session, keyboard.poll(), now)
        if session.game_over and not was_over:
            print(f"Game over with {session.points} points after {format_duration(session.elapsed(now))}")

        gfx.draw(session, now)
        gfx.display(fps=fps)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Breaker. Bounce the ball off the paddle and knock out all of the bricks."
    )
    parser.add_argument("--monitor", "-m", type=int, default=0,
                        help="Index of the monitor to display on (0 is primary).")
    parser.add_argument("--fps", "-f", type=positive_int, default=60,
                        help="Maximum frame rate. Default: 60")
    parser.add_argument("--seed", "-s", type=int,
                        help="Seed for the brick colours, for a repeatable layout.")
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    if args.seed is not None:
        print(f"Using seed {args.seed}")

    # Initialise pygame
    pygame.init()

    try:
        gfx = Graphics(monitor=args.monitor)
        session = Session(time.time(), rng=rng)
        game_loop(gfx, Keyboard(), session, fps=args.fps)
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    except Exception:
        # Print the full traceback like the default handler
        traceback.print_exc()
        return 1
    finally:
        pygame.quit()

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
