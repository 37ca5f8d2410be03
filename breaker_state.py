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
import math
import random
import pygame
from enum import Enum
from typing import Collection, Iterable


# Logical playfield size (pixels)
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600

# Brick colours. Every brick gets one of these at random when the field is built.
colours = {
    'red': (230, 41, 55),
    'blue': (0, 121, 241),
    'green': (0, 228, 48),
    'yellow': (253, 249, 0),
    'purple': (200, 122, 255),
}


class Key(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    RESTART = "restart"


class Horizontal(Enum):
    LEFT = -1
    RIGHT = 1


class Vertical(Enum):
    UP = -1
    DOWN = 1


class Paddle():
    width: int = 120
    height: int = 10

    # Horizontal distance moved per frame while a movement key is held
    step: int = 5

    def __init__(self, x: int, y: int) -> None:
        """
        Create a paddle.

        Args:
            x: Left edge in pixels.
            y: Top edge in pixels.
        """

        self.x = x
        self.y = y

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        return self.x + type(self).width

    def bbox(self) -> pygame.Rect:
        """
        Get the current bounding box of the paddle.

        Returns:
            pygame.Rect: Rectangle with top-left at (x, y).
        """

        return pygame.Rect(self.x, self.y, type(self).width, type(self).height)

    def move(self, keys: Collection[Key], screen_width: int = WINDOW_WIDTH) -> None:
        """
        Move the paddle according to the held keys, then clamp it to the screen.

        Args:
            keys: Logical keys currently held.
            screen_width: Width of the playfield in pixels.

        Behaviour:
            - Each direction only moves while the paddle hasn't yet reached that side of the screen.
            - Afterwards the left edge is kept >= 0 and the right edge <= `screen_width`.
        """

        if Key.MOVE_LEFT in keys and self.left > 0:
            self.x -= type(self).step

        if Key.MOVE_RIGHT in keys and self.right < screen_width:
            self.x += type(self).step

        if self.left < 0:
            self.x = 0

        if self.right > screen_width:
            self.x = screen_width - type(self).width


class Ball():
    radius: int = 5

    # Distance moved along each axis per frame
    step: int = 2

    def __init__(
        self,
        x: int,
        y: int,
        dir_x: Horizontal = Horizontal.RIGHT,
        dir_y: Vertical = Vertical.DOWN,
    ) -> None:
        """
        Create a ball.

        Args:
            x: Horizontal centre position in pixels.
            y: Vertical centre position in pixels.
            dir_x: Initial horizontal direction.
            dir_y: Initial vertical direction.
        """

        self.x = x            # Horizontal centre of ball (pixels)
        self.y = y            # Vertical centre of ball (pixels)
        self.dir_x = dir_x
        self.dir_y = dir_y

    @property
    def left(self) -> int:
        return self.x - type(self).radius

    @property
    def right(self) -> int:
        return self.x + type(self).radius

    @property
    def top(self) -> int:
        return self.y - type(self).radius

    def bbox(self) -> pygame.Rect:
        """
        Compute the ball's axis-aligned bounding box at its current position.

        Returns:
            pygame.Rect: Square of side `2 * radius` centred on (x, y).
        """

        r = type(self).radius
        return pygame.Rect(self.x - r, self.y - r, r * 2, r * 2)

    def check_wall_collision(self, screen_width: int = WINDOW_WIDTH) -> None:
        """
        Bounce off the left, right, and top walls.

        Args:
            screen_width: Width of the playfield in pixels.

        Behaviour:
            - Left wall: snap the left edge to 0 and head right.
            - Right wall: head left. The position isn't snapped, so the ball can overlap the wall for a frame.
            - Top wall: snap the top edge to 0 and head down.
        """

        r = type(self).radius

        if self.left < 0:
            self.x = r
            self.dir_x = Horizontal.RIGHT

        if self.right > screen_width:
            self.dir_x = Horizontal.LEFT

        if self.top < 0:
            self.y = r
            self.dir_y = Vertical.DOWN

    def check_paddle_collision(self, paddle: Paddle) -> bool:
        """
        Bounce off the paddle.

        The test is "centre below the paddle's top edge" (y grows downwards) and strictly between the paddle's
        ends. A ball that has already sunk past the top of the paddle gets lifted back onto it.

        Args:
            paddle: The player's paddle.

        Returns:
            bool: True if the ball was bounced.
        """

        if self.y > paddle.y and paddle.left < self.x < paddle.right:
            self.y = paddle.y - type(self).radius
            self.dir_y = Vertical.UP
            return True

        return False

    def move(self) -> None:
        """Advance one fixed step along each axis in the current directions."""

        self.x += type(self).step * self.dir_x.value
        self.y += type(self).step * self.dir_y.value


class Brick():
    width: int = 50
    height: int = 30

    # Gap between neighbouring bricks (pixels)
    padding: int = 2

    def __init__(self, x: int, y: int, colour: tuple[int, int, int]) -> None:
        """
        Create a brick.

        Args:
            x: Left edge in pixels.
            y: Top edge in pixels.
            colour: RGB colour as a 3-tuple.
        """

        self.x = x
        self.y = y
        self.colour = colour

    def bbox(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, type(self).width, type(self).height)

    def contains(self, x: int, y: int) -> bool:
        """
        Check whether a point lies strictly inside the brick (points on the border don't count).

        Args:
            x: Horizontal position in pixels.
            y: Vertical position in pixels.

        Returns:
            bool: True if the point is inside.
        """

        return (
            self.x < x < self.x + type(self).width and
            self.y < y < self.y + type(self).height
        )


# Layout of the brick field
bricks_per_row = 10
brick_rows = 5
brick_top = 50


def generate_bricks(rng: random.Random | None = None) -> list[Brick]:
    """
    Build a fresh brick field.

    Args:
        rng: Random source used to pick brick colours. Defaults to the `random` module.

    Returns:
        list[Brick]: `bricks_per_row * brick_rows` bricks, from the top row down and left to right. The rows are
                     centred horizontally; only the colours are random.
    """

    if rng is None:
        rng = random

    palette = list(colours.values())
    pitch_x = Brick.width + Brick.padding
    pitch_y = Brick.height + Brick.padding
    start_x = (WINDOW_WIDTH - bricks_per_row * pitch_x) // 2

    bricks = []
    for row in range(brick_rows):
        y = brick_top + row * pitch_y
        for col in range(bricks_per_row):
            x = start_x + col * pitch_x
            bricks.append(Brick(x, y, rng.choice(palette)))

    return bricks


def reset_paddle() -> Paddle:
    """Paddle centred horizontally, three paddle-heights above the bottom of the screen."""

    return Paddle((WINDOW_WIDTH - Paddle.width) // 2, WINDOW_HEIGHT - Paddle.height * 3)


def reset_ball() -> Ball:
    """Ball in the middle of the screen, heading right and down."""

    return Ball(WINDOW_WIDTH // 2, WINDOW_HEIGHT // 2, Horizontal.RIGHT, Vertical.DOWN)


class Session():
    def __init__(self, now: float, rng: random.Random | None = None) -> None:
        """
        Start a new play-through.

        Args:
            now: Current wall-clock time (seconds), used as the origin of the elapsed-time counter.
            rng: Random source for brick colours. Defaults to the `random` module.
        """

        self.rng = rng if rng is not None else random
        self.paddle = None
        self.ball = None
        self.bricks = []
        self.points = 0
        self.game_over = False
        self.start_time = now
        self.reset(now)

    def reset(self, now: float) -> None:
        """
        Put everything back to the starting state.

        Args:
            now: Current wall-clock time (seconds).

        Behaviour:
            - Recreates the paddle and ball in their starting positions.
            - Builds a new brick field (with new random colours).
            - Zeroes the points, restarts the timer, and clears the game-over flag.
        """

        self.paddle = reset_paddle()
        self.ball = reset_ball()
        self.bricks = generate_bricks(self.rng)
        self.points = 0
        self.start_time = now
        self.game_over = False

    @property
    def playing(self) -> bool:
        return not self.game_over

    @property
    def cleared(self) -> bool:
        """True once every brick has been destroyed (and the game hasn't been lost)."""

        return self.playing and not self.bricks

    def elapsed(self, now: float) -> int:
        """
        Get the time since the session started.

        Args:
            now: Current wall-clock time (seconds).

        Returns:
            int: Whole seconds, with halves rounded away from zero.
        """

        seconds = now - self.start_time
        return int(math.copysign(math.floor(abs(seconds) + 0.5), seconds))

    def check_brick_collisions(self) -> int:
        """
        Destroy every brick that contains the centre of the ball.

        All bricks are tested against the same ball position before any are removed, so simultaneous hits all
        count. Each hit sends the ball downwards and scores a point.

        Returns:
            int: Number of bricks destroyed.
        """

        ball = self.ball
        survivors = []
        hits = 0
        for brick in self.bricks:
            if brick.contains(ball.x, ball.y):
                ball.dir_y = Vertical.DOWN
                hits += 1
            else:
                survivors.append(brick)

        self.bricks = survivors
        self.points += hits

        return hits


def update(session: Session, keys: Iterable[Key], now: float) -> Session:
    """
    Advance the game by one frame.

    Args:
        session: The game state. It is updated in place.
        keys: Logical keys currently held.
        now: Current wall-clock time (seconds).

    Returns:
        Session: The same `session`, ready to be drawn.

    Behaviour:
        - While the game is over, only the restart key does anything; it resets the session.
        - Otherwise moves the paddle, bounces the ball off walls, paddle, and bricks, flags a loss if the ball
          dropped off the bottom of the screen, and then steps the ball.
    """

    keys = frozenset(keys)

    if session.game_over:
        if Key.RESTART in keys:
            session.reset(now)
        # The playfield is frozen until the player restarts
        return session

    session.paddle.move(keys, WINDOW_WIDTH)

    ball = session.ball
    ball.check_wall_collision(WINDOW_WIDTH)
    ball.check_paddle_collision(session.paddle)

    if ball.y > WINDOW_HEIGHT:
        session.game_over = True

    session.check_brick_collisions()

    ball.move()

    return session
