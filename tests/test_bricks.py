"""Tests for building the brick field and the starting positions."""

import itertools
import random

from breaker_state import (
    Brick,
    Horizontal,
    Vertical,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    colours,
    generate_bricks,
    reset_ball,
    reset_paddle,
)


def test_brick_count():
    assert len(generate_bricks()) == 50


def test_bricks_on_screen():
    for brick in generate_bricks():
        bbox = brick.bbox()
        assert bbox.left >= 0 and bbox.top >= 0
        assert bbox.right <= WINDOW_WIDTH and bbox.bottom <= WINDOW_HEIGHT


def test_bricks_do_not_overlap():
    bricks = generate_bricks()
    for a, b in itertools.combinations(bricks, 2):
        assert not a.bbox().colliderect(b.bbox())


def test_layout():
    bricks = generate_bricks()
    pitch_x = Brick.width + Brick.padding
    pitch_y = Brick.height + Brick.padding

    # Rows are centred, so the margins either side match
    assert (bricks[0].x, bricks[0].y) == (140, 50)
    assert (bricks[9].x, bricks[9].y) == (140 + 9 * pitch_x, 50)
    assert (bricks[10].x, bricks[10].y) == (140, 50 + pitch_y)
    assert (bricks[-1].x, bricks[-1].y) == (140 + 9 * pitch_x, 50 + 4 * pitch_y)
    assert bricks[0].x == WINDOW_WIDTH - (bricks[9].x + pitch_x)


def test_layout_does_not_depend_on_colours():
    first = generate_bricks(random.Random(1))
    second = generate_bricks(random.Random(2))
    assert [(b.x, b.y) for b in first] == [(b.x, b.y) for b in second]


def test_colours_come_from_palette():
    palette = set(colours.values())
    assert len(palette) == 5
    assert all(brick.colour in palette for brick in generate_bricks())


def test_colours_reproducible_with_seed():
    first = generate_bricks(random.Random(42))
    second = generate_bricks(random.Random(42))
    assert [b.colour for b in first] == [b.colour for b in second]


def test_reset_paddle():
    paddle = reset_paddle()
    assert (paddle.x, paddle.y) == (340, 570)
    assert paddle.left == WINDOW_WIDTH - paddle.right


def test_reset_ball():
    ball = reset_ball()
    assert (ball.x, ball.y) == (400, 300)
    assert ball.dir_x is Horizontal.RIGHT
    assert ball.dir_y is Vertical.DOWN
