"""Test configuration and fixtures for Breaker tests."""

import os
import random

# Run pygame headless; these must be set before the display is initialised
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from breaker import Graphics
from breaker_state import Session


START = 1000.0


@pytest.fixture
def session():
    """Provide a fresh session with reproducible brick colours."""
    return Session(START, rng=random.Random(1234))


@pytest.fixture
def empty_session(session):
    """Provide a session with no bricks, so only walls and paddle matter."""
    session.bricks = []
    return session


@pytest.fixture
def gfx():
    """Provide a graphics context on the dummy video driver."""
    pygame.init()
    yield Graphics()
    pygame.quit()
