import os

# Render without a real display
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from putt_state import GameState


@pytest.fixture
def state():
    # Unscaled base field: ball at (200, 468) r=8.8, hole at (200, 108) r=14
    return GameState(400, 600)
