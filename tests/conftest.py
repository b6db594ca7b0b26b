import os

# Pygame must not try to open a real window during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from mandelcanvas.renderer import RenderConfig


# Escape counts for the 4x4 grid with max_iter = 2, worked out by hand.
# Rows are py = 0..3 (cy = 2, 1, 0, -1), columns px = 0..3 (cx = -2, -1, 0, 1).
EXPECTED_COUNTS_4x4_N2 = [
    [0, 0, 2, 0],
    [0, 2, 2, 2],
    [2, 2, 2, 2],
    [0, 2, 2, 2],
]


@pytest.fixture
def expected_counts_4x4():
    return EXPECTED_COUNTS_4x4_N2


@pytest.fixture
def small_config():
    return RenderConfig(width=32, height=32, max_iterations=50)
