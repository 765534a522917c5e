from __future__ import annotations

from typing import List

import pytest

from spacedetect.schema import WallSegment
from tests.utils_walls import make_wall


@pytest.fixture
def rectangle_walls() -> List[WallSegment]:
    """4 m x 3 m room."""
    return [
        make_wall("bottom", 0.0, 0.0, 4.0, 0.0),
        make_wall("right", 4.0, 0.0, 4.0, 3.0),
        make_wall("top", 4.0, 3.0, 0.0, 3.0),
        make_wall("left", 0.0, 3.0, 0.0, 0.0),
    ]


@pytest.fixture
def diagonal_split_walls() -> List[WallSegment]:
    """4 m square cut into two triangles by one diagonal wall."""
    return [
        make_wall("ab", 0.0, 0.0, 4.0, 0.0),
        make_wall("bc", 4.0, 0.0, 4.0, 4.0),
        make_wall("cd", 4.0, 4.0, 0.0, 4.0),
        make_wall("da", 0.0, 4.0, 0.0, 0.0),
        make_wall("divider", 0.0, 0.0, 4.0, 4.0),
    ]


@pytest.fixture
def two_room_walls() -> List[WallSegment]:
    """3 m x 3 m and 4 m x 3 m rooms side by side, outer walls split at the divider."""
    return [
        make_wall("b1", 0.0, 0.0, 3.0, 0.0),
        make_wall("b2", 3.0, 0.0, 7.0, 0.0),
        make_wall("r", 7.0, 0.0, 7.0, 3.0),
        make_wall("t2", 7.0, 3.0, 3.0, 3.0),
        make_wall("t1", 3.0, 3.0, 0.0, 3.0),
        make_wall("l", 0.0, 3.0, 0.0, 0.0),
        make_wall("divider", 3.0, 0.0, 3.0, 3.0),
    ]


@pytest.fixture
def l_shape_walls() -> List[WallSegment]:
    """L-shaped room of 27 m²."""
    return [
        make_wall("s", 0.0, 0.0, 6.0, 0.0),
        make_wall("e", 6.0, 0.0, 6.0, 3.0),
        make_wall("ne", 6.0, 3.0, 3.0, 3.0),
        make_wall("inner", 3.0, 3.0, 3.0, 6.0),
        make_wall("n", 3.0, 6.0, 0.0, 6.0),
        make_wall("w", 0.0, 6.0, 0.0, 0.0),
    ]
