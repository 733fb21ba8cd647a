from __future__ import annotations

from enum import Enum
from typing import Tuple

Color = Tuple[int, int, int]


class Direction(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"


class GameStatus(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


class RowKind(str, Enum):
    CAR = "car"
    TRUCK = "truck"
    FOREST = "forest"


class TreeHeight(str, Enum):
    LOW = "low"
    MID = "mid"
    HIGH = "high"


# (row delta, tile delta) per direction
DIRECTION_DELTAS = {
    Direction.FORWARD: (1, 0),
    Direction.BACKWARD: (-1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}
