from __future__ import annotations

import logging
import math
from functools import reduce
from typing import Iterable, List, Optional

import pygame

from board import BoardState
from game_types import DIRECTION_DELTAS, Direction
from models import BoardConfig, ForestRow, PlayerConfig, Position
from utils import clamp_float, lerp

logger = logging.getLogger(__name__)

_FACING = {
    Direction.FORWARD: 0.0,
    Direction.LEFT: math.pi / 2,
    Direction.RIGHT: -math.pi / 2,
    Direction.BACKWARD: math.pi,
}


def apply_move(position: Position, direction: Direction) -> Position:
    d_row, d_tile = DIRECTION_DELTAS[direction]
    return Position(position.row_index + d_row, position.tile_index + d_tile)


def calculate_final_position(position: Position, moves: Iterable[Direction]) -> Position:
    """Fold ``moves`` over ``position`` without checking validity."""
    return reduce(apply_move, moves, position)


def is_valid_position(position: Position, board: BoardState) -> bool:
    """Return False for positions behind the start, off the row edge, or on a tree."""
    cfg = board.cfg
    if position.row_index == -1:
        return False
    if position.tile_index in (cfg.min_tile_index - 1, cfg.max_tile_index + 1):
        return False

    row = board.row_at(position.row_index)
    if isinstance(row, ForestRow) and row.has_tree_at(position.tile_index):
        return False
    # Lanes never block; vehicles are handled by collision detection.
    return True


class Player:
    """Grid-stepping player: a validated move queue plus step interpolation."""

    def __init__(self, cfg: PlayerConfig, board_cfg: BoardConfig) -> None:
        self.cfg = cfg
        self._tile_size = board_cfg.tile_size
        self.current_row: int = 0
        self.current_tile: int = 0
        self.moves_queue: List[Direction] = []
        self.step_elapsed: float = 0.0
        self._world_pos = pygame.Vector2(0, 0)

    @property
    def position(self) -> Position:
        return Position(self.current_row, self.current_tile)

    # ---------
    # Run state
    # ---------

    def reset(self) -> None:
        self.current_row = 0
        self.current_tile = 0
        self.moves_queue = []
        self.step_elapsed = 0.0

    def enqueue(self, direction: Direction, board: BoardState) -> bool:
        """Queue ``direction`` if the queue would still end on a valid tile.

        Invalid moves are dropped silently; returns whether the move was queued.
        """
        final = calculate_final_position(self.position, [*self.moves_queue, direction])
        if not is_valid_position(final, board):
            logger.debug("rejected move %s -> %s", direction.value, final)
            return False
        self.moves_queue.append(direction)
        return True

    # ---------
    # Stepping
    # ---------

    @property
    def progress(self) -> float:
        """Completion of the in-flight step in [0, 1] (0 when idle)."""
        if not self.moves_queue:
            return 0.0
        if self.cfg.step_time <= 0:
            return 1.0
        return clamp_float(self.step_elapsed / self.cfg.step_time, 0.0, 1.0)

    def advance(self, dt: float) -> Optional[Direction]:
        """Advance the in-flight step by ``dt`` seconds.

        Returns the completed direction when a step finishes this call. Time
        left over after a step completes is dropped.
        """
        if not self.moves_queue:
            return None

        self.step_elapsed += max(0.0, dt)
        if self.progress < 1.0:
            return None

        direction = self.moves_queue.pop(0)
        moved = apply_move(self.position, direction)
        self.current_row = moved.row_index
        self.current_tile = moved.tile_index
        self.step_elapsed = 0.0
        return direction

    # ---------
    # World-space pose
    # ---------

    @property
    def world_pos(self) -> pygame.Vector2:
        """Interpolated (x, y) of the player in world units."""
        ts = self._tile_size
        start_x = self.current_tile * ts
        start_y = self.current_row * ts
        end_x, end_y = start_x, start_y
        if self.moves_queue:
            d_row, d_tile = DIRECTION_DELTAS[self.moves_queue[0]]
            end_x += d_tile * ts
            end_y += d_row * ts

        t = self.progress
        self._world_pos.update(lerp(start_x, end_x, t), lerp(start_y, end_y, t))
        return self._world_pos

    @property
    def hop_height(self) -> float:
        return self.cfg.base_height + math.sin(self.progress * math.pi) * self.cfg.jump_height

    @property
    def facing(self) -> float:
        """Heading in radians for the current move (0 is forward)."""
        if not self.moves_queue:
            return 0.0
        return _FACING[self.moves_queue[0]]
