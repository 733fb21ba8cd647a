"""
row_generator.py

Procedural row metadata for the board.

Each row is one of:
- forest: TREES_PER_FOREST trees on distinct tiles (trees block movement)
- car lane / truck lane: one direction + speed, vehicles with disjoint footprints

Rows are generated for an absolute row index; the difficulty level of that
index drives lane speed and vehicle count, so rows further away are harder
even before the player gets there.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Set

from difficulty import get_adjusted_speed, get_difficulty_level, get_vehicle_count
from game_types import RowKind
from models import (
    FOOTPRINT_RADIUS,
    BoardConfig,
    DifficultyConfig,
    ForestRow,
    GenerationConfig,
    LaneRow,
    Row,
    Tree,
    Vehicle,
)
from utils import random_element

logger = logging.getLogger(__name__)


class RowGenerator:
    """Generates forest and traffic lane rows from an injected RNG."""

    def __init__(
        self,
        board_cfg: BoardConfig,
        difficulty_cfg: DifficultyConfig,
        gen_cfg: GenerationConfig,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.board_cfg = board_cfg
        self.difficulty_cfg = difficulty_cfg
        self.gen_cfg = gen_cfg
        self.rng = rng if rng is not None else random.Random()

    # ----------------------------
    # Public API
    # ----------------------------

    def generate_rows(self, amount: int, starting_row: int = 0) -> List[Row]:
        """Generate ``amount`` rows for absolute indices starting at ``starting_row``."""
        rows: List[Row] = []
        for i in range(amount):
            level = get_difficulty_level(starting_row + i, self.difficulty_cfg)
            rows.append(self.generate_row(level))
        return rows

    def generate_row(self, difficulty_level: int = 0) -> Row:
        kind = random_element(self.rng, self.gen_cfg.row_types)
        if kind == RowKind.FOREST:
            row: Row = self.generate_forest()
        else:
            row = self.generate_lane(kind, difficulty_level)
        logger.debug("generated %s row at level %s", kind.value, difficulty_level)
        return row

    def generate_forest(self) -> ForestRow:
        lo, hi = self.board_cfg.min_tile_index, self.board_cfg.max_tile_index
        count = min(self.gen_cfg.trees_per_forest, self.board_cfg.tiles_per_row)
        tiles = self.rng.sample(range(lo, hi + 1), count)
        trees = tuple(
            Tree(tile_index=t, height=random_element(self.rng, self.gen_cfg.tree_heights))
            for t in tiles
        )
        return ForestRow(trees=trees)

    def generate_lane(self, kind: RowKind, difficulty_level: int = 0) -> LaneRow:
        direction = random_element(self.rng, (True, False))
        base_speed = random_element(self.rng, self.gen_cfg.vehicle_speeds)
        speed = get_adjusted_speed(base_speed, difficulty_level, self.difficulty_cfg)

        wanted = get_vehicle_count(kind, difficulty_level, self.difficulty_cfg, self.gen_cfg)
        count = min(wanted, self.max_vehicles_for(kind))
        if count == 0 and wanted > 0:
            logger.warning(
                "%s lane: %s tiles are too narrow for a single vehicle",
                kind.value,
                self.board_cfg.tiles_per_row,
            )
        elif count < wanted:
            logger.debug("%s lane fits %s of %s vehicles", kind.value, count, wanted)

        tiles = self._place_vehicles(count, FOOTPRINT_RADIUS[kind])
        vehicles = tuple(
            Vehicle(initial_tile_index=t, color=random_element(self.rng, self.gen_cfg.vehicle_colors))
            for t in tiles
        )
        return LaneRow(kind=kind, direction=direction, speed=speed, vehicles=vehicles)

    def max_vehicles_for(self, kind: RowKind) -> int:
        """Upper bound on vehicles whose footprints can fit side by side in a row."""
        width = 2 * FOOTPRINT_RADIUS[kind] + 1
        return self.board_cfg.tiles_per_row // width

    # ----------------------------
    # Internals
    # ----------------------------

    def _place_vehicles(self, count: int, radius: int) -> List[int]:
        """Pick ``count`` initial tiles whose footprints don't overlap.

        Each lane layout is sampled vehicle by vehicle from the tiles still
        free; a dead end restarts the whole lane. Once the restarts run out,
        the vehicles are packed side by side at a random offset, which always
        fits because ``count`` is capped by ``max_vehicles_for``.
        """
        for _ in range(max(1, self.gen_cfg.max_placement_attempts)):
            tiles = self._sample_layout(count, radius)
            if tiles is not None:
                return tiles
        logger.debug(
            "no random layout for %s vehicles after %s tries; packing",
            count,
            self.gen_cfg.max_placement_attempts,
        )
        return self._packed_layout(count, radius)

    def _sample_layout(self, count: int, radius: int) -> Optional[List[int]]:
        lo, hi = self.board_cfg.min_tile_index, self.board_cfg.max_tile_index
        occupied: Set[int] = set()
        tiles: List[int] = []
        for _ in range(count):
            free = [
                t
                for t in range(lo, hi + 1)
                if not any(f in occupied for f in range(t - radius, t + radius + 1))
            ]
            if not free:
                return None
            tile = random_element(self.rng, free)
            occupied.update(range(tile - radius, tile + radius + 1))
            tiles.append(tile)
        return tiles

    def _packed_layout(self, count: int, radius: int) -> List[int]:
        width = 2 * radius + 1
        slack = max(0, self.board_cfg.tiles_per_row - count * width)
        first = self.board_cfg.min_tile_index + radius + self.rng.randint(0, slack)
        return [first + i * width for i in range(count)]
