from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from game_types import Color, RowKind
from models import BoardConfig, LaneRow, Row

logger = logging.getLogger(__name__)


@dataclass
class VehicleActor:
    """A vehicle in motion: its lane metadata plus a continuously updated x."""

    row_index: int
    kind: RowKind
    direction: bool
    speed: float
    color: Color
    x: float

    def advance(self, dt: float, beginning_of_row: float, end_of_row: float) -> None:
        """Move by ``speed * dt`` or, once past a row bound, wrap to the other one.

        The wrap replaces the advance for that tick, so each vehicle jumps at
        exactly one point per pass.
        """
        if self.direction:
            self.x = beginning_of_row if self.x > end_of_row else self.x + self.speed * dt
        else:
            self.x = end_of_row if self.x < beginning_of_row else self.x - self.speed * dt


class Traffic:
    """Vehicle actors for every lane row on the board."""

    def __init__(self, cfg: BoardConfig) -> None:
        self.cfg = cfg
        self.actors: List[VehicleActor] = []
        self._synced_rows = 0
        # Two tiles of slack beyond the playable range on either side.
        self.beginning_of_row = float((cfg.min_tile_index - 2) * cfg.tile_size)
        self.end_of_row = float((cfg.max_tile_index + 2) * cfg.tile_size)

    def reset(self) -> None:
        self.actors = []
        self._synced_rows = 0

    def sync(self, rows: Sequence[Row]) -> int:
        """Spawn actors for rows appended since the last sync; returns how many."""
        spawned = 0
        for offset, row in enumerate(rows[self._synced_rows :]):
            row_index = self._synced_rows + offset + 1
            if not isinstance(row, LaneRow):
                continue
            for vehicle in row.vehicles:
                self.actors.append(
                    VehicleActor(
                        row_index=row_index,
                        kind=row.kind,
                        direction=row.direction,
                        speed=row.speed,
                        color=vehicle.color,
                        x=float(vehicle.initial_tile_index * self.cfg.tile_size),
                    )
                )
                spawned += 1
        self._synced_rows = len(rows)
        if spawned:
            logger.debug("spawned %s vehicles (rows synced: %s)", spawned, self._synced_rows)
        return spawned

    def advance(self, dt: float) -> None:
        for actor in self.actors:
            actor.advance(dt, self.beginning_of_row, self.end_of_row)

    def near_row(self, row_index: int, distance: int) -> List[VehicleActor]:
        return [a for a in self.actors if abs(a.row_index - row_index) <= distance]
