from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import pygame

from models import VehicleConfig
from traffic import VehicleActor


@dataclass(frozen=True)
class Box:
    """Axis-aligned box in the ground plane; edges count as inside."""

    left: float
    right: float
    bottom: float
    top: float

    @classmethod
    def centered(cls, x: float, y: float, width: float, depth: float) -> "Box":
        hw, hd = width / 2.0, depth / 2.0
        return cls(left=x - hw, right=x + hw, bottom=y - hd, top=y + hd)

    def intersects(self, other: "Box") -> bool:
        return (
            self.left <= other.right
            and self.right >= other.left
            and self.bottom <= other.top
            and self.top >= other.bottom
        )


def player_box(
    world_pos: pygame.Vector2, width: float, depth: float, forward_offset: float = 0.0
) -> Box:
    """Player footprint; ``forward_offset`` shifts it towards +y (the way forward)."""
    return Box.centered(world_pos.x, world_pos.y + forward_offset, width, depth)


def vehicle_box(actor: VehicleActor, cfg: VehicleConfig, tile_size: int) -> Box:
    width, depth = cfg.size_for(actor.kind)
    return Box.centered(actor.x, actor.row_index * tile_size, width, depth)


class CollisionDetector:
    """Checks the player against vehicles within one row of the player's row."""

    ROW_BAND = 1

    def __init__(self, vehicle_cfg: VehicleConfig, tile_size: int) -> None:
        self.vehicle_cfg = vehicle_cfg
        self.tile_size = tile_size

    def in_band(self, actor: VehicleActor, current_row: int) -> bool:
        return abs(actor.row_index - current_row) <= self.ROW_BAND

    def check(
        self,
        player: Box,
        current_row: int,
        actors: Iterable[VehicleActor],
    ) -> Optional[VehicleActor]:
        """Return the first vehicle in the row band overlapping ``player``, if any."""
        for actor in actors:
            if not self.in_band(actor, current_row):
                continue
            if player.intersects(vehicle_box(actor, self.vehicle_cfg, self.tile_size)):
                return actor
        return None
