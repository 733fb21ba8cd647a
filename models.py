from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple, Union

from game_types import Color, RowKind, TreeHeight

TREE_HEIGHT_UNITS: Dict[TreeHeight, int] = {
    TreeHeight.LOW: 20,
    TreeHeight.MID: 45,
    TreeHeight.HIGH: 60,
}

# Tiles reserved on each side of a vehicle's initial tile at generation time.
FOOTPRINT_RADIUS: Dict[RowKind, int] = {
    RowKind.CAR: 1,
    RowKind.TRUCK: 2,
}


@dataclass(frozen=True)
class Position:
    row_index: int
    tile_index: int


@dataclass(frozen=True)
class Tree:
    tile_index: int
    height: TreeHeight

    def to_dict(self) -> Dict[str, Any]:
        return {"tileIndex": self.tile_index, "height": self.height.value}


@dataclass(frozen=True)
class ForestRow:
    trees: Tuple[Tree, ...]

    @property
    def kind(self) -> RowKind:
        return RowKind.FOREST

    def has_tree_at(self, tile_index: int) -> bool:
        return any(tree.tile_index == tile_index for tree in self.trees)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value, "trees": [t.to_dict() for t in self.trees]}


@dataclass(frozen=True)
class Vehicle:
    initial_tile_index: int
    color: Color

    def to_dict(self) -> Dict[str, Any]:
        return {"initialTileIndex": self.initial_tile_index, "color": list(self.color)}


@dataclass(frozen=True)
class LaneRow:
    kind: RowKind  # car|truck
    direction: bool  # True travels towards +x
    speed: float
    vehicles: Tuple[Vehicle, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "direction": self.direction,
            "speed": self.speed,
            "vehicles": [v.to_dict() for v in self.vehicles],
        }


Row = Union[ForestRow, LaneRow]


@dataclass(frozen=True)
class BoardConfig:
    min_tile_index: int = -8
    max_tile_index: int = 8
    tile_size: int = 42
    initial_rows: int = 20
    safe_rows_ahead: int = 10

    @property
    def tiles_per_row(self) -> int:
        return self.max_tile_index - self.min_tile_index + 1


@dataclass(frozen=True)
class DifficultyConfig:
    speed_increase_per_level: float = 20.0  # percent
    level_up_every_rows: int = 10
    max_speed_multiplier: float = 2.5
    min_vehicles_per_lane: int = 2
    max_vehicles_per_lane: int = 5


@dataclass(frozen=True)
class GenerationConfig:
    row_types: Tuple[RowKind, ...] = (RowKind.CAR, RowKind.TRUCK, RowKind.FOREST)
    trees_per_forest: int = 4
    tree_heights: Tuple[TreeHeight, ...] = (TreeHeight.LOW, TreeHeight.MID, TreeHeight.HIGH)
    vehicle_speeds: Tuple[float, ...] = (125.0, 156.0, 188.0)
    cars_per_lane: int = 3
    trucks_per_lane: int = 2
    vehicle_colors: Tuple[Color, ...] = ((165, 37, 35), (189, 182, 56), (120, 177, 75))
    max_placement_attempts: int = 200  # random lane layouts tried before packing


@dataclass(frozen=True)
class PlayerConfig:
    step_time: float = 0.2
    width: float = 25.0
    depth: float = 18.0
    forward_offset: float = 2.0  # box center sits ahead of the body center
    base_height: float = 10.0
    jump_height: float = 8.0
    color: Color = (139, 69, 19)


@dataclass(frozen=True)
class VehicleConfig:
    car_size: Tuple[float, float] = (60.0, 33.0)
    truck_size: Tuple[float, float] = (100.0, 35.0)
    visibility_distance: int = 15  # rows; rendering only

    def size_for(self, kind: RowKind) -> Tuple[float, float]:
        return self.truck_size if kind == RowKind.TRUCK else self.car_size


@dataclass(frozen=True)
class GameConfig:
    board: BoardConfig = field(default_factory=BoardConfig)
    difficulty: DifficultyConfig = field(default_factory=DifficultyConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    vehicles: VehicleConfig = field(default_factory=VehicleConfig)
    camera_shake_decay: float = 0.05
    high_score_key: str = "cipher-road-high-score"
