from __future__ import annotations

import logging
from typing import Any, Dict, Tuple, Type, TypeVar

from game_types import Color, RowKind, TreeHeight
from models import (
    BoardConfig,
    DifficultyConfig,
    GameConfig,
    GenerationConfig,
    PlayerConfig,
    VehicleConfig,
)
from utils import as_color, clamp_float, clamp_int

logger = logging.getLogger(__name__)

E = TypeVar("E", RowKind, TreeHeight)


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name, {})
    return value if isinstance(value, dict) else {}


def _int(raw: Dict[str, Any], key: str, default: int, lo: int, hi: int) -> int:
    try:
        return clamp_int(int(raw.get(key, default)), lo, hi)
    except (TypeError, ValueError):
        return default


def _float(raw: Dict[str, Any], key: str, default: float, lo: float, hi: float) -> float:
    try:
        return clamp_float(float(raw.get(key, default)), lo, hi)
    except (TypeError, ValueError):
        return default


def _enum_tuple(raw: Any, enum_cls: Type[E], default: Tuple[E, ...]) -> Tuple[E, ...]:
    """Parse a list of enum values, skipping unknown names. Empty -> default."""
    if not isinstance(raw, (list, tuple)):
        return default
    values = []
    for item in raw:
        try:
            values.append(enum_cls(str(item).strip().lower()))
        except ValueError:
            logger.warning("ignoring unknown %s %r", enum_cls.__name__, item)
    return tuple(values) or default


def _speeds(raw: Any, default: Tuple[float, ...]) -> Tuple[float, ...]:
    if not isinstance(raw, (list, tuple)):
        return default
    speeds = []
    for item in raw:
        try:
            value = float(item)
        except (TypeError, ValueError):
            continue
        if value > 0:
            speeds.append(value)
    return tuple(speeds) or default


def _colors(raw: Any, default: Tuple[Color, ...]) -> Tuple[Color, ...]:
    if not isinstance(raw, (list, tuple)):
        return default
    fallback = default[0]
    colors = tuple(as_color(c, fallback) for c in raw)
    return colors or default


def _size(raw: Any, default: Tuple[float, float]) -> Tuple[float, float]:
    if isinstance(raw, (list, tuple)) and len(raw) >= 2:
        try:
            return max(1.0, float(raw[0])), max(1.0, float(raw[1]))
        except (TypeError, ValueError):
            return default
    return default


def parse_board_config(raw: Dict[str, Any]) -> BoardConfig:
    d = BoardConfig()
    min_tile = _int(raw, "min_tile_index", d.min_tile_index, -64, 0)
    max_tile = _int(raw, "max_tile_index", d.max_tile_index, 0, 64)
    return BoardConfig(
        min_tile_index=min_tile,
        max_tile_index=max_tile,
        tile_size=_int(raw, "tile_size", d.tile_size, 4, 512),
        initial_rows=_int(raw, "initial_rows", d.initial_rows, 2, 1000),
        safe_rows_ahead=_int(raw, "safe_rows_ahead", d.safe_rows_ahead, 1, 999),
    )


def parse_difficulty_config(raw: Dict[str, Any]) -> DifficultyConfig:
    d = DifficultyConfig()
    min_vehicles = _int(raw, "min_vehicles_per_lane", d.min_vehicles_per_lane, 0, 64)
    max_vehicles = _int(raw, "max_vehicles_per_lane", d.max_vehicles_per_lane, 0, 64)
    return DifficultyConfig(
        speed_increase_per_level=_float(
            raw, "speed_increase_per_level", d.speed_increase_per_level, 0.0, 1000.0
        ),
        level_up_every_rows=_int(raw, "level_up_every_rows", d.level_up_every_rows, 1, 10000),
        max_speed_multiplier=_float(raw, "max_speed_multiplier", d.max_speed_multiplier, 1.0, 100.0),
        min_vehicles_per_lane=min(min_vehicles, max_vehicles),
        max_vehicles_per_lane=max_vehicles,
    )


def parse_generation_config(raw: Dict[str, Any]) -> GenerationConfig:
    d = GenerationConfig()
    return GenerationConfig(
        row_types=_enum_tuple(raw.get("row_types"), RowKind, d.row_types),
        trees_per_forest=_int(raw, "trees_per_forest", d.trees_per_forest, 0, 128),
        tree_heights=_enum_tuple(raw.get("tree_heights"), TreeHeight, d.tree_heights),
        vehicle_speeds=_speeds(raw.get("vehicle_speeds"), d.vehicle_speeds),
        cars_per_lane=_int(raw, "cars_per_lane", d.cars_per_lane, 0, 64),
        trucks_per_lane=_int(raw, "trucks_per_lane", d.trucks_per_lane, 0, 64),
        vehicle_colors=_colors(raw.get("vehicle_colors"), d.vehicle_colors),
        max_placement_attempts=_int(
            raw, "max_placement_attempts", d.max_placement_attempts, 1, 100000
        ),
    )


def parse_player_config(raw: Dict[str, Any]) -> PlayerConfig:
    """Parse player settings from config data.

    Args:
        raw: Dict containing player settings.

    Returns:
        PlayerConfig with defaults applied.
    """
    d = PlayerConfig()
    return PlayerConfig(
        step_time=_float(raw, "step_time", d.step_time, 0.0, 10.0),
        width=_float(raw, "width", d.width, 1.0, 1000.0),
        depth=_float(raw, "depth", d.depth, 1.0, 1000.0),
        forward_offset=_float(raw, "forward_offset", d.forward_offset, -500.0, 500.0),
        base_height=_float(raw, "base_height", d.base_height, 0.0, 1000.0),
        jump_height=_float(raw, "jump_height", d.jump_height, 0.0, 1000.0),
        color=as_color(raw.get("color"), d.color),
    )


def parse_vehicle_config(raw: Dict[str, Any]) -> VehicleConfig:
    d = VehicleConfig()
    return VehicleConfig(
        car_size=_size(raw.get("car_size"), d.car_size),
        truck_size=_size(raw.get("truck_size"), d.truck_size),
        visibility_distance=_int(raw, "visibility_distance", d.visibility_distance, 1, 1000),
    )


def parse_game_config(raw: Dict[str, Any]) -> GameConfig:
    """Build the full simulation config from a raw (possibly partial) dict."""
    if not isinstance(raw, dict):
        raw = {}
    d = GameConfig()
    key = raw.get("high_score_key", d.high_score_key)
    return GameConfig(
        board=parse_board_config(_section(raw, "board")),
        difficulty=parse_difficulty_config(_section(raw, "difficulty")),
        generation=parse_generation_config(_section(raw, "generation")),
        player=parse_player_config(_section(raw, "player")),
        vehicles=parse_vehicle_config(_section(raw, "vehicles")),
        camera_shake_decay=_float(raw, "camera_shake_decay", d.camera_shake_decay, 0.001, 1.0),
        high_score_key=str(key).strip() if isinstance(key, str) and key.strip() else d.high_score_key,
    )
