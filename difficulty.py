"""Difficulty progression: row index/score -> level -> speed and traffic density."""

from __future__ import annotations

from game_types import RowKind
from models import DifficultyConfig, GenerationConfig


def get_difficulty_level(n: int, cfg: DifficultyConfig) -> int:
    """Return the difficulty level reached after ``n`` rows (or points).

    Used both for the absolute index of a row being generated and for the
    current score shown in the HUD.
    """
    if n <= 0:
        return 0
    return n // max(1, cfg.level_up_every_rows)


def get_adjusted_speed(base_speed: float, level: int, cfg: DifficultyConfig) -> float:
    """Scale a lane's base speed by level, capped at ``max_speed_multiplier``."""
    level = max(0, level)
    scaled = base_speed * (1 + level * cfg.speed_increase_per_level / 100.0)
    return min(scaled, base_speed * cfg.max_speed_multiplier)


def get_vehicle_count(
    kind: RowKind,
    level: int,
    cfg: DifficultyConfig,
    gen_cfg: GenerationConfig,
) -> int:
    """Vehicles to place in a lane of ``kind`` at ``level``.

    Trucks never drop below ``min_vehicles_per_lane``; cars may.
    """
    level = max(0, level)
    base = gen_cfg.trucks_per_lane if kind == RowKind.TRUCK else gen_cfg.cars_per_lane
    count = min(base + level // 2, cfg.max_vehicles_per_lane)
    if kind == RowKind.TRUCK:
        count = max(count, cfg.min_vehicles_per_lane)
    return count
