import json
from pathlib import Path

import pytest

from config_io import load_game_config, load_json_config
from config_parsing import parse_game_config
from game_types import RowKind, TreeHeight
from models import GameConfig


def test_empty_config_gives_defaults():
    assert parse_game_config({}) == GameConfig()
    assert parse_game_config("nonsense") == GameConfig()


def test_default_constants():
    cfg = GameConfig()
    assert (cfg.board.min_tile_index, cfg.board.max_tile_index) == (-8, 8)
    assert cfg.board.tile_size == 42
    assert cfg.board.initial_rows == 20
    assert cfg.board.safe_rows_ahead == 10
    assert cfg.player.step_time == pytest.approx(0.2)
    assert cfg.generation.vehicle_speeds == (125.0, 156.0, 188.0)
    assert cfg.high_score_key == "cipher-road-high-score"


def test_overrides_are_applied():
    cfg = parse_game_config(
        {
            "board": {"tile_size": 30, "initial_rows": 12},
            "difficulty": {"level_up_every_rows": 5},
            "generation": {"row_types": ["car", "bogus"], "tree_heights": ["HIGH"]},
            "player": {"step_time": 0.1, "color": [1, 2, 3]},
            "vehicles": {"car_size": [50, 30]},
            "high_score_key": "custom",
        }
    )
    assert cfg.board.tile_size == 30
    assert cfg.board.initial_rows == 12
    assert cfg.difficulty.level_up_every_rows == 5
    assert cfg.generation.row_types == (RowKind.CAR,)
    assert cfg.generation.tree_heights == (TreeHeight.HIGH,)
    assert cfg.player.step_time == pytest.approx(0.1)
    assert cfg.player.color == (1, 2, 3)
    assert cfg.vehicles.car_size == (50.0, 30.0)
    assert cfg.high_score_key == "custom"


def test_bad_values_fall_back_or_clamp():
    cfg = parse_game_config(
        {
            "board": {"tile_size": 1, "max_tile_index": "wide"},
            "player": {"step_time": "fast"},
            "generation": {"vehicle_speeds": [-5, "x"], "row_types": []},
            "vehicles": "big",
        }
    )
    assert cfg.board.tile_size == 4
    assert cfg.board.max_tile_index == 8
    assert cfg.player.step_time == pytest.approx(0.2)
    assert cfg.generation.vehicle_speeds == (125.0, 156.0, 188.0)
    assert cfg.generation.row_types == GameConfig().generation.row_types
    assert cfg.vehicles == GameConfig().vehicles


def test_min_vehicles_never_exceeds_max():
    cfg = parse_game_config({"difficulty": {"min_vehicles_per_lane": 9, "max_vehicles_per_lane": 3}})
    assert cfg.difficulty.min_vehicles_per_lane == 3
    assert cfg.difficulty.max_vehicles_per_lane == 3


def test_load_json_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"board": {"tile_size": 20}}), encoding="utf-8")
    assert load_json_config(path) == {"board": {"tile_size": 20}}


def test_load_json_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json_config(tmp_path / "nope.json")


def test_load_json_config_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"board": {"tile_size": 20,}}', encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        load_json_config(path)
    assert "not valid JSON" in str(exc.value)


def test_load_json_config_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_json_config(path) == {}


def test_shipped_config_parses():
    raw, cfg = load_game_config(Path(__file__).resolve().parent.parent / "config.json")
    assert raw["window"]["title"] == "Cipher Road"
    assert cfg.board.tile_size == 42
    assert set(cfg.generation.row_types) == {RowKind.CAR, RowKind.TRUCK, RowKind.FOREST}


def test_load_game_config_without_file():
    raw, cfg = load_game_config(None)
    assert raw == {}
    assert cfg == GameConfig()
