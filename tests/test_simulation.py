import pytest

from events import EventType
from game_types import Direction, GameStatus, RowKind
from models import LaneRow, Vehicle
from traffic import VehicleActor

PARKED_LANE = LaneRow(kind=RowKind.CAR, direction=True, speed=125.0, vehicles=(Vehicle(6, (1, 2, 3)),))


def _step(sim, direction=Direction.FORWARD):
    assert sim.enqueue_move(direction)
    sim.tick(sim.cfg.player.step_time)


def _record(sim):
    seen = []
    for event_type in EventType:
        sim.events.subscribe(event_type, seen.append)
    return seen


def test_new_simulation_state(make_sim, cfg):
    sim = make_sim()
    assert sim.status == GameStatus.RUNNING
    assert sim.score == 0
    assert sim.camera_shake == 0.0
    assert len(sim.board) == cfg.board.initial_rows
    assert sim.player.position.row_index == 0
    assert sim.level == 1


def test_board_grows_exactly_once_at_threshold(make_sim):
    sim = make_sim()
    for row in range(1, 10):
        _step(sim)
        assert sim.player.current_row == row
        assert len(sim.board) == 20
    _step(sim)
    assert sim.player.current_row == 10
    assert len(sim.board) == 40
    for _ in range(5):
        _step(sim)
    assert len(sim.board) == 40
    assert sim.generator.calls == [(20, 0), (20, 20)]


def test_score_is_furthest_row_reached(make_sim):
    sim = make_sim()
    _step(sim)
    _step(sim)
    _step(sim, Direction.BACKWARD)
    assert sim.player.current_row == 1
    assert sim.score == 2
    _step(sim, Direction.LEFT)
    assert sim.score == 2


def test_high_score_is_written_when_beaten(make_sim, store, cfg):
    sim = make_sim()
    _step(sim)
    _step(sim)
    assert sim.high_score.value == 2
    assert store.get(cfg.high_score_key) == "2"


def test_reset_after_game_over(make_sim, store, cfg):
    store.set(cfg.high_score_key, "10")
    sim = make_sim()
    sim.score = 7
    sim.end_game()
    assert sim.status == GameStatus.OVER

    sim.reset()
    assert sim.status == GameStatus.RUNNING
    assert sim.score == 0
    assert sim.high_score.value == 10
    assert len(sim.board) == 20
    assert sim.player.position.row_index == 0
    assert sim.player.position.tile_index == 0
    assert sim.player.moves_queue == []
    assert sim.camera_shake == 0.0


def test_reset_rebuilds_traffic(make_sim):
    sim = make_sim([PARKED_LANE])
    for _ in range(10):
        _step(sim)
    assert len(sim.traffic.actors) == 40
    sim.reset()
    assert len(sim.traffic.actors) == 20


def test_pause_freezes_everything(make_sim):
    sim = make_sim([PARKED_LANE])
    assert sim.enqueue_move(Direction.FORWARD)
    sim.tick(0.1)
    sim.toggle_pause()
    assert sim.status == GameStatus.PAUSED

    before = sim.snapshot()
    xs = [a.x for a in sim.traffic.actors]
    sim.tick(1.0)
    assert sim.snapshot() == before
    assert [a.x for a in sim.traffic.actors] == xs
    assert not sim.enqueue_move(Direction.LEFT)

    sim.toggle_pause()
    assert sim.status == GameStatus.RUNNING
    sim.tick(0.1)
    assert sim.player.current_row == 1
    assert sim.score == 1


def test_toggle_pause_is_ignored_when_over(make_sim):
    sim = make_sim()
    sim.end_game()
    sim.toggle_pause()
    assert sim.status == GameStatus.OVER


def test_no_movement_after_game_over(make_sim):
    sim = make_sim([PARKED_LANE])
    sim.end_game()
    xs = [a.x for a in sim.traffic.actors]
    assert not sim.enqueue_move(Direction.FORWARD)
    sim.tick(0.5)
    assert [a.x for a in sim.traffic.actors] == xs
    assert sim.score == 0


def test_camera_shake_decays_to_zero(make_sim):
    sim = make_sim()
    sim.end_game()
    assert sim.camera_shake == 1.0
    sim.tick(1 / 60)
    assert sim.camera_shake == pytest.approx(0.95)
    for _ in range(30):
        sim.tick(1 / 60)
    assert sim.camera_shake == 0.0


def test_camera_shake_frozen_while_paused(make_sim):
    sim = make_sim()
    sim.camera_shake = 0.5
    sim.toggle_pause()
    sim.tick(1 / 60)
    assert sim.camera_shake == 0.5


def test_events_for_a_step(make_sim):
    sim = make_sim()
    seen = _record(sim)
    _step(sim)
    assert [e.type for e in seen] == [EventType.MOVED, EventType.SCORE_INCREASED]
    assert seen[0].payload == {"direction": Direction.FORWARD, "row": 1, "tile": 0}
    assert seen[1].payload == {"score": 1}

    seen.clear()
    _step(sim, Direction.RIGHT)
    assert [e.type for e in seen] == [EventType.MOVED]


def test_events_for_growth_and_game_over(make_sim):
    sim = make_sim()
    seen = _record(sim)
    for _ in range(10):
        _step(sim)
    added = [e for e in seen if e.type == EventType.ROWS_ADDED]
    assert len(added) == 1
    assert added[0].payload["total"] == 40

    sim.traffic.actors.append(
        VehicleActor(row_index=10, kind=RowKind.CAR, direction=True, speed=0.0, color=(0, 0, 0), x=0.0)
    )
    sim.tick(0.0)
    assert seen[-1].type == EventType.GAME_OVER
    assert seen[-1].payload == {"score": 10, "high_score": 10}


def test_pause_resume_reset_events(make_sim):
    sim = make_sim()
    seen = _record(sim)
    sim.toggle_pause()
    sim.toggle_pause()
    sim.reset()
    assert [e.type for e in seen] == [EventType.PAUSED, EventType.RESUMED, EventType.RESET]


def test_snapshot_reports_level(make_sim):
    sim = make_sim()
    for _ in range(12):
        _step(sim)
    snap = sim.snapshot()
    assert snap.score == 12
    assert snap.level == 2
    assert snap.player_row == 12
    assert snap.player_y == pytest.approx(12 * 42)
