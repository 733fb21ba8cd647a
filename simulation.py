from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from board import BoardState
from collision import CollisionDetector, player_box
from difficulty import get_difficulty_level
from events import EventBus, EventType
from game_types import Direction, GameStatus
from highscore import HighScoreTracker, KeyValueStore, MemoryStore
from models import GameConfig
from player import Player
from row_generator import RowGenerator
from traffic import Traffic, VehicleActor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the simulation handed to the frontend each frame."""

    status: GameStatus
    score: int
    high_score: int
    level: int
    camera_shake: float
    player_row: int
    player_tile: int
    player_x: float
    player_y: float
    hop_height: float
    facing: float
    queued_moves: int


class Simulation:
    """Owns the board, player and traffic and advances them one tick at a time.

    Status flow: running <-> paused via ``toggle_pause``; running -> over only
    on collision; over -> running only via ``reset``. Every other request that
    doesn't fit the current status is ignored.
    """

    def __init__(
        self,
        cfg: Optional[GameConfig] = None,
        store: Optional[KeyValueStore] = None,
        rng: Optional[random.Random] = None,
        generator: Optional[RowGenerator] = None,
        events: Optional[EventBus] = None,
    ) -> None:
        self.cfg = cfg if cfg is not None else GameConfig()
        self.events = events if events is not None else EventBus()
        self.generator = generator or RowGenerator(
            self.cfg.board, self.cfg.difficulty, self.cfg.generation, rng
        )
        self.board = BoardState(self.cfg.board, self.generator)
        self.player = Player(self.cfg.player, self.cfg.board)
        self.traffic = Traffic(self.cfg.board)
        self.traffic.sync(self.board.rows())
        self.collisions = CollisionDetector(self.cfg.vehicles, self.cfg.board.tile_size)
        self.high_score = HighScoreTracker(
            store if store is not None else MemoryStore(), self.cfg.high_score_key
        )

        self.status = GameStatus.RUNNING
        self.score = 0
        self.camera_shake = 0.0

    # ----------------------------
    # Input
    # ----------------------------

    def enqueue_move(self, direction: Direction) -> bool:
        if self.status != GameStatus.RUNNING:
            return False
        return self.player.enqueue(direction, self.board)

    def toggle_pause(self) -> None:
        if self.status == GameStatus.RUNNING:
            self.status = GameStatus.PAUSED
            self.events.emit(EventType.PAUSED)
        elif self.status == GameStatus.PAUSED:
            self.status = GameStatus.RUNNING
            self.events.emit(EventType.RESUMED)

    def reset(self) -> None:
        """Start a fresh run; the high score is kept."""
        self.board.reset()
        self.player.reset()
        self.traffic.reset()
        self.traffic.sync(self.board.rows())
        self.status = GameStatus.RUNNING
        self.score = 0
        self.camera_shake = 0.0
        logger.info("new run (high score %s)", self.high_score.value)
        self.events.emit(EventType.RESET)

    # ----------------------------
    # Simulation
    # ----------------------------

    def tick(self, dt: float) -> None:
        """Advance one frame: movement, vehicles + collision, then board growth."""
        if self.status == GameStatus.PAUSED:
            return

        self._decay_camera_shake()
        if self.status == GameStatus.OVER:
            return

        dt = max(0.0, dt)
        completed = self.player.advance(dt)
        if completed is not None:
            self._on_step_completed(completed)

        self.traffic.advance(dt)
        hit = self.collisions.check(
            player_box(
                self.player.world_pos,
                self.cfg.player.width,
                self.cfg.player.depth,
                self.cfg.player.forward_offset,
            ),
            self.player.current_row,
            self.traffic.actors,
        )
        if hit is not None:
            self.end_game(hit)

        if completed is not None:
            self._grow_board_if_needed()

    def _on_step_completed(self, direction: Direction) -> None:
        self.events.emit(
            EventType.MOVED,
            direction=direction,
            row=self.player.current_row,
            tile=self.player.current_tile,
        )
        self.update_score(self.player.current_row)

    def update_score(self, row_index: int) -> None:
        previous = self.score
        self.score = max(self.score, row_index)
        if self.score > previous:
            self.events.emit(EventType.SCORE_INCREASED, score=self.score)
        self.high_score.submit(self.score)

    def _grow_board_if_needed(self) -> None:
        if self.board.maybe_grow(self.player.current_row):
            spawned = self.traffic.sync(self.board.rows())
            self.events.emit(EventType.ROWS_ADDED, total=len(self.board), vehicles=spawned)

    def end_game(self, hit: Optional[VehicleActor] = None) -> None:
        if self.status != GameStatus.RUNNING:
            return
        self.status = GameStatus.OVER
        self.camera_shake = 1.0
        logger.info(
            "game over at row %s (score %s, hit %s)",
            self.player.current_row,
            self.score,
            hit.kind.value if hit else "-",
        )
        self.events.emit(EventType.GAME_OVER, score=self.score, high_score=self.high_score.value)

    def _decay_camera_shake(self) -> None:
        if self.camera_shake > 0:
            self.camera_shake = max(0.0, self.camera_shake - self.cfg.camera_shake_decay)

    # ----------------------------
    # Snapshots
    # ----------------------------

    @property
    def level(self) -> int:
        """1-based difficulty level for display."""
        return get_difficulty_level(self.score, self.cfg.difficulty) + 1

    def snapshot(self) -> GameSnapshot:
        pos = self.player.world_pos
        return GameSnapshot(
            status=self.status,
            score=self.score,
            high_score=self.high_score.value,
            level=self.level,
            camera_shake=self.camera_shake,
            player_row=self.player.current_row,
            player_tile=self.player.current_tile,
            player_x=pos.x,
            player_y=pos.y,
            hop_height=self.player.hop_height,
            facing=self.player.facing,
            queued_moves=len(self.player.moves_queue),
        )
