import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import random  # noqa: E402
from typing import List, Sequence  # noqa: E402

import pytest  # noqa: E402

from board import BoardState  # noqa: E402
from game_types import RowKind  # noqa: E402
from highscore import MemoryStore  # noqa: E402
from models import (  # noqa: E402
    BoardConfig,
    DifficultyConfig,
    GameConfig,
    GenerationConfig,
    LaneRow,
    Row,
)
from row_generator import RowGenerator  # noqa: E402
from simulation import Simulation  # noqa: E402

EMPTY_LANE = LaneRow(kind=RowKind.CAR, direction=True, speed=125.0, vehicles=())


class StaticRowGenerator(RowGenerator):
    """Cycles through a fixed list of rows; records every batch request."""

    def __init__(self, template: Sequence[Row], board_cfg: BoardConfig = BoardConfig()) -> None:
        super().__init__(board_cfg, DifficultyConfig(), GenerationConfig(), random.Random(0))
        self.template = list(template)
        self.calls: List[tuple] = []

    def generate_rows(self, amount, starting_row=0):
        self.calls.append((amount, starting_row))
        return [self.template[(starting_row + i) % len(self.template)] for i in range(amount)]


@pytest.fixture
def cfg():
    return GameConfig()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def generator(cfg, rng):
    return RowGenerator(cfg.board, cfg.difficulty, cfg.generation, rng)


@pytest.fixture
def board(cfg, generator):
    return BoardState(cfg.board, generator)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def make_sim(cfg, store):
    """Build a Simulation over a fixed row template (empty car lanes by default)."""

    def _make(template=(EMPTY_LANE,), **kwargs):
        kwargs.setdefault("store", store)
        return Simulation(cfg, generator=StaticRowGenerator(template, cfg.board), **kwargs)

    return _make
