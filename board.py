from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from models import BoardConfig, Row
from row_generator import RowGenerator

logger = logging.getLogger(__name__)


class BoardState:
    """Append-only sequence of generated rows.

    ``rows()[i]`` holds absolute row ``i + 1``; row 0 (the start) and every
    negative row are implicit grass and never stored.
    """

    def __init__(self, cfg: BoardConfig, generator: RowGenerator) -> None:
        self.cfg = cfg
        self.generator = generator
        self._rows: List[Row] = []
        self.reset()

    def rows(self) -> Tuple[Row, ...]:
        """Read-only snapshot of the current rows."""
        return tuple(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def row_at(self, row_index: int) -> Optional[Row]:
        """Row for an absolute index, or None for grass / not yet generated."""
        if row_index < 1 or row_index > len(self._rows):
            return None
        return self._rows[row_index - 1]

    def add_rows(self) -> None:
        """Append a batch of INITIAL_ROWS rows continuing from the current length."""
        start = len(self._rows)
        new_rows = self.generator.generate_rows(self.cfg.initial_rows, start)
        # Build the full list before swapping so readers never see a partial batch.
        self._rows = self._rows + new_rows
        logger.debug("board grew from %s to %s rows", start, len(self._rows))

    def growth_threshold(self) -> int:
        return len(self._rows) - self.cfg.safe_rows_ahead

    def maybe_grow(self, player_row: int) -> bool:
        """Grow once when the player sits exactly on the threshold row.

        Equality rather than ``>=``: after growth the threshold moves ahead,
        so repeated calls for the same row cannot append twice.
        """
        if player_row != self.growth_threshold():
            return False
        self.add_rows()
        return True

    def reset(self) -> None:
        self._rows = self.generator.generate_rows(self.cfg.initial_rows)
