#!/usr/bin/env python3
"""
generate_board.py

Writes a preview of procedurally generated rows as JSON, e.g. to inspect how
traffic density and lane speed ramp up with row index.

Output shape:
    {
      "seed": 7,
      "startingRow": 1,
      "rows": [{"rowIndex": 1, "level": 0, "type": "car", ...}, ...]
    }
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from config_io import load_game_config
from difficulty import get_difficulty_level
from models import GameConfig
from row_generator import RowGenerator

logger = logging.getLogger(__name__)


def build_preview(cfg: GameConfig, count: int, seed: Optional[int], starting_row: int = 0) -> Dict[str, Any]:
    """Generate ``count`` rows starting at ``starting_row`` (as stored on the board)."""
    generator = RowGenerator(cfg.board, cfg.difficulty, cfg.generation, random.Random(seed))
    rows = generator.generate_rows(count, starting_row)

    entries: List[Dict[str, Any]] = []
    for i, row in enumerate(rows):
        entry = {
            "rowIndex": starting_row + i + 1,
            "level": get_difficulty_level(starting_row + i, cfg.difficulty),
        }
        entry.update(row.to_dict())
        entries.append(entry)
    return {"seed": seed, "startingRow": starting_row + 1, "rows": entries}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a Cipher Road board preview as JSON.")
    p.add_argument("count", type=int, help="How many rows to generate.")
    p.add_argument("--start", type=int, default=0, help="Rows already on the board (default: 0).")
    p.add_argument("--seed", type=int, default=None, help="Optional RNG seed for reproducible rows.")
    p.add_argument("--config", type=str, default=None, help="Optional JSON config to read settings from.")
    p.add_argument("--out", type=str, default=None, help="Write to this file instead of stdout.")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if args.count <= 0:
        raise SystemExit("count must be > 0")
    if args.start < 0:
        raise SystemExit("--start must be >= 0")

    _, cfg = load_game_config(Path(args.config) if args.config else None)
    preview = build_preview(cfg, args.count, args.seed, args.start)
    text = json.dumps(preview, indent=2)

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text + "\n", encoding="utf-8")
        logger.info("wrote %s rows to %s", args.count, out)
    else:
        sys.stdout.write(text + "\n")


if __name__ == "__main__":
    main()
