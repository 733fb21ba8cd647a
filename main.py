from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from config_io import load_json_config
from utils import deep_get


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Cipher Road: hop across roads and forests.")
    p.add_argument(
        "config",
        nargs="?",
        default="config.json",
        help="Path to the JSON config (default: config.json)",
    )
    p.add_argument("--seed", type=int, default=None, help="Optional RNG seed for the board.")
    p.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return p.parse_args(argv)


def configure_logging(cfg_path: Path, debug: bool) -> None:
    level_name = "DEBUG" if debug else "INFO"
    if not debug and cfg_path.exists():
        level_name = str(deep_get(load_json_config(cfg_path), "logging.level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Entrypoint for running the game from the command line."""
    args = parse_args(argv)
    cfg_path = Path(args.config)
    configure_logging(cfg_path, args.debug)

    from game import Game  # local import keeps module load side effects minimal

    Game(cfg_path, seed=args.seed).run()


if __name__ == "__main__":
    main()
