from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from config_parsing import parse_game_config
from models import GameConfig

logger = logging.getLogger(__name__)


def _describe_decode_error(path: Path, err: json.JSONDecodeError) -> str:
    return (
        f"\nERROR: {path} is not valid JSON "
        f"(line {err.lineno}, column {err.colno}: {err.msg}).\n"
        "Look for a trailing comma or an unquoted key near that spot.\n"
    )


def load_json_config(path: Path) -> Dict[str, Any]:
    """Read a JSON config file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        SystemExit: If the file is not valid JSON.

    A document whose top level is not an object is treated as empty.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with path.open(encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as e:
            raise SystemExit(_describe_decode_error(path, e))
    if not isinstance(data, dict):
        logger.warning("%s holds %s, not an object; using defaults", path, type(data).__name__)
        return {}
    return data


def load_game_config(path: Optional[Path]) -> Tuple[Dict[str, Any], GameConfig]:
    """Return the raw config dict alongside the parsed simulation settings.

    ``None`` means "no file": every setting takes its default.
    """
    raw = load_json_config(path) if path is not None else {}
    return raw, parse_game_config(raw)
