from __future__ import annotations

import random
from typing import Any, Dict, Sequence, TypeVar

from game_types import Color

T = TypeVar("T")

_MISSING = object()


def clamp_int(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def clamp_float(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def lerp(start: float, end: float, t: float) -> float:
    """Linear blend from ``start`` (t=0) to ``end`` (t=1)."""
    return start + (end - start) * t


def as_color(value: Any, default: Color) -> Color:
    """Read an ``[r, g, b]`` list from config, clamping each channel to 0..255.

    Anything that isn't a sequence of at least three numbers gives ``default``.
    """
    if not isinstance(value, (list, tuple)) or len(value) < 3:
        return default
    try:
        r, g, b = (clamp_int(int(channel), 0, 255) for channel in value[:3])
    except (TypeError, ValueError):
        return default
    return (r, g, b)


def deep_get(d: Dict[str, Any], path: str, default: Any) -> Any:
    """Look up ``"section.key"`` style paths in nested config dicts."""
    node: Any = d
    for key in path.split("."):
        node = node.get(key, _MISSING) if isinstance(node, dict) else _MISSING
        if node is _MISSING:
            return default
    return node


def random_element(rng: random.Random, items: Sequence[T]) -> T:
    return items[rng.randrange(len(items))]
