from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

import pygame

from game_types import Direction


class IntentKind(str, Enum):
    MOVE = "move"
    PAUSE = "pause"
    RESET = "reset"
    QUIT = "quit"


@dataclass(frozen=True)
class Intent:
    kind: IntentKind
    direction: Optional[Direction] = None


KEY_DIRECTIONS: Dict[int, Direction] = {
    pygame.K_UP: Direction.FORWARD,
    pygame.K_w: Direction.FORWARD,
    pygame.K_DOWN: Direction.BACKWARD,
    pygame.K_s: Direction.BACKWARD,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}

PAUSE_KEYS = (pygame.K_SPACE, pygame.K_ESCAPE, pygame.K_p)


def intent_for_key(key: int) -> Optional[Intent]:
    """Map a KEYDOWN key code to a game intent (None for unbound keys)."""
    if key in KEY_DIRECTIONS:
        return Intent(IntentKind.MOVE, KEY_DIRECTIONS[key])
    if key in PAUSE_KEYS:
        return Intent(IntentKind.PAUSE)
    if key == pygame.K_r:
        return Intent(IntentKind.RESET)
    if key == pygame.K_q:
        return Intent(IntentKind.QUIT)
    return None


def intents_from_events(events: Iterable[pygame.event.Event]) -> List[Intent]:
    """Translate a batch of pygame events into intents, in arrival order."""
    intents: List[Intent] = []
    for e in events:
        if e.type == pygame.QUIT:
            intents.append(Intent(IntentKind.QUIT))
        elif e.type == pygame.KEYDOWN:
            intent = intent_for_key(e.key)
            if intent is not None:
                intents.append(intent)
    return intents
