from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, DefaultDict, Dict, List

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    MOVED = "moved"
    SCORE_INCREASED = "score_increased"
    GAME_OVER = "game_over"
    PAUSED = "paused"
    RESUMED = "resumed"
    RESET = "reset"
    ROWS_ADDED = "rows_added"


@dataclass(frozen=True)
class Event:
    type: EventType
    payload: Dict[str, Any] = field(default_factory=dict)


Handler = Callable[[Event], None]


class EventBus:
    """Synchronous publish/subscribe for semantic game events.

    Handlers run in subscription order inside ``emit``. A failing handler is
    logged and skipped; the simulation never waits on or depends on them.
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[EventType, List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: Handler) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: EventType, handler: Handler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event_type: EventType, **payload: Any) -> Event:
        event = Event(type=event_type, payload=payload)
        for handler in list(self._handlers.get(event_type, [])):
            try:
                handler(event)
            except Exception:
                logger.exception("handler for %s failed", event_type.value)
        return event
