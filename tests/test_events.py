from events import Event, EventBus, EventType


def test_handlers_run_in_subscription_order():
    bus = EventBus()
    calls = []
    bus.subscribe(EventType.MOVED, lambda e: calls.append(("a", e.payload["row"])))
    bus.subscribe(EventType.MOVED, lambda e: calls.append(("b", e.payload["row"])))
    event = bus.emit(EventType.MOVED, row=3)
    assert calls == [("a", 3), ("b", 3)]
    assert event == Event(type=EventType.MOVED, payload={"row": 3})


def test_only_matching_handlers_run():
    bus = EventBus()
    calls = []
    bus.subscribe(EventType.PAUSED, calls.append)
    bus.emit(EventType.RESUMED)
    assert calls == []


def test_failing_handler_does_not_block_others(caplog):
    bus = EventBus()
    calls = []

    def boom(event):
        raise RuntimeError("speaker unplugged")

    bus.subscribe(EventType.GAME_OVER, boom)
    bus.subscribe(EventType.GAME_OVER, calls.append)
    bus.emit(EventType.GAME_OVER, score=1)
    assert len(calls) == 1
    assert "game_over" in caplog.text


def test_unsubscribe():
    bus = EventBus()
    calls = []
    bus.subscribe(EventType.RESET, calls.append)
    bus.unsubscribe(EventType.RESET, calls.append)
    bus.unsubscribe(EventType.RESET, calls.append)
    bus.emit(EventType.RESET)
    assert calls == []
