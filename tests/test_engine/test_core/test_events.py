import logging
import pytest
from enum import Enum, auto
from engine.core.events import EventBus, Event, DialogueEvent

class MockEvent(Enum):
    TEST_EVENT = auto()
    OTHER_EVENT = auto()

def test_event_bus_subscribe_publish(event_bus):
    received = []
    def handler(event):
        received.append(event)

    event_bus.subscribe(MockEvent.TEST_EVENT, handler)
    event_bus.publish(MockEvent.TEST_EVENT, data="test")

    assert len(received) == 1
    assert received[0].type == MockEvent.TEST_EVENT
    assert received[0].data["data"] == "test"

def test_event_bus_unsubscribe(event_bus):
    received = []
    def handler(event):
        received.append(event)

    event_bus.subscribe(MockEvent.TEST_EVENT, handler)
    assert event_bus.is_subscribed(MockEvent.TEST_EVENT, handler)

    event_bus.unsubscribe(MockEvent.TEST_EVENT, handler)
    event_bus.publish(MockEvent.TEST_EVENT)

    assert len(received) == 0
    assert not event_bus.is_subscribed(MockEvent.TEST_EVENT, handler)

def test_event_priority(event_bus):
    order = []

    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("low"), priority=1, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("high"), priority=10, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("normal"), priority=5, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("normal2"), priority=5, weak=False)

    event_bus.publish(MockEvent.TEST_EVENT)

    assert order == ["high", "normal", "normal2", "low"]

def test_event_consumption(event_bus):
    received = []

    def consumer(event):
        received.append("consumer")
        event.consume()

    def later_handler(event):
        received.append("later")

    event_bus.subscribe(MockEvent.TEST_EVENT, consumer, priority=10)
    event_bus.subscribe(MockEvent.TEST_EVENT, later_handler, priority=5)

    event_bus.publish(MockEvent.TEST_EVENT)

    assert received == ["consumer"]

def test_one_shot_handler(event_bus):
    received = []
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: received.append(e), one_shot=True, weak=False)

    event_bus.publish(MockEvent.TEST_EVENT)
    event_bus.publish(MockEvent.TEST_EVENT)

    assert len(received) == 1

def test_publish_during_dispatch_is_queued(event_bus):
    order = []

    def first(event):
        order.append("first:start")
        event_bus.publish(MockEvent.OTHER_EVENT)
        order.append("first:end")

    def second(event):
        order.append("other")

    event_bus.subscribe(MockEvent.TEST_EVENT, first)
    event_bus.subscribe(MockEvent.OTHER_EVENT, second)

    event_bus.publish(MockEvent.TEST_EVENT)

    assert order == ["first:start", "first:end", "other"]

def test_handler_error_is_logged_not_raised(event_bus, caplog):
    received = []

    def broken(event):
        raise RuntimeError("boom")

    event_bus.subscribe(DialogueEvent.LINE_SHOWN, broken, priority=10)
    event_bus.subscribe(DialogueEvent.LINE_SHOWN, lambda e: received.append(e), weak=False)

    with caplog.at_level(logging.ERROR, logger="engine.core.events"):
        event_bus.publish(DialogueEvent.LINE_SHOWN, actor="Guard")

    assert len(received) == 1
    assert "Error in event handler" in caplog.text

def test_weak_handler_removed_after_collection(event_bus):
    class Listener:
        def __init__(self):
            self.calls = 0

        def on_event(self, event):
            self.calls += 1

    listener = Listener()
    event_bus.subscribe(MockEvent.TEST_EVENT, listener.on_event)
    event_bus.publish(MockEvent.TEST_EVENT)
    assert listener.calls == 1

    del listener
    event_bus.publish(MockEvent.TEST_EVENT)

    assert event_bus._handlers[MockEvent.TEST_EVENT] == []

def test_event_accessors():
    event = Event(type=MockEvent.TEST_EVENT, data={"actor": "Guard"})
    assert event["actor"] == "Guard"
    assert event.get("missing", "fallback") == "fallback"

def test_event_enums_cover_dialogue_services():
    import engine.core as core
    from engine.core import events

    defined = {
        name for name, value in vars(events).items()
        if isinstance(value, type) and issubclass(value, Enum) and value.__module__ == events.__name__
    }
    assert defined == {"AudioEvent", "UIEvent", "DialogueEvent"}
    assert defined <= set(core.__all__)
