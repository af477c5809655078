"""
Typed event bus for decoupled communication.

Event types are Enums, so subscribers and publishers agree on names at
import time instead of on strings.

Usage:
    # Subscribe
    event_bus.subscribe(DialogueEvent.LINE_SHOWN, on_line_shown)

    # Publish
    event_bus.publish(DialogueEvent.LINE_SHOWN, actor="Guard", text="Halt!")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


class AudioEvent(Enum):
    """Audio system events."""
    VOICE_STARTED = auto()
    VOICE_STOPPED = auto()


class UIEvent(Enum):
    """UI-facing events."""
    DIALOG_STARTED = auto()
    DIALOG_ENDED = auto()


class DialogueEvent(Enum):
    """Dialogue playback events."""
    NODE_ENTERED = auto()   # Cursor moved onto a record
    LINE_SHOWN = auto()     # A line was executed: actor, text, audio


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
        consumed: Whether the event has been handled
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Mark event as consumed (stops propagation)."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


# Type alias for event handlers
EventHandler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for publish/subscribe messaging.

    Features:
    - Typed events (Enum-based)
    - Priority ordering (higher first, ties in subscription order)
    - Weak references (auto-cleanup when handlers are deleted)
    - One-shot handlers
    - Event consumption (stops propagation)
    - Events published from inside a handler are queued, never nested
    """

    def __init__(self):
        # Map of event type -> list of (priority, handler_ref, one_shot)
        self._handlers: dict[Enum, list[tuple[int, Any, bool]]] = {}
        self._event_queue: list[Event] = []
        self._is_publishing = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first (default 0)
            one_shot: If True, handler is removed after first call
            weak: If True, hold the handler weakly
        """
        if weak:
            handler_ref = WeakMethod(handler) if hasattr(handler, '__self__') else ref(handler)
        else:
            handler_ref = handler

        handlers = self._handlers.setdefault(event_type, [])
        insert_idx = len(handlers)
        for i, (p, _, _) in enumerate(handlers):
            if priority > p:
                insert_idx = i
                break

        handlers.insert(insert_idx, (priority, handler_ref, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove every registration of ``handler`` for ``event_type``."""
        if event_type not in self._handlers:
            return

        self._handlers[event_type] = [
            (p, h, o) for p, h, o in self._handlers[event_type]
            if self._get_handler(h) != handler
        ]

    def is_subscribed(self, event_type: Enum, handler: EventHandler) -> bool:
        return any(
            self._get_handler(h) == handler
            for _, h, _ in self._handlers.get(event_type, [])
        )

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Args:
            event_type: The event type
            **data: Event data as keyword arguments

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)
        self.publish_event(event)
        return event

    def publish_event(self, event: Event) -> None:
        """Publish a pre-created event."""
        if self._is_publishing:
            self._event_queue.append(event)
        else:
            self._dispatch(event)

    def clear(self, event_type: Enum | None = None) -> None:
        """Clear handlers for one event type, or all of them."""
        if event_type is None:
            self._handlers.clear()
        else:
            self._handlers.pop(event_type, None)

    def _dispatch(self, event: Event) -> None:
        handlers = self._handlers.get(event.type)
        if handlers:
            self._is_publishing = True
            to_remove = []
            try:
                for entry in list(handlers):
                    priority, handler_ref, one_shot = entry
                    handler = self._get_handler(handler_ref)

                    if handler is None:
                        # Weak reference was garbage collected
                        to_remove.append(entry)
                        continue

                    try:
                        handler(event)
                    except Exception:
                        logger.exception(f"Error in event handler for {event.type}")

                    if one_shot:
                        to_remove.append(entry)

                    if event.consumed:
                        break
            finally:
                for entry in to_remove:
                    if entry in handlers:
                        handlers.remove(entry)
                self._is_publishing = False

        while self._event_queue:
            self._dispatch(self._event_queue.pop(0))

    def _get_handler(self, handler_ref: Any) -> EventHandler | None:
        """Resolve handler from reference."""
        if isinstance(handler_ref, (ref, WeakMethod)):
            return handler_ref()
        return handler_ref
