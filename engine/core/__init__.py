"""
Core engine module.

Exports:
- EventBus, Event and the event enums: Event system
- Action: Input actions
"""

from engine.core.events import (
    EventBus,
    Event,
    AudioEvent,
    UIEvent,
    DialogueEvent,
)
from engine.core.actions import Action

__all__ = [
    # Events
    "EventBus",
    "Event",
    "AudioEvent",
    "UIEvent",
    "DialogueEvent",
    # Input
    "Action",
]
