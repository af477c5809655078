"""
Engine services used by dialogue playback.

Quick Start:
    from engine.core import EventBus
    from engine.input import InputHandler
    from engine.audio import AudioManager

    event_bus = EventBus()
    input_handler = InputHandler(event_bus)
    audio = AudioManager(event_bus, voice_path="assets/voice")
    audio.init()
"""

__version__ = "0.1.0"

from engine.core import (
    EventBus,
    Event,
    AudioEvent,
    UIEvent,
    DialogueEvent,
    Action,
)

__all__ = [
    "EventBus",
    "Event",
    "AudioEvent",
    "UIEvent",
    "DialogueEvent",
    "Action",
]
