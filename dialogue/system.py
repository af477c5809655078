"""
Dialogue system - connects the interpreter to the rest of the engine.

The interpreter only knows advance() and load(). This system:
- subscribes advance() to the configured input action while a dialogue runs
- turns playback requests into voice playback and LINE_SHOWN events
- publishes DIALOG_STARTED / DIALOG_ENDED
- unsubscribes from input when the dialogue terminates

Usage:
    dialogue_system = DialogueSystem(event_bus, audio_manager, database=db)
    dialogue_system.play("intro")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from dialogue.config import DialogueConfig
from dialogue.interpreter import DialogueInterpreter, PlaybackRequest
from dialogue.runtime import RuntimeGraph
from engine.core.events import DialogueEvent, Event, EventBus, UIEvent
from engine.input.handler import InputEvent

if TYPE_CHECKING:
    from engine.audio.manager import AudioManager
    from engine.resources.database import DialogueDatabase


class DialogueSystem:
    """
    Owns one interpreter and wires it to input, audio and events.
    """

    def __init__(
        self,
        event_bus: EventBus,
        audio: Optional[AudioManager] = None,
        config: Optional[DialogueConfig] = None,
        database: Optional[DialogueDatabase] = None,
    ):
        self.event_bus = event_bus
        self.audio = audio
        self.config = config or DialogueConfig()
        self.database = database

        self.interpreter = DialogueInterpreter(
            on_line=self._on_line,
            on_end=self._on_end,
            log_lines=self.config.log_lines,
        )

        self._enabled = False
        self._dialogue_id: Optional[str] = None

        self.logger = logging.getLogger(__name__)

    @property
    def is_enabled(self) -> bool:
        """True while advance() is bound to input."""
        return self._enabled

    @property
    def is_active(self) -> bool:
        return self._enabled and not self.interpreter.is_terminated

    # Input subscription

    def enable(self) -> None:
        """Start listening for the advance action."""
        if self._enabled:
            return
        self.event_bus.subscribe(InputEvent.ACTION_PRESSED, self._on_action)
        self._enabled = True

    def disable(self) -> None:
        """Stop listening for the advance action."""
        if not self._enabled:
            return
        self.event_bus.unsubscribe(InputEvent.ACTION_PRESSED, self._on_action)
        self._enabled = False

    def _on_action(self, event: Event) -> None:
        if event.get("action") == self.config.advance_action:
            event.consume()
            self.advance()

    # Flow

    def start(self, graph: RuntimeGraph, dialogue_id: Optional[str] = None) -> None:
        """
        Load a runtime graph and show its first line.

        Starting while another dialogue runs abandons the old one.
        """
        self._dialogue_id = dialogue_id
        self.interpreter.load(graph)
        self.enable()
        self.event_bus.publish(UIEvent.DIALOG_STARTED, dialogue_id=dialogue_id)
        self.advance()

    def play(self, dialogue_id: str) -> bool:
        """
        Start a dialogue from the database by id.

        Returns:
            False if no database is attached or the id is unknown
        """
        if self.database is None:
            self.logger.warning(f"No dialogue database attached, cannot play '{dialogue_id}'")
            return False

        graph = self.database.get(dialogue_id)
        if graph is None:
            self.logger.warning(f"Dialogue not found: {dialogue_id}")
            return False

        self.start(graph, dialogue_id)
        return True

    def advance(self) -> bool:
        """Process one record; see DialogueInterpreter.advance()."""
        if self.audio and self.config.stop_voice_on_advance:
            self.audio.stop_voice()
        return self.interpreter.advance()

    def stop(self) -> None:
        """Abort the running dialogue."""
        self.interpreter.unload()
        self._on_end()

    # Interpreter callbacks

    def _on_line(self, request: PlaybackRequest) -> None:
        if request.audio and self.audio:
            self.audio.play_voice(
                request.audio,
                category=self.config.voice_category,
                volume=self.config.voice_volume,
            )

        self.event_bus.publish(DialogueEvent.NODE_ENTERED, node_id=request.node_id)
        self.event_bus.publish(
            DialogueEvent.LINE_SHOWN,
            actor=request.actor,
            text=request.text,
            audio=request.audio,
            callbacks=request.callbacks,
        )

    def _on_end(self) -> None:
        was_enabled = self._enabled
        self.disable()
        if self.audio:
            self.audio.stop_voice()
        if was_enabled:
            self.event_bus.publish(UIEvent.DIALOG_ENDED, dialogue_id=self._dialogue_id)
