"""
Input handler with action-based abstraction.

Translates raw pygame keyboard and gamepad button events into semantic
Actions, and publishes InputEvent.ACTION_PRESSED / ACTION_RELEASED once
per frame so that systems such as dialogue can react to a single
"continue" press without polling.

Usage:
    for event in pygame.event.get():
        input_handler.process_event(event)
    input_handler.update()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import pygame

from engine.core.actions import (
    Action,
    DEFAULT_KEY_BINDINGS,
    DEFAULT_GAMEPAD_BINDINGS,
)
from engine.core.events import EventBus


class InputEvent(Enum):
    """Input-specific events."""
    ACTION_PRESSED = "input.action_pressed"
    ACTION_RELEASED = "input.action_released"
    GAMEPAD_CONNECTED = "input.gamepad_connected"
    GAMEPAD_DISCONNECTED = "input.gamepad_disconnected"


@dataclass
class InputState:
    """Action and key state for the current frame."""
    actions_pressed: set[Action] = field(default_factory=set)
    actions_just_pressed: set[Action] = field(default_factory=set)
    actions_just_released: set[Action] = field(default_factory=set)

    keys_pressed: set[int] = field(default_factory=set)


class InputHandler:
    """
    Handles keyboard and gamepad input.

    Raw state is collected by process_event(); edges (just pressed /
    just released) are computed and published by update().
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus

        self._state = InputState()
        self._prev_actions: set[Action] = set()

        # Key bindings (action -> list of keys)
        self._key_bindings = {a: list(keys) for a, keys in DEFAULT_KEY_BINDINGS.items()}
        self._reverse_key_bindings: dict[int, list[Action]] = {}
        self._rebuild_reverse_bindings()

        self._gamepad_bindings = {a: list(b) for a, b in DEFAULT_GAMEPAD_BINDINGS.items()}
        self._gamepads: dict[int, object] = {}

        pygame.joystick.init()
        self._refresh_gamepads()

    def _rebuild_reverse_bindings(self) -> None:
        """Build reverse lookup: key -> actions."""
        self._reverse_key_bindings.clear()
        for action, keys in self._key_bindings.items():
            for key in keys:
                self._reverse_key_bindings.setdefault(key, []).append(action)

    def _refresh_gamepads(self) -> None:
        self._gamepads.clear()
        for i in range(pygame.joystick.get_count()):
            joy = pygame.joystick.Joystick(i)
            joy.init()
            self._gamepads[joy.get_instance_id()] = joy

    # Public API

    def is_action_pressed(self, action: Action) -> bool:
        """Check if an action is currently held down."""
        return action in self._state.actions_pressed

    def is_action_just_pressed(self, action: Action) -> bool:
        """Check if an action was just pressed this frame."""
        return action in self._state.actions_just_pressed

    def is_action_just_released(self, action: Action) -> bool:
        return action in self._state.actions_just_released

    # Key binding management

    def bind_key(self, action: Action, key: int) -> None:
        """Add a key binding for an action."""
        keys = self._key_bindings.setdefault(action, [])
        if key not in keys:
            keys.append(key)
        self._rebuild_reverse_bindings()

    def unbind_key(self, action: Action, key: int) -> None:
        """Remove a key binding for an action."""
        keys = self._key_bindings.get(action, [])
        if key in keys:
            keys.remove(key)
        self._rebuild_reverse_bindings()

    def get_bindings(self, action: Action) -> list[int]:
        return self._key_bindings.get(action, []).copy()

    # Frame update

    def process_event(self, event: pygame.event.Event) -> None:
        """Process a pygame event."""
        if event.type == pygame.KEYDOWN:
            self._on_key_down(event.key)

        elif event.type == pygame.KEYUP:
            self._on_key_up(event.key)

        elif event.type == pygame.JOYBUTTONDOWN:
            for action, buttons in self._gamepad_bindings.items():
                if event.button in buttons:
                    self._state.actions_pressed.add(action)

        elif event.type == pygame.JOYBUTTONUP:
            for action, buttons in self._gamepad_bindings.items():
                if event.button in buttons:
                    self._state.actions_pressed.discard(action)

        elif event.type == pygame.JOYDEVICEADDED:
            self._refresh_gamepads()
            if self.event_bus:
                self.event_bus.publish(InputEvent.GAMEPAD_CONNECTED)

        elif event.type == pygame.JOYDEVICEREMOVED:
            self._refresh_gamepads()
            if self.event_bus:
                self.event_bus.publish(InputEvent.GAMEPAD_DISCONNECTED)

    def update(self) -> None:
        """
        Compute just-pressed/released actions and publish them.

        Call once per frame after all events were processed.
        """
        self._state.actions_just_pressed = self._state.actions_pressed - self._prev_actions
        self._state.actions_just_released = self._prev_actions - self._state.actions_pressed

        if self.event_bus:
            for action in self._state.actions_just_pressed:
                self.event_bus.publish(InputEvent.ACTION_PRESSED, action=action)
            for action in self._state.actions_just_released:
                self.event_bus.publish(InputEvent.ACTION_RELEASED, action=action)

        self._prev_actions = self._state.actions_pressed.copy()

    def _on_key_down(self, key: int) -> None:
        self._state.keys_pressed.add(key)
        for action in self._reverse_key_bindings.get(key, []):
            self._state.actions_pressed.add(action)

    def _on_key_up(self, key: int) -> None:
        self._state.keys_pressed.discard(key)

        # Release an action only when no other key bound to it is still held
        for action in self._reverse_key_bindings.get(key, []):
            still_pressed = any(
                other != key and other in self._state.keys_pressed
                for other in self._key_bindings.get(action, [])
            )
            if not still_pressed:
                self._state.actions_pressed.discard(action)
