"""
Input action definitions.

Actions abstract raw input (keys, buttons) into semantic actions.
Dialogue code listens for Actions, not raw keys. This enables:
- Key rebinding
- Keyboard and gamepad driving the same "continue" signal

Usage:
    if input.is_action_just_pressed(Action.CONFIRM):
        dialogue.advance()
"""

from enum import Enum, auto

import pygame


class Action(Enum):
    """
    Semantic input actions.

    Each action can be mapped to multiple input sources.
    """

    # Dialogue / menu navigation
    CONFIRM = auto()
    CANCEL = auto()
    MENU_UP = auto()
    MENU_DOWN = auto()

    # System
    PAUSE = auto()
    SKIP = auto()


# Default key bindings (can be customized)
DEFAULT_KEY_BINDINGS: dict[Action, list[int]] = {
    Action.CONFIRM: [pygame.K_RETURN, pygame.K_SPACE, pygame.K_z],
    Action.CANCEL: [pygame.K_ESCAPE, pygame.K_x],
    Action.MENU_UP: [pygame.K_UP, pygame.K_w],
    Action.MENU_DOWN: [pygame.K_DOWN, pygame.K_s],
    Action.PAUSE: [pygame.K_p],
    Action.SKIP: [pygame.K_TAB],
}

# Gamepad button bindings (SDL controller layout)
DEFAULT_GAMEPAD_BINDINGS: dict[Action, list[int]] = {
    Action.CONFIRM: [0],  # A button
    Action.CANCEL: [1],   # B button
    Action.SKIP: [3],     # Y button
    Action.PAUSE: [7],    # Start
}


def action_from_name(name: str) -> Action:
    """Look up an action by its enum name (case-insensitive)."""
    try:
        return Action[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown action: {name}") from None
