"""Dialogue playback configuration."""

from __future__ import annotations

from typing import Any

from engine.core.actions import Action, action_from_name


class DialogueConfig:
    """Configuration for dialogue playback."""

    def __init__(
        self,
        advance_action: Action = Action.CONFIRM,
        voice_category: str = "voice",
        voice_volume: float = 1.0,
        stop_voice_on_advance: bool = True,
        log_lines: bool = True,
        data_path: str = "game/data",
    ):
        self.advance_action = advance_action
        self.voice_category = voice_category
        self.voice_volume = voice_volume
        self.stop_voice_on_advance = stop_voice_on_advance
        self.log_lines = log_lines
        self.data_path = data_path

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DialogueConfig:
        """Build a config from a settings mapping; unknown keys are ignored."""
        config = cls()
        if "advance_action" in data:
            action = data["advance_action"]
            config.advance_action = action if isinstance(action, Action) else action_from_name(action)
        for key in ("voice_category", "data_path"):
            if key in data:
                setattr(config, key, str(data[key]))
        if "voice_volume" in data:
            config.voice_volume = max(0.0, min(1.0, float(data["voice_volume"])))
        for key in ("stop_voice_on_advance", "log_lines"):
            if key in data:
                setattr(config, key, bool(data[key]))
        return config
