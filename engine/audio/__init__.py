"""Audio module - voice playback."""

from engine.audio.manager import AudioManager

__all__ = ["AudioManager"]
