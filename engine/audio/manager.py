"""
Core Audio Manager.

Plays dialogue voice lines through a reserved pygame mixer channel so a
new line can cut off the previous one without touching other sounds.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from engine.core.events import EventBus, AudioEvent

VOICE_CHANNEL = 0


class AudioManager:
    """
    Central audio manager for the engine.

    Handles:
    - Mixer initialization
    - Volume categories (Master, voice, sfx, ...)
    - Voice clip caching and playback on a reserved channel
    """

    def __init__(self, event_bus: EventBus | None = None, voice_path: str | Path = ""):
        self.event_bus = event_bus
        self.voice_path = Path(voice_path)

        self._master_volume: float = 1.0
        self._category_volumes: dict[str, float] = {
            "sfx": 1.0,
            "ui": 1.0,
            "voice": 1.0,
        }

        self._sound_cache: dict[str, pygame.mixer.Sound] = {}
        self._voice_channel: pygame.mixer.Channel | None = None
        self._current_voice: str | None = None
        self._initialized: bool = False

    def init(self, frequency: int = 44100, size: int = -16, channels: int = 2, buffer: int = 512) -> None:
        """Initialize the audio system."""
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=frequency, size=size, channels=channels, buffer=buffer)
            pygame.mixer.set_num_channels(16)
            pygame.mixer.set_reserved(VOICE_CHANNEL + 1)
            self._voice_channel = pygame.mixer.Channel(VOICE_CHANNEL)
            self._initialized = True
            logging.info("Audio system initialized.")
        except pygame.error as e:
            logging.error(f"Failed to initialize audio system: {e}")

    def quit(self) -> None:
        """Shutdown audio system."""
        pygame.mixer.quit()
        self._sound_cache.clear()
        self._voice_channel = None
        self._initialized = False

    @property
    def current_voice(self) -> str | None:
        """Handle of the voice clip last started, if still considered playing."""
        return self._current_voice

    # --- Volume Control ---

    def set_master_volume(self, volume: float) -> None:
        """Set master volume (0.0 to 1.0)."""
        self._master_volume = max(0.0, min(1.0, volume))

    def set_category_volume(self, category: str, volume: float) -> None:
        """Set volume for a specific category."""
        self._category_volumes[category] = max(0.0, min(1.0, volume))

    def get_volume(self, category: str) -> float:
        """Effective volume for a category (master * category)."""
        return self._master_volume * self._category_volumes.get(category, 1.0)

    # --- Voice ---

    def _resolve(self, handle: str) -> Path:
        path = Path(handle)
        if path.is_absolute() or path.exists():
            return path
        return self.voice_path / handle

    def _get_sound(self, handle: str) -> pygame.mixer.Sound | None:
        """Load or retrieve a clip from cache."""
        if not self._initialized:
            return None

        if handle not in self._sound_cache:
            file_path = self._resolve(handle)
            if not file_path.exists():
                logging.warning(f"Audio file not found: {file_path}")
                return None
            try:
                self._sound_cache[handle] = pygame.mixer.Sound(str(file_path))
            except pygame.error as e:
                logging.error(f"Failed to load sound {file_path}: {e}")
                return None

        return self._sound_cache[handle]

    def play_voice(self, handle: str, category: str = "voice", volume: float = 1.0) -> bool:
        """
        Play a voice clip, replacing whatever voice is playing.

        Playback is fire-and-forget; the caller never waits for the clip.

        Returns:
            True if playback started
        """
        sound = self._get_sound(handle)
        if sound is None or self._voice_channel is None:
            return False

        self._voice_channel.set_volume(self.get_volume(category) * volume)
        self._voice_channel.play(sound)
        self._current_voice = handle

        if self.event_bus:
            self.event_bus.publish(AudioEvent.VOICE_STARTED, handle=handle)
        return True

    def stop_voice(self) -> None:
        """Stop the voice channel (no-op when nothing is playing)."""
        if self._voice_channel is None or self._current_voice is None:
            return

        self._voice_channel.stop()
        handle, self._current_voice = self._current_voice, None

        if self.event_bus:
            self.event_bus.publish(AudioEvent.VOICE_STOPPED, handle=handle)
