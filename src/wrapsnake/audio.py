# audio.py
from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

import numpy as np  # type: ignore
import pygame       # type: ignore

from .events import EventChannel, GameEvent

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

# (frequency Hz, duration ms) per event
TONES: Dict[GameEvent, tuple] = {
    GameEvent.FOOD_EATEN: (880.0, 90),
    GameEvent.SNAKE_DIED: (110.0, 450),
    GameEvent.DIRECTION_CHANGED: (440.0, 25),
}


def make_tone(
    frequency: float,
    duration_ms: int,
    sample_rate: int = SAMPLE_RATE,
    volume: float = 0.4,
    channels: int = 1,
) -> np.ndarray:
    """
    Sine tone as int16 samples with a linear fade-out (avoids a click at
    the end). Shape is (n,) for mono and (n, channels) otherwise, which is
    what pygame.sndarray.make_sound expects.
    """
    n = max(int(sample_rate * duration_ms / 1000), 1)
    t = np.arange(n, dtype=np.float32) / sample_rate
    wave = np.sin(2.0 * np.pi * frequency * t)
    wave *= np.linspace(1.0, 0.0, n, dtype=np.float32)
    samples = (wave * volume * 32767).astype(np.int16)
    if channels > 1:
        samples = np.repeat(samples[:, None], channels, axis=1)
    return samples


def load_sounds(volume: float = 0.4) -> Dict[GameEvent, "pygame.mixer.Sound"]:
    """Init the mixer and synthesize one sound per event. Empty dict if no audio device."""
    try:
        if pygame.mixer.get_init() is None:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16)
        freq, _size, channels = pygame.mixer.get_init()
    except pygame.error as exc:
        logger.warning("audio disabled: %s", exc)
        return {}

    sounds = {}
    for event, (hz, ms) in TONES.items():
        samples = make_tone(hz, ms, sample_rate=freq, volume=volume, channels=channels)
        sounds[event] = pygame.sndarray.make_sound(np.ascontiguousarray(samples))
    return sounds


class SoundPlayer:
    """Background thread that turns GameEvents into sound effects."""

    def __init__(self, channel: EventChannel, sounds: Dict[GameEvent, object]):
        self.channel = channel
        self.sounds = sounds
        self.played = 0
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        self._thread = threading.Thread(target=self._run, name="sound-player", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        self.channel.close()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while True:
            event = self.channel.get()
            if event is None:
                break
            self.play(event)
        logger.debug("sound player exited")

    def play(self, event: GameEvent) -> None:
        sound = self.sounds.get(event)
        if sound is None:
            return
        try:
            sound.play()  # type: ignore[attr-defined]
            self.played += 1
        except pygame.error as exc:
            logger.debug("could not play %s: %s", event.name, exc)
