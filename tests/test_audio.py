"""
Tests for audio.py - tone synthesis and the sound worker thread.
"""

from unittest.mock import Mock, patch

import numpy as np
import pygame

from wrapsnake import audio
from wrapsnake.audio import SoundPlayer, load_sounds, make_tone
from wrapsnake.events import EventChannel, GameEvent


class TestMakeTone:
    def test_mono_shape_and_dtype(self):
        samples = make_tone(440.0, 100, sample_rate=8000)
        assert samples.shape == (800,)
        assert samples.dtype == np.int16

    def test_stereo_duplicates_channels(self):
        samples = make_tone(440.0, 50, sample_rate=8000, channels=2)
        assert samples.shape == (400, 2)
        assert np.array_equal(samples[:, 0], samples[:, 1])

    def test_volume_bounds_amplitude(self):
        samples = make_tone(440.0, 100, sample_rate=8000, volume=0.25)
        assert np.abs(samples).max() <= int(0.25 * 32767)

    def test_fades_out(self):
        samples = make_tone(440.0, 100, sample_rate=8000)
        assert samples[-1] == 0

    def test_never_empty(self):
        assert make_tone(440.0, 0).shape == (1,)


class TestLoadSounds:
    def test_no_audio_device(self):
        """A mixer failure disables sound instead of raising."""
        with patch.object(audio.pygame.mixer, "get_init", return_value=None), \
                patch.object(audio.pygame.mixer, "init", side_effect=pygame.error("no device")):
            assert load_sounds() == {}

    def test_one_sound_per_event(self):
        with patch.object(audio.pygame.mixer, "get_init", return_value=(22050, -16, 2)), \
                patch.object(audio.pygame.sndarray, "make_sound", side_effect=lambda a: a) as make:
            sounds = load_sounds()
        assert set(sounds) == set(GameEvent)
        assert make.call_count == 3
        assert all(s.ndim == 2 for s in sounds.values())


class TestSoundPlayer:
    def test_plays_queued_events(self):
        channel = EventChannel(8)
        sounds = {event: Mock() for event in GameEvent}
        player = SoundPlayer(channel, sounds)

        channel.send(GameEvent.FOOD_EATEN)
        channel.send(GameEvent.SNAKE_DIED)
        player.start()
        player.stop(timeout=2)

        sounds[GameEvent.FOOD_EATEN].play.assert_called_once_with()
        sounds[GameEvent.SNAKE_DIED].play.assert_called_once_with()
        sounds[GameEvent.DIRECTION_CHANGED].play.assert_not_called()
        assert player.played == 2

    def test_missing_sound_is_skipped(self):
        player = SoundPlayer(EventChannel(1), {})
        player.play(GameEvent.FOOD_EATEN)
        assert player.played == 0

    def test_play_error_is_swallowed(self):
        sound = Mock()
        sound.play.side_effect = pygame.error("mixer gone")
        player = SoundPlayer(EventChannel(1), {GameEvent.FOOD_EATEN: sound})
        player.play(GameEvent.FOOD_EATEN)
        assert player.played == 0

    def test_stop_without_start(self):
        channel = EventChannel(1)
        SoundPlayer(channel, {}).stop()
        assert channel.closed
