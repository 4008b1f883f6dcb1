"""
Tests for tone synthesis and the audio feedback sink.

No audio device is opened; cues are checked as sample arrays.
"""

import numpy as np
import pytest

from flappy_arcade.flappy_core.audio import (
    ENVELOPE_FLOOR,
    AudioFeedback,
    oscillator,
    render_cue,
    synthesize_tone,
    to_pcm16,
)
from flappy_arcade.flappy_core.config_loader import ToneConfig, load_config


SAMPLE_RATE = 44100


@pytest.fixture
def config():
    return load_config()


def _tone(waveform="square", frequency=400.0, duration=0.1, volume=0.2, offset_ms=0.0):
    return ToneConfig(
        frequency=frequency,
        duration=duration,
        waveform=waveform,
        volume=volume,
        offset_ms=offset_ms
    )


class TestOscillators:

    @pytest.mark.parametrize("waveform", ["sine", "square", "sawtooth", "triangle"])
    def test_unit_amplitude(self, waveform):
        t = np.arange(SAMPLE_RATE // 10) / SAMPLE_RATE
        wave = oscillator(waveform, 440.0, t)
        assert wave.max() <= 1.0 + 1e-9
        assert wave.min() >= -1.0 - 1e-9

    def test_unknown_waveform(self):
        with pytest.raises(ValueError):
            oscillator("kazoo", 440.0, np.zeros(4))


class TestSynthesis:

    def test_sample_count(self):
        samples = synthesize_tone(_tone(duration=0.1), SAMPLE_RATE)
        assert samples.shape == (4410,)
        assert samples.dtype == np.float32

    def test_envelope_decays_from_volume(self):
        samples = synthesize_tone(_tone(waveform="square", volume=0.2), SAMPLE_RATE)
        assert abs(samples[0]) == pytest.approx(0.2)
        assert np.abs(samples).max() <= 0.2 + 1e-6
        # Last sample sits near the envelope floor
        assert abs(samples[-1]) == pytest.approx(ENVELOPE_FLOOR, rel=0.01)

    def test_silent_tone(self):
        samples = synthesize_tone(_tone(volume=0.0), SAMPLE_RATE)
        assert not samples.any()


class TestCues:

    def test_cue_covers_last_offset(self):
        tones = [
            _tone(duration=0.08, offset_ms=0),
            _tone(duration=0.06, offset_ms=50),
        ]
        mix = render_cue(tones, SAMPLE_RATE)
        # 50 ms offset + 60 ms tone
        assert len(mix) == 2205 + 2646

    def test_mix_is_clipped(self):
        loud = [_tone(volume=0.9), _tone(volume=0.9)]
        mix = render_cue(loud, SAMPLE_RATE)
        assert mix.max() <= 1.0
        assert mix.min() >= -1.0

    def test_empty_cue(self):
        assert len(render_cue([], SAMPLE_RATE)) == 0

    def test_configured_cues(self, config):
        sink = AudioFeedback(config, enabled=False)
        for name in ("jump", "score", "terminate"):
            samples = sink.cue_samples(name)
            assert len(samples) > 0
            assert np.abs(samples).max() <= 1.0

        # Game over cue: 150 ms offset + 300 ms tone
        assert len(sink.cue_samples("terminate")) == int(round(0.15 * SAMPLE_RATE)) + int(round(0.3 * SAMPLE_RATE))

    def test_unknown_cue(self, config):
        with pytest.raises(KeyError):
            AudioFeedback(config, enabled=False).cue_samples("fanfare")


class TestPcm:

    def test_mono(self):
        pcm = to_pcm16(np.array([0.0, 1.0, -1.0], dtype=np.float32))
        assert pcm.dtype == np.int16
        assert pcm.tolist() == [0, 32767, -32767]

    def test_stereo_duplicates_channels(self):
        pcm = to_pcm16(np.array([0.5, -0.5], dtype=np.float32), channels=2)
        assert pcm.shape == (2, 2)
        assert (pcm[:, 0] == pcm[:, 1]).all()
        assert pcm.flags["C_CONTIGUOUS"]


class TestAudioFeedback:

    def test_disabled_sink_is_silent(self, config):
        sink = AudioFeedback(config, enabled=False)

        assert not sink.init()
        assert not sink.available
        assert not sink.play("jump")

        # Hooks are safe to call without a mixer
        sink.on_jump()
        sink.on_score(3)
        sink.on_terminate(3)
        sink.close()
