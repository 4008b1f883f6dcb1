"""
Audio Feedback
==============

Synthesized tone cues for jump, score and game over, played through the
pygame mixer. Waveforms are generated with numpy; no sound files are loaded.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

import numpy as np
import pygame

from flappy_arcade.flappy_core.config_loader import GameConfig, ToneConfig, get_config
from flappy_arcade.flappy_core.feedback import FeedbackSink

logger = logging.getLogger(__name__)

# Level the gain envelope decays to by the end of a tone
ENVELOPE_FLOOR = 0.01


def oscillator(waveform: str, frequency: float, t: np.ndarray) -> np.ndarray:
    """Unit-amplitude waveform sampled at times t (seconds)."""
    phase = (t * frequency) % 1.0
    if waveform == "sine":
        return np.sin(2 * np.pi * frequency * t)
    if waveform == "square":
        return np.where(phase < 0.5, 1.0, -1.0)
    if waveform == "sawtooth":
        return 2.0 * phase - 1.0
    if waveform == "triangle":
        return 4.0 * np.abs(phase - 0.5) - 1.0
    raise ValueError(f"Unknown waveform: {waveform}")


def synthesize_tone(tone: ToneConfig, sample_rate: int) -> np.ndarray:
    """
    Render one tone.

    Gain starts at the tone volume and decays exponentially to
    ENVELOPE_FLOOR over the tone duration.

    Returns:
        float32 mono samples in [-1, 1].
    """
    num_samples = int(round(sample_rate * tone.duration))
    if num_samples <= 0 or tone.volume <= 0:
        return np.zeros(max(num_samples, 0), dtype=np.float32)

    t = np.arange(num_samples, dtype=np.float64) / sample_rate
    envelope = tone.volume * (ENVELOPE_FLOOR / tone.volume) ** (t / tone.duration)
    wave = oscillator(tone.waveform, tone.frequency, t)
    return (wave * envelope).astype(np.float32)


def render_cue(
    tones: Iterable[ToneConfig],
    sample_rate: int,
    master_volume: float = 1.0
) -> np.ndarray:
    """
    Mix a cue's tones at their offsets into one buffer.

    Returns:
        float32 mono samples, clipped to [-1, 1].
    """
    parts = []
    for tone in tones:
        start = int(round(tone.offset_ms * sample_rate / 1000.0))
        parts.append((start, synthesize_tone(tone, sample_rate)))

    if not parts:
        return np.zeros(0, dtype=np.float32)

    length = max(start + len(samples) for start, samples in parts)
    mix = np.zeros(length, dtype=np.float32)
    for start, samples in parts:
        mix[start:start + len(samples)] += samples

    mix *= master_volume
    return np.clip(mix, -1.0, 1.0)


def to_pcm16(samples: np.ndarray, channels: int = 1) -> np.ndarray:
    """Convert float samples to int16, duplicated across channels if needed."""
    pcm = (samples * 32767).astype(np.int16)
    if channels > 1:
        pcm = np.repeat(pcm[:, np.newaxis], channels, axis=1)
    return np.ascontiguousarray(pcm)


class AudioFeedback(FeedbackSink):
    """
    Plays a cue on each feedback event.

    If the mixer cannot be opened (no audio device, headless CI) the sink
    logs a warning and stays silent; the game is unaffected.
    """

    CUE_FOR_EVENT = {
        "on_jump": "jump",
        "on_score": "score",
        "on_terminate": "terminate",
    }

    def __init__(self, config: Optional[GameConfig] = None, enabled: Optional[bool] = None):
        """
        Initialize audio sink. Call init() before play.

        Args:
            config: Game configuration. Uses default if None.
            enabled: Override config.audio.enabled (e.g. --mute).
        """
        if config is None:
            config = get_config()

        self._config = config
        self._enabled = config.audio.enabled if enabled is None else enabled
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._initialized = False
        self._owns_mixer = False

    @property
    def available(self) -> bool:
        """True if cues will actually be played."""
        return self._initialized

    def cue_samples(self, name: str, sample_rate: Optional[int] = None) -> np.ndarray:
        """Float samples for a named cue, without touching the mixer."""
        audio = self._config.audio
        if name not in audio.cues:
            raise KeyError(f"Unknown cue: {name}")
        rate = sample_rate if sample_rate is not None else audio.sample_rate
        return render_cue(audio.cues[name], rate, audio.master_volume)

    def init(self) -> bool:
        """
        Open the mixer and pre-render all cues.

        Returns:
            True if audio is available.
        """
        if not self._enabled:
            logger.info("Audio disabled")
            return False

        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=self._config.audio.sample_rate, size=-16, channels=2)
                self._owns_mixer = True
            frequency, _, channels = pygame.mixer.get_init()

            for name in self._config.audio.cues:
                samples = self.cue_samples(name, frequency)
                self._sounds[name] = pygame.sndarray.make_sound(to_pcm16(samples, channels))
        except pygame.error as e:
            logger.warning(f"Audio unavailable, continuing without sound: {e}")
            self._sounds.clear()
            return False

        self._initialized = True
        logger.info(f"Audio initialized ({len(self._sounds)} cues at {frequency} Hz)")
        return True

    def play(self, name: str) -> bool:
        """Play a named cue. Returns False if nothing was played."""
        if not self._initialized:
            return False
        sound = self._sounds.get(name)
        if sound is None:
            return False
        sound.play()
        return True

    def on_jump(self) -> None:
        self.play(self.CUE_FOR_EVENT["on_jump"])

    def on_score(self, score: int) -> None:
        self.play(self.CUE_FOR_EVENT["on_score"])

    def on_terminate(self, final_score: int) -> None:
        self.play(self.CUE_FOR_EVENT["on_terminate"])

    def close(self) -> None:
        """Release the mixer if this sink opened it."""
        self._sounds.clear()
        if self._owns_mixer and pygame.mixer.get_init() is not None:
            pygame.mixer.quit()
        self._initialized = False
        self._owns_mixer = False
