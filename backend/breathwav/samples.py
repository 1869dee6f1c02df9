"""
Test Sample Generator
=====================
Writes synthetic mono 16-bit WAV clips for trying out the breathing
envelope: full-scale DC, white noise, brown noise and a sine tone.
"""

from pathlib import Path

import numpy as np
import soundfile as sf
from scipy import signal

SAMPLE_KINDS = ("full-scale", "white", "brown", "tone")


class SampleGenerator:
    """
    Generates mono PCM_16 test clips.

    Defaults mirror the target use case: 10 second clips.
    """

    SAMPLE_RATE = 8000
    DURATION_SECONDS = 10.0

    def __init__(self, sample_rate: int = SAMPLE_RATE, seed: int = 0):
        self.sample_rate = sample_rate
        self.rng = np.random.default_rng(seed)

    def _num_samples(self, duration_seconds: float) -> int:
        return int(round(duration_seconds * self.sample_rate))

    def generate_full_scale(self, duration_seconds: float = DURATION_SECONDS) -> np.ndarray:
        """Every sample at +32767, which makes the envelope shape directly visible."""
        return np.full(self._num_samples(duration_seconds), 32767, dtype=np.int16)

    def generate_white_noise(
        self,
        duration_seconds: float = DURATION_SECONDS,
        amplitude: float = 0.5
    ) -> np.ndarray:
        """Uniform white noise scaled to the given peak amplitude."""
        noise = self.rng.uniform(-1.0, 1.0, self._num_samples(duration_seconds))
        return self._to_int16(noise * amplitude)

    def generate_brown_noise(
        self,
        duration_seconds: float = DURATION_SECONDS,
        amplitude: float = 0.5
    ) -> np.ndarray:
        """
        Brown noise: white noise through a leaky integrator, peak-normalized.

        The leak keeps the random walk from drifting off into DC.
        """
        white = self.rng.standard_normal(self._num_samples(duration_seconds))
        brown = signal.lfilter([1.0], [1.0, -0.995], white)
        brown = brown - np.mean(brown)
        peak = np.max(np.abs(brown)) if len(brown) else 0.0
        if peak > 0:
            brown = brown / peak
        return self._to_int16(brown * amplitude)

    def generate_tone(
        self,
        duration_seconds: float = DURATION_SECONDS,
        frequency: float = 440.0,
        amplitude: float = 0.5
    ) -> np.ndarray:
        """Pure sine tone."""
        n = self._num_samples(duration_seconds)
        t = np.arange(n) / self.sample_rate
        return self._to_int16(np.sin(2 * np.pi * frequency * t) * amplitude)

    def generate(self, kind: str, duration_seconds: float = DURATION_SECONDS) -> np.ndarray:
        if kind == "full-scale":
            return self.generate_full_scale(duration_seconds)
        if kind == "white":
            return self.generate_white_noise(duration_seconds)
        if kind == "brown":
            return self.generate_brown_noise(duration_seconds)
        if kind == "tone":
            return self.generate_tone(duration_seconds)
        raise ValueError(f"Unknown sample kind: {kind}")

    def save(self, samples: np.ndarray, output_path) -> Path:
        """Write int16 samples as a mono PCM_16 WAV."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        sf.write(str(output_path), samples, self.sample_rate, subtype="PCM_16", format="WAV")
        return output_path

    @staticmethod
    def _to_int16(audio: np.ndarray) -> np.ndarray:
        return np.clip(np.round(audio * 32767.0), -32768, 32767).astype(np.int16)
