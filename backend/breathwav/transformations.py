"""
Breathing Envelope Transformations
==================================
Contains the raised-cosine "breathing" envelope and the 16-bit gain stage
that applies it to PCM samples.
"""

import numpy as np


class Transformations:
    """
    Envelope utilities for the breathing processor.

    Primary transformation: breathing envelope (cosine rise, cosine fall)
    Gain stage: per-sample scaling with clamp and floor quantization
    """

    # Full-scale value used to normalize 16-bit samples
    PCM16_SCALE = 32767

    @staticmethod
    def breathing_envelope(
        total_samples: int,
        sample_rate: int
    ) -> np.ndarray:
        """
        Build a breathing envelope: smooth rise (inhale) then fall (exhale).

        The first half of the clip ramps 0 -> 1 with 0.5 - 0.5*cos(pi*x),
        the second half ramps 1 -> 0 with 0.5 + 0.5*cos(pi*x). The sample
        sitting exactly on the midpoint belongs to the exhale half; both
        halves evaluate to 1.0 there.

        Args:
            total_samples: Number of gain values to produce
            sample_rate: Sample rate of the audio in Hz

        Returns:
            float32 array of gains in [0, 1], one per sample
        """
        if sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {sample_rate}")
        if total_samples < 0:
            raise ValueError(f"Sample count must not be negative, got {total_samples}")
        if total_samples == 0:
            return np.zeros(0, dtype=np.float32)

        duration = total_samples / sample_rate
        half = duration / 2

        t = np.arange(total_samples, dtype=np.float64) / sample_rate
        inhale = t < half

        envelope = np.empty(total_samples, dtype=np.float64)

        # Inhale: 0 -> 1
        x = t[inhale] / half
        envelope[inhale] = 0.5 - 0.5 * np.cos(np.pi * x)

        # Exhale: 1 -> 0
        x = (t[~inhale] - half) / half
        envelope[~inhale] = 0.5 + 0.5 * np.cos(np.pi * x)

        return envelope.astype(np.float32)

    @staticmethod
    def apply_envelope(
        samples: np.ndarray,
        envelope: np.ndarray
    ) -> np.ndarray:
        """
        Scale 16-bit samples by a gain envelope.

        Each sample is normalized by 32767, multiplied by its gain, clamped
        to [-1, 1] and quantized back with floor (truncation toward -inf).

        Args:
            samples: Signed 16-bit samples
            envelope: Gain per sample, same length as samples

        Returns:
            New int16 array; the input is left untouched
        """
        if len(samples) != len(envelope):
            raise ValueError(
                f"Envelope length {len(envelope)} does not match sample count {len(samples)}"
            )

        scale = Transformations.PCM16_SCALE
        normalized = samples.astype(np.float64) / scale
        scaled = np.clip(normalized * envelope.astype(np.float64), -1.0, 1.0)
        return np.floor(scaled * scale).astype(np.int16)

    @staticmethod
    def peak_level(samples: np.ndarray) -> float:
        """Peak absolute level of 16-bit samples on a 0..1 scale."""
        if len(samples) == 0:
            return 0.0
        return float(np.max(np.abs(samples.astype(np.float64))) / Transformations.PCM16_SCALE)

    @staticmethod
    def calculate_rms_energy(samples: np.ndarray) -> float:
        """RMS energy of 16-bit samples on a 0..1 scale."""
        if len(samples) == 0:
            return 0.0
        normalized = samples.astype(np.float64) / Transformations.PCM16_SCALE
        return float(np.sqrt(np.mean(normalized ** 2)))
