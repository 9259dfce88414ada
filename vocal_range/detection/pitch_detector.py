"""Autocorrelation pitch detection for a single singing voice."""

from __future__ import annotations
from typing import ClassVar, Optional

import numpy as np

from ..logger import get_logger
from ..note_types import AudioFrame, PitchEstimate
from ..core.interfaces import IPitchDetector

logger = get_logger(__name__)

DEFAULT_SILENCE_THRESHOLD = 0.01  # RMS below this is treated as silence
DEFAULT_CORRELATION_THRESHOLD = 0.3  # Weakest autocorrelation peak accepted
DEFAULT_MIN_VOICE_FREQ = 80.0  # Hz
DEFAULT_MAX_VOICE_FREQ = 1100.0  # Hz


def _to_mono(samples: np.ndarray) -> np.ndarray:
    samples = np.asarray(samples, dtype=np.float64)
    if samples.ndim > 1:
        samples = samples[:, 0]
    return samples


def rms(samples: np.ndarray) -> float:
    """Root-mean-square energy of ``samples`` (0 for an empty frame)."""
    samples = _to_mono(samples)
    if samples.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(samples**2)))


def detect_pitch(
    samples: np.ndarray,
    sample_rate: int,
    silence_threshold: float = DEFAULT_SILENCE_THRESHOLD,
    correlation_threshold: float = DEFAULT_CORRELATION_THRESHOLD,
    min_voice_freq: float = DEFAULT_MIN_VOICE_FREQ,
    max_voice_freq: float = DEFAULT_MAX_VOICE_FREQ,
) -> Optional[float]:
    """Estimate the fundamental frequency of one frame using autocorrelation.

    The lag with the strongest unnormalized autocorrelation inside the voice
    band wins. There is no octave-error correction, so a strong sub- or
    overtone peak can be picked over the true fundamental.

    Args:
        samples: Normalized amplitude samples (mono, or first channel is used)
        sample_rate: Sample rate in Hz
        silence_threshold: Frames with lower RMS return None
        correlation_threshold: Peaks weaker than this return None
        min_voice_freq: Lowest frequency considered, in Hz
        max_voice_freq: Highest frequency considered, in Hz

    Returns:
        The frequency in Hz, or None when no confident pitch is present
    """
    samples = _to_mono(samples)
    size = samples.size

    level = rms(samples)
    if level < silence_threshold:
        logger.debug(f"Signal too weak: RMS {level:.4f} < {silence_threshold}")
        return None

    min_lag = max(1, int(np.floor(sample_rate / max_voice_freq)))
    max_lag = min(int(np.floor(sample_rate / min_voice_freq)), size - 1)
    if max_lag < min_lag:
        logger.debug(f"Frame of {size} samples too short for lag {min_lag}")
        return None

    lags = np.arange(min_lag, max_lag + 1)
    correlations = np.array(
        [np.dot(samples[: size - lag], samples[lag:]) for lag in lags]
    )

    best = int(np.argmax(correlations))
    best_lag = int(lags[best])
    best_correlation = float(correlations[best])
    if best_correlation < correlation_threshold:
        logger.debug(
            f"No clear periodicity: peak {best_correlation:.3f} at lag {best_lag}"
        )
        return None

    frequency = sample_rate / best_lag
    if frequency < min_voice_freq or frequency > max_voice_freq:
        logger.debug(f"Rejected {frequency:.1f}Hz outside the voice band")
        return None

    return float(frequency)


class PitchDetector(IPitchDetector):
    """Configurable wrapper around :func:`detect_pitch`."""

    SAMPLE_RATE: ClassVar[int] = 44100  # Hz

    def __init__(
        self,
        sample_rate: Optional[int] = None,
        silence_threshold: float = DEFAULT_SILENCE_THRESHOLD,
        correlation_threshold: float = DEFAULT_CORRELATION_THRESHOLD,
        min_voice_freq: float = DEFAULT_MIN_VOICE_FREQ,
        max_voice_freq: float = DEFAULT_MAX_VOICE_FREQ,
    ) -> None:
        """Initialize the PitchDetector.

        Args:
            sample_rate: Audio sample rate in Hz, or None for default (44100)
            silence_threshold: RMS level below which a frame is silent
            correlation_threshold: Minimum autocorrelation peak for a pitch
            min_voice_freq: Lowest frequency to report, in Hz
            max_voice_freq: Highest frequency to report, in Hz
        """
        if min_voice_freq <= 0 or max_voice_freq <= min_voice_freq:
            raise ValueError("voice band must satisfy 0 < min_voice_freq < max_voice_freq")
        if silence_threshold < 0 or correlation_threshold < 0:
            raise ValueError("thresholds must not be negative")

        self._sample_rate = self.SAMPLE_RATE
        self.set_sample_rate(sample_rate or self.SAMPLE_RATE)
        self._silence_threshold = silence_threshold
        self._correlation_threshold = correlation_threshold
        self._min_voice_freq = min_voice_freq
        self._max_voice_freq = max_voice_freq

        logger.info(
            f"Pitch detector initialized: sample_rate={self._sample_rate}, "
            f"band={min_voice_freq:.0f}-{max_voice_freq:.0f}Hz"
        )

    def process_audio(self, audio_data: np.ndarray, timestamp: float) -> PitchEstimate:
        """Estimate the pitch of ``audio_data``.

        Args:
            audio_data: Numpy array containing audio samples
            timestamp: Timestamp of the frame in seconds

        Returns:
            PitchEstimate whose frequency is None when no pitch was found
        """
        frequency = detect_pitch(
            audio_data,
            self._sample_rate,
            silence_threshold=self._silence_threshold,
            correlation_threshold=self._correlation_threshold,
            min_voice_freq=self._min_voice_freq,
            max_voice_freq=self._max_voice_freq,
        )
        return PitchEstimate(frequency=frequency, timestamp=timestamp)

    def process_frame(self, frame: AudioFrame) -> PitchEstimate:
        """Estimate the pitch of an :class:`AudioFrame` using its own sample rate."""
        self.set_sample_rate(frame.sample_rate)
        return self.process_audio(frame.samples, frame.timestamp)

    def set_sample_rate(self, sample_rate: int) -> None:
        """Update the sample rate.

        Args:
            sample_rate: New sample rate in Hz
        """
        if sample_rate <= 0:
            raise ValueError("Sample rate must be positive")

        if sample_rate != self._sample_rate:
            logger.info(
                f"Updating pitch detector sample rate from {self._sample_rate} to {sample_rate} Hz"
            )
            self._sample_rate = sample_rate

    # Property getters
    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def silence_threshold(self) -> float:
        """Get the RMS silence gate."""
        return self._silence_threshold

    @property
    def correlation_threshold(self) -> float:
        """Get the minimum autocorrelation peak."""
        return self._correlation_threshold

    @property
    def min_voice_freq(self) -> float:
        return self._min_voice_freq

    @property
    def max_voice_freq(self) -> float:
        return self._max_voice_freq
