"""Defines the core interfaces for the Vocal Range application."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterator

import numpy as np

from ..note_types import AudioFrame, PitchEstimate


class IAudioProvider(ABC):
    """Interface for audio sources delivering fixed-size frames."""

    @abstractmethod
    def frames(self) -> Iterator[AudioFrame]:
        """Yield audio frames until the source is exhausted or stopped."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop delivering frames."""
        pass

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """The sample rate of the audio stream."""
        pass


class IPitchDetector(ABC):
    """Interface for per-frame pitch estimation algorithms."""

    @abstractmethod
    def process_audio(self, audio_data: np.ndarray, timestamp: float) -> PitchEstimate:
        """Estimate the pitch of one frame of audio."""
        pass

    @abstractmethod
    def set_sample_rate(self, sample_rate: int) -> None:
        """Update the sample rate the detector assumes."""
        pass
