"""Session that connects an audio source to pitch detection and range tracking."""

from __future__ import annotations
from typing import Iterator, Optional

from ..logger import get_logger
from ..core.interfaces import IAudioProvider
from ..detection.confidence import ConfidenceBands, DEFAULT_BANDS, analyze_frequency
from ..detection.pitch_detector import PitchDetector
from ..detection.range_tracker import RangeTracker
from ..note_types import PitchEstimate, PitchReading, VocalRangeResult
from ..range_analysis import default_vocal_range

logger = get_logger(__name__)


class VocalRangeSession:
    """Pull-based pipeline: audio frames -> pitch estimates -> range snapshots.

    This class acts as a facade for the audio provider, the pitch detector and
    the range tracker. Nothing runs in the background; frames are analysed as
    the caller iterates.
    """

    def __init__(
        self,
        audio_provider: IAudioProvider,
        detector: Optional[PitchDetector] = None,
        tracker: Optional[RangeTracker] = None,
        confidence_bands: ConfidenceBands = DEFAULT_BANDS,
        min_interval: float = 0.0,
    ) -> None:
        """Initialize the session.

        Args:
            audio_provider: Source of audio frames
            detector: Pitch detector, or None to create a default one
            tracker: Range tracker, or None to create a default one
            confidence_bands: Bands used to score detected frequencies
            min_interval: Skip frames closer than this many seconds to the
                previously analysed one (0 analyses every frame)
        """
        if min_interval < 0:
            raise ValueError("min_interval must not be negative")

        self._audio_provider = audio_provider
        self._detector = detector or PitchDetector(sample_rate=audio_provider.sample_rate)
        self._tracker = tracker or RangeTracker()
        self._confidence_bands = confidence_bands
        self._min_interval = min_interval
        self._last_analyzed: Optional[float] = None

    @property
    def events(self):
        """Listener registry shared with the tracker."""
        return self._tracker.events

    @property
    def detector(self) -> PitchDetector:
        return self._detector

    @property
    def tracker(self) -> RangeTracker:
        return self._tracker

    def estimates(self) -> Iterator[PitchEstimate]:
        """Yield one :class:`PitchEstimate` per analysed frame."""
        self._last_analyzed = None
        for frame in self._audio_provider.frames():
            if (
                self._last_analyzed is not None
                and frame.timestamp - self._last_analyzed < self._min_interval
            ):
                logger.debug(f"Throttled frame at {frame.timestamp:.3f}s")
                continue
            self._last_analyzed = frame.timestamp
            yield self._detector.process_frame(frame)

    def readings(self) -> Iterator[PitchReading]:
        """Yield a :class:`PitchReading` for every frame with a detected pitch."""
        for estimate in self.estimates():
            if estimate.frequency is None:
                continue
            reading = analyze_frequency(
                estimate.frequency, estimate.timestamp, self._confidence_bands
            )
            self.events.emit_pitch(reading)
            yield reading

    def run(self) -> VocalRangeResult:
        """Track the range until the source ends or :meth:`stop` is called.

        Returns:
            The last snapshot, or the neutral default if none was produced
        """
        self._tracker.start()
        try:
            for reading in self.readings():
                if not self._tracker.is_tracking:
                    break
                self._tracker.add_pitch_reading(reading)
        finally:
            result = self._tracker.stop()

        if result is None:
            logger.info("No range snapshot was produced, returning neutral range")
            return default_vocal_range()
        return result

    def stop(self) -> None:
        """Stop the audio source and end range tracking."""
        self._audio_provider.stop()
        self._tracker.stop()
