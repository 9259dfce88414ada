"""Streaming vocal range tracking over stable pitch readings."""

from collections import deque
from enum import Enum
from typing import Deque, Optional, Tuple

from ..logger import get_logger
from ..core.events import RangeTrackingEvents
from ..note_types import PitchReading, RangeProgress, VocalRangeResult
from ..range_analysis import calculate_vocal_range

logger = get_logger(__name__)


class TrackerState(Enum):
    IDLE = "idle"
    TRACKING = "tracking"


class RangeTracker:
    """
    Collects stable readings during a session and periodically snapshots the range.

    Snapshots are computed from the rolling buffer only. The running extrema
    cover the whole session and are never reset by buffer eviction, so they
    may be wider than the latest snapshot; they are reported as progress.
    """

    def __init__(
        self,
        acceptance_confidence: float = 0.8,
        buffer_capacity: int = 100,
        snapshot_interval: int = 10,
        events: Optional[RangeTrackingEvents] = None,
    ):
        if not 0.0 <= acceptance_confidence <= 1.0:
            raise ValueError("acceptance_confidence must be between 0.0 and 1.0")
        if buffer_capacity < 1:
            raise ValueError("buffer_capacity must be at least 1")
        if snapshot_interval < 1:
            raise ValueError("snapshot_interval must be at least 1")

        self._acceptance_confidence = acceptance_confidence
        self._snapshot_interval = snapshot_interval
        self.events = events or RangeTrackingEvents()

        self._buffer: Deque[float] = deque(maxlen=buffer_capacity)
        self._state = TrackerState.IDLE
        self._stable_reading_count = 0
        self._running_min = float("inf")
        self._running_max = float("-inf")
        self._last_result: Optional[VocalRangeResult] = None

    def start(self) -> None:
        """Reset all session state and begin tracking."""
        self._buffer.clear()
        self._stable_reading_count = 0
        self._running_min = float("inf")
        self._running_max = float("-inf")
        self._last_result = None
        self._state = TrackerState.TRACKING
        logger.info("Range tracking started")

    def stop(self) -> Optional[VocalRangeResult]:
        """Stop tracking and return the last snapshot, if any."""
        if self._state is TrackerState.IDLE:
            return self._last_result

        self._state = TrackerState.IDLE
        logger.info(
            f"Range tracking stopped after {self._stable_reading_count} stable readings"
        )
        self.events.emit_stopped(self._last_result)
        return self._last_result

    def add_reading(
        self, frequency: float, confidence: float
    ) -> Optional[VocalRangeResult]:
        """Offer one observation to the tracker.

        Returns:
            The new snapshot if this reading completed a snapshot interval,
            None otherwise
        """
        if self._state is not TrackerState.TRACKING:
            logger.debug(f"Ignoring {frequency:.1f}Hz while idle")
            return None

        if confidence <= self._acceptance_confidence:
            logger.debug(
                f"Discarded {frequency:.1f}Hz (confidence {confidence:.2f} "
                f"<= {self._acceptance_confidence})"
            )
            return None

        self._buffer.append(frequency)
        self._running_min = min(self._running_min, frequency)
        self._running_max = max(self._running_max, frequency)
        self._stable_reading_count += 1

        self.events.emit_progress(self.current_range())

        if self._stable_reading_count % self._snapshot_interval == 0:
            return self.snapshot()
        return None

    def add_pitch_reading(self, reading: PitchReading) -> Optional[VocalRangeResult]:
        """Offer a :class:`PitchReading` to the tracker."""
        return self.add_reading(reading.frequency, reading.confidence)

    def snapshot(self) -> VocalRangeResult:
        """Recompute the range from the rolling buffer and emit it."""
        result = calculate_vocal_range(self._buffer)
        self._last_result = result
        logger.info(
            f"Range snapshot: {result.lowest_note.name}-{result.highest_note.name} "
            f"({result.range_semitones} semitones, {result.voice_type})"
        )
        self.events.emit_snapshot(result)
        return result

    def current_range(self) -> Optional[RangeProgress]:
        """Session-long running extrema, or None before the first stable reading."""
        if self._stable_reading_count == 0:
            return None
        return RangeProgress(
            min_frequency=self._running_min,
            max_frequency=self._running_max,
            readings=self._stable_reading_count,
        )

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def is_tracking(self) -> bool:
        return self._state is TrackerState.TRACKING

    @property
    def stable_reading_count(self) -> int:
        return self._stable_reading_count

    @property
    def buffered_frequencies(self) -> Tuple[float, ...]:
        """Current rolling buffer contents, oldest first."""
        return tuple(self._buffer)

    @property
    def last_result(self) -> Optional[VocalRangeResult]:
        return self._last_result

    @property
    def acceptance_confidence(self) -> float:
        return self._acceptance_confidence

    @property
    def buffer_capacity(self) -> int:
        return self._buffer.maxlen

    @property
    def snapshot_interval(self) -> int:
        return self._snapshot_interval
