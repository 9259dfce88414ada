"""Heuristic confidence scores for detected frequencies.

This is a coarse lookup over fixed frequency bands, not a statistical
estimate of detection quality.
"""

from dataclasses import dataclass

from ..logger import get_logger
from ..note_types import PitchReading
from ..note_utils import frequency_to_note

logger = get_logger(__name__)

INVALID_CONFIDENCE = 0.0
ACCURACY_CENTS = 50  # Readings within this many cents count as in tune


@dataclass(frozen=True)
class ConfidenceBands:
    """Band edges (Hz) and the score assigned inside each band.

    Bands are checked in order: outside ``[min_voice_freq, max_voice_freq]``
    is invalid, ``[typical_low, typical_high]`` is typical,
    ``[min_voice_freq, edge_low)`` and ``(edge_high, max_voice_freq]`` are the
    edges of the vocal band, anything left in range is medium.
    """

    min_voice_freq: float = 80.0
    max_voice_freq: float = 1100.0
    typical_low: float = 100.0
    typical_high: float = 800.0
    edge_low: float = 100.0
    edge_high: float = 800.0
    typical_score: float = 0.9
    medium_score: float = 0.7
    edge_score: float = 0.3

    def __post_init__(self):
        if not (
            self.min_voice_freq <= self.edge_low <= self.edge_high <= self.max_voice_freq
        ):
            raise ValueError("edge bands must lie inside the voice band")
        if self.typical_low > self.typical_high:
            raise ValueError("typical_low must not exceed typical_high")


DEFAULT_BANDS = ConfidenceBands()


def estimate_confidence(frequency: float, bands: ConfidenceBands = DEFAULT_BANDS) -> float:
    """Return a confidence in [0, 1] for a detected ``frequency``.

    Frequencies outside the voice band score ``INVALID_CONFIDENCE``; the
    detector should already have rejected them.
    """
    if frequency < bands.min_voice_freq or frequency > bands.max_voice_freq:
        logger.debug(f"{frequency:.1f}Hz outside voice band, confidence invalid")
        return INVALID_CONFIDENCE

    if bands.typical_low <= frequency <= bands.typical_high:
        return bands.typical_score

    if frequency < bands.edge_low or frequency > bands.edge_high:
        return bands.edge_score

    return bands.medium_score


def analyze_frequency(
    frequency: float, timestamp: float, bands: ConfidenceBands = DEFAULT_BANDS
) -> PitchReading:
    """Turn a detected frequency into a :class:`PitchReading`."""
    note = frequency_to_note(frequency)
    return PitchReading(
        frequency=frequency,
        note=note,
        confidence=estimate_confidence(frequency, bands),
        is_accurate=abs(note.cents) <= ACCURACY_CENTS,
        timestamp=timestamp,
    )
