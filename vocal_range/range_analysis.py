"""Vocal range statistics and voice type classification."""

import math
from typing import Iterable, List, Tuple

import numpy as np

from .logger import get_logger
from .note_types import NoteLabel, VocalRangeResult, VoiceType
from .note_utils import frequency_to_note, note_to_frequency

logger = get_logger(__name__)

# Reported when there is nothing to measure
REFERENCE_NOTE = NoteLabel("C", 4, 0)

# (voice type, lowest >= Hz, highest >= Hz), checked in order, first match wins
VOICE_TYPE_RULES: List[Tuple[VoiceType, float, float]] = [
    (VoiceType.SOPRANO, 250.0, 1000.0),
    (VoiceType.MEZZO_SOPRANO, 200.0, 850.0),
    (VoiceType.ALTO, 170.0, 650.0),
    (VoiceType.TENOR, 120.0, 500.0),
    (VoiceType.BARITONE, 90.0, 380.0),
    (VoiceType.BASS, 80.0, 320.0),
]


def classify_voice_type(lowest_frequency: float, highest_frequency: float) -> VoiceType:
    """Classify a range by the first rule whose thresholds it meets."""
    for voice_type, min_low, min_high in VOICE_TYPE_RULES:
        if lowest_frequency >= min_low and highest_frequency >= min_high:
            return voice_type
    return VoiceType.UNKNOWN


def default_vocal_range() -> VocalRangeResult:
    """Neutral result used when no usable frequencies were collected."""
    frequency = note_to_frequency(REFERENCE_NOTE.pitch_class, REFERENCE_NOTE.octave)
    return VocalRangeResult(
        lowest_note=REFERENCE_NOTE,
        highest_note=REFERENCE_NOTE,
        lowest_frequency=frequency,
        highest_frequency=frequency,
        range_semitones=0,
        voice_type=VoiceType.UNKNOWN,
    )


def calculate_vocal_range(frequencies: Iterable[float]) -> VocalRangeResult:
    """Calculate a vocal range from a series of frequency measurements.

    Non-positive and non-finite values are ignored. With nothing left the
    neutral :func:`default_vocal_range` is returned.
    """
    valid = [float(f) for f in frequencies if np.isfinite(f) and f > 0]
    if not valid:
        logger.debug("No valid frequencies, returning neutral range")
        return default_vocal_range()

    lowest = min(valid)
    highest = max(valid)

    return VocalRangeResult(
        lowest_note=frequency_to_note(lowest),
        highest_note=frequency_to_note(highest),
        lowest_frequency=lowest,
        highest_frequency=highest,
        range_semitones=int(math.floor(12 * np.log2(highest / lowest) + 0.5)),
        voice_type=classify_voice_type(lowest, highest),
    )
