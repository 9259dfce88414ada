"""Pick a comfortable reference note inside a singer's range."""

from .logger import get_logger
from .note_types import NoteLabel, VocalRangeResult
from .note_utils import frequency_to_note

logger = get_logger(__name__)

COMFORT_LOW = 0.2  # Fraction of the range skipped at the bottom
COMFORT_HIGH = 0.8  # Fraction of the range where the comfort zone ends
MIN_OCTAVE = 3
MAX_OCTAVE = 5
FALLBACK_ROOT = NoteLabel("C", 4)


def calculate_optimal_root_note(
    lowest_frequency: float, highest_frequency: float
) -> NoteLabel:
    """Return a root note near the middle of the range, in octaves 3 to 5.

    The midpoint is clamped into the middle 60% of the range, moved by whole
    octaves into octaves 3-5 and, if that leaves the range, snapped to the
    note of the violated bound.

    Non-positive bounds yield the C4 fallback.

    Raises:
        ValueError: If the bounds are reversed
    """
    if lowest_frequency <= 0 or highest_frequency <= 0:
        logger.warning(
            f"Cannot place a root note in {lowest_frequency}-{highest_frequency}Hz, "
            f"using {FALLBACK_ROOT.name}"
        )
        return FALLBACK_ROOT
    if lowest_frequency > highest_frequency:
        raise ValueError("lowest_frequency must not exceed highest_frequency")

    span = highest_frequency - lowest_frequency
    comfortable_low = lowest_frequency + span * COMFORT_LOW
    comfortable_high = lowest_frequency + span * COMFORT_HIGH

    midpoint = (lowest_frequency + highest_frequency) / 2
    frequency = min(max(midpoint, comfortable_low), comfortable_high)
    note = frequency_to_note(frequency)

    if note.octave < MIN_OCTAVE:
        frequency *= 2.0 ** (MIN_OCTAVE - note.octave)
        note = frequency_to_note(frequency)
    elif note.octave > MAX_OCTAVE:
        frequency /= 2.0 ** (note.octave - MAX_OCTAVE)
        note = frequency_to_note(frequency)

    final_frequency = note.frequency
    if final_frequency < lowest_frequency:
        note = frequency_to_note(lowest_frequency)
    elif final_frequency > highest_frequency:
        note = frequency_to_note(highest_frequency)

    root = NoteLabel(note.pitch_class, note.octave)
    logger.info(
        f"Root note for {lowest_frequency:.1f}-{highest_frequency:.1f}Hz: {root.name}"
    )
    return root


def root_note_for_range(vocal_range: VocalRangeResult) -> NoteLabel:
    """Convenience wrapper taking a :class:`VocalRangeResult`."""
    return calculate_optimal_root_note(
        vocal_range.lowest_frequency, vocal_range.highest_frequency
    )
