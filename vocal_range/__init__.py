"""Vocal range analysis: pitch detection, range tracking and root notes."""

from .detection import (
    ConfidenceBands,
    PitchDetector,
    RangeTracker,
    analyze_frequency,
    detect_pitch,
    estimate_confidence,
)
from .note_types import (
    AudioFrame,
    NoteLabel,
    PitchEstimate,
    PitchReading,
    RangeProgress,
    VocalRangeResult,
    VoiceType,
)
from .note_utils import FormatError, frequency_to_note, note_to_frequency, parse_note
from .range_analysis import calculate_vocal_range, classify_voice_type
from .root_note import calculate_optimal_root_note

__version__ = "0.1.0"

__all__ = [
    "AudioFrame",
    "ConfidenceBands",
    "FormatError",
    "NoteLabel",
    "PitchDetector",
    "PitchEstimate",
    "PitchReading",
    "RangeProgress",
    "RangeTracker",
    "VocalRangeResult",
    "VoiceType",
    "analyze_frequency",
    "calculate_optimal_root_note",
    "calculate_vocal_range",
    "classify_voice_type",
    "detect_pitch",
    "estimate_confidence",
    "frequency_to_note",
    "note_to_frequency",
    "parse_note",
    "__version__",
]
