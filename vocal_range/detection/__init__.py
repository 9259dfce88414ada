"""Per-frame pitch detection and session range tracking."""

from .confidence import ConfidenceBands, analyze_frequency, estimate_confidence
from .pitch_detector import PitchDetector, detect_pitch
from .range_tracker import RangeTracker, TrackerState

__all__ = [
    "ConfidenceBands",
    "PitchDetector",
    "RangeTracker",
    "TrackerState",
    "analyze_frequency",
    "detect_pitch",
    "estimate_confidence",
]
