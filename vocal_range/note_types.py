"""Type definitions for the Vocal Range project."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np


class VoiceType(str, Enum):
    """Coarse vocal range classification."""

    SOPRANO = "soprano"
    MEZZO_SOPRANO = "mezzo-soprano"
    ALTO = "alto"
    TENOR = "tenor"
    BARITONE = "baritone"
    BASS = "bass"
    UNKNOWN = "unknown"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class NoteLabel:
    """An equal-tempered note with its deviation from the exact pitch."""

    pitch_class: str  # One of C, C#, D, ... B
    octave: int  # Scientific pitch notation, C4 is middle C
    cents: int = 0  # Deviation from the exact note frequency

    @property
    def name(self) -> str:
        return f"{self.pitch_class}{self.octave}"

    @property
    def frequency(self) -> float:
        """Reference frequency of the note, ignoring ``cents``."""
        from .note_utils import note_to_frequency

        return note_to_frequency(self.pitch_class, self.octave)

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class AudioFrame:
    """A block of normalized mono samples captured at ``sample_rate``."""

    samples: np.ndarray
    sample_rate: int
    timestamp: float = 0.0


@dataclass(frozen=True)
class PitchEstimate:
    """Result of running the pitch detector over one frame."""

    frequency: Optional[float]  # None when no pitch was detected
    timestamp: float


@dataclass(frozen=True)
class PitchReading:
    """A detected pitch enriched with its note, confidence and accuracy."""

    frequency: float  # Frequency in Hz
    note: NoteLabel  # Nearest note, with cents deviation
    confidence: float  # Heuristic confidence (0-1)
    is_accurate: bool  # Within 50 cents of the nearest note
    timestamp: float  # Timestamp of the frame the pitch came from


@dataclass(frozen=True)
class RangeProgress:
    """Session-long running extrema of the stable readings."""

    min_frequency: float
    max_frequency: float
    readings: int


@dataclass(frozen=True)
class VocalRangeResult:
    """Immutable snapshot of a singer's range."""

    lowest_note: NoteLabel
    highest_note: NoteLabel
    lowest_frequency: float
    highest_frequency: float
    range_semitones: int
    voice_type: VoiceType

    def to_dict(self) -> dict:
        return {
            "lowest_note": self.lowest_note.name,
            "highest_note": self.highest_note.name,
            "lowest_frequency": self.lowest_frequency,
            "highest_frequency": self.highest_frequency,
            "range_semitones": self.range_semitones,
            "voice_type": self.voice_type.value,
        }
