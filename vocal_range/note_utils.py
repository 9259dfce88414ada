"""Utility functions for working with musical notes and frequencies."""

import math
import re
from typing import Dict, List

import numpy as np

from .logger import get_logger
from .note_types import NoteLabel

# Get logger for this module
logger = get_logger(__name__)

A4_FREQUENCY = 440.0
# C0 is 4.75 octaves below A4
C0_FREQUENCY = A4_FREQUENCY * 2 ** -4.75

NOTE_NAMES: List[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]

# Equal-tempered frequencies of the 4th octave
NOTE_FREQUENCIES: Dict[str, float] = {
    "C": 261.63,
    "C#": 277.18,
    "D": 293.66,
    "D#": 311.13,
    "E": 329.63,
    "F": 349.23,
    "F#": 369.99,
    "G": 392.00,
    "G#": 415.30,
    "A": 440.00,
    "A#": 466.16,
    "B": 493.88,
}

FLAT_TO_SHARP: Dict[str, str] = {
    "Ab": "G#",
    "Bb": "A#",
    "Cb": "B",
    "Db": "C#",
    "Eb": "D#",
    "Fb": "E",
    "Gb": "F#",
}

# Returned for frequencies that cannot be mapped. Not a meaningful result.
FALLBACK_NOTE = NoteLabel("A", 4, 0)

# Pitch letter, optional accidental, octave
NOTE_PATTERN = re.compile(r"^([A-Ga-g])([#b]?)(\d+)$")


class FormatError(ValueError):
    """Raised when a note name or pitch class cannot be parsed."""


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_pitch_class(pitch_class: str) -> str:
    """Return the sharp spelling of ``pitch_class`` (e.g. 'Bb' -> 'A#').

    Raises:
        FormatError: If ``pitch_class`` is not one of the twelve pitch classes
    """
    if not isinstance(pitch_class, str) or not pitch_class.strip():
        raise FormatError(f"Invalid pitch class: {pitch_class!r}")

    text = pitch_class.strip()
    letter, accidental = text[0].upper(), text[1:]
    candidate = FLAT_TO_SHARP.get(letter + accidental, letter + accidental)
    if candidate not in NOTE_FREQUENCIES:
        raise FormatError(f"Invalid pitch class: {pitch_class!r}")
    return candidate


def parse_note(note: str) -> NoteLabel:
    """Parse a note string such as ``'C#4'`` or ``'Bb3'``.

    Raises:
        FormatError: If the string is not a pitch class followed by an octave
    """
    match = NOTE_PATTERN.match(note.strip()) if isinstance(note, str) else None
    if not match:
        raise FormatError(f"Invalid note format: {note!r}")

    letter, accidental, octave = match.groups()
    return NoteLabel(normalize_pitch_class(letter + accidental), int(octave), 0)


def frequency_to_note(frequency: float) -> NoteLabel:
    """Convert a frequency in Hz to the nearest note.

    Args:
        frequency: The frequency in Hz to convert

    Returns:
        NoteLabel with pitch class, octave and cents deviation. Non-positive or
        non-finite input returns ``FALLBACK_NOTE`` (A4, 0 cents).

    Note:
        - A4 is 440 Hz
        - Octave numbers change between B and C (e.g., B3 -> C4)
    """
    if not np.isfinite(frequency) or frequency <= 0:
        logger.debug(f"Cannot map frequency {frequency} to a note, using fallback")
        return FALLBACK_NOTE

    note_number = 12 * np.log2(frequency / C0_FREQUENCY)
    rounded = _round_half_up(note_number)
    cents = _round_half_up((note_number - rounded) * 100)

    return NoteLabel(NOTE_NAMES[rounded % 12], rounded // 12, cents)


def note_to_frequency(pitch_class: str, octave: int) -> float:
    """Convert a pitch class and octave to its frequency in Hz.

    Raises:
        FormatError: If ``pitch_class`` is not a valid pitch class
    """
    base_frequency = NOTE_FREQUENCIES[normalize_pitch_class(pitch_class)]
    return base_frequency * 2.0 ** (octave - 4)


def cents_difference(frequency1: float, frequency2: float) -> int:
    """Cents from ``frequency1`` to ``frequency2`` (positive if the second is higher)."""
    if frequency1 <= 0 or frequency2 <= 0:
        return 0
    return _round_half_up(1200 * np.log2(frequency2 / frequency1))


def is_pitch_in_tolerance(
    frequency: float, pitch_class: str, octave: int, tolerance_cents: float = 50
) -> bool:
    """Check whether ``frequency`` is within ``tolerance_cents`` of the target note."""
    if frequency <= 0:
        return False
    target = note_to_frequency(pitch_class, octave)
    return abs(cents_difference(target, frequency)) <= tolerance_cents


def calculate_interval(note1: str, note2: str) -> int:
    """Number of semitones from ``note1`` up to ``note2``."""
    frequency1 = parse_note(note1).frequency
    frequency2 = parse_note(note2).frequency
    return _round_half_up(12 * np.log2(frequency2 / frequency1))


def next_note(note: str, semitones: int) -> str:
    """Transpose ``note`` by ``semitones`` (negative moves down)."""
    frequency = parse_note(note).frequency * 2.0 ** (semitones / 12)
    return frequency_to_note(frequency).name


def is_same_note_class(note1: str, note2: str) -> bool:
    """True if both notes share a pitch class, ignoring octave."""
    return parse_note(note1).pitch_class == parse_note(note2).pitch_class


def generate_note_sequence(start_note: str, end_note: str, step: int = 1) -> List[float]:
    """Frequencies from ``start_note`` to ``end_note`` in ``step`` semitone increments.

    The sequence runs downwards when ``end_note`` is below ``start_note``.
    """
    if step < 1:
        raise ValueError("step must be at least 1")

    middle_c = NOTE_FREQUENCIES["C"]
    start = _round_half_up(12 * np.log2(parse_note(start_note).frequency / middle_c))
    end = _round_half_up(12 * np.log2(parse_note(end_note).frequency / middle_c))
    direction = 1 if start <= end else -1

    return [
        middle_c * 2.0 ** (semitone / 12)
        for semitone in range(start, end + direction, step * direction)
    ]


def get_middle_note(lowest_frequency: float, highest_frequency: float) -> NoteLabel:
    """Note at the plain midpoint of a range, without comfort clamping."""
    return frequency_to_note((lowest_frequency + highest_frequency) / 2)
