import unittest

from vocal_range.note_types import NoteLabel
from vocal_range.note_utils import (
    FormatError,
    NOTE_NAMES,
    calculate_interval,
    cents_difference,
    frequency_to_note,
    generate_note_sequence,
    get_middle_note,
    is_pitch_in_tolerance,
    is_same_note_class,
    next_note,
    note_to_frequency,
    parse_note,
)


class TestFrequencyToNote(unittest.TestCase):
    def test_a4(self):
        # A4 should be 440 Hz exactly
        self.assertEqual(frequency_to_note(440.0), NoteLabel("A", 4, 0))

    def test_middle_c(self):
        self.assertEqual(frequency_to_note(261.63).name, "C4")

    def test_octave_transitions(self):
        # Octave numbers change between B and C
        self.assertEqual(frequency_to_note(246.94).name, "B3")
        self.assertEqual(frequency_to_note(261.63).name, "C4")

    def test_other_notes(self):
        self.assertEqual(frequency_to_note(277.18).name, "C#4")
        self.assertEqual(frequency_to_note(349.23).name, "F4")
        self.assertEqual(frequency_to_note(523.25).name, "C5")
        self.assertEqual(frequency_to_note(880.0).name, "A5")
        self.assertEqual(frequency_to_note(82.41).name, "E2")

    def test_cents_offset(self):
        sharp = frequency_to_note(445.0)
        self.assertEqual((sharp.name, sharp.cents), ("A4", 20))
        flat = frequency_to_note(435.0)
        self.assertEqual((flat.name, flat.cents), ("A4", -20))

    def test_cents_stay_within_half_a_semitone(self):
        for frequency in range(80, 1100, 7):
            self.assertLessEqual(abs(frequency_to_note(frequency).cents), 50)

    def test_non_positive_frequency_falls_back(self):
        # The fallback is documented as meaningless, only that it does not fail
        for frequency in (0.0, -10.0, float("nan"), float("inf")):
            self.assertEqual(frequency_to_note(frequency), NoteLabel("A", 4, 0))


class TestNoteToFrequency(unittest.TestCase):
    def test_reference_octave(self):
        self.assertAlmostEqual(note_to_frequency("A", 4), 440.0)
        self.assertAlmostEqual(note_to_frequency("C", 4), 261.63)

    def test_octave_scaling(self):
        self.assertAlmostEqual(note_to_frequency("A", 5), 880.0)
        self.assertAlmostEqual(note_to_frequency("A", 2), 110.0)
        self.assertAlmostEqual(note_to_frequency("C", 5), 523.26)

    def test_flat_spelling(self):
        self.assertAlmostEqual(note_to_frequency("Bb", 4), note_to_frequency("A#", 4))

    def test_invalid_pitch_class(self):
        with self.assertRaises(FormatError):
            note_to_frequency("H", 4)
        with self.assertRaises(FormatError):
            note_to_frequency("", 4)

    def test_round_trip_all_notes(self):
        for octave in range(0, 9):
            for pitch_class in NOTE_NAMES:
                with self.subTest(note=f"{pitch_class}{octave}"):
                    note = frequency_to_note(note_to_frequency(pitch_class, octave))
                    self.assertEqual(note.pitch_class, pitch_class)
                    self.assertEqual(note.octave, octave)
                    self.assertLessEqual(abs(note.cents), 1)


class TestParseNote(unittest.TestCase):
    def test_valid_notes(self):
        self.assertEqual(parse_note("C#4"), NoteLabel("C#", 4))
        self.assertEqual(parse_note("a3"), NoteLabel("A", 3))
        self.assertEqual(parse_note(" G2 "), NoteLabel("G", 2))

    def test_flats_normalized_to_sharps(self):
        self.assertEqual(parse_note("Bb3"), NoteLabel("A#", 3))
        self.assertEqual(parse_note("Db5"), NoteLabel("C#", 5))

    def test_invalid_notes(self):
        for text in ("H2", "C", "C#", "", "4C", "C#-1", "Cx4"):
            with self.subTest(text=text):
                with self.assertRaises(FormatError):
                    parse_note(text)

    def test_format_error_is_value_error(self):
        self.assertTrue(issubclass(FormatError, ValueError))

    def test_label_frequency(self):
        self.assertAlmostEqual(parse_note("A4").frequency, 440.0)


class TestNoteHelpers(unittest.TestCase):
    def test_cents_difference(self):
        self.assertEqual(cents_difference(440.0, 880.0), 1200)
        self.assertEqual(cents_difference(880.0, 440.0), -1200)
        self.assertEqual(cents_difference(0.0, 440.0), 0)

    def test_pitch_tolerance(self):
        self.assertTrue(is_pitch_in_tolerance(435.0, "A", 4))
        self.assertTrue(is_pitch_in_tolerance(450.0, "A", 4))
        self.assertFalse(is_pitch_in_tolerance(420.0, "A", 4))
        self.assertFalse(is_pitch_in_tolerance(460.0, "A", 4))
        self.assertFalse(is_pitch_in_tolerance(0.0, "A", 4))

    def test_intervals(self):
        self.assertEqual(calculate_interval("C4", "D4"), 2)
        self.assertEqual(calculate_interval("C4", "E4"), 4)
        self.assertEqual(calculate_interval("C4", "G4"), 7)
        self.assertEqual(calculate_interval("C4", "C5"), 12)
        self.assertEqual(calculate_interval("C5", "C4"), -12)

    def test_next_note(self):
        self.assertEqual(next_note("A4", 3), "C5")
        self.assertEqual(next_note("C4", -1), "B3")

    def test_same_note_class(self):
        self.assertTrue(is_same_note_class("C4", "C5"))
        self.assertTrue(is_same_note_class("Gb2", "F#4"))
        self.assertFalse(is_same_note_class("C4", "C#4"))

    def test_note_sequence_whole_tones(self):
        sequence = generate_note_sequence("C4", "C5", step=2)
        self.assertEqual(len(sequence), 7)
        self.assertAlmostEqual(sequence[0], 261.63, places=2)
        self.assertAlmostEqual(sequence[-1], 523.26, places=2)
        names = [frequency_to_note(f).name for f in sequence]
        self.assertEqual(names, ["C4", "D4", "E4", "F#4", "G#4", "A#4", "C5"])

    def test_note_sequence_descending(self):
        sequence = generate_note_sequence("C5", "C4", step=12)
        self.assertEqual([frequency_to_note(f).name for f in sequence], ["C5", "C4"])

    def test_note_sequence_invalid_step(self):
        with self.assertRaises(ValueError):
            generate_note_sequence("C4", "C5", step=0)

    def test_middle_note(self):
        self.assertEqual(get_middle_note(220.0, 440.0).name, "E4")


if __name__ == "__main__":
    unittest.main()
