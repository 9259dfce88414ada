import unittest

from vocal_range.note_types import NoteLabel
from vocal_range.range_analysis import calculate_vocal_range
from vocal_range.root_note import (
    FALLBACK_ROOT,
    calculate_optimal_root_note,
    root_note_for_range,
)


class TestOptimalRootNote(unittest.TestCase):
    def test_bass_range(self):
        self.assertEqual(calculate_optimal_root_note(82.41, 329.63).name, "G#3")

    def test_soprano_range(self):
        self.assertEqual(calculate_optimal_root_note(261.63, 1046.5).name, "E5")

    def test_low_range_snaps_to_highest_note(self):
        # Raising B1 into octave 3 leaves the range, so the top note is used
        self.assertEqual(calculate_optimal_root_note(41.2, 82.41).name, "E2")

    def test_high_range_snaps_to_lowest_note(self):
        self.assertEqual(calculate_optimal_root_note(1500.0, 3000.0).name, "F#6")

    def test_single_frequency_range(self):
        self.assertEqual(calculate_optimal_root_note(440.0, 440.0).name, "A4")

    def test_octave_in_comfortable_band(self):
        for low, high in [(100.0, 400.0), (130.81, 523.25), (200.0, 900.0)]:
            with self.subTest(low=low, high=high):
                root = calculate_optimal_root_note(low, high)
                self.assertGreaterEqual(root.octave, 3)
                self.assertLessEqual(root.octave, 5)
                self.assertGreaterEqual(root.frequency, low)
                self.assertLessEqual(root.frequency, high)

    def test_result_has_no_cents(self):
        self.assertEqual(calculate_optimal_root_note(100.0, 400.0).cents, 0)

    def test_deterministic(self):
        self.assertEqual(
            calculate_optimal_root_note(98.0, 392.0),
            calculate_optimal_root_note(98.0, 392.0),
        )

    def test_non_positive_bounds_fall_back(self):
        self.assertEqual(calculate_optimal_root_note(0.0, 440.0), FALLBACK_ROOT)
        self.assertEqual(calculate_optimal_root_note(-1.0, -1.0), NoteLabel("C", 4))

    def test_reversed_bounds(self):
        with self.assertRaises(ValueError):
            calculate_optimal_root_note(440.0, 220.0)

    def test_from_range_result(self):
        result = calculate_vocal_range([82.41, 164.81, 329.63])
        self.assertEqual(root_note_for_range(result).name, "G#3")


if __name__ == "__main__":
    unittest.main()
