import unittest

import numpy as np
import pytest

from vocal_range.detection.pitch_detector import PitchDetector, detect_pitch, rms
from vocal_range.note_types import AudioFrame, PitchEstimate

SAMPLE_RATE = 44100
FRAME_SIZE = 4096


def sine(frequency, sample_rate=SAMPLE_RATE, size=FRAME_SIZE, amplitude=1.0):
    t = np.arange(size) / sample_rate
    return (amplitude * np.sin(2 * np.pi * frequency * t)).astype(np.float32)


class TestDetectPitch(unittest.TestCase):
    def test_silence_returns_none(self):
        self.assertIsNone(detect_pitch(np.zeros(FRAME_SIZE), SAMPLE_RATE))

    def test_near_silent_tone_returns_none(self):
        quiet = sine(220.0, amplitude=1e-4)
        self.assertLess(rms(quiet), 0.01)
        self.assertIsNone(detect_pitch(quiet, SAMPLE_RATE))

    def test_sine_220(self):
        frequency = detect_pitch(sine(220.0), SAMPLE_RATE)
        self.assertIsNotNone(frequency)
        self.assertAlmostEqual(frequency, 220.0, delta=2.0)

    def test_sine_330(self):
        frequency = detect_pitch(sine(330.0), SAMPLE_RATE)
        self.assertAlmostEqual(frequency, 330.0, delta=3.0)

    def test_noise_has_no_clear_periodicity(self):
        rng = np.random.default_rng(0)
        noise = rng.normal(0.0, 0.02, FRAME_SIZE)
        self.assertGreater(rms(noise), 0.01)
        self.assertIsNone(detect_pitch(noise, SAMPLE_RATE))

    def test_frame_too_short_for_voice_band(self):
        self.assertIsNone(detect_pitch(sine(440.0, size=30), SAMPLE_RATE))

    def test_empty_frame(self):
        self.assertIsNone(detect_pitch(np.zeros(0), SAMPLE_RATE))

    def test_peak_above_voice_band_rejected(self):
        # At 8 kHz the shortest lag (7) already corresponds to 1142.9 Hz
        sample_rate = 8000
        tone = sine(sample_rate / 7, sample_rate=sample_rate, size=2048)
        self.assertIsNone(detect_pitch(tone, sample_rate))

    def test_no_octave_correction(self):
        # Above the band the strongest in-band lag is two periods long, so
        # the sub-harmonic is reported. Known limitation of the detector.
        frequency = detect_pitch(sine(1500.0), SAMPLE_RATE)
        self.assertAlmostEqual(frequency, 750.0, delta=10.0)

    def test_uses_first_channel(self):
        stereo = np.column_stack([sine(220.0), np.zeros(FRAME_SIZE)])
        self.assertAlmostEqual(detect_pitch(stereo, SAMPLE_RATE), 220.0, delta=2.0)


class TestPitchDetector(unittest.TestCase):
    def test_process_audio_returns_estimate(self):
        detector = PitchDetector(sample_rate=SAMPLE_RATE)
        estimate = detector.process_audio(sine(220.0), timestamp=1.5)
        self.assertIsInstance(estimate, PitchEstimate)
        self.assertEqual(estimate.timestamp, 1.5)
        self.assertAlmostEqual(estimate.frequency, 220.0, delta=2.0)

    def test_process_audio_silence(self):
        detector = PitchDetector()
        estimate = detector.process_audio(np.zeros(FRAME_SIZE), timestamp=0.0)
        self.assertIsNone(estimate.frequency)

    def test_process_frame_uses_frame_sample_rate(self):
        detector = PitchDetector(sample_rate=SAMPLE_RATE)
        frame = AudioFrame(sine(220.0, sample_rate=22050, size=2048), 22050, 0.25)
        estimate = detector.process_frame(frame)
        self.assertEqual(detector.sample_rate, 22050)
        self.assertEqual(estimate.timestamp, 0.25)
        self.assertAlmostEqual(estimate.frequency, 220.0, delta=3.0)

    def test_custom_band(self):
        detector = PitchDetector(min_voice_freq=300.0, max_voice_freq=1100.0)
        self.assertIsNone(detector.process_audio(sine(220.0), 0.0).frequency)

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            PitchDetector(min_voice_freq=500.0, max_voice_freq=400.0)
        with pytest.raises(ValueError):
            PitchDetector(min_voice_freq=0.0)
        with pytest.raises(ValueError):
            PitchDetector(silence_threshold=-1.0)
        with pytest.raises(ValueError):
            PitchDetector().set_sample_rate(0)


if __name__ == "__main__":
    unittest.main()
