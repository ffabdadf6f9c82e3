import os
import tempfile
import unittest
import wave

import numpy as np

from fakes import FailingTone, FakeTone

from cosmiczoom.audio import AudioDriver, RecordingOscillator, SineOscillator, render_block, synthesize_drone, write_wav
from cosmiczoom.errors import AudioError


class TestAudioDriver(unittest.TestCase):
    def test_starts_once(self) -> None:
        tone = FakeTone()
        driver = AudioDriver(tone)
        self.assertTrue(driver.on_first_interaction())
        for _ in range(5):
            self.assertFalse(driver.on_first_interaction())
        self.assertTrue(driver.started)
        self.assertEqual(len(tone.named("start")), 1)
        self.assertEqual(tone.named("freq"), [("freq", 100.0)])
        self.assertEqual(tone.named("amp"), [("amp", 0.2)])
        self.assertEqual(driver.frequency, 100.0)

    def test_updates_ignored_before_start(self) -> None:
        tone = FakeTone()
        driver = AudioDriver(tone)
        driver.update_frequency(440.0)
        self.assertEqual(tone.events, [])
        self.assertIsNone(driver.frequency)
        self.assertFalse(driver.started)

    def test_updates_retune_after_start(self) -> None:
        tone = FakeTone()
        driver = AudioDriver(tone)
        driver.on_first_interaction()
        driver.update_frequency(250.0)
        self.assertEqual(tone.named("freq")[-1], ("freq", 250.0))
        self.assertEqual(driver.frequency, 250.0)

    def test_failed_start_keeps_driver_idle(self) -> None:
        driver = AudioDriver(FailingTone())
        with self.assertRaises(AudioError):
            driver.on_first_interaction()
        self.assertFalse(driver.started)

    def test_shutdown_only_when_started(self) -> None:
        tone = FakeTone()
        driver = AudioDriver(tone)
        driver.shutdown()
        self.assertEqual(tone.named("stop"), [])
        driver.on_first_interaction()
        driver.shutdown()
        self.assertEqual(len(tone.named("stop")), 1)


class TestSynthesis(unittest.TestCase):
    def test_render_block_phase_continues(self) -> None:
        whole, _ = render_block(0.0, 220, 220, 1, 1, 200, 8000)
        a, phase = render_block(0.0, 220, 220, 1, 1, 100, 8000)
        b, _ = render_block(phase, 220, 220, 1, 1, 100, 8000)
        np.testing.assert_allclose(np.concatenate([a, b]), whole, atol=1e-5)

    def test_sine_callback_fills_buffer(self) -> None:
        osc = SineOscillator(sample_rate=8000, block_size=64)
        osc.set_amplitude(0.2)
        osc.set_frequency(300.0)
        out = np.zeros((64, 1), dtype=np.float32)
        osc._callback(out, 64, None, None)
        self.assertTrue(np.all(np.abs(out) <= 0.2 + 1e-6))
        self.assertGreater(np.abs(out).max(), 0.0)
        self.assertFalse(osc.running)

    def test_drone_length_and_level(self) -> None:
        freqs = list(np.linspace(100, 800, 90))
        samples = synthesize_drone(freqs, fps=30, sample_rate=8000, amplitude=0.2)
        self.assertEqual(len(samples), 3 * 8000)
        self.assertLessEqual(float(np.abs(samples).max()), 0.2 + 1e-6)

    def test_empty_drone(self) -> None:
        self.assertEqual(len(synthesize_drone([], fps=30)), 0)

    def test_write_wav(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "drone.wav")
            write_wav(path, synthesize_drone([100.0] * 10, fps=10, sample_rate=8000), 8000)
            with wave.open(path, "rb") as wf:
                self.assertEqual(wf.getnchannels(), 1)
                self.assertEqual(wf.getsampwidth(), 2)
                self.assertEqual(wf.getframerate(), 8000)
                self.assertEqual(wf.getnframes(), 8000)

    def test_recording_oscillator(self) -> None:
        osc = RecordingOscillator()
        osc.set_frequency(50.0)
        osc.start()
        osc.set_frequency(60.0)
        self.assertEqual(osc.frequencies, [60.0])


if __name__ == "__main__":
    unittest.main()
