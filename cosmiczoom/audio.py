from __future__ import annotations

import wave
from typing import List, Optional, Protocol, Sequence, Tuple

import numpy as np

from cosmiczoom.errors import AudioError
from cosmiczoom.util.logging_setup import get_logger

BASE_FREQ = 100.0
AMPLITUDE = 0.2
SAMPLE_RATE = 44100
BLOCK_SIZE = 512

class ToneGenerator(Protocol):
    def start(self) -> None: ...
    def stop(self) -> None: ...
    def set_frequency(self, hz: float) -> None: ...
    def set_amplitude(self, level: float) -> None: ...

def render_block(
    phase: float, f0: float, f1: float, a0: float, a1: float, frames: int, sample_rate: int
) -> Tuple[np.ndarray, float]:
    """
    Render ``frames`` samples of a sine gliding linearly from f0 to f1 and a0 to a1.

    Returns the float32 samples and the phase to continue from, so consecutive
    blocks join without clicks.
    """
    if frames <= 0:
        return np.zeros(0, dtype=np.float32), phase
    freqs = np.linspace(f0, f1, frames, endpoint=False)
    amps = np.linspace(a0, a1, frames, endpoint=False)
    phases = phase + np.cumsum(2 * np.pi * freqs / sample_rate)
    samples = (np.sin(phases) * amps).astype(np.float32)
    return samples, float(phases[-1] % (2 * np.pi))

class SineOscillator:
    """Single sine voice on a sounddevice output stream."""

    def __init__(self, sample_rate: int = SAMPLE_RATE, block_size: int = BLOCK_SIZE) -> None:
        self.sample_rate = sample_rate
        self.block_size = block_size
        self._stream = None
        self._phase = 0.0
        self._freq = BASE_FREQ
        self._amp = 0.0
        # written by the frame thread, read by the audio callback
        self.target_freq = BASE_FREQ
        self.target_amp = 0.0

    @property
    def running(self) -> bool:
        return self._stream is not None

    def set_frequency(self, hz: float) -> None:
        self.target_freq = float(hz)

    def set_amplitude(self, level: float) -> None:
        self.target_amp = float(level)

    def start(self) -> None:
        if self._stream is not None:
            return
        logger = get_logger()
        try:
            import sounddevice as sd  # type: ignore
        except Exception as e:
            raise AudioError(f"sounddevice not available: {e}") from e

        try:
            stream = sd.OutputStream(
                samplerate=self.sample_rate, channels=1, dtype="float32",
                blocksize=self.block_size, callback=self._callback)
            stream.start()
        except sd.PortAudioError as e:
            logger.error("Audio output failed to start: %s", e)
            raise AudioError(f"Could not open audio output: {e}") from e
        self._stream = stream
        logger.info("Audio stream started rate=%s block=%s", self.sample_rate, self.block_size)

    def stop(self) -> None:
        if self._stream is None:
            return
        stream, self._stream = self._stream, None
        stream.stop()
        stream.close()
        get_logger().info("Audio stream closed")

    def _callback(self, outdata, frames, time_info, status) -> None:
        if status:
            get_logger().warning("Audio stream status: %s", status)
        f1, a1 = self.target_freq, self.target_amp
        samples, self._phase = render_block(self._phase, self._freq, f1, self._amp, a1, frames, self.sample_rate)
        self._freq, self._amp = f1, a1
        outdata[:, 0] = samples

class RecordingOscillator:
    """Tone generator for headless runs; remembers one frequency per retune."""

    def __init__(self) -> None:
        self.started = False
        self.amplitude = 0.0
        self.frequencies: List[float] = []

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.started = False

    def set_frequency(self, hz: float) -> None:
        if self.started:
            self.frequencies.append(float(hz))

    def set_amplitude(self, level: float) -> None:
        self.amplitude = float(level)

class AudioDriver:
    """
    Gates the drone behind the first user gesture.

    ``on_first_interaction`` must only be called from an input callback;
    browsers and some audio hosts refuse playback that did not follow one.
    """

    def __init__(self, tone: ToneGenerator, base_frequency: float = BASE_FREQ, amplitude: float = AMPLITUDE) -> None:
        self.tone = tone
        self.base_frequency = base_frequency
        self.amplitude = amplitude
        self._started = False
        self._frequency: Optional[float] = None

    @property
    def started(self) -> bool:
        return self._started

    @property
    def frequency(self) -> Optional[float]:
        return self._frequency

    def on_first_interaction(self) -> bool:
        """Start the drone; returns True only on the call that actually started it."""
        if self._started:
            return False
        self.tone.set_amplitude(self.amplitude)
        self.tone.start()
        self.tone.set_frequency(self.base_frequency)
        self._started = True
        self._frequency = self.base_frequency
        get_logger().info("Drone started at %.1f Hz", self.base_frequency)
        return True

    def update_frequency(self, freq: float) -> None:
        if not self._started:
            return
        self.tone.set_frequency(freq)
        self._frequency = freq

    def shutdown(self) -> None:
        if self._started:
            self.tone.stop()

def synthesize_drone(
    frequencies: Sequence[float], fps: int, sample_rate: int = SAMPLE_RATE, amplitude: float = AMPLITUDE
) -> np.ndarray:
    """Phase-continuous sine following one frequency per video frame."""
    if not frequencies:
        return np.zeros(0, dtype=np.float32)
    chunks = []
    phase = 0.0
    prev = float(frequencies[0])
    for i, f in enumerate(frequencies):
        # cumulative rounding keeps total length at len(frequencies) / fps seconds
        n = int(round((i + 1) * sample_rate / fps)) - int(round(i * sample_rate / fps))
        block, phase = render_block(phase, prev, float(f), amplitude, amplitude, n, sample_rate)
        chunks.append(block)
        prev = float(f)
    return np.concatenate(chunks)

def write_wav(path: str, samples: np.ndarray, sample_rate: int = SAMPLE_RATE) -> None:
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype("<i2")
    with wave.open(path, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm.tobytes())
