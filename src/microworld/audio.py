"""
Tone bank for layer sound cues.

Four oscillators (sine, triangle, square, sawtooth) run continuously and
are mixed into one mono stream. Layers only move amplitude and frequency:
amplitude follows linear ramps scheduled on the bank's sample clock, so
the same bank can feed a live sounddevice stream or be rendered offline
block by block.

The bank stays silent until start() is called, which the explorer defers
to the first pointer press.
"""

import math
import sys
import threading

import numpy as np
from scipy import signal

try:
    import sounddevice as sd
except (ImportError, OSError):  # PortAudio library missing
    sd = None


WAVEFORMS = {
    "sine": np.sin,
    "triangle": lambda phase: signal.sawtooth(phase, width=0.5),
    "square": signal.square,
    "sawtooth": signal.sawtooth,
}

# name, waveform, starting frequency
CHANNELS = (
    ("hum", "sine", 60.0),
    ("pop", "triangle", 440.0),
    ("pulse", "square", 200.0),
    ("bloom", "sawtooth", 300.0),
)


class Oscillator:
    """
    A phase-continuous oscillator with a piecewise-linear amplitude envelope.

    The envelope is a list of (time, value) breakpoints in seconds on the
    owning bank's clock; amplitude between breakpoints is interpolated and
    holds the last value afterwards.
    """

    def __init__(self, waveform: str, frequency: float):
        if waveform not in WAVEFORMS:
            raise ValueError(f"Unknown waveform: {waveform}")
        self.waveform = waveform
        self.frequency = float(frequency)
        self._phase = 0.0
        self._times = [0.0]
        self._values = [0.0]

    def set_frequency(self, frequency: float):
        self.frequency = float(frequency)

    def amplitude_at(self, t: float) -> float:
        return float(np.interp(t, self._times, self._values))

    def ramp(self, target: float, now: float, duration: float):
        """
        Cancel pending breakpoints and ramp from the current value.

        Args:
            target: Amplitude to reach.
            now: Current clock time in seconds.
            duration: Ramp length in seconds (0 jumps immediately).
        """
        current = self.amplitude_at(now)
        past = [i for i, t in enumerate(self._times) if t < now]
        self._times = [self._times[i] for i in past] + [now]
        self._values = [self._values[i] for i in past] + [current]
        if duration > 0:
            self._times.append(now + duration)
            self._values.append(float(target))
        else:
            self._values[-1] = float(target)

    def then_ramp(self, target: float, duration: float):
        """Queue a ramp that starts where the last scheduled one ends."""
        self._times.append(self._times[-1] + max(duration, 1e-6))
        self._values.append(float(target))

    def render(self, n: int, start_time: float, sample_rate: int) -> np.ndarray:
        """Render n samples starting at start_time."""
        t = start_time + np.arange(n) / sample_rate
        amp = np.interp(t, self._times, self._values)

        step = 2 * math.pi * self.frequency / sample_rate
        phase = self._phase + step * np.arange(n)
        self._phase = (self._phase + step * n) % (2 * math.pi)
        self._forget(start_time + n / sample_rate)

        if not np.any(amp):
            return np.zeros(n, dtype=np.float32)
        return (WAVEFORMS[self.waveform](phase) * amp).astype(np.float32)

    def _forget(self, t: float):
        """Collapse breakpoints before t into a single point at t."""
        value = self.amplitude_at(t)
        later = [(bt, bv) for bt, bv in zip(self._times, self._values) if bt > t]
        self._times = [t] + [bt for bt, _ in later]
        self._values = [value] + [bv for _, bv in later]


class AudioBank:
    """
    Four named tone channels mixed to mono.

    Scheduling calls come from the frame loop while render() runs on the
    audio thread, so both sides go through one lock.
    """

    def __init__(
        self,
        sample_rate: int = 44100,
        blocksize: int = 512,
        master_gain: float = 0.8,
    ):
        self.sample_rate = sample_rate
        self.blocksize = blocksize
        self.master_gain = master_gain
        self.oscillators = {
            name: Oscillator(waveform, freq) for name, waveform, freq in CHANNELS
        }
        self.ready = False
        self.failed = False
        self._samples = 0
        self._lock = threading.Lock()
        self._stream = None

    @property
    def now(self) -> float:
        """Sample clock in seconds."""
        return self._samples / self.sample_rate

    def start(self, realtime: bool = True) -> bool:
        """
        Arm the bank, opening an output stream when realtime.

        Returns:
            True if the bank is ready to make sound.
        """
        if self.ready:
            return True
        if self.failed:
            return False
        if not realtime:
            self.ready = True
            return True

        if sd is None:
            print("Warning: sounddevice is unavailable, running silent", file=sys.stderr)
            self.failed = True
            return False

        try:
            stream = sd.OutputStream(
                samplerate=self.sample_rate,
                channels=1,
                dtype="float32",
                blocksize=self.blocksize,
                callback=self._callback,
            )
            stream.start()
        except sd.PortAudioError as exc:
            print(f"Warning: could not open audio output ({exc}), running silent", file=sys.stderr)
            self.failed = True
            return False

        self._stream = stream
        self.ready = True
        return True

    def stop(self):
        if self._stream is not None:
            self._stream.stop()
            self._stream.close()
            self._stream = None
        self.ready = False

    def set_frequency(self, name: str, frequency: float):
        if not self.ready:
            return
        with self._lock:
            self.oscillators[name].set_frequency(frequency)

    def ramp(self, name: str, amplitude: float, duration: float):
        """Ramp a channel's amplitude from wherever it is now."""
        if not self.ready:
            return
        with self._lock:
            self.oscillators[name].ramp(amplitude, self.now, duration)

    def blip(
        self,
        name: str,
        freq: float = 300.0,
        amp: float = 0.2,
        attack: float = 0.03,
        release: float = 0.25,
    ):
        """One-shot tone: ramp up over attack, then down to silence over release."""
        if not self.ready:
            return
        with self._lock:
            osc = self.oscillators[name]
            osc.set_frequency(freq)
            osc.ramp(amp, self.now, attack)
            osc.then_ramp(0.0, release)

    def render(self, frames: int) -> np.ndarray:
        """Mix the next block of samples and advance the clock."""
        with self._lock:
            start = self.now
            mix = np.zeros(frames, dtype=np.float32)
            for osc in self.oscillators.values():
                mix += osc.render(frames, start, self.sample_rate)
            self._samples += frames
        return np.clip(mix * self.master_gain, -1.0, 1.0).astype(np.float32)

    def _callback(self, outdata, frames, time_info, status):
        outdata[:, 0] = self.render(frames)
