"""
Live microphone level.

The input stream callback runs on the audio thread and only stores the
RMS of the newest block; the frame tick reads that value without ever
waiting on the device.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)


class MicrophoneLevel:
    """
    Non-blocking "latest level" source backed by a sounddevice input stream.

    Args:
        sample_rate: Capture sample rate.
        block_size: Samples per callback block.
        device: Input device index or name (None for the system default).
        gain: Multiplier applied to the block RMS before clamping to [0, 1].
    """

    def __init__(
        self,
        sample_rate: int = 44100,
        block_size: int = 1024,
        device: int | str | None = None,
        gain: float = 1.0,
    ):
        self.sample_rate = sample_rate
        self.block_size = block_size
        self.device = device
        self.gain = gain
        self._level = 0.0
        self._stream = None

    @property
    def running(self) -> bool:
        return self._stream is not None

    @staticmethod
    def block_level(block: np.ndarray, gain: float = 1.0) -> float:
        """RMS of a (frames, channels) or (frames,) block, clamped to [0, 1]."""
        if block.size == 0:
            return 0.0
        if block.ndim > 1:
            block = block.mean(axis=1)
        rms = float(np.sqrt(np.mean(np.square(block, dtype=np.float64))))
        if not np.isfinite(rms):
            return 0.0
        return min(1.0, rms * gain)

    def _callback(self, indata, frames, time_, status):
        if status:
            logger.warning("Audio input status: %s", status)
        self._level = self.block_level(indata, self.gain)

    def start(self):
        """Open the default (or configured) input device."""
        if self._stream is not None:
            return
        # PortAudio is only needed once capture actually starts
        import sounddevice as sd

        self._stream = sd.InputStream(
            device=self.device,
            channels=1,
            samplerate=self.sample_rate,
            blocksize=self.block_size,
            callback=self._callback,
        )
        self._stream.start()
        logger.info("Microphone started (%d Hz, block %d)", self.sample_rate, self.block_size)

    def stop(self):
        if self._stream is None:
            return
        self._stream.stop()
        self._stream.close()
        self._stream = None
        logger.info("Microphone stopped")

    def read_level(self) -> float:
        """Most recent level; repeats the last value if no new block arrived."""
        return self._level
