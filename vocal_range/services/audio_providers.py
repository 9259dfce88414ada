"""Audio file sources delivering fixed-size frames to the analysis pipeline."""

from typing import Iterator

import numpy as np
import soundfile as sf

from ..logger import get_logger
from ..core.interfaces import IAudioProvider
from ..note_types import AudioFrame

logger = get_logger(__name__)


def downmix(data: np.ndarray) -> np.ndarray:
    if data.ndim > 1:
        data = data.mean(axis=1)
    return data.astype(np.float32, copy=False)


class WavFileAudioProvider(IAudioProvider):
    """Provides audio data by reading from a sound file."""

    def __init__(
        self, file_path: str, chunk_size: int = 4096, loop: bool = False, gain: float = 1.0
    ):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._file_path = str(file_path)
        self._chunk_size = chunk_size
        self._loop = loop
        self._gain = gain
        self._running = False

        with sf.SoundFile(self._file_path) as f:
            self._sample_rate = f.samplerate
            self._channels = f.channels

    def frames(self) -> Iterator[AudioFrame]:
        """Yield mono frames of ``chunk_size`` samples (the last may be shorter)."""
        self._running = True
        position = 0
        while self._running:
            with sf.SoundFile(self._file_path) as f:
                while self._running:
                    data = f.read(self._chunk_size, dtype="float32", always_2d=True)
                    if len(data) == 0:
                        break

                    samples = downmix(data)
                    # Apply gain if specified
                    if self._gain != 1.0:
                        samples = samples * self._gain

                    yield AudioFrame(
                        samples=samples,
                        sample_rate=self._sample_rate,
                        timestamp=position / self._sample_rate,
                    )
                    position += len(data)

            if not self._loop or position == 0:
                break  # Exit outer loop if not looping or the file is empty

        self._running = False

    def stop(self) -> None:
        self._running = False

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def is_running(self) -> bool:
        """Returns True if the provider is currently streaming data."""
        return self._running
