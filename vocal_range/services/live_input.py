"""Live microphone input using sounddevice."""

from typing import Iterator, Optional

import sounddevice as sd

from ..logger import get_logger
from ..core.interfaces import IAudioProvider
from ..note_types import AudioFrame
from .audio_providers import downmix

logger = get_logger(__name__)


class LiveAudioProvider(IAudioProvider):
    """Provides live audio from an input device using sounddevice."""

    def __init__(
        self,
        device_id: Optional[int] = None,
        sample_rate: int = 44100,
        channels: int = 1,
        chunk_size: int = 4096,
    ):
        if sample_rate <= 0 or chunk_size <= 0:
            raise ValueError("sample_rate and chunk_size must be positive")
        self._device_id = device_id
        self._sample_rate = sample_rate
        self._channels = channels
        self._chunk_size = chunk_size
        self._running = False

    def frames(self) -> Iterator[AudioFrame]:
        """Read blocking chunks from the input device until :meth:`stop`."""
        self._running = True
        position = 0
        with sd.InputStream(
            device=self._device_id,
            channels=self._channels,
            samplerate=self._sample_rate,
            blocksize=self._chunk_size,
            dtype="float32",
        ) as stream:
            logger.info(
                f"Audio input started: device={self._device_id}, "
                f"sample_rate={self._sample_rate}, chunk_size={self._chunk_size}"
            )
            while self._running:
                data, overflowed = stream.read(self._chunk_size)
                if overflowed:
                    logger.warning("Audio input overflow, samples were dropped")
                yield AudioFrame(
                    samples=downmix(data),
                    sample_rate=self._sample_rate,
                    timestamp=position / self._sample_rate,
                )
                position += len(data)
        logger.info("Audio input stopped")

    def stop(self) -> None:
        self._running = False

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def is_running(self) -> bool:
        return self._running
