"""Audio sources and the range detection session.

The live microphone provider lives in :mod:`vocal_range.services.live_input`
and is imported on demand, since it needs the PortAudio library.
"""

from .audio_providers import WavFileAudioProvider
from .range_session import VocalRangeSession

__all__ = ["WavFileAudioProvider", "VocalRangeSession"]
