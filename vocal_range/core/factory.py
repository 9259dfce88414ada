"""Factory for creating Vocal Range components."""

from typing import Dict, Optional, Type

from ..logger import get_logger
from ..detection.pitch_detector import PitchDetector
from ..detection.range_tracker import RangeTracker
from ..services.audio_providers import WavFileAudioProvider
from ..services.range_session import VocalRangeSession
from .config import ConfigManager
from .interfaces import IAudioProvider, IPitchDetector

logger = get_logger(__name__)


class ComponentFactory:
    """Factory for creating Vocal Range components."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """Initialize the component factory.

        Args:
            config_manager: Configuration manager, or None to create a default one
        """
        self.config_manager = config_manager or ConfigManager()

        # Register default component implementations
        self.pitch_detector_classes: Dict[str, Type[IPitchDetector]] = {
            "default": PitchDetector,
        }

    def create_pitch_detector(
        self, implementation: str = "default", **kwargs
    ) -> IPitchDetector:
        """Create a pitch detector.

        Args:
            implementation: Name of the implementation to use
            **kwargs: Additional parameters to pass to the constructor

        Returns:
            Pitch detector instance

        Raises:
            ValueError: If the implementation is not registered
        """
        if implementation not in self.pitch_detector_classes:
            raise ValueError(f"Unknown pitch detector implementation: {implementation}")

        # Get default configuration, overridden with provided parameters
        config = self.config_manager.get_config("pitch_detector")
        config.update(kwargs)

        cls = self.pitch_detector_classes[implementation]
        instance = cls(**config)

        logger.info(f"Created pitch detector: {implementation}")
        return instance

    def create_range_tracker(self, **kwargs) -> RangeTracker:
        """Create a range tracker from the ``range_tracker`` configuration."""
        config = self.config_manager.get_config("range_tracker")
        config.update(kwargs)
        return RangeTracker(**config)

    def create_audio_provider(
        self, implementation: str = "file", **kwargs
    ) -> IAudioProvider:
        """Create an audio provider.

        Args:
            implementation: ``"file"`` (needs ``file_path``) or ``"live"``
            **kwargs: Additional parameters to pass to the constructor

        Returns:
            Audio provider instance

        Raises:
            ValueError: If the implementation is unknown
        """
        config = self.config_manager.get_config("audio_input")

        if implementation == "file":
            provider = WavFileAudioProvider(
                chunk_size=kwargs.pop("chunk_size", config["chunk_size"]), **kwargs
            )
        elif implementation == "live":
            # Needs PortAudio, so only imported when a microphone is wanted
            from ..services.live_input import LiveAudioProvider

            config.update(kwargs)
            provider = LiveAudioProvider(**config)
        else:
            raise ValueError(f"Unknown audio provider implementation: {implementation}")

        logger.info(f"Created audio provider: {implementation}")
        return provider

    def create_session(
        self, audio_provider: IAudioProvider, **kwargs
    ) -> VocalRangeSession:
        """Create a range session around ``audio_provider``.

        Args:
            audio_provider: Source of audio frames
            **kwargs: Session parameters overriding the ``session`` configuration

        Returns:
            Session instance
        """
        config = self.config_manager.get_config("session")
        config.update(kwargs)

        if "detector" not in config:
            config["detector"] = self.create_pitch_detector(
                sample_rate=audio_provider.sample_rate
            )
        if "tracker" not in config:
            config["tracker"] = self.create_range_tracker()

        session = VocalRangeSession(audio_provider, **config)
        logger.info("Created vocal range session")
        return session
