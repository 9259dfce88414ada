"""Core components for the Vocal Range application."""

# Import interfaces for easier access
from .interfaces import (
    IAudioProvider,
    IPitchDetector,
)

__all__ = ["IAudioProvider", "IPitchDetector"]
