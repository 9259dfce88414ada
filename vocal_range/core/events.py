"""Event system for Vocal Range components."""

from typing import Dict, List, Callable, Any
from enum import Enum, auto

from ..logger import get_logger

logger = get_logger(__name__)


class RangeTrackingEventType(Enum):
    """Event types for range tracking."""

    PITCH_DETECTED = auto()
    PROGRESS = auto()
    SNAPSHOT = auto()
    STOPPED = auto()


class EventEmitter:
    """Event emitter for Vocal Range components."""

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners: Dict[Any, List[Callable]] = {}

    def on(self, event_type: Any, callback: Callable) -> None:
        """Register a callback for an event type.

        Args:
            event_type: Event type to listen for
            callback: Function to call when the event occurs
        """
        if event_type not in self._listeners:
            self._listeners[event_type] = []

        if callback not in self._listeners[event_type]:
            self._listeners[event_type].append(callback)
            logger.debug(f"Added listener for event {event_type}")

    def off(self, event_type: Any, callback: Callable) -> None:
        """Remove a previously registered callback, if present."""
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)
            logger.debug(f"Removed listener for event {event_type}")

    def emit(self, event_type: Any, *args, **kwargs) -> None:
        """Emit an event.

        Listener errors are logged and do not reach the emitter's caller.

        Args:
            event_type: Event type to emit
            *args: Positional arguments to pass to listeners
            **kwargs: Keyword arguments to pass to listeners
        """
        if event_type not in self._listeners:
            return

        for callback in list(self._listeners[event_type]):
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in event listener for {event_type}: {e}")

    def clear(self) -> None:
        """Remove all event listeners."""
        self._listeners = {}
        logger.debug("Cleared all event listeners")


class RangeTrackingEvents:
    """Listener registry for pitch readings, range progress and snapshots."""

    def __init__(self):
        """Initialize the range tracking events."""
        self._emitter = EventEmitter()

    def on_pitch(self, callback: Callable) -> None:
        """Register ``callback(reading)`` for every detected pitch."""
        self._emitter.on(RangeTrackingEventType.PITCH_DETECTED, callback)

    def on_progress(self, callback: Callable) -> None:
        """Register ``callback(progress)`` for running min/max updates."""
        self._emitter.on(RangeTrackingEventType.PROGRESS, callback)

    def on_snapshot(self, callback: Callable) -> None:
        """Register ``callback(result)`` for periodic range snapshots."""
        self._emitter.on(RangeTrackingEventType.SNAPSHOT, callback)

    def on_stopped(self, callback: Callable) -> None:
        """Register ``callback(result)`` for the end of a session.

        ``result`` is the last snapshot, or None if none was produced.
        """
        self._emitter.on(RangeTrackingEventType.STOPPED, callback)

    def emit_pitch(self, reading) -> None:
        self._emitter.emit(RangeTrackingEventType.PITCH_DETECTED, reading)

    def emit_progress(self, progress) -> None:
        self._emitter.emit(RangeTrackingEventType.PROGRESS, progress)

    def emit_snapshot(self, result) -> None:
        self._emitter.emit(RangeTrackingEventType.SNAPSHOT, result)

    def emit_stopped(self, result) -> None:
        self._emitter.emit(RangeTrackingEventType.STOPPED, result)

    def clear(self) -> None:
        """Remove all event listeners."""
        self._emitter.clear()
