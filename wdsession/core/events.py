"""
Lifecycle Event Handling

Small named-event dispatcher used by sessions and transports.
"""

import logging
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


class EventEmitter:
    """Dispatches named events to persistent and one-shot listeners."""

    def __init__(self):
        # event name -> [(listener, once)]
        self._listeners: Dict[str, List[Tuple[Callable, bool]]] = {}

    def on(self, event: str, listener: Callable) -> 'EventEmitter':
        """Add a listener that fires on every emission of ``event``."""
        self._listeners.setdefault(event, []).append((listener, False))
        return self

    def once(self, event: str, listener: Callable) -> 'EventEmitter':
        """Add a listener that fires at most once, then is retired."""
        self._listeners.setdefault(event, []).append((listener, True))
        return self

    def off(self, event: str, listener: Callable) -> 'EventEmitter':
        """Remove every registration of ``listener`` for ``event``."""
        remaining = [entry for entry in self._listeners.get(event, []) if entry[0] is not listener]
        if remaining:
            self._listeners[event] = remaining
        else:
            self._listeners.pop(event, None)
        return self

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def emit(self, event: str, *args: Any) -> bool:
        """
        Call the listeners registered for ``event`` in registration order.

        Args:
            event: Event name
            *args: Positional arguments handed to every listener

        Returns:
            True if at least one listener was called
        """
        entries = self._listeners.get(event)
        if not entries:
            return False

        # One-shot listeners are retired before any listener runs
        persistent = [entry for entry in entries if not entry[1]]
        if persistent:
            self._listeners[event] = persistent
        else:
            self._listeners.pop(event, None)

        for listener, _ in entries:
            try:
                listener(*args)
            except Exception as e:
                logger.error(f"Error in '{event}' listener: {e}")

        return True
