import logging
from typing import Any, Callable, List, Tuple

from storefront.events.events import AuthEvent

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventBus:
    """
    Pub/sub between the auth session and the stores that depend on it.

    Listeners are kept as a flat list of (event, callback) pairs and
    filtered by event on emit. Event names are coerced to AuthEvent so a
    misspelled name fails loudly instead of never firing.
    """

    def __init__(self):
        self._listeners: List[Tuple[AuthEvent, Listener]] = []

    def on(self, event, callback: Listener) -> None:
        self._listeners.append((AuthEvent(event), callback))

    def off(self, event, callback: Listener) -> None:
        event = AuthEvent(event)
        self._listeners = [
            (ev, cb) for ev, cb in self._listeners
            if not (ev == event and cb == callback)
        ]

    def emit(self, event, data: Any = None) -> None:
        event = AuthEvent(event)
        # copy: a listener may unsubscribe while we iterate
        for ev, callback in list(self._listeners):
            if ev == event:
                callback(data)

    def listener_count(self, event) -> int:
        event = AuthEvent(event)
        return sum(1 for ev, _ in self._listeners if ev == event)
