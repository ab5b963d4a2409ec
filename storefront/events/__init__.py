from .events import AuthEvent
from .dispatcher import EventBus

__all__ = [
    "AuthEvent",
    "EventBus",
]
