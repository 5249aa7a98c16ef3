"""Core framework components for NEONFLAP."""

from .state import RunState, StateMachine
from .events import EventBus, Event, EventType, EventSink, attach_sink
from .clock import FrameClock

__all__ = [
    "RunState",
    "StateMachine",
    "EventBus",
    "Event",
    "EventType",
    "EventSink",
    "attach_sink",
    "FrameClock",
]
