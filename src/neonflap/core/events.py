"""
Event bus system for NEONFLAP.

Carries engine events (jump, score, crash, state changes) to the effects
feed. Handlers are isolated: a failing subscriber is logged and skipped,
it never raises back into the simulation.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol
from enum import Enum, auto
from collections import defaultdict, deque
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Gameplay events
    JUMP = auto()
    SCORE = auto()
    CRASH = auto()
    OBSTACLE_SPAWNED = auto()

    # State events
    STATE_CHANGED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created (monotonic seconds)
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "engine"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventSink(Protocol):
    """Fire-and-forget receiver for the three gameplay cues."""

    def on_jump(self) -> None: ...

    def on_score(self) -> None: ...

    def on_crash(self) -> None: ...


class EventBus:
    """
    Central event bus for component communication.

    Events can be emitted immediately or queued and flushed once the
    current simulation tick has finished.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._queue: deque[Event] = deque()
        self._event_history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Deliver an event to its subscribers immediately."""
        self._event_history.append(event)
        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    def queue_event(self, event: Event) -> None:
        """Queue an event for delivery on the next flush."""
        self._queue.append(event)

    @property
    def pending(self) -> int:
        """Number of queued, undelivered events."""
        return len(self._queue)

    def flush(self) -> None:
        """Deliver all queued events, in order."""
        while self._queue:
            self.emit(self._queue.popleft())

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = list(self._event_history)
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]


def attach_sink(bus: EventBus, sink: EventSink) -> Callable[[], None]:
    """Route JUMP/SCORE/CRASH events to a sink. Returns a detach function."""
    unsubscribers = [
        bus.subscribe(EventType.JUMP, lambda event: sink.on_jump()),
        bus.subscribe(EventType.SCORE, lambda event: sink.on_score()),
        bus.subscribe(EventType.CRASH, lambda event: sink.on_crash()),
    ]

    def detach() -> None:
        for unsubscribe in unsubscribers:
            unsubscribe()

    return detach


# Convenience functions for creating common events
def score_event(score: int) -> Event:
    """Create a score event carrying the new total."""
    return Event(EventType.SCORE, data={"score": score})


def crash_event(score: int, x: float, y: float) -> Event:
    """Create a crash event at the avatar position."""
    return Event(EventType.CRASH, data={"score": score, "x": x, "y": y})
