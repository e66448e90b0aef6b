"""
fourier_core/events.py

Event hub owned by a single FourierVisualizer instance.
Handlers are registered per event class and called synchronously, in
subscription order, on the thread that triggered the event.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple, Type


@dataclass(frozen=True)
class Event:
    pass


@dataclass(frozen=True)
class FrequencyChangeEvent(Event):
    new_frequency_count: int
    max_frequencies: int


@dataclass(frozen=True)
class ImageLoadedEvent(Event):
    width: int
    height: int
    is_rgb: bool = False


Handler = Callable[[Event], None]


class EventHub:
    def __init__(self):
        self._handlers: Dict[Type[Event], List[Tuple[int, Handler]]] = {}
        self._next_id = 1

    def subscribe(self, event_type: Type[Event], handler: Handler) -> int:
        """Register handler for event_type; returns an id for unsubscribe()."""
        if not (isinstance(event_type, type) and issubclass(event_type, Event)):
            raise TypeError("event_type must be an Event subclass.")
        handler_id = self._next_id
        self._next_id += 1
        self._handlers.setdefault(event_type, []).append((handler_id, handler))
        return handler_id

    def unsubscribe(self, event_type: Type[Event], handler_id: int) -> bool:
        """Remove a handler. Returns False if the id was not registered."""
        if event_type not in self._handlers:
            return False
        handlers = self._handlers[event_type]
        kept = [(hid, h) for hid, h in handlers if hid != handler_id]
        self._handlers[event_type] = kept
        return len(kept) != len(handlers)

    def dispatch(self, event: Event) -> None:
        # copy so handlers may unsubscribe while being dispatched
        for _, handler in list(self._handlers.get(type(event), [])):
            handler(event)
