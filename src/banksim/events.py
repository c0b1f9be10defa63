"""Event types and the time-ordered event scheduler."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

from .errors import EmptyQueueError


def _require_time(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}.")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}.")


@dataclass(frozen=True)
class ArrivalEvent:
    """A customer arriving at ``arrival_time`` who needs ``transaction_time`` of service."""

    arrival_time: int
    transaction_time: int

    def __post_init__(self) -> None:
        _require_time("arrival_time", self.arrival_time)
        _require_time("transaction_time", self.transaction_time)


@dataclass(frozen=True)
class DepartureEvent:
    """Server ``server_index`` finishes its current customer at ``departure_time``."""

    departure_time: int
    server_index: int


@dataclass(frozen=True)
class Customer:
    """A waiting customer, identified by the arrival that brought them in."""

    arrival: ArrivalEvent

    @property
    def arrival_time(self) -> int:
        return self.arrival.arrival_time

    @property
    def transaction_time(self) -> int:
        return self.arrival.transaction_time


Event = Union[ArrivalEvent, DepartureEvent]


def event_time(event: Event) -> int:
    """Return the instant at which ``event`` occurs."""
    if isinstance(event, ArrivalEvent):
        return event.arrival_time
    if isinstance(event, DepartureEvent):
        return event.departure_time
    raise TypeError(f"Unsupported event type: {type(event).__name__}")


class EventScheduler:
    """Min-heap of pending events keyed by event time.

    Events sharing a timestamp come out in the order they were pushed.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[int, int, Event]] = []
        self._counter = itertools.count()

    def push(self, event: Event) -> None:
        heapq.heappush(self._heap, (event_time(event), next(self._counter), event))

    def pop_earliest(self) -> Event:
        if not self._heap:
            raise EmptyQueueError("pop_earliest() called on an empty scheduler.")
        _, _, event = heapq.heappop(self._heap)
        return event

    def is_empty(self) -> bool:
        return not self._heap

    def clear(self) -> None:
        self._heap.clear()
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator[Event]:
        """Iterate pending events in pop order without consuming them."""
        return (entry[2] for entry in sorted(self._heap))
