"""Event-driven core: arrival/departure handling over explicit simulation state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .events import ArrivalEvent, Customer, DepartureEvent, Event, EventScheduler
from .server import Server
from .wait_line import WaitLine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceRecord:
    """When and where one customer was served."""

    arrival_time: int
    service_start: int
    transaction_time: int
    server_index: int

    @property
    def wait(self) -> int:
        return self.service_start - self.arrival_time

    @property
    def departure_time(self) -> int:
        return self.service_start + self.transaction_time


@dataclass
class SimulationState:
    """Mutable containers owned by a single in-progress run."""

    scheduler: EventScheduler = field(default_factory=EventScheduler)
    wait_line: WaitLine = field(default_factory=WaitLine)
    servers: List[Server] = field(default_factory=list)
    services: List[ServiceRecord] = field(default_factory=list)
    max_line_length: int = 0
    events_processed: int = 0

    def reset(self, trace: Iterable[ArrivalEvent], server_count: int) -> None:
        """Seed the scheduler with ``trace`` and start from ``server_count`` idle servers."""
        if not self.wait_line.is_empty():
            logger.warning("Discarding %d customers left in the wait line.", len(self.wait_line))
        self.wait_line.clear()
        self.scheduler.clear()
        for arrival in trace:
            self.scheduler.push(arrival)
        self.servers = [Server() for _ in range(server_count)]
        self.services = []
        self.max_line_length = 0
        self.events_processed = 0


class SimulationEngine:
    """Pops events in time order and applies the arrival/departure transitions."""

    def __init__(self, state: SimulationState):
        self.state = state

    def run(self) -> None:
        scheduler = self.state.scheduler
        while not scheduler.is_empty():
            event = scheduler.pop_earliest()
            self.process_event(event)

    def process_event(self, event: Event) -> None:
        self.state.events_processed += 1
        if isinstance(event, ArrivalEvent):
            self._process_arrival(event)
        elif isinstance(event, DepartureEvent):
            self._process_departure(event)
        else:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")

    def _find_idle_server(self) -> Optional[int]:
        for index, server in enumerate(self.state.servers):
            if server.is_available():
                return index
        return None

    def _process_arrival(self, arrival: ArrivalEvent) -> None:
        now = arrival.arrival_time
        index = self._find_idle_server()
        if index is None:
            self.state.wait_line.push(Customer(arrival))
            line_length = len(self.state.wait_line)
            self.state.max_line_length = max(self.state.max_line_length, line_length)
            logger.debug("t=%d arrival waits; line length %d", now, line_length)
            return

        self.state.servers[index].start_work(now)
        self._schedule_departure(now, arrival, index)
        logger.debug("t=%d arrival served by server %d", now, index)

    def _process_departure(self, departure: DepartureEvent) -> None:
        now = departure.departure_time
        index = departure.server_index
        server = self.state.servers[index]

        if self.state.wait_line.is_empty():
            server.stop_work(now)
            logger.debug("t=%d server %d goes idle", now, index)
            return

        customer = self.state.wait_line.pop_front()
        # Busy period closes and reopens at the same instant.
        server.stop_work(now)
        server.start_work(now)
        self._schedule_departure(now, customer.arrival, index)
        logger.debug(
            "t=%d server %d takes customer who arrived at t=%d", now, index, customer.arrival_time
        )

    def _schedule_departure(self, now: int, arrival: ArrivalEvent, index: int) -> None:
        departure = DepartureEvent(now + arrival.transaction_time, index)
        self.state.scheduler.push(departure)
        self.state.services.append(
            ServiceRecord(
                arrival_time=arrival.arrival_time,
                service_start=now,
                transaction_time=arrival.transaction_time,
                server_index=index,
            )
        )
