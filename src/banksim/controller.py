"""Run controller: replays one immutable trace for different server counts."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .engine import ServiceRecord, SimulationEngine, SimulationState
from .errors import InvalidConfigurationError
from .events import ArrivalEvent

logger = logging.getLogger(__name__)

MIN_SERVERS = 1
MAX_SERVERS = 5

TraceItem = Union[ArrivalEvent, Tuple[int, int]]


@dataclass(frozen=True)
class ServerBounds:
    """Closed range of server counts a controller accepts."""

    min_servers: int = MIN_SERVERS
    max_servers: int = MAX_SERVERS

    def __post_init__(self) -> None:
        for name in ("min_servers", "max_servers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}.")
        if self.min_servers < 1:
            raise InvalidConfigurationError("min_servers must be >= 1.")
        if self.max_servers < self.min_servers:
            raise InvalidConfigurationError("max_servers must be >= min_servers.")

    def validate(self, server_count: int) -> None:
        if isinstance(server_count, bool) or not isinstance(server_count, int):
            raise InvalidConfigurationError(
                f"Server count must be an integer, got {server_count!r}."
            )
        if server_count < self.min_servers:
            raise InvalidConfigurationError(f"Server count must be >= {self.min_servers}.")
        if server_count > self.max_servers:
            raise InvalidConfigurationError(f"Server count must be <= {self.max_servers}.")

    def counts(self) -> List[int]:
        return list(range(self.min_servers, self.max_servers + 1))


@dataclass
class SimulationResult:
    """Per-server busy times of one completed run, in server-index order."""

    server_count: int
    busy_times: List[int]
    services: List[ServiceRecord] = field(default_factory=list)
    max_line_length: int = 0
    events_processed: int = 0

    def peak_busy_time(self) -> int:
        """Largest busy time across servers; the reported proxy for delay."""
        return max(self.busy_times, default=0)

    def total_busy_time(self) -> int:
        return sum(self.busy_times)

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


def as_trace(items: Iterable[TraceItem]) -> Tuple[ArrivalEvent, ...]:
    """Normalize ``(arrival_time, transaction_time)`` pairs into an immutable trace."""
    trace = []
    for item in items:
        if isinstance(item, ArrivalEvent):
            trace.append(item)
        else:
            arrival_time, transaction_time = item
            trace.append(ArrivalEvent(arrival_time, transaction_time))
    return tuple(trace)


class RunController:
    """Owns the input trace and the simulation state reused across runs."""

    def __init__(self, trace: Iterable[TraceItem], bounds: Optional[ServerBounds] = None):
        self.trace = as_trace(trace)
        self.bounds = bounds if bounds is not None else ServerBounds()
        self.state = SimulationState()
        self.engine = SimulationEngine(self.state)

    @property
    def server_count(self) -> int:
        return len(self.state.servers)

    def configure(self, server_count: int) -> None:
        """Reset every piece of mutable state for a fresh run with ``server_count`` servers."""
        self.bounds.validate(server_count)
        self.state.reset(self.trace, server_count)

    def run(self, server_count: int) -> SimulationResult:
        self.configure(server_count)
        logger.info("Running %d arrivals with %d server(s).", len(self.trace), server_count)
        self.engine.run()
        result = self._gather_results()
        logger.info(
            "Finished %d server(s): busy times %s after %d events.",
            server_count,
            result.busy_times,
            result.events_processed,
        )
        return result

    def peak_busy_time(self, server_count: int) -> int:
        return self.run(server_count).peak_busy_time()

    def sweep(self, server_counts: Optional[Sequence[int]] = None) -> List[SimulationResult]:
        """Run each server count in turn (all counts within bounds by default)."""
        counts = self.bounds.counts() if server_counts is None else list(server_counts)
        for count in counts:
            self.bounds.validate(count)
        return [self.run(count) for count in counts]

    def _gather_results(self) -> SimulationResult:
        return SimulationResult(
            server_count=len(self.state.servers),
            busy_times=[server.elapsed_busy_time() for server in self.state.servers],
            services=list(self.state.services),
            max_line_length=self.state.max_line_length,
            events_processed=self.state.events_processed,
        )
