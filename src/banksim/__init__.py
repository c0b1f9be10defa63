"""Discrete-event simulation of a bank line served by a pool of tellers."""

from .controller import (
    MAX_SERVERS,
    MIN_SERVERS,
    RunController,
    ServerBounds,
    SimulationResult,
    as_trace,
)
from .engine import ServiceRecord, SimulationEngine, SimulationState
from .errors import (
    EmptyQueueError,
    InvalidConfigurationError,
    ServerStateError,
    SimulationError,
    TimeOrderingError,
)
from .events import ArrivalEvent, Customer, DepartureEvent, Event, EventScheduler, event_time
from .metrics import RunSummary, recommend_server_count, staffing_score, summarize_run
from .replay import replay_trace
from .server import Busy, Idle, Server
from .traces import TRACES, get_trace, list_traces, load_trace
from .wait_line import WaitLine

__all__ = [
    "ArrivalEvent",
    "Busy",
    "Customer",
    "DepartureEvent",
    "EmptyQueueError",
    "Event",
    "EventScheduler",
    "Idle",
    "InvalidConfigurationError",
    "MAX_SERVERS",
    "MIN_SERVERS",
    "RunController",
    "RunSummary",
    "Server",
    "ServerBounds",
    "ServerStateError",
    "ServiceRecord",
    "SimulationEngine",
    "SimulationError",
    "SimulationResult",
    "SimulationState",
    "TRACES",
    "TimeOrderingError",
    "WaitLine",
    "as_trace",
    "event_time",
    "get_trace",
    "list_traces",
    "load_trace",
    "recommend_server_count",
    "replay_trace",
    "staffing_score",
    "summarize_run",
]
