"""Single service resource (teller) with busy-time accounting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import ServerStateError, TimeOrderingError


@dataclass(frozen=True)
class Idle:
    """Server is free to take a customer."""


@dataclass(frozen=True)
class Busy:
    """Server has been serving since ``since``."""

    since: int


ServerState = Union[Idle, Busy]

IDLE = Idle()


class Server:
    """Tracks availability and accumulates total busy time."""

    def __init__(self) -> None:
        self.state: ServerState = IDLE
        self.total_busy_time = 0

    def is_available(self) -> bool:
        return isinstance(self.state, Idle)

    def start_work(self, current_time: int) -> None:
        if isinstance(self.state, Busy):
            raise ServerStateError(
                f"Server already busy since t={self.state.since}; cannot start at t={current_time}."
            )
        self.state = Busy(since=current_time)

    def stop_work(self, current_time: int) -> None:
        """End the current busy period and add its length to the accumulator."""
        if not isinstance(self.state, Busy):
            raise ServerStateError(f"Server is idle; cannot stop at t={current_time}.")
        elapsed = current_time - self.state.since
        if elapsed < 0:
            raise TimeOrderingError(
                f"Busy period would end at t={current_time} "
                f"before it started at t={self.state.since}."
            )
        self.total_busy_time += elapsed
        self.state = IDLE

    def elapsed_busy_time(self) -> int:
        return self.total_busy_time

    def __repr__(self) -> str:
        return f"Server(state={self.state!r}, total_busy_time={self.total_busy_time})"
