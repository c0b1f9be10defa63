"""Exception hierarchy for the bank simulation."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for every error raised by the simulation core."""


class InvalidConfigurationError(SimulationError, ValueError):
    """Requested server count (or the bounds themselves) is out of range."""


class EmptyQueueError(SimulationError, IndexError):
    """Pop attempted on an empty scheduler or wait line."""


class ServerStateError(SimulationError, RuntimeError):
    """Server asked to start while busy or to stop while idle."""


class TimeOrderingError(ServerStateError):
    """A busy period would end before it started."""
