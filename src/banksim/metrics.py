"""Derived metrics for a completed run and the staffing recommendation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Optional

import numpy as np

from .controller import SimulationResult


@dataclass(frozen=True)
class RunSummary:
    """Flat view of one run, handy for tabulating a sweep."""

    servers: int
    peak_busy_time: int
    total_busy_time: int
    customers_served: int
    customers_waited: int
    mean_wait: float
    max_wait: int
    max_line_length: int
    completion_time: int
    utilization: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def summarize_run(result: SimulationResult) -> RunSummary:
    """
    Collapse a result into scalar metrics.

    Utilization is each server's busy time over the completion time (last
    departure), averaged across servers.
    """
    waits = np.array([record.wait for record in result.services], dtype=float)
    departures = [record.departure_time for record in result.services]
    completion_time = max(departures, default=0)

    busy = np.array(result.busy_times, dtype=float)
    if completion_time > 0 and busy.size:
        utilization = float(np.mean(busy / completion_time))
    else:
        utilization = 0.0

    return RunSummary(
        servers=result.server_count,
        peak_busy_time=result.peak_busy_time(),
        total_busy_time=result.total_busy_time(),
        customers_served=len(result.services),
        customers_waited=int(np.count_nonzero(waits > 0)),
        mean_wait=float(np.mean(waits)) if waits.size else 0.0,
        max_wait=int(waits.max()) if waits.size else 0,
        max_line_length=result.max_line_length,
        completion_time=completion_time,
        utilization=utilization,
    )


def staffing_score(summary: RunSummary, c_server: float = 1.0, c_wait: float = 1.0) -> float:
    """Cost of a staffing level: lower is better."""
    return c_server * summary.servers + c_wait * summary.mean_wait


def recommend_server_count(
    summaries: Iterable[RunSummary], c_server: float = 1.0, c_wait: float = 1.0
) -> Optional[int]:
    """Return the server count with the lowest score; ties favour fewer servers."""
    best: Optional[RunSummary] = None
    best_score = float("inf")
    for summary in sorted(summaries, key=lambda s: s.servers):
        score = staffing_score(summary, c_server=c_server, c_wait=c_wait)
        if score < best_score:
            best, best_score = summary, score
    return best.servers if best is not None else None
