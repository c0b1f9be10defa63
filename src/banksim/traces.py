"""Named arrival traces and CSV trace loading."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Tuple

import pandas as pd

from .events import ArrivalEvent

Trace = Tuple[ArrivalEvent, ...]

TRACE_COLUMNS = ("arrival_time", "transaction_time")


def _trace(*pairs: Tuple[int, int]) -> Trace:
    return tuple(ArrivalEvent(arrival, transaction) for arrival, transaction in pairs)


TRACES: Dict[str, Trace] = {
    "reference": _trace((20, 6), (22, 4), (23, 2), (30, 3)),
    # Morning rush: a burst that queues behind three tellers, then a lull.
    "rush": _trace(
        (0, 5), (1, 8), (2, 3), (3, 6), (4, 2), (5, 4), (6, 7), (9, 1), (15, 3), (16, 2)
    ),
    "steady": _trace((0, 3), (4, 3), (8, 3), (12, 3), (16, 3), (20, 3)),
}


def list_traces() -> Iterable[str]:
    """Return available trace names."""
    return sorted(TRACES.keys())


def get_trace(name: str) -> Trace:
    key = name.lower()
    if key not in TRACES:
        raise KeyError(f"Trace '{name}' is not defined. Available: {list_traces()}")
    return TRACES[key]


def trace_from_frame(df: pd.DataFrame) -> Trace:
    """Build a trace from a frame with ``arrival_time`` and ``transaction_time`` columns."""
    missing = [column for column in TRACE_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"Trace is missing column(s): {', '.join(missing)}.")

    frame = df[list(TRACE_COLUMNS)]
    if frame.isna().any().any():
        raise ValueError("Trace contains empty values.")

    numeric = frame.apply(pd.to_numeric, errors="coerce")
    if numeric.isna().any().any():
        raise ValueError("Trace values must be numeric.")
    if not (numeric == numeric.round()).all().all():
        raise ValueError("Trace values must be whole time units.")

    pairs = numeric.astype("int64").itertuples(index=False, name=None)
    return tuple(ArrivalEvent(int(arrival), int(transaction)) for arrival, transaction in pairs)


def load_trace(path: Path) -> Trace:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Trace file not found: {path}")
    return trace_from_frame(pd.read_csv(path))


def trace_to_frame(trace: Iterable[ArrivalEvent]) -> pd.DataFrame:
    return pd.DataFrame(
        [(event.arrival_time, event.transaction_time) for event in trace],
        columns=list(TRACE_COLUMNS),
    )
