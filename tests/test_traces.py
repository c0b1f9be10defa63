"""Unit tests for named traces and CSV loading."""

import pandas as pd
import pytest

from banksim.events import ArrivalEvent
from banksim.traces import get_trace, list_traces, load_trace, trace_to_frame


def test_reference_trace_contents():
    assert get_trace("Reference") == (
        ArrivalEvent(20, 6),
        ArrivalEvent(22, 4),
        ArrivalEvent(23, 2),
        ArrivalEvent(30, 3),
    )
    assert "reference" in list_traces()


def test_unknown_trace_raises_key_error():
    with pytest.raises(KeyError):
        get_trace("nope")


def test_load_trace_round_trips_through_csv(tmp_path):
    path = tmp_path / "trace.csv"
    trace_to_frame(get_trace("rush")).to_csv(path, index=False)
    assert load_trace(path) == get_trace("rush")


def test_load_trace_accepts_whole_floats_and_extra_columns(tmp_path):
    path = tmp_path / "trace.csv"
    pd.DataFrame(
        {"customer": ["a", "b"], "arrival_time": [1.0, 4.0], "transaction_time": [2, 3]}
    ).to_csv(path, index=False)
    assert load_trace(path) == (ArrivalEvent(1, 2), ArrivalEvent(4, 3))


@pytest.mark.parametrize(
    "frame",
    [
        {"arrival_time": [1, 2]},
        {"arrival_time": [1, None], "transaction_time": [2, 3]},
        {"arrival_time": [1, -2], "transaction_time": [2, 3]},
        {"arrival_time": [1, 2.5], "transaction_time": [2, 3]},
        {"arrival_time": ["x", 2], "transaction_time": [2, 3]},
    ],
)
def test_load_trace_rejects_bad_rows(tmp_path, frame):
    path = tmp_path / "trace.csv"
    pd.DataFrame(frame).to_csv(path, index=False)
    with pytest.raises(ValueError):
        load_trace(path)


def test_load_trace_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_trace(tmp_path / "missing.csv")
