"""Cross-checks between the event engine and the SimPy replay."""

import pytest

from banksim.controller import RunController
from banksim.errors import InvalidConfigurationError
from banksim.replay import replay_trace
from banksim.traces import get_trace

# No two events (arrivals or departures) share a timestamp for 1 or 2 servers.
TIE_FREE = [(0, 5), (1, 8), (2, 3), (4, 2), (12, 1)]


def test_replay_matches_engine_on_tie_free_trace():
    engine_result = RunController(TIE_FREE).run(2)
    replayed = replay_trace(TIE_FREE, 2)

    assert replayed.busy_times == engine_result.busy_times == [11, 8]
    assert replayed.services == engine_result.services
    assert replayed.max_line_length == engine_result.max_line_length == 2
    assert replayed.events_processed == engine_result.events_processed == 10


def test_replay_reproduces_reference_peaks():
    trace = get_trace("reference")
    peaks = [replay_trace(trace, n).peak_busy_time() for n in range(1, 6)]
    assert peaks == [15, 11, 9, 9, 9]


@pytest.mark.parametrize("name", ["reference", "rush", "steady"])
@pytest.mark.parametrize("servers", [1, 2, 3])
def test_replay_conserves_work(name, servers):
    trace = get_trace(name)
    replayed = replay_trace(trace, servers)
    assert replayed.total_busy_time() == sum(event.transaction_time for event in trace)
    assert all(record.wait >= 0 for record in replayed.services)


def test_replay_validates_server_count():
    with pytest.raises(InvalidConfigurationError):
        replay_trace(TIE_FREE, 0)
