"""Unit tests for the server state machine."""

import pytest

from banksim.errors import ServerStateError, TimeOrderingError
from banksim.server import Busy, Idle, Server


def test_new_server_is_idle_with_no_busy_time():
    server = Server()
    assert server.is_available()
    assert isinstance(server.state, Idle)
    assert server.elapsed_busy_time() == 0


def test_start_and_stop_accumulate_busy_time():
    server = Server()
    server.start_work(20)
    assert not server.is_available()
    assert server.state == Busy(since=20)
    server.stop_work(26)
    server.start_work(30)
    server.stop_work(33)
    assert server.is_available()
    assert server.elapsed_busy_time() == 9


def test_stop_then_start_at_same_instant_has_no_idle_gap():
    server = Server()
    server.start_work(5)
    server.stop_work(8)
    server.start_work(8)
    server.stop_work(10)
    assert server.elapsed_busy_time() == 5


def test_double_start_is_rejected():
    server = Server()
    server.start_work(1)
    with pytest.raises(ServerStateError):
        server.start_work(2)


def test_stop_while_idle_is_rejected():
    with pytest.raises(ServerStateError):
        Server().stop_work(3)


def test_stop_before_start_time_is_rejected():
    server = Server()
    server.start_work(10)
    with pytest.raises(TimeOrderingError):
        server.stop_work(9)
    # The failed stop leaves the busy period untouched.
    assert server.state == Busy(since=10)
    assert server.elapsed_busy_time() == 0
