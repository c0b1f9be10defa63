"""Unit tests for events, the event scheduler and the wait line."""

import pytest

from banksim.errors import EmptyQueueError
from banksim.events import ArrivalEvent, Customer, DepartureEvent, EventScheduler, event_time
from banksim.wait_line import WaitLine


def test_event_time_reads_both_variants():
    assert event_time(ArrivalEvent(20, 6)) == 20
    assert event_time(DepartureEvent(26, 1)) == 26


def test_event_time_rejects_other_types():
    with pytest.raises(TypeError):
        event_time((3, 4))


@pytest.mark.parametrize("arrival, transaction", [(-1, 2), (2, -1), (1.5, 2), (True, 2)])
def test_arrival_event_requires_non_negative_integers(arrival, transaction):
    with pytest.raises(ValueError):
        ArrivalEvent(arrival, transaction)


def test_scheduler_pops_in_time_order():
    scheduler = EventScheduler()
    pending = [ArrivalEvent(30, 3), DepartureEvent(26, 0), ArrivalEvent(20, 6), ArrivalEvent(23, 2)]
    for event in pending:
        scheduler.push(event)

    times = []
    while not scheduler.is_empty():
        times.append(event_time(scheduler.pop_earliest()))
    assert times == [20, 23, 26, 30]


def test_scheduler_breaks_ties_by_insertion_order():
    scheduler = EventScheduler()
    first = DepartureEvent(26, 0)
    second = DepartureEvent(26, 1)
    arrival = ArrivalEvent(26, 4)
    scheduler.push(arrival)
    scheduler.push(first)
    scheduler.push(second)

    assert len(scheduler) == 3
    assert list(scheduler) == [arrival, first, second]
    assert scheduler.pop_earliest() is arrival
    assert scheduler.pop_earliest() is first
    assert scheduler.pop_earliest() is second


def test_scheduler_pop_on_empty_raises():
    scheduler = EventScheduler()
    with pytest.raises(EmptyQueueError):
        scheduler.pop_earliest()
    # Also catchable as a plain IndexError.
    with pytest.raises(IndexError):
        scheduler.pop_earliest()


def test_scheduler_clear_empties_queue():
    scheduler = EventScheduler()
    scheduler.push(ArrivalEvent(1, 1))
    scheduler.clear()
    assert scheduler.is_empty()
    assert len(scheduler) == 0


def test_wait_line_is_fifo():
    line = WaitLine()
    customers = [Customer(ArrivalEvent(t, 1)) for t in (5, 3, 9)]
    for customer in customers:
        line.push(customer)

    assert len(line) == 3
    assert [line.pop_front() for _ in range(3)] == customers
    assert line.is_empty()


def test_wait_line_pop_on_empty_raises():
    with pytest.raises(EmptyQueueError):
        WaitLine().pop_front()


def test_customer_exposes_arrival_fields():
    customer = Customer(ArrivalEvent(22, 4))
    assert customer.arrival_time == 22
    assert customer.transaction_time == 4
