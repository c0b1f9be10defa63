"""FIFO line of customers who found every server busy."""

from __future__ import annotations

from collections import deque
from typing import Deque

from .errors import EmptyQueueError
from .events import Customer


class WaitLine:
    def __init__(self) -> None:
        self._customers: Deque[Customer] = deque()

    def push(self, customer: Customer) -> None:
        self._customers.append(customer)

    def pop_front(self) -> Customer:
        if not self._customers:
            raise EmptyQueueError("pop_front() called on an empty wait line.")
        return self._customers.popleft()

    def is_empty(self) -> bool:
        return not self._customers

    def clear(self) -> None:
        self._customers.clear()

    def __len__(self) -> int:
        return len(self._customers)
