"""
Per-portfolio serialization of trade execution.

Buy and Sell read a portfolio, validate it and write it back.
Holding the portfolio's lock for that whole sequence keeps two
requests in this process from validating against the same state.

A lock lives only while some caller holds or waits for it, so the
registry does not grow with the number of ids clients send.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class PortfolioLocks:
    """Hands out one lock per portfolio id."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[int, _Entry] = {}

    def __len__(self) -> int:
        """Number of portfolio ids currently held or waited on."""
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, portfolio_id: int) -> Iterator[None]:
        """Block until the portfolio's lock is free and keep it for the block."""
        with self._guard:
            entry = self._entries.get(portfolio_id)
            if entry is None:
                entry = self._entries[portfolio_id] = _Entry()
            entry.users += 1

        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[portfolio_id]
