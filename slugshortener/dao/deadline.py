"""Caller-supplied time budgets for DAO operations

A Deadline is created once per operation from an optional timeout (seconds)
and checked before every data store round trip. Operations composed of
several DAO calls hand the remaining budget down with `remaining()`.

NOTE: a round trip already in flight is not interrupted; it is bounded by the
      Redis client's socket timeout.

Example:
    >>> deadline = Deadline(0.5)
    >>> deadline.check()            # passes while time is left
    >>> dao.get(slug, timeout=deadline.remaining())
"""

import time

from slugshortener.dao.exceptions import DeadlineExceededError


class Deadline:
    """Monotonic-clock deadline; a None timeout never expires

    Attributes:
        timeout (float | None):
            Budget in seconds, as given by the caller.
        expires_at (float | None):
            time.monotonic() value at which the budget is spent.
    """

    def __init__(self, timeout: int | float | None = None):
        if timeout is not None and timeout < 0:
            raise ValueError(f'Timeout must be a non-negative number of seconds (given value: {timeout}).')
        self.timeout = timeout
        self.expires_at = time.monotonic() + timeout if timeout is not None else None

    def remaining(self) -> float | None:
        if self.expires_at is None:
            return None
        return max(self.expires_at - time.monotonic(), 0.0)

    def expired(self) -> bool:
        return self.expires_at is not None and time.monotonic() >= self.expires_at

    def check(self) -> None:
        """Raise DeadlineExceededError once the budget is spent."""
        if self.expired():
            raise DeadlineExceededError(f'Deadline of {self.timeout}s exceeded before Redis answered.')
