"""Retry policies for reaching the Cassandra cluster."""

from trellis_cassandra.interfaces.retry_policy import RetryPolicy

# pylint: disable=too-few-public-methods

DEFAULT_RETRY_DELAY = 5.0


class FixedDelayRetry(RetryPolicy):
    """Wait the same delay after every failed attempt.

    With the defaults this retries every 5 seconds forever, blocking startup
    until a host is reachable.
    """

    def __init__(
        self, delay: float = DEFAULT_RETRY_DELAY, max_attempts: int | None = None
    ) -> None:
        if delay < 0:
            raise ValueError("delay must not be negative")
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.delay = delay
        self.max_attempts = max_attempts

    def delay_for(self, attempt: int) -> float | None:
        if self.max_attempts is not None and attempt >= self.max_attempts:
            return None
        return self.delay


class ExponentialBackoffRetry(RetryPolicy):
    """Multiply the delay after every failed attempt, up to *max_delay*."""

    def __init__(
        self,
        initial_delay: float = 1.0,
        multiplier: float = 2.0,
        max_delay: float = 60.0,
        max_attempts: int | None = None,
    ) -> None:
        if initial_delay < 0 or max_delay < initial_delay:
            raise ValueError("require 0 <= initial_delay <= max_delay")
        if multiplier < 1:
            raise ValueError("multiplier must be at least 1")
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.initial_delay = initial_delay
        self.multiplier = multiplier
        self.max_delay = max_delay
        self.max_attempts = max_attempts

    def delay_for(self, attempt: int) -> float | None:
        if self.max_attempts is not None and attempt >= self.max_attempts:
            return None
        try:
            delay = self.initial_delay * self.multiplier ** (attempt - 1)
        except OverflowError:
            return self.max_delay
        return min(self.max_delay, delay)
