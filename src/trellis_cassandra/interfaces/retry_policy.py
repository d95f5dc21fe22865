"""Interface for connection retry policies."""

import abc

# pylint: disable=too-few-public-methods


class RetryPolicy(abc.ABC):
    """Contract deciding how long to wait between connection attempts."""

    @abc.abstractmethod
    def delay_for(self, attempt: int) -> float | None:
        """Return the seconds to wait after failed attempt *attempt*.

        Args:
            attempt: The 1-based number of the attempt that just failed.

        Returns:
            The delay before the next attempt, or None to give up.
        """
