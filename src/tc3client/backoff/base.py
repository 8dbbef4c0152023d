r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy maps the number of failures seen so far in a
    call to the delay an observer asks the engine to wait before the
    next attempt.
    """

    @abstractmethod
    def calculate(self, failures: int) -> float:
        """Calculate the delay before the next attempt.

        Args:
            failures: The number of failed attempts before this one,
                minus one. ``0`` is the delay after the first failure.

        Returns:
            The delay in seconds.
        """
