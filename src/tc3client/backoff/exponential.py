r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from tc3client.backoff.base import BaseBackoffStrategy
from tc3client.core.validation import validate_delay


class ExponentialBackoff(BaseBackoffStrategy):
    """Double the delay after every failure.

    The delay is ``base_delay * (2 ** failures)``, capped at
    ``max_delay`` if set.

    Args:
        base_delay: The delay after the first failure (default: 0.3).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from tc3client.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=0.3)
        >>> backoff.calculate(0)
        0.3
        >>> backoff.calculate(2)
        1.2
        >>> ExponentialBackoff(base_delay=1.0, max_delay=5.0).calculate(10)
        5.0

        ```
    """

    def __init__(self, base_delay: float = 0.3, max_delay: float | None = None) -> None:
        validate_delay(base_delay)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.max_delay = max_delay

    def calculate(self, failures: int) -> float:
        delay = self.base_delay * (2**failures)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
