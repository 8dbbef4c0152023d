r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from tc3client.backoff.base import BaseBackoffStrategy
from tc3client.core.validation import validate_delay


class ConstantBackoff(BaseBackoffStrategy):
    """Wait the same delay after every failure.

    Args:
        delay: The fixed delay in seconds (default: 1.0).

    Example:
        ```pycon
        >>> from tc3client.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff(delay=2.5)
        >>> backoff.calculate(0)
        2.5
        >>> backoff.calculate(10)
        2.5

        ```
    """

    def __init__(self, delay: float = 1.0) -> None:
        validate_delay(delay)
        self.delay = delay

    def calculate(self, failures: int) -> float:  # noqa: ARG002
        return self.delay
