r"""Backoff strategies used by RetryObserver to space out attempts."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "ConstantBackoff", "ExponentialBackoff"]

from tc3client.backoff.base import BaseBackoffStrategy
from tc3client.backoff.constant import ConstantBackoff
from tc3client.backoff.exponential import ExponentialBackoff
