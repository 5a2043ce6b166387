"""Utility modules for the users API."""

from .retry_utils import ExponentialBackoff, async_retry_with_backoff

__all__ = [
    "ExponentialBackoff",
    "async_retry_with_backoff",
]
