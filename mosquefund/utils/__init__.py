"""Mini README: Shared helpers for the mosque fund service."""

from .fetch_guard import LatestFetchGuard

__all__ = ["LatestFetchGuard"]
