"""Mini README: Storage package initialiser.

``base`` holds the abstract store contract, ``registry`` the backend
lookup, and ``backends`` the concrete in-memory and hosted-database
implementations.
"""

from .base import FundStore
from .registry import REGISTRY, StoreRegistry
from . import backends  # noqa: F401  # ensure built-in backends register on import

__all__ = ["FundStore", "REGISTRY", "StoreRegistry"]
