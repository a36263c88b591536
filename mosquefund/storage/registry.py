"""Mini README: Backend registry for the store collaborator.

Structure:
    * StoreRegistry - maps backend names to ``FundStore`` subclasses.

Backends call ``REGISTRY.register`` when imported; the application picks
one by the ``store_backend`` setting.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Type

from .base import FundStore
from ..logging_utils import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from ..configuration import MosqueFundSettings

LOGGER = get_logger(__name__)


class StoreRegistry:
    """Simple registry for mapping backend identifiers to classes."""

    def __init__(self) -> None:
        self._stores: Dict[str, Type[FundStore]] = {}

    def register(self, store: Type[FundStore]) -> Type[FundStore]:
        """Register a store class; returns it so it can be used as a decorator."""

        identifier = store.store_name.lower()
        LOGGER.debug("Registering store backend '%s'", identifier)
        self._stores[identifier] = store
        return store

    def available_stores(self) -> Iterable[str]:
        return sorted(self._stores.keys())

    def create(self, identifier: str, settings: MosqueFundSettings) -> FundStore:
        """Instantiate the backend matching ``identifier``."""

        store_cls = self._stores.get(identifier.lower())
        if not store_cls:
            raise KeyError(f"Unknown store backend '{identifier}'")
        LOGGER.info("Creating store backend '%s'", identifier)
        return store_cls.from_settings(settings)


REGISTRY = StoreRegistry()
