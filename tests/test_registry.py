"""Mini README: Tests for the store backend registry.

Ensures built-in backends register on import and that settings select and
configure them, providing a quick regression suite for backend wiring.
"""

from __future__ import annotations

import pytest

from mosquefund.configuration import MosqueFundSettings
from mosquefund.storage import REGISTRY, FundStore
from mosquefund.storage.backends import InMemoryFundStore


def test_registry_contains_builtin_backends() -> None:
    assert {"memory", "supabase"} <= set(REGISTRY.available_stores())


def test_registry_instantiates_memory_store(tmp_path) -> None:
    store = REGISTRY.create("Memory", MosqueFundSettings(data_directory=tmp_path))

    assert isinstance(store, FundStore)
    assert isinstance(store, InMemoryFundStore)
    assert store.store_name == "memory"


def test_supabase_backend_requires_credentials(tmp_path) -> None:
    settings = MosqueFundSettings(data_directory=tmp_path, supabase_url=None, supabase_key=None)

    with pytest.raises(ValueError):
        REGISTRY.create("supabase", settings)


def test_unknown_backend_raises_key_error(tmp_path) -> None:
    with pytest.raises(KeyError):
        REGISTRY.create("sqlite", MosqueFundSettings(data_directory=tmp_path))
