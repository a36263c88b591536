"""Mini README: Concrete store backends.

Each backend subclasses ``FundStore`` and registers itself with
``REGISTRY`` on import so it can be selected by name from settings.
"""

from .memory import InMemoryFundStore
from .supabase_backend import SupabaseFundStore

__all__ = ["InMemoryFundStore", "SupabaseFundStore"]
