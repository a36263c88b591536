"""Mini README: Typed failures shared across the mosque fund service.

Structure:
    * FundError - common base so callers can catch every domain failure.
    * NotFoundError - a referenced profile or record is no longer present.
    * InvalidCredentialsError - the entered PIN does not match.
    * DataIntegrityError - a stored record fails basic shape validation.
    * UpstreamUnavailableError - the remote store could not be reached.

None of these are fatal; each is recoverable by user action such as
re-entering a PIN or reloading a view.
"""

from __future__ import annotations


class FundError(Exception):
    """Base class for all domain failures."""


class NotFoundError(FundError, KeyError):
    """Raised when a referenced identifier is absent."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep messages readable.
        return str(self.args[0]) if self.args else ""


class InvalidCredentialsError(FundError):
    """Raised when a PIN does not match the selected profile."""


class DataIntegrityError(FundError):
    """Raised when a transaction record cannot be folded into totals."""


class UpstreamUnavailableError(FundError):
    """Raised when the store collaborator fails to answer a request."""
