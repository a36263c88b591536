"""Mini README: Apply only the newest completed fetch to view state.

Structure:
    * LatestFetchGuard - numbers each fetch and drops superseded results.

Views may start several loads that overlap (for example a reload pressed
twice). Each ``run`` takes a ticket; when its loader finishes, the result is
handed to ``apply`` only if no newer run has started and the guard has not
been closed. Errors from superseded runs are dropped the same way, while
errors from the newest run propagate to the caller.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Generic, TypeVar

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

T = TypeVar("T")


class LatestFetchGuard(Generic[T]):
    """Stale-response guard for asynchronous loaders."""

    def __init__(self, apply: Callable[[T], None], *, label: str = "fetch") -> None:
        self._apply = apply
        self._label = label
        self._latest_ticket = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _is_current(self, ticket: int) -> bool:
        return not self._closed and ticket == self._latest_ticket

    async def run(self, loader: Callable[[], Awaitable[T]]) -> bool:
        """Await ``loader`` and apply its result if it is still the newest.

        Returns ``True`` when the result was applied.
        """

        if self._closed:
            LOGGER.debug("Skipping %s: guard closed", self._label)
            return False
        self._latest_ticket += 1
        ticket = self._latest_ticket
        try:
            result = await loader()
        except Exception:
            if self._is_current(ticket):
                raise
            LOGGER.debug("Dropping failure of superseded %s #%s", self._label, ticket)
            return False
        if not self._is_current(ticket):
            LOGGER.debug("Dropping stale %s #%s", self._label, ticket)
            return False
        self._apply(result)
        return True

    def close(self) -> None:
        """Discard every pending completion; used on view teardown."""

        self._closed = True
