"""Debounced, self-cancelling search for interactive callers.

Typing into a search box produces a burst of queries.  Each new query
waits out the debounce delay and cancels whatever request came before
it, so only the last keystroke's search runs to completion.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Generic, TypeVar

from tasktree.core.cancellation import CancellationToken
from tasktree.core.exceptions import SearchCancelledError
from tasktree.core.models import SearchQuery

logger = logging.getLogger(__name__)

R = TypeVar("R")


class DebouncedSearch(Generic[R]):
    """Run *search_fn* for the most recent query only.

    Parameters
    ----------
    search_fn:
        A synchronous search callable, e.g.
        :meth:`TaskTreeService.search_tasks`.  It runs in a worker thread
        so that newer submissions can cancel it while it scans.
    delay_ms:
        Debounce delay, normally ``settings.search.debounce_ms``.
    """

    def __init__(self, search_fn: Callable[[SearchQuery], R], delay_ms: int = 300) -> None:
        self._search_fn = search_fn
        self._delay = delay_ms / 1000
        self._token: CancellationToken | None = None

    def cancel(self) -> None:
        """Cancel the pending or running request, if any."""
        if self._token is not None:
            self._token.cancel()
            self._token = None

    async def submit(self, query: SearchQuery) -> R | None:
        """Debounce then run *query*.

        Returns
        -------
        R | None
            The search result, or ``None`` when a later submission (or
            :meth:`cancel`) superseded this one.
        """
        self.cancel()
        token = CancellationToken()
        self._token = token
        query = query.model_copy(update={"cancellation_token": token})

        try:
            await asyncio.sleep(self._delay)
            token.raise_if_cancelled()
            return await asyncio.to_thread(self._search_fn, query)
        except SearchCancelledError:
            logger.debug("Search for %r superseded", query.text)
            return None
        finally:
            if self._token is token:
                self._token = None
