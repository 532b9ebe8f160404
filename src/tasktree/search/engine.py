"""Search orchestration: scan, filter, rank and page a record corpus.

:func:`search_records` is the single ranking loop shared by task and
memory search.  It is synchronous and side-effect free; the only way
to stop it early from outside is the query's cancellation token,
which is polled before every record.
"""

from __future__ import annotations

import logging

from tasktree.core.config import Settings
from tasktree.core.exceptions import QueryValidationError
from tasktree.core.models import PaginatedResult, ScoredResult, SearchableRecord, SearchQuery
from tasktree.search.base import RecordSourceProtocol
from tasktree.search.pagination import paginate, resolve_page
from tasktree.search.scorer import RelevanceScorer

logger = logging.getLogger(__name__)


def search_records(
    records: list[SearchableRecord],
    query: SearchQuery,
    settings: Settings | None = None,
) -> list[ScoredResult]:
    """Rank *records* against *query*.

    Records are scanned in the given order.  Scanning stops as soon as
    the result cap is reached, so on a large corpus the returned list is
    the best of the first matches found, not necessarily the global best.

    Parameters
    ----------
    records:
        The full candidate set.
    query:
        Query text plus optional threshold, limit and cancellation token.
    settings:
        Defaults for threshold and cap, and the early-termination switches.

    Returns
    -------
    list[ScoredResult]
        At most ``limit`` results with ``score >= threshold``, sorted by
        descending score; equal scores keep their scan order.

    Raises
    ------
    QueryValidationError
        If the query text is blank.
    SearchCancelledError
        If the token is cancelled before or during the scan.  No partial
        results are returned.
    """
    settings = settings or Settings()
    if not query.text.strip():
        raise QueryValidationError("Search query must not be empty")

    threshold = query.threshold if query.threshold is not None else settings.search.threshold
    max_results = query.limit if query.limit is not None else settings.search.max_results
    token = query.cancellation_token
    scorer = RelevanceScorer(settings.performance)

    if token is not None:
        token.raise_if_cancelled()

    results: list[ScoredResult] = []
    scanned = 0
    for record in records:
        if token is not None:
            token.raise_if_cancelled()
        scanned += 1

        score = scorer.score(record, query.text)
        if scorer.is_negligible(score):
            continue

        if score >= threshold:
            results.append(ScoredResult(record=record, score=score))
            if len(results) >= max_results:
                break

    # list.sort is stable, so ties stay in scan order.
    results.sort(key=lambda r: r.score, reverse=True)

    logger.debug(
        "Query %r: scanned %d of %d records, %d matched (threshold=%.2f, cap=%d)",
        query.text,
        scanned,
        len(records),
        len(results),
        threshold,
        max_results,
    )
    return results[:max_results]


class TextSearchEngine:
    """Ranks the records of one source.

    Parameters
    ----------
    source:
        Supplies the full corpus; re-read on every search.
    settings:
        Application configuration.  When ``None`` a default
        :class:`Settings` instance is created.
    """

    def __init__(self, source: RecordSourceProtocol, settings: Settings | None = None) -> None:
        self._source = source
        self._settings = settings or Settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    def search(self, query: SearchQuery) -> list[ScoredResult]:
        return search_records(self._source.get_records(), query, self._settings)

    def search_paginated(self, query: SearchQuery) -> PaginatedResult[ScoredResult]:
        """Run :meth:`search` and return the requested page of the ranking.

        ``query.page`` defaults to 1 and ``query.page_size`` to the
        configured page size.
        """
        page, page_size = resolve_page(query, self._settings)
        return paginate(self.search(query), page, page_size)
