"""UI-agnostic service facade for tasktree.

Provides task and memory search over a workspace, hiding the storage
layout and the generic ranking engine from calling code.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tasktree.core.config import Settings
from tasktree.core.models import (
    MemorySearchResult,
    PaginatedResult,
    ScoredResult,
    SearchQuery,
    TaskSearchResult,
)
from tasktree.search.engine import TextSearchEngine
from tasktree.search.pagination import paginate, resolve_page
from tasktree.storage.memories import MemoryStore
from tasktree.storage.tasks import TaskStore
from tasktree.storage.workspace import workspace_paths

logger = logging.getLogger(__name__)


class TaskTreeService:
    """High-level search facade for one workspace.

    Parameters
    ----------
    workspace:
        Workspace root containing the ``.agentic-tools-mcp`` directory.
    settings:
        Application configuration.  When ``None`` a default
        :class:`Settings` instance is created.
    """

    def __init__(self, workspace: Path, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()
        self._paths = workspace_paths(workspace)
        self._task_store = TaskStore(self._paths.tasks_file)
        self._memory_store = MemoryStore(self._paths.memories_dir)

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def search_tasks(self, query: SearchQuery) -> list[TaskSearchResult]:
        """Rank every task and sub-task by name and details.

        Raises
        ------
        SearchCancelledError
            If ``query.cancellation_token`` is cancelled.
        """
        snapshot = self._task_store.snapshot()
        hits = TextSearchEngine(snapshot, self._settings).search(query)
        logger.debug("Task search %r returned %d hits", query.text, len(hits))
        return [
            TaskSearchResult(
                task=hit.record.source,
                score=hit.score,
                project_name=snapshot.project_name(hit.record.source),
            )
            for hit in hits
        ]

    def search_tasks_paginated(self, query: SearchQuery) -> PaginatedResult[TaskSearchResult]:
        return self._paginate(self.search_tasks(query), query)

    # ------------------------------------------------------------------
    # Memories
    # ------------------------------------------------------------------

    def search_memories(self, query: SearchQuery) -> list[MemorySearchResult]:
        """Rank memories by title, content and category.

        ``query.category`` restricts the scan to one category directory.
        """
        if query.category:
            logger.debug("Restricting memory search to category %r", query.category)
        store = self._memory_store.with_category(query.category)
        hits: list[ScoredResult] = TextSearchEngine(store, self._settings).search(query)
        return [MemorySearchResult(memory=hit.record.source, score=hit.score) for hit in hits]

    def search_memories_paginated(
        self, query: SearchQuery
    ) -> PaginatedResult[MemorySearchResult]:
        return self._paginate(self.search_memories(query), query)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _paginate(self, results: list, query: SearchQuery) -> PaginatedResult:
        page, page_size = resolve_page(query, self._settings)
        return paginate(results, page, page_size)
