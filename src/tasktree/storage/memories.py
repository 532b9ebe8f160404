"""Read-only access to the memory notebook.

Memories live one JSON file per note, grouped into a directory per
category::

    memories/
        general/         <- uncategorised notes
            some_note.json
        design/
            colour_palette.json
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from tasktree.core.models import Memory, SearchableRecord

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "general"


class MemoryStore:
    """Implements :class:`~tasktree.search.base.RecordSourceProtocol` over a memories directory.

    Parameters
    ----------
    memories_dir:
        Root of the per-category directories.  A missing directory is
        treated as an empty notebook.
    category:
        When set, only notes in this category are returned.
    """

    def __init__(self, memories_dir: Path, category: str | None = None) -> None:
        self._memories_dir = memories_dir
        self._category = category

    def with_category(self, category: str | None) -> MemoryStore:
        """Return a store over the same directory restricted to *category*."""
        return MemoryStore(self._memories_dir, category)

    def get_categories(self) -> list[str]:
        if not self._memories_dir.is_dir():
            return []
        return sorted(p.name for p in self._memories_dir.iterdir() if p.is_dir())

    def get_memories(self) -> list[Memory]:
        """Load every note, category by category, in sorted file order.

        Files that are not valid memory JSON are logged and skipped.
        """
        categories = [self._category] if self._category else self.get_categories()

        memories: list[Memory] = []
        for category in categories:
            category_dir = self._memories_dir / category
            if not category_dir.is_dir():
                continue
            for path in sorted(category_dir.glob("*.json")):
                memory = _read_memory(path)
                if memory is not None:
                    memories.append(memory)
        return memories

    def get_records(self) -> list[SearchableRecord]:
        return [
            SearchableRecord(
                id=memory.id,
                primary_text=memory.title,
                secondary_text=memory.content,
                category=memory.category,
                source=memory,
            )
            for memory in self.get_memories()
        ]


def _read_memory(path: Path) -> Memory | None:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        memory = Memory.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Skipping unreadable memory file %s: %s", path, exc)
        return None

    # The default directory stands for "no category".
    if memory.category == DEFAULT_CATEGORY:
        memory = memory.model_copy(update={"category": None})
    return memory
