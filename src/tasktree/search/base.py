"""Record source protocol definition for tasktree.

Anything that can hand over a full snapshot of searchable records
(the task store, the memory store, an in-memory list in tests)
implements :class:`RecordSourceProtocol` so the search engine can
rank it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tasktree.core.models import SearchableRecord


@runtime_checkable
class RecordSourceProtocol(Protocol):
    """Protocol that every record source must satisfy.

    Implementations return the complete corpus on every call, in a
    stable order.  The search engine never caches the result.
    """

    def get_records(self) -> list[SearchableRecord]:
        """Return every record currently in the corpus.

        Returns
        -------
        list[SearchableRecord]
            All records, in the source's enumeration order.  Ties in
            search score are broken by this order.
        """
        ...


class StaticRecordSource:
    """A fixed, in-memory record list."""

    def __init__(self, records: list[SearchableRecord]) -> None:
        self._records = list(records)

    def get_records(self) -> list[SearchableRecord]:
        return list(self._records)
