"""Pydantic domain models for tasktree."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from tasktree.core.cancellation import CancellationToken

T = TypeVar("T")


class _StoredModel(BaseModel):
    """Base for records read from the workspace JSON files (camelCase keys)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Project(_StoredModel):
    id: str
    name: str
    description: str = ""
    created_at: str | None = Field(None, alias="createdAt")
    updated_at: str | None = Field(None, alias="updatedAt")


class Task(_StoredModel):
    """A task or sub-task in a project's tree."""

    id: str
    name: str
    details: str = ""
    project_id: str = Field(alias="projectId")
    parent_id: str | None = Field(None, alias="parentId")
    completed: bool = False
    created_at: str | None = Field(None, alias="createdAt")
    updated_at: str | None = Field(None, alias="updatedAt")


class Memory(_StoredModel):
    """A single note in the memory notebook."""

    id: str
    title: str
    # On disk the body is "details" and the timestamps "dateCreated"/"dateUpdated".
    content: str = Field("", validation_alias=AliasChoices("details", "content"))
    metadata: dict[str, Any] = Field(default_factory=dict)
    category: str | None = None
    created_at: str | None = Field(
        None, validation_alias=AliasChoices("dateCreated", "createdAt", "created_at")
    )
    updated_at: str | None = Field(
        None, validation_alias=AliasChoices("dateUpdated", "updatedAt", "updated_at")
    )


class SearchableRecord(BaseModel):
    """Record-agnostic view of anything the scorer ranks.

    ``primary_text`` is the short title, ``secondary_text`` the long-form
    body.  ``source`` keeps the domain object the record was built from
    so callers can map results back.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    primary_text: str
    secondary_text: str = ""
    category: str | None = None
    source: Any = Field(default=None, exclude=True, repr=False)


class SearchQuery(BaseModel):
    """A single search request.

    Any ``None`` field falls back to the corresponding value in
    :class:`~tasktree.core.config.SearchSettings`.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    text: str
    threshold: float | None = None
    limit: int | None = None
    page: int | None = None
    page_size: int | None = None
    category: str | None = None  # memory searches only
    cancellation_token: CancellationToken | None = Field(default=None, exclude=True)


class ScoredResult(BaseModel):
    record: SearchableRecord
    score: float


class PaginationInfo(BaseModel):
    current_page: int
    total_pages: int
    page_size: int
    total_items: int
    has_next_page: bool
    has_previous_page: bool


class PaginatedResult(BaseModel, Generic[T]):
    """One page of a ranked result list plus navigation metadata."""

    items: list[T] = Field(default_factory=list)
    pagination: PaginationInfo


class TaskSearchResult(BaseModel):
    task: Task
    score: float
    project_name: str


class MemorySearchResult(BaseModel):
    memory: Memory
    score: float
