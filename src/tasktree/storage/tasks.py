"""Read-only access to the project/task tree in ``tasks.json``.

The file holds top-level ``projects``, ``tasks`` and ``subtasks`` arrays,
any of which may be missing.  Sub-tasks at every depth are stored in
``tasks`` carrying a ``parentId``; only that array is searched.  The
legacy ``subtasks`` array is never read.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from tasktree.core.exceptions import StorageError
from tasktree.core.models import Project, SearchableRecord, Task

logger = logging.getLogger(__name__)

UNKNOWN_PROJECT = "Unknown Project"


@dataclass(frozen=True)
class TaskSnapshot:
    """Projects and tasks from a single read of ``tasks.json``.

    A snapshot is itself a record source, so a search and the project
    names shown next to its hits always come from the same file state.
    """

    projects: list[Project] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)

    @property
    def project_names(self) -> dict[str, str]:
        """Map project id to display name."""
        return {p.id: p.name for p in self.projects}

    def project_name(self, task: Task) -> str:
        return self.project_names.get(task.project_id, UNKNOWN_PROJECT)

    def get_records(self) -> list[SearchableRecord]:
        """One record per task, titled by its name with its details as body.

        Tasks carry no category, so task scores never include the
        category bonus.
        """
        return [
            SearchableRecord(
                id=task.id,
                primary_text=task.name,
                secondary_text=task.details,
                source=task,
            )
            for task in self.tasks
        ]


class TaskStore:
    """Implements :class:`~tasktree.search.base.RecordSourceProtocol` over ``tasks.json``.

    The file is re-read on every call; nothing is cached between searches.

    Parameters
    ----------
    tasks_file:
        Path to ``tasks.json``.  A missing file is treated as an empty tree.
    """

    def __init__(self, tasks_file: Path) -> None:
        self._tasks_file = tasks_file

    def snapshot(self) -> TaskSnapshot:
        """Read the file once and return its projects and tasks."""
        if not self._tasks_file.exists():
            logger.debug("No task file at %s; treating as empty.", self._tasks_file)
            return TaskSnapshot()

        try:
            data = json.loads(self._tasks_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read task file {self._tasks_file}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Task file {self._tasks_file} must contain a JSON object")

        try:
            projects = [Project.model_validate(p) for p in data.get("projects") or []]
            tasks = [Task.model_validate(t) for t in data.get("tasks") or []]
        except ValidationError as exc:
            raise StorageError(f"Malformed entry in {self._tasks_file}: {exc}") from exc

        return TaskSnapshot(projects=projects, tasks=tasks)

    def get_projects(self) -> list[Project]:
        return self.snapshot().projects

    def get_tasks(self) -> list[Task]:
        return self.snapshot().tasks

    def project_names(self) -> dict[str, str]:
        return self.snapshot().project_names

    def get_records(self) -> list[SearchableRecord]:
        return self.snapshot().get_records()
