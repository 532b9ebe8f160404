"""Shared fixtures for the tasktree test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tasktree.core.config import Settings
from tasktree.core.models import SearchableRecord


def make_record(
    primary: str,
    secondary: str = "",
    category: str | None = None,
    record_id: str | None = None,
) -> SearchableRecord:
    return SearchableRecord(
        id=record_id or primary,
        primary_text=primary,
        secondary_text=secondary,
        category=category,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def no_early_exit() -> Settings:
    return Settings(performance={"enable_early_termination": False})


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A workspace with two projects, a small task tree and a memory notebook."""
    data_dir = tmp_path / ".agentic-tools-mcp"
    tasks_dir = data_dir / "tasks"
    tasks_dir.mkdir(parents=True)
    (tasks_dir / "tasks.json").write_text(
        json.dumps(
            {
                "projects": [
                    {"id": "p1", "name": "Website", "description": "Marketing site"},
                    {"id": "p2", "name": "Infra", "description": "Build and deploy"},
                ],
                "tasks": [
                    {
                        "id": "t1",
                        "name": "Design mockups",
                        "details": "create wireframes for homepage",
                        "projectId": "p1",
                        "completed": False,
                    },
                    {
                        "id": "t2",
                        "name": "Setup CI",
                        "details": "configure pipeline and tests",
                        "projectId": "p2",
                        "completed": True,
                    },
                    {
                        "id": "t3",
                        "name": "Review design",
                        "details": "collect feedback",
                        "projectId": "p1",
                        "parentId": "t1",
                    },
                    {
                        "id": "t4",
                        "name": "Orphan design task",
                        "details": "",
                        "projectId": "gone",
                    },
                ],
                "subtasks": [],
            }
        ),
        encoding="utf-8",
    )

    memories_dir = data_dir / "memories"
    _write_memory(memories_dir, "general", "deploy_notes", "m1", "Deploy notes", "use the staging pipeline first")
    _write_memory(memories_dir, "design", "colour_palette", "m2", "Colour palette", "brand blues and greys")
    _write_memory(memories_dir, "design", "design_system", "m3", "Design system", "components and tokens")
    return tmp_path


def _write_memory(
    memories_dir: Path, category: str, stem: str, memory_id: str, title: str, details: str
) -> None:
    """Write a note the way the notebook stores it on disk."""
    path = memories_dir / category / f"{stem}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "id": memory_id,
        "title": title,
        "details": details,
        "category": category,
        "dateCreated": "2025-01-02T10:00:00.000Z",
        "dateUpdated": "2025-01-03T12:30:00.000Z",
    }
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
