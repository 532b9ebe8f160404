"""Tests for the workspace record sources."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from tasktree.core.exceptions import StorageError
from tasktree.search.base import RecordSourceProtocol
from tasktree.storage.memories import MemoryStore
from tasktree.storage.tasks import TaskStore
from tasktree.storage.workspace import workspace_paths


class TestWorkspacePaths:
    def test_layout(self, tmp_path: Path) -> None:
        paths = workspace_paths(tmp_path)
        assert paths.tasks_file == tmp_path.resolve() / ".agentic-tools-mcp" / "tasks" / "tasks.json"
        assert paths.memories_dir == tmp_path.resolve() / ".agentic-tools-mcp" / "memories"

    def test_missing_workspace(self, tmp_path: Path) -> None:
        with pytest.raises(NotADirectoryError):
            workspace_paths(tmp_path / "nope")


class TestTaskStore:
    def test_records_follow_file_order(self, workspace: Path) -> None:
        store = TaskStore(workspace_paths(workspace).tasks_file)
        records = store.get_records()

        assert isinstance(store, RecordSourceProtocol)
        assert [r.id for r in records] == ["t1", "t2", "t3", "t4"]
        assert records[0].primary_text == "Design mockups"
        assert records[0].secondary_text == "create wireframes for homepage"
        assert records[0].category is None
        assert records[0].source.project_id == "p1"

    def test_subtask_parent_is_kept(self, workspace: Path) -> None:
        tasks = TaskStore(workspace_paths(workspace).tasks_file).get_tasks()
        assert {t.id: t.parent_id for t in tasks}["t3"] == "t1"

    def test_legacy_subtasks_array_is_not_searched(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        path.write_text(
            json.dumps(
                {
                    "tasks": [{"id": "t1", "name": "Parent", "projectId": "p"}],
                    "subtasks": [{"id": "s1", "name": "Child", "projectId": "p", "taskId": "t1"}],
                }
            ),
            encoding="utf-8",
        )
        store = TaskStore(path)
        assert [t.id for t in store.get_tasks()] == ["t1"]
        assert [r.id for r in store.get_records()] == ["t1"]

    def test_snapshot_pairs_records_with_project_names(self, workspace: Path) -> None:
        snapshot = TaskStore(workspace_paths(workspace).tasks_file).snapshot()

        assert isinstance(snapshot, RecordSourceProtocol)
        assert [r.id for r in snapshot.get_records()] == ["t1", "t2", "t3", "t4"]
        by_id = {t.id: t for t in snapshot.tasks}
        assert snapshot.project_name(by_id["t2"]) == "Infra"
        assert snapshot.project_name(by_id["t4"]) == "Unknown Project"

    def test_project_names(self, workspace: Path) -> None:
        store = TaskStore(workspace_paths(workspace).tasks_file)
        assert store.project_names() == {"p1": "Website", "p2": "Infra"}

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = TaskStore(tmp_path / "tasks.json")
        assert store.get_records() == []
        assert store.get_projects() == []

    def test_missing_sections_are_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        path.write_text("{}", encoding="utf-8")
        assert TaskStore(path).get_records() == []

    @pytest.mark.parametrize(
        "content",
        ["{broken", "[]", json.dumps({"tasks": [{"id": "t1"}]})],
    )
    def test_corrupt_file_raises(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "tasks.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(StorageError):
            TaskStore(path).get_records()

    def test_rereads_file_on_every_call(self, workspace: Path) -> None:
        path = workspace_paths(workspace).tasks_file
        store = TaskStore(path)
        assert len(store.get_records()) == 4

        data = json.loads(path.read_text(encoding="utf-8"))
        data["tasks"] = data["tasks"][:1]
        path.write_text(json.dumps(data), encoding="utf-8")

        assert len(store.get_records()) == 1


class TestMemoryStore:
    def test_categories_visited_in_sorted_order(self, workspace: Path) -> None:
        store = MemoryStore(workspace_paths(workspace).memories_dir)

        assert store.get_categories() == ["design", "general"]
        assert [r.id for r in store.get_records()] == ["m2", "m3", "m1"]

    def test_on_disk_fields_are_read(self, workspace: Path) -> None:
        records = MemoryStore(workspace_paths(workspace).memories_dir).get_records()
        by_id = {r.id: r for r in records}

        assert by_id["m1"].primary_text == "Deploy notes"
        assert by_id["m1"].secondary_text == "use the staging pipeline first"
        memory = by_id["m1"].source
        assert memory.content == "use the staging pipeline first"
        assert memory.created_at == "2025-01-02T10:00:00.000Z"
        assert memory.updated_at == "2025-01-03T12:30:00.000Z"

    def test_default_category_reads_as_uncategorised(self, workspace: Path) -> None:
        records = MemoryStore(workspace_paths(workspace).memories_dir).get_records()
        by_id = {r.id: r for r in records}
        assert by_id["m1"].category is None
        assert by_id["m2"].category == "design"

    def test_category_filter(self, workspace: Path) -> None:
        store = MemoryStore(workspace_paths(workspace).memories_dir).with_category("design")
        assert [r.id for r in store.get_records()] == ["m2", "m3"]

    def test_unknown_category_is_empty(self, workspace: Path) -> None:
        store = MemoryStore(workspace_paths(workspace).memories_dir, category="recipes")
        assert store.get_records() == []

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        store = MemoryStore(tmp_path / "memories")
        assert store.get_categories() == []
        assert store.get_records() == []

    def test_unreadable_files_are_skipped(
        self, workspace: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        memories_dir = workspace_paths(workspace).memories_dir
        (memories_dir / "design" / "broken.json").write_text("{oops", encoding="utf-8")
        (memories_dir / "design" / "no_title.json").write_text(
            json.dumps({"id": "m9", "details": "untitled"}), encoding="utf-8"
        )

        with caplog.at_level(logging.WARNING, logger="tasktree.storage.memories"):
            records = MemoryStore(memories_dir).get_records()

        assert [r.id for r in records] == ["m2", "m3", "m1"]
        assert caplog.text.count("Skipping unreadable memory file") == 2
