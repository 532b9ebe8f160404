"""On-disk layout of a tasktree workspace."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DATA_DIR_NAME = ".agentic-tools-mcp"


@dataclass(frozen=True)
class WorkspacePaths:
    """Locations of the task file and memory notebook under a workspace root."""

    root: Path

    @property
    def data_dir(self) -> Path:
        return self.root / DATA_DIR_NAME

    @property
    def tasks_dir(self) -> Path:
        return self.data_dir / "tasks"

    @property
    def tasks_file(self) -> Path:
        return self.tasks_dir / "tasks.json"

    @property
    def memories_dir(self) -> Path:
        return self.data_dir / "memories"


def workspace_paths(workspace: Path) -> WorkspacePaths:
    """Resolve the data layout for *workspace*.

    Raises
    ------
    NotADirectoryError
        If *workspace* is not an existing directory.
    """
    if not workspace.is_dir():
        raise NotADirectoryError(f"Workspace is not a directory: {workspace}")
    return WorkspacePaths(root=workspace.resolve())
