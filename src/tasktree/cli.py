"""CLI interface for tasktree — thin wrapper over TaskTreeService."""

from __future__ import annotations

from pathlib import Path

import click

from tasktree.api.service import TaskTreeService
from tasktree.core.config import load_settings
from tasktree.core.exceptions import ConfigError, QueryValidationError, StorageError
from tasktree.core.models import PaginatedResult, SearchQuery
from tasktree.utils.logging import setup_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.option(
    "--workspace",
    "-w",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Workspace root holding the .agentic-tools-mcp directory.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON settings file with dotted keys (e.g. \"search.threshold\").",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, workspace: Path, config_path: Path | None) -> None:
    """tasktree — Search your task tree and memory notebook."""
    setup_logging(verbose=verbose)
    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = load_settings(config_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj["workspace"] = workspace


def _get_service(ctx: click.Context) -> TaskTreeService:
    return TaskTreeService(ctx.obj["workspace"], settings=ctx.obj["settings"])


def _search_options(fn):
    fn = click.option("--limit", "-n", type=int, default=None, help="Maximum number of results.")(fn)
    fn = click.option("--threshold", "-t", type=float, default=None, help="Minimum relevance score.")(fn)
    fn = click.option("--page", "-p", type=int, default=1, show_default=True, help="Page to show.")(fn)
    fn = click.option("--page-size", type=int, default=None, help="Results per page.")(fn)
    return fn


def _echo_page_footer(result: PaginatedResult) -> None:
    info = result.pagination
    click.echo(f"\nPage {info.current_page}/{info.total_pages} ({info.total_items} results)")


@main.command()
@click.argument("query")
@_search_options
@click.pass_context
def tasks(
    ctx: click.Context,
    query: str,
    limit: int | None,
    threshold: float | None,
    page: int,
    page_size: int | None,
) -> None:
    """Search task and sub-task names and details."""
    request = SearchQuery(text=query, limit=limit, threshold=threshold, page=page, page_size=page_size)
    try:
        result = _get_service(ctx).search_tasks_paginated(request)
    except (QueryValidationError, StorageError) as exc:
        raise click.ClickException(str(exc)) from exc

    if not result.items:
        click.echo("No results found.")
        return

    for r in result.items:
        mark = "x" if r.task.completed else " "
        click.echo(f"[{mark}] {r.task.name}  ({r.project_name})  score={r.score:.2f}")
        if r.task.details:
            click.echo(f"      {r.task.details}")
    _echo_page_footer(result)


@main.command()
@click.argument("query")
@click.option("--category", "-c", default=None, help="Only search this category.")
@_search_options
@click.pass_context
def memories(
    ctx: click.Context,
    query: str,
    category: str | None,
    limit: int | None,
    threshold: float | None,
    page: int,
    page_size: int | None,
) -> None:
    """Search memory titles, content and categories."""
    request = SearchQuery(
        text=query,
        category=category,
        limit=limit,
        threshold=threshold,
        page=page,
        page_size=page_size,
    )
    try:
        result = _get_service(ctx).search_memories_paginated(request)
    except (QueryValidationError, StorageError) as exc:
        raise click.ClickException(str(exc)) from exc

    if not result.items:
        click.echo("No results found.")
        return

    for r in result.items:
        label = f"[{r.memory.category}] " if r.memory.category else ""
        click.echo(f"{label}{r.memory.title}  score={r.score:.2f}")
    _echo_page_footer(result)


@main.command("config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Print the effective settings as JSON."""
    click.echo(ctx.obj["settings"].model_dump_json(indent=2))
