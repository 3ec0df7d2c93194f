"""tstat tags <template> - Version-sorted tags of one template."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from template_status.cli.options import (
    CatalogDirOption,
    NoFetchOption,
    OutputOption,
    WorkspaceOption,
    settings_from_options,
)
from template_status.core.catalog import classify
from template_status.core.git_inspector import GitError, GitInspector
from template_status.core.reconciler import catalog_reader, collect_tags
from template_status.models import NONE, NOT_FOUND, UNKNOWN
from template_status.output.themes import CATALOG_COLORS
from template_status.utils.version_compare import classify_update, parse_version

app = typer.Typer()
console = Console()

_UPDATE_COLORS = {
    "major": "red bold",
    "minor": "yellow",
    "patch": "green",
    "up-to-date": "dim",
    "unknown": "dim",
}


@app.callback(invoke_without_command=True)
def tags(
    template: str = typer.Argument(help="Template directory name, e.g. template-dns-record"),
    workspace: Optional[Path] = WorkspaceOption,
    catalog_dir: Optional[Path] = CatalogDirOption,
    no_fetch: bool = NoFetchOption,
    output: str = OutputOption,
) -> None:
    """List the tags of a template, newest first, against the catalog pin."""
    cfg = settings_from_options(workspace, catalog_dir=catalog_dir)
    inspector = GitInspector(timeout=cfg.git_timeout)

    try:
        ordered = collect_tags(template, cfg, inspector, fetch=not no_fetch)
    except GitError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    latest = ordered[0] if ordered else None
    try:
        unreleased: int | None = inspector.count_commits(cfg.workspace_dir / template, since_tag=latest)
    except GitError:
        unreleased = None
    pinned = catalog_reader(cfg).pinned_version(template)
    state = classify(pinned, latest)
    update_type = classify_update(pinned, latest) if pinned and latest else "unknown"

    if output == "json":
        data = {
            "template": template,
            "tags": ordered,
            "latest_tag": latest,
            "catalog_version": pinned,
            "catalog_state": state.value,
            "update_type": update_type,
            "unreleased_commits": unreleased,
        }
        console.print_json(json.dumps(data, indent=2))
        return

    table = Table(title=f"Tags: {escape(template)}", expand=False)
    table.add_column("Tag", style="bold", no_wrap=True)
    table.add_column("Version", style="dim")
    table.add_column("Notes", no_wrap=True)

    for tag in ordered:
        notes = []
        if tag == latest:
            notes.append("[green]latest[/green]")
        if tag == pinned:
            notes.append("[cyan]in catalog[/cyan]")
        parsed = parse_version(tag)
        table.add_row(escape(tag), str(parsed) if parsed else "[red]unparsed[/red]", ", ".join(notes))

    if ordered:
        console.print(table)
    else:
        console.print(f"[red]{escape(template)} has no tags ({NONE})[/red]")

    color = CATALOG_COLORS.get(state, "white")
    console.print(f"\nCatalog: [{color}]{escape(pinned or NOT_FOUND)}[/{color}] ({state.value})")
    if pinned and latest and pinned != latest:
        upd_color = _UPDATE_COLORS.get(update_type, "white")
        console.print(f"Catalog is behind by a [{upd_color}]{update_type}[/{upd_color}] update")
    console.print(f"Unreleased commits: {UNKNOWN if unreleased is None else unreleased}")
