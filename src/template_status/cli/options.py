"""Shared CLI options."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Optional

import typer

from template_status.config.settings import Settings, settings

OutputOption = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml")
WorkspaceOption = typer.Option(
    None, "--workspace", "-w", help="Workspace root holding template-* and catalog clones (default: cwd)",
)
OrgOption = typer.Option(None, "--org", help="GitHub organization owning the repositories")
CatalogDirOption = typer.Option(None, "--catalog-dir", help="Path of the local catalog clone")
NoFetchOption = typer.Option(False, "--no-fetch", help="Skip fetching tags and pulling the catalog")


def settings_from_options(
    workspace: Optional[Path] = None,
    org: Optional[str] = None,
    catalog_dir: Optional[Path] = None,
    base: Settings = settings,
) -> Settings:
    """Return a copy of the global settings with CLI overrides applied."""
    overrides: dict = {}
    if workspace is not None:
        overrides["workspace_dir"] = workspace.expanduser()
    if org:
        overrides["github_org"] = org
    if catalog_dir is not None:
        overrides["catalog_path"] = catalog_dir.expanduser()
    return dataclasses.replace(base, **overrides)
