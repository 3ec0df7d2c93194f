"""tstat prs - Open pull requests across templates and the catalog."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console

from template_status.cli.options import OrgOption, OutputOption, WorkspaceOption, settings_from_options
from template_status.core.discovery import WorkspaceError, discover_templates
from template_status.core.github_client import GitHubPullRequestLister
from template_status.core.reconciler import open_pull_requests
from template_status.output.formatters import prs_to_list
from template_status.output.tables import pull_request_table

app = typer.Typer()
console = Console()


@app.callback(invoke_without_command=True)
def prs(
    workspace: Optional[Path] = WorkspaceOption,
    org: Optional[str] = OrgOption,
    output: str = OutputOption,
) -> None:
    """List open PRs of every template repository and of the catalog."""
    cfg = settings_from_options(workspace, org)
    try:
        names = discover_templates(cfg.workspace_dir, cfg.template_prefix)
    except WorkspaceError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)

    lister = GitHubPullRequestLister(token=cfg.github_token)
    with console.status("[bold cyan]Fetching pull requests…"):
        rows = [(name, open_pull_requests(lister, cfg.template_repo(name))) for name in names]
        rows.append((cfg.catalog_dir_name, open_pull_requests(lister, cfg.catalog_repo)))

    if output in ("json", "yaml"):
        data = {repo: prs_to_list(pulls) for repo, pulls in rows}
        if output == "json":
            console.print_json(json.dumps(data, indent=2))
        else:
            text = yaml.dump(data, default_flow_style=False, sort_keys=False)
            console.print(text, markup=False, emoji=False, soft_wrap=True)
        return

    total = sum(len(pulls) for _, pulls in rows if pulls)
    failed = [repo for repo, pulls in rows if pulls is None]
    if total == 0 and not failed:
        console.print("[green]No open PRs across templates and catalog[/green]")
        return

    console.print(pull_request_table(rows))
    console.print(f"\n[yellow]{total} open PR(s)[/yellow]")
    if failed:
        console.print(f"[red]Could not list PRs of: {', '.join(failed)}[/red]")
