"""tstat status - Template release, catalog and PR report."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from template_status.cli.options import (
    CatalogDirOption,
    NoFetchOption,
    OrgOption,
    OutputOption,
    WorkspaceOption,
    settings_from_options,
)
from template_status.core.discovery import WorkspaceError
from template_status.core.git_inspector import GitInspector
from template_status.core.github_client import GitHubPullRequestLister
from template_status.core.reconciler import build_report
from template_status.output.formatters import output_report

app = typer.Typer()
console = Console()
err_console = Console(stderr=True)

EXIT_NO_TEMPLATES = 1
EXIT_BAD_WORKSPACE = 2
EXIT_INTERRUPTED = 130


@app.callback(invoke_without_command=True)
def status(
    workspace: Optional[Path] = WorkspaceOption,
    org: Optional[str] = OrgOption,
    catalog_dir: Optional[Path] = CatalogDirOption,
    no_fetch: bool = NoFetchOption,
    workers: Optional[int] = typer.Option(
        None, "--workers", "-j", min=1, help="Templates checked in parallel (default: OSP_MAX_WORKERS or 4)",
    ),
    output: str = OutputOption,
) -> None:
    """Show latest tag, catalog pin, unreleased commits and open PRs per template."""
    cfg = settings_from_options(workspace, org, catalog_dir)
    inspector = GitInspector(timeout=cfg.git_timeout)
    lister = GitHubPullRequestLister(token=cfg.github_token)

    # The report is only printed once complete, so Ctrl-C never leaves half a table
    try:
        with console.status("[bold cyan]Scanning templates…") as spinner:
            def on_progress(i: int, total: int, name: str) -> None:
                spinner.update(f"[bold cyan]Checking templates… [dim]({i}/{total})[/dim] {name}")

            report = build_report(
                cfg, inspector, lister,
                fetch=not no_fetch,
                workers=workers,
                on_progress=on_progress,
            )
    except WorkspaceError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=EXIT_BAD_WORKSPACE)
    except KeyboardInterrupt:
        err_console.print("[red]Interrupted, no report written.[/red]")
        raise typer.Exit(code=EXIT_INTERRUPTED)

    if not report.templates:
        console.print(f"No template directories found in {cfg.workspace_dir}")
        raise typer.Exit(code=EXIT_NO_TEMPLATES)

    output_report(report, output)
