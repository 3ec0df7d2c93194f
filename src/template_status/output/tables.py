"""Rich renderables for the status report."""

from __future__ import annotations

from rich.console import Group
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from template_status.models import UNKNOWN
from template_status.models.template import PullRequest, StatusReport
from template_status.output.themes import styled_catalog, styled_count, styled_tag


def status_table(report: StatusReport) -> Table:
    table = Table(title="Template Status", expand=False)
    table.add_column("Template", style="bold white", no_wrap=True)
    table.add_column("Latest Tag", no_wrap=True)
    table.add_column("In Catalog", no_wrap=True)
    table.add_column("Unreleased", justify="right", no_wrap=True)
    table.add_column("Open PRs", justify="right", no_wrap=True)

    for t in report.templates:
        name = escape(t.name) + (" [dim](cached tags)[/dim]" if t.fetch_failed else "")
        table.add_row(
            name,
            styled_tag(t),
            styled_catalog(t),
            styled_count(t.unreleased),
            styled_count(t.pr_count),
        )
    return table


def _pr_lines(prs: tuple[PullRequest, ...], detailed: bool = False) -> list[str]:
    lines: list[str] = []
    for pr in prs:
        if detailed:
            lines.append(f"  PR #{pr.number}: {pr.title}")
            lines.append(f"    Author: {pr.author or '-'}")
            lines.append(f"    URL: {pr.url}")
        else:
            lines.append(f"  PR #{pr.number}: {pr.url}")
    return lines


def _plain(line: str) -> Text:
    # PR titles may contain square brackets; never parse them as markup
    return Text(line, overflow="fold")


def pull_request_section(report: StatusReport) -> Group:
    """Open PRs per template, in report order."""
    parts: list = []
    with_prs = report.with_pull_requests
    failed = [t for t in report.templates if t.pull_requests is None]

    if with_prs:
        parts.append(Text("Open PRs:"))
        for t in with_prs:
            parts.append(Text.from_markup(f"[yellow]{escape(t.name)}:[/yellow]"))
            parts.extend(_plain(line) for line in _pr_lines(t.pull_requests))
    elif not failed:
        parts.append(Text.from_markup("[green]No open PRs across all templates[/green]"))

    for t in failed:
        parts.append(Text.from_markup(f"[red]{escape(t.name)}: open PRs {UNKNOWN}[/red]"))
    return Group(*parts)


def summary_line(report: StatusReport) -> Text:
    count = report.outdated_count
    if count:
        return Text.from_markup(
            f"[yellow]⚠ {count} template(s) have newer versions not yet in catalog[/yellow]"
        )
    return Text.from_markup("[green]✓ All templates in catalog are up to date[/green]")


def catalog_pull_request_section(report: StatusReport) -> Group:
    parts: list = [Text("Catalog PRs:")]
    prs = report.catalog_pull_requests
    if prs is None:
        parts.append(Text.from_markup(f"[red]Open catalog PRs {UNKNOWN}[/red]"))
    elif prs:
        parts.append(Text.from_markup("[yellow]Open catalog PRs:[/yellow]"))
        parts.extend(_plain(line) for line in _pr_lines(prs, detailed=True))
    else:
        parts.append(Text.from_markup("[green]No open catalog PRs[/green]"))
    return Group(*parts)


def pull_request_table(rows: list[tuple[str, tuple[PullRequest, ...] | None]]) -> Table:
    """Every open PR of the given (repository, PRs) pairs in one table."""
    table = Table(title="Open Pull Requests", expand=False)
    table.add_column("Repository", style="magenta", no_wrap=True)
    table.add_column("PR", justify="right", style="bold", no_wrap=True)
    table.add_column("Title", max_width=50)
    table.add_column("Author", style="cyan")
    table.add_column("URL", style="dim")

    for repo, prs in rows:
        if prs is None:
            table.add_row(escape(repo), "-", f"[red]{UNKNOWN}[/red]", "", "")
            continue
        for pr in prs:
            table.add_row(
                escape(repo), f"#{pr.number}", Text(pr.title), escape(pr.author or "-"), escape(pr.url)
            )
    return table
