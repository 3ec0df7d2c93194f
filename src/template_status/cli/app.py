"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="tstat",
    help="Template Status - Release, catalog and pull request overview for Open Service Portal templates.",
    no_args_is_help=True,
)


@app.callback()
def root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log git and API activity to stderr"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _register_commands() -> None:
    from template_status.cli.commands.status_cmd import app as status_app
    from template_status.cli.commands.tags_cmd import app as tags_app
    from template_status.cli.commands.prs_cmd import app as prs_app

    app.add_typer(status_app, name="status", help="Report releases, catalog drift and open PRs")
    app.add_typer(tags_app, name="tags", help="List the version-sorted tags of a template")
    app.add_typer(prs_app, name="prs", help="List open PRs of all templates and the catalog")


_register_commands()


def main() -> None:
    app()
