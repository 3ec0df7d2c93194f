"""Template directory discovery in the workspace root."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class WorkspaceError(Exception):
    """The workspace root cannot be enumerated."""


def discover_templates(workspace: Path, prefix: str = "template-") -> list[str]:
    """Return the sorted names of template directories under *workspace*.

    Directories without a .git are included; the caller reports them as
    unknown instead of skipping them.
    """
    workspace = Path(workspace)
    if not workspace.is_dir():
        raise WorkspaceError(f"Workspace {workspace} is not a directory")
    try:
        entries = list(workspace.iterdir())
    except OSError as e:
        raise WorkspaceError(f"Cannot list workspace {workspace}: {e}") from e

    names = sorted(
        entry.name
        for entry in entries
        if entry.name.startswith(prefix) and entry.is_dir()
    )
    logger.debug("Discovered %d template(s) in %s", len(names), workspace)
    return names


def is_repository(path: Path) -> bool:
    """True if *path* is a git working copy (.git dir or worktree file)."""
    return (Path(path) / ".git").exists()
