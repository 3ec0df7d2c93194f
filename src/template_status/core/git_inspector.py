"""Read-only git queries against local template clones."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from template_status.utils.version_compare import latest_version, sort_versions

logger = logging.getLogger(__name__)


class GitError(Exception):
    """A git command failed or could not be run."""


class GitInspector:
    """Thin wrapper around the git CLI.

    Fetch and pull are best-effort: failures are logged and reported as
    False, never raised. Queries on local state raise GitError.
    """

    def __init__(self, timeout: float = 60.0, git: str = "git"):
        self.timeout = timeout
        self.git = git
        self._env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}

    def _run(self, path: Path, *args: str) -> str:
        cmd = [self.git, "-C", str(path), *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=self._env,
            )
        except subprocess.TimeoutExpired as e:
            raise GitError(f"git {args[0]} timed out after {self.timeout}s in {path}") from e
        except OSError as e:
            raise GitError(f"Could not run git in {path}: {e}") from e

        if result.returncode != 0:
            raise GitError(f"git {' '.join(args)} failed in {path}: {result.stderr.strip()}")
        return result.stdout

    def fetch_tags(self, path: Path) -> bool:
        """Refresh remote tags. Returns False if the fetch failed."""
        try:
            self._run(path, "fetch", "--tags", "--quiet")
        except GitError as e:
            logger.warning("Tag fetch failed, using cached tags: %s", e)
            return False
        return True

    def pull(self, path: Path) -> bool:
        """Fast-forward the current branch. Returns False if the pull failed."""
        try:
            self._run(path, "pull", "--ff-only", "--quiet")
        except GitError as e:
            logger.warning("Pull failed, using local state: %s", e)
            return False
        return True

    def list_tags(self, path: Path) -> list[str]:
        """Return all local tags in ascending version order."""
        out = self._run(path, "tag", "--list")
        return sort_versions(line.strip() for line in out.splitlines() if line.strip())

    def latest_tag(self, path: Path) -> str | None:
        return latest_version(self.list_tags(path))

    def has_commits(self, path: Path) -> bool:
        try:
            self._run(path, "rev-parse", "--verify", "--quiet", "HEAD")
        except GitError:
            return False
        return True

    def count_commits(self, path: Path, since_tag: str | None = None) -> int:
        """Count commits on HEAD, or strictly after *since_tag* when given.

        An empty repository (no HEAD yet) has zero commits.
        """
        if not self.has_commits(path):
            return 0
        rev_range = "HEAD" if since_tag is None else f"refs/tags/{since_tag}..HEAD"
        out = self._run(path, "rev-list", "--count", rev_range)
        try:
            return int(out.strip())
        except ValueError as e:
            raise GitError(f"Unexpected rev-list output in {path}: {out!r}") from e
