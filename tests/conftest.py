"""Shared test fixtures."""

from pathlib import Path

import pytest

from template_status.config.settings import Settings
from template_status.core.git_inspector import GitError
from template_status.core.github_client import PullRequestLookupError
from template_status.models.template import PullRequest
from template_status.utils.version_compare import latest_version, sort_versions

CATALOG_ENTRY = """\
apiVersion: pkg.crossplane.io/v1
kind: Configuration
metadata:
  name: {name}
  annotations:
    catalog.openportal.dev/source: github.com/open-service-portal/{name}
spec:
  package: ghcr.io/open-service-portal/configuration-{name}:{version}
"""


class FakeInspector:
    """In-memory stand-in for GitInspector, keyed by directory name.

    Each repo dict may hold ``tags``, ``commits`` (total on HEAD),
    ``unreleased`` (after the latest tag), ``fetch_ok``, ``broken`` (tag
    listing fails), ``count_broken`` (commit counting fails) and ``crash``
    (an unexpected error escapes).
    """

    def __init__(self, repos: dict[str, dict] | None = None):
        self.repos = repos or {}
        self.fetched: list[str] = []
        self.pulled: list[str] = []

    def _repo(self, path) -> dict:
        return self.repos.get(Path(path).name, {})

    def fetch_tags(self, path) -> bool:
        self.fetched.append(Path(path).name)
        return self._repo(path).get("fetch_ok", True)

    def pull(self, path) -> bool:
        self.pulled.append(Path(path).name)
        return True

    def list_tags(self, path) -> list[str]:
        repo = self._repo(path)
        if repo.get("crash"):
            raise RuntimeError(f"unexpected failure in {path}")
        if repo.get("broken"):
            raise GitError(f"git tag --list failed in {path}")
        return sort_versions(repo.get("tags", []))

    def latest_tag(self, path) -> str | None:
        return latest_version(self.list_tags(path))

    def count_commits(self, path, since_tag=None) -> int:
        repo = self._repo(path)
        if repo.get("count_broken"):
            raise GitError(f"git rev-list failed in {path}")
        if since_tag is None:
            return repo.get("commits", 0)
        return repo.get("unreleased", 0)


class FakeLister:
    """Open PRs keyed by ``org/repo``; an Exception value simulates a failure."""

    def __init__(self, pulls: dict | None = None):
        self.pulls = pulls or {}
        self.calls: list[str] = []

    def list_open(self, full_name: str) -> list[PullRequest]:
        self.calls.append(full_name)
        value = self.pulls.get(full_name, [])
        if isinstance(value, Exception):
            raise PullRequestLookupError(f"Cannot list open PRs of {full_name}: {value}")
        return list(value)


class Workspace:
    """Builds a workspace root with template clones and a catalog clone."""

    def __init__(self, root: Path):
        self.root = root

    def template(self, name: str, git: bool = True) -> Path:
        path = self.root / name
        path.mkdir(parents=True, exist_ok=True)
        if git:
            (path / ".git").mkdir(exist_ok=True)
        return path

    def pin(self, name: str, version: str) -> Path:
        entry = self.root / "catalog" / "templates" / f"{name}.yaml"
        entry.parent.mkdir(parents=True, exist_ok=True)
        (self.root / "catalog" / ".git").mkdir(exist_ok=True)
        entry.write_text(CATALOG_ENTRY.format(name=name, version=version), encoding="utf-8")
        return entry

    def settings(self, **overrides) -> Settings:
        values = dict(
            workspace_dir=self.root,
            github_org="open-service-portal",
            github_token=None,
            max_workers=2,
        )
        values.update(overrides)
        return Settings(**values)


def make_pr(number: int, title: str = "", author: str = "octocat", repo: str = "template-a") -> PullRequest:
    return PullRequest(
        number=number,
        title=title or f"Change {number}",
        author=author,
        url=f"https://github.com/open-service-portal/{repo}/pull/{number}",
    )


@pytest.fixture
def workspace(tmp_path) -> Workspace:
    return Workspace(tmp_path)


@pytest.fixture
def scenario(workspace):
    """template-a is outdated with work pending, template-b is empty."""
    workspace.template("template-a")
    workspace.template("template-b")
    workspace.pin("template-a", "v1.0.0")

    inspector = FakeInspector({
        "template-a": {"tags": ["v1.0.0", "v1.1.0"], "commits": 9, "unreleased": 2},
        "template-b": {"tags": [], "commits": 0},
    })
    lister = FakeLister({
        "open-service-portal/template-a": [make_pr(7, "Add TTL field")],
    })
    return workspace, inspector, lister
