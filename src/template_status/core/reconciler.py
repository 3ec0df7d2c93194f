"""Compare template releases against the catalog and collect open PRs."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Protocol

from template_status.config.settings import Settings
from template_status.core.catalog import CatalogReader, classify
from template_status.core.discovery import discover_templates, is_repository
from template_status.core.git_inspector import GitError
from template_status.core.github_client import PullRequestLookupError
from template_status.models.template import PullRequest, StatusReport, TemplateStatus
from template_status.utils.version_compare import sort_versions

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class RepositoryInspector(Protocol):
    def fetch_tags(self, path) -> bool: ...
    def pull(self, path) -> bool: ...
    def list_tags(self, path) -> list[str]: ...
    def latest_tag(self, path) -> str | None: ...
    def count_commits(self, path, since_tag: str | None = None) -> int: ...


class PullRequestLister(Protocol):
    def list_open(self, full_name: str) -> list[PullRequest]: ...


def catalog_reader(settings: Settings) -> CatalogReader:
    return CatalogReader(
        settings.catalog_dir,
        templates_subdir=settings.catalog_templates_subdir,
        extension=settings.catalog_extension,
    )


def open_pull_requests(lister: PullRequestLister, full_name: str) -> tuple[PullRequest, ...] | None:
    """Open PRs of a repository, or None when the lookup failed."""
    try:
        return tuple(lister.list_open(full_name))
    except PullRequestLookupError as e:
        logger.warning("%s", e)
        return None


def check_template(
    name: str,
    settings: Settings,
    inspector: RepositoryInspector,
    lister: PullRequestLister,
    catalog: CatalogReader,
    fetch: bool = True,
) -> TemplateStatus:
    """Build the status row of a single template.

    Nothing raised here is allowed to cost the template its row: git
    problems degrade to unknown, missing catalog entries to missing.
    """
    path = settings.workspace_dir / name
    repo = is_repository(path)
    latest: str | None = None
    unreleased: int | None = None
    fetch_failed = False
    tag_lookup_failed = False

    if repo:
        if fetch:
            fetch_failed = not inspector.fetch_tags(path)
        try:
            latest = inspector.latest_tag(path)
        except GitError as e:
            logger.warning("%s: cannot read tags: %s", name, e)
            tag_lookup_failed = True
        if not tag_lookup_failed:
            try:
                unreleased = inspector.count_commits(path, since_tag=latest)
            except GitError as e:
                logger.warning("%s: cannot count commits: %s", name, e)
    else:
        logger.warning("%s is not a git repository, skipping git checks", path)

    pinned = catalog.pinned_version(name)
    latest_known = repo and not tag_lookup_failed
    return TemplateStatus(
        name=name,
        is_repository=repo,
        latest_tag=latest,
        unreleased=unreleased,
        catalog_version=pinned,
        catalog_state=classify(pinned, latest, latest_known=latest_known),
        pull_requests=open_pull_requests(lister, settings.template_repo(name)),
        fetch_failed=fetch_failed,
        tag_lookup_failed=tag_lookup_failed,
    )


def build_report(
    settings: Settings,
    inspector: RepositoryInspector,
    lister: PullRequestLister,
    fetch: bool = True,
    workers: int | None = None,
    on_progress: ProgressCallback | None = None,
) -> StatusReport:
    """Run every per-template check and return the complete report.

    Raises WorkspaceError if the workspace cannot be listed. The rows keep
    discovery order whatever order the workers finish in.
    """
    names = discover_templates(settings.workspace_dir, settings.template_prefix)
    catalog = catalog_reader(settings)
    report = StatusReport(
        workspace=settings.workspace_dir,
        catalog_repo=settings.catalog_repo,
        catalog_present=catalog.exists,
    )
    if not names:
        return report

    if fetch:
        catalog.refresh(inspector)

    total = len(names)
    workers = max(1, min(workers or settings.max_workers, total))

    def _check(name: str) -> TemplateStatus:
        return check_template(name, settings, inspector, lister, catalog, fetch=fetch)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        try:
            futures = [pool.submit(_check, name) for name in names]
            for i, (name, future) in enumerate(zip(names, futures), 1):
                if on_progress:
                    on_progress(i, total, name)
                report.templates.append(future.result())
        except BaseException:
            # Drop queued checks; the partial report is never rendered
            pool.shutdown(wait=False, cancel_futures=True)
            raise

    report.catalog_pull_requests = open_pull_requests(lister, settings.catalog_repo)
    return report


def collect_tags(
    name: str,
    settings: Settings,
    inspector: RepositoryInspector,
    fetch: bool = True,
) -> list[str]:
    """Tags of one template, newest first. Raises GitError."""
    path = settings.workspace_dir / name
    if not is_repository(path):
        raise GitError(f"{path} is not a git repository")
    if fetch:
        inspector.fetch_tags(path)
    return sort_versions(inspector.list_tags(path), reverse=True)
