"""Per-template status and report models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from template_status.models import CatalogState


@dataclass(frozen=True)
class PullRequest:
    number: int
    title: str
    author: str
    url: str


@dataclass(frozen=True)
class TemplateStatus:
    name: str
    is_repository: bool
    latest_tag: str | None  # None: repository has no tags
    unreleased: int | None  # None: could not be determined
    catalog_version: str | None
    catalog_state: CatalogState | None  # None: pin present but latest tag unknown
    pull_requests: tuple[PullRequest, ...] | None = ()  # None: lookup failed
    fetch_failed: bool = False
    tag_lookup_failed: bool = False

    @property
    def latest_known(self) -> bool:
        """False when tags could not be read (not a clone, or git failed)."""
        return self.is_repository and not self.tag_lookup_failed

    @property
    def pr_count(self) -> int | None:
        if self.pull_requests is None:
            return None
        return len(self.pull_requests)

    @property
    def is_outdated(self) -> bool:
        return self.catalog_state == CatalogState.OUTDATED


@dataclass
class StatusReport:
    workspace: Path
    catalog_repo: str
    catalog_present: bool
    templates: list[TemplateStatus] = field(default_factory=list)
    catalog_pull_requests: tuple[PullRequest, ...] | None = ()

    @property
    def outdated(self) -> list[TemplateStatus]:
        return [t for t in self.templates if t.is_outdated]

    @property
    def outdated_count(self) -> int:
        return len(self.outdated)

    @property
    def with_pull_requests(self) -> list[TemplateStatus]:
        """Templates with at least one open PR, in report order."""
        return [t for t in self.templates if t.pull_requests]

    @property
    def summary(self) -> dict[str, int]:
        counts = {state.value: 0 for state in CatalogState}
        for t in self.templates:
            if t.catalog_state is not None:
                counts[t.catalog_state.value] += 1
        return counts
