"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

import yaml
from rich.console import Console

from template_status.models.template import PullRequest, StatusReport, TemplateStatus
from template_status.utils.version_compare import classify_update

console = Console()


def prs_to_list(prs: tuple[PullRequest, ...] | None) -> list[dict[str, Any]] | None:
    if prs is None:
        return None
    return [asdict(pr) for pr in prs]


def _template_to_dict(t: TemplateStatus) -> dict[str, Any]:
    update_type = None
    if t.is_outdated and t.catalog_version and t.latest_tag:
        update_type = classify_update(t.catalog_version, t.latest_tag)
    return {
        "name": t.name,
        "is_repository": t.is_repository,
        "latest_tag": t.latest_tag,
        "unreleased_commits": t.unreleased,
        "catalog_version": t.catalog_version,
        "catalog_state": t.catalog_state.value if t.catalog_state is not None else None,
        "update_type": update_type,
        "fetch_failed": t.fetch_failed,
        "tag_lookup_failed": t.tag_lookup_failed,
        "open_prs": t.pr_count,
        "pull_requests": prs_to_list(t.pull_requests),
    }


def report_to_dict(report: StatusReport) -> dict[str, Any]:
    return {
        "workspace": str(report.workspace),
        "catalog_repo": report.catalog_repo,
        "catalog_present": report.catalog_present,
        "templates": [_template_to_dict(t) for t in report.templates],
        "catalog_pull_requests": prs_to_list(report.catalog_pull_requests),
        "summary": report.summary,
        "outdated_count": report.outdated_count,
    }


def output_report(report: StatusReport, fmt: str) -> None:
    if fmt == "json":
        console.print_json(json.dumps(report_to_dict(report), indent=2))
    elif fmt == "yaml":
        text = yaml.dump(report_to_dict(report), default_flow_style=False, sort_keys=False)
        console.print(text, markup=False, emoji=False, soft_wrap=True)
    else:
        from template_status.output.tables import (
            catalog_pull_request_section,
            pull_request_section,
            status_table,
            summary_line,
        )
        console.print(status_table(report))
        console.print()
        console.print(pull_request_section(report))
        console.print()
        console.print(summary_line(report))
        console.print()
        console.print(catalog_pull_request_section(report))
