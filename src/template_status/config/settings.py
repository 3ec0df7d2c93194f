"""Application configuration and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_workspace_dir() -> Path:
    """Return the workspace root holding the template and catalog clones.

    OSP_WORKSPACE_DIR wins over the current working directory.
    """
    workspace = os.environ.get("OSP_WORKSPACE_DIR", "")
    if workspace:
        return Path(workspace).expanduser()
    return Path.cwd()


def _default_github_org() -> str:
    return os.environ.get("OSP_GITHUB_ORG", "") or "open-service-portal"


def _default_github_token() -> str | None:
    # Same lookup order as the gh CLI
    for var in ("GITHUB_TOKEN", "GH_TOKEN"):
        token = os.environ.get(var, "")
        if token:
            return token
    return None


def _default_max_workers() -> int:
    try:
        return max(1, int(os.environ.get("OSP_MAX_WORKERS", "4")))
    except ValueError:
        return 4


@dataclass
class Settings:
    workspace_dir: Path = field(default_factory=_default_workspace_dir)
    github_org: str = field(default_factory=_default_github_org)
    github_token: str | None = field(default_factory=_default_github_token, repr=False)
    template_prefix: str = "template-"
    catalog_dir_name: str = "catalog"
    catalog_path: Path | None = None  # overrides workspace_dir / catalog_dir_name
    catalog_templates_subdir: str = "templates"
    catalog_extension: str = ".yaml"
    git_timeout: float = 60.0
    max_workers: int = field(default_factory=_default_max_workers)
    default_output: str = "table"

    @property
    def catalog_dir(self) -> Path:
        if self.catalog_path is not None:
            return self.catalog_path
        return self.workspace_dir / self.catalog_dir_name

    @property
    def catalog_repo(self) -> str:
        return f"{self.github_org}/{self.catalog_dir_name}"

    def template_repo(self, template: str) -> str:
        return f"{self.github_org}/{template}"


# Global singleton
settings = Settings()
