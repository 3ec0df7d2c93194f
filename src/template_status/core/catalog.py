"""GitOps catalog lookup: which template version is pinned for deployment."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from template_status.models import CatalogState

logger = logging.getLogger(__name__)

# Prefer the C-accelerated YAML loader when available.
_YamlLoader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)

_PACKAGE_LINE = re.compile(r"^\s*package:\s*[\"']?([^\"'#\s]+)")


class CatalogReader:
    """Reads per-template entries from a local clone of the catalog repo.

    Each entry lives at ``<catalog>/<subdir>/<template><extension>`` and holds
    a package reference such as ``ghcr.io/org/template-dns:v1.0.3``.
    """

    def __init__(
        self,
        catalog_dir: Path,
        templates_subdir: str = "templates",
        extension: str = ".yaml",
    ):
        self.catalog_dir = Path(catalog_dir)
        self.templates_subdir = templates_subdir
        self.extension = extension

    @property
    def exists(self) -> bool:
        return self.catalog_dir.is_dir()

    def entry_path(self, template: str) -> Path:
        return self.catalog_dir / self.templates_subdir / f"{template}{self.extension}"

    def refresh(self, inspector) -> bool:
        """Best-effort pull of the catalog clone before reading it."""
        if not self.exists:
            return False
        return inspector.pull(self.catalog_dir)

    def package_reference(self, template: str) -> str | None:
        """Return the package reference of a template entry, or None."""
        path = self.entry_path(template)
        if not path.is_file():
            return None
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.warning("Cannot read catalog entry %s", path, exc_info=True)
            return None

        try:
            docs = list(yaml.load_all(text, Loader=_YamlLoader))
        except yaml.YAMLError:
            logger.debug("Invalid YAML in %s, scanning lines", path, exc_info=True)
            return _scan_package_line(text)

        for doc in docs:
            ref = _find_package(doc)
            if ref:
                return ref
        return None

    def pinned_version(self, template: str) -> str | None:
        """Return the version suffix of the package reference, or None."""
        ref = self.package_reference(template)
        if ref is None:
            return None
        return version_from_reference(ref)


def version_from_reference(ref: str) -> str | None:
    """Return the text after the final colon of a package reference."""
    _, sep, version = ref.rpartition(":")
    version = version.strip()
    if not sep or not version:
        return None
    return version


def classify(
    pinned: str | None, latest: str | None, latest_known: bool = True
) -> CatalogState | None:
    """Exact pinned-vs-latest comparison; no newer/older semantics.

    Returns None for a pin whose latest tag could not be determined.
    """
    if pinned is None:
        return CatalogState.MISSING
    if not latest_known:
        return None
    if latest is not None and pinned == latest:
        return CatalogState.MATCHED
    return CatalogState.OUTDATED


def _find_package(node: Any) -> str | None:
    """Depth-first search for the first string ``package`` field."""
    if isinstance(node, dict):
        value = node.get("package")
        if isinstance(value, str) and value.strip():
            return value.strip()
        for child in node.values():
            found = _find_package(child)
            if found:
                return found
    elif isinstance(node, list):
        for child in node:
            found = _find_package(child)
            if found:
                return found
    return None


def _scan_package_line(text: str) -> str | None:
    for line in text.splitlines():
        m = _PACKAGE_LINE.match(line)
        if m:
            return m.group(1)
    return None
