"""Semver comparison and ordering utilities for release tags."""

from __future__ import annotations

import re
from typing import Iterable

from packaging.version import Version, InvalidVersion

_DIGITS = re.compile(r"(\d+)")
# Semver pre-release suffixes PEP 440 rejects, e.g. v2.0.0-hotfix.1
_SEMVER_SUFFIX = re.compile(r"^[vV]?(\d+(?:\.\d+)*)-([0-9A-Za-z][0-9A-Za-z.-]*)$")


def parse_version(v: str) -> Version | None:
    """Parse a version string, returning None on failure."""
    try:
        return Version(v)
    except InvalidVersion:
        # Try stripping leading 'v'
        if v[:1] in ("v", "V"):
            try:
                return Version(v[1:])
            except InvalidVersion:
                pass
    return None


def _natural_key(s: str) -> tuple:
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in _DIGITS.split(s)
        if part
    )


def version_sort_key(tag: str) -> tuple:
    """Sort key ordering tags by version rather than by string.

    Parseable tags rank above unparseable ones and compare part by part,
    so v1.10.0 > v1.9.0 and v1.0.0-rc1 < v1.0.0. Semver suffixes that PEP
    440 cannot read (v2.0.0-SNAPSHOT) rank as pre-releases of their base
    version. Other tags fall back to a natural sort. The raw tag breaks
    ties between equal versions.
    """
    parsed = parse_version(tag)
    if parsed is not None:
        return (1, Version(parsed.base_version), 1, parsed, tag)
    match = _SEMVER_SUFFIX.match(tag)
    if match:
        return (1, Version(match.group(1)), 0, _natural_key(match.group(2)), tag)
    return (0, _natural_key(tag), tag)


def sort_versions(tags: Iterable[str], reverse: bool = False) -> list[str]:
    return sorted(tags, key=version_sort_key, reverse=reverse)


def latest_version(tags: Iterable[str]) -> str | None:
    """Return the highest tag under version ordering, or None when empty."""
    tags = [t for t in tags if t]
    if not tags:
        return None
    return max(tags, key=version_sort_key)


def classify_update(current: str, latest: str) -> str:
    """Classify the update type between two version strings.

    Returns: "major", "minor", "patch", "up-to-date", or "unknown".
    """
    cur = parse_version(current)
    lat = parse_version(latest)

    if cur is None or lat is None:
        return "unknown"
    if lat <= cur:
        return "up-to-date"
    if lat.major > cur.major:
        return "major"
    if lat.minor > cur.minor:
        return "minor"
    return "patch"

