"""Data models for Template Status."""

from __future__ import annotations

import enum

# Display sentinels for values that are absent or could not be determined
NONE = "none"
UNKNOWN = "unknown"
NOT_FOUND = "not found"


class CatalogState(enum.Enum):
    MATCHED = "matched"
    OUTDATED = "outdated"
    MISSING = "missing"
