"""Colour maps and styled cell values for the status report."""

from rich.markup import escape

from template_status.models import NONE, NOT_FOUND, UNKNOWN, CatalogState
from template_status.models.template import TemplateStatus

CATALOG_COLORS: dict[CatalogState, str] = {
    CatalogState.MATCHED: "green",
    CatalogState.OUTDATED: "yellow",
    CatalogState.MISSING: "red",
}

SENTINEL_COLOR = "red"
UNCLASSIFIED_COLOR = "dim"


def _color(text: str, color: str) -> str:
    return f"[{color}]{escape(text)}[/{color}]"


def styled_tag(status: TemplateStatus) -> str:
    if not status.latest_known:
        return _color(UNKNOWN, SENTINEL_COLOR)
    if status.latest_tag is None:
        return _color(NONE, SENTINEL_COLOR)
    return _color(status.latest_tag, "green")


def styled_catalog(status: TemplateStatus) -> str:
    if status.catalog_state == CatalogState.MISSING or status.catalog_version is None:
        return _color(NOT_FOUND, CATALOG_COLORS[CatalogState.MISSING])
    # Unclassified pins (latest tag unknown) are dimmed
    color = CATALOG_COLORS.get(status.catalog_state, UNCLASSIFIED_COLOR)
    return _color(status.catalog_version, color)


def styled_count(count: int | None) -> str:
    """Zero is green, anything pending yellow, undetermined red."""
    if count is None:
        return _color(UNKNOWN, SENTINEL_COLOR)
    if count > 0:
        return _color(str(count), "yellow")
    return _color("0", "green")
