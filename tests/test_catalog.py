"""Tests for catalog entry lookup and pin classification."""

import pytest

from template_status.core.catalog import CatalogReader, classify, version_from_reference
from template_status.models import CatalogState


@pytest.fixture
def reader(workspace):
    return CatalogReader(workspace.root / "catalog")


def test_entry_path(reader, workspace):
    assert reader.entry_path("template-a") == workspace.root / "catalog" / "templates" / "template-a.yaml"


def test_pinned_version_from_package_field(reader, workspace):
    workspace.pin("template-a", "v1.0.3")
    assert reader.package_reference("template-a") == (
        "ghcr.io/open-service-portal/configuration-template-a:v1.0.3"
    )
    assert reader.pinned_version("template-a") == "v1.0.3"


def test_missing_entry_is_none(reader, workspace):
    workspace.pin("template-a", "v1.0.0")
    assert reader.pinned_version("template-b") is None


def test_missing_catalog_dir(tmp_path):
    reader = CatalogReader(tmp_path / "catalog")
    assert not reader.exists
    assert reader.pinned_version("template-a") is None


def test_entry_without_package_field(reader, workspace):
    entry = workspace.pin("template-a", "v1.0.0")
    entry.write_text("apiVersion: v1\nkind: ConfigMap\ndata:\n  note: nothing pinned\n")
    assert reader.pinned_version("template-a") is None


def test_package_found_in_later_document(reader, workspace):
    entry = workspace.pin("template-a", "v1.0.0")
    entry.write_text(
        "apiVersion: v1\nkind: Namespace\nmetadata:\n  name: templates\n"
        "---\n"
        "apiVersion: pkg.crossplane.io/v1\nkind: Configuration\n"
        "spec:\n  package: ghcr.io/org/configuration-template-a:v2.1.0\n"
    )
    assert reader.pinned_version("template-a") == "v2.1.0"


def test_invalid_yaml_falls_back_to_line_scan(reader, workspace):
    entry = workspace.pin("template-a", "v1.0.0")
    entry.write_text("spec:\n  package: ghcr.io/org/config:v0.4.2\n  broken: [unclosed\n")
    assert reader.pinned_version("template-a") == "v0.4.2"


def test_undecodable_entry_is_none(reader, workspace):
    entry = workspace.pin("template-a", "v1.0.0")
    entry.write_bytes(b"spec:\n  package: \xff\xfe\n")
    assert reader.package_reference("template-a") is None
    assert reader.pinned_version("template-a") is None


def test_custom_layout(workspace):
    entry = workspace.root / "catalog" / "configurations" / "template-a.yml"
    entry.parent.mkdir(parents=True)
    entry.write_text("spec:\n  package: ghcr.io/org/config:v3.0.0\n")

    reader = CatalogReader(workspace.root / "catalog", templates_subdir="configurations", extension=".yml")
    assert reader.pinned_version("template-a") == "v3.0.0"


@pytest.mark.parametrize(
    "ref, expected",
    [
        ("ghcr.io/org/config:v1.0.3", "v1.0.3"),
        ("localhost:5000/org/config:v1.0.3", "v1.0.3"),
        ("ghcr.io/org/config: v1.0.3 ", "v1.0.3"),
        ("ghcr.io/org/config", None),
        ("ghcr.io/org/config:", None),
    ],
)
def test_version_from_reference(ref, expected):
    assert version_from_reference(ref) == expected


def test_classify_matched():
    assert classify("v1.1.0", "v1.1.0") == CatalogState.MATCHED


def test_classify_outdated():
    assert classify("v1.0.0", "v1.1.0") == CatalogState.OUTDATED


def test_classify_uses_exact_equality():
    # Same version, different spelling: still not the tag the catalog should pin
    assert classify("1.1.0", "v1.1.0") == CatalogState.OUTDATED


def test_classify_missing():
    assert classify(None, "v1.1.0") == CatalogState.MISSING
    assert classify(None, None) == CatalogState.MISSING


def test_classify_pinned_without_any_tag_is_outdated():
    assert classify("v1.0.0", None) == CatalogState.OUTDATED


def test_classify_pin_against_unknown_latest_is_unclassified():
    assert classify("v1.0.0", None, latest_known=False) is None
    assert classify(None, None, latest_known=False) == CatalogState.MISSING


@pytest.mark.parametrize("pinned", [None, "v1.0.0", "v1.1.0", "v9.9.9"])
@pytest.mark.parametrize("latest", [None, "v1.0.0", "v1.1.0"])
def test_classification_is_exclusive_and_stable(pinned, latest):
    first = classify(pinned, latest)
    assert classify(pinned, latest) == first
    matches = [
        pinned is None,
        pinned is not None and pinned == latest,
        pinned is not None and pinned != latest,
    ]
    assert matches.count(True) == 1
    expected = [CatalogState.MISSING, CatalogState.MATCHED, CatalogState.OUTDATED][matches.index(True)]
    assert first == expected
