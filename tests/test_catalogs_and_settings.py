"""Tests for the catalog export loader and the site settings loader."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from metrickit_content.catalogs import CatalogError, GlossaryEntry, load_catalog
from metrickit_content.content import UnknownCategoryError
from metrickit_content.settings import (
    DEFAULT_STATIC_ROUTES,
    SiteConfigError,
    load_site_settings,
)


def _write(path: Path, body: str) -> Path:
    path.write_text(dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_load_catalog_exposes_slugs_inputs_and_back_links(catalog_path: Path) -> None:
    catalog = load_catalog(catalog_path)
    assert catalog.calculator_slugs == {
        "roas-calculator",
        "roi-calculator",
        "nrr-calculator",
    }
    assert catalog.glossary_slugs == {"roas", "roi"}
    assert catalog.calculator_inputs["roas-calculator"] == ("revenue", "adSpend")
    assert catalog.calculator_guides["nrr-calculator"] == "nrr-guide"


def test_load_catalog_rejects_duplicate_calculators(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "catalog.yaml",
        """
        calculators:
          - {slug: roas-calculator, category: paid-ads}
          - {slug: roas-calculator, category: paid-ads}
        """,
    )
    with pytest.raises(CatalogError, match="Duplicate calculator slug"):
        load_catalog(path)


def test_load_catalog_requires_category(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "catalog.yaml",
        """
        calculators:
          - slug: roas-calculator
        """,
    )
    with pytest.raises(CatalogError, match="requires 'slug' and 'category'"):
        load_catalog(path)


def test_load_catalog_rejects_unknown_category(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "catalog.yaml",
        """
        calculators:
          - {slug: btc-calculator, category: crypto}
        """,
    )
    with pytest.raises(UnknownCategoryError):
        load_catalog(path)


def test_load_catalog_reads_glossary_links(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "catalog.yaml",
        """
        glossary:
          - roi
          - slug: roas
            related_guides: [roas-guide]
            related_calculators: [roas-calculator]
        """,
    )
    catalog = load_catalog(path)
    assert catalog.glossary_slugs == {"roas", "roi"}
    assert list(catalog.glossary_links) == ["roas"], (
        "expected only terms with onward links to be exposed"
    )
    assert catalog.glossary_links["roas"] == GlossaryEntry(
        slug="roas",
        related_guides=("roas-guide",),
        related_calculators=("roas-calculator",),
    )


def test_load_catalog_rejects_null_glossary_link(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "catalog.yaml",
        """
        glossary:
          - slug: roas
            related_guides: [~]
        """,
    )
    with pytest.raises(CatalogError, match="'related_guides' must be a list of slugs"):
        load_catalog(path)


def test_load_catalog_rejects_glossary_entry_without_slug(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "catalog.yaml",
        """
        glossary:
          - related_guides: [roas-guide]
        """,
    )
    with pytest.raises(CatalogError, match="must be a slug or have a 'slug' key"):
        load_catalog(path)


def test_load_catalog_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_catalog(tmp_path / "absent.yaml")


def test_checked_in_catalog_loads() -> None:
    catalog = load_catalog(Path(__file__).resolve().parents[1] / "config" / "catalog.yaml")
    assert "roas-calculator" in catalog.calculator_slugs
    assert "roas" in catalog.glossary_slugs


def test_load_site_settings_strips_trailing_slash(site_config_path: Path) -> None:
    settings = load_site_settings(site_config_path)
    assert settings.site_url == "https://example.invalid"
    assert settings.static_routes == ("/", "/guides")
    assert settings.catalog_path.name == "catalog.yaml"
    assert settings.data_dir is None


def test_load_site_settings_override_wins(site_config_path: Path) -> None:
    settings = load_site_settings(site_config_path, site_url="https://staging.example/")
    assert settings.site_url == "https://staging.example"


def test_load_site_settings_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path / "site.yaml", "site: {}")
    settings = load_site_settings(path)
    assert settings.static_routes == DEFAULT_STATIC_ROUTES
    assert settings.sitemap_output == Path("public/sitemap.xml")


def test_load_site_settings_rejects_relative_url(tmp_path: Path) -> None:
    path = _write(tmp_path / "site.yaml", "site:\n  url: metrickittools.com")
    with pytest.raises(SiteConfigError, match="absolute http"):
        load_site_settings(path)


def test_load_site_settings_rejects_bad_route(tmp_path: Path) -> None:
    path = _write(tmp_path / "site.yaml", "site:\n  static_routes: [about]")
    with pytest.raises(SiteConfigError, match="must start with '/'"):
        load_site_settings(path)
