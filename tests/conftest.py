"""Shared fixtures for content store, validation, and CLI tests."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest

from metrickit_content.content import (
    BulletsSection,
    CategoryIntroBlock,
    ContentStore,
    Guide,
    GuideExample,
    HeadingSection,
    ParagraphSection,
    TableSection,
)

REPO_ROOT = Path(__file__).resolve().parents[1]


def make_guide(slug: str = "roas-guide", **overrides: object) -> Guide:
    """Construct a small but complete guide for fixture stores."""
    fields: dict[str, object] = {
        "slug": slug,
        "title": "ROAS: What it is and how to use it",
        "description": "A practical guide to ROAS.",
        "category": "paid-ads",
        "updated_at": "2026-01-05",
        "sections": (
            HeadingSection(text="Definition"),
            ParagraphSection(text="ROAS = revenue attributed to ads / ad spend"),
            BulletsSection(items=("Compare within one attribution window.",)),
        ),
        "related_calculator_slugs": ("roas-calculator",),
        "examples": (
            GuideExample(
                label="Ecommerce example",
                calculator_slug="roas-calculator",
                params={"revenue": "5000", "adSpend": "1000"},
            ),
        ),
    }
    fields.update(overrides)
    return Guide(**fields)  # type: ignore[arg-type]


@pytest.fixture
def fixture_store() -> ContentStore:
    """Return a three-guide store covering every section kind."""
    table_guide = make_guide(
        "ltv-cac-guide",
        title="LTV:CAC ratio",
        category="saas-metrics",
        sections=(
            HeadingSection(text="Reading the ratio", level=3),
            TableSection(
                columns=("LTV:CAC", "Reading"),
                rows=(("Below 1:1", "Losing money"), ("Around 3:1", "Healthy")),
            ),
        ),
        related_calculator_slugs=("ltv-to-cac-calculator",),
        related_glossary_slugs=("ltv-to-cac",),
        examples=(),
    )
    return ContentStore(
        guides=(
            make_guide(),
            make_guide("roi-guide", related_calculator_slugs=("roi-calculator",)),
            table_guide,
        ),
        category_intros={
            "paid-ads": (
                CategoryIntroBlock(
                    title="How to use paid ads metrics",
                    paragraphs=("Compare apples to apples.",),
                    bullets=("Use ROAS for campaign iteration.",),
                ),
            ),
        },
    )


def _write_guides_yaml(directory: Path, body: str, name: str = "guides.yaml") -> Path:
    """Write a guides YAML file under ``directory/guides`` and return its path."""
    guides_dir = directory / "guides"
    guides_dir.mkdir(parents=True, exist_ok=True)
    path = guides_dir / name
    path.write_text(dedent(body).strip() + "\n", encoding="utf-8")
    return path


@pytest.fixture
def write_guides() -> typ.Callable[..., Path]:
    """Expose the guides YAML writer to loader tests."""
    return _write_guides_yaml


@pytest.fixture
def catalog_path(tmp_path: Path) -> Path:
    """Write a small calculator and glossary catalog export."""
    path = tmp_path / "catalog.yaml"
    path.write_text(
        dedent(
            """
            calculators:
              - slug: roas-calculator
                category: paid-ads
                guide: roas-guide
                inputs: [revenue, adSpend]
              - slug: roi-calculator
                category: paid-ads
                guide: roi-guide
                inputs: [revenue, cost]
              - slug: nrr-calculator
                category: saas-metrics
                guide: nrr-guide
                inputs: [startingMrr]
            glossary:
              - roas
              - roi
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def site_config_path(tmp_path: Path) -> Path:
    """Write a site config pointing at the repository catalog export."""
    path = tmp_path / "site.yaml"
    path.write_text(
        dedent(
            f"""
            site:
              name: MetricKit
              url: https://example.invalid/
              sitemap_output: {tmp_path / "public" / "sitemap.xml"}
              static_routes: [/, /guides]
            content:
              catalog: {REPO_ROOT / "config" / "catalog.yaml"}
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def guide_factory() -> typ.Callable[..., Guide]:
    """Expose :func:`make_guide` to tests that need bespoke guides."""
    return make_guide
