"""Cyclopts CLI entrypoint for checking and exporting the guide corpus.

The ``content`` console script builds the content store (failing fast on any
malformed literal), checks guide cross-references against an exported
calculator and glossary catalog, lists and prints guides, and writes the
sitemap. ``content validate`` is intended to run in CI: it exits non-zero
when a guide links to a calculator that does not exist.

Examples
--------
Validate the packaged content against the default catalog export:

>>> from metrickit_content.cli import main
>>> main()  # doctest: +SKIP

Write the sitemap for a staging origin:

>>> from metrickit_content.cli import app
>>> app(["sitemap", "--site-url", "https://staging.example"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .catalogs import load_catalog
from .content import ContentStore, UnknownCategoryError, build_content_store
from .settings import SiteSettings, load_site_settings
from .sitemap import SitemapBuilder
from .validation import validate_references

if typ.TYPE_CHECKING:
    from .content import Guide

DEFAULT_CONFIG = Path("config/site.yaml")

app = App(name="content", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_settings(config: Path, site_url: str | None = None) -> SiteSettings:
    return load_site_settings(config, site_url=site_url)


def _load_store(settings: SiteSettings) -> ContentStore:
    return build_content_store(settings.data_dir)


@app.command(help="Check guide references against the calculator and glossary catalogs.")
def validate(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    catalog: typ.Annotated[
        Path | None,
        Parameter(help="Override the catalog export", env_var="INPUT_CATALOG"),
    ] = None,
    strict: typ.Annotated[
        bool, Parameter(help="Fail on warnings as well as errors")
    ] = False,
) -> None:
    """Validate cross-references and exit non-zero on dangling calculators.

    Parameters
    ----------
    config : Path, optional
        Site configuration naming the catalog export and content directory.
    catalog : Path or None, optional
        Catalog export to use instead of the one named in ``config``.
    strict : bool, optional
        Treat warnings (glossary, example parameters, guide back-links) as
        failures too.

    Raises
    ------
    SystemExit
        With status 1 when the run fails under the selected policy.
    """
    settings = _load_settings(config)
    store = _load_store(settings)
    snapshot = load_catalog(catalog or settings.catalog_path)
    report = validate_references(
        store.list_guides(),
        snapshot.calculator_slugs,
        snapshot.glossary_slugs,
        calculator_inputs=snapshot.calculator_inputs,
        calculator_guides=snapshot.calculator_guides,
        glossary_links=snapshot.glossary_links,
    )
    for finding in report.findings:
        print(finding.describe())
    print(
        f"checked {len(store)} guides: "
        f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)"
    )
    if not report.ok or (strict and report.findings):
        raise SystemExit(1)


@app.command(name="guides", help="List guides in authored order.")
def list_guides(
    *,
    category: typ.Annotated[
        str | None, Parameter(help="Only list guides in this category")
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print one line per guide: slug, category, updated date and title."""
    store = _load_store(_load_settings(config))
    try:
        guides = (
            store.guides_in_category(category) if category else store.list_guides()
        )
    except UnknownCategoryError as exc:
        print(exc)
        raise SystemExit(1) from exc
    for guide in guides:
        print(f"{guide.slug}\t{guide.category}\t{guide.updated_at}\t{guide.title}")


def _outline(guide: Guide) -> list[str]:
    lines = [guide.title, guide.description, ""]
    for section in guide.sections:
        match section.kind:
            case "heading":
                marker = "#" * section.level
                lines.append(f"{marker} {section.text}")
            case "paragraph":
                lines.append(section.text)
            case "bullets":
                lines.extend(f"- {item}" for item in section.items)
            case "table":
                lines.append(" | ".join(section.columns))
                lines.extend(" | ".join(row) for row in section.rows)
    if guide.examples:
        lines.append("")
        for example in guide.examples:
            params = ", ".join(f"{key}={value}" for key, value in example.params.items())
            lines.append(f"example: {example.label} -> {example.calculator_slug} ({params})")
    lines.append("")
    lines.append("calculators: " + ", ".join(guide.related_calculator_slugs))
    if guide.related_glossary_slugs:
        lines.append("glossary: " + ", ".join(guide.related_glossary_slugs))
    return lines


@app.command(help="Print the outline of a single guide.")
def show(
    slug: str,
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print a guide outline, or exit 1 when ``slug`` is unknown."""
    store = _load_store(_load_settings(config))
    guide = store.get_guide(slug)
    if guide is None:
        print(f"guide '{slug}' not found")
        raise SystemExit(1)
    for line in _outline(guide):
        print(line)


@app.command(help="Print the intro blocks for a category.")
def intro(
    category: str,
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print the category intro copy; prints nothing when none is authored."""
    store = _load_store(_load_settings(config))
    try:
        blocks = store.get_category_intro_blocks(category)
    except UnknownCategoryError as exc:
        print(exc)
        raise SystemExit(1) from exc
    for block in blocks:
        print(block.title)
        for paragraph in block.paragraphs:
            print(paragraph)
        for bullet in block.bullets:
            print(f"- {bullet}")
        print()


@app.command(help="Write sitemap.xml for categories, calculators and guides.")
def sitemap(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    site_url: typ.Annotated[
        str | None,
        Parameter(help="Override the canonical site URL", env_var="INPUT_SITE_URL"),
    ] = None,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Override the output file", env_var="INPUT_OUTPUT"),
    ] = None,
) -> None:
    """Render the sitemap and print the written path."""
    settings = _load_settings(config, site_url=site_url)
    store = _load_store(settings)
    snapshot = load_catalog(settings.catalog_path)
    path = SitemapBuilder(settings, store, snapshot).run(output)
    print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``content`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
