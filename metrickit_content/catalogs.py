"""Read-only snapshots of the calculator and glossary catalogs.

Neither catalog is owned by the content package. Callers export them to YAML
(``config/catalog.yaml`` by default) and hand the resulting
:class:`CatalogSnapshot` to the reference validator or the sitemap builder.

Example
-------
>>> from pathlib import Path
>>> from metrickit_content.catalogs import load_catalog
>>> catalog = load_catalog(Path("config/catalog.yaml"))  # doctest: +SKIP
>>> "roas-calculator" in catalog.calculator_slugs  # doctest: +SKIP
True
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from types import MappingProxyType

from ruamel.yaml import YAML

from .content.models import ensure_category

if typ.TYPE_CHECKING:
    from pathlib import Path


class CatalogError(ValueError):
    """Raised when a catalog export is malformed."""


@dc.dataclass(frozen=True, slots=True)
class CalculatorEntry:
    """Calculator metadata the content layer cares about.

    Attributes
    ----------
    slug : str
        Calculator identifier referenced by guides.
    category : str
        Category the calculator page is filed under.
    inputs : tuple[str, ...]
        Input names accepted in pre-filled example links.
    guide_slug : str | None
        Guide the calculator page links back to, if any.
    """

    slug: str
    category: str
    inputs: tuple[str, ...] = ()
    guide_slug: str | None = None


@dc.dataclass(frozen=True, slots=True)
class GlossaryEntry:
    """A glossary term and the pages its own page links to."""

    slug: str
    related_guides: tuple[str, ...] = ()
    related_calculators: tuple[str, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class CatalogSnapshot:
    """Calculators and glossary terms known at validation time."""

    calculators: tuple[CalculatorEntry, ...] = ()
    glossary: tuple[GlossaryEntry, ...] = ()

    @property
    def glossary_slugs(self) -> frozenset[str]:
        """Return the set of known glossary slugs."""
        return frozenset(entry.slug for entry in self.glossary)

    @property
    def glossary_links(self) -> typ.Mapping[str, GlossaryEntry]:
        """Return glossary terms that link onward, keyed by slug."""
        return MappingProxyType(
            {
                entry.slug: entry
                for entry in self.glossary
                if entry.related_guides or entry.related_calculators
            }
        )

    @property
    def calculator_slugs(self) -> frozenset[str]:
        """Return the set of known calculator slugs."""
        return frozenset(entry.slug for entry in self.calculators)

    @property
    def calculator_inputs(self) -> typ.Mapping[str, tuple[str, ...]]:
        """Return accepted input names keyed by calculator slug."""
        return MappingProxyType({entry.slug: entry.inputs for entry in self.calculators})

    @property
    def calculator_guides(self) -> typ.Mapping[str, str]:
        """Return the guide each calculator links back to."""
        return MappingProxyType(
            {
                entry.slug: entry.guide_slug
                for entry in self.calculators
                if entry.guide_slug
            }
        )


def load_catalog(path: Path) -> CatalogSnapshot:
    """Load a calculator and glossary catalog export.

    Parameters
    ----------
    path : Path
        YAML file with a ``calculators`` list (``slug``, ``category``, optional
        ``inputs`` and ``guide``) and a ``glossary`` list. Glossary items are
        bare slugs, or mappings with ``slug`` and optional ``related_guides``
        and ``related_calculators`` lists.

    Returns
    -------
    CatalogSnapshot
        Parsed catalog contents.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    CatalogError
        If the export is structurally invalid or repeats a slug.
    """
    if not path.exists():
        msg = f"Catalog file '{path}' not found."
        raise FileNotFoundError(msg)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        raw = loader.load(handle) or {}
    if not isinstance(raw, dict):
        msg = "Top-level catalog structure must be a mapping."
        raise CatalogError(msg)

    calculators: list[CalculatorEntry] = []
    seen: set[str] = set()
    for payload in raw.get("calculators") or []:
        match payload:
            case {"slug": slug, "category": category, **rest}:
                pass
            case _:
                msg = f"Calculator entry {payload!r} requires 'slug' and 'category'."
                raise CatalogError(msg)
        slug = str(slug)
        if slug in seen:
            msg = f"Duplicate calculator slug: {slug}"
            raise CatalogError(msg)
        seen.add(slug)
        guide = rest.get("guide")
        calculators.append(
            CalculatorEntry(
                slug=slug,
                category=ensure_category(str(category)),
                inputs=tuple(str(name) for name in rest.get("inputs") or []),
                guide_slug=str(guide) if guide else None,
            )
        )

    glossary = [_glossary_entry(payload) for payload in raw.get("glossary") or []]
    slugs = [entry.slug for entry in glossary]
    if len(set(slugs)) != len(slugs):
        msg = "Glossary slugs must be unique."
        raise CatalogError(msg)

    return CatalogSnapshot(calculators=tuple(calculators), glossary=tuple(glossary))


def _slug_list(owner: str, field: str, value: object) -> tuple[str, ...]:
    match value:
        case None:
            return ()
        case list() as items if all(isinstance(item, str) for item in items):
            return tuple(items)
        case _:
            msg = f"{owner} '{field}' must be a list of slugs, got {value!r}."
            raise CatalogError(msg)


def _glossary_entry(payload: object) -> GlossaryEntry:
    """Build a glossary entry from a bare slug or a ``slug`` mapping."""
    match payload:
        case str() as slug:
            return GlossaryEntry(slug=slug)
        case {"slug": str() as slug, **rest}:
            owner = f"Glossary term '{slug}'"
            return GlossaryEntry(
                slug=slug,
                related_guides=_slug_list(
                    owner, "related_guides", rest.get("related_guides")
                ),
                related_calculators=_slug_list(
                    owner, "related_calculators", rest.get("related_calculators")
                ),
            )
        case _:
            msg = f"Glossary entry {payload!r} must be a slug or have a 'slug' key."
            raise CatalogError(msg)


__all__ = [
    "CalculatorEntry",
    "CatalogError",
    "CatalogSnapshot",
    "GlossaryEntry",
    "load_catalog",
]
