"""Immutable in-memory store for the guide corpus and category intros.

The store is built once, validated as a whole, and then only read. Lookups
never raise for an unknown slug: a miss is ``None`` and callers translate it
into their own not-found response.

Examples
--------
>>> from metrickit_content.content import build_content_store
>>> store = build_content_store()
>>> store.get_guide("roas-guide").category
'paid-ads'
>>> store.get_guide("ROAS-GUIDE") is None
True
"""

from __future__ import annotations

import dataclasses as dc
import functools
import typing as typ
from types import MappingProxyType

from .loader import (
    CATEGORY_INTROS_FILENAME,
    DATA_DIR,
    guide_files,
    load_category_intros,
    load_guides,
)
from .models import (
    CATEGORY_SLUGS,
    CategoryIntroBlock,
    ContentError,
    Guide,
    ensure_category,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


@dc.dataclass(frozen=True, slots=True)
class ContentStore:
    """Ordered guides plus the category → intro-blocks mapping."""

    guides: tuple[Guide, ...]
    category_intros: typ.Mapping[str, tuple[CategoryIntroBlock, ...]] = dc.field(
        default_factory=dict
    )
    _index: typ.Mapping[str, Guide] = dc.field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        guides = tuple(self.guides)
        if not guides:
            msg = "Content store requires at least one guide."
            raise ContentError(msg)
        index: dict[str, Guide] = {}
        for guide in guides:
            if guide.slug in index:
                msg = f"Duplicate guide slug: {guide.slug}"
                raise ContentError(msg)
            index[guide.slug] = guide

        intros: dict[str, tuple[CategoryIntroBlock, ...]] = {}
        for category, blocks in self.category_intros.items():
            ensure_category(category)
            intros[category] = tuple(blocks)

        object.__setattr__(self, "guides", guides)
        object.__setattr__(self, "category_intros", MappingProxyType(intros))
        object.__setattr__(self, "_index", MappingProxyType(index))

    def __len__(self) -> int:
        return len(self.guides)

    def __contains__(self, slug: object) -> bool:
        return slug in self._index

    def list_guides(self) -> tuple[Guide, ...]:
        """Return every guide in authored order."""
        return self.guides

    def get_guide(self, slug: str) -> Guide | None:
        """Return the guide whose slug matches ``slug`` exactly, or ``None``."""
        return self._index.get(slug)

    def get_category_intro_blocks(
        self, category: str
    ) -> tuple[CategoryIntroBlock, ...]:
        """Return the intro blocks for ``category``.

        Raises
        ------
        UnknownCategoryError
            If ``category`` is not one of :data:`CATEGORY_SLUGS`. A known
            category without authored intro copy yields an empty tuple.
        """
        ensure_category(category)
        return self.category_intros.get(category, ())

    def guides_in_category(self, category: str) -> tuple[Guide, ...]:
        """Return the guides filed under ``category`` in authored order."""
        ensure_category(category)
        return tuple(guide for guide in self.guides if guide.category == category)

    def categories(self) -> tuple[str, ...]:
        """Return the closed category set."""
        return CATEGORY_SLUGS


def build_content_store(data_dir: Path | None = None) -> ContentStore:
    """Load the literal content under ``data_dir`` and build a store.

    Parameters
    ----------
    data_dir : Path, optional
        Directory holding ``guides/*.yaml`` and ``category_intros.yaml``.
        Defaults to the data shipped inside the package.

    Raises
    ------
    ContentError
        If any content literal is malformed. The error is fatal: no partial
        store is ever returned.
    """
    root = data_dir or DATA_DIR
    files = guide_files(root)
    if not files:
        msg = f"No guide files found under '{root}'."
        raise ContentError(msg)
    intros_path = root / CATEGORY_INTROS_FILENAME
    intros = load_category_intros(intros_path) if intros_path.exists() else {}
    return ContentStore(guides=tuple(load_guides(files)), category_intros=intros)


@functools.cache
def default_store() -> ContentStore:
    """Return the process-wide store built from the packaged content."""
    return build_content_store()


def list_guides() -> tuple[Guide, ...]:
    """Return every packaged guide in authored order."""
    return default_store().list_guides()


def get_guide(slug: str) -> Guide | None:
    """Return the packaged guide for ``slug`` or ``None``."""
    return default_store().get_guide(slug)


def get_category_intro_blocks(category: str) -> tuple[CategoryIntroBlock, ...]:
    """Return the packaged intro blocks for ``category``."""
    return default_store().get_category_intro_blocks(category)


__all__ = [
    "ContentStore",
    "build_content_store",
    "default_store",
    "get_category_intro_blocks",
    "get_guide",
    "list_guides",
]
