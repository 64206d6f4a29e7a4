"""Load guide and category-intro YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _iso_date,
    _mapping_list,
    _optional_str,
    _string_mapping,
    _string_tuple,
)
from .models import (
    BulletsSection,
    CategoryIntroBlock,
    ContentError,
    Guide,
    GuideExample,
    GuideFaq,
    GuideSection,
    HeadingSection,
    ParagraphSection,
    TableSection,
    ensure_category,
)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
GUIDES_DIRNAME = "guides"
CATEGORY_INTROS_FILENAME = "category_intros.yaml"


def _read_yaml(path: Path) -> dict[str, typ.Any]:
    """Parse ``path`` with the safe YAML 1.2 loader and return its mapping."""
    if not path.exists():
        msg = f"Content file '{path}' not found."
        raise FileNotFoundError(msg)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = f"Top-level YAML structure in '{path}' must be a mapping."
        raise ContentError(msg)
    return dict(loaded)


def guide_files(data_dir: Path | None = None) -> list[Path]:
    """Return the guide YAML files under ``data_dir`` in load order."""
    root = (data_dir or DATA_DIR) / GUIDES_DIRNAME
    return sorted(root.glob("*.yaml"))


def load_guides(paths: typ.Iterable[Path]) -> list[Guide]:
    """Load every guide declared in ``paths``.

    Parameters
    ----------
    paths : Iterable[Path]
        YAML files, each holding a top-level ``guides`` list. Files are read
        in the given order and guides keep their authored order.

    Returns
    -------
    list[Guide]
        Parsed guides. Slug uniqueness is enforced by the store, not here.

    Raises
    ------
    FileNotFoundError
        If a listed file does not exist.
    ContentError
        If any guide entry is structurally invalid.
    """
    guides: list[Guide] = []
    for path in paths:
        raw = _read_yaml(path)
        for payload in _mapping_list(str(path), "guides", raw.get("guides")):
            try:
                guides.append(_build_guide(payload))
            except ContentError as exc:
                msg = f"{path}: {exc}"
                raise ContentError(msg) from exc
    return guides


def load_category_intros(path: Path) -> dict[str, tuple[CategoryIntroBlock, ...]]:
    """Load the category → intro-blocks mapping from ``path``.

    Errors keep their type (``UnknownCategoryError`` stays one) and are
    prefixed with ``path`` like those from :func:`load_guides`.
    """
    raw = _read_yaml(path)
    categories = raw.get("categories") or {}
    if not isinstance(categories, dict):
        msg = f"{path}: 'categories' must be a mapping."
        raise ContentError(msg)
    intros: dict[str, tuple[CategoryIntroBlock, ...]] = {}
    for category, blocks in categories.items():
        try:
            intros[str(category)] = _build_intro_blocks(str(category), blocks)
        except ContentError as exc:
            msg = f"{path}: {exc}"
            raise type(exc)(msg) from exc
    return intros


def _build_intro_blocks(
    category: str, blocks: object
) -> tuple[CategoryIntroBlock, ...]:
    owner = f"Category '{category}'"
    ensure_category(category)
    return tuple(
        CategoryIntroBlock(
            title=str(block.get("title") or ""),
            paragraphs=_string_tuple(owner, "paragraphs", block.get("paragraphs")),
            bullets=_string_tuple(owner, "bullets", block.get("bullets")),
        )
        for block in _mapping_list(owner, "blocks", blocks)
    )


def _build_guide(payload: typ.Mapping[str, typ.Any]) -> Guide:
    """Build a Guide from a single YAML entry."""
    slug = _optional_str(payload.get("slug"))
    if not slug:
        msg = "Guide entry is missing 'slug'."
        raise ContentError(msg)
    owner = f"Guide '{slug}'"
    updated_at = _iso_date(payload.get("updated_at"))
    if not updated_at:
        msg = f"{owner} is missing 'updated_at'."
        raise ContentError(msg)

    sections = tuple(
        _build_section(owner, index, entry)
        for index, entry in enumerate(
            _mapping_list(owner, "sections", payload.get("sections"))
        )
    )
    if not sections:
        msg = f"{owner} requires at least one section."
        raise ContentError(msg)

    faqs = tuple(
        GuideFaq(
            question=str(entry.get("question") or ""),
            answer=str(entry.get("answer") or ""),
        )
        for entry in _mapping_list(owner, "faqs", payload.get("faqs"))
    )
    examples = tuple(
        GuideExample(
            label=str(entry.get("label") or ""),
            calculator_slug=str(entry.get("calculator") or ""),
            params=_string_mapping(owner, "params", entry.get("params")),
            note=_optional_str(entry.get("note")),
        )
        for entry in _mapping_list(owner, "examples", payload.get("examples"))
    )

    return Guide(
        slug=slug,
        title=str(payload.get("title") or ""),
        description=str(payload.get("description") or ""),
        category=ensure_category(str(payload.get("category"))),
        updated_at=updated_at,
        sections=sections,
        related_calculator_slugs=_string_tuple(
            owner, "related_calculators", payload.get("related_calculators")
        ),
        related_glossary_slugs=_string_tuple(
            owner, "related_glossary", payload.get("related_glossary")
        ),
        faqs=faqs,
        examples=examples,
        seo=_string_mapping(owner, "seo", payload.get("seo")),
    )


def _build_section(
    owner: str, index: int, payload: typ.Mapping[str, typ.Any]
) -> GuideSection:
    """Build one body block, dispatching on its ``kind`` tag."""
    where = f"{owner} section {index}"
    try:
        return _section_from_payload(where, payload)
    except ContentError as exc:
        if str(exc).startswith(where):
            raise
        msg = f"{where}: {exc}"
        raise ContentError(msg) from exc
    except (TypeError, ValueError) as exc:
        msg = f"{where}: {exc}"
        raise ContentError(msg) from exc


def _section_from_payload(
    where: str, payload: typ.Mapping[str, typ.Any]
) -> GuideSection:
    match payload:
        case {"kind": "heading", "text": text, **rest}:
            return HeadingSection(text=str(text), level=int(rest.get("level", 2)))
        case {"kind": "paragraph", "text": text}:
            return ParagraphSection(text=str(text))
        case {"kind": "bullets", "items": items}:
            return BulletsSection(items=_string_tuple(where, "items", items))
        case {"kind": "table", "columns": columns, "rows": rows}:
            if not isinstance(rows, list):
                msg = f"{where} 'rows' must be a list."
                raise ContentError(msg)
            return TableSection(
                columns=_string_tuple(where, "columns", columns),
                rows=tuple(
                    _string_tuple(where, f"rows[{number}]", row)
                    for number, row in enumerate(rows)
                ),
            )
        case {"kind": kind}:
            msg = f"{where} has unknown or incomplete kind '{kind}'."
            raise ContentError(msg)
        case _:
            msg = f"{where} is missing 'kind'."
            raise ContentError(msg)


__all__ = [
    "CATEGORY_INTROS_FILENAME",
    "DATA_DIR",
    "guide_files",
    "load_category_intros",
    "load_guides",
]
