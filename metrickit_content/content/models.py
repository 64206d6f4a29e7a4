"""Typed dataclasses describing the guide and category-intro corpus.

Every record is frozen and validates its own local shape on construction, so
a malformed content literal fails while the store is being built rather than
when a page is rendered.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from types import MappingProxyType

CategorySlug = typ.Literal["saas-metrics", "paid-ads", "finance"]
CATEGORY_SLUGS: tuple[str, ...] = typ.get_args(CategorySlug)
HEADING_LEVELS = (2, 3)


class ContentError(ValueError):
    """Raised when literal content is structurally invalid."""


class UnknownCategoryError(ContentError):
    """Raised when a category falls outside the closed category set."""


def ensure_category(value: str) -> CategorySlug:
    """Return ``value`` when it names a known category, else raise."""
    if value not in CATEGORY_SLUGS:
        known = ", ".join(CATEGORY_SLUGS)
        msg = f"Unknown category '{value}'. Known categories: {known}"
        raise UnknownCategoryError(msg)
    return typ.cast("CategorySlug", value)


def _require_text(owner: str, field: str, value: object) -> None:
    if not isinstance(value, str) or not value.strip():
        msg = f"{owner} requires a non-empty '{field}'."
        raise ContentError(msg)


@dc.dataclass(frozen=True, slots=True)
class HeadingSection:
    """Second- or third-level heading inside a guide body."""

    text: str
    level: int = 2
    kind: typ.Literal["heading"] = dc.field(default="heading", init=False)

    def __post_init__(self) -> None:
        _require_text("Heading section", "text", self.text)
        if self.level not in HEADING_LEVELS:
            msg = f"Heading level must be 2 or 3, got {self.level!r}."
            raise ContentError(msg)


@dc.dataclass(frozen=True, slots=True)
class ParagraphSection:
    """Plain paragraph of guide prose."""

    text: str
    kind: typ.Literal["paragraph"] = dc.field(default="paragraph", init=False)

    def __post_init__(self) -> None:
        _require_text("Paragraph section", "text", self.text)


@dc.dataclass(frozen=True, slots=True)
class BulletsSection:
    """Unordered list of short statements."""

    items: tuple[str, ...]
    kind: typ.Literal["bullets"] = dc.field(default="bullets", init=False)

    def __post_init__(self) -> None:
        if not self.items:
            msg = "Bullets section requires at least one item."
            raise ContentError(msg)
        for item in self.items:
            _require_text("Bullets section", "items", item)


@dc.dataclass(frozen=True, slots=True)
class TableSection:
    """Table with ordered column headers and equally wide rows."""

    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    kind: typ.Literal["table"] = dc.field(default="table", init=False)

    def __post_init__(self) -> None:
        if not self.columns:
            msg = "Table section requires at least one column."
            raise ContentError(msg)
        width = len(self.columns)
        for index, row in enumerate(self.rows):
            if len(row) != width:
                msg = (
                    f"Table row {index} has {len(row)} cells but the table "
                    f"declares {width} columns."
                )
                raise ContentError(msg)


GuideSection = HeadingSection | ParagraphSection | BulletsSection | TableSection


@dc.dataclass(frozen=True, slots=True)
class GuideFaq:
    """Question and answer pair shown under a guide."""

    question: str
    answer: str

    def __post_init__(self) -> None:
        _require_text("Guide FAQ", "question", self.question)
        _require_text("Guide FAQ", "answer", self.answer)


@dc.dataclass(frozen=True, slots=True)
class GuideExample:
    """Worked example that deep-links into a calculator with pre-filled inputs.

    Attributes
    ----------
    label : str
        Link text shown to readers.
    calculator_slug : str
        Slug of the calculator the example opens.
    params : Mapping[str, str]
        Calculator input values keyed by input name. Stored read-only.
    note : str or None
        Optional caption rendered under the link.
    """

    label: str
    calculator_slug: str
    params: typ.Mapping[str, str] = dc.field(default_factory=dict)
    note: str | None = None

    def __post_init__(self) -> None:
        _require_text("Guide example", "label", self.label)
        _require_text(f"Guide example '{self.label}'", "calculator", self.calculator_slug)
        for key, value in self.params.items():
            if not isinstance(key, str) or not isinstance(value, str):
                msg = (
                    f"Guide example '{self.label}' params must map strings to "
                    f"strings, got {key!r}: {value!r}."
                )
                raise ContentError(msg)
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


@dc.dataclass(frozen=True, slots=True)
class Guide:
    """Structured explanatory document attached to one or more calculators.

    Attributes
    ----------
    slug : str
        Unique identifier, also used as the URL segment.
    title : str
        Display title.
    description : str
        One-sentence summary used in listings and meta tags.
    category : CategorySlug
        Category the guide is filed under.
    updated_at : str
        ISO ``YYYY-MM-DD`` date, kept as authored.
    sections : tuple[GuideSection, ...]
        Body blocks in rendering order.
    related_calculator_slugs : tuple[str, ...]
        Calculators linked from the guide.
    related_glossary_slugs : tuple[str, ...]
        Glossary terms linked from the guide; may be empty.
    faqs : tuple[GuideFaq, ...]
        Optional question and answer pairs.
    examples : tuple[GuideExample, ...]
        Optional calculator deep links.
    seo : Mapping[str, str]
        Opaque metadata overrides (for example an alternate ``title``).
    """

    slug: str
    title: str
    description: str
    category: CategorySlug
    updated_at: str
    sections: tuple[GuideSection, ...]
    related_calculator_slugs: tuple[str, ...]
    related_glossary_slugs: tuple[str, ...] = ()
    faqs: tuple[GuideFaq, ...] = ()
    examples: tuple[GuideExample, ...] = ()
    seo: typ.Mapping[str, str] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        _require_text("Guide", "slug", self.slug)
        owner = f"Guide '{self.slug}'"
        _require_text(owner, "title", self.title)
        _require_text(owner, "description", self.description)
        _require_text(owner, "updated_at", self.updated_at)
        ensure_category(self.category)
        for slug in self.related_calculator_slugs:
            _require_text(owner, "related_calculators", slug)
        for slug in self.related_glossary_slugs:
            _require_text(owner, "related_glossary", slug)
        object.__setattr__(self, "seo", MappingProxyType(dict(self.seo)))


@dc.dataclass(frozen=True, slots=True)
class CategoryIntroBlock:
    """Introductory copy rendered at the top of a category page."""

    title: str
    paragraphs: tuple[str, ...]
    bullets: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _require_text("Category intro block", "title", self.title)
        if not self.paragraphs:
            msg = f"Category intro block '{self.title}' requires a paragraph."
            raise ContentError(msg)


__all__ = [
    "CATEGORY_SLUGS",
    "BulletsSection",
    "CategoryIntroBlock",
    "CategorySlug",
    "ContentError",
    "Guide",
    "GuideExample",
    "GuideFaq",
    "GuideSection",
    "HeadingSection",
    "ParagraphSection",
    "TableSection",
    "UnknownCategoryError",
    "ensure_category",
]
