"""Tests for the content store lookups and the packaged corpus.

Fixture stores cover the lookup contract in isolation; the packaged corpus is
checked for slug uniqueness, table shape, and category-intro closure.
"""

from __future__ import annotations

import typing as typ

import pytest

from metrickit_content.content import (
    CATEGORY_SLUGS,
    ContentError,
    ContentStore,
    UnknownCategoryError,
    build_content_store,
    default_store,
    get_category_intro_blocks,
    get_guide,
    list_guides,
)

if typ.TYPE_CHECKING:
    from metrickit_content.content import Guide


def test_get_guide_returns_stored_record(fixture_store: ContentStore) -> None:
    guide = fixture_store.get_guide("roas-guide")
    assert guide is not None, "expected roas-guide to resolve"
    assert guide is fixture_store.list_guides()[0], (
        "expected lookups to share the stored record"
    )


@pytest.mark.parametrize(
    "slug", ["nonexistent-guide", "ROAS-GUIDE", " roas-guide", "roas-guide/", ""]
)
def test_get_guide_misses_return_none(fixture_store: ContentStore, slug: str) -> None:
    """Lookups are exact and case-sensitive; a miss is None, not an error."""
    assert fixture_store.get_guide(slug) is None, f"expected no match for {slug!r}"


def test_list_guides_preserves_authored_order(fixture_store: ContentStore) -> None:
    slugs = [guide.slug for guide in fixture_store.list_guides()]
    assert slugs == ["roas-guide", "roi-guide", "ltv-cac-guide"]


def test_lookups_are_idempotent(fixture_store: ContentStore) -> None:
    assert fixture_store.list_guides() == fixture_store.list_guides()
    assert fixture_store.get_guide("roi-guide") == fixture_store.get_guide("roi-guide")


def test_duplicate_slugs_abort_construction(
    guide_factory: typ.Callable[..., Guide],
) -> None:
    with pytest.raises(ContentError, match="Duplicate guide slug: roas-guide"):
        ContentStore(guides=(guide_factory(), guide_factory(title="Other body")))


def test_empty_store_is_rejected() -> None:
    with pytest.raises(ContentError, match="at least one guide"):
        ContentStore(guides=())


def test_intro_keys_must_be_known_categories(
    guide_factory: typ.Callable[..., Guide],
) -> None:
    with pytest.raises(UnknownCategoryError):
        ContentStore(guides=(guide_factory(),), category_intros={"crypto": ()})


def test_category_intro_lookup(fixture_store: ContentStore) -> None:
    blocks = fixture_store.get_category_intro_blocks("paid-ads")
    assert [block.title for block in blocks] == ["How to use paid ads metrics"]
    assert fixture_store.get_category_intro_blocks("finance") == (), (
        "expected an empty tuple for a category without intro copy"
    )


def test_category_intro_lookup_rejects_unknown_category(
    fixture_store: ContentStore,
) -> None:
    with pytest.raises(UnknownCategoryError):
        fixture_store.get_category_intro_blocks("crypto")


def test_guides_in_category(fixture_store: ContentStore) -> None:
    slugs = [guide.slug for guide in fixture_store.guides_in_category("paid-ads")]
    assert slugs == ["roas-guide", "roi-guide"]
    assert fixture_store.guides_in_category("finance") == ()


def test_store_mappings_are_read_only(fixture_store: ContentStore) -> None:
    with pytest.raises(TypeError):
        fixture_store.category_intros["finance"] = ()  # type: ignore[index]


def test_membership_and_length(fixture_store: ContentStore) -> None:
    assert "roi-guide" in fixture_store
    assert "made-up-guide" not in fixture_store
    assert len(fixture_store) == 3


def test_packaged_slugs_are_unique() -> None:
    slugs = [guide.slug for guide in list_guides()]
    assert len(slugs) == len(set(slugs)), "expected every packaged slug to be unique"
    assert len(slugs) == 14, f"expected 14 packaged guides, got {len(slugs)}"


def test_packaged_guides_resolve_by_slug() -> None:
    for guide in list_guides():
        assert get_guide(guide.slug) == guide, f"expected {guide.slug} to resolve"
    assert get_guide("nonexistent-guide") is None


def test_packaged_tables_are_rectangular() -> None:
    tables = [
        (guide.slug, section)
        for guide in list_guides()
        for section in guide.sections
        if section.kind == "table"
    ]
    assert tables, "expected at least one packaged table"
    for slug, table in tables:
        for row in table.rows:
            assert len(row) == len(table.columns), (
                f"{slug}: row {row!r} does not match {len(table.columns)} columns"
            )


@pytest.mark.parametrize("category", CATEGORY_SLUGS)
def test_packaged_category_intros_never_raise(category: str) -> None:
    blocks = get_category_intro_blocks(category)
    assert isinstance(blocks, tuple), "expected a tuple even when no blocks exist"
    for block in blocks:
        assert block.paragraphs, f"{category}: intro '{block.title}' has no paragraph"


def test_default_store_is_built_once() -> None:
    assert default_store() is default_store(), "expected a cached process-wide store"


def test_rebuilt_store_equals_default_store() -> None:
    assert build_content_store() == default_store(), (
        "expected two builds of the same content to compare equal"
    )


def test_packaged_roas_guide_matches_example_scenario() -> None:
    guide = get_guide("roas-guide")
    assert guide is not None
    assert guide.category == "paid-ads"
    example = guide.examples[0]
    assert example.calculator_slug == "roas-calculator"
    assert dict(example.params) == {"revenue": "5000", "adSpend": "1000"}
