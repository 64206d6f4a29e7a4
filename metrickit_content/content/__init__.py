"""Guide corpus, category intros, and the immutable store that serves them.

This subpackage parses the packaged ``data/guides/*.yaml`` and
``data/category_intros.yaml`` files into frozen dataclasses (:class:`Guide`,
:class:`CategoryIntroBlock`, and the section variants), and assembles them into
a :class:`ContentStore`. The store rejects malformed content when it is built
and afterwards only answers lookups.

Examples
--------
>>> from metrickit_content.content import get_guide, get_category_intro_blocks
>>> get_guide("roas-guide").title  # doctest: +SKIP
'ROAS: What it is and how to use it'
>>> get_guide("nonexistent-guide") is None
True
>>> len(get_category_intro_blocks("finance"))
1
"""

from .loader import guide_files, load_category_intros, load_guides
from .models import (
    CATEGORY_SLUGS,
    BulletsSection,
    CategoryIntroBlock,
    CategorySlug,
    ContentError,
    Guide,
    GuideExample,
    GuideFaq,
    GuideSection,
    HeadingSection,
    ParagraphSection,
    TableSection,
    UnknownCategoryError,
    ensure_category,
)
from .store import (
    ContentStore,
    build_content_store,
    default_store,
    get_category_intro_blocks,
    get_guide,
    list_guides,
)

__all__ = [
    "CATEGORY_SLUGS",
    "BulletsSection",
    "CategoryIntroBlock",
    "CategorySlug",
    "ContentError",
    "ContentStore",
    "Guide",
    "GuideExample",
    "GuideFaq",
    "GuideSection",
    "HeadingSection",
    "ParagraphSection",
    "TableSection",
    "UnknownCategoryError",
    "build_content_store",
    "default_store",
    "ensure_category",
    "get_category_intro_blocks",
    "get_guide",
    "guide_files",
    "list_guides",
    "load_category_intros",
    "load_guides",
]
