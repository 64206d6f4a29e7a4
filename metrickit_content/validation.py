"""Referential-integrity checks between guides and external catalogs.

Guides link to calculators and glossary terms by slug only. This module
compares those links with the slugs a caller supplies and reports every
reference that does not resolve. It never edits content and never fetches
catalogs itself; it is meant for build and CI runs, not request handling.

Severity policy
---------------
- Missing calculators (a guide's ``related_calculators``, an example's
  ``calculator`` or a glossary term's related calculators) are errors: they
  break user-facing links.
- Missing glossary terms and unknown example parameters are warnings, as are
  calculator or glossary links to a guide the store does not hold.

Example
-------
>>> from metrickit_content.content import default_store
>>> from metrickit_content.validation import validate_references
>>> report = validate_references(
...     default_store().list_guides(),
...     calculator_slugs={"roas-calculator"},
...     glossary_slugs=set(),
... )
>>> report.ok
False
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .catalogs import GlossaryEntry
    from .content.models import Guide

Severity = typ.Literal["error", "warning"]
ReferenceKind = typ.Literal["calculator", "glossary", "param", "guide"]


class DanglingReferenceError(ValueError):
    """Raised when a report holds error-level dangling references."""


@dc.dataclass(frozen=True, slots=True)
class DanglingReference:
    """A single cross-reference that does not resolve.

    Attributes
    ----------
    kind : ReferenceKind
        What the reference points at.
    owner : str
        Slug of the record holding the reference (a guide, or a calculator for
        back-links).
    field : str
        Field holding the reference, e.g. ``related_calculators`` or
        ``examples[0].calculator``.
    target : str
        The slug or parameter name that failed to resolve.
    severity : Severity
        ``"error"`` fails CI; ``"warning"`` only reports.
    """

    kind: ReferenceKind
    owner: str
    field: str
    target: str
    severity: Severity

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.owner, self.field, self.target)

    def describe(self) -> str:
        """Return a one-line human readable summary."""
        match self.kind:
            case "calculator":
                what = "missing calculator"
            case "glossary":
                what = "missing glossary term"
            case "param":
                what = "unknown calculator input"
            case _:
                what = "missing guide"
        return f"{self.severity}: {self.owner} {self.field} -> {what} '{self.target}'"


@dc.dataclass(frozen=True, slots=True)
class ReferenceReport:
    """All dangling references found in one validation run."""

    findings: tuple[DanglingReference, ...] = ()

    @property
    def errors(self) -> tuple[DanglingReference, ...]:
        return tuple(item for item in self.findings if item.severity == "error")

    @property
    def warnings(self) -> tuple[DanglingReference, ...]:
        return tuple(item for item in self.findings if item.severity == "warning")

    @property
    def ok(self) -> bool:
        """Return True when no error-level finding exists."""
        return not self.errors

    def for_kind(self, kind: ReferenceKind) -> tuple[DanglingReference, ...]:
        return tuple(item for item in self.findings if item.kind == kind)

    def raise_for_errors(self) -> None:
        """Raise :class:`DanglingReferenceError` listing every error finding."""
        if self.ok:
            return
        lines = "\n".join(item.describe() for item in self.errors)
        msg = f"{len(self.errors)} dangling calculator reference(s):\n{lines}"
        raise DanglingReferenceError(msg)


def validate_references(
    guides: cabc.Iterable[Guide],
    calculator_slugs: cabc.Container[str],
    glossary_slugs: cabc.Container[str],
    *,
    calculator_inputs: cabc.Mapping[str, cabc.Collection[str]] | None = None,
    calculator_guides: cabc.Mapping[str, str] | None = None,
    glossary_links: cabc.Mapping[str, GlossaryEntry] | None = None,
) -> ReferenceReport:
    """Report every guide reference that does not resolve.

    Parameters
    ----------
    guides : Iterable[Guide]
        Guides to inspect, usually ``store.list_guides()``.
    calculator_slugs : Container[str]
        Slugs present in the calculator catalog.
    glossary_slugs : Container[str]
        Slugs present in the glossary catalog.
    calculator_inputs : Mapping[str, Collection[str]], optional
        Accepted input names per calculator. When given, example parameters
        are checked against the target calculator's inputs.
    calculator_guides : Mapping[str, str], optional
        Guide slug each calculator links back to. When given, back-links to
        guides absent from ``guides`` are reported.
    glossary_links : Mapping[str, GlossaryEntry], optional
        Glossary terms keyed by slug. When given, each term's related guides
        (warnings) and related calculators (errors) are checked.

    Returns
    -------
    ReferenceReport
        Findings in guide order, then calculator back-links, then glossary
        links. A reference repeated within one field is reported once.
    """
    guide_list = list(guides)
    findings: list[DanglingReference] = []
    for guide in guide_list:
        findings.extend(
            _check_guide(guide, calculator_slugs, glossary_slugs, calculator_inputs)
        )

    known_guides = {guide.slug for guide in guide_list}
    if calculator_guides is not None:
        findings.extend(
            DanglingReference(
                kind="guide",
                owner=calculator,
                field="guide",
                target=guide_slug,
                severity="warning",
            )
            for calculator, guide_slug in calculator_guides.items()
            if guide_slug not in known_guides
        )
    if glossary_links is not None:
        for term in glossary_links.values():
            findings.extend(_check_term(term, known_guides, calculator_slugs))
    return ReferenceReport(findings=_unique(findings))


def _unique(
    findings: cabc.Iterable[DanglingReference],
) -> tuple[DanglingReference, ...]:
    seen: set[tuple[str, str, str]] = set()
    unique: list[DanglingReference] = []
    for finding in findings:
        if finding.key in seen:
            continue
        seen.add(finding.key)
        unique.append(finding)
    return tuple(unique)


def _check_term(
    term: GlossaryEntry,
    guide_slugs: cabc.Container[str],
    calculator_slugs: cabc.Container[str],
) -> cabc.Iterator[DanglingReference]:
    for slug in term.related_guides:
        if slug not in guide_slugs:
            yield DanglingReference(
                "guide", term.slug, "glossary.related_guides", slug, "warning"
            )
    for slug in term.related_calculators:
        if slug not in calculator_slugs:
            yield DanglingReference(
                "calculator", term.slug, "glossary.related_calculators", slug, "error"
            )


def _check_guide(
    guide: Guide,
    calculator_slugs: cabc.Container[str],
    glossary_slugs: cabc.Container[str],
    calculator_inputs: cabc.Mapping[str, cabc.Collection[str]] | None,
) -> cabc.Iterator[DanglingReference]:
    for slug in guide.related_calculator_slugs:
        if slug not in calculator_slugs:
            yield DanglingReference(
                "calculator", guide.slug, "related_calculators", slug, "error"
            )

    for index, example in enumerate(guide.examples):
        calculator = example.calculator_slug
        if calculator not in calculator_slugs:
            yield DanglingReference(
                "calculator",
                guide.slug,
                f"examples[{index}].calculator",
                calculator,
                "error",
            )
            continue
        if calculator_inputs is None or calculator not in calculator_inputs:
            continue
        accepted = calculator_inputs[calculator]
        for name in example.params:
            if name not in accepted:
                yield DanglingReference(
                    "param", guide.slug, f"examples[{index}].params", name, "warning"
                )

    for slug in guide.related_glossary_slugs:
        if slug not in glossary_slugs:
            yield DanglingReference(
                "glossary", guide.slug, "related_glossary", slug, "warning"
            )


__all__ = [
    "DanglingReference",
    "DanglingReferenceError",
    "ReferenceReport",
    "validate_references",
]
