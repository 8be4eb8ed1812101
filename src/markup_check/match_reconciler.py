"""Filtering of raw engine matches against block and inline suppressions."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from src.models import InlineSuppressedRegion, Issue, RuleMatch, SourceLocation

from .markup_check_config import INLINE_SUPPRESSION_CLASS

LOGGER = logging.getLogger(__name__)


def highlight_context(text: str, start: int, end: int) -> str:
    """Wrap ``text[start:end]`` in ``**`` markers."""
    if not text:
        return ""
    start = max(0, min(len(text), start))
    end = max(start, min(len(text), end))
    if end == start:
        end = min(len(text), start + 1)
    return f"{text[:start]}**{text[start:end]}**{text[end:]}"


def _intersects(match: RuleMatch, start: int, end: int) -> bool:
    if match.from_offset == match.to_offset:
        return start <= match.from_offset < end
    return match.from_offset < end and start < match.to_offset


def is_inline_suppressed(
    match: RuleMatch,
    regions: Sequence[InlineSuppressedRegion],
    marker_class: str = INLINE_SUPPRESSION_CLASS,
) -> bool:
    return any(
        region.suppresses(match.rule_id, marker_class)
        and _intersects(match, region.start, region.end)
        for region in regions
    )


def build_issue(location: SourceLocation, match: RuleMatch) -> Issue:
    """Turn a surviving match into an Issue bound to ``location``."""
    return Issue(
        location=location,
        rule_id=match.rule_id,
        message=match.message,
        issue_type=match.issue_type,
        category=match.category,
        offending_text=match.span_text(location.text),
        suggestions=list(match.suggestions),
        highlighted_context=highlight_context(
            location.text, match.from_offset, match.to_offset
        ),
    )


def reconcile(
    location: SourceLocation,
    hierarchy_suppressed: Iterable[str],
    inline_regions: Iterable[InlineSuppressedRegion],
    raw_matches: Iterable[RuleMatch],
    *,
    marker_class: str = INLINE_SUPPRESSION_CLASS,
) -> list[Issue]:
    """Drop suppressed matches and convert the rest into Issues.

    ``location.text`` must be the exact text that was submitted to the
    engine and the text the inline regions were extracted from; match and
    region offsets both index into it. Block and ancestor suppressions win
    regardless of position. Inline suppressions only apply when the match
    overlaps the marked span. Output order follows ``raw_matches``.
    """

    suppressed = set(hierarchy_suppressed)
    regions = list(inline_regions)
    issues: list[Issue] = []
    for match in raw_matches:
        if match.rule_id in suppressed:
            LOGGER.debug(
                "%s:%d: %s suppressed by block attribute",
                location.file, location.line, match.rule_id,
            )
            continue
        if regions and is_inline_suppressed(match, regions, marker_class):
            LOGGER.debug(
                "%s:%d: %s suppressed inline",
                location.file, location.line, match.rule_id,
            )
            continue
        issues.append(build_issue(location, match))
    return issues
