"""Inline markup stripping and inline suppression extraction.

Checked lines are rendered HTML fragments. Elements carrying the marker class
(``<span class="ignore RULE_ID">...</span>``) declare that the rule ids listed
as their other classes must not be reported for the text they wrap.
"""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from src.models import InlineSuppressedRegion

from .errors import MalformedInlineMarkupError
from .markup_check_config import INLINE_SUPPRESSION_CLASS


def normalise_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim both ends."""
    return " ".join(text.split())


def _parse_fragment(raw_text: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(raw_text, "html.parser")
    except ParserRejectedMarkup as exc:
        raise MalformedInlineMarkupError(raw_text, str(exc)) from exc


def _clean_offset(raw_text: str, position: int) -> int:
    """Map a non-whitespace position in ``raw_text`` onto its normalised text."""
    prefix = raw_text[:position]
    normalised = normalise_whitespace(prefix)
    if normalised and prefix[-1].isspace():
        return len(normalised) + 1
    return len(normalised)


def extract_inline_suppressions(
    raw_text: str,
    marker_class: str = INLINE_SUPPRESSION_CLASS,
) -> tuple[str, list[InlineSuppressedRegion]]:
    """Strip markup from ``raw_text`` and collect inline suppressed regions.

    Each region records where its text starts inside ``clean_text``, so a
    marked word is never confused with an unmarked copy on the same line.

    Returns:
            ``(clean_text, regions)`` where ``clean_text`` is the plain text of
            the whole fragment and ``regions`` follows the document order of the
            marked elements.

    Raises:
            MalformedInlineMarkupError: If the fragment cannot be parsed.
    """

    soup = _parse_fragment(raw_text)

    # Offset of every rendered string inside the unnormalised plain text.
    offsets: dict[int, int] = {}
    parts: list[str] = []
    position = 0
    for string in soup.strings:
        offsets[id(string)] = position
        parts.append(string)
        position += len(string)
    plain_text = "".join(parts)

    regions: list[InlineSuppressedRegion] = []
    for element in soup.select(f".{marker_class}"):
        strings = [item for item in element.descendants if id(item) in offsets]
        element_text = "".join(strings)
        covered = normalise_whitespace(element_text)
        if not covered:
            continue
        first = offsets[id(strings[0])]
        leading = len(element_text) - len(element_text.lstrip())
        regions.append(
            InlineSuppressedRegion(
                rule_ids=frozenset(element.get("class") or ()),
                covered_text=covered,
                start=_clean_offset(plain_text, first + leading),
            )
        )
    return normalise_whitespace(plain_text), regions


def strip_inline_markup(raw_text: str) -> str:
    """Return the plain text of ``raw_text`` with every tag removed."""
    return normalise_whitespace(_parse_fragment(raw_text).get_text())
