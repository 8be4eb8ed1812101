"""Location-bearing value types produced while walking a document.

Both types are frozen: whenever the text of a line is re-derived (for example
after inline markup has been stripped) a new instance is created instead of
mutating the existing one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class SourceLocation:
    """A piece of text bound to the file and line it starts on."""

    text: str
    line: int
    file: Path

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError(f"line must be >= 1 (got {self.line})")

    def with_text(self, text: str) -> "SourceLocation":
        """Return a copy that points at the same line but carries ``text``."""
        return replace(self, text=text)

    def split_lines(self) -> list["SourceLocation"]:
        """Split the text on line breaks into one location per line.

        A text containing N line breaks always yields N + 1 locations with
        consecutive line numbers starting at ``self.line``.
        """
        return [
            SourceLocation(text=part, line=self.line + index, file=self.file)
            for index, part in enumerate(_LINE_BREAK_RE.split(self.text))
        ]


@dataclass(frozen=True)
class InlineSuppressedRegion:
    """A span of a single line explicitly marked to suppress rule ids.

    ``start`` is the offset of ``covered_text`` inside the stripped line the
    region was extracted from.
    """

    rule_ids: frozenset[str]
    covered_text: str
    start: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"start must be >= 0 (got {self.start})")

    @property
    def end(self) -> int:
        return self.start + len(self.covered_text)

    def suppresses(self, rule_id: str, marker_class: str) -> bool:
        """Return True when ``rule_id`` is silenced by this region.

        A region carrying only the marker class silences every rule.
        """
        named = self.rule_ids - {marker_class}
        if not named:
            return True
        return rule_id in named
