"""Exception hierarchy for the markup check workflow.

Read failures are left to surface as the built-in ``OSError`` family; every
other fatal condition is one of the classes below and carries enough context
(file path and, where applicable, line number) to locate the failure.
"""

from __future__ import annotations

from pathlib import Path


class MarkupCheckError(Exception):
    """Base class for errors raised while checking a document."""


class DocumentLoadError(MarkupCheckError):
    """The document text could not be parsed into a node tree."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not load {self.path}: {reason}")


class MalformedInlineMarkupError(MarkupCheckError):
    """A single line's inline markup fragment could not be parsed."""

    def __init__(self, text: str, reason: str = "") -> None:
        self.text = text
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Malformed inline markup in {text!r}{detail}")


class GrammarCheckError(MarkupCheckError):
    """The grammar engine failed while checking a line."""

    def __init__(self, path: Path | str, line: int, reason: str) -> None:
        self.path = Path(path)
        self.line = line
        self.reason = reason
        super().__init__(f"Grammar check failed at {self.path}:{line}: {reason}")
