"""Enumerations shared by the document tree and the issue models."""

from __future__ import annotations

from enum import Enum


class NodeKind(str, Enum):
    """Closed set of document node variants understood by the walker.

    Values:
        DOCUMENT: Tree root; contributes no text of its own.
        SECTION: Heading plus everything nested below it; text is the title.
        LIST_ITEM: A single list entry; text is its leading paragraph.
        CONTENT: Paragraphs, table cells and raw HTML blocks.
        CONTAINER: Lists, block quotes, tables and table rows.
        LITERAL: Code blocks and thematic breaks; never checked.
    """

    DOCUMENT = "DOCUMENT"
    SECTION = "SECTION"
    LIST_ITEM = "LIST_ITEM"
    CONTENT = "CONTENT"
    CONTAINER = "CONTAINER"
    LITERAL = "LITERAL"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]
