"""Depth-first extraction of checkable lines from a document tree."""

from __future__ import annotations

import logging
from typing import Iterator

from src.models import NodeKind, SourceLocation

from .document_tree import DocumentNode, DocumentTree
from .ignore_hierarchy import resolve_ignored_rules
from .markup_check_config import SUPPRESSION_ATTRIBUTE

LOGGER = logging.getLogger(__name__)


def extract_node_text(node: DocumentNode) -> str | None:
    """Return the text a node contributes on its own, if any."""
    kind = node.kind
    if kind is NodeKind.SECTION:
        return node.title
    if kind is NodeKind.LIST_ITEM:
        return node.text
    if kind is NodeKind.CONTENT:
        return node.content
    if kind in (NodeKind.DOCUMENT, NodeKind.CONTAINER, NodeKind.LITERAL):
        return None
    raise ValueError(f"Unhandled node kind: {kind!r}")


def walk(
    tree: DocumentTree,
    attribute: str = SUPPRESSION_ATTRIBUTE,
) -> Iterator[tuple[SourceLocation, frozenset[str]]]:
    """Yield ``(location, ignored_rule_ids)`` for every line in document order.

    Traversal is pre-order: a node's own lines come before its children's.
    Multi-line text is split into one location per line with consecutive line
    numbers starting at the node's own line. Suppressions are resolved once
    per node and shared by all of its lines.
    """

    # Explicit stack so deeply nested documents cannot exhaust recursion.
    pending: list[DocumentNode] = [tree.root]
    while pending:
        node = pending.pop()
        text = extract_node_text(node)
        if text:
            ignored = resolve_ignored_rules(tree, node, attribute)
            if ignored:
                LOGGER.debug(
                    "Line %d of %s ignores %s", node.line, node.path, sorted(ignored)
                )
            block = SourceLocation(text=text, line=node.line, file=node.path)
            for location in block.split_lines():
                yield location, ignored
        if node.children:
            pending.extend(reversed(node.children))
