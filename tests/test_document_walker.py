from __future__ import annotations

from pathlib import Path

import pytest

from src.markup_check.document_tree import DocumentTree, load_document
from src.markup_check.document_walker import extract_node_text, walk
from src.models import NodeKind

DOC = Path("doc.md")


def _lines(tree: DocumentTree) -> list[tuple[int, str]]:
    return [(location.line, location.text) for location, _ in walk(tree)]


def test_pre_order_traversal_yields_titles_before_children() -> None:
    text = "# Title\n\nBody one.\n\n## Sub\n\n- item\n\n# Other\n"

    assert _lines(load_document(text, DOC)) == [
        (1, "Title"),
        (3, "Body one."),
        (5, "Sub"),
        (7, "item"),
        (9, "Other"),
    ]


def test_multi_line_paragraph_gets_consecutive_lines() -> None:
    text = "Intro.\n\nFirst line\nsecond line\nthird line\n"

    assert _lines(load_document(text, DOC)) == [
        (1, "Intro."),
        (3, "First line"),
        (4, "second line"),
        (5, "third line"),
    ]


def test_suppressions_are_shared_by_every_sub_line() -> None:
    text = '{ignore="RULE_A"}\nline one\nline two\n\nFree line.\n'

    pairs = list(walk(load_document(text, DOC)))

    assert [(loc.line, ignored) for loc, ignored in pairs] == [
        (2, frozenset({"RULE_A"})),
        (3, frozenset({"RULE_A"})),
        (5, frozenset()),
    ]


def test_containers_and_literals_contribute_no_text() -> None:
    text = "> quoted\n\n```\ncode Ths\n```\n\n---\n"

    assert _lines(load_document(text, DOC)) == [(1, "quoted")]


def test_empty_text_is_skipped_but_children_are_visited() -> None:
    tree = DocumentTree(DOC)
    root = tree.add_node(NodeKind.DOCUMENT, 1)
    section = tree.add_node(NodeKind.SECTION, 1, root, title="")
    tree.add_node(NodeKind.CONTENT, 3, section, content="Child text.")
    tree.add_node(NodeKind.LIST_ITEM, 4, section, text=None)

    assert _lines(tree) == [(3, "Child text.")]


def test_every_line_falls_inside_its_node_range() -> None:
    text = "# A\n\none\ntwo\nthree\n\n- item one\n  continues\n- item two\n"
    tree = load_document(text, DOC)
    total_lines = len(text.splitlines())

    for location, _ in walk(tree):
        assert 1 <= location.line <= total_lines
        assert location.text == text.splitlines()[location.line - 1].strip("-# ").strip()


def test_deep_nesting_does_not_recurse() -> None:
    tree = DocumentTree(DOC)
    node = tree.add_node(NodeKind.DOCUMENT, 1)
    for depth in range(5000):
        node = tree.add_node(NodeKind.CONTAINER, 1, node)
    tree.add_node(NodeKind.CONTENT, 2, node, content="deep")

    assert _lines(tree) == [(2, "deep")]


@pytest.mark.parametrize(
    "kind, values, expected",
    [
        (NodeKind.SECTION, {"title": "T"}, "T"),
        (NodeKind.LIST_ITEM, {"text": "I"}, "I"),
        (NodeKind.CONTENT, {"content": "C"}, "C"),
        (NodeKind.CONTAINER, {"content": "ignored"}, None),
        (NodeKind.LITERAL, {"content": "code"}, None),
        (NodeKind.DOCUMENT, {}, None),
    ],
)
def test_extract_node_text_dispatches_on_kind(kind, values, expected) -> None:
    tree = DocumentTree(DOC)
    node = tree.add_node(kind, 1, **values)

    assert extract_node_text(node) == expected
