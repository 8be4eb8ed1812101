from __future__ import annotations

from pathlib import Path

from src.markup_check.document_tree import DocumentTree, load_document
from src.markup_check.ignore_hierarchy import declared_rule_ids, resolve_ignored_rules
from src.models import NodeKind


def _nested_tree(depth: int) -> tuple[DocumentTree, list]:
    tree = DocumentTree(Path("doc.md"))
    nodes = [tree.add_node(NodeKind.DOCUMENT, 1)]
    for level in range(depth):
        nodes.append(tree.add_node(NodeKind.CONTAINER, level + 2, nodes[-1]))
    return tree, nodes


def test_own_attribute_is_split_on_whitespace() -> None:
    tree, nodes = _nested_tree(1)
    nodes[1].attributes["ignore"] = "RULE_A  RULE_B\tRULE_C"

    assert declared_rule_ids(nodes[1]) == {"RULE_A", "RULE_B", "RULE_C"}
    assert resolve_ignored_rules(tree, nodes[1]) == frozenset({"RULE_A", "RULE_B", "RULE_C"})


def test_missing_attribute_yields_empty_set() -> None:
    tree, nodes = _nested_tree(2)

    assert resolve_ignored_rules(tree, nodes[-1]) == frozenset()


def test_ancestor_suppression_reaches_any_depth() -> None:
    tree, nodes = _nested_tree(8)
    nodes[1].attributes["ignore"] = "RULE_A"
    nodes[5].attributes["ignore"] = "RULE_B RULE_A"

    assert resolve_ignored_rules(tree, nodes[-1]) == frozenset({"RULE_A", "RULE_B"})
    assert resolve_ignored_rules(tree, nodes[3]) == frozenset({"RULE_A"})
    assert resolve_ignored_rules(tree, nodes[0]) == frozenset()


def test_suppression_does_not_leak_to_siblings() -> None:
    text = (
        '{ignore="EN_UNIQUE"}\n'
        "> quoted one\n"
        "\n"
        "Outside paragraph.\n"
    )
    tree = load_document(text, Path("doc.md"))

    quoted = next(node for node in tree.nodes if node.content == "quoted one")
    outside = next(node for node in tree.nodes if node.content == "Outside paragraph.")

    assert resolve_ignored_rules(tree, quoted) == frozenset({"EN_UNIQUE"})
    assert resolve_ignored_rules(tree, outside) == frozenset()


def test_section_suppression_covers_nested_sections() -> None:
    text = (
        '{ignore="MORFOLOGIK_RULE_EN_GB"}\n'
        "# Glossary\n"
        "\n"
        "## Terms\n"
        "\n"
        "- Ths term\n"
    )
    tree = load_document(text, Path("doc.md"))

    item = next(node for node in tree.nodes if node.kind is NodeKind.LIST_ITEM)

    assert resolve_ignored_rules(tree, item) == frozenset({"MORFOLOGIK_RULE_EN_GB"})
