"""Resolution of block-level rule suppressions.

A suppression declared on a node applies to that node and to every node
below it, at any depth. There is no way to re-enable a rule from inside a
block whose ancestor suppresses it.
"""

from __future__ import annotations

from .document_tree import DocumentNode, DocumentTree
from .markup_check_config import SUPPRESSION_ATTRIBUTE


def declared_rule_ids(node: DocumentNode, attribute: str = SUPPRESSION_ATTRIBUTE) -> set[str]:
    """Return the rule ids listed in ``node``'s own suppression attribute."""
    value = node.get_attribute(attribute)
    if not value:
        return set()
    return set(value.split())


def resolve_ignored_rules(
    tree: DocumentTree,
    node: DocumentNode,
    attribute: str = SUPPRESSION_ATTRIBUTE,
) -> frozenset[str]:
    """Union of the suppressions declared on ``node`` and all of its ancestors."""
    rule_ids = declared_rule_ids(node, attribute)
    for ancestor in tree.ancestors(node):
        rule_ids.update(declared_rule_ids(ancestor, attribute))
    return frozenset(rule_ids)
