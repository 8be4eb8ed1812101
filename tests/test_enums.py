from __future__ import annotations

from src.models import NodeKind


def test_node_kind_values() -> None:
    assert NodeKind.SECTION.value == "SECTION"
    assert NodeKind("LITERAL") is NodeKind.LITERAL
    assert set(NodeKind.all_values()) == {
        "DOCUMENT",
        "SECTION",
        "LIST_ITEM",
        "CONTENT",
        "CONTAINER",
        "LITERAL",
    }
