"""Markdown loading into a navigable node tree.

The Markdown token stream produced by ``markdown-it-py`` is flat; this module
folds it into a tree of :class:`DocumentNode` objects so that headings own the
blocks below them, list items own their nested blocks and every node knows
the first source line it was parsed from.

Nodes are stored in an arena (:attr:`DocumentTree.nodes`). Children are held
by their parent; the upward link is the parent's arena index so that walking
towards the root never needs an owning back-reference.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.attrs import attrs_block_plugin

from src.models import NodeKind

from .errors import DocumentLoadError

LOGGER = logging.getLogger(__name__)

_CONTAINER_OPENERS = {
    "bullet_list_open",
    "ordered_list_open",
    "blockquote_open",
    "table_open",
    "thead_open",
    "tbody_open",
    "tr_open",
}
_CONTAINER_CLOSERS = {
    "bullet_list_close",
    "ordered_list_close",
    "blockquote_close",
    "table_close",
    "thead_close",
    "tbody_close",
    "tr_close",
    "list_item_close",
}
_CELL_OPENERS = {"th_open", "td_open"}
_LITERAL_BLOCKS = {"fence", "code_block", "hr"}


def build_markdown_parser() -> MarkdownIt:
    """Return the parser used for every document.

    CommonMark with raw HTML (inline suppression markers are HTML elements),
    GitHub-style tables and ``{key="value"}`` block attribute lines.
    """
    return MarkdownIt("commonmark", {"html": True}).enable("table").use(attrs_block_plugin)


@dataclass
class DocumentNode:
    """A single node of the document tree."""

    kind: NodeKind
    line: int
    path: Path
    index: int
    title: str | None = None
    text: str | None = None
    content: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    parent_index: int | None = None
    children: list["DocumentNode"] = field(default_factory=list)

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)


class DocumentTree:
    """Arena owning every node parsed from one document."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.nodes: list[DocumentNode] = []

    @property
    def root(self) -> DocumentNode:
        return self.nodes[0]

    def add_node(
        self,
        kind: NodeKind,
        line: int,
        parent: DocumentNode | None = None,
        **values: Any,
    ) -> DocumentNode:
        node = DocumentNode(
            kind=kind,
            line=line,
            path=self.path,
            index=len(self.nodes),
            parent_index=parent.index if parent is not None else None,
            **values,
        )
        self.nodes.append(node)
        if parent is not None:
            parent.children.append(node)
        return node

    def parent_of(self, node: DocumentNode) -> DocumentNode | None:
        if node.parent_index is None:
            return None
        return self.nodes[node.parent_index]

    def ancestors(self, node: DocumentNode) -> Iterator[DocumentNode]:
        """Yield the parent, grandparent and so on up to the root."""
        parent = self.parent_of(node)
        while parent is not None:
            yield parent
            parent = self.parent_of(parent)

    def __len__(self) -> int:
        return len(self.nodes)


def _token_attributes(token: Token) -> dict[str, str]:
    return {str(key): str(value) for key, value in (token.attrs or {}).items()}


class _TreeBuilder:
    def __init__(self, parser: MarkdownIt, tree: DocumentTree) -> None:
        self._parser = parser
        self._tree = tree
        self._env: dict[str, Any] = {}
        root = tree.add_node(NodeKind.DOCUMENT, 1)
        self._stack: list[DocumentNode] = [root]
        self._sections: list[tuple[int, DocumentNode]] = [(0, root)]

    def _render_inline(self, token: Token) -> str:
        return self._parser.renderer.renderInline(
            token.children or [], self._parser.options, self._env
        )

    def _line(self, token: Token) -> int:
        if token.map:
            return token.map[0] + 1
        return self._stack[-1].line

    def build(self, tokens: list[Token]) -> None:
        index = 0
        while index < len(tokens):
            token = tokens[index]
            kind = token.type

            if kind == "heading_open":
                self._add_heading(token, tokens[index + 1])
                index += 3
                continue
            if kind == "paragraph_open":
                self._add_paragraph(token, tokens[index + 1])
                index += 3
                continue
            if kind in _CELL_OPENERS:
                self._tree.add_node(
                    NodeKind.CONTENT,
                    self._line(token),
                    self._stack[-1],
                    content=self._render_inline(tokens[index + 1]),
                    attributes=_token_attributes(token),
                )
                index += 3
                continue

            if kind == "list_item_open":
                self._push(NodeKind.LIST_ITEM, token)
            elif kind in _CONTAINER_OPENERS:
                self._push(NodeKind.CONTAINER, token)
            elif kind in _CONTAINER_CLOSERS:
                self._stack.pop()
            elif kind in _LITERAL_BLOCKS:
                self._tree.add_node(NodeKind.LITERAL, self._line(token), self._stack[-1])
            elif kind == "html_block":
                self._tree.add_node(
                    NodeKind.CONTENT,
                    self._line(token),
                    self._stack[-1],
                    content=token.content.rstrip("\r\n"),
                    attributes=_token_attributes(token),
                )
            index += 1

    def _push(self, kind: NodeKind, token: Token) -> None:
        node = self._tree.add_node(
            kind, self._line(token), self._stack[-1], attributes=_token_attributes(token)
        )
        self._stack.append(node)

    def _add_heading(self, token: Token, inline: Token) -> None:
        title = self._render_inline(inline)
        attributes = _token_attributes(token)
        if len(self._stack) > 1:
            # Headings nested in lists or quotes do not open a section scope.
            self._tree.add_node(
                NodeKind.SECTION, self._line(token), self._stack[-1],
                title=title, attributes=attributes,
            )
            return

        level = int(token.tag[1:])
        while self._sections[-1][0] >= level:
            self._sections.pop()
        section = self._tree.add_node(
            NodeKind.SECTION, self._line(token), self._sections[-1][1],
            title=title, attributes=attributes,
        )
        self._sections.append((level, section))
        self._stack = [section]

    def _add_paragraph(self, token: Token, inline: Token) -> None:
        parent = self._stack[-1]
        rendered = self._render_inline(inline)
        attributes = _token_attributes(token)
        if parent.kind is NodeKind.LIST_ITEM and parent.text is None and not parent.children:
            parent.text = rendered
            for key, value in attributes.items():
                parent.attributes.setdefault(key, value)
            return
        self._tree.add_node(
            NodeKind.CONTENT, self._line(token), parent,
            content=rendered, attributes=attributes,
        )


def load_document(
    text: str,
    path: Path | str,
    *,
    parser: MarkdownIt | None = None,
) -> DocumentTree:
    """Parse Markdown ``text`` into a :class:`DocumentTree`.

    Raises:
            DocumentLoadError: If the text cannot be tokenised or folded into
                    a tree.
    """

    if not isinstance(text, str):
        raise DocumentLoadError(path, f"expected text, got {type(text).__name__}")

    md = parser or build_markdown_parser()
    tree = DocumentTree(path)
    try:
        tokens = md.parse(text)
        _TreeBuilder(md, tree).build(tokens)
    except Exception as exc:
        LOGGER.exception("Failed to build document tree for %s", path)
        raise DocumentLoadError(path, str(exc) or type(exc).__name__) from exc

    LOGGER.debug("Loaded %s into %d node(s)", tree.path, len(tree))
    return tree
