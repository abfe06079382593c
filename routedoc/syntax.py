"""Tree-sitter powered JavaScript syntax adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser, Tree

from .errors import SourceParseError

_JAVASCRIPT = Language(tree_sitter_javascript.language())

_FUNCTION_VALUES = frozenset(
    {"function", "function_expression", "arrow_function", "generator_function"}
)
_IDENTIFIER_KEYS = frozenset({"identifier", "property_identifier"})


@dataclass(frozen=True, eq=False)
class DocBlock:
    """A `/** ... */` comment and the declaration it precedes."""

    text: str
    line: int
    declaration: Node


class JavaScriptSyntax:
    """Parses JavaScript sources and locates documentation blocks."""

    def __init__(self) -> None:
        self._parser = Parser(_JAVASCRIPT)

    def parse(self, source: str) -> Tree:
        tree = self._parser.parse(source.encode("utf-8"))
        if tree.root_node.has_error:
            error = _first_error(tree.root_node)
            line = error.start_point[0] + 1 if error is not None else 1
            raise SourceParseError(line)
        return tree

    def doc_blocks(self, tree: Tree) -> List[DocBlock]:
        blocks: List[DocBlock] = []
        for node in _walk(tree.root_node):
            if node.type != "comment":
                continue
            text = _node_text(node)
            if not text.startswith("/**") or text.startswith("/**/"):
                continue
            declaration = _next_declaration(node)
            if declaration is None:
                continue
            blocks.append(DocBlock(text=text, line=node.start_point[0] + 1, declaration=declaration))
        return blocks


def func_name(node: Node) -> str:
    """Return the identifier a declaration binds, or "" for unsupported kinds."""
    kind = node.type
    if kind == "export_statement":
        inner = node.child_by_field_name("declaration")
        return func_name(inner) if inner is not None else ""
    if kind in ("lexical_declaration", "variable_declaration"):
        for child in node.named_children:
            if child.type == "variable_declarator":
                return func_name(child)
        return ""
    if kind == "method_definition":
        return _identifier(node.child_by_field_name("name"))
    if kind == "field_definition":
        return _identifier(node.child_by_field_name("property"))
    if kind in ("function_declaration", "generator_function_declaration"):
        return _identifier(node.child_by_field_name("name"))
    if kind == "variable_declarator":
        value = node.child_by_field_name("value")
        if value is not None and value.type in _FUNCTION_VALUES:
            return _identifier(node.child_by_field_name("name"))
        return ""
    if kind == "pair":
        return _identifier(node.child_by_field_name("key"))
    return ""


def _identifier(node: Optional[Node]) -> str:
    if node is None or node.type not in _IDENTIFIER_KEYS:
        return ""
    return _node_text(node)


def _node_text(node: Node) -> str:
    return (node.text or b"").decode("utf-8", errors="ignore")


def _next_declaration(comment: Node) -> Optional[Node]:
    sibling = comment.next_named_sibling
    while sibling is not None and sibling.type == "comment":
        sibling = sibling.next_named_sibling
    return sibling


def _walk(root: Node) -> Iterator[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _first_error(root: Node) -> Optional[Node]:
    for node in _walk(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


__all__ = ["DocBlock", "JavaScriptSyntax", "func_name"]
