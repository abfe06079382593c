"""Block-to-declaration index with precomputed ancestry."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple

from .syntax import DocBlock


def ancestor_chain(node: Any) -> Tuple[int, ...]:
    """Return node ids from the tree root down to ``node`` inclusive."""
    chain: List[int] = []
    current = node
    while current is not None:
        chain.append(current.id)
        current = current.parent
    chain.reverse()
    return tuple(chain)


class DeclarationIndex:
    """Read-only view mapping documentation blocks to their declarations.

    Every indexed declaration's root-to-node chain is computed once, so
    ancestry checks are a prefix comparison rather than a tree walk.
    """

    def __init__(self, blocks: Iterable[DocBlock]) -> None:
        self._blocks = list(blocks)
        self._chains: Dict[int, Tuple[int, ...]] = {}
        for block in self._blocks:
            node = block.declaration
            if node.id not in self._chains:
                self._chains[node.id] = ancestor_chain(node)

    @property
    def blocks(self) -> List[DocBlock]:
        return list(self._blocks)

    def declaration_of(self, block: DocBlock) -> Any:
        return block.declaration

    def is_ancestor(self, ancestor: Any, node: Any) -> bool:
        """True when ``ancestor`` strictly encloses ``node``."""
        outer = self._chain(ancestor)
        inner = self._chain(node)
        return len(outer) < len(inner) and inner[: len(outer)] == outer

    def _chain(self, node: Any) -> Tuple[int, ...]:
        chain = self._chains.get(node.id)
        if chain is None:
            chain = ancestor_chain(node)
            self._chains[node.id] = chain
        return chain


__all__ = ["DeclarationIndex", "ancestor_chain"]
