"""Union-find over hashable values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Generic, Hashable, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T", bound=Hashable)


@dataclass
class _Node(Generic[T]):
    parent: T
    rank: int = 0


class DisjointSets(Generic[T]):
    """A collection of disjoint sets with path compression."""

    def __init__(self) -> None:
        self._nodes: Dict[T, _Node[T]] = {}

    def add(self, v: T) -> None:
        """Adds the singleton ``{v}`` unless ``v`` is already present."""
        if v not in self._nodes:
            self._nodes[v] = _Node(parent=v)

    def find(self, v: T) -> Optional[T]:
        """The representative of the set holding ``v``, or None if ``v`` was never added."""
        if v not in self._nodes:
            return None
        root = v
        while (parent := self._nodes[root].parent) != root:
            root = parent
        node = v
        while node != root:
            data = self._nodes[node]
            node, data.parent = data.parent, root
        return root

    def union(self, a: T, b: T, by_rank: bool) -> Optional[T]:
        """Merges the sets of ``a`` and ``b``, returning the former representative of ``a``.

        Without ``by_rank`` the representative of ``b`` becomes the parent.
        Returns None if either value was never added.
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a is None or root_b is None:
            return None
        if root_a != root_b:
            node_a = self._nodes[root_a]
            node_b = self._nodes[root_b]
            if by_rank:
                if node_a.rank > node_b.rank:
                    node_b.parent = root_a
                else:
                    node_a.parent = root_b
                    if node_a.rank == node_b.rank:
                        node_b.rank += 1
            else:
                node_a.parent = root_b
        return root_a

    def collapse(self) -> None:
        """Points every node directly at its representative."""
        for key in list(self._nodes):
            self.find(key)

    def __iter__(self) -> Iterator[Tuple[T, T]]:
        """Yields each node paired with its current parent."""
        return ((node, data.parent) for node, data in self._nodes.items())

    def __repr__(self) -> str:
        return "\n".join(f"{node!r} -> {data.parent!r}" for node, data in self._nodes.items())