"""
Directed dependency graph over component keys.
"""

from __future__ import annotations

from collections.abc import Iterator

from .keys import ComponentKey


class DependencyGraph:
    """
    Adjacency mapping ``component -> ordered dependencies``.

    Vertices keep the order in which they were first seen, and each
    adjacency list keeps the order in which its edges were added.
    """

    def __init__(self) -> None:
        super().__init__()
        self._adjacency: dict[ComponentKey, list[ComponentKey]] = {}

    def add_vertex(self, key: ComponentKey) -> None:
        """Add a vertex if it is not present yet."""
        self._adjacency.setdefault(key, [])

    def add_edge(self, source: ComponentKey, destination: ComponentKey) -> None:
        """Add the edge ``source -> destination``, creating both vertices."""
        self.add_vertex(source)
        self.add_vertex(destination)
        self._adjacency[source].append(destination)

    def has_edge(self, source: ComponentKey, destination: ComponentKey) -> bool:
        return destination in self._adjacency.get(source, ())

    def vertices(self) -> list[ComponentKey]:
        return list(self._adjacency)

    def dependencies_of(self, key: ComponentKey) -> tuple[ComponentKey, ...]:
        """Direct dependencies of ``key`` in insertion order."""
        return tuple(self._adjacency.get(key, ()))

    def edges(self) -> list[tuple[ComponentKey, ComponentKey]]:
        return [(source, dest) for source, dests in self._adjacency.items() for dest in dests]

    def describe(self) -> str:
        """Render every edge as ``Source -> Destination``, one per line."""
        return "\n".join(f"{source} -> {dest}" for source, dest in self.edges())

    def __contains__(self, key: object) -> bool:
        return key in self._adjacency

    def __iter__(self) -> Iterator[ComponentKey]:
        return iter(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    def __str__(self) -> str:
        return f"DependencyGraph({len(self)} components, {len(self.edges())} edges)"
