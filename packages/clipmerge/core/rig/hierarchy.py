"""Target scene hierarchy used for path resolution.

Paths are '/'-separated node names relative to the root; the root itself is
the empty path.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field


class HierarchyNode(BaseModel):
    """One node of a target hierarchy.

    Example:
        >>> root = HierarchyNode.from_paths(["Face/FaceMesh", "Body"])
        >>> root.resolve("Face/FaceMesh").name
        'FaceMesh'
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    children: tuple[HierarchyNode, ...] = Field(default_factory=tuple)

    def child(self, name: str) -> HierarchyNode | None:
        """First direct child with the given name."""
        for node in self.children:
            if node.name == name:
                return node
        return None

    def resolve(self, path: str) -> HierarchyNode | None:
        """Node reached by walking path from this node, or None."""
        if not path:
            return self
        node: HierarchyNode | None = self
        for segment in path.split("/"):
            if node is None:
                return None
            node = node.child(segment)
        return node

    def iter_descendants(self) -> Iterator[tuple[str, HierarchyNode]]:
        """Yield (root-relative path, node) for every node below this one, depth first."""
        stack: list[tuple[str, HierarchyNode]] = [(c.name, c) for c in reversed(self.children)]
        while stack:
            path, node = stack.pop()
            yield path, node
            stack.extend((f"{path}/{c.name}", c) for c in reversed(node.children))

    def find_by_name(self, name: str) -> list[str]:
        """Root-relative paths of every descendant whose own name is name."""
        return [path for path, node in self.iter_descendants() if node.name == name]

    @classmethod
    def from_paths(cls, paths: Iterable[str], root_name: str = "root") -> HierarchyNode:
        """Build a hierarchy from root-relative node paths.

        Intermediate nodes are created as needed; order of first appearance
        is kept.
        """
        tree: dict[str, dict] = {}
        for path in paths:
            level = tree
            for segment in (s for s in path.split("/") if s):
                level = level.setdefault(segment, {})
        return cls._from_tree(root_name, tree)

    @classmethod
    def _from_tree(cls, name: str, tree: dict[str, dict]) -> HierarchyNode:
        return cls(name=name, children=tuple(cls._from_tree(n, sub) for n, sub in tree.items()))
