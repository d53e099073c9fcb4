from __future__ import annotations

"""Shared data structures used across the devdoc core.

This module is intentionally free of I/O code so that the contained objects
can be reused in any context (unit-tests, host viewers, scripts, etc.).

Trees are stored in an arena: every :class:`DocTreeNode` lives in the
``nodes`` list of the :class:`DocSet` that built it and refers to its parent
and children by integer handle.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from lxml import etree as ET

__all__ = ["DocTreeNode", "DocSet"]


@dataclass(eq=False)
class DocTreeNode:
    """A titled entry of the navigation tree.

    Attributes
    ----------
    handle
        Index of the node inside ``doc_set.nodes``.
    title
        Display string.
    doc_set
        Documentation set owning the node (not an ownership edge).
    parent_handle
        Handle of the parent node, ``None`` for the root.
    child_handles
        Handles of the children in display order.

    Once the owning documentation set is released the node is detached:
    ``parent`` is None, ``children`` is empty and ``root`` is the node itself.
    """

    handle: int
    title: str
    doc_set: "DocSet" = field(repr=False)
    parent_handle: Optional[int] = None
    child_handles: List[int] = field(default_factory=list)

    @property
    def parent(self) -> Optional["DocTreeNode"]:
        if self.parent_handle is None or self.doc_set.released:
            return None
        return self.doc_set.node(self.parent_handle)

    @property
    def children(self) -> List["DocTreeNode"]:
        if self.doc_set.released:
            return []
        return [self.doc_set.node(h) for h in self.child_handles]

    @property
    def is_root(self) -> bool:
        return self.parent_handle is None

    @property
    def root(self) -> "DocTreeNode":
        """Return the tree root by following parent handles."""
        node = self
        parent = node.parent
        while parent is not None:
            node = parent
            parent = node.parent
        return node

    def walk(self) -> Iterator["DocTreeNode"]:
        """Yield this node and all its descendants, depth-first pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(eq=False)
class DocSet:
    """A loaded documentation set.

    Owns the parsed lxml document together with the node arena and the
    node -> element side table, so mapped elements can never outlive (or be
    outlived by) the document they belong to.

    Attributes
    ----------
    index_path
        Path of the parsed ``.devhelp2`` file.
    document
        Parsed lxml ``ElementTree``; ``None`` once released.
    nodes
        Node arena indexed by handle.
    elements
        Side table mapping node handles to source elements. Group nodes are
        not mapped.
    """

    index_path: Path
    document: Optional[ET._ElementTree]
    nodes: List[DocTreeNode] = field(default_factory=list)
    elements: Dict[int, ET._Element] = field(default_factory=dict)
    root_handle: int = 0
    released: bool = False

    @property
    def root(self) -> DocTreeNode:
        return self.node(self.root_handle)

    def node(self, handle: int) -> DocTreeNode:
        return self.nodes[handle]

    def add_node(self, title: str, parent: Optional[DocTreeNode] = None,
                 element: Optional[ET._Element] = None) -> DocTreeNode:
        """Create a node in the arena without linking it into its parent.

        Args:
            title: Display title
            parent: Parent node, or None for the root
            element: Source element to record in the side table

        Returns:
            The new node
        """
        node = DocTreeNode(
            handle=len(self.nodes),
            title=title,
            doc_set=self,
            parent_handle=parent.handle if parent is not None else None,
        )
        self.nodes.append(node)
        if element is not None:
            self.elements[node.handle] = element
        return node

    def attach(self, node: DocTreeNode) -> DocTreeNode:
        """Append ``node`` to the children of its parent."""
        if node.parent_handle is None:
            raise ValueError("Cannot attach a root node")
        self.node(node.parent_handle).child_handles.append(node.handle)
        return node

    def discard(self, node: DocTreeNode) -> None:
        """Remove the most recently added node, which must be childless and unlinked."""
        if node.handle != len(self.nodes) - 1 or self.nodes[node.handle] is not node or node.child_handles:
            raise ValueError("Only the last, childless node can be discarded")
        self.nodes.pop()
        self.elements.pop(node.handle, None)

    def owns(self, node: DocTreeNode) -> bool:
        return (
            not self.released
            and node.doc_set is self
            and 0 <= node.handle < len(self.nodes)
            and self.nodes[node.handle] is node
        )

    def element_of(self, node: DocTreeNode) -> Optional[ET._Element]:
        if not self.owns(node):
            return None
        return self.elements.get(node.handle)

    def release(self) -> int:
        """Drop the arena, the side table and the document.

        Returns:
            Number of nodes released (0 when already released)
        """
        if self.released:
            return 0
        count = len(self.nodes)
        self.elements.clear()
        self.nodes.clear()
        self.document = None
        self.released = True
        return count
