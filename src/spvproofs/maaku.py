"""
Maaku Tree: incremental internal-node tree for SPV proofs

An internal-node tree that keeps the last log(N) elements close to the
root while still being updated one element at a time.

- A subtree is *fixed* once it is completely populated down to max_depth;
  fixed subtrees never change again.
- If the whole tree is fixed, a new root is created and the old tree hangs
  off its left side (every existing node moves one level down).
- Otherwise the new value enters at the root and older values are swapped
  downwards, preferring the left subtree over the right.

The root value is therefore always the most recently inserted element.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class InvariantError(RuntimeError):
    """An incremental structure is internally inconsistent."""


@dataclass
class MaakuNode:
    """A tree node. Children are owned exclusively by their parent."""
    value: int
    depth: int = 0
    fixed: bool = False
    children: List[Optional['MaakuNode']] = field(default_factory=lambda: [None, None])

    @property
    def left(self) -> Optional['MaakuNode']:
        return self.children[0]

    @property
    def right(self) -> Optional['MaakuNode']:
        return self.children[1]


class MaakuTree:
    """
    Append-only maaku tree.

    Properties:
    - Root value == last inserted value
    - max_depth == floor(log2(len(tree)))
    - Every node satisfies depth <= max_depth
    """

    def __init__(self):
        self.root: Optional[MaakuNode] = None
        self.max_depth = 0
        self.size = 0
        self.swaps = 0

    def __len__(self) -> int:
        return self.size

    def is_fixed(self, node: MaakuNode) -> bool:
        """A node is fixed if it forms a complete tree down to max_depth."""
        if node.fixed:
            return True

        if node.depth == self.max_depth:
            node.fixed = True
            return True

        if node.left is None or node.right is None:
            return False

        node.fixed = self.is_fixed(node.left) and self.is_fixed(node.right)
        return node.fixed

    def add(self, value: int) -> int:
        """
        Insert a value.

        Args:
            value: Element to insert (normally the next element index)

        Returns:
            Number of value swaps the insertion performed
        """
        new = MaakuNode(value=value)
        self.size += 1

        if self.root is None:
            self.root = new
            self.max_depth = 0
            return 0

        # Start a new level
        if self.is_fixed(self.root):
            new.children[0] = self.root
            self.root = new
            self.max_depth += 1
            self._inc_depths(new.left)
            logger.debug("maaku tree grew to max_depth %d at %d elements",
                         self.max_depth, self.size)
            return 0

        if not self.is_fixed(self.root.left):
            raise InvariantError("Left side of a non-fixed root must be fixed")

        swaps = self._add_at(self.root, new)
        self.swaps += swaps
        return swaps

    def _add_at(self, node: MaakuNode, new: MaakuNode) -> int:
        swaps = 0
        while True:
            # The visited node takes the incoming value; its old value moves on.
            node.value, new.value = new.value, node.value
            swaps += 1

            if node.left is None:
                node.children[0] = new
                new.depth = node.depth + 1
                return swaps
            if not self.is_fixed(node.left):
                node = node.left
                continue
            if node.right is None:
                node.children[1] = new
                new.depth = node.depth + 1
                return swaps

            if self.is_fixed(node.right):
                raise InvariantError(
                    f"Both subtrees of non-fixed node {node.value} are fixed")
            node = node.right

    @staticmethod
    def _inc_depths(node: MaakuNode):
        stack = [node]
        while stack:
            n = stack.pop()
            n.depth += 1
            stack.extend(c for c in n.children if c is not None)

    def nodes(self) -> Iterator[MaakuNode]:
        """Pre-order traversal, left before right."""
        stack = [self.root] if self.root is not None else []
        while stack:
            n = stack.pop()
            yield n
            if n.right is not None:
                stack.append(n.right)
            if n.left is not None:
                stack.append(n.left)

    def find(self, value: int) -> Optional[MaakuNode]:
        """Brute force depth-first search; values are not ordered."""
        for n in self.nodes():
            if n.value == value:
                return n
        return None

    def depth_of(self, value: int) -> int:
        """Depth of an inserted value; raises InvariantError if missing."""
        node = self.find(value)
        if node is None:
            raise InvariantError(f"Value {value} not found in maaku tree")
        return node.depth

    def check(self, max_value: Optional[int] = None):
        """
        Verify structural invariants.

        Args:
            max_value: Expected root value (the last inserted element)
        """
        if self.root is None:
            return
        if max_value is not None and self.root.value != max_value:
            raise InvariantError(
                f"Root value {self.root.value} != last inserted {max_value}")

        stack: List[Tuple[MaakuNode, int]] = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            if node.depth != depth:
                raise InvariantError(
                    f"Node {node.value} records depth {node.depth}, actual {depth}")
            if node.depth > self.max_depth:
                raise InvariantError(
                    f"Node {node.value} at depth {node.depth} > max_depth {self.max_depth}")
            for child in node.children:
                if child is not None:
                    stack.append((child, depth + 1))

    def clear(self):
        """Release every node (post-order) and reset the tree."""
        if self.root is not None:
            order = list(self.nodes())
            for n in reversed(order):
                n.children[0] = n.children[1] = None
        self.root = None
        self.max_depth = 0
        self.size = 0


def build_maaku_tree(count: int) -> MaakuTree:
    """Build a tree by inserting 0..count-1 in order."""
    tree = MaakuTree()
    for i in range(count):
        tree.add(i)
    return tree


def grow(count: int) -> Iterator[Tuple[int, int, int]]:
    """
    Insert 0..count-1, yielding (value, max_depth, swaps) after each insert.
    """
    tree = MaakuTree()
    for i in range(count):
        swaps = tree.add(i)
        yield i, tree.max_depth, swaps
