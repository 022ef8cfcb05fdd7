"""
Array-shaped topologies (RFC 6962)

The RFC 6962 approach builds the tree from an array, in order, using
external nodes:

         ^
        / \\
       /\\  \\
      /  \\  \\
     /    \\  \\
    /\\    /\\  \\
   0  1  2  3  4

A range [start, end) splits at the largest power of two strictly below
its size. Every level walked costs one hash.
"""

from ..maaku import MaakuNode, MaakuTree


def check_range(n: int, to: int):
    """Oracle queries must satisfy 0 <= to < n."""
    if to < 0 or to >= n:
        raise IndexError(f"Index {to} out of range [0, {n})")


def split_point(size: int) -> int:
    """Size of the left half when splitting a range of `size` > 1 elements."""
    return 1 << ((size - 1).bit_length() - 1)


def rfc6962_proof_len(n: int, to: int) -> int:
    """Hashes to prove element `to` among n; a singleton range costs 0."""
    check_range(n, to)

    start, end, length = 0, n, 0
    while end - start > 1:
        split = start + split_point(end - start)
        if to < split:
            end = split
        else:
            start = split
        length += 1
    return length


def reverse_rfc6962_proof_len(n: int, to: int) -> int:
    """RFC 6962 tree laid out newest element first."""
    check_range(n, to)
    return rfc6962_proof_len(n, n - 1 - to)


# Internal nodes carry no element.
_INTERNAL = -1


def _build_array_tree(node: MaakuNode, start: int, end: int):
    depth = node.depth + 1

    if end - start == 1:
        node.children[0] = MaakuNode(value=start, depth=depth)
        return
    if end - start == 2:
        node.children[0] = MaakuNode(value=start, depth=depth)
        node.children[1] = MaakuNode(value=start + 1, depth=depth)
        return

    split = start + split_point(end - start)
    node.children[0] = MaakuNode(value=_INTERNAL, depth=depth)
    _build_array_tree(node.children[0], start, split)
    node.children[1] = MaakuNode(value=_INTERNAL, depth=depth)
    _build_array_tree(node.children[1], split, end)


def build_array_tree(n: int) -> MaakuTree:
    """Ephemeral array tree over elements 0..n-1 (leaves hold the elements)."""
    tree = MaakuTree()
    tree.root = MaakuNode(value=_INTERNAL)
    _build_array_tree(tree.root, 0, n)
    tree.size = n
    return tree


def array_proof_len(n: int, to: int) -> int:
    """
    Depth of `to` in the ephemeral array tree.

    With an external value the proof length equals the depth. A singleton
    range produced by a split sits under its own node, so it costs 1.
    """
    check_range(n, to)

    tree = build_array_tree(n)
    depth = tree.depth_of(to)
    tree.clear()
    return depth
