"""
Internal-value topologies

Trees with internal values (Maaku's Merkelized prefix tree layout) hold a
value plus two child hashes in every node:

       /\\
      /  \\
     /    \\
  value   /\\
         /  \\
        /    \\
       L      R

so a proof needs 1 hash at depth 0, 3 at depth 1, and two more for every
further level.
"""

from typing import Optional

from ..maaku import MaakuTree
from .rfc6962 import check_range


def internal_node_proof_len(depth: int) -> int:
    """Hashes needed to prove a value stored at `depth` of an internal-value tree."""
    if depth == 0:
        return 1
    return 2 * depth - 1


def optimal_proof_len(n: int, to: int) -> int:
    """
    Breadth-first tree ordered newest first:

                 N
               /   \\
              /     \\
           N-1       N-2
          /   \\     /   \\
        N-3  N-4  N-5   N-6

    The depth of an element is floor(log2(distance from the newest)).
    Ideal, but it cannot be updated incrementally.
    """
    check_range(n, to)
    depth = (n - to).bit_length() - 1
    return internal_node_proof_len(depth)


def reverse_breadth_proof_len(n: int, to: int) -> int:
    """Breadth-first tree rooted at genesis, oldest elements shallowest."""
    check_range(n, to)
    depth = (to + 1).bit_length() - 1
    return internal_node_proof_len(depth)


def maaku_proof_len(n: int, to: int, tree: Optional[MaakuTree] = None) -> int:
    """
    Proof length in a maaku tree holding elements 0..n-1.

    Args:
        n: Number of committed elements
        to: Element to prove
        tree: Optional tree to reuse; must contain exactly 0..n-1
    """
    check_range(n, to)

    if tree is None:
        tree = MaakuTree()
        for i in range(n):
            tree.add(i)
    return internal_node_proof_len(tree.depth_of(to))
