"""
Topology Oracle Library

One proof-length function per prev-tree topology, all reachable through
the Topology enum and proof_len():

- Array / RFC 6962: in-order trees built from an array
- Optimal / reverse breadth: breadth-first internal-value trees
- Maaku: the incremental internal-node tree
- MMR / linear MMR: Merkle mountain ranges
- Breadth / array batches: incrementable series of subtrees
- Luck cache / Huffman: MMR plus a side tree of the luckiest blocks
"""

from .rfc6962 import (
    check_range,
    rfc6962_proof_len,
    reverse_rfc6962_proof_len,
    array_proof_len,
    build_array_tree,
)
from .breadth import (
    internal_node_proof_len,
    optimal_proof_len,
    reverse_breadth_proof_len,
    maaku_proof_len,
)
from .mmr import (
    Peak,
    mmr_peaks,
    mmr_proof_len,
    mmr_linear_proof_len,
)
from .batch import (
    breadth_batch_proof_len,
    array_batch_proof_len,
)
from .huffman import (
    LuckCache,
    huffman_depth,
    cached_mmr_proof_len,
    huffman_proof_len,
)
from .oracle import (
    Topology,
    OracleContext,
    proof_len,
)

__all__ = [
    # Array
    'check_range',
    'rfc6962_proof_len',
    'reverse_rfc6962_proof_len',
    'array_proof_len',
    'build_array_tree',

    # Internal-value trees
    'internal_node_proof_len',
    'optimal_proof_len',
    'reverse_breadth_proof_len',
    'maaku_proof_len',

    # MMR
    'Peak',
    'mmr_peaks',
    'mmr_proof_len',
    'mmr_linear_proof_len',

    # Batches
    'breadth_batch_proof_len',
    'array_batch_proof_len',

    # Luck cache / Huffman
    'LuckCache',
    'huffman_depth',
    'cached_mmr_proof_len',
    'huffman_proof_len',

    # Dispatch
    'Topology',
    'OracleContext',
    'proof_len',
]
