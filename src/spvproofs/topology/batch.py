"""
Batched subtree topologies

Slightly less optimal than a single breadth-first tree, but incrementable:
a series of fixed-size subtrees, B elements each, hung off a backbone.

              /\\
             /  \\
            /    \\
           /\\    subtree for 2B.. (under construction)
          /  \\
         /    \\
        /\\   2B..3B-1
       /  \\
      /    \\
   0..B-1  B..2B-1

The breadth variant chains closed subtrees as above and uses the optimal
breadth-first shape inside each one. The array variant puts closed
subtrees in an RFC 6962-shaped backbone and uses the array shape inside.
"""

from ..params import DEFAULT_BATCH_SIZE
from .breadth import optimal_proof_len
from .rfc6962 import array_proof_len, check_range


def breadth_batch_proof_len(n: int, to: int, batch_size: int = DEFAULT_BATCH_SIZE) -> int:
    check_range(n, to)

    from_batch = n // batch_size
    to_batch = to // batch_size

    if from_batch == to_batch:
        # The batch under construction; only one batch so far means the
        # plain optimal tree.
        if n < batch_size:
            return optimal_proof_len(n, to)
        return 1 + optimal_proof_len(n, to)

    # One hash to reach the old batches and one per batch we go back.
    batch_depth = 1 + from_batch - to_batch
    # The first batch is just the left branch.
    if to_batch == 0:
        batch_depth -= 1
    return batch_depth + optimal_proof_len(batch_size, to % batch_size)


def array_batch_proof_len(n: int, to: int, batch_size: int = DEFAULT_BATCH_SIZE) -> int:
    check_range(n, to)

    from_batch = n // batch_size
    to_batch = to // batch_size
    start = from_batch * batch_size

    if from_batch == to_batch:
        in_batch = array_proof_len(n - start, to - start)
        if n < batch_size:
            return in_batch
        return 1 + in_batch

    # Join hash, backbone over closed batches, then the proof inside one.
    return (1 + array_proof_len(from_batch, to_batch)
            + array_proof_len(batch_size, to % batch_size))
