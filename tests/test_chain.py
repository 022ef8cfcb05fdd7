"""
Tests for the skip-link chain simulator

- Hash stream and skip derivation
- Parameter validation
- Backlink DP: skip bounds, tie-breaking, determinism, targets
- Per-topology scoring along the path and with the full DP
"""

import json

import pytest

from spvproofs.chain import Chain, default_topologies, min_hops, simulate, simulate_all
from spvproofs.maaku import InvariantError
from spvproofs.params import SimParams
from spvproofs.rng import MAX_U64, HashStream, chain_hashes, chain_skips, skip_for
from spvproofs.topology import Topology, proof_len


class TestHashStream:
    """Tests for simulated block hashes."""

    def test_reproducible(self):
        """Same seed, same stream."""
        a = HashStream(42)
        b = HashStream(42)
        assert [a.next_u64() for _ in range(20)] == [b.next_u64() for _ in range(20)]

    def test_seed_matters(self):
        """Different seeds give different streams."""
        assert chain_hashes(20, seed=1) != chain_hashes(20, seed=2)

    def test_values_are_64_bit(self):
        """Every hash fits in 64 bits; genesis has none."""
        hashes = chain_hashes(200, seed=5)
        assert hashes[0] == 0
        assert all(0 <= h <= MAX_U64 for h in hashes)

    def test_skip_for(self):
        """Skip is MAX_U64 // hash, capped at the block number."""
        assert skip_for(5, MAX_U64) == 1
        assert skip_for(100, MAX_U64 // 10) == 10
        assert skip_for(5, 1) == 5
        assert skip_for(7, 0) == 7

    def test_chain_skips(self):
        """Genesis cannot skip; everything else skips at least one block."""
        skips = chain_skips(chain_hashes(500, seed=9))
        assert skips[0] == 0
        assert all(1 <= s <= i for i, s in enumerate(skips) if i)


class TestParams:
    """Tests for configuration validation."""

    def test_defaults_valid(self):
        """Default parameters validate."""
        assert SimParams().validate() == SimParams()

    @pytest.mark.parametrize("kwargs", [
        {'num_blocks': 0},
        {'num_blocks': 5, 'target': 5},
        {'num_blocks': 5, 'target': -1},
        {'batch_size': 0},
    ])
    def test_invalid(self, kwargs):
        """Impossible configurations are rejected."""
        with pytest.raises(ValueError):
            SimParams(**kwargs).validate()

    def test_simulate_rejects_target(self):
        """simulate() refuses a target at or past the tip."""
        with pytest.raises(ValueError):
            simulate(10, target=10)

    def test_to_dict(self):
        """Parameters serialise for reports."""
        d = SimParams(num_blocks=7, seed=3).to_dict()
        assert d['num_blocks'] == 7 and d['seed'] == 3


class TestBacklinks:
    """Tests for the minimum-hop DP."""

    def test_genesis_only(self):
        """A one-block chain needs no proof."""
        chain = Chain(SimParams(num_blocks=1))
        assert chain.walk(chain.hop_dp().step) == [0]
        assert chain.path_costs([Topology.MMR])[Topology.MMR].hashes == 0

    def test_skip_bound(self):
        """Every chosen ancestor is reachable and strictly older."""
        chain = Chain(SimParams(num_blocks=2000, seed=11))
        step = chain.hop_dp().step
        for i in range(1, chain.num_blocks):
            assert i - chain.skips[i] <= step[i] < i

    def test_cost_is_one_per_hop(self):
        """Hop cost is one more than the chosen ancestor's."""
        chain = Chain(SimParams(num_blocks=1000, seed=4))
        dp = chain.hop_dp()
        assert dp.cost[0] == 0
        for i in range(1, chain.num_blocks):
            assert dp.cost[i] == dp.cost[dp.step[i]] + 1
            assert dp.cost[i] <= dp.cost[i - 1] + 1
        assert chain.min_hops() == dp.cost

    def test_min_hops_function(self):
        """min_hops(params) matches the chain's hop DP."""
        params = SimParams(num_blocks=800, seed=14)
        hops = min_hops(params)
        assert hops == Chain(params).hop_dp().cost
        assert hops[0] == 0 and hops[1] == 1
        assert all(h >= 1 for h in hops[1:])

    def test_ties_prefer_nearest(self):
        """Among equally good ancestors the highest index wins."""
        chain = Chain(SimParams(num_blocks=1500, seed=8))
        dp = chain.hop_dp()
        for i in range(1, chain.num_blocks):
            best = min(dp.cost[j] for j in chain.candidates(i))
            assert dp.step[i] == max(j for j in chain.candidates(i) if dp.cost[j] == best)

    def test_walk_reaches_genesis(self):
        """The tip walks back to genesis in decreasing steps."""
        chain = Chain(SimParams(num_blocks=3000, seed=2))
        path = chain.walk(chain.hop_dp().step)
        assert path[0] == 2999 and path[-1] == 0
        assert all(a > b for a, b in zip(path, path[1:]))
        assert len(path) - 1 == chain.hop_dp().cost[2999]

    def test_missing_backlink(self):
        """Walking a broken step array is an invariant failure."""
        chain = Chain(SimParams(num_blocks=5))
        with pytest.raises(InvariantError):
            chain.walk([None] * 5)

    def test_target(self):
        """A non-genesis target ends the walk there and never passes it."""
        chain = Chain(SimParams(num_blocks=2000, target=700, seed=6))
        path = chain.walk(chain.hop_dp().step)
        assert path[-1] == 700
        assert all(b >= 700 for b in path)

    def test_target_keeps_chain(self):
        """The target does not change the chain's hashes."""
        a = Chain(SimParams(num_blocks=300, seed=1))
        b = Chain(SimParams(num_blocks=300, target=100, seed=1))
        assert a.hashes == b.hashes and a.skips == b.skips


class TestScoring:
    """Tests for per-topology proof costs."""

    def test_naive_counts_hops(self):
        """The naive topology costs exactly the hop count."""
        chain = Chain(SimParams(num_blocks=1000, seed=3))
        cost = chain.path_costs([Topology.NAIVE])[Topology.NAIVE]
        assert cost.hashes == cost.hops == chain.hop_dp().cost[999]

    def test_path_cost_is_sum_of_hops(self):
        """Path cost sums each hop's proof length."""
        chain = Chain(SimParams(num_blocks=800, seed=12))
        path = chain.walk(chain.hop_dp().step)
        expected = sum(proof_len(Topology.RFC6962, i, j) for i, j in zip(path, path[1:]))
        assert chain.path_costs([Topology.RFC6962])[Topology.RFC6962].hashes == expected

    @pytest.mark.parametrize("topology", [t for t in Topology if t.fast])
    def test_optimal_never_worse(self, topology):
        """The per-topology DP beats or matches the shared hop path."""
        chain = Chain(SimParams(num_blocks=600, seed=21))
        summary = chain.summarize(topology)
        assert summary.optimal_hashes is not None
        assert summary.optimal_hashes <= summary.hashes

    @pytest.mark.parametrize("topology", [Topology.MAAKU, Topology.ARRAY, Topology.HUFFMAN])
    def test_slow_topologies_not_in_dp(self, topology):
        """Tree-building topologies are only evaluated along a path."""
        chain = Chain(SimParams(num_blocks=50))
        with pytest.raises(ValueError):
            chain.optimal_cost(topology)
        assert chain.summarize(topology).optimal_hashes is None

    def test_all_topologies(self):
        """Every topology produces a result for one chain."""
        results = simulate_all(SimParams(num_blocks=400, seed=5))
        assert set(results) == set(Topology)
        for summary in results.values():
            assert summary.hops == len(summary.path) - 1
            assert summary.hashes >= 0

    def test_without_slow(self):
        """include_slow=False drops the tree-building topologies."""
        topologies = default_topologies(include_slow=False)
        assert Topology.MAAKU not in topologies
        assert Topology.HUFFMAN not in topologies
        assert Topology.MMR in topologies

    def test_deterministic_output(self):
        """Two runs with the same seed produce identical output."""
        def run():
            results = simulate_all(SimParams(num_blocks=100, seed=77))
            return json.dumps({t.value: [s.to_dict(), s.path] for t, s in results.items()},
                              sort_keys=True)
        assert run() == run()

    def test_simulate(self):
        """simulate() summarises one topology from tip to target."""
        summary = simulate(500, target=10, seed=3, topology=Topology.MMR)
        assert summary.topology is Topology.MMR
        assert summary.path[0] == 499 and summary.path[-1] == 10
        assert summary.optimal_hashes <= summary.hashes

    def test_simulate_batch_size(self):
        """The batch size reaches the batched topologies."""
        small = simulate(300, seed=4, topology=Topology.BREADTH_BATCH, batch_size=16)
        default = simulate(300, seed=4, topology=Topology.BREADTH_BATCH)
        optimal = simulate(300, seed=4, topology=Topology.OPTIMAL)
        assert default.hashes == optimal.hashes
        assert small.path == default.path
