"""
Tests for the spvproofs command line
"""

import json

import pytest

from spvproofs.cli import build_parser, main


class TestCommandLine:

    def test_path_mode(self, capsys):
        """Default mode prints one line per topology."""
        assert main(['200', '--seed', '3']) == 0
        out = capsys.readouterr().out
        assert 'mmr: proof hashes' in out
        assert 'maaku: proof hashes' in out

    def test_no_maaku(self, capsys):
        """--no-maaku skips the tree-building topologies."""
        assert main(['200', '--no-maaku']) == 0
        out = capsys.readouterr().out
        assert 'maaku:' not in out
        assert 'rfc6962: proof hashes' in out

    def test_optimal_mode(self, capsys):
        """Optimal mode runs the requested fast topologies."""
        assert main(['150', '--mode', 'optimal', '-t', 'optimal', 'mmr']) == 0
        out = capsys.readouterr().out
        assert 'prooflen-optimal: proof hashes' in out
        assert 'prooflen-mmr: proof hashes' in out

    def test_unusable_topology_rejected(self, capsys):
        """Asking a single mode for a topology it cannot run is a usage error."""
        with pytest.raises(SystemExit) as exc:
            main(['50', '--mode', 'optimal', '-t', 'maaku'])
        assert exc.value.code == 2
        assert 'maaku' in capsys.readouterr().err

    def test_context_topology_not_incremental(self):
        """Cache topologies cannot be accumulated incrementally."""
        with pytest.raises(SystemExit):
            main(['50', '--mode', 'incremental', '-t', 'mmr-cache-16'])

    def test_all_mode_reports_skips(self, capsys):
        """--mode all names what each mode skips and runs the rest."""
        assert main(['80', '--mode', 'all', '-t', 'optimal', 'maaku']) == 0
        out = capsys.readouterr().out
        assert 'optimal: skipping maaku' in out
        assert 'maaku: proof hashes' in out
        assert 'prooflen-optimal: proof hashes' in out
        assert 'prooflen-maaku: proof hashes' not in out
        assert 'prooflen-maaku: proof path' in out

    def test_bench_rejects_topology(self):
        """Benchmarks always cover every topology."""
        with pytest.raises(SystemExit):
            main(['50', '--mode', 'bench', '-t', 'mmr'])

    def test_incremental_mode(self, capsys):
        """Incremental mode reports path length and hashes."""
        assert main(['150', '--mode', 'incremental', '-t', 'mmr']) == 0
        out = capsys.readouterr().out
        assert out.startswith('prooflen-mmr: proof path ')

    def test_target_out_of_range(self):
        """A target at or past the tip is a usage error."""
        with pytest.raises(SystemExit) as exc:
            main(['5', '--target', '5'])
        assert exc.value.code == 2

    def test_unknown_topology(self):
        """Unknown topology names are usage errors."""
        with pytest.raises(SystemExit):
            main(['5', '-t', 'skiplist'])

    def test_report_written(self, tmp_path, capsys):
        """--output writes a JSON report covering every mode."""
        assert main(['120', '--mode', 'all', '--output', str(tmp_path)]) == 0
        report = json.loads((tmp_path / 'report.json').read_text())
        assert report['params']['num_blocks'] == 120
        assert set(report) >= {'path', 'optimal', 'incremental'}

    def test_bench_mode(self, tmp_path, capsys):
        """Bench mode writes the benchmark report and receipt."""
        assert main(['80', '--mode', 'bench', '-o', str(tmp_path)]) == 0
        report = json.loads((tmp_path / 'report.json').read_text())
        assert report['benchmarks']['all_passed']
        assert len(report['receipt']['report_hash']) == 64

    def test_parser_defaults(self):
        """Defaults mirror SimParams."""
        args = build_parser().parse_args(['10'])
        assert args.target == 0 and args.seed == 0 and args.include_slow
