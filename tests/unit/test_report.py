"""
Unit Tests for the Comparison Report and CLI

Tests verify:
1. All four strategies run and meet epsilon on the default problem
2. Rendered report contents and warnings
3. CLI exit status and output stream
"""

import json

import pytest
import yaml

from quadlab.common.config import QuadLabConfig, ProblemConfig, RungeConfig
from quadlab.common.constants import EXACT_VALUE
from quadlab.main import main
from quadlab.report import format_report, run_comparison


@pytest.fixture(scope="module")
def default_report():
    return run_comparison(QuadLabConfig())


class TestRunComparison:
    """Tests for evaluating all four strategies."""

    def test_four_rows(self, default_report):
        keys = [row.key for row in default_report.rows]
        assert keys == ['midpoint_m2', 'trapezoid_m2', 'trapezoid_runge', 'simpson_runge']

    def test_planned_subdivisions(self, default_report):
        midpoint, trapezoid = default_report.planned
        assert midpoint.subdivisions == 38
        assert trapezoid.subdivisions == 54
        assert midpoint.function_evals == 38
        assert trapezoid.function_evals == 55

    def test_adaptive_rows(self, default_report):
        trapezoid, simpson = default_report.adaptive
        assert trapezoid.verified
        assert simpson.verified
        assert simpson.subdivisions >= 8

    def test_all_accurate(self, default_report):
        assert default_report.exact_value == pytest.approx(EXACT_VALUE)
        for row in default_report.rows:
            assert row.abs_error <= 1e-4, row.label
        assert default_report.all_accurate

    def test_sampled_derivative_bound(self, default_report):
        assert default_report.sampled_derivative_bound == pytest.approx(0.43156, abs=1e-4)

    def test_exhausted_budget_marks_unverified(self):
        config = QuadLabConfig(
            problem=ProblemConfig(tolerance=1e-12),
            runge=RungeConfig(max_iterations=2),
        )
        report = run_comparison(config)

        assert not any(row.verified for row in report.adaptive)
        assert not report.all_accurate


class TestFormatReport:
    """Tests for the plain text rendering."""

    def test_sections(self, default_report):
        text = format_report(default_report)

        assert "(x+3) / (x^2+4)" in text
        assert f"{EXACT_VALUE:.8f}" in text
        assert "Central rectangles (M2)" in text
        assert "Simpson (Runge)" in text
        assert "n = 38" in text
        assert "n = 54" in text
        assert "All methods reached the target accuracy" in text
        assert "Warning" not in text

    def test_precision(self, default_report):
        text = format_report(default_report, precision=4)
        assert f"{EXACT_VALUE:.4f}" in text
        assert f"{EXACT_VALUE:.8f}" not in text

    def test_warnings_for_unverified(self):
        config = QuadLabConfig(
            problem=ProblemConfig(tolerance=1e-12),
            runge=RungeConfig(max_iterations=2),
        )
        text = format_report(run_comparison(config))

        assert "UNVERIFIED" in text
        assert "accuracy is not verified" in text
        assert "Not all methods reached" in text


class TestMain:
    """Tests for the command-line entry point."""

    def test_no_arguments(self, capsys, monkeypatch):
        monkeypatch.delenv('QUADLAB_CONFIG', raising=False)
        assert main([]) == 0

        out = capsys.readouterr().out
        assert "Comparison with the exact value" in out
        assert "Trapezoid (Runge)" in out

    def test_config_file(self, tmp_path, capsys):
        path = tmp_path / "config.yml"
        path.write_text(yaml.dump({'report': {'precision': 3}}))

        assert main(['--config', str(path)]) == 0
        assert f"{EXACT_VALUE:.3f}" in capsys.readouterr().out

    def test_invalid_config_exit_status(self, tmp_path, capsys):
        path = tmp_path / "bad.yml"
        path.write_text(yaml.dump({'problem': {'lower_bound': 3.0, 'upper_bound': 1.0}}))

        assert main(['--config', str(path)]) == 1
        assert capsys.readouterr().out == ""

    def test_missing_config_exit_status(self, tmp_path, capsys):
        assert main(['--config', str(tmp_path / "typo.yml")]) == 1
        assert capsys.readouterr().out == ""

    def test_log_file(self, tmp_path, capsys, monkeypatch):
        monkeypatch.delenv('QUADLAB_CONFIG', raising=False)
        log_file = tmp_path / "run.log"

        assert main(['--log-level', 'INFO', '--log-file', str(log_file)]) == 0
        capsys.readouterr()

        messages = [json.loads(line)['message']
                    for line in log_file.read_text().splitlines()]
        assert any(m.startswith("Comparison complete") for m in messages)
