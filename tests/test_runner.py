"""Tests for visreg.runner: discovery, skip handling, exit status."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from conftest import BLUE, RED, make_png
from visreg.errors import DecodeError, SetupError
from visreg.runner import discover_names, run_comparisons


class TestDiscoverNames:

    def test_sorted_png_stems(self, tmp_path: Path):
        for name in ("zeta.png", "alpha.png", "notes.txt", "mid.png"):
            (tmp_path / name).write_bytes(b"")
        (tmp_path / "folder.png").mkdir()

        assert discover_names(tmp_path) == ["alpha", "mid", "zeta"]

    def test_empty_directory(self, tmp_path: Path):
        with pytest.raises(SetupError):
            discover_names(tmp_path)

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(SetupError, match="does not exist"):
            discover_names(tmp_path / "absent")


class TestRunComparisons:

    def _run(self, config, **kwargs):
        lines: list[str] = []
        code = run_comparisons(config, out=lines.append, **kwargs)
        return code, "\n".join(lines)

    def test_no_baselines_exits_1_without_report(self, config):
        code, output = self._run(config)

        assert code == 1
        assert "No baseline images found" in output
        assert "capture_screenshots.py" in output
        assert not config.report_path.exists()

    def test_all_pass_exits_0(self, config):
        for name in ("home", "cart"):
            make_png(config.baseline_dir / f"{name}.png", RED, (20, 20))
            make_png(config.current_dir / f"{name}.png", RED, (20, 20))

        code, output = self._run(config)

        assert code == 0
        assert "[PASS] cart - 0.00% different (0 pixels)" in output
        assert "[PASS] home - 0.00% different (0 pixels)" in output
        assert "Overall: ALL TESTS PASSED" in output
        assert config.report_path.exists()
        assert (config.diff_dir / "home-diff.png").exists()

    def test_any_failure_exits_1(self, config):
        make_png(config.baseline_dir / "home.png", RED, (10, 10))
        make_png(config.current_dir / "home.png", BLUE, (10, 10))
        make_png(config.baseline_dir / "cart.png", RED, (10, 10))
        make_png(config.current_dir / "cart.png", RED, (10, 10))

        code, output = self._run(config)

        assert code == 1
        assert "[FAIL] home - 100.00% different (100 pixels)" in output
        assert "Overall: SOME TESTS FAILED" in output

    def test_missing_capture_is_skipped_not_reported(self, config, caplog):
        make_png(config.baseline_dir / "home.png", RED, (10, 10))
        make_png(config.baseline_dir / "cart.png", RED, (10, 10))
        make_png(config.current_dir / "cart.png", RED, (10, 10))

        with caplog.at_level(logging.WARNING):
            code, output = self._run(config)

        assert code == 0
        assert "[SKIP] home" in output
        assert 'No current screenshot found for "home"' in caplog.text
        html = config.report_path.read_text()
        assert "<h2>cart</h2>" in html
        assert "<h2>home</h2>" not in html

    def test_all_skipped_exits_0_without_report(self, config):
        make_png(config.baseline_dir / "home.png", RED, (10, 10))

        code, output = self._run(config)

        assert code == 0
        assert "No comparisons were made" in output
        assert not config.report_path.exists()

    def test_creates_output_dirs(self, config):
        self._run(config)
        assert config.diff_dir.is_dir()
        assert config.reports_dir.is_dir()

    def test_injected_differ_used_for_every_name(self, config, exact_differ):
        for name in ("a", "b", "c"):
            make_png(config.baseline_dir / f"{name}.png", RED, (4, 4))
            make_png(config.current_dir / f"{name}.png", RED, (4, 4))

        code, _ = self._run(config, differ=exact_differ)

        assert code == 0
        assert len(exact_differ.calls) == 3

    def test_corrupt_baseline_aborts_run(self, config):
        config.baseline_dir.mkdir(parents=True)
        (config.baseline_dir / "home.png").write_bytes(b"garbage")
        make_png(config.current_dir / "home.png", RED, (10, 10))

        with pytest.raises(DecodeError):
            self._run(config)
        assert not config.report_path.exists()
