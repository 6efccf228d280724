"""Tests for scripts/capture_screenshots.py.

Playwright-free: the browser page is a MagicMock.
"""

from __future__ import annotations

import argparse
from unittest.mock import MagicMock

import pytest

from conftest import make_png
from scripts.capture_screenshots import (
    NAV_TIMEOUT_MS,
    capture_page,
    parse_url_arg,
    target_path,
)


def test_first_capture_goes_to_baseline(config):
    assert target_path("home", config) == config.baseline_dir / "home.png"


def test_later_capture_goes_to_current(config):
    make_png(config.baseline_dir / "home.png")
    assert target_path("home", config) == config.current_dir / "home.png"


def test_capture_page_waits_for_network_idle_and_shoots_full_page(config, capsys):
    page = MagicMock()

    path = capture_page(page, "home", "https://example.com/", config)

    assert path == config.baseline_dir / "home.png"
    assert config.baseline_dir.is_dir()
    page.goto.assert_called_once_with(
        "https://example.com/", wait_until="networkidle", timeout=NAV_TIMEOUT_MS
    )
    page.screenshot.assert_called_once_with(path=str(path), full_page=True)
    assert "Baseline screenshot saved" in capsys.readouterr().out


def test_capture_page_reports_current(config, capsys):
    make_png(config.baseline_dir / "home.png")
    page = MagicMock()

    path = capture_page(page, "home", "https://example.com/", config)

    assert path == config.current_dir / "home.png"
    assert "Current screenshot saved" in capsys.readouterr().out


def test_navigation_error_propagates(config):
    page = MagicMock()
    page.goto.side_effect = RuntimeError("net::ERR_NAME_NOT_RESOLVED")

    with pytest.raises(RuntimeError, match="ERR_NAME_NOT_RESOLVED"):
        capture_page(page, "home", "https://bad.invalid/", config)
    page.screenshot.assert_not_called()


def test_parse_url_arg():
    assert parse_url_arg("about=https://example.com/about") == {
        "name": "about",
        "url": "https://example.com/about",
    }
    with pytest.raises(argparse.ArgumentTypeError):
        parse_url_arg("no-equals-sign")
