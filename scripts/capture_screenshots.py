#!/usr/bin/env python3
"""Capture full-page screenshots for visual comparison.

First run for a page writes its baseline; later runs write the current
capture that scripts/visual_compare.py diffs against it.

Usage:
    python scripts/capture_screenshots.py
    python scripts/capture_screenshots.py --pages home --headed
    python scripts/capture_screenshots.py --url about=https://example.com/about
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

# Ensure project root is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from visreg.config import VisregConfig

logger = logging.getLogger(__name__)

PAGES: list[dict] = [
    {"name": "home", "url": "https://www.flipkart.com/"},
    # {"name": "about", "url": "https://example.com/about"},
]

VIEWPORT = {"width": 1280, "height": 720}
NAV_TIMEOUT_MS = 30000


def target_path(name: str, config: VisregConfig) -> Path:
    """Baseline path if no baseline exists yet, otherwise the current path."""
    baseline = config.baseline_dir / f"{name}.png"
    if not baseline.exists():
        return baseline
    return config.current_dir / f"{name}.png"


def capture_page(page, name: str, url: str, config: VisregConfig) -> Path:
    """Navigate `page` to `url`, wait for network idle, save a full-page PNG."""
    path = target_path(name, config)
    path.parent.mkdir(parents=True, exist_ok=True)
    page.goto(url, wait_until="networkidle", timeout=NAV_TIMEOUT_MS)
    page.screenshot(path=str(path), full_page=True)
    kind = "Baseline" if path.parent == config.baseline_dir else "Current"
    print(f"{kind} screenshot saved: {path}")
    return path


def capture_all(
    pages: list[dict],
    config: VisregConfig,
    *,
    headless: bool = True,
) -> list[Path]:
    from playwright.sync_api import sync_playwright

    saved: list[Path] = []
    with sync_playwright() as pw:
        browser = pw.chromium.launch(headless=headless)
        context = browser.new_context(viewport=VIEWPORT)
        page = context.new_page()
        for page_def in pages:
            saved.append(capture_page(page, page_def["name"], page_def["url"], config))
        page.close()
        context.close()
        browser.close()
    return saved


def parse_url_arg(value: str) -> dict:
    name, sep, url = value.partition("=")
    if not sep or not name or not url:
        raise argparse.ArgumentTypeError(f"expected NAME=URL, got {value!r}")
    return {"name": name, "url": url}


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Capture full-page screenshots into baseline/ or current/",
    )
    parser.add_argument(
        "--pages",
        help="Comma-separated page names from the built-in list",
    )
    parser.add_argument(
        "--url",
        action="append",
        type=parse_url_arg,
        default=[],
        help="Extra page as NAME=URL (repeatable)",
    )
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    config = VisregConfig.from_env()

    pages = PAGES
    if args.pages:
        wanted = [s.strip() for s in args.pages.split(",")]
        pages = [p for p in PAGES if p["name"] in wanted]
    pages = pages + args.url

    if not pages:
        logger.error("No pages selected")
        return 1

    capture_all(pages, config, headless=not args.headed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
