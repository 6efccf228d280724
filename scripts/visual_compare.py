#!/usr/bin/env python3
"""Compare current screenshots against baselines and write the HTML report.

Reads ./baseline/<name>.png and ./current/<name>.png, writes
./diff/<name>-diff.png and ./reports/visual-report.html.

Usage:
    # Default layout, default sensitivity:
    python scripts/visual_compare.py

    # Stricter threshold, count anti-aliased pixels too:
    python scripts/visual_compare.py --threshold 0.05 --include-aa

    # Custom directories (also settable via VISREG_*_DIR env vars):
    python scripts/visual_compare.py --baseline-dir qa/baseline --current-dir qa/current

Exit status: 0 all passed (or nothing to compare), 1 no baselines or a
failed comparison, 2 unreadable image or unwritable output.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

# Ensure project root is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from visreg.config import VisregConfig
from visreg.errors import VisregError
from visreg.runner import run_comparisons

logger = logging.getLogger(__name__)

EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Visual regression comparison: pixel diff against baselines",
    )
    parser.add_argument("--baseline-dir", help="Baseline screenshots (default: ./baseline)")
    parser.add_argument("--current-dir", help="Current screenshots (default: ./current)")
    parser.add_argument("--diff-dir", help="Diff image output (default: ./diff)")
    parser.add_argument("--reports-dir", help="Report output (default: ./reports)")
    parser.add_argument(
        "--threshold",
        type=float,
        help="Perceptual sensitivity 0-1, lower is stricter (default: 0.1)",
    )
    parser.add_argument(
        "--include-aa",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Count anti-aliased pixels as mismatches (--no-include-aa overrides VISREG_INCLUDE_AA)",
    )
    parser.add_argument(
        "--alpha",
        type=float,
        help="Opacity of the unchanged pixels in the diff image (default: 0.3)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace, base: Optional[VisregConfig] = None) -> VisregConfig:
    base = base or VisregConfig.from_env()
    return base.with_overrides(
        baseline_dir=args.baseline_dir,
        current_dir=args.current_dir,
        diff_dir=args.diff_dir,
        reports_dir=args.reports_dir,
        threshold=args.threshold,
        include_aa=args.include_aa,
        alpha=args.alpha,
    )


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = config_from_args(args)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return EXIT_FATAL

    try:
        return run_comparisons(config)
    except VisregError as e:
        logger.error("Visual comparison aborted: %s", e)
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
