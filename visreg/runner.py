"""Run driver: discover baselines, compare each, report, decide exit status.

Exit status: 0 when every comparison passed or nothing could be compared,
1 when no baselines exist or at least one comparison failed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from visreg.compare import ComparisonResult, compare_images
from visreg.config import VisregConfig
from visreg.errors import SetupError
from visreg.report import build_report, write_report

logger = logging.getLogger(__name__)

CAPTURE_COMMAND = "python scripts/capture_screenshots.py"
BANNER = "=" * 43


def discover_names(baseline_dir: Path) -> list[str]:
    """Names of all PNG baselines, sorted. Raises SetupError if there are none."""
    baseline_dir = Path(baseline_dir)
    if not baseline_dir.is_dir():
        raise SetupError(f"baseline directory {baseline_dir} does not exist")
    names = sorted(
        p.stem for p in baseline_dir.iterdir()
        if p.is_file() and p.name.endswith(".png")
    )
    if not names:
        raise SetupError(f"no baseline images found in {baseline_dir}")
    return names


def run_comparisons(
    config: VisregConfig,
    *,
    codec=None,
    differ=None,
    out: Callable[[str], None] = print,
) -> int:
    """Compare every discovered baseline against its current capture."""
    out(BANNER)
    out("  Visual Regression Comparison")
    out(BANNER + "\n")

    config.ensure_output_dirs()

    try:
        names = discover_names(config.baseline_dir)
    except SetupError as e:
        logger.info("Setup incomplete: %s", e)
        out("No baseline images found. Run the capture first:")
        out(f"  {CAPTURE_COMMAND}")
        return 1

    results: list[ComparisonResult] = []
    for name in names:
        result = compare_images(name, config, codec=codec, differ=differ)
        if result is None:
            out(f"[SKIP] {name}")
            continue
        out(
            f"[{result.status}] {result.name} - {result.mismatch_percent:.2f}% different "
            f"({result.mismatch_count} pixels)"
        )
        results.append(result)

    if not results:
        out("\nNo comparisons were made. Ensure both baseline and current screenshots exist.")
        return 0

    report = build_report(results)
    report_path = write_report(report, config)
    out(f"\nHTML report generated: {report_path}")

    out(f"\nOverall: {'ALL TESTS PASSED' if report.all_passed else 'SOME TESTS FAILED'}")
    return 0 if report.all_passed else 1
