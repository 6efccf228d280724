"""Per-image comparison: resolve artifacts, load, normalize, diff, record."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from visreg.canvas import normalize
from visreg.config import VisregConfig
from visreg.differ import PixelmatchDiffer
from visreg.errors import MissingArtifact
from visreg.raster import PngCodec, load_image

logger = logging.getLogger(__name__)

NOTICES = {
    "baseline": 'No baseline found for "%s". Run the capture first to generate a baseline.',
    "current": (
        'No current screenshot found for "%s". '
        "Run the capture again to record the current state."
    ),
}


@dataclass(frozen=True)
class ArtifactPaths:
    baseline: Path
    current: Path
    diff: Path


@dataclass(frozen=True)
class ComparisonResult:
    name: str
    width: int
    height: int
    total_pixels: int
    mismatch_count: int
    mismatch_percent: float
    baseline_path: Path
    current_path: Path
    diff_path: Path
    passed: bool

    @property
    def status(self) -> str:
        return "PASS" if self.passed else "FAIL"

    def to_dict(self) -> dict:
        d = asdict(self)
        for key in ("baseline_path", "current_path", "diff_path"):
            d[key] = Path(d[key]).as_posix()
        return d


def mismatch_percent(mismatch_count: int, total_pixels: int) -> float:
    """Share of mismatched pixels, in percent, rounded to 2 places."""
    if total_pixels <= 0:
        return 0.0
    return round(mismatch_count / total_pixels * 100, 2)


def artifact_paths(name: str, config: VisregConfig) -> ArtifactPaths:
    return ArtifactPaths(
        baseline=config.baseline_dir / f"{name}.png",
        current=config.current_dir / f"{name}.png",
        diff=config.diff_dir / f"{name}-diff.png",
    )


def resolve_artifacts(name: str, config: VisregConfig) -> ArtifactPaths:
    """Return the artifact paths for `name`, raising MissingArtifact if an input is absent."""
    paths = artifact_paths(name, config)
    if not paths.baseline.exists():
        raise MissingArtifact(name, "baseline", paths.baseline)
    if not paths.current.exists():
        raise MissingArtifact(name, "current", paths.current)
    return paths


def compare_images(
    name: str,
    config: VisregConfig,
    *,
    codec=None,
    differ=None,
) -> Optional[ComparisonResult]:
    """Compare the baseline and current screenshots stored under `name`.

    Returns None (after logging a notice) when either screenshot is
    missing. Decode and write failures propagate.
    """
    try:
        paths = resolve_artifacts(name, config)
    except MissingArtifact as e:
        logger.warning(NOTICES[e.kind], name)
        return None

    codec = codec or PngCodec()
    differ = differ or PixelmatchDiffer()

    baseline = load_image(paths.baseline, codec)
    current = load_image(paths.current, codec)
    if baseline.size != current.size:
        logger.info(
            "%s: size changed %dx%d -> %dx%d, padding to common canvas",
            name, baseline.width, baseline.height, current.width, current.height,
        )
    baseline, current = normalize(baseline, current)

    mismatch_count, diff_image = differ.diff(baseline, current, config.diff_options)
    codec.encode(diff_image, paths.diff)

    total = baseline.width * baseline.height
    return ComparisonResult(
        name=name,
        width=baseline.width,
        height=baseline.height,
        total_pixels=total,
        mismatch_count=mismatch_count,
        mismatch_percent=mismatch_percent(mismatch_count, total),
        baseline_path=paths.baseline,
        current_path=paths.current,
        diff_path=paths.diff,
        passed=mismatch_count == 0,
    )
