"""Run configuration: artifact directories and diff sensitivity.

Defaults mirror the fixed layout the capture step writes to
(./baseline, ./current, ./diff, ./reports). Every field can be overridden
by constructor argument, environment variable, or CLI flag.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.1
DEFAULT_ALPHA = 0.3
REPORT_NAME = "visual-report.html"

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class DiffOptions:
    """Perceptual sensitivity for the pixel differ.

    threshold: 0.0-1.0, lower is stricter.
    include_aa: count anti-aliased pixels as mismatches.
    alpha: opacity of the dimmed baseline drawn under the diff highlights.
    """

    threshold: float = DEFAULT_THRESHOLD
    include_aa: bool = False
    alpha: float = DEFAULT_ALPHA
    aa_color: tuple[int, int, int] = (255, 255, 0)
    diff_color: tuple[int, int, int] = (255, 0, 0)
    diff_mask: bool = False

    def __post_init__(self):
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError(f"threshold must be between 0 and 1, got {self.threshold}")
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError(f"alpha must be between 0 and 1, got {self.alpha}")
        for label, color in (("aa_color", self.aa_color), ("diff_color", self.diff_color)):
            if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
                raise ValueError(f"{label} must be three 0-255 values, got {color}")


@dataclass(frozen=True)
class VisregConfig:
    baseline_dir: Path = Path("baseline")
    current_dir: Path = Path("current")
    diff_dir: Path = Path("diff")
    reports_dir: Path = Path("reports")
    report_name: str = REPORT_NAME
    diff_options: DiffOptions = field(default_factory=DiffOptions)

    def __post_init__(self):
        # Accept plain strings for the directory fields.
        for name in ("baseline_dir", "current_dir", "diff_dir", "reports_dir"):
            object.__setattr__(self, name, Path(getattr(self, name)))

    @property
    def report_path(self) -> Path:
        return self.reports_dir / self.report_name

    def ensure_output_dirs(self) -> None:
        """Create the diff and report directories if they do not exist."""
        for d in (self.diff_dir, self.reports_dir):
            d.mkdir(parents=True, exist_ok=True)

    def with_overrides(self, **overrides) -> VisregConfig:
        """Return a copy with non-None overrides applied.

        Keys matching DiffOptions fields update diff_options.
        """
        top: dict = {}
        diff: dict = {}
        diff_fields = DiffOptions.__dataclass_fields__
        for key, value in overrides.items():
            if value is None:
                continue
            if key in diff_fields:
                diff[key] = value
            else:
                top[key] = value
        if diff:
            top["diff_options"] = replace(self.diff_options, **diff)
        return replace(self, **top)

    @classmethod
    def from_env(cls, environ: dict | None = None) -> VisregConfig:
        """Build a config from VISREG_* environment variables."""
        env = os.environ if environ is None else environ
        config = cls()
        overrides: dict = {
            "baseline_dir": env.get("VISREG_BASELINE_DIR"),
            "current_dir": env.get("VISREG_CURRENT_DIR"),
            "diff_dir": env.get("VISREG_DIFF_DIR"),
            "reports_dir": env.get("VISREG_REPORTS_DIR"),
        }
        if env.get("VISREG_THRESHOLD"):
            overrides["threshold"] = float(env["VISREG_THRESHOLD"])
        if env.get("VISREG_ALPHA"):
            overrides["alpha"] = float(env["VISREG_ALPHA"])
        if env.get("VISREG_INCLUDE_AA"):
            overrides["include_aa"] = env["VISREG_INCLUDE_AA"].lower() in _TRUTHY
        config = config.with_overrides(**overrides)
        logger.debug("Config from environment: %s", config)
        return config
