"""Aggregate comparison results into a static HTML report.

The HTML links to the baseline/current/diff images by paths relative to
the report's own directory, so the file can be opened straight from disk.
A JSON payload with the same data is written next to it.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from visreg.compare import ComparisonResult
from visreg.config import VisregConfig
from visreg.errors import WriteError

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
REPORT_TEMPLATE = "visual_report.html"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class Report:
    results: list[ComparisonResult]
    generated_at: datetime = field(default_factory=lambda: datetime.now().astimezone())

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def all_passed(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> dict:
        return {
            "generated_at": self.generated_at.isoformat(),
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }


def build_report(
    results: Iterable[ComparisonResult],
    generated_at: Optional[datetime] = None,
) -> Report:
    """Build a report, keeping results in the order given."""
    report = Report(results=list(results))
    if generated_at is not None:
        report.generated_at = generated_at
    return report


def _env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
    )
    env.filters["thousands"] = lambda n: f"{n:,}"
    return env


def relative_link(target: Path, report_dir: Path) -> str:
    """Path to `target` as seen from a document stored in `report_dir`."""
    return Path(os.path.relpath(Path(target).absolute(), Path(report_dir).absolute())).as_posix()


def render_html(report: Report, report_path: Path) -> str:
    report_dir = Path(report_path).parent
    sections = [
        {
            "result": r,
            "baseline_src": relative_link(r.baseline_path, report_dir),
            "current_src": relative_link(r.current_path, report_dir),
            "diff_src": relative_link(r.diff_path, report_dir),
        }
        for r in report.results
    ]
    template = _env().get_template(REPORT_TEMPLATE)
    return template.render(
        report=report,
        sections=sections,
        timestamp=report.generated_at.strftime(TIMESTAMP_FORMAT),
    )


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise WriteError(path, str(e)) from e


def write_report(report: Report, config: VisregConfig) -> Path:
    """Write the HTML report (and its JSON twin), overwriting any previous run."""
    report_path = config.report_path
    _write_text(report_path, render_html(report, report_path))
    json_path = report_path.with_suffix(".json")
    _write_text(json_path, json.dumps(report.to_dict(), indent=2))
    logger.info("Report written to %s (%d results)", report_path, report.total)
    return report_path
