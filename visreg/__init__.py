"""Visual regression core: pixel diff of current screenshots against baselines."""

from visreg.canvas import normalize
from visreg.compare import ComparisonResult, compare_images
from visreg.config import DiffOptions, VisregConfig
from visreg.differ import PixelmatchDiffer
from visreg.errors import (
    ArtifactNotFound,
    DecodeError,
    MissingArtifact,
    SetupError,
    VisregError,
    WriteError,
)
from visreg.raster import PngCodec, RasterImage, load_image
from visreg.report import Report, build_report, write_report
from visreg.runner import discover_names, run_comparisons

__all__ = [
    "ArtifactNotFound",
    "ComparisonResult",
    "DecodeError",
    "DiffOptions",
    "MissingArtifact",
    "PixelmatchDiffer",
    "PngCodec",
    "RasterImage",
    "Report",
    "SetupError",
    "VisregConfig",
    "VisregError",
    "WriteError",
    "build_report",
    "compare_images",
    "discover_names",
    "load_image",
    "normalize",
    "run_comparisons",
    "write_report",
]
