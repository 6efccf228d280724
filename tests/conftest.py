"""Shared fixtures: a throwaway artifact layout and solid-colour PNG builders."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from visreg.config import VisregConfig
from visreg.raster import RasterImage

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
WHITE = (255, 255, 255, 255)
LIGHT_GREY = (245, 245, 245, 255)
BLACK = (0, 0, 0, 255)


def make_png(path: Path, color: tuple = RED, size: tuple = (100, 100)) -> Path:
    """Write a solid-colour RGBA PNG."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", size, color).save(str(path))
    return path


def solid_raster(color: tuple = RED, size: tuple = (10, 10)) -> RasterImage:
    w, h = size
    return RasterImage(w, h, bytearray(color) * (w * h))


@pytest.fixture
def config(tmp_path: Path) -> VisregConfig:
    """Config whose four directories live under tmp_path."""
    return VisregConfig(
        baseline_dir=tmp_path / "baseline",
        current_dir=tmp_path / "current",
        diff_dir=tmp_path / "diff",
        reports_dir=tmp_path / "reports",
    )


class ExactDiffer:
    """Deterministic stand-in for the perceptual differ: any byte change mismatches."""

    def __init__(self):
        self.calls = []

    def diff(self, a, b, options=None):
        self.calls.append((a.size, b.size, options))
        out = RasterImage.blank(a.width, a.height)
        count = 0
        for i in range(0, len(a.data), 4):
            if a.data[i:i + 4] != b.data[i:i + 4]:
                count += 1
                out.data[i:i + 4] = bytes((255, 0, 0, 255))
        return count, out


@pytest.fixture
def exact_differ() -> ExactDiffer:
    return ExactDiffer()
