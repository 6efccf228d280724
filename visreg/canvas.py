"""Bring two images onto a common canvas without resampling.

Both sources are pinned to the top-left corner of a canvas sized to the
larger width and the larger height. Area one image does not cover stays
transparent black, so a page that grew or shrank shows up as mismatched
pixels instead of being cropped away.
"""

from __future__ import annotations

from visreg.raster import CHANNELS, RasterImage


def bitblt(src: RasterImage, dst: RasterImage, x: int = 0, y: int = 0) -> None:
    """Copy all of `src` into `dst` with its top-left corner at (x, y)."""
    if x < 0 or y < 0 or x + src.width > dst.width or y + src.height > dst.height:
        raise ValueError(
            f"{src.width}x{src.height} at ({x}, {y}) does not fit in {dst.width}x{dst.height}"
        )
    row_bytes = src.width * CHANNELS
    for row in range(src.height):
        s = row * row_bytes
        d = ((y + row) * dst.width + x) * CHANNELS
        dst.data[d:d + row_bytes] = src.data[s:s + row_bytes]


def normalize(a: RasterImage, b: RasterImage) -> tuple[RasterImage, RasterImage]:
    """Return copies of `a` and `b` padded to the same dimensions."""
    width = max(a.width, b.width)
    height = max(a.height, b.height)

    canvases = []
    for src in (a, b):
        canvas = RasterImage.blank(width, height)
        bitblt(src, canvas)
        canvases.append(canvas)
    return canvases[0], canvases[1]
