"""Perceptual pixel differ backed by pixelmatch."""

from __future__ import annotations

import logging

from pixelmatch import pixelmatch

from visreg.config import DiffOptions
from visreg.raster import CHANNELS, RasterImage

logger = logging.getLogger(__name__)

ALPHA = 3  # offset of the alpha byte within a pixel


def uncovered_pixels(a: RasterImage, b: RasterImage) -> list[int]:
    """Byte offsets of pixels fully transparent in exactly one of the images.

    Canvas padding is transparent black. pixelmatch blends alpha against
    white, so padding next to a white page would otherwise compare equal.
    """
    return [
        i for i in range(0, len(a.data), CHANNELS)
        if (a.data[i + ALPHA] == 0) != (b.data[i + ALPHA] == 0)
    ]


def _to_byte(v) -> int:
    return min(255, max(0, round(v)))


class PixelmatchDiffer:
    """Counts mismatched pixels and renders a diff image.

    Anything exposing the same ``diff(a, b, options)`` method can be
    passed to the orchestrator in its place.
    """

    def diff(
        self,
        a: RasterImage,
        b: RasterImage,
        options: DiffOptions | None = None,
    ) -> tuple[int, RasterImage]:
        if a.size != b.size:
            raise ValueError(f"image sizes differ: {a.size} vs {b.size}")
        options = options or DiffOptions()

        # Uncovered pixels always mismatch; hide them from pixelmatch so
        # they are counted exactly once.
        uncovered = uncovered_pixels(a, b)
        first = a.data
        if uncovered:
            first = bytearray(a.data)
            for i in uncovered:
                first[i:i + CHANNELS] = b.data[i:i + CHANNELS]

        output = [0] * len(a.data)
        mismatch_count = pixelmatch(
            first,
            b.data,
            a.width,
            a.height,
            output,
            threshold=options.threshold,
            includeAA=options.include_aa,
            alpha=options.alpha,
            aa_color=options.aa_color,
            diff_color=options.diff_color,
            diff_mask=options.diff_mask,
        )
        for i in uncovered:
            output[i:i + CHANNELS] = [*options.diff_color, 255]
        mismatch_count += len(uncovered)

        logger.debug(
            "pixelmatch %dx%d threshold=%.3f include_aa=%s -> %d mismatched (%d uncovered)",
            a.width, a.height, options.threshold, options.include_aa,
            mismatch_count, len(uncovered),
        )
        diff_image = RasterImage(a.width, a.height, bytearray(_to_byte(v) for v in output))
        return mismatch_count, diff_image
