"""In-memory RGBA raster and the PNG codec that reads/writes it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from visreg.errors import ArtifactNotFound, DecodeError, WriteError

logger = logging.getLogger(__name__)

CHANNELS = 4  # RGBA, 8 bits each

# Formats Pillow decodes without loss. JPEG and friends are rejected.
LOSSLESS_FORMATS = frozenset({"PNG", "BMP", "TIFF", "PPM"})


@dataclass
class RasterImage:
    """Row-major RGBA pixel buffer."""

    width: int
    height: int
    data: bytearray = field(repr=False, default=None)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image dimensions must be positive, got {self.width}x{self.height}")
        expected = self.width * self.height * CHANNELS
        if self.data is None:
            self.data = bytearray(expected)
        elif not isinstance(self.data, bytearray):
            self.data = bytearray(self.data)
        if len(self.data) != expected:
            raise ValueError(
                f"buffer length {len(self.data)} does not match "
                f"{self.width}x{self.height}x{CHANNELS} = {expected}"
            )

    @classmethod
    def blank(cls, width: int, height: int) -> RasterImage:
        """Zero-filled (transparent black) image."""
        return cls(width, height)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        i = (y * self.width + x) * CHANNELS
        return tuple(self.data[i:i + CHANNELS])

    @classmethod
    def from_pil(cls, img: Image.Image) -> RasterImage:
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return cls(img.width, img.height, bytearray(img.tobytes()))

    def to_pil(self) -> Image.Image:
        return Image.frombytes("RGBA", self.size, bytes(self.data))


class PngCodec:
    """Pillow-backed codec. Any object with decode/encode can stand in."""

    def decode(self, path: Path) -> RasterImage:
        path = Path(path)
        try:
            with Image.open(path) as img:
                fmt = img.format
                if fmt not in LOSSLESS_FORMATS:
                    raise DecodeError(path, f"{fmt or 'unknown'} is not a lossless format")
                img.load()
                return RasterImage.from_pil(img)
        except UnidentifiedImageError as e:
            raise DecodeError(path, str(e)) from e
        except FileNotFoundError as e:
            raise ArtifactNotFound(path) from e
        except (OSError, SyntaxError) as e:
            # Truncated or otherwise corrupt data
            raise DecodeError(path, str(e)) from e

    def encode(self, image: RasterImage, path: Path) -> None:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            image.to_pil().save(path, format="PNG")
        except OSError as e:
            raise WriteError(path, str(e)) from e
        logger.debug("Wrote %dx%d PNG to %s", image.width, image.height, path)


def load_image(path: str | Path, codec=None) -> RasterImage:
    """Read one stored screenshot.

    Raises ArtifactNotFound if the path is missing and DecodeError if the
    file is not a valid lossless raster image.
    """
    path = Path(path)
    if not path.exists():
        raise ArtifactNotFound(path)
    codec = codec or PngCodec()
    image = codec.decode(path)
    logger.debug("Loaded %s (%dx%d)", path, image.width, image.height)
    return image
