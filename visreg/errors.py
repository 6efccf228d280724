"""Exception taxonomy for the comparison/report core.

Absence of an expected input (MissingArtifact) is recoverable: the driver
skips that name. Everything else is fatal to the run.
"""

from __future__ import annotations

from pathlib import Path


class VisregError(Exception):
    """Base class for all visreg errors."""


class SetupError(VisregError):
    """No baseline images are available, so no comparison is possible."""


class MissingArtifact(VisregError):
    """A baseline or current screenshot is absent for a named image."""

    def __init__(self, name: str, kind: str, path: Path):
        self.name = name
        self.kind = kind  # "baseline" or "current"
        self.path = Path(path)
        super().__init__(f"{kind} screenshot for {name!r} not found at {self.path}")


class ArtifactNotFound(VisregError):
    """An image path handed to the loader does not exist."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"image not found: {self.path}")


class DecodeError(VisregError):
    """Stored bytes are not a valid lossless raster image."""

    def __init__(self, path: Path, reason: str = ""):
        self.path = Path(path)
        msg = f"cannot decode image {self.path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class WriteError(VisregError):
    """A diff image or report could not be written."""

    def __init__(self, path: Path, reason: str = ""):
        self.path = Path(path)
        msg = f"cannot write {self.path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
