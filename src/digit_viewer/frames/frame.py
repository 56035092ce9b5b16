"""
Frame Data Model
=================

Internal representation of one generated digit image.

Design Rules:
    - Fixed 28x28 single-channel luminance, dtype uint8
    - Immutable: frozen dataclass over a read-only array
    - Rendered as opaque RGBA (alpha fixed at 255)
"""

from dataclasses import dataclass

import numpy as np


GRID_SIZE = 28
OPAQUE = 255


@dataclass(frozen=True, slots=True)
class ImageFrame:
    """
    One generated digit image.

    Attributes:
        pixels: (28, 28) uint8 luminance map, row-major (pixels[y][x])
        source: Name of the data source that produced the frame
    """

    pixels: np.ndarray
    source: str = "unknown"

    def __post_init__(self) -> None:
        if self.pixels.shape != (GRID_SIZE, GRID_SIZE):
            raise ValueError(
                f"ImageFrame must be {GRID_SIZE}x{GRID_SIZE}, got {self.pixels.shape}"
            )
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"ImageFrame must be uint8, got {self.pixels.dtype}")
        # Own a read-only copy
        pixels = self.pixels.copy()
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    def to_rgba(self) -> np.ndarray:
        """Expand luminance to an opaque (28, 28, 4) RGBA array."""
        rgba = np.empty((GRID_SIZE, GRID_SIZE, 4), dtype=np.uint8)
        rgba[..., 0] = self.pixels
        rgba[..., 1] = self.pixels
        rgba[..., 2] = self.pixels
        rgba[..., 3] = OPAQUE
        return rgba

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the pixels."""
        return f"ImageFrame(source={self.source!r}, mean={float(self.pixels.mean()):.1f})"
