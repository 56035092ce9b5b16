"""
Frame Decoder
=============

Conversion between backend pixel payloads and ImageFrame, and upsampling
of frames to canvas size.

Design Rules:
    - This is the ONLY place that builds pixel arrays from payload data
    - Validates shape and value range
    - Fails fast on corrupt images
"""

import logging
from typing import Sequence

import cv2
import numpy as np

from digit_viewer.frames.frame import GRID_SIZE, ImageFrame


logger = logging.getLogger(__name__)


_INTERPOLATION = {
    "linear": cv2.INTER_LINEAR,
    "nearest": cv2.INTER_NEAREST,
}


class FrameDecodeError(Exception):
    """Raised when a payload image cannot be turned into a frame."""
    pass


def decode_image(data: Sequence[Sequence[int]], source: str = "unknown") -> ImageFrame:
    """
    Decode one row-major 28x28 payload image.

    Args:
        data: Nested sequence indexed as data[y][x], values in [0, 255]
        source: Name of the data source that returned it

    Returns:
        Immutable ImageFrame

    Raises:
        FrameDecodeError: If the shape or values are invalid
    """
    try:
        array = np.asarray(data)
    except (TypeError, ValueError) as e:
        raise FrameDecodeError(f"Image from {source} is not an array: {e}")

    if array.shape != (GRID_SIZE, GRID_SIZE):
        raise FrameDecodeError(
            f"Invalid image shape from {source}: {array.shape}, "
            f"expected ({GRID_SIZE}, {GRID_SIZE})"
        )

    if not np.issubdtype(array.dtype, np.integer):
        raise FrameDecodeError(f"Invalid dtype from {source}: {array.dtype}")

    if array.min() < 0 or array.max() > 255:
        raise FrameDecodeError(
            f"Pixel values from {source} out of range: "
            f"[{array.min()}, {array.max()}]"
        )

    return ImageFrame(pixels=array.astype(np.uint8), source=source)


def decode_images(images: Sequence[Sequence[Sequence[int]]], source: str = "unknown") -> list:
    """Decode a batch of payload images, preserving order."""
    return [decode_image(image, source) for image in images]


def upsample(frame: ImageFrame, size: int, interpolation: str = "linear") -> np.ndarray:
    """
    Scale a frame's luminance map to a square canvas.

    Args:
        frame: Frame to scale
        size: Output edge length in pixels
        interpolation: 'linear' or 'nearest'

    Returns:
        (size, size) uint8 array
    """
    flag = _INTERPOLATION.get(interpolation)
    if flag is None:
        raise ValueError(f"Unknown interpolation: {interpolation}")
    return cv2.resize(frame.pixels, (size, size), interpolation=flag)
