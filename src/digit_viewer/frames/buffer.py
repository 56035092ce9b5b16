"""
Image Buffer
=============

Append-only ordered store of generated frames.

This module provides the ImageBuffer class, the only interface between
the fetch side (producer) and the playback engine (reader).

Design Rules:
    - Insertion order is preserved
    - Append-only: never truncated, never mutated in place
    - Appends and reads happen on the render thread only
    - Exposes minimal metrics for observability
"""

import logging
from typing import Iterable, Iterator, List, Optional

from digit_viewer.frames.frame import ImageFrame


logger = logging.getLogger(__name__)


class ImageBuffer:
    """
    Ordered, monotonically growing sequence of frames.

    Example:
        buffer = ImageBuffer()

        # Producer
        buffer.extend(frames)

        # Reader
        frame = buffer.get(index)
    """

    def __init__(self) -> None:
        self._frames: List[ImageFrame] = []
        self._batches: int = 0

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[ImageFrame]:
        return iter(tuple(self._frames))

    def __getitem__(self, index: int) -> ImageFrame:
        if index < 0:
            raise IndexError("ImageBuffer does not support negative indices")
        return self._frames[index]

    @property
    def batches(self) -> int:
        """Number of non-empty extend() calls."""
        return self._batches

    def append(self, frame: ImageFrame) -> int:
        """
        Add one frame at the end.

        Returns:
            Index of the appended frame.
        """
        self._frames.append(frame)
        return len(self._frames) - 1

    def extend(self, frames: Iterable[ImageFrame]) -> int:
        """
        Add a batch of frames in order.

        Args:
            frames: Frames from one fetch response

        Returns:
            Number of frames added.
        """
        added = 0
        for frame in frames:
            self.append(frame)
            added += 1

        if added:
            self._batches += 1
            logger.debug(f"Buffered {added} frames, total {len(self._frames)}")
        return added

    def get(self, index: int) -> Optional[ImageFrame]:
        """
        Get frame at index without raising.

        Returns:
            The frame, or None if index is out of range.
        """
        if 0 <= index < len(self._frames):
            return self._frames[index]
        return None

    def metrics(self) -> dict:
        """
        Get buffer metrics for observability.

        Returns:
            Dict with size and batches
        """
        return {
            "size": len(self._frames),
            "batches": self._batches,
        }
