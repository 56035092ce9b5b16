"""
Frames Module
=============

Generated image representation, storage and decoding.

    - ImageFrame: Immutable 28x28 luminance image
    - ImageBuffer: Append-only ordered frame store
    - decode_image / upsample: Payload decoding and canvas scaling

Example:
    from digit_viewer.frames import ImageBuffer, decode_images

    buffer = ImageBuffer()
    buffer.extend(decode_images(payload["images"], source="remote"))
"""

from digit_viewer.frames.frame import ImageFrame
from digit_viewer.frames.buffer import ImageBuffer
from digit_viewer.frames.decoder import (
    FrameDecodeError,
    decode_image,
    decode_images,
    upsample,
)


__all__ = [
    "ImageFrame",
    "ImageBuffer",
    "FrameDecodeError",
    "decode_image",
    "decode_images",
    "upsample",
]
