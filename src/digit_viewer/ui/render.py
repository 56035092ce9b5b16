"""
Canvas Rendering
================

Compose playback layers and UI overlays into a BGR image for cv2.imshow.

Layers are drawn back to front over a black background. Each layer is
alpha-blended at alpha/255, so a crossfade shows the previous frame
fading out underneath the current frame fading in.

PURELY DESCRIPTIVE. Nothing here touches playback or fetch state.
"""

import logging
from typing import Optional, Sequence

import cv2
import numpy as np

from digit_viewer.frames.decoder import upsample
from digit_viewer.playback.engine import Layer


logger = logging.getLogger(__name__)


_FONT = cv2.FONT_HERSHEY_SIMPLEX
_PANEL_BG = (40, 40, 40)
_ENABLED_COLOR = (80, 200, 80)
_DISABLED_COLOR = (90, 90, 90)
_MESSAGE_BG = (30, 30, 140)


def compose(
    layers: Sequence[Layer],
    size: int,
    interpolation: str = "linear",
) -> np.ndarray:
    """
    Blend layers onto a black square canvas.

    Args:
        layers: Draw list, back to front
        size: Output edge length in pixels
        interpolation: Upsampling filter for frames

    Returns:
        (size, size, 3) uint8 BGR image
    """
    canvas = np.zeros((size, size), dtype=np.float32)

    for layer in layers:
        if layer.alpha <= 0:
            continue
        a = min(layer.alpha, 255) / 255.0
        image = upsample(layer.frame, size, interpolation).astype(np.float32)
        canvas = canvas * (1.0 - a) + image * a

    gray = np.clip(np.rint(canvas), 0, 255).astype(np.uint8)
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)


def draw_input_panel(canvas: np.ndarray, text: str, trigger_enabled: bool) -> np.ndarray:
    """
    Draw the digit input field and trigger state along the bottom edge.

    Args:
        canvas: BGR image, modified in place
        text: Current input field contents
        trigger_enabled: Whether a request can be started

    Returns:
        The same canvas
    """
    h, w = canvas.shape[:2]
    panel_h = max(22, h // 12)
    scale = panel_h / 40.0
    y0 = h - panel_h

    cv2.rectangle(canvas, (0, y0), (w, h), _PANEL_BG, -1)
    cv2.putText(canvas, f"Digit: {text}_", (8, h - panel_h // 3),
                _FONT, scale, (230, 230, 230), 1, cv2.LINE_AA)

    label = "[Enter] Generate" if trigger_enabled else "Generating..."
    color = _ENABLED_COLOR if trigger_enabled else _DISABLED_COLOR
    (tw, _), _ = cv2.getTextSize(label, _FONT, scale, 1)
    cv2.putText(canvas, label, (w - tw - 8, h - panel_h // 3),
                _FONT, scale, color, 1, cv2.LINE_AA)
    return canvas


def draw_message(canvas: np.ndarray, message: Optional[str]) -> np.ndarray:
    """
    Draw the message box across the top edge when a message is visible.

    Long messages are wrapped to the canvas width.
    """
    if not message:
        return canvas

    h, w = canvas.shape[:2]
    scale = max(0.35, w / 800.0)
    line_h = int(28 * scale) + 6

    lines = _wrap(message, w - 16, scale)
    box_h = line_h * len(lines) + 8
    cv2.rectangle(canvas, (0, 0), (w, box_h), _MESSAGE_BG, -1)
    for i, line in enumerate(lines):
        cv2.putText(canvas, line, (8, 4 + line_h * (i + 1) - 6),
                    _FONT, scale, (255, 255, 255), 1, cv2.LINE_AA)
    return canvas


def _wrap(text: str, max_width: int, scale: float) -> list:
    lines = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        (tw, _), _ = cv2.getTextSize(candidate, _FONT, scale, 1)
        if tw > max_width and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines
