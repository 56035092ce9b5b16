"""
Digit Viewer
============

Desktop front-end that requests model-generated digit images from a
generation backend and plays them back with a linear crossfade.

Components:
    - frames: ImageFrame, append-only ImageBuffer, pixel decoding
    - sources: HTTP data sources and the ordered fallback policy
    - playback: Per-frame crossfade state machine
    - ui: Trigger, message box, and canvas rendering
    - controller: Glue between fetches, buffer, playback and UI state
    - viewer: OpenCV window and render loop (console script)

Example:
    from digit_viewer.controller import build_controller
    from digit_viewer.config import settings

    controller = build_controller(settings)
    controller.request("5")
    while True:
        controller.tick()
"""

__version__ = "0.1.0"
__author__ = "Digit Viewer Project"

__all__ = [
    "__version__",
]
