"""
UI Module
=========

Trigger, message box and canvas rendering for the viewer window.
"""

from digit_viewer.ui.trigger import FETCH_HOLD, PLAYBACK_HOLD, Trigger
from digit_viewer.ui.message import MessageBox
from digit_viewer.ui.render import compose, draw_input_panel, draw_message

__all__ = [
    "Trigger",
    "FETCH_HOLD",
    "PLAYBACK_HOLD",
    "MessageBox",
    "compose",
    "draw_input_panel",
    "draw_message",
]
