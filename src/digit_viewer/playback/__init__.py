"""
Playback Module
===============

Frame-driven crossfade state machine.

Components:
    - PlaybackEngine: Owns PlaybackState; tick() is its only mutator
    - PlaybackState / PlaybackPhase: Explicit animation state
    - Layer: (frame, alpha) draw command
"""

from digit_viewer.playback.state import (
    PlaybackPhase,
    PlaybackState,
    TickResult,
    TriggerDirective,
)
from digit_viewer.playback.engine import Layer, PlaybackEngine

__all__ = [
    "PlaybackEngine",
    "PlaybackPhase",
    "PlaybackState",
    "TickResult",
    "TriggerDirective",
    "Layer",
]
