"""
Playback State Models
=====================

Explicit animation state for the crossfade engine.

Core Concepts:
    - PlaybackPhase: Observable phase (IDLE, HOLDING, FADING, AWAITING_MORE)
    - PlaybackState: Index, hold timer and fade amounts
    - TriggerDirective: What the engine asks of the trigger after a tick

Phases:
    IDLE → HOLDING:           first frames arrive, playback starts at 0
    HOLDING → FADING:         hold timer expires and a next frame exists
    FADING → HOLDING:         fade_in reaches 255
    HOLDING → AWAITING_MORE:  hold timer expires on the last buffered frame
    AWAITING_MORE → FADING:   a later fetch appends more frames
"""

from dataclasses import dataclass
from enum import Enum


ALPHA_MIN = 0
ALPHA_MAX = 255


class PlaybackPhase(str, Enum):
    """
    Observable phases of the playback engine.

    Attributes:
        IDLE: Nothing to show yet (current_index = -1)
        HOLDING: Showing the current frame, timer running
        FADING: Crossfade from previous to current frame in progress
        AWAITING_MORE: Last buffered frame shown, waiting for more frames
    """

    IDLE = "IDLE"
    HOLDING = "HOLDING"
    FADING = "FADING"
    AWAITING_MORE = "AWAITING_MORE"


class TriggerDirective(str, Enum):
    """Trigger action requested by a tick."""

    NONE = "NONE"
    HOLD = "HOLD"
    RELEASE = "RELEASE"


def clamp_alpha(value: int) -> int:
    """Clamp an alpha amount to [0, 255]."""
    return max(ALPHA_MIN, min(ALPHA_MAX, value))


@dataclass
class PlaybackState:
    """
    Mutable animation state owned by PlaybackEngine.

    Attributes:
        current_index: Buffer index being shown (-1 = none)
        timer: Frames elapsed in the current hold
        fade_out: Alpha of the previous frame
        fade_in: Alpha of the current frame
        is_fading_in: Whether a crossfade is running
    """

    current_index: int = -1
    timer: int = 0
    fade_out: int = ALPHA_MAX
    fade_in: int = ALPHA_MIN
    is_fading_in: bool = False

    @property
    def active(self) -> bool:
        return self.current_index >= 0

    def reset_transition(self) -> None:
        """Start a fresh hold with a crossfade from full previous to empty current."""
        self.timer = 0
        self.fade_out = ALPHA_MAX
        self.fade_in = ALPHA_MIN
        self.is_fading_in = True


@dataclass(frozen=True)
class TickResult:
    """Result of one engine tick."""

    phase: PlaybackPhase
    current_index: int
    advanced: bool = False
    trigger: TriggerDirective = TriggerDirective.NONE

    def __repr__(self) -> str:
        return (
            f"TickResult({self.phase.value}, index={self.current_index}, "
            f"advanced={self.advanced}, trigger={self.trigger.value})"
        )
