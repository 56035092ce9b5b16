"""
Playback Engine
===============

Frame-driven crossfade state machine.

This module implements sequential playback of the image buffer:
    IDLE → HOLDING ⇄ FADING → AWAITING_MORE

Key Features:
    - tick() is the ONLY method that mutates animation state
    - Timing is counted in rendered frames, not wall-clock seconds
    - Fade amounts are clamped to [0, 255] on every step
    - The engine only reads the buffer; it never modifies it

Tick Rules:
    timer < hold_frames:                  timer += 1
    timer == hold_frames, next exists:    advance (index += 1, timer = 0,
                                          fade_out = 255, fade_in = 0, fading)
    timer == hold_frames, no next frame:  ask for trigger release
    then, while fading:                   fade_in += step, fade_out -= step
"""

import logging
from dataclasses import dataclass
from typing import List

from digit_viewer.frames.buffer import ImageBuffer
from digit_viewer.frames.frame import ImageFrame
from digit_viewer.playback.state import (
    ALPHA_MAX,
    PlaybackPhase,
    PlaybackState,
    TickResult,
    TriggerDirective,
    clamp_alpha,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Layer:
    """One frame to draw at a given alpha."""

    frame: ImageFrame
    alpha: int


class PlaybackEngine:
    """
    Sequential crossfade playback over an ImageBuffer.

    Example:
        engine = PlaybackEngine(buffer, hold_frames=60, fade_step=5)
        engine.start()
        while True:
            result = engine.tick()
            canvas = compose(engine.layers(), 280)
    """

    def __init__(
        self,
        buffer: ImageBuffer,
        hold_frames: int = 60,
        fade_step: int = 5,
    ) -> None:
        """
        Initialize engine.

        Args:
            buffer: Frame source (read-only from the engine's side)
            hold_frames: Frames each image is held before advancing
            fade_step: Alpha change per frame during a crossfade
        """
        if hold_frames < 1:
            raise ValueError("hold_frames must be >= 1")
        if not 1 <= fade_step <= ALPHA_MAX:
            raise ValueError("fade_step must be in [1, 255]")

        self.buffer = buffer
        self.hold_frames = hold_frames
        self.fade_step = fade_step
        self._state = PlaybackState()
        self._ticks: int = 0

        logger.info(
            f"PlaybackEngine initialized: hold={hold_frames} frames, "
            f"fade_step={fade_step}"
        )

    @property
    def state(self) -> PlaybackState:
        """Copy of the current state."""
        s = self._state
        return PlaybackState(
            current_index=s.current_index,
            timer=s.timer,
            fade_out=s.fade_out,
            fade_in=s.fade_in,
            is_fading_in=s.is_fading_in,
        )

    @property
    def active(self) -> bool:
        """Whether playback has started."""
        return self._state.active

    @property
    def phase(self) -> PlaybackPhase:
        """Phase derived from state and buffer length."""
        s = self._state
        if not s.active:
            return PlaybackPhase.IDLE
        if s.is_fading_in:
            return PlaybackPhase.FADING
        if s.timer >= self.hold_frames and s.current_index >= len(self.buffer) - 1:
            return PlaybackPhase.AWAITING_MORE
        return PlaybackPhase.HOLDING

    def start(self) -> bool:
        """
        Begin playback at index 0 if idle and frames exist.

        The first frame fades in from black over the same ramp as a
        crossfade.

        Returns:
            True if playback started, False if already active or buffer empty.
        """
        if self._state.active or len(self.buffer) == 0:
            return False

        self._state.current_index = 0
        self._state.reset_transition()
        logger.info(f"Playback started with {len(self.buffer)} buffered frames")
        return True

    def tick(self) -> TickResult:
        """
        Advance the animation by one rendered frame.

        Returns:
            TickResult with the new phase and any trigger directive.
        """
        s = self._state
        if not s.active or len(self.buffer) == 0:
            return TickResult(phase=PlaybackPhase.IDLE, current_index=s.current_index)

        self._ticks += 1
        advanced = False
        directive = TriggerDirective.NONE

        if s.timer < self.hold_frames:
            s.timer += 1
        elif s.current_index < len(self.buffer) - 1:
            s.current_index += 1
            s.reset_transition()
            advanced = True
            directive = TriggerDirective.HOLD
            logger.debug(f"Advancing to frame {s.current_index}")
        else:
            directive = TriggerDirective.RELEASE

        self._apply_fade()

        return TickResult(
            phase=self.phase,
            current_index=s.current_index,
            advanced=advanced,
            trigger=directive,
        )

    def _apply_fade(self) -> None:
        """Step the crossfade ramp, clamping both amounts."""
        s = self._state
        if not s.is_fading_in:
            return

        s.fade_in = clamp_alpha(s.fade_in + self.fade_step)
        s.fade_out = clamp_alpha(s.fade_out - self.fade_step)

        if s.fade_in >= ALPHA_MAX:
            s.is_fading_in = False

    def layers(self) -> List[Layer]:
        """
        Draw list for the current state, back to front.

        Returns:
            Previous frame at fade_out (if any), then current frame at fade_in.
        """
        s = self._state
        if not s.active:
            return []

        layers: List[Layer] = []
        if s.current_index > 0:
            previous = self.buffer.get(s.current_index - 1)
            if previous is not None:
                layers.append(Layer(frame=previous, alpha=s.fade_out))

        current = self.buffer.get(s.current_index)
        if current is not None:
            layers.append(Layer(frame=current, alpha=s.fade_in))
        return layers

    def metrics(self) -> dict:
        """
        Get playback metrics for observability.

        Returns:
            Dict with phase, index, timer, fades and tick count
        """
        s = self._state
        return {
            "phase": self.phase.value,
            "current_index": s.current_index,
            "buffered": len(self.buffer),
            "timer": s.timer,
            "fade_in": s.fade_in,
            "fade_out": s.fade_out,
            "ticks": self._ticks,
        }
