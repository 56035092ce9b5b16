"""
Viewer Controller
=================

Glue between user input, background fetches, the image buffer, the
playback engine and the UI state.

Flow:
    request(text) → validate → hold trigger → submit fetch to worker
    tick()        → poll finished fetch → buffer / playback / message
                  → engine.tick() → apply trigger directive

Threading:
    The fetch runs on a single background worker and only RETURNS a
    FetchReport. Buffer, trigger, playback and message box are touched
    exclusively from tick()/poll(), i.e. the render thread.
"""

import logging
import re
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Optional

from digit_viewer.config import Settings
from digit_viewer.frames.buffer import ImageBuffer
from digit_viewer.models.result import FailureReason, FetchReport, FetchResult
from digit_viewer.playback.engine import PlaybackEngine
from digit_viewer.playback.state import TickResult, TriggerDirective
from digit_viewer.sources.fallback import FallbackFetcher
from digit_viewer.sources.source import HttpDigitSource
from digit_viewer.ui.message import MessageBox
from digit_viewer.ui.trigger import FETCH_HOLD, PLAYBACK_HOLD, Trigger


logger = logging.getLogger(__name__)


INVALID_INPUT_MESSAGE = "Invalid input. Please enter a digit between 0 and 9."
FETCH_FAILED_MESSAGE = "Failed to fetch images from both servers."

_INTEGER = re.compile(r"-?[0-9]+")


class InvalidDigitError(ValueError):
    """Raised when input is not an integer in [0, 9]."""
    pass


def parse_digit(text: str) -> int:
    """
    Validate digit input.

    Args:
        text: Raw input field contents (surrounding whitespace ignored)

    Returns:
        The digit as int

    Raises:
        InvalidDigitError: If text is not an integer in [0, 9]
    """
    stripped = (text or "").strip()
    if not _INTEGER.fullmatch(stripped):
        raise InvalidDigitError(f"Not an integer: {text!r}")

    digit = int(stripped)
    if not 0 <= digit <= 9:
        raise InvalidDigitError(f"Out of range: {digit}")
    return digit


class ViewerController:
    """
    Owns the buffer, playback engine, trigger and message box.

    Example:
        controller = build_controller(settings)
        controller.request("5")

        while running:
            controller.tick()
            canvas = compose(controller.engine.layers(), 280)
    """

    def __init__(
        self,
        fetcher: FallbackFetcher,
        engine: PlaybackEngine,
        message_box: Optional[MessageBox] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        """
        Initialize controller.

        Args:
            fetcher: Fallback policy over the configured sources
            engine: Playback engine (its buffer becomes the shared buffer)
            message_box: User-visible messages (created if None)
            executor: Worker for fetches (single-thread pool if None)
        """
        self.fetcher = fetcher
        self.engine = engine
        self.buffer: ImageBuffer = engine.buffer
        self.trigger = Trigger()
        self.message_box = message_box or MessageBox()
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="digit-fetch",
        )
        self._owns_executor = executor is None

        self._pending: Optional[Future] = None
        self._pending_digit: int = -1
        self.last_report: Optional[FetchReport] = None

    @property
    def busy(self) -> bool:
        """Whether a fetch is submitted and not yet consumed."""
        return self._pending is not None

    def request(self, text: str) -> Optional[Future]:
        """
        Handle a trigger press.

        Args:
            text: Digit input field contents

        Returns:
            Future resolving to a FetchReport, or None if nothing was sent.
        """
        if not self.trigger.enabled:
            logger.debug(f"Trigger disabled, ignoring request (holds: {sorted(self.trigger.holds)})")
            return None

        try:
            digit = parse_digit(text)
        except InvalidDigitError as e:
            logger.warning(f"Rejected input: {e}")
            self.message_box.show(INVALID_INPUT_MESSAGE)
            return None

        self.trigger.hold(FETCH_HOLD)
        logger.info(f"Requesting images for digit {digit}")

        self._pending_digit = digit
        self._pending = self._executor.submit(self.fetcher.fetch, digit)
        return self._pending

    def poll(self) -> Optional[FetchReport]:
        """
        Consume a finished fetch, if any.

        Returns:
            The consumed FetchReport, or None if nothing finished.
        """
        future = self._pending
        if future is None or not future.done():
            return None

        self._pending = None

        if future.cancelled():
            logger.info(f"Fetch for digit {self._pending_digit} cancelled")
            self.trigger.release(FETCH_HOLD)
            return None

        try:
            report = future.result()
        except Exception as e:
            logger.exception(f"Fetch task for digit {self._pending_digit} crashed")
            failed = FetchResult.failure("worker", FailureReason.INTERNAL_ERROR, str(e))
            report = FetchReport(digit=self._pending_digit, result=failed, attempts=(failed,))

        self._apply_report(report)
        return report

    def _apply_report(self, report: FetchReport) -> None:
        self.last_report = report
        try:
            if report.ok:
                added = self.buffer.extend(report.frames)
                logger.info(
                    f"Buffered {added} frames for digit {report.digit} "
                    f"from {report.result.source} (total {len(self.buffer)})"
                )
                if self.engine.start():
                    self.trigger.hold(PLAYBACK_HOLD)
            else:
                self.message_box.show(FETCH_FAILED_MESSAGE)
        finally:
            self.trigger.release(FETCH_HOLD)

    def tick(self) -> TickResult:
        """
        Advance one rendered frame.

        Returns:
            The playback engine's TickResult.
        """
        self.poll()

        result = self.engine.tick()
        if result.trigger == TriggerDirective.HOLD:
            self.trigger.hold(PLAYBACK_HOLD)
        elif result.trigger == TriggerDirective.RELEASE:
            self.trigger.release(PLAYBACK_HOLD)
        return result

    def cancel(self) -> bool:
        """
        Cancel a fetch that has not started yet.

        A fetch already running always completes.

        Returns:
            True if a pending fetch was cancelled.
        """
        if self._pending is None or not self._pending.cancel():
            return False
        self.poll()
        return True

    def shutdown(self) -> None:
        """
        Cancel pending work and release resources.

        A request already in flight cannot be cancelled. The worker thread
        is not a daemon, so interpreter exit waits for it to finish.
        """
        self.cancel()
        if self._pending is not None and not self._pending.done():
            logger.warning(
                f"Fetch for digit {self._pending_digit} still in flight, "
                f"exit waits for it to complete"
            )
        if self._owns_executor:
            self._executor.shutdown(wait=False)
        self.fetcher.close()

    def metrics(self) -> dict:
        return {
            "trigger_enabled": self.trigger.enabled,
            "busy": self.busy,
            "buffer": self.buffer.metrics(),
            "playback": self.engine.metrics(),
            "fetch": self.fetcher.metrics.to_dict(),
        }


def build_sources(settings: Settings) -> list:
    """Create the ordered source list: remote first, then local."""
    timeout = settings.sources.timeout_seconds
    return [
        HttpDigitSource("remote", settings.sources.primary_url, timeout=timeout),
        HttpDigitSource("local", settings.sources.secondary_url, timeout=timeout),
    ]


def build_controller(settings: Settings) -> ViewerController:
    """Wire a controller from settings."""
    engine = PlaybackEngine(
        ImageBuffer(),
        hold_frames=settings.playback.hold_frames,
        fade_step=settings.playback.fade_step,
    )
    return ViewerController(
        fetcher=FallbackFetcher(build_sources(settings)),
        engine=engine,
        message_box=MessageBox(display_ms=settings.message.display_ms),
    )
