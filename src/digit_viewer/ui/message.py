"""
Message Box
===========

Transient user-visible message.

A shown message stays visible for exactly `display_ms` milliseconds on
the injected monotonic clock, then hides. Showing a new message replaces
the current one and restarts the timer.
"""

import logging
import time
from typing import Callable, List, Optional


logger = logging.getLogger(__name__)


class MessageBox:
    """
    Timed message display.

    Attributes:
        display_ms: Visibility duration in milliseconds
        history: Every message shown, oldest first
    """

    def __init__(
        self,
        display_ms: int = 3000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize message box.

        Args:
            display_ms: How long each message stays visible
            clock: Monotonic clock returning seconds
        """
        self.display_ms = display_ms
        self._clock = clock
        self._text: Optional[str] = None
        self._hide_at: float = 0.0
        self.history: List[str] = []

    def show(self, text: str) -> None:
        """Display text for display_ms milliseconds."""
        self._text = text
        self._hide_at = self._clock() + self.display_ms / 1000.0
        self.history.append(text)
        logger.info(f"Message shown: {text}")

    @property
    def visible(self) -> bool:
        return self._text is not None and self._clock() < self._hide_at

    def current(self) -> Optional[str]:
        """Visible message text, or None once expired."""
        if self.visible:
            return self._text
        return None
