"""
Trigger
=======

The user-facing control that starts a generation request.

The trigger is enabled only when nothing holds it. Holds are named so
independent parts can disable it without clobbering each other:

    - "fetch":    a request is in flight
    - "playback": buffered frames are still waiting to be shown
"""

import logging
from typing import FrozenSet, Set


logger = logging.getLogger(__name__)


FETCH_HOLD = "fetch"
PLAYBACK_HOLD = "playback"


class Trigger:
    """Enable/disable state built from a set of named holds."""

    def __init__(self) -> None:
        self._holds: Set[str] = set()

    @property
    def enabled(self) -> bool:
        return not self._holds

    @property
    def holds(self) -> FrozenSet[str]:
        return frozenset(self._holds)

    def hold(self, reason: str) -> None:
        if reason not in self._holds:
            self._holds.add(reason)
            logger.debug(f"Trigger held by {reason}: {sorted(self._holds)}")

    def release(self, reason: str) -> None:
        if reason in self._holds:
            self._holds.discard(reason)
            logger.debug(f"Trigger released by {reason}: {sorted(self._holds)}")
            if not self._holds:
                logger.info("Trigger enabled")
