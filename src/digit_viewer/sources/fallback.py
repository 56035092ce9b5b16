"""
Fallback Fetcher
================

Ordered fallback across data sources.

The fetcher tries each source in order and stops at the first one that
returns frames. EMPTY and FAILURE results both move on to the next source.
When every source fails, the last attempt becomes the final result.

Design Rules:
    - Each source is queried at most once per fetch
    - A source that raises counts as a failed attempt
    - No retries beyond the source list
    - Pure policy: no UI, buffer or playback access
"""

import logging
from typing import List, Sequence

from digit_viewer.models.result import FailureReason, FetchReport, FetchResult
from digit_viewer.sources.source import DataSource


logger = logging.getLogger(__name__)


class FallbackMetrics:
    """Metrics for FallbackFetcher observability."""

    __slots__ = (
        "requests",
        "successes",
        "exhausted",
        "fallbacks",
    )

    def __init__(self) -> None:
        self.requests: int = 0
        self.successes: int = 0
        self.exhausted: int = 0
        self.fallbacks: int = 0

    def to_dict(self) -> dict:
        """Export metrics as dict."""
        return {
            "requests": self.requests,
            "successes": self.successes,
            "exhausted": self.exhausted,
            "fallbacks": self.fallbacks,
        }


class FallbackFetcher:
    """
    Try sources in order until one yields frames.

    Example:
        fetcher = FallbackFetcher([remote, local])
        report = fetcher.fetch(3)
        if report.ok:
            buffer.extend(report.frames)
    """

    def __init__(self, sources: Sequence[DataSource]) -> None:
        """
        Initialize fetcher.

        Args:
            sources: Sources in priority order. Must not be empty.
        """
        if not sources:
            raise ValueError("FallbackFetcher needs at least one source")

        self.sources = list(sources)
        self.metrics = FallbackMetrics()

    def fetch(self, digit: int) -> FetchReport:
        """
        Run the fallback chain for one digit.

        Args:
            digit: Validated digit in [0, 9]

        Returns:
            FetchReport with the final result and every attempt
        """
        self.metrics.requests += 1
        attempts: List[FetchResult] = []

        for position, source in enumerate(self.sources):
            if position > 0:
                self.metrics.fallbacks += 1
                logger.info(f"Falling back to {source.name} server for digit {digit}")

            try:
                result = source.fetch(digit)
            except Exception as e:
                logger.exception(f"Source {source.name} raised for digit {digit}")
                result = FetchResult.failure(source.name, FailureReason.INTERNAL_ERROR, str(e))
            attempts.append(result)

            if result.ok:
                self.metrics.successes += 1
                return FetchReport(digit=digit, result=result, attempts=tuple(attempts))

            logger.warning(f"Source {source.name} gave no frames for digit {digit}: {result!r}")

        self.metrics.exhausted += 1
        logger.error(f"All {len(self.sources)} sources failed for digit {digit}")
        return FetchReport(digit=digit, result=attempts[-1], attempts=tuple(attempts))

    def close(self) -> None:
        """Close sources that hold resources."""
        for source in self.sources:
            close = getattr(source, "close", None)
            if close is not None:
                close()
