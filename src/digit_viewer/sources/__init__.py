"""
Sources Module
==============

Generation backends and the ordered fallback policy.

    - DataSource: Protocol every source implements
    - HttpDigitSource: `GET <base>/generate/{digit}` client
    - FallbackFetcher: Tries sources in order until one yields frames

Example:
    from digit_viewer.sources import FallbackFetcher, HttpDigitSource

    fetcher = FallbackFetcher([
        HttpDigitSource("remote", "https://digit2image-backend.onrender.com"),
        HttpDigitSource("local", "http://localhost:8080"),
    ])
    report = fetcher.fetch(7)
"""

from digit_viewer.sources.source import DataSource, HttpDigitSource
from digit_viewer.sources.fallback import FallbackFetcher, FallbackMetrics


__all__ = [
    "DataSource",
    "HttpDigitSource",
    "FallbackFetcher",
    "FallbackMetrics",
]
