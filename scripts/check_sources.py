#!/usr/bin/env python3
"""
Source Check Script
===================

Standalone script to check the generation backends.

This script:
    1. Queries every configured source for a digit, one by one
    2. Runs the full fallback chain once
    3. Reports a summary

Prerequisites:
    - At least one backend reachable at the configured URL
    - Install the package: pip install -e .

Usage:
    python scripts/check_sources.py --digit 7
    python scripts/check_sources.py --primary-url http://localhost:9000
"""

import argparse
import logging
import sys

from digit_viewer.config import settings
from digit_viewer.controller import InvalidDigitError, build_sources, parse_digit
from digit_viewer.sources import FallbackFetcher


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger(__name__)


def run_check(digit: int) -> dict:
    """
    Query each source, then the fallback chain.

    Args:
        digit: Validated digit

    Returns:
        Summary dict
    """
    sources = build_sources(settings)

    logger.info("=" * 60)
    logger.info(f"Source check for digit {digit}")
    logger.info("=" * 60)

    per_source = {}
    for source in sources:
        result = source.fetch(digit)
        per_source[source.name] = result.status.value
        logger.info(f"  {source.name:<8} {source.base_url:<45} {result!r}")

    fetcher = FallbackFetcher(sources)
    report = fetcher.fetch(digit)
    fetcher.close()

    logger.info("-" * 60)
    logger.info(f"Fallback result: {report.result!r}")
    logger.info(f"Attempts: {len(report.attempts)}")
    logger.info("=" * 60)

    if report.ok:
        logger.info("✅ CHECK PASSED - Frames received")
    else:
        logger.error("❌ CHECK FAILED - No source returned frames")

    return {
        "sources": per_source,
        "ok": report.ok,
        "frames": len(report.frames),
        "served_by": report.result.source,
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Check digit generation backends")
    parser.add_argument("--digit", type=str, default="0", help="Digit to request (default: 0)")
    parser.add_argument("--primary-url", type=str, default=None, help="Override remote base URL")
    parser.add_argument("--secondary-url", type=str, default=None, help="Override local base URL")
    args = parser.parse_args(argv)

    if args.primary_url:
        settings.sources.primary_url = args.primary_url
    if args.secondary_url:
        settings.sources.secondary_url = args.secondary_url

    try:
        digit = parse_digit(args.digit)
    except InvalidDigitError as e:
        parser.error(str(e))

    result = run_check(digit)
    sys.exit(0 if result["ok"] else 1)


if __name__ == "__main__":
    main()
