"""
Data Sources
============

HTTP clients for the digit generation backends.

Each source issues `GET <base_url>/generate/{digit}` and turns whatever
happens into a typed FetchResult.

Design Rules:
    - fetch() never raises for transport, status or payload problems
    - Malformed JSON and wrong-shape bodies are failures, same as network errors
    - Empty or missing "images" is EMPTY, not FAILURE
    - No retries inside a source; fallback is the fetcher's job
"""

import logging
from typing import Optional, Protocol

import requests
from pydantic import ValidationError

from digit_viewer.frames.decoder import FrameDecodeError, decode_images
from digit_viewer.models.response import GenerateResponse
from digit_viewer.models.result import FailureReason, FetchResult


logger = logging.getLogger(__name__)


class DataSource(Protocol):
    """
    Protocol for image sources.

    Implemented by:
        - HttpDigitSource (remote and local backends)
        - test doubles
    """

    name: str

    def fetch(self, digit: int) -> FetchResult:
        """
        Request generated images for a digit.

        Args:
            digit: Validated digit in [0, 9]

        Returns:
            FetchResult describing the outcome
        """
        ...


class HttpDigitSource:
    """
    Generation backend reached over HTTP.

    Attributes:
        name: Label used in logs and results ("remote", "local")
        base_url: Backend root, without trailing slash
        timeout: Request timeout in seconds (None = transport default)

    Example:
        source = HttpDigitSource("remote", "https://example.org")
        result = source.fetch(5)
        if result.ok:
            buffer.extend(result.frames)
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize source.

        Args:
            name: Source label
            base_url: Backend root URL
            timeout: Per-request timeout in seconds
            session: Shared requests session (created if None)
        """
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def url_for(self, digit: int) -> str:
        """Build the generate URL for a digit."""
        return f"{self.base_url}/generate/{digit}"

    def fetch(self, digit: int) -> FetchResult:
        """Request images for a digit. Never raises for I/O or payload errors."""
        url = self.url_for(digit)
        logger.debug(f"GET {url}")

        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Error fetching from {self.name} server: {e}")
            return FetchResult.failure(self.name, FailureReason.NETWORK_ERROR, str(e))

        if not 200 <= response.status_code < 300:
            detail = f"{self.name.capitalize()} server responded with status {response.status_code}"
            logger.error(detail)
            return FetchResult.failure(
                self.name,
                FailureReason.HTTP_STATUS,
                detail,
                status_code=response.status_code,
            )

        try:
            body = GenerateResponse.model_validate(response.json())
        except (ValueError, RecursionError) as e:
            # requests' JSONDecodeError, pydantic's ValidationError and over-nested bodies
            kind = "schema" if isinstance(e, ValidationError) else "JSON"
            logger.error(f"Invalid {kind} from {self.name} server: {e}")
            return FetchResult.failure(
                self.name,
                FailureReason.MALFORMED_PAYLOAD,
                str(e),
                status_code=response.status_code,
            )

        if body.is_empty:
            logger.error(f"No images returned for the specified digit from {self.name} server.")
            return FetchResult.empty(self.name, status_code=response.status_code)

        try:
            frames = decode_images(body.images, source=self.name)
        except FrameDecodeError as e:
            logger.error(f"Undecodable image from {self.name} server: {e}")
            return FetchResult.failure(
                self.name,
                FailureReason.MALFORMED_PAYLOAD,
                str(e),
                status_code=response.status_code,
            )

        logger.info(f"New images received from {self.name} server: {len(frames)}")
        return FetchResult.success(self.name, frames, status_code=response.status_code)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __repr__(self) -> str:
        return f"HttpDigitSource(name={self.name!r}, base_url={self.base_url!r})"
