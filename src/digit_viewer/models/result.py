"""
Fetch Results
=============

Typed outcomes of data source attempts.

Each attempt against one source yields exactly ONE FetchResult.
A fallback chain yields one FetchReport holding every attempt made.

Rules:
    - Sources never raise for transport, status or payload problems
    - Every non-success carries one FailureReason
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from digit_viewer.frames.frame import ImageFrame


class FetchStatus(str, Enum):
    """
    Outcome class of one source attempt.

    Attributes:
        SUCCESS: At least one valid frame returned
        EMPTY: Request succeeded but returned no frames
        FAILURE: Transport, HTTP or payload error
    """

    SUCCESS = "SUCCESS"
    EMPTY = "EMPTY"
    FAILURE = "FAILURE"


class FailureReason(str, Enum):
    """
    Machine-readable reason for a non-success attempt.

    Attributes:
        NETWORK_ERROR: Connection failed or transport raised
        HTTP_STATUS: Response status outside 2xx
        MALFORMED_PAYLOAD: Body is not JSON or has the wrong shape
        EMPTY_PAYLOAD: Body is valid but holds no images
        INTERNAL_ERROR: Unexpected exception in a source or the fetch task
    """

    NETWORK_ERROR = "NETWORK_ERROR"
    HTTP_STATUS = "HTTP_STATUS"
    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
    EMPTY_PAYLOAD = "EMPTY_PAYLOAD"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class FetchResult:
    """Result of one attempt against one source."""

    status: FetchStatus
    source: str
    frames: Tuple[ImageFrame, ...] = ()
    reason: Optional[FailureReason] = None
    status_code: Optional[int] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status == FetchStatus.SUCCESS

    @classmethod
    def success(cls, source: str, frames, status_code: Optional[int] = None) -> "FetchResult":
        return cls(
            status=FetchStatus.SUCCESS,
            source=source,
            frames=tuple(frames),
            status_code=status_code,
        )

    @classmethod
    def empty(cls, source: str, status_code: Optional[int] = None) -> "FetchResult":
        return cls(
            status=FetchStatus.EMPTY,
            source=source,
            reason=FailureReason.EMPTY_PAYLOAD,
            status_code=status_code,
            detail="No images returned",
        )

    @classmethod
    def failure(
        cls,
        source: str,
        reason: FailureReason,
        detail: str = "",
        status_code: Optional[int] = None,
    ) -> "FetchResult":
        return cls(
            status=FetchStatus.FAILURE,
            source=source,
            reason=reason,
            status_code=status_code,
            detail=detail,
        )

    def __repr__(self) -> str:
        if self.ok:
            return f"FetchResult({self.source}, SUCCESS, frames={len(self.frames)})"
        return f"FetchResult({self.source}, {self.status.value}, {self.reason.value})"


@dataclass(frozen=True)
class FetchReport:
    """
    Result of a full fallback chain.

    Attributes:
        digit: Requested digit
        result: Final outcome (first success, or the last failure)
        attempts: Every attempt made, in order
    """

    digit: int
    result: FetchResult
    attempts: Tuple[FetchResult, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.result.ok

    @property
    def frames(self) -> Tuple[ImageFrame, ...]:
        return self.result.frames
