"""
Data Models
===========

Payload schema and typed fetch results.

Models:
    Input:
        - GenerateResponse: Schema of the generation backend body

    Results:
        - FetchStatus: SUCCESS, EMPTY, FAILURE
        - FailureReason: Why an attempt did not succeed
        - FetchResult: One source attempt
        - FetchReport: One fallback chain
"""

from digit_viewer.models.response import GenerateResponse
from digit_viewer.models.result import (
    FailureReason,
    FetchReport,
    FetchResult,
    FetchStatus,
)

__all__ = [
    # Input
    "GenerateResponse",
    # Results
    "FetchStatus",
    "FailureReason",
    "FetchResult",
    "FetchReport",
]
