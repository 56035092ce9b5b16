"""
Test Configuration
==================

Pytest fixtures and test doubles for the digit viewer.
"""

from concurrent.futures import Executor, Future

import numpy as np
import pytest
import requests

from digit_viewer.frames.frame import GRID_SIZE, ImageFrame
from digit_viewer.models.result import FailureReason, FetchResult


def make_image(value: int = 128) -> list:
    """Payload image (28 rows of 28 ints) filled with one value."""
    return [[value] * GRID_SIZE for _ in range(GRID_SIZE)]


def make_frame(value: int = 128, source: str = "test") -> ImageFrame:
    return ImageFrame(
        pixels=np.full((GRID_SIZE, GRID_SIZE), value, dtype=np.uint8),
        source=source,
    )


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, payload=None, invalid_json: bool = False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """
    Records GET calls and replays scripted outcomes.

    Each outcome is a FakeResponse or an exception instance to raise.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append({"url": url, "timeout": timeout})
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


class StubSource:
    """DataSource returning scripted results and counting calls."""

    def __init__(self, name: str, result: FetchResult):
        self.name = name
        self.result = result
        self.calls = []

    def fetch(self, digit: int) -> FetchResult:
        self.calls.append(digit)
        return self.result


class ImmediateExecutor(Executor):
    """Runs submitted callables synchronously and returns a finished Future."""

    def __init__(self):
        self.submitted = 0

    def submit(self, fn, *args, **kwargs):
        self.submitted += 1
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


class DeferredExecutor(Executor):
    """Holds submitted work until run_all(), so a Future can stay pending."""

    def __init__(self):
        self.pending = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.pending.append((future, fn, args, kwargs))
        return future

    def run_all(self):
        for future, fn, args, kwargs in self.pending:
            if future.set_running_or_notify_cancel():
                future.set_result(fn(*args, **kwargs))
        self.pending = []


class FakeClock:
    """Manually advanced monotonic clock, kept in whole milliseconds."""

    def __init__(self, now_ms: int = 1_000_000):
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms / 1000.0

    def advance_ms(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def frame_factory():
    """Build frames of a given luminance."""
    return make_frame


@pytest.fixture
def image_factory():
    """Build payload images of a given luminance."""
    return make_image


@pytest.fixture
def success_result():
    """Two-frame success from the local source."""
    return FetchResult.success("local", [make_frame(10, "local"), make_frame(200, "local")])


@pytest.fixture
def network_failure():
    """Network failure from the remote source."""
    return FetchResult.failure("remote", FailureReason.NETWORK_ERROR, "connection refused")


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")


@pytest.fixture
def clock():
    return FakeClock()
