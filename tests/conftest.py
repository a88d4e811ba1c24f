"""Shared pytest fixtures for faking the Quip API."""

from __future__ import annotations

from collections import deque
from unittest.mock import Mock

import httpx
import pytest

from quipservice.http.dispatcher import RequestDispatcher
from quipservice.service import QuipService

TOKEN = "###TOKEN###"
API_URL = "http://quip.com"


class FakeApi:
    """MockTransport handler serving queued responses.

    Queued items are returned in order; once the queue is empty each
    request gets a fresh ``default()``. Exceptions are raised instead of
    returned.
    """

    def __init__(self, *responses: httpx.Response | Exception, default=None):
        self.queue = deque(responses)
        self.default = default
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.queue:
            item = self.queue.popleft()
        else:
            item = self.default() if self.default else None
        if item is None:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        if isinstance(item, Exception):
            raise item
        return item


def _ok_json(data=None) -> httpx.Response:
    return httpx.Response(200, json={"data": 123456} if data is None else data)


def _ok_blob(content: bytes = bytes([1, 2, 3, 4, 5, 6])) -> httpx.Response:
    return httpx.Response(
        200,
        content=content,
        headers={"content-type": "image/jpeg", "content-disposition": "attachment"},
    )


def _status(code: int, headers: dict[str, str] | None = None) -> httpx.Response:
    return httpx.Response(code, headers=headers)


@pytest.fixture
def fake_api():
    """FakeApi factory: ``fake_api(*responses, default=...)``."""
    return FakeApi


@pytest.fixture
def ok_json():
    """Builder for a 200 JSON response (``{"data": 123456}`` by default)."""
    return _ok_json


@pytest.fixture
def ok_blob():
    """Builder for a 200 binary response."""
    return _ok_blob


@pytest.fixture
def status():
    """Builder for a bodyless response with the given status code."""
    return _status


@pytest.fixture
def logger() -> Mock:
    """Logger collaborator recording debug/error calls."""
    return Mock(spec=["debug", "error"])


@pytest.fixture
def make_dispatcher(logger):
    """Factory for dispatchers backed by a FakeApi."""

    def _make(api: FakeApi, **kwargs) -> RequestDispatcher:
        kwargs.setdefault("waiting_ms", 1)
        kwargs.setdefault("logger", logger)
        return RequestDispatcher(TOKEN, API_URL, transport=httpx.MockTransport(api), **kwargs)

    return _make


@pytest.fixture
def make_service(logger):
    """Factory for services backed by a FakeApi."""

    def _make(api: FakeApi, **kwargs) -> QuipService:
        kwargs.setdefault("waiting_ms", 1)
        kwargs.setdefault("logger", logger)
        return QuipService(TOKEN, API_URL, transport=httpx.MockTransport(api), **kwargs)

    return _make
