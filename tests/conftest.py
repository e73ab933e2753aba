"""Shared fixtures: settings isolated from the developer's `.env` and a
factory for clients backed by `httpx.MockTransport` (no network)."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from adapters.http_client import build_async_client
from core.config import AppSettings

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings(tmp_path, monkeypatch) -> AppSettings:
    monkeypatch.chdir(tmp_path)
    return AppSettings(_env_file=None, base_url="http://testserver")


@pytest.fixture
def make_client(settings) -> Callable[[Handler], httpx.AsyncClient]:
    def factory(handler: Handler) -> httpx.AsyncClient:
        return build_async_client(settings, transport=httpx.MockTransport(handler))

    return factory


class Recorder:
    """Handler wrapper that remembers every request it served."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def recorder() -> Callable[[Handler], Recorder]:
    return Recorder
