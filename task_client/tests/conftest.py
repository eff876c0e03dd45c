from __future__ import annotations

from typing import Callable

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from fake_backend import create_app
from src.client.accessor import HttpTaskAccessor

MOCK_BASE_URL = "http://tasks.test"


@pytest.fixture()
def backend() -> FastAPI:
    """A fresh fake task service with an empty store."""
    return create_app()


@pytest.fixture()
def http_accessor(backend: FastAPI) -> HttpTaskAccessor:
    """HTTP accessor wired to the fake service through FastAPI's TestClient."""
    return HttpTaskAccessor(client=TestClient(backend))


@pytest.fixture()
def mock_accessor() -> Callable[[Callable[[httpx.Request], httpx.Response]], HttpTaskAccessor]:
    """
    Factory for HTTP accessors whose transport is a plain function, so tests
    can hand-craft responses or raise httpx transport errors.
    """

    def build(handler: Callable[[httpx.Request], httpx.Response]) -> HttpTaskAccessor:
        client = httpx.Client(base_url=MOCK_BASE_URL, transport=httpx.MockTransport(handler))
        return HttpTaskAccessor(client=client)

    return build
