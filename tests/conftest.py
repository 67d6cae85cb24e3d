# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Test Fixtures for the BrowserAct adapter

Provides a fast-polling config, a mocked task API, a fake host context
and an httpx MockTransport-backed transport.
"""

import json
import os
import sys
from typing import Any, Callable, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock

import httpx
import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from browseract_adapter.api_client import TaskApiClient
from browseract_adapter.core.config import Config
from browseract_adapter.credentials import BrowserActApiCredentials
from browseract_adapter.transport import AuthenticatedTransport


BASE_URL = "https://api.test/v2"


@pytest.fixture
def config():
    """Default polling policy, test base URL"""
    return Config(base_url=BASE_URL, log_format="text")


@pytest.fixture
def credentials():
    return BrowserActApiCredentials(api_key="test-key")


@pytest.fixture
def fake_sleep():
    """Records poll delays without waiting"""
    return AsyncMock(return_value=None)


@pytest.fixture
def mock_api(config):
    """TaskApiClient with every endpoint mocked"""
    api = AsyncMock(spec=TaskApiClient)
    api.config = config
    return api


class FakeHost:
    """
    Minimal host context.

    Parameters are given per input item; credentials by name.
    """

    def __init__(
        self,
        items: List[Dict[str, Any]],
        credentials: Optional[Dict[str, Dict[str, Any]]] = None
    ):
        self.items = items
        self.credentials = credentials if credentials is not None else {
            "browserActApi": {"apiKey": "test-key"}
        }

    def get_credentials(self, name: str) -> Optional[Dict[str, Any]]:
        return self.credentials.get(name)

    def get_node_parameter(self, name: str, item_index: int, default: Any = None) -> Any:
        return self.items[item_index].get(name, default)

    def get_input_data(self) -> List[Dict[str, Any]]:
        return [{"json": {}} for _ in self.items]


@pytest.fixture
def make_host():
    return FakeHost


class FakeTaskService:
    """
    In-memory BrowserAct API served through httpx.MockTransport.

    Routes are (method, path) -> callable(request) returning JSON or an
    httpx.Response. Every request is recorded.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], Any]] = {}
        self.requests: List[httpx.Request] = []

    def route(self, method: str, path: str, handler: Any) -> None:
        if not callable(handler):
            payload = handler
            handler = lambda request: payload  # noqa: E731
        self.routes[(method, "/v2" + path)] = handler

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == "/v2" + path]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"message": "not found"})
        result = handler(request)
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, content=json.dumps(result).encode(), headers={"content-type": "application/json"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(self.handle))


@pytest.fixture
def task_service():
    return FakeTaskService()


@pytest.fixture
def transport_factory(task_service):
    """Builds transports bound to the fake task service"""
    def factory(creds: BrowserActApiCredentials, cfg: Config) -> AuthenticatedTransport:
        return AuthenticatedTransport(creds, config=cfg, client=task_service.client())
    return factory
