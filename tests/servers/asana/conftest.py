import os
import sys
import json
import pytest
from typing import Any, Dict, List, Tuple

import httpx

# Make sure pytest can find the modules we need
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../../..")))

from src.servers.asana.handlers.registry import build_tool_registry
from src.servers.asana.utils.client import AsanaClient
from src.servers.asana.utils.config import ServerConfig
from src.servers.asana.utils.credentials import TenantCredentials

API_PREFIX = "/api/1.0"


class FakeAsana:
    """Routes outbound requests to canned responses and records what was sent"""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[int, Any, Dict[str, str], Any]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, status_code: int = 200, json_body: Any = None, headers=None, text=None):
        self.routes[(method, API_PREFIX + path)] = (status_code, json_body, headers or {}, text)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"errors": [{"message": "Unknown object"}]})
        status_code, json_body, headers, text = route
        if text is not None:
            return httpx.Response(status_code, text=text, headers=headers)
        if json_body is None:
            return httpx.Response(status_code, headers=headers)
        return httpx.Response(status_code, json=json_body, headers=headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self) -> Dict[str, Any]:
        return json.loads(self.last.content)


@pytest.fixture
def fake_asana():
    return FakeAsana()


@pytest.fixture
def credentials():
    return TenantCredentials(access_token="test-token")


@pytest.fixture
def config():
    return ServerConfig()


@pytest.fixture
def asana_client(fake_asana, credentials):
    return AsanaClient(credentials, transport=fake_asana.transport)


@pytest.fixture
def registry(asana_client, config):
    return build_tool_registry(asana_client, config)
