import json
import pytest

from starlette.testclient import TestClient

from src.remote import (
    STATEFUL_DISABLED_MESSAGE,
    StatefulModeDisabledError,
    StatefulSessionAgent,
    create_starlette_app,
)
from src.servers.asana.handlers.registry import tool_names
from src.servers.asana.main import create_server, get_initialization_options

MCP_HEADERS = {
    "Accept": "application/json, text/event-stream",
    "Content-Type": "application/json",
}


@pytest.fixture
def http_client(fake_asana, config):
    app = create_starlette_app(transport=fake_asana.transport, config=config)
    with TestClient(app) as client:
        yield client


def _rpc(method, params=None, request_id=1):
    return {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params or {}}


def test_health_bypasses_auth(http_client):
    response = http_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "server": "primrose-mcp-asana"}


def test_unknown_path_returns_capability_document(http_client):
    response = http_client.get("/anything/else")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "primrose-mcp-asana"
    assert body["version"] == "1.0.0"
    assert body["description"] == "Multi-tenant Asana MCP Server"
    assert body["authentication"]["required_headers"] == ["X-Asana-Access-Token"]
    assert body["tools"] == tool_names()


def test_get_on_mcp_returns_capability_document(http_client):
    response = http_client.get("/mcp")
    assert response.status_code == 200
    assert response.json()["name"] == "primrose-mcp-asana"


@pytest.mark.parametrize("method", ["get", "post"])
def test_sse_not_implemented(http_client, method):
    response = getattr(http_client, method)("/sse")
    assert response.status_code == 501
    assert response.headers["content-type"].startswith("text/plain")


def test_mcp_without_token_is_unauthorized(http_client, fake_asana):
    response = http_client.post("/mcp", json=_rpc("tools/list"), headers=MCP_HEADERS)

    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "Unauthorized"
    assert body["required_headers"] == ["X-Asana-Access-Token"]
    assert "X-Asana-Access-Token" in body["message"]
    assert fake_asana.requests == []


def test_mcp_with_blank_token_is_unauthorized(http_client, fake_asana):
    headers = dict(MCP_HEADERS, **{"X-Asana-Access-Token": "   "})
    response = http_client.post("/mcp", json=_rpc("tools/list"), headers=headers)

    assert response.status_code == 401
    assert fake_asana.requests == []


def test_mcp_lists_tools(http_client):
    headers = dict(MCP_HEADERS, **{"X-Asana-Access-Token": "tenant-a"})
    response = http_client.post("/mcp", json=_rpc("tools/list"), headers=headers)

    assert response.status_code == 200
    tools = response.json()["result"]["tools"]
    assert [tool["name"] for tool in tools] == tool_names()


def test_mcp_call_uses_callers_token(http_client, fake_asana):
    fake_asana.add("GET", "/users/me", json_body={"data": {"gid": "1", "name": "Ada", "email": "ada@example.com"}})

    for token in ("tenant-a", "tenant-b"):
        headers = dict(MCP_HEADERS, **{"x-asana-access-token": token})
        response = http_client.post(
            "/mcp",
            json=_rpc("tools/call", {"name": "asana_get_me", "arguments": {}}),
            headers=headers,
        )
        assert response.status_code == 200

    assert [r.headers["Authorization"] for r in fake_asana.requests] == [
        "Bearer tenant-a",
        "Bearer tenant-b",
    ]
    result = response.json()["result"]
    assert result["isError"] is False
    assert json.loads(result["content"][0]["text"])["name"] == "Ada"


def test_mcp_tool_error_is_reported_in_result(http_client, fake_asana):
    fake_asana.add("GET", "/tasks/9", status_code=401, json_body={})
    headers = dict(MCP_HEADERS, **{"X-Asana-Access-Token": "expired"})

    response = http_client.post(
        "/mcp",
        json=_rpc("tools/call", {"name": "asana_get_task", "arguments": {"task_gid": "9"}}),
        headers=headers,
    )

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["isError"] is True
    envelope = json.loads(result["content"][0]["text"])
    assert envelope["details"]["status_code"] == 401


def test_stateful_mode_is_refused():
    with pytest.raises(StatefulModeDisabledError) as exc_info:
        StatefulSessionAgent().initialize()
    assert str(exc_info.value) == STATEFUL_DISABLED_MESSAGE


def test_initialization_options(credentials):
    server = create_server(credentials)
    options = get_initialization_options(server)

    assert options.server_name == "primrose-mcp-asana"
    assert options.server_version == "1.0.0"
    assert options.capabilities.tools is not None
