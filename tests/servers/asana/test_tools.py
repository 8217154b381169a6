import json
import pytest
from unittest.mock import AsyncMock

from mcp.types import CallToolResult

from src.servers.asana.handlers.common import ListArgs, ToolArgs
from src.servers.asana.handlers.registry import ToolRegistry, ToolSpec, build_tool_registry, tool_names
from src.servers.asana.utils.client import AsanaClient
from src.servers.asana.utils.config import ServerConfig
from src.servers.asana.utils.credentials import TenantCredentials


def _text(result: CallToolResult) -> str:
    return result.content[0].text


def test_catalog_names_are_unique_and_prefixed():
    names = tool_names()
    assert len(names) == len(set(names))
    assert all(name.startswith("asana_") for name in names)
    for expected in (
        "asana_test_connection",
        "asana_list_workspaces",
        "asana_create_task",
        "asana_search_tasks",
        "asana_create_goal",
        "asana_create_webhook",
        "asana_typeahead",
    ):
        assert expected in names


def test_list_tools_exposes_json_schema(registry):
    tools = {tool.name: tool for tool in registry.list_tools()}
    schema = tools["asana_create_task"].inputSchema
    assert schema["type"] == "object"
    assert "name" in schema["required"]
    assert "title" not in schema


def test_duplicate_registration_fails(asana_client):
    registry = ToolRegistry(asana_client, ServerConfig())
    spec = ToolSpec(name="asana_x", description="x", arguments=ToolArgs, handler=AsyncMock())
    registry.register(spec)
    with pytest.raises(ValueError):
        registry.register(spec)


@pytest.mark.asyncio
async def test_unknown_tool_returns_error_envelope(registry, fake_asana):
    result = await registry.call("asana_nope", {})

    assert result.isError is True
    assert "Unknown tool: asana_nope" in _text(result)
    assert fake_asana.requests == []


@pytest.mark.asyncio
async def test_invalid_arguments_make_no_outbound_call(registry, fake_asana):
    result = await registry.call("asana_get_task", {"format": "json"})

    assert result.isError is True
    envelope = json.loads(_text(result))
    assert envelope["details"]["validation_errors"][0]["field"] == "task_gid"
    assert fake_asana.requests == []


@pytest.mark.asyncio
async def test_limit_out_of_range_is_rejected(registry, fake_asana):
    result = await registry.call("asana_list_workspaces", {"limit": 500})

    assert result.isError is True
    assert fake_asana.requests == []


@pytest.mark.asyncio
async def test_list_workspaces_uses_default_page_size(registry, fake_asana):
    fake_asana.add("GET", "/workspaces", json_body={"data": [{"gid": "1", "name": "Acme"}]})

    result = await registry.call("asana_list_workspaces", None)

    assert not result.isError
    assert json.loads(_text(result)) == {"data": [{"gid": "1", "name": "Acme"}]}
    assert fake_asana.last.url.params["limit"] == "20"


@pytest.mark.asyncio
async def test_markdown_output(registry, fake_asana):
    fake_asana.add("GET", "/projects/5/tasks", json_body={"data": [{"gid": "9", "name": "Ship"}]})

    result = await registry.call("asana_list_project_tasks", {"project_gid": "5", "format": "markdown"})

    assert _text(result).startswith("## Tasks")
    assert "| 9 | Ship |" in _text(result)


@pytest.mark.asyncio
async def test_create_task_success_envelope(registry, fake_asana):
    fake_asana.add("POST", "/tasks", status_code=201, json_body={"data": {"gid": "9", "name": "Ship"}})

    result = await registry.call("asana_create_task", {"name": "Ship", "workspace": "1", "projects": ["5"]})

    payload = json.loads(_text(result))
    assert payload == {"success": True, "message": "Task created", "task": {"gid": "9", "name": "Ship"}}
    assert fake_asana.last_body() == {"data": {"name": "Ship", "workspace": "1", "projects": ["5"]}}


@pytest.mark.asyncio
async def test_update_task_explicit_null_clears_field(registry, fake_asana):
    fake_asana.add("PUT", "/tasks/9", json_body={"data": {"gid": "9"}})

    await registry.call("asana_update_task", {"task_gid": "9", "due_on": None, "name": "Renamed"})

    assert fake_asana.last_body() == {"data": {"name": "Renamed", "due_on": None}}


@pytest.mark.asyncio
async def test_update_task_omitted_field_is_not_sent(registry, fake_asana):
    fake_asana.add("PUT", "/tasks/9", json_body={"data": {"gid": "9"}})

    await registry.call("asana_update_task", {"task_gid": "9", "completed": True})

    assert fake_asana.last_body() == {"data": {"completed": True}}


@pytest.mark.asyncio
async def test_delete_task(registry, fake_asana):
    fake_asana.add("DELETE", "/tasks/9", json_body={"data": {}})

    result = await registry.call("asana_delete_task", {"task_gid": "9"})

    assert json.loads(_text(result)) == {"success": True, "message": "Task deleted"}


@pytest.mark.asyncio
async def test_upstream_error_becomes_envelope(registry, fake_asana):
    fake_asana.add("GET", "/tasks/9", status_code=429, json_body={}, headers={"Retry-After": "5"})

    result = await registry.call("asana_get_task", {"task_gid": "9"})

    assert result.isError is True
    envelope = json.loads(_text(result))
    assert envelope["error"] == "Error: Rate limit exceeded (retryable)"
    assert envelope["details"]["retry_after"] == 5


@pytest.mark.asyncio
async def test_long_output_is_truncated(asana_client, fake_asana):
    registry = build_tool_registry(asana_client, ServerConfig(character_limit=100))
    fake_asana.add("GET", "/tasks/9", json_body={"data": {"gid": "9", "notes": "x" * 500}})

    result = await registry.call("asana_get_task", {"task_gid": "9"})

    assert "[truncated," in _text(result)


@pytest.mark.asyncio
async def test_search_tasks_passes_list_filters(registry, fake_asana):
    fake_asana.add("GET", "/workspaces/1/tasks/search", json_body={"data": []})

    await registry.call(
        "asana_search_tasks",
        {"workspace_gid": "1", "text": "bug", "assignee_any": ["me"], "tags_any": ["3", "4"], "limit": 5},
    )

    params = fake_asana.last.url.params
    assert params["assignee.any"] == "me"
    assert params["tags.any"] == "3,4"
    assert params["limit"] == "5"


@pytest.mark.asyncio
async def test_set_parent_to_null_detaches_subtask(registry, fake_asana):
    fake_asana.add("POST", "/tasks/9/setParent", json_body={"data": {"gid": "9"}})

    result = await registry.call("asana_set_parent_task", {"task_gid": "9", "parent": None})

    assert not result.isError
    assert fake_asana.last_body() == {"data": {"parent": None}}


@pytest.mark.asyncio
async def test_duplicate_project_reports_new_project(registry, fake_asana):
    fake_asana.add(
        "POST",
        "/projects/5/duplicate",
        status_code=201,
        json_body={"data": {"gid": "j", "status": "in_progress", "new_project": {"gid": "6", "name": "Copy"}}},
    )

    result = await registry.call("asana_duplicate_project", {"project_gid": "5", "name": "Copy"})

    payload = json.loads(_text(result))
    assert payload["message"] == "Project duplicated"
    assert payload["new_project"] == {"gid": "6", "name": "Copy"}


@pytest.mark.asyncio
async def test_create_goal_rejects_unknown_status(registry, fake_asana):
    result = await registry.call("asana_create_goal", {"name": "Grow", "status": "vibes"})

    assert result.isError is True
    assert fake_asana.requests == []


@pytest.mark.asyncio
async def test_add_supporting_relationship(registry, fake_asana):
    fake_asana.add(
        "POST",
        "/goals/1/addSupportingRelationship",
        json_body={"data": {"gid": "r1", "contribution_weight": 0.5}},
    )

    result = await registry.call(
        "asana_add_supporting_relationship",
        {"goal_gid": "1", "supporting_resource": "2", "contribution_weight": 0.5},
    )

    payload = json.loads(_text(result))
    assert payload["message"] == "Supporting relationship added"
    assert payload["relationship"]["gid"] == "r1"
    assert fake_asana.last_body() == {"data": {"supporting_resource": "2", "contribution_weight": 0.5}}


@pytest.mark.asyncio
async def test_create_webhook_requires_url_target(registry, fake_asana):
    result = await registry.call("asana_create_webhook", {"resource": "1", "target": "not a url"})

    assert result.isError is True
    assert fake_asana.requests == []


@pytest.mark.asyncio
async def test_create_webhook_sends_filters(registry, fake_asana):
    fake_asana.add("POST", "/webhooks", status_code=201, json_body={"data": {"gid": "w1", "active": False}})

    await registry.call(
        "asana_create_webhook",
        {
            "resource": "1",
            "target": "https://example.com/hook",
            "filters": [{"action": "changed", "resource_type": "task"}],
        },
    )

    assert fake_asana.last_body() == {
        "data": {
            "resource": "1",
            "target": "https://example.com/hook",
            "filters": [{"action": "changed", "resource_type": "task"}],
        }
    }


@pytest.mark.asyncio
async def test_typeahead(registry, fake_asana):
    fake_asana.add(
        "GET",
        "/workspaces/1/typeahead",
        json_body={"data": [{"gid": "5", "name": "Launch", "resource_type": "project"}]},
    )

    result = await registry.call(
        "asana_typeahead", {"workspace_gid": "1", "resource_type": "project", "query": "Lau"}
    )

    assert json.loads(_text(result)) == {"data": [{"gid": "5", "name": "Launch", "resource_type": "project"}]}
    assert fake_asana.last.url.params["resource_type"] == "project"


@pytest.mark.asyncio
async def test_connection_success(registry, fake_asana):
    fake_asana.add("GET", "/users/me", json_body={"data": {"gid": "1", "name": "Ada"}})

    result = await registry.call("asana_test_connection", {})

    payload = json.loads(_text(result))
    assert payload["connected"] is True
    assert payload["message"] == "Connected as Ada (no email)"


@pytest.mark.asyncio
async def test_connection_failure(registry, fake_asana):
    fake_asana.add("GET", "/users/me", status_code=401, json_body={})

    result = await registry.call("asana_test_connection", {})

    assert not result.isError
    payload = json.loads(_text(result))
    assert payload == {
        "connected": False,
        "message": "Authentication failed. Check your Asana access token.",
    }


def test_page_size_is_capped(asana_client):
    registry = ToolRegistry(asana_client, ServerConfig(max_page_size=10))
    args = ListArgs(limit=50)
    assert registry.context.page(args).limit == 10


@pytest.mark.asyncio
async def test_handler_exception_is_contained(asana_client):
    registry = ToolRegistry(asana_client, ServerConfig())
    handler = AsyncMock(side_effect=RuntimeError("kaboom"))
    registry.register(ToolSpec(name="asana_boom", description="", arguments=ToolArgs, handler=handler))

    result = await registry.call("asana_boom", {})

    assert result.isError is True
    assert json.loads(_text(result)) == {"error": "Error: kaboom", "details": {"type": "RuntimeError"}}
    handler.assert_awaited_once()
    assert isinstance(handler.await_args.args[1], ToolArgs)


@pytest.mark.asyncio
async def test_handler_receives_context(asana_client):
    registry = ToolRegistry(asana_client, ServerConfig())
    handler = AsyncMock(return_value="ok")
    registry.register(ToolSpec(name="asana_ok", description="", arguments=ToolArgs, handler=handler))

    result = await registry.call("asana_ok", {"unexpected": 1})

    assert _text(result) == "ok"
    ctx = handler.await_args.args[0]
    assert ctx.client is asana_client


@pytest.mark.asyncio
async def test_list_team_projects_filters_archived(registry, fake_asana):
    fake_asana.add("GET", "/teams/3/projects", json_body={"data": [{"gid": "5", "name": "Launch"}]})

    result = await registry.call("asana_list_team_projects", {"team_gid": "3", "archived": False})

    assert json.loads(_text(result))["data"][0]["gid"] == "5"
    assert fake_asana.last.url.params["archived"] == "false"


@pytest.mark.asyncio
async def test_repeated_reads_are_identical(registry, fake_asana):
    fake_asana.add("GET", "/workspaces/1", json_body={"data": {"gid": "1", "name": "Acme", "is_organization": True}})

    first = await registry.call("asana_get_workspace", {"workspace_gid": "1"})
    second = await registry.call("asana_get_workspace", {"workspace_gid": "1"})

    assert _text(first) == _text(second)
    assert len(fake_asana.requests) == 2


@pytest.mark.asyncio
async def test_not_found_surfaces_as_error(registry, fake_asana):
    result = await registry.call("asana_get_project", {"project_gid": "404"})

    assert result.isError is True
    envelope = json.loads(_text(result))
    assert envelope["error"] == "Error: Resource not found: /projects/404"
    assert envelope["details"]["path"] == "/projects/404"


def test_registries_are_bound_to_their_own_client(config):
    first_client = AsanaClient(TenantCredentials(access_token="tenant-a"))
    second_client = AsanaClient(TenantCredentials(access_token="tenant-b"))

    first = build_tool_registry(first_client, config)
    second = build_tool_registry(second_client, config)

    assert first.context is not second.context
    assert first.context.client.credentials.access_token == "tenant-a"
    assert second.context.client.credentials.access_token == "tenant-b"
    assert first.names() == second.names()


@pytest.mark.asyncio
async def test_malformed_success_body_keeps_status_in_envelope(registry, fake_asana):
    fake_asana.add("GET", "/tasks/9", text="not json")

    result = await registry.call("asana_get_task", {"task_gid": "9"})

    assert result.isError is True
    envelope = json.loads(_text(result))
    assert envelope["details"]["status_code"] == 200
