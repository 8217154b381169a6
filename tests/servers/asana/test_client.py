import pytest

from src.servers.asana.utils.client import CLEAR, build_body, join_gids
from src.servers.asana.utils.errors import (
    AsanaApiError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
)
from src.servers.asana.utils.models import PaginationParams
from pydantic import ValidationError


def test_build_body_drops_none_and_keeps_clear_as_null():
    body = build_body({"name": "Launch", "notes": None, "due_on": CLEAR})
    assert body == {"name": "Launch", "due_on": None}


def test_join_gids():
    assert join_gids(["1", "2", "3"]) == "1,2,3"
    assert join_gids([]) is None
    assert join_gids(None) is None


@pytest.mark.asyncio
async def test_request_sends_bearer_token_and_unwraps_data(fake_asana, asana_client):
    fake_asana.add("GET", "/users/me", json_body={"data": {"gid": "1", "name": "Ada", "email": "ada@example.com"}})

    user = await asana_client.get_me()

    assert user == {"gid": "1", "name": "Ada", "email": "ada@example.com"}
    request = fake_asana.last
    assert request.headers["Authorization"] == "Bearer test-token"
    assert request.headers["Accept"] == "application/json"


@pytest.mark.asyncio
async def test_unknown_upstream_fields_pass_through(fake_asana, asana_client):
    fake_asana.add(
        "GET",
        "/tasks/42",
        json_body={"data": {"gid": "42", "name": "Write docs", "custom_thing": {"nested": [1, 2]}}},
    )

    task = await asana_client.get_task("42")

    assert task["custom_thing"] == {"nested": [1, 2]}
    # Fields Asana did not send are not invented
    assert "assignee" not in task


@pytest.mark.asyncio
async def test_missing_gid_is_rejected(fake_asana, asana_client):
    fake_asana.add("GET", "/projects/7", json_body={"data": {"name": "No id"}})

    with pytest.raises(ValidationError):
        await asana_client.get_project("7")


@pytest.mark.asyncio
async def test_body_is_wrapped_in_data_envelope(fake_asana, asana_client):
    fake_asana.add("POST", "/tasks", status_code=201, json_body={"data": {"gid": "9", "name": "New"}})

    await asana_client.create_task(name="New", workspace="100", notes=None)

    assert fake_asana.last_body() == {"data": {"name": "New", "workspace": "100"}}


@pytest.mark.asyncio
async def test_explicit_clear_is_sent_as_null(fake_asana, asana_client):
    fake_asana.add("PUT", "/tasks/9", json_body={"data": {"gid": "9"}})

    await asana_client.update_task("9", assignee=CLEAR, name=None)

    assert fake_asana.last_body() == {"data": {"assignee": None}}


@pytest.mark.asyncio
async def test_set_parent_none_sends_null_parent(fake_asana, asana_client):
    fake_asana.add("POST", "/tasks/9/setParent", json_body={"data": {"gid": "9"}})

    await asana_client.set_parent_task("9", None)

    assert fake_asana.last_body() == {"data": {"parent": None}}


@pytest.mark.asyncio
async def test_paginated_request_carries_limit_offset_and_next_page(fake_asana, asana_client):
    fake_asana.add(
        "GET",
        "/workspaces",
        json_body={
            "data": [{"gid": "1", "name": "Acme"}],
            "next_page": {"offset": "abc", "path": "/workspaces?offset=abc", "uri": "https://x"},
        },
    )

    result = await asana_client.list_workspaces(PaginationParams(limit=10, offset="xyz"))

    params = fake_asana.last.url.params
    assert params["limit"] == "10"
    assert params["offset"] == "xyz"
    assert result.data == [{"gid": "1", "name": "Acme"}]
    assert result.next_page.offset == "abc"


@pytest.mark.asyncio
async def test_paginated_request_without_next_page(fake_asana, asana_client):
    fake_asana.add("GET", "/workspaces", json_body={"data": [], "next_page": None})

    result = await asana_client.list_workspaces()

    assert result.to_dict() == {"data": []}
    assert "limit" not in fake_asana.last.url.params


@pytest.mark.asyncio
async def test_search_joins_list_filters(fake_asana, asana_client):
    fake_asana.add("GET", "/workspaces/1/tasks/search", json_body={"data": []})

    await asana_client.search_tasks("1", text="bug", projects=["10", "11"], completed=None)

    params = fake_asana.last.url.params
    assert params["projects.any"] == "10,11"
    assert params["text"] == "bug"
    assert "completed" not in params


@pytest.mark.asyncio
async def test_delete_returns_none_on_empty_body(fake_asana, asana_client):
    fake_asana.add("DELETE", "/tasks/9", status_code=204)

    assert await asana_client.delete_task("9") is None


@pytest.mark.asyncio
async def test_rate_limit_maps_retry_after(fake_asana, asana_client):
    fake_asana.add("GET", "/users/me", status_code=429, json_body={}, headers={"Retry-After": "17"})

    with pytest.raises(RateLimitError) as exc_info:
        await asana_client.get_me()

    assert exc_info.value.retry_after == 17
    assert exc_info.value.retryable is True


@pytest.mark.asyncio
async def test_rate_limit_defaults_retry_after(fake_asana, asana_client):
    fake_asana.add("GET", "/users/me", status_code=429, json_body={})

    with pytest.raises(RateLimitError) as exc_info:
        await asana_client.get_me()

    assert exc_info.value.retry_after == 60


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403])
async def test_auth_failures(fake_asana, asana_client, status):
    fake_asana.add("GET", "/users/me", status_code=status, json_body={"errors": [{"message": "nope"}]})

    with pytest.raises(AuthenticationError) as exc_info:
        await asana_client.get_me()

    assert exc_info.value.status_code == status
    assert exc_info.value.retryable is False


@pytest.mark.asyncio
async def test_not_found_carries_path(fake_asana, asana_client):
    with pytest.raises(NotFoundError) as exc_info:
        await asana_client.get_task("404404")

    assert exc_info.value.path == "/tasks/404404"
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_other_errors_use_upstream_message(fake_asana, asana_client):
    fake_asana.add(
        "POST",
        "/projects",
        status_code=400,
        json_body={"errors": [{"message": "workspace: Missing input"}]},
    )

    with pytest.raises(AsanaApiError) as exc_info:
        await asana_client.create_project(name="X")

    assert str(exc_info.value) == "workspace: Missing input"
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_error_without_json_body_falls_back(fake_asana, asana_client):
    fake_asana.add("GET", "/users/me", status_code=500)

    with pytest.raises(AsanaApiError) as exc_info:
        await asana_client.get_me()

    assert str(exc_info.value) == "Asana API error: 500"


@pytest.mark.asyncio
async def test_duplicate_project_returns_job(fake_asana, asana_client):
    fake_asana.add(
        "POST",
        "/projects/5/duplicate",
        status_code=201,
        json_body={"data": {"gid": "j1", "status": "in_progress", "new_project": {"gid": "6"}}},
    )

    job = await asana_client.duplicate_project("5", "Copy", include=["members", "notes"])

    assert job["new_project"] == {"gid": "6"}
    assert fake_asana.last_body() == {"data": {"name": "Copy", "include": ["members", "notes"]}}


@pytest.mark.asyncio
async def test_success_with_non_json_body_raises_api_error(fake_asana, asana_client):
    fake_asana.add("GET", "/users/me", text="<html>gateway hiccup</html>")

    with pytest.raises(AsanaApiError) as exc_info:
        await asana_client.get_me()

    assert str(exc_info.value) == "Asana returned a response that is not valid JSON"
    assert exc_info.value.status_code == 200


@pytest.mark.asyncio
async def test_success_with_non_object_body_raises_api_error(fake_asana, asana_client):
    fake_asana.add("GET", "/users/me", json_body=[{"gid": "1"}])
    fake_asana.add("GET", "/workspaces", json_body=["unexpected"])

    with pytest.raises(AsanaApiError) as exc_info:
        await asana_client.get_me()
    assert exc_info.value.status_code == 200

    with pytest.raises(AsanaApiError) as exc_info:
        await asana_client.list_workspaces()
    assert str(exc_info.value) == "Asana returned an unexpected response shape"
