import json

from pydantic import BaseModel, ValidationError

from src.servers.asana.utils.errors import NotFoundError, RateLimitError
from src.servers.asana.utils.formatters import (
    format_error,
    format_response,
    format_table,
    truncate,
)
from src.servers.asana.utils.models import NextPage, PaginatedResponse


def test_json_is_pretty_printed():
    text = format_response({"gid": "1", "name": "Acme"})
    assert text == '{\n  "gid": "1",\n  "name": "Acme"\n}'


def test_json_paginated_omits_missing_next_page():
    result = PaginatedResponse(data=[{"gid": "1"}])
    assert json.loads(format_response(result)) == {"data": [{"gid": "1"}]}


def test_markdown_paginated_task_table():
    result = PaginatedResponse(
        data=[
            {"gid": "1", "name": "Ship it", "assignee": {"gid": "u", "name": "Ada"}, "due_on": "2024-05-01", "completed": False},
            {"gid": "2", "name": "a|b", "completed": True},
        ],
        next_page=NextPage(offset="tok"),
    )

    text = format_response(result, "markdown", "tasks")

    lines = text.split("\n")
    assert lines[0] == "## Tasks"
    assert "**Showing:** 2 items" in lines
    assert "**More available:** Yes (offset: `tok`)" in lines
    assert "| GID | Name | Assignee | Due | Completed |" in lines
    assert "| 1 | Ship it | Ada | 2024-05-01 | No |" in lines
    assert "| 2 | a\\|b | - | - | Yes |" in lines


def test_compact_rows_render_missing_flags_as_no():
    tasks = format_response({"data": [{"gid": "1", "name": "Compact task"}]}, "markdown", "tasks")
    projects = format_response({"data": [{"gid": "2", "name": "Launch"}]}, "markdown", "projects")
    webhooks = format_response({"data": [{"gid": "3", "target": "https://x"}]}, "markdown", "webhooks")

    assert "| 1 | Compact task | - | - | No |" in tasks
    assert "| 2 | Launch | - | No | - |" in projects
    assert "| 3 | https://x | No | - |" in webhooks


def test_markdown_without_more_pages():
    text = format_response({"data": [{"gid": "1", "name": "Acme"}]}, "markdown", "workspaces")
    assert "More available" not in text
    assert "| 1 | Acme | No |" in text


def test_markdown_empty_list():
    text = format_response(PaginatedResponse(), "markdown", "projects")
    assert text.endswith("_No items found._")


def test_markdown_single_object():
    text = format_response(
        {"gid": "1", "name": "Launch", "due_on": None, "owner": {"gid": "u"}},
        "markdown",
        "project",
    )

    assert text.startswith("## Project\n")
    assert "**Gid:** 1" in text
    assert "**Name:** Launch" in text
    assert "Due On" not in text
    assert "**Owner:**\n```json" in text


def test_generic_table_uses_first_five_keys():
    items = [{"a": 1, "b": 2, "c": 3, "d": 4, "e": 5, "f": 6}]
    table = format_table(items, "typeahead_results")
    assert table.split("\n")[0] == "| a | b | c | d | e |"


def test_truncate_marks_remaining_characters():
    assert truncate("abcdef", 4) == "abcd\n\n... [truncated, 2 more characters]"
    assert truncate("abc", 4) == "abc"


def test_format_error_retryable():
    result = format_error(RateLimitError("Rate limit exceeded", retry_after=30))

    assert result.isError is True
    envelope = json.loads(result.content[0].text)
    assert envelope["error"] == "Error: Rate limit exceeded (retryable)"
    assert envelope["details"] == {"status_code": 429, "retryable": True, "retry_after": 30}


def test_format_error_not_found():
    envelope = json.loads(format_error(NotFoundError("Resource", "/tasks/1")).content[0].text)
    assert envelope["error"] == "Error: Resource not found: /tasks/1"
    assert envelope["details"]["path"] == "/tasks/1"


def test_format_error_validation():
    class Args(BaseModel):
        task_gid: str

    try:
        Args.model_validate({})
    except ValidationError as e:
        envelope = json.loads(format_error(e).content[0].text)

    assert envelope["details"]["validation_errors"][0]["field"] == "task_gid"


def test_format_error_unexpected():
    envelope = json.loads(format_error(KeyError("boom")).content[0].text)
    assert envelope["details"] == {"type": "KeyError"}
