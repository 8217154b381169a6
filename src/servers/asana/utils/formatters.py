"""
Render tool results as pretty JSON or as Markdown.

Markdown tables are picked from ``TABLE_FORMATTERS`` by entity tag; anything
without an entry falls back to a generic table built from the first item's keys.
"""

import json
from typing import Any, Callable, Dict, List, Optional

from mcp.types import CallToolResult, TextContent
from pydantic import ValidationError

from src.servers.asana.utils.config import DEFAULT_CHARACTER_LIMIT
from src.servers.asana.utils.errors import AsanaApiError
from src.servers.asana.utils.models import PaginatedResponse

MISSING = "-"
GENERIC_COLUMN_LIMIT = 5


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, default=str)


def truncate(text: str, limit: int = DEFAULT_CHARACTER_LIMIT) -> str:
    if limit <= 0 or len(text) <= limit:
        return text
    remaining = len(text) - limit
    return f"{text[:limit]}\n\n... [truncated, {remaining} more characters]"


def _cell(value: Any) -> str:
    if value is None or value == "":
        return MISSING
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (dict, list)):
        value = json.dumps(value, default=str)
    return str(value).replace("|", "\\|").replace("\n", " ")


def _flag(value: Any) -> str:
    return "Yes" if value else "No"


def _ref_name(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return value.get("name")
    return None


def _table(headers: List[str], rows: List[List[Any]]) -> str:
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("---" for _ in headers) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(_cell(value) for value in row) + " |")
    return "\n".join(lines)


def format_task_table(tasks: List[Dict[str, Any]]) -> str:
    return _table(
        ["GID", "Name", "Assignee", "Due", "Completed"],
        [
            [
                t.get("gid"),
                t.get("name"),
                _ref_name(t.get("assignee")),
                t.get("due_on") or t.get("due_at"),
                _flag(t.get("completed")),
            ]
            for t in tasks
        ],
    )


def format_project_table(projects: List[Dict[str, Any]]) -> str:
    return _table(
        ["GID", "Name", "Team", "Archived", "Due"],
        [
            [
                p.get("gid"),
                p.get("name"),
                _ref_name(p.get("team")),
                _flag(p.get("archived")),
                p.get("due_on"),
            ]
            for p in projects
        ],
    )


def format_workspace_table(workspaces: List[Dict[str, Any]]) -> str:
    return _table(
        ["GID", "Name", "Organization"],
        [[w.get("gid"), w.get("name"), _flag(w.get("is_organization"))] for w in workspaces],
    )


def format_team_table(teams: List[Dict[str, Any]]) -> str:
    return _table(
        ["GID", "Name", "Visibility"],
        [[t.get("gid"), t.get("name"), t.get("visibility")] for t in teams],
    )


def format_user_table(users: List[Dict[str, Any]]) -> str:
    return _table(
        ["GID", "Name", "Email"],
        [[u.get("gid"), u.get("name"), u.get("email")] for u in users],
    )


def format_tag_table(tags: List[Dict[str, Any]]) -> str:
    return _table(
        ["GID", "Name", "Color"],
        [[t.get("gid"), t.get("name"), t.get("color")] for t in tags],
    )


def format_section_table(sections: List[Dict[str, Any]]) -> str:
    return _table(
        ["GID", "Name", "Project"],
        [[s.get("gid"), s.get("name"), _ref_name(s.get("project"))] for s in sections],
    )


def format_story_table(stories: List[Dict[str, Any]]) -> str:
    return _table(
        ["GID", "Type", "Author", "Created"],
        [
            [
                s.get("gid"),
                s.get("resource_subtype") or s.get("type"),
                _ref_name(s.get("created_by")),
                s.get("created_at"),
            ]
            for s in stories
        ],
    )


def format_portfolio_table(portfolios: List[Dict[str, Any]]) -> str:
    return _table(
        ["GID", "Name", "Owner"],
        [[p.get("gid"), p.get("name"), _ref_name(p.get("owner"))] for p in portfolios],
    )


def format_goal_table(goals: List[Dict[str, Any]]) -> str:
    return _table(
        ["GID", "Name", "Owner", "Status"],
        [
            [g.get("gid"), g.get("name"), _ref_name(g.get("owner")), g.get("status")]
            for g in goals
        ],
    )


def format_webhook_table(webhooks: List[Dict[str, Any]]) -> str:
    rows = []
    for w in webhooks:
        resource = w.get("resource")
        if isinstance(resource, dict):
            resource = resource.get("name") or resource.get("gid")
        rows.append([w.get("gid"), w.get("target"), _flag(w.get("active")), resource])
    return _table(["GID", "Target", "Active", "Resource"], rows)


def format_generic_table(items: List[Any]) -> str:
    first = items[0]
    if not isinstance(first, dict):
        return "\n".join(f"- {_cell(item)}" for item in items)
    columns = list(first.keys())[:GENERIC_COLUMN_LIMIT]
    return _table(
        columns,
        [[item.get(c) if isinstance(item, dict) else None for c in columns] for item in items],
    )


TABLE_FORMATTERS: Dict[str, Callable[[List[Dict[str, Any]]], str]] = {
    "tasks": format_task_table,
    "projects": format_project_table,
    "workspaces": format_workspace_table,
    "teams": format_team_table,
    "users": format_user_table,
    "tags": format_tag_table,
    "sections": format_section_table,
    "stories": format_story_table,
    "portfolios": format_portfolio_table,
    "goals": format_goal_table,
    "webhooks": format_webhook_table,
}


def format_table(items: List[Any], entity_type: str) -> str:
    if not items:
        return "_No items found._"
    formatter = TABLE_FORMATTERS.get(entity_type, format_generic_table)
    return formatter(items)


def _title(entity_type: str) -> str:
    words = entity_type.replace("_", " ")
    return words[:1].upper() + words[1:]


def _key_label(key: str) -> str:
    return " ".join(part.capitalize() for part in key.split("_"))


def format_paginated_markdown(result: Dict[str, Any], entity_type: str) -> str:
    items = result.get("data") or []
    lines = [f"## {_title(entity_type)}", "", f"**Showing:** {len(items)} items"]

    next_page = result.get("next_page")
    if next_page and next_page.get("offset"):
        lines.append(f"**More available:** Yes (offset: `{next_page['offset']}`)")

    lines.append("")
    lines.append(format_table(items, entity_type))
    return "\n".join(lines)


def format_single_markdown(obj: Dict[str, Any], entity_type: str) -> str:
    singular = entity_type[:-1] if entity_type.endswith("s") else entity_type
    lines = [f"## {_title(singular)}", ""]
    for key, value in obj.items():
        if value is None:
            continue
        label = _key_label(key)
        if isinstance(value, (dict, list)):
            lines.append(f"**{label}:**")
            lines.append("```json")
            lines.append(to_json(value))
            lines.append("```")
        else:
            lines.append(f"**{label}:** {value}")
    return "\n".join(lines)


def format_markdown(data: Any, entity_type: str) -> str:
    if isinstance(data, PaginatedResponse):
        data = data.to_dict()
    if isinstance(data, list):
        return format_paginated_markdown({"data": data}, entity_type)
    if isinstance(data, dict) and isinstance(data.get("data"), list):
        return format_paginated_markdown(data, entity_type)
    if isinstance(data, dict):
        return format_single_markdown(data, entity_type)
    return str(data)


def format_response(data: Any, fmt: str = "json", entity_type: str = "items") -> str:
    """Render a tool result in the caller's chosen format"""
    if fmt == "markdown":
        return format_markdown(data, entity_type)
    if isinstance(data, PaginatedResponse):
        data = data.to_dict()
    return to_json(data)


def _error_details(error: BaseException) -> Dict[str, Any]:
    if isinstance(error, AsanaApiError):
        return error.to_details()
    if isinstance(error, ValidationError):
        return {
            "validation_errors": [
                {
                    "field": ".".join(str(part) for part in err["loc"]),
                    "message": err["msg"],
                }
                for err in error.errors()
            ]
        }
    return {"type": type(error).__name__}


def format_error(error: BaseException) -> CallToolResult:
    """Convert any exception into the uniform error envelope"""
    message = f"Error: {error}"
    if isinstance(error, AsanaApiError) and error.retryable:
        message += " (retryable)"
    envelope = {"error": message, "details": _error_details(error)}
    return CallToolResult(
        content=[TextContent(type="text", text=to_json(envelope))],
        isError=True,
    )
