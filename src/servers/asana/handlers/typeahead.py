from typing import Literal, Optional

from pydantic import Field

from src.servers.asana.handlers.common import FormatArgs
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response

TypeaheadResource = Literal[
    "custom_field", "goal", "portfolio", "project", "tag", "task", "team", "user"
]


class TypeaheadArgs(FormatArgs):
    workspace_gid: str = Field(description="The workspace GID")
    resource_type: TypeaheadResource = Field(description="Kind of object to search for")
    query: str = Field(description="Search text")
    count: Optional[int] = Field(default=None, ge=1, le=100, description="Maximum results (default 20)")


async def handle_typeahead(ctx, args: TypeaheadArgs):
    results = await ctx.client.typeahead(
        args.workspace_gid, args.resource_type, query=args.query, count=args.count
    )
    return format_response({"data": results or []}, args.format, "typeahead_results")


TOOLS = [
    ToolSpec(
        name="asana_typeahead",
        description="""Quick name search for objects in a workspace.

Args:
  - workspace_gid: The workspace GID
  - resource_type: custom_field, goal, portfolio, project, tag, task, team or user
  - query: Search text
  - count: Maximum results (1-100)
  - format: 'json' or 'markdown'""",
        arguments=TypeaheadArgs,
        handler=handle_typeahead,
    ),
]
