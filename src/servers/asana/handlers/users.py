from pydantic import Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response


class UserArgs(FormatArgs):
    user_gid: str = Field(description="User GID, email address or 'me'")


class WorkspaceUsersArgs(ListArgs):
    workspace_gid: str = Field(description="The workspace GID")


async def handle_get_me(ctx, args: FormatArgs):
    user = await ctx.client.get_me()
    return format_response(user, args.format, "user")


async def handle_get_user(ctx, args: UserArgs):
    user = await ctx.client.get_user(args.user_gid)
    return format_response(user, args.format, "user")


async def handle_list_workspace_users(ctx, args: WorkspaceUsersArgs):
    result = await ctx.client.list_workspace_users(args.workspace_gid, ctx.page(args))
    return format_response(result, args.format, "users")


TOOLS = [
    ToolSpec(
        name="asana_get_me",
        description="Get the authenticated user's profile.",
        arguments=FormatArgs,
        handler=handle_get_me,
    ),
    ToolSpec(
        name="asana_get_user",
        description="""Get a user's profile.

Args:
  - user_gid: User GID, email address or 'me'
  - format: 'json' or 'markdown'""",
        arguments=UserArgs,
        handler=handle_get_user,
    ),
    ToolSpec(
        name="asana_list_workspace_users",
        description="""List users in a workspace.

Args:
  - workspace_gid: The workspace GID
  - limit: Results per page (1-100)
  - offset: Pagination offset token
  - format: 'json' or 'markdown'""",
        arguments=WorkspaceUsersArgs,
        handler=handle_list_workspace_users,
    ),
]
