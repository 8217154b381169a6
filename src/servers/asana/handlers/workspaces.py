from pydantic import Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs, ToolArgs, success
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response


class WorkspaceArgs(FormatArgs):
    workspace_gid: str = Field(description="The workspace GID")


class UpdateWorkspaceArgs(ToolArgs):
    workspace_gid: str = Field(description="The workspace GID")
    name: str = Field(description="New workspace name")


class WorkspaceUserArgs(ToolArgs):
    workspace_gid: str = Field(description="The workspace GID")
    user: str = Field(description="User GID, email address or 'me'")


async def handle_list_workspaces(ctx, args: ListArgs):
    result = await ctx.client.list_workspaces(ctx.page(args))
    return format_response(result, args.format, "workspaces")


async def handle_get_workspace(ctx, args: WorkspaceArgs):
    workspace = await ctx.client.get_workspace(args.workspace_gid)
    return format_response(workspace, args.format, "workspace")


async def handle_update_workspace(ctx, args: UpdateWorkspaceArgs):
    workspace = await ctx.client.update_workspace(args.workspace_gid, name=args.name)
    return success("Workspace updated", workspace=workspace)


async def handle_add_user_to_workspace(ctx, args: WorkspaceUserArgs):
    user = await ctx.client.add_user_to_workspace(args.workspace_gid, args.user)
    return success("User added to workspace", user=user)


async def handle_remove_user_from_workspace(ctx, args: WorkspaceUserArgs):
    await ctx.client.remove_user_from_workspace(args.workspace_gid, args.user)
    return success("User removed from workspace")


TOOLS = [
    ToolSpec(
        name="asana_list_workspaces",
        description="""List all workspaces the authenticated user has access to.

Args:
  - limit: Results per page (1-100)
  - offset: Pagination offset token
  - format: 'json' or 'markdown'""",
        arguments=ListArgs,
        handler=handle_list_workspaces,
    ),
    ToolSpec(
        name="asana_get_workspace",
        description="""Get details of a workspace.

Args:
  - workspace_gid: The workspace GID
  - format: 'json' or 'markdown'""",
        arguments=WorkspaceArgs,
        handler=handle_get_workspace,
    ),
    ToolSpec(
        name="asana_update_workspace",
        description="""Rename a workspace.

Args:
  - workspace_gid: The workspace GID
  - name: New workspace name""",
        arguments=UpdateWorkspaceArgs,
        handler=handle_update_workspace,
    ),
    ToolSpec(
        name="asana_add_user_to_workspace",
        description="""Add a user to a workspace or organization.

Args:
  - workspace_gid: The workspace GID
  - user: User GID, email address or 'me'""",
        arguments=WorkspaceUserArgs,
        handler=handle_add_user_to_workspace,
    ),
    ToolSpec(
        name="asana_remove_user_from_workspace",
        description="""Remove a user from a workspace or organization.

Args:
  - workspace_gid: The workspace GID
  - user: User GID, email address or 'me'""",
        arguments=WorkspaceUserArgs,
        handler=handle_remove_user_from_workspace,
    ),
]
