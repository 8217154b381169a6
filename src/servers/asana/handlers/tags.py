from typing import Optional

from pydantic import Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs, ToolArgs, fields, success
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response


class CreateTagArgs(ToolArgs):
    name: str = Field(description="Tag name")
    workspace: str = Field(description="Workspace GID")
    color: Optional[str] = Field(default=None, description="Tag color, e.g. dark-green")
    notes: Optional[str] = Field(default=None, description="Tag description")


class TagArgs(FormatArgs):
    tag_gid: str = Field(description="The tag GID")


class TagGidArgs(ToolArgs):
    tag_gid: str = Field(description="The tag GID")


class UpdateTagArgs(ToolArgs):
    tag_gid: str = Field(description="The tag GID")
    name: Optional[str] = Field(default=None, description="New tag name")
    color: Optional[str] = Field(default=None, description="New tag color")
    notes: Optional[str] = Field(default=None, description="New tag description")


class WorkspaceTagsArgs(ListArgs):
    workspace_gid: str = Field(description="The workspace GID")


class TaskTagsArgs(ListArgs):
    task_gid: str = Field(description="The task GID")


async def handle_create_tag(ctx, args: CreateTagArgs):
    tag = await ctx.client.create_tag(**fields(args))
    return success("Tag created", tag=tag)


async def handle_get_tag(ctx, args: TagArgs):
    tag = await ctx.client.get_tag(args.tag_gid)
    return format_response(tag, args.format, "tag")


async def handle_update_tag(ctx, args: UpdateTagArgs):
    tag = await ctx.client.update_tag(args.tag_gid, **fields(args, "tag_gid"))
    return success("Tag updated", tag=tag)


async def handle_delete_tag(ctx, args: TagGidArgs):
    await ctx.client.delete_tag(args.tag_gid)
    return success("Tag deleted")


async def handle_list_tags(ctx, args: WorkspaceTagsArgs):
    result = await ctx.client.list_tags(args.workspace_gid, ctx.page(args))
    return format_response(result, args.format, "tags")


async def handle_list_task_tags(ctx, args: TaskTagsArgs):
    result = await ctx.client.list_task_tags(args.task_gid, ctx.page(args))
    return format_response(result, args.format, "tags")


TOOLS = [
    ToolSpec(
        name="asana_create_tag",
        description="""Create a tag in a workspace.

Args:
  - name: Tag name (required)
  - workspace: Workspace GID (required)
  - color: Tag color
  - notes: Tag description""",
        arguments=CreateTagArgs,
        handler=handle_create_tag,
    ),
    ToolSpec(
        name="asana_get_tag",
        description="""Get details of a tag.

Args:
  - tag_gid: The tag GID
  - format: 'json' or 'markdown'""",
        arguments=TagArgs,
        handler=handle_get_tag,
    ),
    ToolSpec(
        name="asana_update_tag",
        description="""Update a tag.

Args:
  - tag_gid: The tag GID
  - name, color, notes: New values""",
        arguments=UpdateTagArgs,
        handler=handle_update_tag,
    ),
    ToolSpec(
        name="asana_delete_tag",
        description="""Delete a tag.

Args:
  - tag_gid: The tag GID""",
        arguments=TagGidArgs,
        handler=handle_delete_tag,
    ),
    ToolSpec(
        name="asana_list_tags",
        description="""List tags in a workspace.

Args:
  - workspace_gid: The workspace GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=WorkspaceTagsArgs,
        handler=handle_list_tags,
    ),
    ToolSpec(
        name="asana_list_task_tags",
        description="""List tags on a task.

Args:
  - task_gid: The task GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=TaskTagsArgs,
        handler=handle_list_task_tags,
    ),
]
