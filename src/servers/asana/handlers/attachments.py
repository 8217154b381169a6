from pydantic import Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs, ToolArgs, success
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response


class AttachmentArgs(FormatArgs):
    attachment_gid: str = Field(description="The attachment GID")


class AttachmentGidArgs(ToolArgs):
    attachment_gid: str = Field(description="The attachment GID")


class TaskAttachmentsArgs(ListArgs):
    task_gid: str = Field(description="The task GID")


async def handle_get_attachment(ctx, args: AttachmentArgs):
    attachment = await ctx.client.get_attachment(args.attachment_gid)
    return format_response(attachment, args.format, "attachment")


async def handle_delete_attachment(ctx, args: AttachmentGidArgs):
    await ctx.client.delete_attachment(args.attachment_gid)
    return success("Attachment deleted")


async def handle_list_task_attachments(ctx, args: TaskAttachmentsArgs):
    result = await ctx.client.list_task_attachments(args.task_gid, ctx.page(args))
    return format_response(result, args.format, "attachments")


TOOLS = [
    ToolSpec(
        name="asana_get_attachment",
        description="""Get an attachment's metadata and download URL.

Args:
  - attachment_gid: The attachment GID
  - format: 'json' or 'markdown'""",
        arguments=AttachmentArgs,
        handler=handle_get_attachment,
    ),
    ToolSpec(
        name="asana_delete_attachment",
        description="""Delete an attachment.

Args:
  - attachment_gid: The attachment GID""",
        arguments=AttachmentGidArgs,
        handler=handle_delete_attachment,
    ),
    ToolSpec(
        name="asana_list_task_attachments",
        description="""List attachments on a task.

Args:
  - task_gid: The task GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=TaskAttachmentsArgs,
        handler=handle_list_task_attachments,
    ),
]
