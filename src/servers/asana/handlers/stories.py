from typing import Optional

from pydantic import Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs, ToolArgs, fields, success
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response


class AddCommentArgs(ToolArgs):
    task_gid: str = Field(description="The task GID")
    text: str = Field(description="Comment text")
    is_pinned: Optional[bool] = Field(default=None, description="Pin the comment to the top")
    sticker_name: Optional[str] = Field(default=None, description="Sticker to attach, e.g. dancing_unicorn")


class StoryArgs(FormatArgs):
    story_gid: str = Field(description="The story GID")


class StoryGidArgs(ToolArgs):
    story_gid: str = Field(description="The story GID")


class UpdateCommentArgs(ToolArgs):
    story_gid: str = Field(description="The story GID")
    text: Optional[str] = Field(default=None, description="New comment text")
    is_pinned: Optional[bool] = Field(default=None, description="Pin or unpin the comment")


class TaskStoriesArgs(ListArgs):
    task_gid: str = Field(description="The task GID")


async def handle_add_comment(ctx, args: AddCommentArgs):
    story = await ctx.client.create_story(args.task_gid, **fields(args, "task_gid"))
    return success("Comment added", story=story)


async def handle_get_story(ctx, args: StoryArgs):
    story = await ctx.client.get_story(args.story_gid)
    return format_response(story, args.format, "story")


async def handle_update_comment(ctx, args: UpdateCommentArgs):
    story = await ctx.client.update_story(args.story_gid, **fields(args, "story_gid"))
    return success("Comment updated", story=story)


async def handle_delete_comment(ctx, args: StoryGidArgs):
    await ctx.client.delete_story(args.story_gid)
    return success("Comment deleted")


async def handle_list_task_stories(ctx, args: TaskStoriesArgs):
    result = await ctx.client.list_task_stories(args.task_gid, ctx.page(args))
    return format_response(result, args.format, "stories")


TOOLS = [
    ToolSpec(
        name="asana_add_comment",
        description="""Add a comment to a task.

Args:
  - task_gid: The task GID
  - text: Comment text (required)
  - is_pinned: Pin the comment
  - sticker_name: Sticker to attach""",
        arguments=AddCommentArgs,
        handler=handle_add_comment,
    ),
    ToolSpec(
        name="asana_get_story",
        description="""Get a story (comment or activity entry).

Args:
  - story_gid: The story GID
  - format: 'json' or 'markdown'""",
        arguments=StoryArgs,
        handler=handle_get_story,
    ),
    ToolSpec(
        name="asana_update_comment",
        description="""Edit a comment. Only comments written by the caller can be edited.

Args:
  - story_gid: The story GID
  - text: New text
  - is_pinned: Pin or unpin""",
        arguments=UpdateCommentArgs,
        handler=handle_update_comment,
    ),
    ToolSpec(
        name="asana_delete_comment",
        description="""Delete a comment.

Args:
  - story_gid: The story GID""",
        arguments=StoryGidArgs,
        handler=handle_delete_comment,
    ),
    ToolSpec(
        name="asana_list_task_stories",
        description="""List comments and activity on a task.

Args:
  - task_gid: The task GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=TaskStoriesArgs,
        handler=handle_list_task_stories,
    ),
]
