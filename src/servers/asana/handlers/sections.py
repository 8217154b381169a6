from typing import Optional

from pydantic import Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs, ToolArgs, success
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response


class CreateSectionArgs(ToolArgs):
    project_gid: str = Field(description="The project GID")
    name: str = Field(description="Section name")
    insert_before: Optional[str] = Field(default=None, description="Section GID to insert before")
    insert_after: Optional[str] = Field(default=None, description="Section GID to insert after")


class SectionArgs(FormatArgs):
    section_gid: str = Field(description="The section GID")


class SectionGidArgs(ToolArgs):
    section_gid: str = Field(description="The section GID")


class UpdateSectionArgs(ToolArgs):
    section_gid: str = Field(description="The section GID")
    name: str = Field(description="New section name")


class ProjectSectionsArgs(ListArgs):
    project_gid: str = Field(description="The project GID")


class AddTaskToSectionArgs(ToolArgs):
    section_gid: str = Field(description="The section GID")
    task: str = Field(description="Task GID to move into the section")
    insert_before: Optional[str] = Field(default=None, description="Task GID to insert before")
    insert_after: Optional[str] = Field(default=None, description="Task GID to insert after")


class MoveSectionArgs(ToolArgs):
    project_gid: str = Field(description="The project GID")
    section: str = Field(description="Section GID to move")
    before_section: Optional[str] = Field(default=None, description="Place before this section")
    after_section: Optional[str] = Field(default=None, description="Place after this section")


async def handle_create_section(ctx, args: CreateSectionArgs):
    section = await ctx.client.create_section(
        args.project_gid,
        args.name,
        insert_before=args.insert_before,
        insert_after=args.insert_after,
    )
    return success("Section created", section=section)


async def handle_get_section(ctx, args: SectionArgs):
    section = await ctx.client.get_section(args.section_gid)
    return format_response(section, args.format, "section")


async def handle_update_section(ctx, args: UpdateSectionArgs):
    section = await ctx.client.update_section(args.section_gid, args.name)
    return success("Section updated", section=section)


async def handle_delete_section(ctx, args: SectionGidArgs):
    await ctx.client.delete_section(args.section_gid)
    return success("Section deleted")


async def handle_list_project_sections(ctx, args: ProjectSectionsArgs):
    result = await ctx.client.list_project_sections(args.project_gid, ctx.page(args))
    return format_response(result, args.format, "sections")


async def handle_add_task_to_section(ctx, args: AddTaskToSectionArgs):
    await ctx.client.add_task_to_section(
        args.section_gid,
        args.task,
        insert_before=args.insert_before,
        insert_after=args.insert_after,
    )
    return success("Task added to section")


async def handle_move_section(ctx, args: MoveSectionArgs):
    await ctx.client.move_section(
        args.project_gid,
        args.section,
        before_section=args.before_section,
        after_section=args.after_section,
    )
    return success("Section moved")


TOOLS = [
    ToolSpec(
        name="asana_create_section",
        description="""Create a section in a project.

Args:
  - project_gid: The project GID
  - name: Section name (required)
  - insert_before / insert_after: Section GID to position against""",
        arguments=CreateSectionArgs,
        handler=handle_create_section,
    ),
    ToolSpec(
        name="asana_get_section",
        description="""Get details of a section.

Args:
  - section_gid: The section GID
  - format: 'json' or 'markdown'""",
        arguments=SectionArgs,
        handler=handle_get_section,
    ),
    ToolSpec(
        name="asana_update_section",
        description="""Rename a section.

Args:
  - section_gid: The section GID
  - name: New section name""",
        arguments=UpdateSectionArgs,
        handler=handle_update_section,
    ),
    ToolSpec(
        name="asana_delete_section",
        description="""Delete an empty section.

Args:
  - section_gid: The section GID""",
        arguments=SectionGidArgs,
        handler=handle_delete_section,
    ),
    ToolSpec(
        name="asana_list_project_sections",
        description="""List sections in a project.

Args:
  - project_gid: The project GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=ProjectSectionsArgs,
        handler=handle_list_project_sections,
    ),
    ToolSpec(
        name="asana_add_task_to_section",
        description="""Move a task into a section.

Args:
  - section_gid: The section GID
  - task: Task GID
  - insert_before / insert_after: Task GID to position against""",
        arguments=AddTaskToSectionArgs,
        handler=handle_add_task_to_section,
    ),
    ToolSpec(
        name="asana_move_section",
        description="""Reorder a section within its project.

Args:
  - project_gid: The project GID
  - section: Section GID to move
  - before_section / after_section: Section GID to position against""",
        arguments=MoveSectionArgs,
        handler=handle_move_section,
    ),
]
