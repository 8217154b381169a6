from typing import List, Literal, Optional

from pydantic import Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs, ToolArgs, fields, success
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response

TaskSubtype = Literal["default_task", "milestone", "approval"]
SearchSort = Literal["due_date", "created_at", "completed_at", "likes", "modified_at"]


class CreateTaskArgs(ToolArgs):
    name: str = Field(description="Task name")
    workspace: Optional[str] = Field(default=None, description="Workspace GID (required if no projects given)")
    projects: Optional[List[str]] = Field(default=None, description="Project GIDs to add the task to")
    assignee: Optional[str] = Field(default=None, description="Assignee user GID")
    due_on: Optional[str] = Field(default=None, description="Due date (YYYY-MM-DD)")
    due_at: Optional[str] = Field(default=None, description="Due date and time (ISO 8601)")
    start_on: Optional[str] = Field(default=None, description="Start date (YYYY-MM-DD)")
    notes: Optional[str] = Field(default=None, description="Task description")
    html_notes: Optional[str] = Field(default=None, description="Task description in HTML")
    completed: Optional[bool] = Field(default=None, description="Whether the task is completed")
    tags: Optional[List[str]] = Field(default=None, description="Tag GIDs")
    parent: Optional[str] = Field(default=None, description="Parent task GID")
    resource_subtype: Optional[TaskSubtype] = Field(default=None, description="Task type")


class GetTaskArgs(FormatArgs):
    task_gid: str = Field(description="The task GID")
    opt_fields: Optional[List[str]] = Field(
        default=None, description="Extra fields to include, e.g. notes, assignee.name"
    )


class TaskGidArgs(ToolArgs):
    task_gid: str = Field(description="The task GID")


class UpdateTaskArgs(ToolArgs):
    task_gid: str = Field(description="The task GID")
    name: Optional[str] = Field(default=None, description="New task name")
    assignee: Optional[str] = Field(default=None, description="New assignee user GID, or null to unassign")
    due_on: Optional[str] = Field(default=None, description="New due date (YYYY-MM-DD), or null to clear")
    due_at: Optional[str] = Field(default=None, description="New due date and time, or null to clear")
    start_on: Optional[str] = Field(default=None, description="New start date (YYYY-MM-DD), or null to clear")
    notes: Optional[str] = Field(default=None, description="New task description")
    html_notes: Optional[str] = Field(default=None, description="New task description in HTML")
    completed: Optional[bool] = Field(default=None, description="Mark complete or incomplete")


class DuplicateTaskArgs(ToolArgs):
    task_gid: str = Field(description="The task GID to duplicate")
    name: str = Field(description="Name for the new task")
    include: Optional[List[str]] = Field(
        default=None,
        description="Fields to copy: assignee, attachments, dates, dependencies, followers, notes, parent, projects, subtasks, tags",
    )


class ListTasksArgs(ListArgs):
    project: Optional[str] = Field(default=None, description="Filter by project GID")
    section: Optional[str] = Field(default=None, description="Filter by section GID")
    workspace: Optional[str] = Field(default=None, description="Workspace GID (requires assignee)")
    assignee: Optional[str] = Field(default=None, description="Assignee GID or 'me' (requires workspace)")
    completed_since: Optional[str] = Field(default=None, description="Only tasks incomplete or completed since this time ('now' for incomplete only)")
    modified_since: Optional[str] = Field(default=None, description="Only tasks modified since this time (ISO 8601)")


class ProjectTasksArgs(ListArgs):
    project_gid: str = Field(description="The project GID")


class SectionTasksArgs(ListArgs):
    section_gid: str = Field(description="The section GID")


class TagTasksArgs(ListArgs):
    tag_gid: str = Field(description="The tag GID")


class TaskListArgs(ListArgs):
    task_gid: str = Field(description="The task GID")


class SearchTasksArgs(ListArgs):
    workspace_gid: str = Field(description="The workspace GID")
    text: Optional[str] = Field(default=None, description="Text to search for")
    completed: Optional[bool] = Field(default=None, description="Filter by completion status")
    assignee_any: Optional[List[str]] = Field(default=None, description="Match any of these assignee GIDs")
    projects_any: Optional[List[str]] = Field(default=None, description="Match any of these project GIDs")
    tags_any: Optional[List[str]] = Field(default=None, description="Match any of these tag GIDs")
    due_on_before: Optional[str] = Field(default=None, description="Due before (YYYY-MM-DD)")
    due_on_after: Optional[str] = Field(default=None, description="Due after (YYYY-MM-DD)")
    sort_by: Optional[SearchSort] = Field(default=None, description="Sort field")
    sort_ascending: Optional[bool] = Field(default=None, description="Sort ascending")


class CreateSubtaskArgs(ToolArgs):
    parent_gid: str = Field(description="The parent task GID")
    name: str = Field(description="Subtask name")
    assignee: Optional[str] = Field(default=None, description="Assignee user GID")
    due_on: Optional[str] = Field(default=None, description="Due date (YYYY-MM-DD)")
    notes: Optional[str] = Field(default=None, description="Subtask description")


class SetParentArgs(ToolArgs):
    task_gid: str = Field(description="The task GID")
    parent: Optional[str] = Field(description="New parent task GID, or null to detach")
    insert_before: Optional[str] = Field(default=None, description="Subtask GID to insert before")
    insert_after: Optional[str] = Field(default=None, description="Subtask GID to insert after")


class AddProjectArgs(ToolArgs):
    task_gid: str = Field(description="The task GID")
    project: str = Field(description="Project GID")
    section: Optional[str] = Field(default=None, description="Section GID within the project")
    insert_before: Optional[str] = Field(default=None, description="Task GID to insert before")
    insert_after: Optional[str] = Field(default=None, description="Task GID to insert after")


class RemoveProjectArgs(ToolArgs):
    task_gid: str = Field(description="The task GID")
    project: str = Field(description="Project GID")


class TaskTagArgs(ToolArgs):
    task_gid: str = Field(description="The task GID")
    tag: str = Field(description="Tag GID")


class TaskFollowersArgs(ToolArgs):
    task_gid: str = Field(description="The task GID")
    followers: List[str] = Field(min_length=1, description="User GIDs")


class TaskFollowerArgs(ToolArgs):
    task_gid: str = Field(description="The task GID")
    follower: str = Field(description="User GID")


class TaskDependenciesArgs(ToolArgs):
    task_gid: str = Field(description="The task GID")
    dependencies: List[str] = Field(min_length=1, description="Task GIDs this task depends on")


class TaskDependentsArgs(ToolArgs):
    task_gid: str = Field(description="The task GID")
    dependents: List[str] = Field(min_length=1, description="Task GIDs that depend on this task")


class UserTaskListArgs(FormatArgs):
    user_gid: str = Field(description="User GID or 'me'")
    workspace: str = Field(description="Workspace GID")


class UserTaskListTasksArgs(ListArgs):
    user_task_list_gid: str = Field(description="The user task list GID")
    completed_since: Optional[str] = Field(default=None, description="Only tasks incomplete or completed since this time")


async def handle_create_task(ctx, args: CreateTaskArgs):
    task = await ctx.client.create_task(**fields(args))
    return success("Task created", task=task)


async def handle_get_task(ctx, args: GetTaskArgs):
    task = await ctx.client.get_task(args.task_gid, opt_fields=args.opt_fields)
    return format_response(task, args.format, "task")


async def handle_update_task(ctx, args: UpdateTaskArgs):
    body = fields(args, "task_gid", nullable=("assignee", "due_on", "due_at", "start_on"))
    task = await ctx.client.update_task(args.task_gid, **body)
    return success("Task updated", task=task)


async def handle_delete_task(ctx, args: TaskGidArgs):
    await ctx.client.delete_task(args.task_gid)
    return success("Task deleted")


async def handle_duplicate_task(ctx, args: DuplicateTaskArgs):
    task = await ctx.client.duplicate_task(args.task_gid, args.name, include=args.include)
    return success("Task duplicated", task=task)


async def handle_list_tasks(ctx, args: ListTasksArgs):
    result = await ctx.client.list_tasks(
        project=args.project,
        section=args.section,
        workspace=args.workspace,
        assignee=args.assignee,
        completed_since=args.completed_since,
        modified_since=args.modified_since,
        pagination=ctx.page(args),
    )
    return format_response(result, args.format, "tasks")


async def handle_list_project_tasks(ctx, args: ProjectTasksArgs):
    result = await ctx.client.list_project_tasks(args.project_gid, ctx.page(args))
    return format_response(result, args.format, "tasks")


async def handle_list_section_tasks(ctx, args: SectionTasksArgs):
    result = await ctx.client.list_section_tasks(args.section_gid, ctx.page(args))
    return format_response(result, args.format, "tasks")


async def handle_list_tag_tasks(ctx, args: TagTasksArgs):
    result = await ctx.client.list_tag_tasks(args.tag_gid, ctx.page(args))
    return format_response(result, args.format, "tasks")


async def handle_search_tasks(ctx, args: SearchTasksArgs):
    result = await ctx.client.search_tasks(
        args.workspace_gid,
        text=args.text,
        completed=args.completed,
        assignee=args.assignee_any,
        projects=args.projects_any,
        tags=args.tags_any,
        due_on_before=args.due_on_before,
        due_on_after=args.due_on_after,
        sort_by=args.sort_by,
        sort_ascending=args.sort_ascending,
        pagination=ctx.page(args),
    )
    return format_response(result, args.format, "tasks")


async def handle_create_subtask(ctx, args: CreateSubtaskArgs):
    task = await ctx.client.create_subtask(args.parent_gid, **fields(args, "parent_gid"))
    return success("Subtask created", task=task)


async def handle_list_subtasks(ctx, args: TaskListArgs):
    result = await ctx.client.list_subtasks(args.task_gid, ctx.page(args))
    return format_response(result, args.format, "tasks")


async def handle_set_parent_task(ctx, args: SetParentArgs):
    task = await ctx.client.set_parent_task(
        args.task_gid,
        args.parent,
        insert_before=args.insert_before,
        insert_after=args.insert_after,
    )
    return success("Parent task set", task=task)


async def handle_add_project_to_task(ctx, args: AddProjectArgs):
    await ctx.client.add_project_to_task(
        args.task_gid,
        args.project,
        section=args.section,
        insert_before=args.insert_before,
        insert_after=args.insert_after,
    )
    return success("Task added to project")


async def handle_remove_project_from_task(ctx, args: RemoveProjectArgs):
    await ctx.client.remove_project_from_task(args.task_gid, args.project)
    return success("Task removed from project")


async def handle_add_tag_to_task(ctx, args: TaskTagArgs):
    await ctx.client.add_tag_to_task(args.task_gid, args.tag)
    return success("Tag added to task")


async def handle_remove_tag_from_task(ctx, args: TaskTagArgs):
    await ctx.client.remove_tag_from_task(args.task_gid, args.tag)
    return success("Tag removed from task")


async def handle_add_followers_to_task(ctx, args: TaskFollowersArgs):
    task = await ctx.client.add_followers_to_task(args.task_gid, args.followers)
    return success("Followers added to task", task=task)


async def handle_remove_follower_from_task(ctx, args: TaskFollowerArgs):
    task = await ctx.client.remove_follower_from_task(args.task_gid, args.follower)
    return success("Follower removed from task", task=task)


async def handle_list_task_dependencies(ctx, args: TaskListArgs):
    result = await ctx.client.list_task_dependencies(args.task_gid, ctx.page(args))
    return format_response(result, args.format, "tasks")


async def handle_add_task_dependencies(ctx, args: TaskDependenciesArgs):
    await ctx.client.add_task_dependencies(args.task_gid, args.dependencies)
    return success("Dependencies added to task")


async def handle_remove_task_dependencies(ctx, args: TaskDependenciesArgs):
    await ctx.client.remove_task_dependencies(args.task_gid, args.dependencies)
    return success("Dependencies removed from task")


async def handle_list_task_dependents(ctx, args: TaskListArgs):
    result = await ctx.client.list_task_dependents(args.task_gid, ctx.page(args))
    return format_response(result, args.format, "tasks")


async def handle_add_task_dependents(ctx, args: TaskDependentsArgs):
    await ctx.client.add_task_dependents(args.task_gid, args.dependents)
    return success("Dependents added to task")


async def handle_remove_task_dependents(ctx, args: TaskDependentsArgs):
    await ctx.client.remove_task_dependents(args.task_gid, args.dependents)
    return success("Dependents removed from task")


async def handle_get_user_task_list(ctx, args: UserTaskListArgs):
    task_list = await ctx.client.get_user_task_list(args.user_gid, args.workspace)
    return format_response(task_list, args.format, "user_task_list")


async def handle_list_user_task_list_tasks(ctx, args: UserTaskListTasksArgs):
    result = await ctx.client.list_user_task_list_tasks(
        args.user_task_list_gid,
        completed_since=args.completed_since,
        pagination=ctx.page(args),
    )
    return format_response(result, args.format, "tasks")


PAGINATION_ARGS = """  - limit, offset: Pagination
  - format: 'json' or 'markdown'"""

TOOLS = [
    ToolSpec(
        name="asana_create_task",
        description="""Create a new task.

Args:
  - name: Task name (required)
  - workspace: Workspace GID (required if not in a project)
  - projects: Project GIDs to add the task to
  - assignee: User GID to assign the task to
  - due_on: Due date (YYYY-MM-DD)
  - due_at: Due date and time (ISO 8601)
  - start_on: Start date (YYYY-MM-DD)
  - notes / html_notes: Task description
  - completed: Whether the task is completed
  - tags: Tag GIDs
  - parent: Parent task GID
  - resource_subtype: default_task, milestone or approval""",
        arguments=CreateTaskArgs,
        handler=handle_create_task,
    ),
    ToolSpec(
        name="asana_get_task",
        description="""Get details of a specific task.

Args:
  - task_gid: The task GID
  - opt_fields: Optional fields to include (e.g. notes, assignee.name, projects.name)
  - format: 'json' or 'markdown'""",
        arguments=GetTaskArgs,
        handler=handle_get_task,
    ),
    ToolSpec(
        name="asana_update_task",
        description="""Update a task.

Args:
  - task_gid: The task GID
  - name, notes, html_notes, completed: New values
  - assignee: New assignee GID, or null to unassign
  - due_on, due_at, start_on: New dates, or null to clear""",
        arguments=UpdateTaskArgs,
        handler=handle_update_task,
    ),
    ToolSpec(
        name="asana_delete_task",
        description="""Delete a task.

Args:
  - task_gid: The task GID""",
        arguments=TaskGidArgs,
        handler=handle_delete_task,
    ),
    ToolSpec(
        name="asana_duplicate_task",
        description="""Duplicate a task.

Args:
  - task_gid: The task to copy
  - name: Name of the new task (required)
  - include: Fields to copy (assignee, attachments, dates, dependencies, followers, notes, parent, projects, subtasks, tags)""",
        arguments=DuplicateTaskArgs,
        handler=handle_duplicate_task,
    ),
    ToolSpec(
        name="asana_list_tasks",
        description=f"""List tasks filtered by project, section, or assignee and workspace.

Args:
  - project / section: Container GID
  - workspace + assignee: Tasks assigned to a user in a workspace
  - completed_since: Only incomplete tasks or those completed since this time
  - modified_since: Only tasks modified since this time
{PAGINATION_ARGS}""",
        arguments=ListTasksArgs,
        handler=handle_list_tasks,
    ),
    ToolSpec(
        name="asana_list_project_tasks",
        description=f"""List tasks in a project.

Args:
  - project_gid: The project GID
{PAGINATION_ARGS}""",
        arguments=ProjectTasksArgs,
        handler=handle_list_project_tasks,
    ),
    ToolSpec(
        name="asana_list_section_tasks",
        description=f"""List tasks in a section.

Args:
  - section_gid: The section GID
{PAGINATION_ARGS}""",
        arguments=SectionTasksArgs,
        handler=handle_list_section_tasks,
    ),
    ToolSpec(
        name="asana_list_tag_tasks",
        description=f"""List tasks carrying a tag.

Args:
  - tag_gid: The tag GID
{PAGINATION_ARGS}""",
        arguments=TagTasksArgs,
        handler=handle_list_tag_tasks,
    ),
    ToolSpec(
        name="asana_search_tasks",
        description=f"""Search for tasks in a workspace (premium feature).

Args:
  - workspace_gid: The workspace GID (required)
  - text: Text to search for
  - completed: Filter by completion status
  - assignee_any / projects_any / tags_any: Match any of these GIDs
  - due_on_before / due_on_after: Due date bounds (YYYY-MM-DD)
  - sort_by: due_date, created_at, completed_at, likes or modified_at
  - sort_ascending: Sort in ascending order
{PAGINATION_ARGS}""",
        arguments=SearchTasksArgs,
        handler=handle_search_tasks,
    ),
    ToolSpec(
        name="asana_create_subtask",
        description="""Create a subtask under a task.

Args:
  - parent_gid: The parent task GID
  - name: Subtask name (required)
  - assignee, due_on, notes: Optional details""",
        arguments=CreateSubtaskArgs,
        handler=handle_create_subtask,
    ),
    ToolSpec(
        name="asana_list_subtasks",
        description=f"""List subtasks of a task.

Args:
  - task_gid: The task GID
{PAGINATION_ARGS}""",
        arguments=TaskListArgs,
        handler=handle_list_subtasks,
    ),
    ToolSpec(
        name="asana_set_parent_task",
        description="""Set or change the parent of a task.

Args:
  - task_gid: The task GID
  - parent: New parent task GID (or null to remove the parent)
  - insert_before / insert_after: Subtask GID to position against""",
        arguments=SetParentArgs,
        handler=handle_set_parent_task,
    ),
    ToolSpec(
        name="asana_add_project_to_task",
        description="""Add a task to a project.

Args:
  - task_gid: The task GID
  - project: Project GID
  - section: Section GID within the project
  - insert_before / insert_after: Task GID to position against""",
        arguments=AddProjectArgs,
        handler=handle_add_project_to_task,
    ),
    ToolSpec(
        name="asana_remove_project_from_task",
        description="""Remove a task from a project.

Args:
  - task_gid: The task GID
  - project: Project GID""",
        arguments=RemoveProjectArgs,
        handler=handle_remove_project_from_task,
    ),
    ToolSpec(
        name="asana_add_tag_to_task",
        description="""Add a tag to a task.

Args:
  - task_gid: The task GID
  - tag: Tag GID""",
        arguments=TaskTagArgs,
        handler=handle_add_tag_to_task,
    ),
    ToolSpec(
        name="asana_remove_tag_from_task",
        description="""Remove a tag from a task.

Args:
  - task_gid: The task GID
  - tag: Tag GID""",
        arguments=TaskTagArgs,
        handler=handle_remove_tag_from_task,
    ),
    ToolSpec(
        name="asana_add_followers_to_task",
        description="""Add followers to a task.

Args:
  - task_gid: The task GID
  - followers: User GIDs""",
        arguments=TaskFollowersArgs,
        handler=handle_add_followers_to_task,
    ),
    ToolSpec(
        name="asana_remove_follower_from_task",
        description="""Remove a follower from a task.

Args:
  - task_gid: The task GID
  - follower: User GID""",
        arguments=TaskFollowerArgs,
        handler=handle_remove_follower_from_task,
    ),
    ToolSpec(
        name="asana_list_task_dependencies",
        description=f"""List tasks this task depends on.

Args:
  - task_gid: The task GID
{PAGINATION_ARGS}""",
        arguments=TaskListArgs,
        handler=handle_list_task_dependencies,
    ),
    ToolSpec(
        name="asana_add_task_dependencies",
        description="""Mark a task as blocked by other tasks.

Args:
  - task_gid: The task GID
  - dependencies: Task GIDs it depends on""",
        arguments=TaskDependenciesArgs,
        handler=handle_add_task_dependencies,
    ),
    ToolSpec(
        name="asana_remove_task_dependencies",
        description="""Remove dependencies from a task.

Args:
  - task_gid: The task GID
  - dependencies: Task GIDs to unlink""",
        arguments=TaskDependenciesArgs,
        handler=handle_remove_task_dependencies,
    ),
    ToolSpec(
        name="asana_list_task_dependents",
        description=f"""List tasks that depend on this task.

Args:
  - task_gid: The task GID
{PAGINATION_ARGS}""",
        arguments=TaskListArgs,
        handler=handle_list_task_dependents,
    ),
    ToolSpec(
        name="asana_add_task_dependents",
        description="""Mark other tasks as blocked by this task.

Args:
  - task_gid: The task GID
  - dependents: Task GIDs that depend on it""",
        arguments=TaskDependentsArgs,
        handler=handle_add_task_dependents,
    ),
    ToolSpec(
        name="asana_remove_task_dependents",
        description="""Remove dependents from a task.

Args:
  - task_gid: The task GID
  - dependents: Task GIDs to unlink""",
        arguments=TaskDependentsArgs,
        handler=handle_remove_task_dependents,
    ),
    ToolSpec(
        name="asana_get_user_task_list",
        description="""Get a user's "My Tasks" list in a workspace.

Args:
  - user_gid: User GID or 'me'
  - workspace: Workspace GID
  - format: 'json' or 'markdown'""",
        arguments=UserTaskListArgs,
        handler=handle_get_user_task_list,
    ),
    ToolSpec(
        name="asana_list_user_task_list_tasks",
        description=f"""List tasks in a user task list.

Args:
  - user_task_list_gid: The user task list GID
  - completed_since: Only incomplete tasks or those completed since this time
{PAGINATION_ARGS}""",
        arguments=UserTaskListTasksArgs,
        handler=handle_list_user_task_list_tasks,
    ),
]
