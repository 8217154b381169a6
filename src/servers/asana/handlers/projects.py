from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs, ToolArgs, fields, success
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response, to_json

ProjectView = Literal["list", "board", "calendar", "timeline"]
StatusColor = Literal["green", "yellow", "red", "blue"]


class CreateProjectArgs(ToolArgs):
    name: str = Field(description="Project name")
    workspace: Optional[str] = Field(default=None, description="Workspace GID")
    team: Optional[str] = Field(default=None, description="Team GID (required in organizations)")
    public: Optional[bool] = Field(default=None, description="Whether the project is public to the team")
    color: Optional[str] = Field(default=None, description="Project color")
    notes: Optional[str] = Field(default=None, description="Project description")
    due_on: Optional[str] = Field(default=None, description="Due date (YYYY-MM-DD)")
    start_on: Optional[str] = Field(default=None, description="Start date (YYYY-MM-DD)")
    default_view: Optional[ProjectView] = Field(default=None, description="Default project view")


class ProjectArgs(FormatArgs):
    project_gid: str = Field(description="The project GID")


class ProjectGidArgs(ToolArgs):
    project_gid: str = Field(description="The project GID")


class UpdateProjectArgs(ToolArgs):
    project_gid: str = Field(description="The project GID")
    name: Optional[str] = Field(default=None, description="New project name")
    public: Optional[bool] = Field(default=None, description="Whether the project is public")
    color: Optional[str] = Field(default=None, description="New project color")
    notes: Optional[str] = Field(default=None, description="New project description")
    archived: Optional[bool] = Field(default=None, description="Archive or unarchive the project")
    due_on: Optional[str] = Field(default=None, description="New due date (YYYY-MM-DD, or null to clear)")
    start_on: Optional[str] = Field(default=None, description="New start date (YYYY-MM-DD, or null to clear)")


class ScheduleDates(BaseModel):
    should_skip_weekends: bool
    due_on: Optional[str] = None
    start_on: Optional[str] = None


class DuplicateProjectArgs(ToolArgs):
    project_gid: str = Field(description="The project GID to duplicate")
    name: str = Field(description="Name for the new project")
    team: Optional[str] = Field(default=None, description="Team GID for the new project")
    include: Optional[List[str]] = Field(
        default=None,
        description="Elements to copy: members, notes, forms, task_notes, task_assignee, task_subtasks, ...",
    )
    schedule_dates: Optional[ScheduleDates] = Field(
        default=None, description="How to shift dates in the copy"
    )


class ListProjectsArgs(ListArgs):
    workspace: Optional[str] = Field(default=None, description="Filter by workspace GID")
    team: Optional[str] = Field(default=None, description="Filter by team GID")
    archived: Optional[bool] = Field(default=None, description="Filter by archived state")


class WorkspaceProjectsArgs(ListArgs):
    workspace_gid: str = Field(description="The workspace GID")
    archived: Optional[bool] = Field(default=None, description="Filter by archived state")


class TeamProjectsArgs(ListArgs):
    team_gid: str = Field(description="The team GID")
    archived: Optional[bool] = Field(default=None, description="Filter by archived state")


class TaskProjectsArgs(ListArgs):
    task_gid: str = Field(description="The task GID")


class ProjectMembersArgs(ToolArgs):
    project_gid: str = Field(description="The project GID")
    members: List[str] = Field(min_length=1, description="User GIDs")


class ProjectFollowersArgs(ToolArgs):
    project_gid: str = Field(description="The project GID")
    followers: List[str] = Field(min_length=1, description="User GIDs")


class ProjectListArgs(ListArgs):
    project_gid: str = Field(description="The project GID")


class ProjectMembershipArgs(FormatArgs):
    membership_gid: str = Field(description="The project membership GID")


class CreateProjectStatusArgs(ToolArgs):
    project_gid: str = Field(description="The project GID")
    text: str = Field(description="Status update body")
    color: StatusColor = Field(description="Status color")
    title: Optional[str] = Field(default=None, description="Status update title")


class ProjectStatusArgs(FormatArgs):
    status_gid: str = Field(description="The project status GID")


class ProjectStatusGidArgs(ToolArgs):
    status_gid: str = Field(description="The project status GID")


async def handle_create_project(ctx, args: CreateProjectArgs):
    project = await ctx.client.create_project(**fields(args))
    return success("Project created", project=project)


async def handle_get_project(ctx, args: ProjectArgs):
    project = await ctx.client.get_project(args.project_gid)
    return format_response(project, args.format, "project")


async def handle_update_project(ctx, args: UpdateProjectArgs):
    body = fields(args, "project_gid", nullable=("due_on", "start_on"))
    project = await ctx.client.update_project(args.project_gid, **body)
    return success("Project updated", project=project)


async def handle_delete_project(ctx, args: ProjectGidArgs):
    await ctx.client.delete_project(args.project_gid)
    return success("Project deleted")


async def handle_duplicate_project(ctx, args: DuplicateProjectArgs):
    schedule: Optional[Dict[str, Any]] = None
    if args.schedule_dates is not None:
        schedule = args.schedule_dates.model_dump(exclude_none=True)
    job = await ctx.client.duplicate_project(
        args.project_gid,
        args.name,
        team=args.team,
        include=args.include,
        schedule_dates=schedule,
    )
    return success("Project duplicated", new_project=job.get("new_project"), job=job)


async def handle_list_projects(ctx, args: ListProjectsArgs):
    result = await ctx.client.list_projects(
        workspace=args.workspace,
        team=args.team,
        archived=args.archived,
        pagination=ctx.page(args),
    )
    return format_response(result, args.format, "projects")


async def handle_list_workspace_projects(ctx, args: WorkspaceProjectsArgs):
    result = await ctx.client.list_workspace_projects(
        args.workspace_gid, archived=args.archived, pagination=ctx.page(args)
    )
    return format_response(result, args.format, "projects")


async def handle_list_team_projects(ctx, args: TeamProjectsArgs):
    result = await ctx.client.list_team_projects(
        args.team_gid, archived=args.archived, pagination=ctx.page(args)
    )
    return format_response(result, args.format, "projects")


async def handle_list_task_projects(ctx, args: TaskProjectsArgs):
    result = await ctx.client.list_task_projects(args.task_gid, ctx.page(args))
    return format_response(result, args.format, "projects")


async def handle_get_project_task_counts(ctx, args: ProjectGidArgs):
    counts = await ctx.client.get_project_task_counts(args.project_gid)
    return to_json(counts)


async def handle_add_members_to_project(ctx, args: ProjectMembersArgs):
    project = await ctx.client.add_members_to_project(args.project_gid, args.members)
    return success("Members added to project", project=project)


async def handle_remove_members_from_project(ctx, args: ProjectMembersArgs):
    project = await ctx.client.remove_members_from_project(args.project_gid, args.members)
    return success("Members removed from project", project=project)


async def handle_add_followers_to_project(ctx, args: ProjectFollowersArgs):
    project = await ctx.client.add_followers_to_project(args.project_gid, args.followers)
    return success("Followers added to project", project=project)


async def handle_remove_followers_from_project(ctx, args: ProjectFollowersArgs):
    project = await ctx.client.remove_followers_from_project(args.project_gid, args.followers)
    return success("Followers removed from project", project=project)


async def handle_list_project_memberships(ctx, args: ProjectListArgs):
    result = await ctx.client.list_project_memberships(args.project_gid, ctx.page(args))
    return format_response(result, args.format, "project_memberships")


async def handle_get_project_membership(ctx, args: ProjectMembershipArgs):
    membership = await ctx.client.get_project_membership(args.membership_gid)
    return format_response(membership, args.format, "project_membership")


async def handle_create_project_status(ctx, args: CreateProjectStatusArgs):
    status = await ctx.client.create_project_status(
        args.project_gid, args.text, args.color, title=args.title
    )
    return success("Project status created", status=status)


async def handle_get_project_status(ctx, args: ProjectStatusArgs):
    status = await ctx.client.get_project_status(args.status_gid)
    return format_response(status, args.format, "project_status")


async def handle_delete_project_status(ctx, args: ProjectStatusGidArgs):
    await ctx.client.delete_project_status(args.status_gid)
    return success("Project status deleted")


async def handle_list_project_statuses(ctx, args: ProjectListArgs):
    result = await ctx.client.list_project_statuses(args.project_gid, ctx.page(args))
    return format_response(result, args.format, "project_statuses")


TOOLS = [
    ToolSpec(
        name="asana_create_project",
        description="""Create a new project.

Args:
  - name: Project name (required)
  - workspace: Workspace GID
  - team: Team GID (required for organizations)
  - public, color, notes: Project settings
  - due_on, start_on: Dates (YYYY-MM-DD)
  - default_view: list, board, calendar or timeline""",
        arguments=CreateProjectArgs,
        handler=handle_create_project,
    ),
    ToolSpec(
        name="asana_get_project",
        description="""Get details of a project.

Args:
  - project_gid: The project GID
  - format: 'json' or 'markdown'""",
        arguments=ProjectArgs,
        handler=handle_get_project,
    ),
    ToolSpec(
        name="asana_update_project",
        description="""Update a project.

Args:
  - project_gid: The project GID
  - name, public, color, notes, archived: New values
  - due_on, start_on: New dates (YYYY-MM-DD), or null to clear""",
        arguments=UpdateProjectArgs,
        handler=handle_update_project,
    ),
    ToolSpec(
        name="asana_delete_project",
        description="""Delete a project.

Args:
  - project_gid: The project GID""",
        arguments=ProjectGidArgs,
        handler=handle_delete_project,
    ),
    ToolSpec(
        name="asana_duplicate_project",
        description="""Duplicate a project. Asana runs the copy as a background job.

Args:
  - project_gid: The project to copy
  - name: Name of the new project (required)
  - team: Team GID for the new project
  - include: Elements to copy (members, notes, task_notes, task_subtasks, ...)
  - schedule_dates: {should_skip_weekends, due_on, start_on}""",
        arguments=DuplicateProjectArgs,
        handler=handle_duplicate_project,
    ),
    ToolSpec(
        name="asana_list_projects",
        description="""List projects, optionally filtered by workspace, team or archived state.

Args:
  - workspace: Workspace GID
  - team: Team GID
  - archived: Only archived (true) or unarchived (false) projects
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=ListProjectsArgs,
        handler=handle_list_projects,
    ),
    ToolSpec(
        name="asana_list_workspace_projects",
        description="""List projects in a workspace.

Args:
  - workspace_gid: The workspace GID
  - archived: Only archived (true) or unarchived (false) projects
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=WorkspaceProjectsArgs,
        handler=handle_list_workspace_projects,
    ),
    ToolSpec(
        name="asana_list_team_projects",
        description="""List projects shared with a team.

Args:
  - team_gid: The team GID
  - archived: Only archived (true) or unarchived (false) projects
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=TeamProjectsArgs,
        handler=handle_list_team_projects,
    ),
    ToolSpec(
        name="asana_list_task_projects",
        description="""List the projects a task belongs to.

Args:
  - task_gid: The task GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=TaskProjectsArgs,
        handler=handle_list_task_projects,
    ),
    ToolSpec(
        name="asana_get_project_task_counts",
        description="""Get task counts (total, completed, incomplete, milestones) for a project.

Args:
  - project_gid: The project GID""",
        arguments=ProjectGidArgs,
        handler=handle_get_project_task_counts,
    ),
    ToolSpec(
        name="asana_add_members_to_project",
        description="""Add members to a project.

Args:
  - project_gid: The project GID
  - members: User GIDs to add""",
        arguments=ProjectMembersArgs,
        handler=handle_add_members_to_project,
    ),
    ToolSpec(
        name="asana_remove_members_from_project",
        description="""Remove members from a project.

Args:
  - project_gid: The project GID
  - members: User GIDs to remove""",
        arguments=ProjectMembersArgs,
        handler=handle_remove_members_from_project,
    ),
    ToolSpec(
        name="asana_add_followers_to_project",
        description="""Add followers to a project.

Args:
  - project_gid: The project GID
  - followers: User GIDs to add""",
        arguments=ProjectFollowersArgs,
        handler=handle_add_followers_to_project,
    ),
    ToolSpec(
        name="asana_remove_followers_from_project",
        description="""Remove followers from a project.

Args:
  - project_gid: The project GID
  - followers: User GIDs to remove""",
        arguments=ProjectFollowersArgs,
        handler=handle_remove_followers_from_project,
    ),
    ToolSpec(
        name="asana_list_project_memberships",
        description="""List memberships of a project.

Args:
  - project_gid: The project GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=ProjectListArgs,
        handler=handle_list_project_memberships,
    ),
    ToolSpec(
        name="asana_get_project_membership",
        description="""Get a single project membership.

Args:
  - membership_gid: The membership GID
  - format: 'json' or 'markdown'""",
        arguments=ProjectMembershipArgs,
        handler=handle_get_project_membership,
    ),
    ToolSpec(
        name="asana_create_project_status",
        description="""Post a status update on a project.

Args:
  - project_gid: The project GID
  - text: Status body (required)
  - color: green, yellow, red or blue (required)
  - title: Status title""",
        arguments=CreateProjectStatusArgs,
        handler=handle_create_project_status,
    ),
    ToolSpec(
        name="asana_get_project_status",
        description="""Get a project status update.

Args:
  - status_gid: The project status GID
  - format: 'json' or 'markdown'""",
        arguments=ProjectStatusArgs,
        handler=handle_get_project_status,
    ),
    ToolSpec(
        name="asana_delete_project_status",
        description="""Delete a project status update.

Args:
  - status_gid: The project status GID""",
        arguments=ProjectStatusGidArgs,
        handler=handle_delete_project_status,
    ),
    ToolSpec(
        name="asana_list_project_statuses",
        description="""List status updates posted on a project.

Args:
  - project_gid: The project GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=ProjectListArgs,
        handler=handle_list_project_statuses,
    ),
]
