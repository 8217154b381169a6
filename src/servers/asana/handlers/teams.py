from typing import Literal, Optional

from pydantic import Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs, ToolArgs, fields, success
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response

TeamVisibility = Literal["secret", "request_to_join", "public"]


class CreateTeamArgs(ToolArgs):
    organization: str = Field(description="Organization (workspace) GID")
    name: str = Field(description="Team name")
    description: Optional[str] = Field(default=None, description="Team description")
    visibility: Optional[TeamVisibility] = Field(default=None, description="Team visibility")


class TeamArgs(FormatArgs):
    team_gid: str = Field(description="The team GID")


class UpdateTeamArgs(ToolArgs):
    team_gid: str = Field(description="The team GID")
    name: Optional[str] = Field(default=None, description="New team name")
    description: Optional[str] = Field(default=None, description="New team description")
    visibility: Optional[TeamVisibility] = Field(default=None, description="New team visibility")


class ListTeamsArgs(ListArgs):
    workspace_gid: str = Field(description="Organization (workspace) GID")


class ListUserTeamsArgs(ListArgs):
    user_gid: str = Field(description="User GID or 'me'")
    organization: str = Field(description="Organization (workspace) GID")


class ListTeamUsersArgs(ListArgs):
    team_gid: str = Field(description="The team GID")


class TeamUserArgs(ToolArgs):
    team_gid: str = Field(description="The team GID")
    user: str = Field(description="User GID, email address or 'me'")


async def handle_create_team(ctx, args: CreateTeamArgs):
    team = await ctx.client.create_team(**fields(args))
    return success("Team created", team=team)


async def handle_get_team(ctx, args: TeamArgs):
    team = await ctx.client.get_team(args.team_gid)
    return format_response(team, args.format, "team")


async def handle_update_team(ctx, args: UpdateTeamArgs):
    team = await ctx.client.update_team(args.team_gid, **fields(args, "team_gid"))
    return success("Team updated", team=team)


async def handle_list_teams(ctx, args: ListTeamsArgs):
    result = await ctx.client.list_teams(args.workspace_gid, ctx.page(args))
    return format_response(result, args.format, "teams")


async def handle_list_user_teams(ctx, args: ListUserTeamsArgs):
    result = await ctx.client.list_user_teams(
        args.user_gid, args.organization, ctx.page(args)
    )
    return format_response(result, args.format, "teams")


async def handle_list_team_users(ctx, args: ListTeamUsersArgs):
    result = await ctx.client.list_team_users(args.team_gid, ctx.page(args))
    return format_response(result, args.format, "users")


async def handle_add_user_to_team(ctx, args: TeamUserArgs):
    membership = await ctx.client.add_user_to_team(args.team_gid, args.user)
    return success("User added to team", membership=membership)


async def handle_remove_user_from_team(ctx, args: TeamUserArgs):
    await ctx.client.remove_user_from_team(args.team_gid, args.user)
    return success("User removed from team")


TOOLS = [
    ToolSpec(
        name="asana_create_team",
        description="""Create a team in an organization.

Args:
  - organization: Organization GID (required)
  - name: Team name (required)
  - description: Team description
  - visibility: secret, request_to_join or public""",
        arguments=CreateTeamArgs,
        handler=handle_create_team,
    ),
    ToolSpec(
        name="asana_get_team",
        description="""Get details of a team.

Args:
  - team_gid: The team GID
  - format: 'json' or 'markdown'""",
        arguments=TeamArgs,
        handler=handle_get_team,
    ),
    ToolSpec(
        name="asana_update_team",
        description="""Update a team's name, description or visibility.

Args:
  - team_gid: The team GID
  - name, description, visibility: New values""",
        arguments=UpdateTeamArgs,
        handler=handle_update_team,
    ),
    ToolSpec(
        name="asana_list_teams",
        description="""List teams in an organization.

Args:
  - workspace_gid: Organization GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=ListTeamsArgs,
        handler=handle_list_teams,
    ),
    ToolSpec(
        name="asana_list_user_teams",
        description="""List the teams a user belongs to within an organization.

Args:
  - user_gid: User GID or 'me'
  - organization: Organization GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=ListUserTeamsArgs,
        handler=handle_list_user_teams,
    ),
    ToolSpec(
        name="asana_list_team_users",
        description="""List members of a team.

Args:
  - team_gid: The team GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=ListTeamUsersArgs,
        handler=handle_list_team_users,
    ),
    ToolSpec(
        name="asana_add_user_to_team",
        description="""Add a user to a team.

Args:
  - team_gid: The team GID
  - user: User GID, email address or 'me'""",
        arguments=TeamUserArgs,
        handler=handle_add_user_to_team,
    ),
    ToolSpec(
        name="asana_remove_user_from_team",
        description="""Remove a user from a team.

Args:
  - team_gid: The team GID
  - user: User GID, email address or 'me'""",
        arguments=TeamUserArgs,
        handler=handle_remove_user_from_team,
    ),
]
