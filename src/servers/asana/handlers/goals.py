from typing import List, Literal, Optional

from pydantic import Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs, ToolArgs, fields, success
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response

GoalStatus = Literal[
    "on_track", "at_risk", "off_track", "on_hold", "achieved", "partial", "missed", "dropped"
]


class CreateGoalArgs(ToolArgs):
    name: str = Field(description="Goal name")
    workspace: Optional[str] = Field(default=None, description="Workspace GID")
    team: Optional[str] = Field(default=None, description="Team GID")
    time_period: Optional[str] = Field(default=None, description="Time period GID")
    owner: Optional[str] = Field(default=None, description="Owner user GID")
    notes: Optional[str] = Field(default=None, description="Goal description")
    due_on: Optional[str] = Field(default=None, description="Due date (YYYY-MM-DD)")
    start_on: Optional[str] = Field(default=None, description="Start date (YYYY-MM-DD)")
    status: Optional[GoalStatus] = Field(default=None, description="Goal status")


class GoalArgs(FormatArgs):
    goal_gid: str = Field(description="The goal GID")


class GoalGidArgs(ToolArgs):
    goal_gid: str = Field(description="The goal GID")


class UpdateGoalArgs(ToolArgs):
    goal_gid: str = Field(description="The goal GID")
    name: Optional[str] = Field(default=None, description="New goal name")
    notes: Optional[str] = Field(default=None, description="New goal description")
    due_on: Optional[str] = Field(default=None, description="New due date (YYYY-MM-DD), or null to clear")
    start_on: Optional[str] = Field(default=None, description="New start date (YYYY-MM-DD), or null to clear")
    status: Optional[GoalStatus] = Field(default=None, description="New status, or null to clear")
    owner: Optional[str] = Field(default=None, description="New owner user GID")


class ListGoalsArgs(ListArgs):
    workspace: Optional[str] = Field(default=None, description="Filter by workspace GID")
    team: Optional[str] = Field(default=None, description="Filter by team GID")
    is_workspace_level: Optional[bool] = Field(default=None, description="Only workspace-level goals")
    time_periods: Optional[List[str]] = Field(default=None, description="Filter by time period GIDs")
    portfolio: Optional[str] = Field(default=None, description="Filter by portfolio GID")


class GoalFollowersArgs(ToolArgs):
    goal_gid: str = Field(description="The goal GID")
    followers: List[str] = Field(min_length=1, description="User GIDs")


class GoalListArgs(ListArgs):
    goal_gid: str = Field(description="The goal GID")


class GoalRelationshipArgs(FormatArgs):
    relationship_gid: str = Field(description="The goal relationship GID")


class UpdateGoalRelationshipArgs(ToolArgs):
    relationship_gid: str = Field(description="The goal relationship GID")
    contribution_weight: float = Field(ge=0, le=1, description="Contribution weight (0-1)")


class AddSupportingRelationshipArgs(ToolArgs):
    goal_gid: str = Field(description="The supported goal GID")
    supporting_resource: str = Field(description="GID of the supporting goal, project or portfolio")
    contribution_weight: Optional[float] = Field(
        default=None, ge=0, le=1, description="Contribution weight (0-1)"
    )


class RemoveSupportingRelationshipArgs(ToolArgs):
    goal_gid: str = Field(description="The supported goal GID")
    supporting_relationship: str = Field(description="GID of the supporting resource to unlink")


async def handle_create_goal(ctx, args: CreateGoalArgs):
    goal = await ctx.client.create_goal(**fields(args))
    return success("Goal created", goal=goal)


async def handle_get_goal(ctx, args: GoalArgs):
    goal = await ctx.client.get_goal(args.goal_gid)
    return format_response(goal, args.format, "goal")


async def handle_update_goal(ctx, args: UpdateGoalArgs):
    body = fields(args, "goal_gid", nullable=("due_on", "start_on", "status"))
    goal = await ctx.client.update_goal(args.goal_gid, **body)
    return success("Goal updated", goal=goal)


async def handle_delete_goal(ctx, args: GoalGidArgs):
    await ctx.client.delete_goal(args.goal_gid)
    return success("Goal deleted")


async def handle_list_goals(ctx, args: ListGoalsArgs):
    result = await ctx.client.list_goals(
        workspace=args.workspace,
        team=args.team,
        is_workspace_level=args.is_workspace_level,
        time_periods=args.time_periods,
        portfolio=args.portfolio,
        pagination=ctx.page(args),
    )
    return format_response(result, args.format, "goals")


async def handle_add_followers_to_goal(ctx, args: GoalFollowersArgs):
    goal = await ctx.client.add_followers_to_goal(args.goal_gid, args.followers)
    return success("Followers added to goal", goal=goal)


async def handle_remove_followers_from_goal(ctx, args: GoalFollowersArgs):
    goal = await ctx.client.remove_followers_from_goal(args.goal_gid, args.followers)
    return success("Followers removed from goal", goal=goal)


async def handle_list_goal_parent_goals(ctx, args: GoalListArgs):
    result = await ctx.client.list_goal_parent_goals(args.goal_gid, ctx.page(args))
    return format_response(result, args.format, "goals")


async def handle_list_goal_relationships(ctx, args: GoalListArgs):
    result = await ctx.client.list_goal_relationships(args.goal_gid, ctx.page(args))
    return format_response(result, args.format, "goal_relationships")


async def handle_get_goal_relationship(ctx, args: GoalRelationshipArgs):
    relationship = await ctx.client.get_goal_relationship(args.relationship_gid)
    return format_response(relationship, args.format, "goal_relationship")


async def handle_update_goal_relationship(ctx, args: UpdateGoalRelationshipArgs):
    relationship = await ctx.client.update_goal_relationship(
        args.relationship_gid, contribution_weight=args.contribution_weight
    )
    return success("Goal relationship updated", relationship=relationship)


async def handle_add_supporting_relationship(ctx, args: AddSupportingRelationshipArgs):
    relationship = await ctx.client.add_supporting_relationship(
        args.goal_gid,
        args.supporting_resource,
        contribution_weight=args.contribution_weight,
    )
    return success("Supporting relationship added", relationship=relationship)


async def handle_remove_supporting_relationship(ctx, args: RemoveSupportingRelationshipArgs):
    await ctx.client.remove_supporting_relationship(args.goal_gid, args.supporting_relationship)
    return success("Supporting relationship removed")


TOOLS = [
    ToolSpec(
        name="asana_create_goal",
        description="""Create a goal.

Args:
  - name: Goal name (required)
  - workspace / team: Where the goal lives
  - time_period: Time period GID
  - owner: Owner user GID
  - notes: Goal description
  - due_on, start_on: Dates (YYYY-MM-DD)
  - status: on_track, at_risk, off_track, on_hold, achieved, partial, missed or dropped""",
        arguments=CreateGoalArgs,
        handler=handle_create_goal,
    ),
    ToolSpec(
        name="asana_get_goal",
        description="""Get details of a goal.

Args:
  - goal_gid: The goal GID
  - format: 'json' or 'markdown'""",
        arguments=GoalArgs,
        handler=handle_get_goal,
    ),
    ToolSpec(
        name="asana_update_goal",
        description="""Update a goal.

Args:
  - goal_gid: The goal GID
  - name, notes, owner: New values
  - due_on, start_on, status: New values, or null to clear""",
        arguments=UpdateGoalArgs,
        handler=handle_update_goal,
    ),
    ToolSpec(
        name="asana_delete_goal",
        description="""Delete a goal.

Args:
  - goal_gid: The goal GID""",
        arguments=GoalGidArgs,
        handler=handle_delete_goal,
    ),
    ToolSpec(
        name="asana_list_goals",
        description="""List goals.

Args:
  - workspace, team, portfolio: Filter by container GID
  - is_workspace_level: Only workspace-level goals
  - time_periods: Filter by time period GIDs
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=ListGoalsArgs,
        handler=handle_list_goals,
    ),
    ToolSpec(
        name="asana_add_followers_to_goal",
        description="""Add followers to a goal.

Args:
  - goal_gid: The goal GID
  - followers: User GIDs""",
        arguments=GoalFollowersArgs,
        handler=handle_add_followers_to_goal,
    ),
    ToolSpec(
        name="asana_remove_followers_from_goal",
        description="""Remove followers from a goal.

Args:
  - goal_gid: The goal GID
  - followers: User GIDs""",
        arguments=GoalFollowersArgs,
        handler=handle_remove_followers_from_goal,
    ),
    ToolSpec(
        name="asana_list_goal_parent_goals",
        description="""List the goals a goal supports.

Args:
  - goal_gid: The goal GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=GoalListArgs,
        handler=handle_list_goal_parent_goals,
    ),
    ToolSpec(
        name="asana_list_goal_relationships",
        description="""List supporting relationships of a goal.

Args:
  - goal_gid: The goal GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=GoalListArgs,
        handler=handle_list_goal_relationships,
    ),
    ToolSpec(
        name="asana_get_goal_relationship",
        description="""Get a goal relationship.

Args:
  - relationship_gid: The goal relationship GID
  - format: 'json' or 'markdown'""",
        arguments=GoalRelationshipArgs,
        handler=handle_get_goal_relationship,
    ),
    ToolSpec(
        name="asana_update_goal_relationship",
        description="""Change how much a supporting resource contributes to a goal.

Args:
  - relationship_gid: The goal relationship GID
  - contribution_weight: Weight between 0 and 1""",
        arguments=UpdateGoalRelationshipArgs,
        handler=handle_update_goal_relationship,
    ),
    ToolSpec(
        name="asana_add_supporting_relationship",
        description="""Link a goal, project or portfolio as supporting a goal.

Args:
  - goal_gid: The supported goal GID
  - supporting_resource: GID of the supporting resource
  - contribution_weight: Weight between 0 and 1""",
        arguments=AddSupportingRelationshipArgs,
        handler=handle_add_supporting_relationship,
    ),
    ToolSpec(
        name="asana_remove_supporting_relationship",
        description="""Unlink a supporting resource from a goal.

Args:
  - goal_gid: The supported goal GID
  - supporting_relationship: GID of the supporting resource""",
        arguments=RemoveSupportingRelationshipArgs,
        handler=handle_remove_supporting_relationship,
    ),
]
