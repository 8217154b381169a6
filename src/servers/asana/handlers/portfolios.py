from typing import List, Optional

from pydantic import Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs, ToolArgs, fields, success
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response


class CreatePortfolioArgs(ToolArgs):
    name: str = Field(description="Portfolio name")
    workspace: str = Field(description="Workspace GID")
    color: Optional[str] = Field(default=None, description="Portfolio color")
    public: Optional[bool] = Field(default=None, description="Whether the portfolio is public")


class PortfolioArgs(FormatArgs):
    portfolio_gid: str = Field(description="The portfolio GID")


class PortfolioGidArgs(ToolArgs):
    portfolio_gid: str = Field(description="The portfolio GID")


class UpdatePortfolioArgs(ToolArgs):
    portfolio_gid: str = Field(description="The portfolio GID")
    name: Optional[str] = Field(default=None, description="New portfolio name")
    color: Optional[str] = Field(default=None, description="New portfolio color")
    public: Optional[bool] = Field(default=None, description="Whether the portfolio is public")


class ListPortfoliosArgs(ListArgs):
    workspace_gid: str = Field(description="The workspace GID")
    owner_gid: str = Field(description="Owner user GID ('me' for your own)")


class PortfolioItemsArgs(ListArgs):
    portfolio_gid: str = Field(description="The portfolio GID")


class PortfolioItemArgs(ToolArgs):
    portfolio_gid: str = Field(description="The portfolio GID")
    item: str = Field(description="Project or portfolio GID")


class PortfolioMembersArgs(ToolArgs):
    portfolio_gid: str = Field(description="The portfolio GID")
    members: List[str] = Field(min_length=1, description="User GIDs")


async def handle_create_portfolio(ctx, args: CreatePortfolioArgs):
    portfolio = await ctx.client.create_portfolio(**fields(args))
    return success("Portfolio created", portfolio=portfolio)


async def handle_get_portfolio(ctx, args: PortfolioArgs):
    portfolio = await ctx.client.get_portfolio(args.portfolio_gid)
    return format_response(portfolio, args.format, "portfolio")


async def handle_update_portfolio(ctx, args: UpdatePortfolioArgs):
    portfolio = await ctx.client.update_portfolio(
        args.portfolio_gid, **fields(args, "portfolio_gid")
    )
    return success("Portfolio updated", portfolio=portfolio)


async def handle_delete_portfolio(ctx, args: PortfolioGidArgs):
    await ctx.client.delete_portfolio(args.portfolio_gid)
    return success("Portfolio deleted")


async def handle_list_portfolios(ctx, args: ListPortfoliosArgs):
    result = await ctx.client.list_portfolios(
        args.workspace_gid, owner=args.owner_gid, pagination=ctx.page(args)
    )
    return format_response(result, args.format, "portfolios")


async def handle_list_portfolio_items(ctx, args: PortfolioItemsArgs):
    result = await ctx.client.list_portfolio_items(args.portfolio_gid, ctx.page(args))
    return format_response(result, args.format, "projects")


async def handle_add_item_to_portfolio(ctx, args: PortfolioItemArgs):
    await ctx.client.add_item_to_portfolio(args.portfolio_gid, args.item)
    return success("Project added to portfolio")


async def handle_remove_item_from_portfolio(ctx, args: PortfolioItemArgs):
    await ctx.client.remove_item_from_portfolio(args.portfolio_gid, args.item)
    return success("Project removed from portfolio")


async def handle_add_members_to_portfolio(ctx, args: PortfolioMembersArgs):
    portfolio = await ctx.client.add_members_to_portfolio(args.portfolio_gid, args.members)
    return success("Members added to portfolio", portfolio=portfolio)


async def handle_remove_members_from_portfolio(ctx, args: PortfolioMembersArgs):
    portfolio = await ctx.client.remove_members_from_portfolio(args.portfolio_gid, args.members)
    return success("Members removed from portfolio", portfolio=portfolio)


TOOLS = [
    ToolSpec(
        name="asana_create_portfolio",
        description="""Create a portfolio.

Args:
  - name: Portfolio name (required)
  - workspace: Workspace GID (required)
  - color: Portfolio color
  - public: Whether the portfolio is public""",
        arguments=CreatePortfolioArgs,
        handler=handle_create_portfolio,
    ),
    ToolSpec(
        name="asana_get_portfolio",
        description="""Get details of a portfolio.

Args:
  - portfolio_gid: The portfolio GID
  - format: 'json' or 'markdown'""",
        arguments=PortfolioArgs,
        handler=handle_get_portfolio,
    ),
    ToolSpec(
        name="asana_update_portfolio",
        description="""Update a portfolio.

Args:
  - portfolio_gid: The portfolio GID
  - name, color, public: New values""",
        arguments=UpdatePortfolioArgs,
        handler=handle_update_portfolio,
    ),
    ToolSpec(
        name="asana_delete_portfolio",
        description="""Delete a portfolio.

Args:
  - portfolio_gid: The portfolio GID""",
        arguments=PortfolioGidArgs,
        handler=handle_delete_portfolio,
    ),
    ToolSpec(
        name="asana_list_portfolios",
        description="""List portfolios owned by a user in a workspace.

Args:
  - workspace_gid: The workspace GID
  - owner_gid: Owner user GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=ListPortfoliosArgs,
        handler=handle_list_portfolios,
    ),
    ToolSpec(
        name="asana_list_portfolio_items",
        description="""List the projects in a portfolio.

Args:
  - portfolio_gid: The portfolio GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=PortfolioItemsArgs,
        handler=handle_list_portfolio_items,
    ),
    ToolSpec(
        name="asana_add_item_to_portfolio",
        description="""Add a project to a portfolio.

Args:
  - portfolio_gid: The portfolio GID
  - item: Project GID""",
        arguments=PortfolioItemArgs,
        handler=handle_add_item_to_portfolio,
    ),
    ToolSpec(
        name="asana_remove_item_from_portfolio",
        description="""Remove a project from a portfolio.

Args:
  - portfolio_gid: The portfolio GID
  - item: Project GID""",
        arguments=PortfolioItemArgs,
        handler=handle_remove_item_from_portfolio,
    ),
    ToolSpec(
        name="asana_add_members_to_portfolio",
        description="""Add members to a portfolio.

Args:
  - portfolio_gid: The portfolio GID
  - members: User GIDs""",
        arguments=PortfolioMembersArgs,
        handler=handle_add_members_to_portfolio,
    ),
    ToolSpec(
        name="asana_remove_members_from_portfolio",
        description="""Remove members from a portfolio.

Args:
  - portfolio_gid: The portfolio GID
  - members: User GIDs""",
        arguments=PortfolioMembersArgs,
        handler=handle_remove_members_from_portfolio,
    ),
]
