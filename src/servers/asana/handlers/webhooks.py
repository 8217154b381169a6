from typing import List, Optional

from pydantic import BaseModel, Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs, ToolArgs, success
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response


class WebhookFilter(BaseModel):
    action: Optional[str] = Field(default=None, description="changed, added, removed or deleted")
    fields: Optional[List[str]] = Field(default=None, description="Fields to watch")
    resource_subtype: Optional[str] = Field(default=None, description="Resource subtype to filter")
    resource_type: Optional[str] = Field(default=None, description="Resource type to filter")


class CreateWebhookArgs(ToolArgs):
    resource: str = Field(description="GID of the resource to watch")
    target: str = Field(pattern=r"^https?://\S+$", description="URL that receives events")
    filters: Optional[List[WebhookFilter]] = Field(default=None, description="Event filters")


class WebhookArgs(FormatArgs):
    webhook_gid: str = Field(description="The webhook GID")


class WebhookGidArgs(ToolArgs):
    webhook_gid: str = Field(description="The webhook GID")


class UpdateWebhookArgs(ToolArgs):
    webhook_gid: str = Field(description="The webhook GID")
    filters: List[WebhookFilter] = Field(description="Replacement event filters")


class ListWebhooksArgs(ListArgs):
    workspace_gid: str = Field(description="The workspace GID")
    resource: Optional[str] = Field(default=None, description="Filter by watched resource GID")


def _filters(filters: Optional[List[WebhookFilter]]):
    if filters is None:
        return None
    return [f.model_dump(exclude_none=True) for f in filters]


async def handle_create_webhook(ctx, args: CreateWebhookArgs):
    webhook = await ctx.client.create_webhook(
        args.resource, args.target, filters=_filters(args.filters)
    )
    return success("Webhook created", webhook=webhook)


async def handle_get_webhook(ctx, args: WebhookArgs):
    webhook = await ctx.client.get_webhook(args.webhook_gid)
    return format_response(webhook, args.format, "webhook")


async def handle_update_webhook(ctx, args: UpdateWebhookArgs):
    webhook = await ctx.client.update_webhook(args.webhook_gid, _filters(args.filters))
    return success("Webhook updated", webhook=webhook)


async def handle_delete_webhook(ctx, args: WebhookGidArgs):
    await ctx.client.delete_webhook(args.webhook_gid)
    return success("Webhook deleted")


async def handle_list_webhooks(ctx, args: ListWebhooksArgs):
    result = await ctx.client.list_webhooks(
        args.workspace_gid, resource=args.resource, pagination=ctx.page(args)
    )
    return format_response(result, args.format, "webhooks")


TOOLS = [
    ToolSpec(
        name="asana_create_webhook",
        description="""Register a webhook. Asana performs a handshake with the target before it is active.

Args:
  - resource: GID of the resource to watch (required)
  - target: HTTPS URL to receive events (required)
  - filters: [{action, fields, resource_subtype, resource_type}]""",
        arguments=CreateWebhookArgs,
        handler=handle_create_webhook,
    ),
    ToolSpec(
        name="asana_get_webhook",
        description="""Get a webhook.

Args:
  - webhook_gid: The webhook GID
  - format: 'json' or 'markdown'""",
        arguments=WebhookArgs,
        handler=handle_get_webhook,
    ),
    ToolSpec(
        name="asana_update_webhook",
        description="""Replace a webhook's filters.

Args:
  - webhook_gid: The webhook GID
  - filters: [{action, fields, resource_subtype, resource_type}] (required)""",
        arguments=UpdateWebhookArgs,
        handler=handle_update_webhook,
    ),
    ToolSpec(
        name="asana_delete_webhook",
        description="""Delete a webhook.

Args:
  - webhook_gid: The webhook GID""",
        arguments=WebhookGidArgs,
        handler=handle_delete_webhook,
    ),
    ToolSpec(
        name="asana_list_webhooks",
        description="""List webhooks in a workspace.

Args:
  - workspace_gid: The workspace GID
  - resource: Filter by watched resource GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=ListWebhooksArgs,
        handler=handle_list_webhooks,
    ),
]
