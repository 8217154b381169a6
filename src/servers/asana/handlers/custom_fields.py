from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from src.servers.asana.handlers.common import FormatArgs, ListArgs, ToolArgs, fields, success
from src.servers.asana.handlers.registry import ToolSpec
from src.servers.asana.utils.formatters import format_response

FieldSubtype = Literal["text", "enum", "multi_enum", "number", "date", "people"]


class EnumOption(BaseModel):
    name: str
    color: Optional[str] = None
    enabled: Optional[bool] = None


class CreateCustomFieldArgs(ToolArgs):
    name: str = Field(description="Custom field name")
    workspace: str = Field(description="Workspace GID")
    resource_subtype: FieldSubtype = Field(description="Field type")
    description: Optional[str] = Field(default=None, description="Field description")
    precision: Optional[int] = Field(default=None, ge=0, le=6, description="Decimal places for number fields")
    enum_options: Optional[List[EnumOption]] = Field(
        default=None, description="Options for enum and multi_enum fields"
    )


class CustomFieldArgs(FormatArgs):
    custom_field_gid: str = Field(description="The custom field GID")


class CustomFieldGidArgs(ToolArgs):
    custom_field_gid: str = Field(description="The custom field GID")


class UpdateCustomFieldArgs(ToolArgs):
    custom_field_gid: str = Field(description="The custom field GID")
    name: Optional[str] = Field(default=None, description="New name")
    description: Optional[str] = Field(default=None, description="New description")
    enabled: Optional[bool] = Field(default=None, description="Enable or disable the field")


class WorkspaceCustomFieldsArgs(ListArgs):
    workspace_gid: str = Field(description="The workspace GID")


class ProjectCustomFieldArgs(ToolArgs):
    project_gid: str = Field(description="The project GID")
    custom_field: str = Field(description="Custom field GID")
    is_important: Optional[bool] = Field(default=None, description="Show the field in list views")


class RemoveProjectCustomFieldArgs(ToolArgs):
    project_gid: str = Field(description="The project GID")
    custom_field: str = Field(description="Custom field GID")


async def handle_create_custom_field(ctx, args: CreateCustomFieldArgs):
    custom_field = await ctx.client.create_custom_field(**fields(args))
    return success("Custom field created", custom_field=custom_field)


async def handle_get_custom_field(ctx, args: CustomFieldArgs):
    custom_field = await ctx.client.get_custom_field(args.custom_field_gid)
    return format_response(custom_field, args.format, "custom_field")


async def handle_update_custom_field(ctx, args: UpdateCustomFieldArgs):
    custom_field = await ctx.client.update_custom_field(
        args.custom_field_gid, **fields(args, "custom_field_gid")
    )
    return success("Custom field updated", custom_field=custom_field)


async def handle_delete_custom_field(ctx, args: CustomFieldGidArgs):
    await ctx.client.delete_custom_field(args.custom_field_gid)
    return success("Custom field deleted")


async def handle_list_custom_fields(ctx, args: WorkspaceCustomFieldsArgs):
    result = await ctx.client.list_custom_fields(args.workspace_gid, ctx.page(args))
    return format_response(result, args.format, "custom_fields")


async def handle_add_custom_field_to_project(ctx, args: ProjectCustomFieldArgs):
    await ctx.client.add_custom_field_to_project(
        args.project_gid, args.custom_field, is_important=args.is_important
    )
    return success("Custom field added to project")


async def handle_remove_custom_field_from_project(ctx, args: RemoveProjectCustomFieldArgs):
    await ctx.client.remove_custom_field_from_project(args.project_gid, args.custom_field)
    return success("Custom field removed from project")


TOOLS = [
    ToolSpec(
        name="asana_create_custom_field",
        description="""Create a custom field in a workspace.

Args:
  - name: Field name (required)
  - workspace: Workspace GID (required)
  - resource_subtype: text, enum, multi_enum, number, date or people (required)
  - description: Field description
  - precision: Decimal places (number fields)
  - enum_options: [{name, color, enabled}] (enum fields)""",
        arguments=CreateCustomFieldArgs,
        handler=handle_create_custom_field,
    ),
    ToolSpec(
        name="asana_get_custom_field",
        description="""Get a custom field definition.

Args:
  - custom_field_gid: The custom field GID
  - format: 'json' or 'markdown'""",
        arguments=CustomFieldArgs,
        handler=handle_get_custom_field,
    ),
    ToolSpec(
        name="asana_update_custom_field",
        description="""Update a custom field.

Args:
  - custom_field_gid: The custom field GID
  - name, description, enabled: New values""",
        arguments=UpdateCustomFieldArgs,
        handler=handle_update_custom_field,
    ),
    ToolSpec(
        name="asana_delete_custom_field",
        description="""Delete a custom field.

Args:
  - custom_field_gid: The custom field GID""",
        arguments=CustomFieldGidArgs,
        handler=handle_delete_custom_field,
    ),
    ToolSpec(
        name="asana_list_custom_fields",
        description="""List custom fields in a workspace.

Args:
  - workspace_gid: The workspace GID
  - limit, offset: Pagination
  - format: 'json' or 'markdown'""",
        arguments=WorkspaceCustomFieldsArgs,
        handler=handle_list_custom_fields,
    ),
    ToolSpec(
        name="asana_add_custom_field_to_project",
        description="""Attach a custom field to a project.

Args:
  - project_gid: The project GID
  - custom_field: Custom field GID
  - is_important: Show the field in list views""",
        arguments=ProjectCustomFieldArgs,
        handler=handle_add_custom_field_to_project,
    ),
    ToolSpec(
        name="asana_remove_custom_field_from_project",
        description="""Detach a custom field from a project.

Args:
  - project_gid: The project GID
  - custom_field: Custom field GID""",
        arguments=RemoveProjectCustomFieldArgs,
        handler=handle_remove_custom_field_from_project,
    ),
]
