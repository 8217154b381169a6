import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, Union

from mcp.types import CallToolResult, TextContent, Tool
from pydantic import BaseModel

from src.servers.asana.handlers.common import ToolContext
from src.servers.asana.utils.client import AsanaClient
from src.servers.asana.utils.config import ServerConfig, load_config
from src.servers.asana.utils.errors import format_error_for_logging
from src.servers.asana.utils.formatters import format_error, truncate

logger = logging.getLogger("asana-tools")

Handler = Callable[[ToolContext, Any], Awaitable[Union[str, CallToolResult]]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    arguments: Type[BaseModel]
    handler: Handler

    def to_tool(self) -> Tool:
        schema = self.arguments.model_json_schema()
        schema.pop("title", None)
        return Tool(name=self.name, description=self.description, inputSchema=schema)


class ToolRegistry:
    """Tools bound to one tenant's client. Built fresh for every request."""

    def __init__(self, client: AsanaClient, config: Optional[ServerConfig] = None):
        self.context = ToolContext(client=client, config=config or load_config())
        self._tools: Dict[str, ToolSpec] = {}

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._tools[spec.name] = spec

    def names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[Tool]:
        return [spec.to_tool() for spec in self._tools.values()]

    async def call(self, name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        """Validate arguments, run the handler and wrap the result or the failure"""
        spec = self._tools.get(name)
        if spec is None:
            return format_error(ValueError(f"Unknown tool: {name}"))

        logger.info(f"Calling tool: {name}")
        try:
            args = spec.arguments.model_validate(arguments or {})
            result = await spec.handler(self.context, args)
        except Exception as e:
            logger.error(f"Error executing tool {name}: {format_error_for_logging(e)}")
            return format_error(e)

        if isinstance(result, CallToolResult):
            return result
        text = truncate(result, self.context.config.character_limit)
        return CallToolResult(content=[TextContent(type="text", text=text)])


def build_tool_registry(
    client: AsanaClient, config: Optional[ServerConfig] = None
) -> ToolRegistry:
    """Register every Asana tool against the given client"""
    from src.servers.asana.handlers import (
        attachments,
        connection,
        custom_fields,
        goals,
        portfolios,
        projects,
        sections,
        stories,
        tags,
        tasks,
        teams,
        typeahead,
        users,
        webhooks,
        workspaces,
    )

    registry = ToolRegistry(client, config)
    for module in (
        connection,
        workspaces,
        users,
        teams,
        projects,
        sections,
        tasks,
        tags,
        stories,
        attachments,
        custom_fields,
        portfolios,
        goals,
        webhooks,
        typeahead,
    ):
        for spec in module.TOOLS:
            registry.register(spec)
    return registry


def tool_names() -> List[str]:
    """Catalog of tool names, without binding to any tenant"""
    return build_tool_registry(AsanaClient(credentials=None), ServerConfig()).names()
