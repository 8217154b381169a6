import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import CallToolResult, Tool

from src.servers.asana.handlers.registry import build_tool_registry
from src.servers.asana.utils.client import create_asana_client
from src.servers.asana.utils.config import ServerConfig, load_config
from src.servers.asana.utils.credentials import TenantCredentials

SERVICE_NAME = Path(__file__).parent.name
SERVER_NAME = "primrose-mcp-asana"
SERVER_VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(SERVICE_NAME)


def create_server(
    credentials: TenantCredentials,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    config: Optional[ServerConfig] = None,
) -> Server:
    """Create a new server instance bound to one tenant's credentials"""
    config = config or load_config()
    client = create_asana_client(credentials, transport=transport, timeout=config.timeout)
    registry = build_tool_registry(client, config)

    server = Server(SERVER_NAME)

    @server.list_tools()
    async def handle_list_tools() -> List[Tool]:
        """List available tools for Asana"""
        logger.info("Listing tools")
        return registry.list_tools()

    # Arguments are validated by the registry so failures share the error envelope
    @server.call_tool(validate_input=False)
    async def handle_call_tool(
        name: str, arguments: Optional[Dict[str, Any]]
    ) -> CallToolResult:
        """Handle tool calls for Asana"""
        return await registry.call(name, arguments)

    return server


server = create_server


def get_initialization_options(server_instance: Server) -> InitializationOptions:
    """Get the initialization options for the server"""
    return InitializationOptions(
        server_name=SERVER_NAME,
        server_version=SERVER_VERSION,
        capabilities=server_instance.get_capabilities(
            notification_options=NotificationOptions(),
            experimental_capabilities={},
        ),
    )
