import logging
import uvicorn
import argparse
from typing import Optional

import httpx
from starlette.routing import Route
from starlette.requests import Request
from starlette.applications import Starlette
from starlette.responses import JSONResponse, PlainTextResponse

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager

from src.auth.factory import create_auth_client
from src.auth.clients.HeaderAuthClient import HeaderAuthClient
from src.servers.asana.main import SERVER_NAME, SERVER_VERSION, create_server
from src.servers.asana.handlers.registry import tool_names
from src.servers.asana.utils.config import ServerConfig
from src.servers.asana.utils.credentials import REQUIRED_HEADERS, validate_credentials
from src.servers.asana.utils.errors import AuthenticationError

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(SERVER_NAME)

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

STATEFUL_DISABLED_MESSAGE = (
    "Stateful mode is not supported for multi-tenant deployments. "
    "Use the stateless /mcp endpoint with X-Asana-Access-Token header instead."
)


class StatefulModeDisabledError(RuntimeError):
    """Raised whenever a long-lived session is requested"""


class StatefulSessionAgent:
    """Placeholder for session-bound serving, which a multi-tenant gateway refuses"""

    def initialize(self):
        raise StatefulModeDisabledError(STATEFUL_DISABLED_MESSAGE)


def capability_document():
    return {
        "name": SERVER_NAME,
        "version": SERVER_VERSION,
        "description": "Multi-tenant Asana MCP Server",
        "endpoints": {
            "mcp": "/mcp (POST) - stateless MCP requests",
            "health": "/health (GET) - health check",
        },
        "authentication": {
            "type": "header",
            "required_headers": REQUIRED_HEADERS,
        },
        "tools": tool_names(),
    }


class MCPEndpoint:
    """ASGI endpoint serving one stateless MCP request per tenant"""

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        config: Optional[ServerConfig] = None,
    ):
        self.transport = transport
        self.config = config
        self.auth_client = create_auth_client(HeaderAuthClient)

    async def __call__(self, scope, receive, send):
        request = Request(scope, receive)
        try:
            credentials = validate_credentials(
                self.auth_client.get_user_credentials(request.headers)
            )
        except AuthenticationError as e:
            logger.info("Rejected MCP request without credentials")
            response = JSONResponse(
                {
                    "error": "Unauthorized",
                    "message": str(e),
                    "required_headers": REQUIRED_HEADERS,
                },
                status_code=401,
            )
            await response(scope, receive, send)
            return

        server_instance = create_server(
            credentials, transport=self.transport, config=self.config
        )
        session_manager = StreamableHTTPSessionManager(
            app=server_instance,
            json_response=True,
            stateless=True,
        )
        async with session_manager.run():
            await session_manager.handle_request(scope, receive, send)


def create_starlette_app(
    transport: Optional[httpx.AsyncBaseTransport] = None,
    config: Optional[ServerConfig] = None,
):
    """Create the Starlette app serving the multi-tenant Asana gateway"""
    routes = []

    async def health_check(request):
        """Health check endpoint"""
        return JSONResponse({"status": "ok", "server": SERVER_NAME})

    async def handle_sse(request):
        return PlainTextResponse(
            "SSE transport is not supported. Use the stateless /mcp endpoint.",
            status_code=501,
        )

    async def handle_info(request):
        return JSONResponse(capability_document())

    routes.append(Route("/health", endpoint=health_check))
    routes.append(Route("/mcp", endpoint=MCPEndpoint(transport, config), methods=["POST"]))
    routes.append(Route("/sse", endpoint=handle_sse, methods=ALL_METHODS))
    routes.append(Route("/{path:path}", endpoint=handle_info, methods=ALL_METHODS))

    app = Starlette(routes=routes)
    return app


def main():
    """Main entry point for the Starlette server"""
    parser = argparse.ArgumentParser(description="Asana MCP Server")
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host for Starlette server"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for Starlette server"
    )

    args = parser.parse_args()

    app = create_starlette_app()
    logger.info(f"Starting Starlette server on {args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
