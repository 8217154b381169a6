#!/usr/bin/env python3
"""
Local stdio server for a single Asana account.
The token is read from ASANA_ACCESS_TOKEN instead of request headers.
"""

import sys
import asyncio
import logging

import mcp.server.stdio

from src.auth.factory import create_auth_client
from src.auth.clients.EnvironmentAuthClient import EnvironmentAuthClient
from src.servers.asana.main import create_server, get_initialization_options
from src.servers.asana.utils.credentials import validate_credentials
from src.servers.asana.utils.errors import AuthenticationError

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("asana-local-stdio")


async def run_stdio_server(server):
    """Run the server using stdin/stdout streams"""
    logger.info("Starting stdio server")
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            get_initialization_options(server),
        )


async def main():
    """Main entry point for the stdio server"""
    auth_client = create_auth_client(EnvironmentAuthClient)
    try:
        credentials = validate_credentials(auth_client.get_user_credentials())
    except AuthenticationError:
        logger.error(f"Set {auth_client.env_var} to run the local server")
        sys.exit(1)

    await run_stdio_server(create_server(credentials))


if __name__ == "__main__":
    asyncio.run(main())
