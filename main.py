#!/usr/bin/env python3
"""
Main entry point for the Asana MCP Server.
This script can launch the server in either local (stdio) or remote (HTTP) mode.
"""

import argparse
import asyncio
import logging
import sys

# Configure logging for the main script
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("asana-server-main")


def main():
    """Parse arguments and launch the appropriate server mode"""
    parser = argparse.ArgumentParser(description="Asana MCP Server")
    parser.add_argument(
        "--mode",
        choices=["stdio", "http"],
        default="http",
        help="Server mode: http (default, multi-tenant) or stdio (single account)"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host for the HTTP server (only used in http mode)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for the HTTP server (only used in http mode)"
    )

    args = parser.parse_args()

    if args.mode == "stdio":
        logger.info("Starting server in stdio mode")
        from src.local import main as local_main
        asyncio.run(local_main())
    else:
        logger.info(f"Starting server in HTTP mode on {args.host}:{args.port}")
        from src.remote import main as remote_main
        # Pass the CLI arguments to the remote server
        sys.argv = [sys.argv[0], "--host", args.host, "--port", str(args.port)]
        remote_main()


if __name__ == "__main__":
    main()
