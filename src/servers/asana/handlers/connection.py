import json
import logging

from src.servers.asana.handlers.common import ToolArgs
from src.servers.asana.handlers.registry import ToolSpec

logger = logging.getLogger("asana-tools")


async def handle_test_connection(ctx, args: ToolArgs):
    """Round-trip to /users/me to prove the token works"""
    try:
        user = await ctx.client.get_me()
    except Exception as e:
        logger.warning(f"Connection test failed: {e}")
        payload = {"connected": False, "message": str(e) or "Connection failed"}
        return json.dumps(payload, indent=2)

    email = user.get("email") or "no email"
    payload = {
        "connected": True,
        "message": f"Connected as {user.get('name')} ({email})",
        "user": user,
    }
    return json.dumps(payload, indent=2, default=str)


TOOLS = [
    ToolSpec(
        name="asana_test_connection",
        description="Check that the supplied Asana access token works.",
        arguments=ToolArgs,
        handler=handle_test_connection,
    ),
]
