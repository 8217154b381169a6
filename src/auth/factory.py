import os
import logging
from typing import Optional, TypeVar, Type

from src.auth.clients.BaseAuthClient import BaseAuthClient

logger = logging.getLogger("auth-factory")

T = TypeVar("T", bound=BaseAuthClient)


def create_auth_client(client_type: Optional[Type[T]] = None) -> BaseAuthClient:
    """
    Factory function to create the appropriate auth client based on environment

    Args:
        client_type: Optional specific client class to instantiate

    Returns:
        An instance of the appropriate BaseAuthClient implementation
    """
    # If client_type is specified, use it directly
    if client_type:
        return client_type()

    # Otherwise, determine from environment
    environment = os.environ.get("ENVIRONMENT", "remote").lower()

    if environment == "local":
        from src.auth.clients.EnvironmentAuthClient import EnvironmentAuthClient

        logger.info("Using environment auth client")
        return EnvironmentAuthClient()

    # Default to per-request header auth
    from src.auth.clients.HeaderAuthClient import HeaderAuthClient

    return HeaderAuthClient()
