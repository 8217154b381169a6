import os
import logging
from typing import Mapping, Optional

from src.auth.clients.BaseAuthClient import BaseAuthClient
from src.servers.asana.utils.credentials import TenantCredentials

logger = logging.getLogger("environment-auth-client")

ACCESS_TOKEN_ENV = "ASANA_ACCESS_TOKEN"


class EnvironmentAuthClient(BaseAuthClient[Mapping[str, str]]):
    """Reads a single tenant's token from the process environment (local stdio use)"""

    def __init__(self, env_var: str = ACCESS_TOKEN_ENV):
        self.env_var = env_var

    def get_user_credentials(
        self, source: Optional[Mapping[str, str]] = None
    ) -> TenantCredentials:
        environ = os.environ if source is None else source
        token = environ.get(self.env_var) or None
        if token is None:
            logger.warning(f"{self.env_var} is not set")
        return TenantCredentials(access_token=token)
