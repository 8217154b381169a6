import logging
from typing import Mapping, Optional

from src.auth.clients.BaseAuthClient import BaseAuthClient
from src.servers.asana.utils.credentials import TenantCredentials, parse_tenant_credentials

logger = logging.getLogger("header-auth-client")


class HeaderAuthClient(BaseAuthClient[Mapping[str, str]]):
    """Reads tenant credentials from inbound HTTP request headers"""

    def get_user_credentials(
        self, source: Optional[Mapping[str, str]] = None
    ) -> TenantCredentials:
        credentials = parse_tenant_credentials(source or {})
        if credentials.access_token is None:
            logger.debug("No access token header present on request")
        return credentials
