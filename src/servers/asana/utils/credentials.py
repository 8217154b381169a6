"""
Tenant credential extraction.

A tenant is identified solely by the Asana Personal Access Token sent with
each request. Credentials live for one request and are never stored.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import AuthenticationError

ACCESS_TOKEN_HEADER = "X-Asana-Access-Token"
REQUIRED_HEADERS = [ACCESS_TOKEN_HEADER]

MISSING_CREDENTIALS_MESSAGE = (
    "Missing credentials. Provide X-Asana-Access-Token header "
    "with your Asana Personal Access Token."
)


@dataclass(frozen=True)
class TenantCredentials:
    access_token: Optional[str] = None

    def __repr__(self) -> str:
        # Never leak the token into logs
        masked = "***" if self.access_token else None
        return f"TenantCredentials(access_token={masked!r})"


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def parse_tenant_credentials(headers: Mapping[str, str]) -> TenantCredentials:
    """Pull the access token out of request headers. Absent header gives a None token."""
    token = _get_header(headers, ACCESS_TOKEN_HEADER)
    return TenantCredentials(access_token=token or None)


def validate_credentials(credentials: TenantCredentials) -> TenantCredentials:
    """Raise AuthenticationError unless a non-empty token is present."""
    if not credentials.access_token or not credentials.access_token.strip():
        raise AuthenticationError(MISSING_CREDENTIALS_MESSAGE)
    return credentials
