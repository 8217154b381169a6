from .client import AsanaClient, CLEAR, create_asana_client
from .config import ServerConfig, load_config
from .credentials import TenantCredentials, parse_tenant_credentials, validate_credentials
from .errors import (
    AsanaApiError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    format_error_for_logging,
)
from .formatters import format_error, format_response, truncate

__all__ = [
    'AsanaClient', 'CLEAR', 'create_asana_client',
    'ServerConfig', 'load_config',
    'TenantCredentials', 'parse_tenant_credentials', 'validate_credentials',
    'AsanaApiError', 'AuthenticationError', 'NotFoundError', 'RateLimitError',
    'format_error_for_logging',
    'format_error', 'format_response', 'truncate',
]
