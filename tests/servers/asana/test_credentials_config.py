import pytest
from unittest.mock import patch

from src.auth.clients.EnvironmentAuthClient import EnvironmentAuthClient
from src.auth.clients.HeaderAuthClient import HeaderAuthClient
from src.auth.factory import create_auth_client
from src.servers.asana.utils.config import ServerConfig, load_config
from src.servers.asana.utils.credentials import (
    MISSING_CREDENTIALS_MESSAGE,
    TenantCredentials,
    parse_tenant_credentials,
    validate_credentials,
)
from src.servers.asana.utils.errors import (
    AuthenticationError,
    RateLimitError,
    format_error_for_logging,
    parse_retry_after,
)


def test_header_lookup_is_case_insensitive():
    credentials = parse_tenant_credentials({"x-asana-access-token": "abc"})
    assert credentials.access_token == "abc"


def test_missing_header_gives_no_token():
    assert parse_tenant_credentials({}).access_token is None


@pytest.mark.parametrize("token", [None, "", "   "])
def test_validate_rejects_blank_tokens(token):
    with pytest.raises(AuthenticationError) as exc_info:
        validate_credentials(TenantCredentials(access_token=token))
    assert str(exc_info.value) == MISSING_CREDENTIALS_MESSAGE
    assert exc_info.value.status_code == 401


def test_repr_masks_token():
    assert "secret" not in repr(TenantCredentials(access_token="secret"))


def test_header_auth_client():
    client = HeaderAuthClient()
    assert client.get_user_credentials({"X-Asana-Access-Token": "t"}).access_token == "t"
    assert client.get_user_credentials().access_token is None


def test_environment_auth_client():
    client = EnvironmentAuthClient()
    assert client.get_user_credentials({"ASANA_ACCESS_TOKEN": "env-token"}).access_token == "env-token"
    assert client.get_user_credentials({}).access_token is None


def test_factory_defaults_to_headers():
    with patch.dict("os.environ", {}, clear=True):
        assert isinstance(create_auth_client(), HeaderAuthClient)


def test_factory_local_environment():
    with patch.dict("os.environ", {"ENVIRONMENT": "local"}):
        assert isinstance(create_auth_client(), EnvironmentAuthClient)


def test_factory_explicit_type():
    assert isinstance(create_auth_client(EnvironmentAuthClient), EnvironmentAuthClient)


def test_config_defaults():
    assert load_config({}) == ServerConfig(
        character_limit=50000, default_page_size=20, max_page_size=100, timeout=30.0
    )


def test_config_overrides():
    config = load_config(
        {"CHARACTER_LIMIT": "1000", "DEFAULT_PAGE_SIZE": "5", "MAX_PAGE_SIZE": "50", "ASANA_TIMEOUT": "2.5"}
    )
    assert config == ServerConfig(character_limit=1000, default_page_size=5, max_page_size=50, timeout=2.5)


def test_config_invalid_values_fall_back():
    config = load_config({"CHARACTER_LIMIT": "lots", "ASANA_TIMEOUT": "-1"})
    assert config.character_limit == 50000
    assert config.timeout == 30.0


@pytest.mark.parametrize(
    "value, expected",
    [(None, 60), ("12", 12), (" 3 ", 3), ("soon", 60), ("-5", 60), ("0", 0)],
)
def test_parse_retry_after(value, expected):
    assert parse_retry_after(value) == expected


def test_format_error_for_logging():
    info = format_error_for_logging(RateLimitError("Rate limit exceeded", retry_after=9))
    assert info == {
        "name": "RateLimitError",
        "message": "Rate limit exceeded",
        "status_code": 429,
        "retryable": True,
        "retry_after": 9,
    }
    assert format_error_for_logging(ValueError("x")) == {"name": "ValueError", "message": "x"}
