import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger("asana-config")

DEFAULT_CHARACTER_LIMIT = 50000
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ServerConfig:
    character_limit: int = DEFAULT_CHARACTER_LIMIT
    default_page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE
    timeout: float = DEFAULT_TIMEOUT


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default


def _timeout_setting(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    return value if value > 0 else default


def load_config(environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
    """Read server settings from the environment"""
    environ = os.environ if environ is None else environ
    return ServerConfig(
        character_limit=_int_setting(environ, "CHARACTER_LIMIT", DEFAULT_CHARACTER_LIMIT),
        default_page_size=_int_setting(environ, "DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        max_page_size=_int_setting(environ, "MAX_PAGE_SIZE", MAX_PAGE_SIZE),
        timeout=_timeout_setting(environ, "ASANA_TIMEOUT", DEFAULT_TIMEOUT),
    )
