"""Error types raised by the Asana client, classified by upstream status."""

from typing import Any, Dict, Optional

DEFAULT_RETRY_AFTER = 60


class AsanaApiError(Exception):
    """Any non-2xx response from Asana."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.retryable = retryable

    def to_details(self) -> Dict[str, Any]:
        return {"status_code": self.status_code, "retryable": self.retryable}


class AuthenticationError(AsanaApiError):
    """Missing, invalid or insufficient credentials (401/403)."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message, status_code=status_code, retryable=False)


class RateLimitError(AsanaApiError):
    """HTTP 429. Carries the number of seconds Asana asked us to wait."""

    def __init__(self, message: str, retry_after: int = DEFAULT_RETRY_AFTER):
        super().__init__(message, status_code=429, retryable=True)
        self.retry_after = retry_after

    def to_details(self) -> Dict[str, Any]:
        details = super().to_details()
        details["retry_after"] = self.retry_after
        return details


class NotFoundError(AsanaApiError):
    """HTTP 404 for the given resource path."""

    def __init__(self, resource: str, path: str):
        super().__init__(f"{resource} not found: {path}", status_code=404)
        self.resource = resource
        self.path = path

    def to_details(self) -> Dict[str, Any]:
        details = super().to_details()
        details.update({"resource": self.resource, "path": self.path})
        return details


def parse_retry_after(value: Optional[str]) -> int:
    """Seconds from a Retry-After header, or the default when absent or malformed."""
    if value is None:
        return DEFAULT_RETRY_AFTER
    try:
        seconds = int(value.strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER
    return seconds if seconds >= 0 else DEFAULT_RETRY_AFTER


def format_error_for_logging(error: BaseException) -> Dict[str, Any]:
    """Flatten an exception into a dict suitable for a log line."""
    info: Dict[str, Any] = {"name": type(error).__name__, "message": str(error)}
    if isinstance(error, AsanaApiError):
        info["status_code"] = error.status_code
        info["retryable"] = error.retryable
    if isinstance(error, RateLimitError):
        info["retry_after"] = error.retry_after
    return info
