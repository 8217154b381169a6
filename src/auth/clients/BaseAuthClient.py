import abc
from typing import Any, Generic, Optional, TypeVar

# Generic type to represent the raw credential source (headers, environment, ...)
SourceT = TypeVar("SourceT")


class BaseAuthClient(Generic[SourceT], abc.ABC):
    """
    Abstract base class for authentication clients.
    Each client knows how to pull tenant credentials out of one kind of source.
    """

    @abc.abstractmethod
    def get_user_credentials(self, source: Optional[SourceT] = None) -> Any:
        """
        Retrieves tenant credentials from a source

        Args:
            source: Where to read credentials from (request headers, environment mapping)

        Returns:
            A TenantCredentials object; the token may be None if absent
        """
        pass
