"""
Authentication header provider interface.

The submissions repository does not manage credentials. It asks an
AuthHeaderProvider for headers before every request. Implementations
(static token, refreshed OAuth token, etc.) should inherit from it.
"""

from abc import ABC, abstractmethod
from typing import Dict


class AuthHeaderProvider(ABC):
    """
    Abstract base class for auth header providers.

    This allows the client to work with any token source by
    implementing this interface.
    """

    @abstractmethod
    async def get_headers(self) -> Dict[str, str]:
        """
        Produce headers for one authenticated request.

        Returns:
            Mapping of header name to value, e.g. {"Authorization": "Bearer ..."}

        Raises:
            AuthFailure: if no valid credentials are available
        """
        pass
