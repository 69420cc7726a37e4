"""
Bearer-token auth provider.

Uses a token obtained elsewhere (login screen, environment) as-is.
"""

import logging
from typing import Dict

from auth.base import AuthHeaderProvider
from core.errors import AuthFailure

logger = logging.getLogger(__name__)


class StaticTokenAuthProvider(AuthHeaderProvider):
    """Sends the same bearer token with every request."""

    def __init__(self, token: str):
        self.token = (token or "").strip()

    async def get_headers(self) -> Dict[str, str]:
        if not self.token:
            logger.warning("No API token configured, request will not be authenticated")
            raise AuthFailure("No API token available")
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
