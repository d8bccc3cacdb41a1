"""
Blizzard OAuth2 Service

Handles OAuth2 client-credentials authentication for Blizzard API.
"""

import logging
from typing import Dict, Any, Optional
from datetime import datetime, timedelta

import httpx

from ....core.exceptions import APIError

logger = logging.getLogger(__name__)


class BlizzardOAuthService:
    """Blizzard OAuth2 token provider with in-memory caching."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        oauth_url: str = "https://oauth.battle.net/token",
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize OAuth service.

        Args:
            client_id: Blizzard API client ID
            client_secret: Blizzard API client secret
            oauth_url: Token endpoint
            transport: Optional httpx transport
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.oauth_url = oauth_url
        self.transport = transport

        self._token_cache: Optional[Dict[str, Any]] = None
        self._token_expires: Optional[datetime] = None

    async def get_access_token(self) -> str:
        """
        Get OAuth2 access token, reusing the cached one until it expires.

        Returns:
            Bearer token
        """
        if self._token_cache and self._token_expires:
            if datetime.now() < self._token_expires:
                logger.debug("Using cached OAuth token")
                return self._token_cache["access_token"]

        logger.info("Fetching new OAuth token")

        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.post(
                self.oauth_url,
                data={"grant_type": "client_credentials"},
                auth=(self.client_id, self.client_secret),
                timeout=10.0
            )

        if response.is_error:
            raise APIError(
                f"Failed to get access token: {response.status_code}",
                status_code=response.status_code,
                endpoint=self.oauth_url,
                body=response.text
            )

        token_data = response.json()
        self._token_cache = token_data
        expires_in = token_data.get("expires_in", 86400)
        # Set expiration with 5 minute buffer
        self._token_expires = datetime.now() + timedelta(
            seconds=max(expires_in - 300, 0)
        )

        logger.info(f"OAuth token obtained, expires in {expires_in} seconds")
        return token_data["access_token"]

    def clear_cache(self) -> None:
        """Clear cached token."""
        self._token_cache = None
        self._token_expires = None
        logger.debug("OAuth cache cleared")
