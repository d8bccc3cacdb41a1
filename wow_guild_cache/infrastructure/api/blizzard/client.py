"""
Blizzard API Client

Fetches guild profiles from the Battle.net profile API.
"""

import logging
from typing import Optional, Dict, Any
from urllib.parse import quote

import httpx

from ....core.config import APIConfig
from ....core.exceptions import APIError, ConfigurationError, RegionNotSupportedError
from ....core.protocols import GuildAPIClientProtocol
from ..base_client import BaseAPIClient
from .oauth import BlizzardOAuthService

logger = logging.getLogger(__name__)


def slugify(value: str) -> str:
    """Blizzard-style slug: lower-case, hyphenated, URL-safe."""
    slug = value.strip().lower().replace("'", "").replace(" ", "-")
    return quote(slug, safe="-")


class BlizzardAPIClient(BaseAPIClient, GuildAPIClientProtocol):
    """Blizzard API client with OAuth2 authentication."""

    def __init__(
        self,
        config: APIConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize Blizzard API client.

        Args:
            config: API credentials and transport settings
            transport: Optional httpx transport shared with the OAuth call
        """
        if not config.client_id or not config.client_secret:
            raise ConfigurationError(
                "BLIZZARD_CLIENT_ID and BLIZZARD_CLIENT_SECRET must be set",
                config_key="BLIZZARD_CLIENT_ID"
            )

        super().__init__(
            timeout=config.timeout,
            max_retries=config.max_retries,
            rate_limit=config.rate_limit,
            transport=transport
        )

        self.locale = config.locale
        self.unsupported_regions = frozenset(config.unsupported_regions)
        self.oauth_service = BlizzardOAuthService(
            client_id=config.client_id,
            client_secret=config.client_secret,
            oauth_url=config.oauth_url,
            transport=transport
        )

    def _get_default_headers(self) -> Dict[str, str]:
        """Get default headers for requests."""
        return {
            "Accept": "application/json",
        }

    @staticmethod
    def base_url_for(region: str) -> str:
        """API host for a region."""
        return f"https://{region}.api.blizzard.com"

    async def _authorized_get(
        self,
        url: str,
        params: Dict[str, Any]
    ) -> Dict[str, Any]:
        token = await self.oauth_service.get_access_token()
        try:
            return await self.get(
                url,
                params=params,
                headers={"Authorization": f"Bearer {token}"}
            )
        except APIError as e:
            if e.status_code != 401:
                raise
            # Token revoked early; refresh once
            logger.warning("Got 401 Unauthorized, refreshing token")
            self.oauth_service.clear_cache()
            token = await self.oauth_service.get_access_token()
            return await self.get(
                url,
                params=params,
                headers={"Authorization": f"Bearer {token}"}
            )

    async def fetch_guild(
        self,
        region: str,
        realm: str,
        name: str
    ) -> Dict[str, Any]:
        """
        Get guild profile.

        Raises:
            RegionNotSupportedError: before any request, for blocked regions
            APIError: on upstream error statuses
        """
        region = region.lower()
        if region in self.unsupported_regions:
            raise RegionNotSupportedError(region)

        url = f"{self.base_url_for(region)}/data/wow/guild/{slugify(realm)}/{slugify(name)}"
        params = {
            "namespace": f"profile-{region}",
            "locale": self.locale
        }

        logger.info(f"Fetching guild {name} on {realm} ({region.upper()})")
        return await self._authorized_get(url, params)
