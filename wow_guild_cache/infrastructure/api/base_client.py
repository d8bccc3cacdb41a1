"""
Base API Client

Base implementation for API clients with common functionality.
"""

import logging
import asyncio
from typing import Optional, Dict, Any
from abc import ABC, abstractmethod

import httpx
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type
)

from ...core.exceptions import APIError

logger = logging.getLogger(__name__)


class BaseAPIClient(ABC):
    """Base API client with common functionality."""

    def __init__(
        self,
        timeout: int = 30,
        max_retries: int = 3,
        rate_limit: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize base API client.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum number of attempts on network errors
            rate_limit: Max concurrent requests
            transport: Optional httpx transport (tests, proxies)
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.rate_limit = rate_limit
        self.transport = transport

        self._client: Optional[httpx.AsyncClient] = None
        self._rate_limiter: Optional[asyncio.Semaphore] = None

        if rate_limit:
            self._rate_limiter = asyncio.Semaphore(rate_limit)

    async def __aenter__(self):
        """Enter async context."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context."""
        await self.close()

    async def initialize(self) -> None:
        """Initialize HTTP client."""
        if not self._client:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers=self._get_default_headers(),
                transport=self.transport
            )
            logger.info(f"API client initialized ({self.__class__.__name__})")

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("API client closed")

    @abstractmethod
    def _get_default_headers(self) -> Dict[str, str]:
        """Get default headers for requests."""
        pass

    async def _make_request(
        self,
        method: str,
        url: str,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request, retrying timeouts and network errors.

        Args:
            method: HTTP method
            url: Absolute request URL
            **kwargs: Additional request arguments

        Returns:
            HTTP response

        Raises:
            APIError: the server answered with an error status
        """
        if not self._client:
            await self.initialize()

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=4, max=10),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
            reraise=True
        )
        async for attempt in retrying:
            with attempt:
                if self._rate_limiter:
                    async with self._rate_limiter:
                        return await self._execute_request(method, url, **kwargs)
                return await self._execute_request(method, url, **kwargs)

    async def _execute_request(
        self,
        method: str,
        url: str,
        **kwargs
    ) -> httpx.Response:
        """Execute the actual HTTP request."""
        logger.debug(f"{method} {url}")

        response = await self._client.request(
            method=method,
            url=url,
            **kwargs
        )

        if response.is_error:
            logger.warning(
                f"API request to {url} failed: {response.status_code}"
            )
            raise APIError(
                f"API request failed: {response.status_code}",
                status_code=response.status_code,
                endpoint=str(response.request.url.copy_with(query=None)),
                body=response.text
            )
        return response

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """Make GET request and decode the JSON body."""
        response = await self._make_request(
            "GET",
            url,
            params=params,
            headers=headers
        )
        return response.json()
