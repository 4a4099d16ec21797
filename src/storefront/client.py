"""
Catalog Client - the single network dependency of the storefront.

Issues one HTTP GET against the catalog endpoint and decodes the
response into a CatalogSnapshot.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from common.exceptions import CatalogFetchError, CatalogDecodeError

from .config import StoreConfig
from .models import CatalogSnapshot

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    HTTP client for the catalog endpoint.

    Constructed once by the session and handed to the CatalogStore.
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize CatalogClient.

        Args:
            config: Store configuration (endpoint, timeout, user agent)
            transport: Custom httpx transport, mainly for tests
        """
        self.config = config or StoreConfig()
        self._transport = transport

    @property
    def url(self) -> str:
        return self.config.catalog_url

    async def fetch(self) -> CatalogSnapshot:
        """
        Fetch and decode the catalog.

        Returns:
            The decoded snapshot, whatever its success flag.

        Raises:
            CatalogFetchError: On transport failure or a non-2xx status
            CatalogDecodeError: If the body is not a catalog document
        """
        logger.debug(f"GET {self.url}")

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.config.request_timeout,
                headers={
                    "Accept": "application/json",
                    "User-Agent": self.config.user_agent,
                },
                follow_redirects=True,
            ) as http:
                response = await http.get(self.url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CatalogFetchError(
                self.url, f"HTTP {e.response.status_code}", cause=e
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise CatalogFetchError(self.url, str(e) or type(e).__name__, cause=e) from e

        # ValueError covers malformed JSON, bad encodings and oversized integers
        try:
            data = response.json()
        except (ValueError, RecursionError) as e:
            raise CatalogDecodeError("response is not valid JSON", cause=e) from e

        return CatalogSnapshot.from_dict(data)
