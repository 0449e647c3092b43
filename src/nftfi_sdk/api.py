"""
HTTP client for the NFTfi REST API.
"""

import logging
from typing import Any, Dict, Optional
import httpx

from .config import ApiConfig
from .types import ApiError

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin async wrapper over the REST API"""

    API_KEY_HEADER = "X-API-KEY"

    def __init__(self, config: ApiConfig, timeout: float = 30.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        headers = {"Accept": "application/json"}
        if config.key:
            headers[self.API_KEY_HEADER] = config.key
        self._client = httpx.AsyncClient(
            base_url=config.base_uri,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def get(self, uri: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        GET a resource.

        Args:
            uri: Path relative to the API base URI, e.g. ``v0.1/loans``
            params: Query parameters; ``None`` values are dropped

        Returns:
            Decoded JSON body

        Raises:
            ApiError: On transport failure, non-2xx status or a non-JSON body
        """
        query = {key: value for key, value in (params or {}).items() if value is not None}
        try:
            response = await self._client.get(uri, params=query)
        except httpx.HTTPError as e:
            logger.error(f"Request to {uri} failed: {e}")
            raise ApiError(f"Request to {uri} failed: {e}")

        if response.status_code >= 300:
            logger.error(f"API error on {uri}: {response.status_code}")
            raise ApiError(
                f"{uri} returned status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            raise ApiError(f"{uri} returned a non-JSON body", status_code=response.status_code)

    async def close(self):
        """Close HTTP client"""
        await self._client.aclose()
