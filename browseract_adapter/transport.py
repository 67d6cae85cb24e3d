# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Authenticated HTTP transport.

Stands in for the host's authenticated request helper: resolves the base
URL, injects the bearer header from the stored credential and turns HTTP
failures into TransportError. No retries happen at this layer.
"""

from typing import Any, Dict, Optional

import httpx

from browseract_adapter.core.config import Config, get_config
from browseract_adapter.core.errors import TransportError
from browseract_adapter.core.logging import get_service_logger
from browseract_adapter.credentials import BrowserActApiCredentials

logger = get_service_logger("transport")


class AuthenticatedTransport:
    """
    Thin async wrapper around httpx.AsyncClient.

    Usable as an async context manager; the underlying client is closed
    on exit only when this transport created it.
    """

    def __init__(
        self,
        credentials: BrowserActApiCredentials,
        config: Optional[Config] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the transport.

        Args:
            credentials: API credentials used for the bearer header
            config: Adapter configuration (defaults to the global config)
            client: Pre-built httpx client, mainly for tests
        """
        self.config = config or get_config()
        self.credentials = credentials
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=httpx.Timeout(self.config.http_timeout, connect=5.0)
        )

    async def __aenter__(self) -> "AuthenticatedTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Send an authenticated request and return the parsed JSON body.

        Args:
            method: HTTP method
            url: Endpoint path relative to the base URL
            headers: Extra headers merged under the Authorization header
            json: JSON body
            params: Query string parameters

        Returns:
            Parsed JSON response, or None for an empty body

        Raises:
            TransportError: On non-2xx status or network failure
        """
        merged = {**(headers or {}), **self.credentials.get_authorization_headers()}

        try:
            response = await self.client.request(
                method,
                url,
                headers=merged,
                json=json,
                params=params
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"BrowserAct API error: {method} {url} -> {status}")
            raise TransportError(
                f"BrowserAct API error: {status} - {e.response.text}",
                status_code=status,
                endpoint=url
            )
        except httpx.RequestError as e:
            logger.error(f"BrowserAct API request failed: {method} {url}: {e}")
            raise TransportError(f"BrowserAct API request failed: {e}", endpoint=url)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError:
            raise TransportError(
                f"BrowserAct API returned non-JSON body for {url}",
                status_code=response.status_code,
                endpoint=url
            )
