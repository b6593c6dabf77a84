"""Async client for the 0x Swap API."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..config import settings


class ZeroExProvider:
    """Thin wrapper around the 0x allowance-holder quote endpoint."""

    def __init__(
        self,
        *,
        quote_url: Optional[str] = None,
        api_key: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.quote_url = quote_url or settings.zerox_quote_url
        self.api_key = api_key if api_key is not None else settings.zerox_api_key
        self.api_version = api_version or settings.zerox_api_version
        self.timeout_s = timeout_s or settings.quote_timeout_seconds
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"accept": "application/json"}
        if self.api_key:
            headers["0x-api-key"] = self.api_key
            headers["0x-version"] = self.api_version
        return headers

    async def get_quote(self, params: Dict[str, str]) -> httpx.Response:
        """Issue a single GET against the quote endpoint.

        Non-2xx responses raise ``httpx.HTTPStatusError``.
        """
        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
            response = await client.get(self.quote_url, params=params, headers=self._headers())
            response.raise_for_status()
            return response

    def quote_url_for(self, params: Dict[str, Any]) -> str:
        return str(httpx.URL(self.quote_url, params=params))
