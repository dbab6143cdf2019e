"""HTTP client for the health app backend.

Thin wrapper over httpx.AsyncClient with the backend's base URL, a
request timeout and JSON headers. Non-2xx responses raise
httpx.HTTPStatusError, whose `response.status_code` is what the retry
layer classifies.
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 15.0
DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

class ApiClient:
    """Async JSON client bound to one backend base URL."""

    def __init__(
        self,
        base_url: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initializes the ApiClient.

        Args:
            base_url: Backend root, e.g. https://api.example.com.
            timeout_s: Per-request timeout in seconds.
            token: Optional bearer token sent as the Authorization header.
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests).
        """
        headers = dict(DEFAULT_HEADERS)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout_s, headers=headers, transport=transport
        )
        logger.info(f"ApiClient initialized: base_url={base_url}, timeout={timeout_s}s, auth={'yes' if token else 'no'}")

    async def request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        """Sends a request and decodes the JSON body.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response.
            httpx.RequestError: On transport failures (no status code).
        """
        logger.debug(f"{method} {path}")
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            logger.error(f"API error: {method} {response.request.url} -> {response.status_code}")
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    async def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request_json("GET", path, params=params)

    async def post_json(self, path: str, payload: Any) -> Any:
        return await self.request_json("POST", path, json=payload)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
