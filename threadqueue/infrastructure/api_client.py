# threadqueue/infrastructure/api_client.py
import os
import httpx
import random
from typing import List, Optional
import structlog

logger = structlog.get_logger(__name__)

POSTS_API_URL = os.getenv("POSTS_API_URL", "http://localhost:8000")
POSTS_API_TIMEOUT = float(os.getenv("POSTS_API_TIMEOUT", "30"))
POSTS_API_PROXIES = [p.strip() for p in os.getenv("POSTS_API_PROXIES", "").split(",") if p.strip()]


class ApiClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProxyManager:
    def __init__(self, proxies: Optional[List[str]] = None):
        self.proxies = proxies or []

    def pick(self) -> Optional[str]:
        if not self.proxies:
            return None
        return random.choice(self.proxies)


class ApiClient:
    """
    Thin JSON client for the posts API. A fresh httpx.AsyncClient is opened per call;
    transport errors and non-2xx responses are raised as ApiClientError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        proxy_manager: Optional[ProxyManager] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or POSTS_API_URL).rstrip("/")
        self.proxy_manager = proxy_manager or ProxyManager(POSTS_API_PROXIES)
        self.timeout = timeout if timeout is not None else POSTS_API_TIMEOUT
        self.transport = transport

    async def get(self, path, params=None):
        return await self._request("GET", path, params=params)

    async def post(self, path, json=None):
        return await self._request("POST", path, json=json)

    async def put(self, path, json=None):
        return await self._request("PUT", path, json=json)

    async def _request(self, method: str, path: str, **kwargs):
        proxy = self.proxy_manager.pick()
        url = f"{self.base_url}{path}"
        async with httpx.AsyncClient(proxy=proxy, timeout=self.timeout, transport=self.transport) as client:
            try:
                r = await client.request(method, url, **kwargs)
            except httpx.HTTPError as exc:
                logger.warning("api_request_failed", method=method, url=url, error=str(exc))
                raise ApiClientError(f"{method} {path} failed: {exc}") from exc

        if r.status_code >= 400:
            logger.warning("api_request_rejected", method=method, url=url, status=r.status_code)
            raise ApiClientError(f"{method} {path} returned {r.status_code}: {r.text}", status_code=r.status_code)
        if not r.content:
            return {}
        return r.json()
