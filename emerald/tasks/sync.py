"""
Floor Service — External order sync (reporting sheet)

Best-effort copy of order state to an external endpoint. Runs as a FastAPI
background task after the engine has committed, so a slow or dead endpoint
never holds the floor lock and never rolls anything back.
"""
import logging
from typing import Any

import httpx

from emerald.core.config import get_settings

logger = logging.getLogger(__name__)


class OrderSync:
    def __init__(self, url: str, timeout: float = 5.0, transport: httpx.AsyncBaseTransport | None = None):
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def push(self, event: str, order: dict[str, Any]) -> bool:
        """POST one order snapshot. Returns False on any failure, never raises."""
        if not self.enabled:
            return False
        try:
            response = await self._get_client().post(self.url, json={"event": event, **order})
            response.raise_for_status()
        except Exception as exc:
            # Sync failures MUST NOT affect order processing
            logger.warning("Order sync for %s (%s) failed: %s", order.get("order_id"), event, exc)
            return False
        return True

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def sync_from_settings() -> OrderSync:
    settings = get_settings()
    return OrderSync(settings.SYNC_URL, timeout=settings.HTTP_TIMEOUT_SECONDS)
