"""ShipStation (carrier) REST client.

Shipments are page-number paginated and sorted newest first:
  GET {base}/shipments?page=N&pageSize=M&sortBy=ShipDate&sortDir=DESC
  -> {"shipments": [...], "page": N, "pages": total}

ShipStation allows 40 requests per minute, so a fixed delay separates page
requests.
"""

import asyncio
import base64
import logging
from typing import Any

import httpx

from tradeshow.settings import get_settings

logger = logging.getLogger("uvicorn.error")


class ShipStationError(RuntimeError):
    """Transport or HTTP failure talking to ShipStation."""


class ShipStationClient:
    """Client for the ShipStation v1 API."""

    def __init__(
        self,
        api_key: str | None = None,
        api_secret: str | None = None,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        page_delay_seconds: float | None = None,
        timeout: float | None = None,
    ):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.shipstation_api_key
        self.api_secret = api_secret if api_secret is not None else settings.shipstation_api_secret
        self.base_url = (base_url or settings.shipstation_base_url).rstrip("/")
        self.page_delay_seconds = (
            page_delay_seconds if page_delay_seconds is not None else settings.shipstation_page_delay_seconds
        )
        self.timeout = timeout or settings.http_timeout_seconds
        self._http_client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client (only if this instance created it)."""
        if self._http_client and self._owns_client:
            await self._http_client.aclose()
        self._http_client = None

    def _auth_header(self) -> str:
        credentials = base64.b64encode(f"{self.api_key}:{self.api_secret}".encode()).decode()
        return f"Basic {credentials}"

    async def fetch_shipments_page(self, page: int = 1, page_size: int = 500) -> dict[str, Any]:
        """Fetch one page of shipments, newest first."""
        client = await self._get_client()
        try:
            response = await client.get(
                f"{self.base_url}/shipments",
                params={
                    "page": page,
                    "pageSize": page_size,
                    "sortBy": "ShipDate",
                    "sortDir": "DESC",
                },
                headers={
                    "Authorization": self._auth_header(),
                    "Content-Type": "application/json",
                },
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ShipStationError(
                f"ShipStation API error: {e.response.status_code} - {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise ShipStationError(f"ShipStation network error: {e}") from e
        except ValueError as e:
            raise ShipStationError("ShipStation returned invalid JSON") from e

        if not isinstance(data, dict):
            raise ShipStationError(f"Unexpected ShipStation payload: {type(data).__name__}")
        return data

    async def fetch_all_shipments(self, page_size: int = 500, max_pages: int = 20) -> list[dict[str, Any]]:
        """Fetch shipments page by page until `pages` is exhausted or `max_pages` is hit."""
        shipments: list[dict[str, Any]] = []
        page = 1
        total_pages = 1

        logger.info("Fetching shipments from ShipStation...")

        while page <= total_pages and page <= max_pages:
            if page > 1 and self.page_delay_seconds:
                await asyncio.sleep(self.page_delay_seconds)

            data = await self.fetch_shipments_page(page=page, page_size=page_size)
            batch = data.get("shipments")
            if isinstance(batch, list):
                shipments.extend(batch)
                total_pages = int(data.get("pages") or 1)
                logger.info(f"  Page {page}/{total_pages}: fetched {len(batch)} shipments (total: {len(shipments)})")
            page += 1

        if total_pages > max_pages:
            logger.warning(f"Stopped shipment fetch at {max_pages} of {total_pages} pages")

        return shipments
