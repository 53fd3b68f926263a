"""ApparelMagic (ERP) REST client.

Auth is not a header: every request carries `time` (unix seconds) and
`token` (API key) as query parameters.

Collections are cursor-paginated:
  GET {base}/{entity}?pagination[page_size]=N&pagination[last_id]=<cursor>
  -> {"response": [...], "meta": {"pagination": {"last_id": "..."}}}

A page without meta.pagination.last_id is the last one. Callers also pass a
hard page ceiling, so very large collections can be truncated; a warning is
logged when that happens.
"""

from dataclasses import dataclass
import logging
import time
from typing import Any

import httpx

from tradeshow.settings import get_settings

logger = logging.getLogger("uvicorn.error")


class ApparelMagicError(RuntimeError):
    """Transport or HTTP failure talking to ApparelMagic."""


@dataclass
class ErpPage:
    """One page of an ERP collection."""

    records: list[dict[str, Any]]
    next_cursor: str | None


class ApparelMagicClient:
    """Client for the ApparelMagic JSON API."""

    USER_AGENT = "TradeShowPortal/1.0"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        """Initialize client.

        Args:
            api_key: ERP API token (defaults to settings).
            base_url: API root, e.g. https://<tenant>.app.apparelmagic.com/api/json.
            http_client: Pre-built client (tests inject one with a MockTransport).
            timeout: Request timeout in seconds.
        """
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.apparelmagic_api_key
        self.base_url = (base_url or settings.apparelmagic_base_url).rstrip("/")
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

    def _auth_params(self) -> dict[str, str]:
        return {"time": str(int(time.time())), "token": self.api_key}

    async def _get(self, path: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """GET a path with auth params; raises ApparelMagicError on any failure."""
        query = self._auth_params()
        if params:
            query.update(params)
        client = await self._get_client()
        try:
            response = await client.get(
                f"{self.base_url}/{path.lstrip('/')}",
                params=query,
                headers={"User-Agent": self.USER_AGENT},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ApparelMagicError(
                f"ApparelMagic API error {e.response.status_code} for {path}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise ApparelMagicError(f"ApparelMagic network error for {path}: {e}") from e
        except ValueError as e:
            raise ApparelMagicError(f"ApparelMagic returned invalid JSON for {path}") from e

        if not isinstance(data, dict):
            raise ApparelMagicError(f"Unexpected ApparelMagic payload for {path}: {type(data).__name__}")
        return data

    async def fetch_page(self, entity: str, page_size: int, last_id: str | None = None) -> ErpPage:
        """Fetch one page of an entity collection."""
        params = {"pagination[page_size]": str(page_size)}
        if last_id:
            params["pagination[last_id]"] = last_id

        data = await self._get(entity, params)
        records = data.get("response")
        if not isinstance(records, list):
            records = []

        cursor = None
        meta = data.get("meta")
        if isinstance(meta, dict) and isinstance(meta.get("pagination"), dict):
            cursor = meta["pagination"].get("last_id")
        return ErpPage(records=records, next_cursor=str(cursor) if cursor else None)

    async def fetch_all(self, entity: str, page_size: int, max_pages: int) -> list[dict[str, Any]]:
        """Fetch every page of an entity collection, up to `max_pages`.

        Args:
            entity: Collection path, e.g. "customers", "orders".
            page_size: Records per page.
            max_pages: Hard ceiling on pages fetched.

        Returns:
            All records in fetch order.
        """
        records: list[dict[str, Any]] = []
        last_id: str | None = None
        page_count = 0

        logger.info(f"Fetching all {entity} from ApparelMagic (page_size={page_size}, max_pages={max_pages})")

        while page_count < max_pages:
            page = await self.fetch_page(entity, page_size=page_size, last_id=last_id)
            page_count += 1
            records.extend(page.records)
            logger.info(f"  Page {page_count}: fetched {len(page.records)} {entity} (total: {len(records)})")

            if not page.records or not page.next_cursor:
                break
            last_id = page.next_cursor
        else:
            logger.warning(f"Stopped {entity} fetch at {max_pages} pages; collection may be truncated")

        return records

    async def get_product_skus(self, product_id: str) -> list[dict[str, Any]]:
        """Fetch the SKUs (size x color variants) of a product."""
        data = await self._get(f"products/{product_id}/skus")
        skus = data.get("response")
        return skus if isinstance(skus, list) else []

    async def get_colorway_images(self, product_id: str) -> list[str]:
        """Collect image URLs from every colorway of a product."""
        data = await self._get("product_attributes", {"product_id": product_id})
        colorways = data.get("response")
        if not isinstance(colorways, list):
            return []

        urls: list[str] = []
        for colorway in colorways:
            if not isinstance(colorway, dict):
                continue
            for image in colorway.get("images") or []:
                if isinstance(image, dict) and image.get("img"):
                    urls.append(image["img"])
        return urls
