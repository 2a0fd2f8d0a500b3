"""
Movement Catalog Client

PURPOSE
-------
- Fetch the movement dictionary (name, aliases, default reps) from the
  movement catalog over HTTP
- Hand it to the parser as MovementEntry records

USAGE
-----
    client = MovementCatalogClient()
    workout = await parse_text_with_dictionary(text, client.fetch_movements)

The catalog may answer with a bare JSON array, {"movements": [...]}, or a
paginated {"results": [...], "next": "<url>"} envelope.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from wod_parser.config import settings
from wod_parser.parsers.models import MovementEntry
from wod_parser.services.retry import DEFAULT_MAX_WAIT_SECONDS, DEFAULT_MIN_WAIT_SECONDS, retry_async_call

logger = logging.getLogger(__name__)

# Upper bound on pages followed for one fetch
MAX_PAGES = 50


class MovementCatalogError(RuntimeError):
    """Raised when the movement dictionary cannot be fetched."""


class MovementCatalogClient:
    """Async client for the movement catalog"""

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
        max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.MOVEMENT_CATALOG_URL
        self.api_key = api_key or settings.MOVEMENT_CATALOG_API_KEY
        self.timeout = timeout if timeout is not None else settings.MOVEMENT_CATALOG_TIMEOUT
        self.max_attempts = max_attempts or settings.MOVEMENT_CATALOG_MAX_ATTEMPTS
        self.min_wait_seconds = min_wait_seconds
        self.max_wait_seconds = max_wait_seconds
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def fetch_movements(self) -> List[MovementEntry]:
        """
        Fetch every movement from the catalog.

        Returns:
            Movement entries in catalog order; rows that fail validation are skipped

        Raises:
            MovementCatalogError: If no catalog URL is configured, or the
                catalog is unreachable after retries
        """
        if not self.url:
            raise MovementCatalogError("MOVEMENT_CATALOG_URL is not configured")

        try:
            rows = await self._fetch_all_rows()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch movement catalog: {e}")
            raise MovementCatalogError(f"Failed to fetch movement catalog: {e}") from e
        except ValueError as e:
            logger.error(f"Movement catalog returned invalid JSON: {e}")
            raise MovementCatalogError(f"Movement catalog returned invalid JSON: {e}") from e

        movements = []
        for row in rows:
            try:
                movements.append(MovementEntry.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping invalid movement row {row!r}: {e.error_count()} errors")

        logger.info(f"Fetched {len(movements)} movements from catalog")
        return movements

    async def _fetch_all_rows(self) -> List[Any]:
        rows: List[Any] = []
        url: Optional[str] = self.url

        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._headers(),
            transport=self.transport,
        ) as client:
            pages = 0
            while url and pages < MAX_PAGES:
                data = await retry_async_call(
                    self._get_json,
                    client,
                    url,
                    max_attempts=self.max_attempts,
                    min_wait_seconds=self.min_wait_seconds,
                    max_wait_seconds=self.max_wait_seconds,
                )
                page_rows, url = _unwrap_page(data)
                rows.extend(page_rows)
                pages += 1

        return rows

    @staticmethod
    async def _get_json(client: httpx.AsyncClient, url: str) -> Any:
        response = await client.get(url)
        response.raise_for_status()
        return response.json()


def _unwrap_page(data: Any) -> tuple:
    """Return (rows, next_url) for any supported response envelope."""
    if isinstance(data, list):
        return data, None
    if isinstance(data, dict):
        rows = data.get("movements", data.get("results", []))
        return (rows if isinstance(rows, list) else []), data.get("next")
    return [], None
