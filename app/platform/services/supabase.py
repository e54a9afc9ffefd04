from typing import Any
from urllib.parse import quote

import httpx

from app.platform.config import Settings
from app.platform.exceptions import AlreadyRegistered, StoreReadFailed, StoreWriteFailed
from app.platform.logger import get_logger

logger = get_logger("supabase_store")

# Error-body markers PostgREST emits when a unique index rejects an insert
DUPLICATE_MARKERS = ("duplicate key", "unique constraint")
UNIQUE_VIOLATION_CODE = "23505"


def is_duplicate_error(response: httpx.Response) -> bool:
    """Structured `code` first, then the free-text markers."""
    text = response.text or ""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and str(body.get("code", "")) == UNIQUE_VIOLATION_CODE:
        return True
    return any(marker in text for marker in DUPLICATE_MARKERS)


def parse_content_range_total(header: str | None) -> int | None:
    """`0-0/42` or `*/42` -> 42; anything else -> None."""
    if not header or "/" not in header:
        return None
    total = header.split("/", 1)[1].strip()
    if not (total.isascii() and total.isdecimal()):
        return None
    return int(total)


class SupabaseStore:
    """Thin client for the PostgREST interface of the waitlist table."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = (settings.SUPABASE_URL or "").rstrip("/")
        self.api_key = settings.SUPABASE_SERVICE_ROLE_KEY
        self.table = settings.SUPABASE_WAITLIST_TABLE
        self.timeout = httpx.Timeout(settings.OUTBOUND_TIMEOUT_SECONDS)
        self.transport = transport

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/rest/v1/{quote(self.table or '', safe='')}"

    def _headers(self, **extra: str) -> dict[str, str]:
        headers = {
            "apikey": self.api_key or "",
            "Authorization": f"Bearer {self.api_key}",
        }
        headers.update(extra)
        return headers

    async def insert_signup(self, row: dict[str, Any]) -> None:
        """
        Insert one row relying on the table's unique index on email.

        Raises AlreadyRegistered when the store reports a uniqueness
        violation and StoreWriteFailed for any other failure.
        """
        headers = self._headers(**{"Content-Type": "application/json", "Prefer": "return=minimal"})
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.table_url, json=row, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise StoreWriteFailed(f"Supabase request failed: {str(e)}") from e

        if response.is_success:
            return

        if is_duplicate_error(response):
            raise AlreadyRegistered()

        raise StoreWriteFailed(
            response.text or f"Supabase sync failed with status {response.status_code}"
        )

    async def count_signups(self) -> int:
        """Exact row count read from the `content-range` header of an empty page."""
        headers = self._headers(Prefer="count=exact", Range="0-0")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.table_url, params={"select": "id"}, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise StoreReadFailed(f"Supabase stats request failed: {str(e)}") from e

        if response.is_error:
            raise StoreReadFailed(
                response.text or f"Supabase stats query failed with status {response.status_code}"
            )

        content_range = response.headers.get("content-range", "")
        total = parse_content_range_total(content_range)
        if total is None:
            raise StoreReadFailed(
                f'Unable to parse waitlist count from content-range header: "{content_range}"'
            )
        return total
