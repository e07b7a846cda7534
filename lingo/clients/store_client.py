"""Client for the translations store API."""

import logging
from collections import Counter
from typing import Any, Dict, Iterable, Optional

import httpx

from ..config import config
from ..errors import PersistenceError
from ..models.submission import SubmittedTranslation, TranslationFilters, UserStats

logger = logging.getLogger(__name__)


class TranslationStoreClient:
    """Client for persisting and listing user translations."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the store client.

        Args:
            base_url: Store root URL. If not provided, uses LINGO_STORE_URL.
            timeout: Request timeout in seconds
            client: Pre-configured httpx client (the client is then not owned)
        """
        self.base_url = (base_url or config.store_url).rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout or config.http_timeout)

    async def __aenter__(self) -> "TranslationStoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise PersistenceError(f"Failed to reach translation store: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.is_success:
            message = data.get("error") if isinstance(data, dict) else None
            raise PersistenceError(
                message or f"Translation store returned {response.status_code}",
                status_code=response.status_code,
            )

        return data

    async def submit_translation(self, translation: SubmittedTranslation) -> int:
        """
        Submit a translation to the store.

        Returns:
            The id of the stored record
        """
        data = await self._request("POST", "/api/translations", json=translation.to_payload())
        return int(data.get("id") or 0)

    async def __call__(self, translation: SubmittedTranslation) -> None:
        """Persister interface used by the session tracker."""
        await self.submit_translation(translation)

    async def fetch_user_translations(
        self,
        user_id: str,
        filters: Optional[TranslationFilters] = None,
    ) -> Dict[str, Any]:
        """
        Fetch a user's translations with optional filters.

        Returns:
            ``{"translations": [...], "meta": {"total", "limit", "offset"}}``
        """
        params = {"user_id": user_id}
        params.update((filters or TranslationFilters()).to_params())
        return await self._request("GET", "/api/translations", params=params)

    async def fetch_user_stats(self, user_id: str) -> UserStats:
        """Get translation statistics for a user (first 1000 records)."""
        data = await self.fetch_user_translations(user_id, TranslationFilters(limit=1000))
        return compute_stats_from_translations(data.get("translations") or [])


def compute_stats_from_translations(translations: Iterable[Dict[str, Any]]) -> UserStats:
    """Aggregate translation records by project, locale, status and day."""
    by_project: Counter = Counter()
    by_locale: Counter = Counter()
    by_status: Counter = Counter()
    by_date: Counter = Counter()
    total = 0

    for t in translations:
        total += 1
        by_project[t.get("project_slug")] += 1
        by_locale[t.get("locale")] += 1
        by_status[t.get("status")] += 1
        created_at = t.get("created_at") or ""
        # Store timestamps use either "T" or a space between date and time
        day = created_at.replace(" ", "T").split("T")[0] or "unknown"
        by_date[day] += 1

    return UserStats(
        total=total,
        by_project=dict(by_project),
        by_locale=dict(by_locale),
        by_status=dict(by_status),
        by_date=dict(by_date),
    )
