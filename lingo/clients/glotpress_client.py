"""GlotPress API client for fetching untranslated strings."""

import logging
from typing import Any, Dict, Iterator, List, Optional

import httpx

from ..config import config
from ..errors import FetchError
from ..models.translation_unit import TranslationUnit
from ..sampling.normalizer import normalize_string
from ..sampling.reservoir import sample

logger = logging.getLogger(__name__)


class GlotPressClient:
    """Client for the translate.wordpress.org projects API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the GlotPress client.

        Args:
            base_url: API root. If not provided, uses GLOTPRESS_BASE_URL.
            timeout: Request timeout in seconds
            client: Pre-configured httpx client (the client is then not owned)
        """
        self.base_url = (base_url or config.glotpress_base_url).rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=timeout or config.http_timeout,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "GlotPressClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.warning("GlotPress request to %s failed: %s", url, e)
            raise FetchError(f"Failed to reach GlotPress: {e}") from e

        if not response.is_success:
            raise FetchError(
                f"Failed to fetch {path}: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"Invalid JSON from GlotPress for {path}") from e

    async def fetch_project_stats(self, project_slug: str) -> Dict[str, Any]:
        """
        Fetch project information including translation sets.

        Args:
            project_slug: e.g. "wp/dev" or "wp-plugins/woocommerce/dev"
        """
        return await self._get_json(f"/{project_slug.strip('/')}/")

    async def get_untranslated_count(self, project_slug: str, locale_slug: str) -> int:
        """Get the untranslated count for a locale (0 if the locale is unknown)."""
        stats = await self.fetch_project_stats(project_slug)

        for translation_set in stats.get("translation_sets") or []:
            if locale_slug in (translation_set.get("locale"), translation_set.get("slug")):
                return int(translation_set.get("untranslated_count") or 0)

        return 0

    async def fetch_untranslated_strings(
        self,
        project_slug: str,
        locale_slug: str,
    ) -> List[Dict[str, Any]]:
        """
        Fetch raw untranslated string records for a project/locale.

        The API answers with either a bare array or an object with ``rows``.
        """
        data = await self._get_json(
            f"/{project_slug.strip('/')}/{locale_slug}/default/",
            params={"filters[status]": "untranslated"},
        )

        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            return data.get("rows") or []
        return []

    async def fetch_session_strings(
        self,
        project_slug: str,
        locale_slug: str,
        sample_size: int = 10,
    ) -> List[TranslationUnit]:
        """
        Fetch and randomly sample strings for a translation session.

        Returns:
            Up to ``sample_size`` normalized units
        """
        rows = await self.fetch_untranslated_strings(project_slug, locale_slug)
        picked = sample(_iter_rows(rows), sample_size)

        logger.info(
            "Sampled %d of %d untranslated strings for %s/%s",
            len(picked), len(rows), project_slug, locale_slug,
        )
        return [normalize_string(row) for row in picked]


def _iter_rows(rows: List[Any]) -> Iterator[Dict[str, Any]]:
    for row in rows:
        if isinstance(row, dict):
            yield row
