"""Base adapter interface for all external movie catalogs."""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from umdb.config import settings
from umdb.exceptions import NotFound, SourceNotConfigured, SourceUnavailable
from umdb.models.external_match import ExternalSource
from umdb.sources.models import CandidateSummary, DetailedRecord


class SourceAdapter(ABC):
    """
    Abstract base class for all catalog adapters.

    Adapters own every source-specific quirk (id types, field names, sentinel
    values) and hand back the shared normalized records, so callers only
    dispatch on the source tag.
    """

    source: ExternalSource

    def __init__(self, api_key: str | None, timeout: float | None = None) -> None:
        """
        Initialize adapter.

        Args:
            api_key: Catalog API key (empty means not configured)
            timeout: Per-request timeout in seconds (uses settings if not provided)
        """
        self.api_key = api_key
        self.timeout = timeout if timeout is not None else settings.source_timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @abstractmethod
    async def search(self, query: str, year: int | None = None) -> list[CandidateSummary]:
        """
        Search the catalog by title.

        Args:
            query: Title to search for
            year: Release year (optional, helps narrow results)

        Returns:
            Candidates in the catalog's own relevance order (empty when none)

        Raises:
            SourceUnavailable: transport, HTTP or credential failure
        """

    @abstractmethod
    async def fetch_detail(self, external_id: str) -> DetailedRecord:
        """
        Fetch and normalize full detail for one catalog id.

        Raises:
            NotFound: the catalog has no such id
            SourceUnavailable: transport, HTTP or credential failure
        """

    @abstractmethod
    def normalize(self, raw: dict[str, Any]) -> DetailedRecord:
        """Map a raw detail payload (fresh or cached) to a DetailedRecord."""

    def _require_api_key(self) -> str:
        if not self.api_key:
            raise SourceNotConfigured(self.source.value)
        return self.api_key

    async def _get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        """
        GET a JSON object from the catalog with the configured timeout.

        Raises:
            NotFound: HTTP 404
            SourceUnavailable: any other HTTP error, transport error or non-object body
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params)
                if response.status_code == 404:
                    raise NotFound(f"{self.source.value} has no record at {url}")
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise SourceUnavailable(
                self.source.value,
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise SourceUnavailable(self.source.value, f"request failed: {e}") from e
        except ValueError as e:
            raise SourceUnavailable(self.source.value, "returned non-JSON response") from e

        if not isinstance(data, dict):
            raise SourceUnavailable(self.source.value, "returned unexpected JSON shape")
        return data
