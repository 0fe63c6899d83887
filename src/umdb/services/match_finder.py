"""Match finder: fan-out search across external catalogs with confidence ranking."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import asdict
from typing import Any

from umdb.config import settings
from umdb.models.external_match import ExternalSource
from umdb.services.scoring import confidence
from umdb.sources import get_adapter, parse_source, search_adapters
from umdb.sources.base import SourceAdapter
from umdb.sources.models import CandidateSummary, ScoredCandidate

logger = logging.getLogger(__name__)

# Raw candidates kept per source before scoring
MAX_CANDIDATES_PER_SOURCE = 5


class MatchFinder:
    """
    Service for finding external catalog entries that match a local movie.

    Searches every configured catalog concurrently. A failing catalog only
    means fewer candidates: the error is logged, never raised.
    """

    def __init__(
        self,
        adapters: Sequence[SourceAdapter] | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize match finder.

        Args:
            adapters: Catalog adapters to query (defaults to all search sources)
            timeout: Upper bound in seconds for each adapter search
        """
        self.adapters = list(adapters) if adapters is not None else search_adapters()
        self.timeout = timeout if timeout is not None else settings.source_timeout

    async def find_matches(self, title: str, year: int | None = None) -> list[ScoredCandidate]:
        """
        Search all catalogs and rank candidates by confidence.

        Args:
            title: Title of the local record
            year: Year of the local record (optional)

        Returns:
            Scored candidates, highest confidence first. Ties keep source order,
            then the catalog's own order.
        """
        results = await self._search_all(self.adapters, title, year)

        matches: list[ScoredCandidate] = []
        for adapter, result in zip(self.adapters, results):
            if isinstance(result, Exception):
                logger.warning(f"{adapter.source.value} search failed for '{title}': {result}")
                continue

            for candidate in result[:MAX_CANDIDATES_PER_SOURCE]:
                matches.append(
                    ScoredCandidate(
                        **asdict(candidate),
                        confidence=confidence(title, candidate.title, year, candidate.year),
                    )
                )

        matches.sort(key=lambda match: match.confidence, reverse=True)
        logger.info(f"Found {len(matches)} candidate matches for '{title}' ({year})")
        return matches

    async def search_external(
        self,
        query: str,
        year: int | None = None,
        source: str | ExternalSource | None = None,
    ) -> dict[str, Any]:
        """
        Raw per-source search, unscored and untruncated.

        A failing source reports ``{"error": ...}`` in its slot instead of
        failing the whole search.

        Args:
            query: Title to search for
            year: Release year (optional)
            source: Restrict the search to one catalog (optional)

        Returns:
            Mapping of lower-case source name to its candidates or an error
        """
        adapters = [get_adapter(parse_source(source))] if source else self.adapters
        results = await self._search_all(adapters, query, year)

        response: dict[str, Any] = {}
        for adapter, result in zip(adapters, results):
            key = adapter.source.value.lower()
            if isinstance(result, Exception):
                logger.warning(f"{adapter.source.value} search failed for '{query}': {result}")
                response[key] = {"error": f"Failed to search {adapter.source.value}"}
            else:
                response[key] = result
        return response

    async def _search_all(
        self,
        adapters: Sequence[SourceAdapter],
        query: str,
        year: int | None,
    ) -> list[list[CandidateSummary] | Exception]:
        """Run every adapter search concurrently; failures come back as exception values."""
        results = await asyncio.gather(
            *(asyncio.wait_for(adapter.search(query, year), self.timeout) for adapter in adapters),
            return_exceptions=True,
        )
        for result in results:
            # Cancellation and interpreter exits are not adapter failures
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result
        return results
