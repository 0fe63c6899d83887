"""TMDb adapter for searching and fetching film metadata."""

import logging
from typing import Any

from umdb.config import settings
from umdb.exceptions import NotFound
from umdb.models.external_match import ExternalSource
from umdb.sources.base import SourceAdapter
from umdb.sources.models import (
    AltTitleRef,
    CandidateSummary,
    CastCredit,
    CrewCredit,
    DetailedRecord,
    GenreRef,
)
from umdb.utils.text import clean_value, extract_year, parse_float, parse_release_date

logger = logging.getLogger(__name__)


class TMDbAdapter(SourceAdapter):
    """Adapter for The Movie Database (TMDb) API."""

    source = ExternalSource.TMDB

    IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize TMDb adapter.

        Args:
            api_key: TMDb API key (uses settings if not provided)
            base_url: API root (uses settings if not provided)
            timeout: Per-request timeout in seconds
        """
        super().__init__(api_key or settings.tmdb_api_key, timeout)
        self.base_url = (base_url or settings.tmdb_base_url).rstrip("/")

    async def search(self, query: str, year: int | None = None) -> list[CandidateSummary]:
        """
        Search for films by title.

        Args:
            query: Film title
            year: Release year (optional, helps narrow results)

        Returns:
            Matching films in TMDb relevance order
        """
        params: dict[str, Any] = {
            "api_key": self._require_api_key(),
            "query": query,
            "include_adult": "false",
            "language": settings.tmdb_language,
        }
        if year:
            params["year"] = year

        data = await self._get_json(f"{self.base_url}/search/movie", params)
        results = data.get("results") or []
        if not results:
            logger.info(f"No TMDb results for: {query}")

        return [
            CandidateSummary(
                source=self.source,
                external_id=str(result["id"]),
                title=result.get("title") or result.get("original_title") or "",
                year=extract_year(result.get("release_date")),
                poster_url=self.image_url(result.get("poster_path")),
                rating=parse_float(result.get("vote_average")),
            )
            for result in results
            if result.get("id") is not None
        ]

    async def fetch_detail(self, external_id: str) -> DetailedRecord:
        """
        Get detailed film information including credits and alternative titles.

        Args:
            external_id: TMDb film ID (numeric, passed as a string)

        Returns:
            Normalized film detail
        """
        tmdb_id = str(external_id).strip()
        if not tmdb_id.isdigit():
            raise NotFound(f"Invalid TMDb id: {external_id!r}")

        params = {
            "api_key": self._require_api_key(),
            "language": settings.tmdb_language,
            "append_to_response": "credits,alternative_titles",
        }
        data = await self._get_json(f"{self.base_url}/movie/{tmdb_id}", params)
        return self.normalize(data)

    def normalize(self, raw: dict[str, Any]) -> DetailedRecord:
        credits = raw.get("credits") or {}
        countries = [c["name"] for c in raw.get("production_countries") or [] if c.get("name")]
        alt_titles = (raw.get("alternative_titles") or {}).get("titles") or []

        return DetailedRecord(
            source=self.source,
            external_id=str(raw.get("id", "")),
            title=clean_value(raw.get("title")),
            original_title=clean_value(raw.get("original_title")),
            year=extract_year(raw.get("release_date")),
            runtime=raw.get("runtime") or None,
            plot=clean_value(raw.get("overview")),
            tagline=clean_value(raw.get("tagline")),
            language=clean_value(raw.get("original_language")),
            country=", ".join(countries) or None,
            poster_url=self.image_url(raw.get("poster_path")),
            backdrop_url=self.image_url(raw.get("backdrop_path"), size="original"),
            rating=parse_float(raw.get("vote_average")),
            vote_count=raw.get("vote_count"),
            release_date=parse_release_date(raw.get("release_date")),
            cast=[
                CastCredit(
                    name=person["name"],
                    character=clean_value(person.get("character")),
                    order=person.get("order"),
                    tmdb_id=person.get("id"),
                    profile_url=self.image_url(person.get("profile_path")),
                )
                for person in credits.get("cast") or []
                if person.get("name")
            ],
            crew=[
                CrewCredit(
                    name=person["name"],
                    job=person.get("job") or "",
                    department=person.get("department"),
                    tmdb_id=person.get("id"),
                    profile_url=self.image_url(person.get("profile_path")),
                )
                for person in credits.get("crew") or []
                if person.get("name")
            ],
            genres=[
                GenreRef(name=genre["name"], tmdb_id=genre.get("id"))
                for genre in raw.get("genres") or []
                if genre.get("name")
            ],
            alternative_titles=[
                AltTitleRef(
                    title=alt["title"],
                    region=clean_value(alt.get("iso_3166_1")),
                    type=clean_value(alt.get("type")),
                )
                for alt in alt_titles
                if alt.get("title")
            ],
            raw=raw,
        )

    def image_url(self, path: str | None, size: str = "w500") -> str | None:
        """Build a full image URL from a TMDb image path."""
        if not path:
            return None
        return f"{self.IMAGE_BASE_URL}/{size}{path}"
