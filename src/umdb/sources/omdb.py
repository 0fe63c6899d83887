"""OMDb adapter, serving IMDb-keyed film metadata."""

import logging
from typing import Any

from umdb.config import settings
from umdb.exceptions import NotFound, SourceUnavailable
from umdb.models.external_match import ExternalSource
from umdb.sources.base import SourceAdapter
from umdb.sources.models import CandidateSummary, CastCredit, CrewCredit, DetailedRecord, GenreRef
from umdb.utils.text import (
    clean_value,
    extract_year,
    parse_float,
    parse_int,
    parse_release_date,
    parse_runtime,
    split_credit_note,
    split_credits,
    split_list,
)

logger = logging.getLogger(__name__)

# Error messages OMDb returns with Response="False" that mean "nothing there"
NOT_FOUND_ERRORS = ("not found", "incorrect imdb id", "too many results")


class OMDbAdapter(SourceAdapter):
    """
    Adapter for the OMDb API.

    OMDb reports everything as strings: lists are comma-separated, runtime is
    free text, and missing values are the literal "N/A". Ids are IMDb ids
    ("tt1375666"), so the same adapter serves the IMDB source tag.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        source: ExternalSource = ExternalSource.OMDB,
    ) -> None:
        """
        Initialize OMDb adapter.

        Args:
            api_key: OMDb API key (uses settings if not provided)
            base_url: API root (uses settings if not provided)
            timeout: Per-request timeout in seconds
            source: Tag recorded on the records this adapter produces (OMDB or IMDB)
        """
        self.source = source
        super().__init__(api_key or settings.omdb_api_key, timeout)
        self.base_url = base_url or settings.omdb_base_url

    async def search(self, query: str, year: int | None = None) -> list[CandidateSummary]:
        params: dict[str, Any] = {
            "apikey": self._require_api_key(),
            "s": query,
            "type": "movie",
        }
        if year:
            params["y"] = year

        data = await self._get_json(self.base_url, params)
        if data.get("Response") == "False":
            error = str(data.get("Error") or "")
            if self._is_not_found(error):
                logger.info(f"No OMDb results for: {query}")
                return []
            raise SourceUnavailable(self.source.value, error or "search failed")

        return [
            CandidateSummary(
                source=self.source,
                external_id=result["imdbID"],
                title=result.get("Title") or "",
                year=extract_year(result.get("Year")),
                poster_url=clean_value(result.get("Poster")),
            )
            for result in data.get("Search") or []
            if result.get("imdbID")
        ]

    async def fetch_detail(self, external_id: str) -> DetailedRecord:
        imdb_id = str(external_id).strip()
        if not imdb_id:
            raise NotFound("Empty IMDb id")

        params = {
            "apikey": self._require_api_key(),
            "i": imdb_id,
            "plot": "full",
        }
        data = await self._get_json(self.base_url, params)
        if data.get("Response") == "False":
            error = str(data.get("Error") or "")
            if self._is_not_found(error):
                raise NotFound(f"Movie {imdb_id} not found on OMDb")
            raise SourceUnavailable(self.source.value, error or "lookup failed")

        return self.normalize(data)

    def normalize(self, raw: dict[str, Any]) -> DetailedRecord:
        crew = [
            CrewCredit(name=name, job="Director", department="Directing")
            for name in split_list(raw.get("Director"))
        ]
        for credit in split_credits(raw.get("Writer")):
            name, note = split_credit_note(credit)
            crew.append(CrewCredit(name=name, job=note or "Writer", department="Writing"))

        return DetailedRecord(
            source=self.source,
            external_id=str(raw.get("imdbID", "")),
            title=clean_value(raw.get("Title")),
            year=extract_year(raw.get("Year")),
            runtime=parse_runtime(raw.get("Runtime")),
            plot=clean_value(raw.get("Plot")),
            language=clean_value(raw.get("Language")),
            country=clean_value(raw.get("Country")),
            poster_url=clean_value(raw.get("Poster")),
            rating=parse_float(raw.get("imdbRating")),
            vote_count=parse_int(raw.get("imdbVotes")),
            release_date=parse_release_date(raw.get("Released")),
            cast=[
                CastCredit(name=name, order=index)
                for index, name in enumerate(split_list(raw.get("Actors")))
            ],
            crew=crew,
            genres=[GenreRef(name=name) for name in split_list(raw.get("Genre"))],
            raw=raw,
        )

    @staticmethod
    def _is_not_found(error: str) -> bool:
        message = error.casefold()
        return any(marker in message for marker in NOT_FOUND_ERRORS)
