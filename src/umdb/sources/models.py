"""Normalized records shared by all source adapters."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from umdb.models.external_match import ExternalSource


@dataclass
class CandidateSummary:
    """
    One search hit from an external catalog.

    This is the output format every adapter's ``search`` returns.
    """

    source: ExternalSource
    external_id: str  # Catalog-specific id, always a string
    title: str
    year: int | None = None
    poster_url: str | None = None
    rating: float | None = None


@dataclass
class ScoredCandidate(CandidateSummary):
    """Search hit with its confidence against the searched title/year."""

    confidence: int = 0


@dataclass
class CastCredit:
    name: str
    character: str | None = None
    order: int | None = None
    tmdb_id: int | None = None
    profile_url: str | None = None


@dataclass
class CrewCredit:
    name: str
    job: str
    department: str | None = None
    tmdb_id: int | None = None
    profile_url: str | None = None


@dataclass
class GenreRef:
    name: str
    tmdb_id: int | None = None


@dataclass
class AltTitleRef:
    title: str
    region: str | None = None  # ISO 3166-1 code
    type: str | None = None


@dataclass
class DetailedRecord:
    """
    Full detail for one catalog entry, normalized across sources.

    ``raw`` keeps the untouched upstream response; it is what gets cached on
    the external match and re-normalized later for reconciliation.
    """

    source: ExternalSource
    external_id: str
    title: str | None = None
    original_title: str | None = None
    year: int | None = None
    runtime: int | None = None
    plot: str | None = None
    tagline: str | None = None
    language: str | None = None
    country: str | None = None
    poster_url: str | None = None
    backdrop_url: str | None = None
    rating: float | None = None
    vote_count: int | None = None
    release_date: date | None = None
    cast: list[CastCredit] = field(default_factory=list)
    crew: list[CrewCredit] = field(default_factory=list)
    genres: list[GenreRef] = field(default_factory=list)
    alternative_titles: list[AltTitleRef] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)
