"""Pydantic schemas for external matches and match search."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from umdb.models.external_match import ExternalSource


class CandidateResponse(BaseModel):
    """One search hit from an external catalog."""

    model_config = ConfigDict(from_attributes=True)

    source: ExternalSource
    external_id: str
    title: str
    year: int | None = None
    poster_url: str | None = None
    rating: float | None = None


class ScoredCandidateResponse(CandidateResponse):
    """Search hit ranked against the searched title and year."""

    confidence: int = Field(ge=0, le=100)


class SaveMatchRequest(BaseModel):
    """Request body for saving a movie's match for one source."""

    source: str = Field(..., min_length=1, description="Source tag: TMDB, OMDB or IMDB")
    external_id: str = Field(..., min_length=1, description="Catalog id, e.g. 27205 or tt1375666")


class ExternalMatchResponse(BaseModel):
    """Persisted external match with its normalized snapshot."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    movie_id: int
    source: ExternalSource
    external_id: str
    url: str | None = None
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
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RemoveMatchResponse(BaseModel):
    removed: bool
