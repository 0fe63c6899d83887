"""Pydantic schemas for movies, external import and reconciliation."""

from pydantic import BaseModel, ConfigDict, Field

from umdb.models.movie import SourceType


class MovieResponse(BaseModel):
    """Movie response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
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
    source_type: SourceType


class ImportRequest(BaseModel):
    """Request body for importing a catalog entry as a new movie."""

    source: str = Field(..., min_length=1)
    external_id: str = Field(..., min_length=1)


class ImportResponse(BaseModel):
    movie: MovieResponse
    created: bool


class ImportSummaryResponse(BaseModel):
    """Rows created by one reconciliation run."""

    model_config = ConfigDict(from_attributes=True)

    people_linked: int
    alternative_titles_created: int
    genres_linked: int
    failures: int
