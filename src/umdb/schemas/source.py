"""Pydantic schemas for normalized catalog detail."""

from datetime import date

from pydantic import BaseModel, ConfigDict

from umdb.models.external_match import ExternalSource


class CastCreditResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    character: str | None = None
    order: int | None = None
    tmdb_id: int | None = None
    profile_url: str | None = None


class CrewCreditResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    job: str
    department: str | None = None
    tmdb_id: int | None = None
    profile_url: str | None = None


class GenreRefResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    tmdb_id: int | None = None


class AltTitleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    region: str | None = None
    type: str | None = None


class DetailedRecordResponse(BaseModel):
    """
    Full catalog detail as returned by the source adapters.

    The raw upstream payload is not exposed; it is only kept on saved matches.
    """

    model_config = ConfigDict(from_attributes=True)

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
    cast: list[CastCreditResponse] = []
    crew: list[CrewCreditResponse] = []
    genres: list[GenreRefResponse] = []
    alternative_titles: list[AltTitleResponse] = []
