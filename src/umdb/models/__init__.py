"""SQLAlchemy ORM models."""

from umdb.models.alternative_title import AlternativeTitle
from umdb.models.base import Base
from umdb.models.external_match import ExternalMatch, ExternalSource
from umdb.models.genre import Genre, MovieGenre
from umdb.models.movie import Movie, SourceType
from umdb.models.person import MoviePerson, Person, PersonRole

__all__ = [
    "AlternativeTitle",
    "Base",
    "ExternalMatch",
    "ExternalSource",
    "Genre",
    "Movie",
    "MovieGenre",
    "MoviePerson",
    "Person",
    "PersonRole",
    "SourceType",
]
