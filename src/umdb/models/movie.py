"""Movie model, the aggregate root of the catalogue."""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from umdb.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from umdb.models.alternative_title import AlternativeTitle
    from umdb.models.external_match import ExternalMatch
    from umdb.models.genre import MovieGenre
    from umdb.models.person import MoviePerson


class SourceType(str, enum.Enum):
    """Where a movie record originally came from."""

    MANUAL = "MANUAL"
    TMDB = "TMDB"
    IMDB = "IMDB"
    OMDB = "OMDB"
    HYBRID = "HYBRID"


class Movie(Base, TimestampMixin):
    """
    Catalogued movie.

    Created by manual entry, CSV import or external import. Owns its external
    matches, alternative titles and cast/crew/genre links; they are deleted
    with it.
    """

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    original_title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    runtime: Mapped[int | None] = mapped_column(Integer, nullable=True)

    plot: Mapped[str | None] = mapped_column(Text, nullable=True)
    tagline: Mapped[str | None] = mapped_column(Text, nullable=True)
    language: Mapped[str | None] = mapped_column(String(200), nullable=True)
    country: Mapped[str | None] = mapped_column(String(500), nullable=True)
    poster_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    backdrop_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)

    source_type: Mapped[SourceType] = mapped_column(
        Enum(SourceType, name="source_type"),
        default=SourceType.MANUAL,
        nullable=False,
    )

    # Relationships
    external_matches: Mapped[list["ExternalMatch"]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
    )
    alternative_titles: Mapped[list["AlternativeTitle"]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
    )
    movie_people: Mapped[list["MoviePerson"]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
    )
    movie_genres: Mapped[list["MovieGenre"]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Movie(id={self.id!r}, title={self.title!r}, year={self.year})>"
