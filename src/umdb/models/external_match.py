"""External match model linking a movie to one catalog's identity for it."""

import enum
from datetime import date
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Date, Enum, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from umdb.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from umdb.models.movie import Movie


class ExternalSource(str, enum.Enum):
    """External movie catalogs a movie can be matched against."""

    TMDB = "TMDB"
    OMDB = "OMDB"
    IMDB = "IMDB"


class ExternalMatch(Base, TimestampMixin):
    """
    External match model.

    Holds a normalized snapshot of one catalog's record for a movie plus the
    full raw response in ``cached_data`` for later reconciliation. At most one
    row exists per (movie, source).
    """

    __tablename__ = "external_matches"
    __table_args__ = (UniqueConstraint("movie_id", "source", name="uq_movie_source"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    source: Mapped[ExternalSource] = mapped_column(
        Enum(ExternalSource, name="external_source"),
        nullable=False,
    )
    external_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Normalized snapshot
    title: Mapped[str | None] = mapped_column(String(500), nullable=True)
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
    vote_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Raw source response
    cached_data: Mapped[dict[str, Any] | None] = mapped_column(
        JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql"),
        nullable=True,
    )

    # Relationships
    movie: Mapped["Movie"] = relationship(back_populates="external_matches")

    def __repr__(self) -> str:
        return (
            f"<ExternalMatch(movie_id={self.movie_id!r}, source={self.source.value}, "
            f"external_id={self.external_id!r})>"
        )
