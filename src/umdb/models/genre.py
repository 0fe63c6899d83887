"""Genre model and movie-genre join."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from umdb.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from umdb.models.movie import Movie


class Genre(Base, TimestampMixin):
    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    tmdb_id: Mapped[int | None] = mapped_column(Integer, nullable=True, unique=True)

    def __repr__(self) -> str:
        return f"<Genre(id={self.id!r}, name={self.name!r})>"


class MovieGenre(Base, TimestampMixin):
    __tablename__ = "movie_genres"
    __table_args__ = (UniqueConstraint("movie_id", "genre_id", name="uq_movie_genre"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    genre_id: Mapped[int] = mapped_column(
        ForeignKey("genres.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    movie: Mapped["Movie"] = relationship(back_populates="movie_genres")
    genre: Mapped["Genre"] = relationship()
