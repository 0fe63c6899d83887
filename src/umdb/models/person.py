"""Person model and its typed link to movies."""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from umdb.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from umdb.models.movie import Movie


class PersonRole(str, enum.Enum):
    DIRECTOR = "DIRECTOR"
    ACTOR = "ACTOR"
    WRITER = "WRITER"
    PRODUCER = "PRODUCER"
    CREW = "CREW"


class Person(Base, TimestampMixin):
    """A cast or crew member, keyed across imports by catalog person id."""

    __tablename__ = "people"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(300), nullable=False, index=True)
    tmdb_id: Mapped[int | None] = mapped_column(Integer, nullable=True, unique=True, index=True)
    imdb_id: Mapped[str | None] = mapped_column(String(20), nullable=True, unique=True)
    photo_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    movie_links: Mapped[list["MoviePerson"]] = relationship(back_populates="person")

    def __repr__(self) -> str:
        return f"<Person(id={self.id!r}, name={self.name!r})>"


class MoviePerson(Base, TimestampMixin):
    """Role of a person in a movie. One row per (movie, person, role)."""

    __tablename__ = "movie_people"
    __table_args__ = (
        UniqueConstraint("movie_id", "person_id", "role", name="uq_movie_person_role"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    person_id: Mapped[int] = mapped_column(
        ForeignKey("people.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[PersonRole] = mapped_column(Enum(PersonRole, name="person_role"), nullable=False)
    character: Mapped[str | None] = mapped_column(String(500), nullable=True)
    order: Mapped[int | None] = mapped_column(Integer, nullable=True)
    job: Mapped[str | None] = mapped_column(String(200), nullable=True)

    # Relationships
    movie: Mapped["Movie"] = relationship(back_populates="movie_people")
    person: Mapped["Person"] = relationship(back_populates="movie_links")

    def __repr__(self) -> str:
        return (
            f"<MoviePerson(movie_id={self.movie_id!r}, person_id={self.person_id!r}, "
            f"role={self.role.value})>"
        )
