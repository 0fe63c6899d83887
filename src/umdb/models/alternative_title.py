"""Alternative title model for regional or localized title variants."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from umdb.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from umdb.models.movie import Movie


class AlternativeTitle(Base, TimestampMixin):
    """
    Alternative title model.

    Identity is (movie, title, region). Rows without a region are
    de-duplicated by the importer since NULLs never collide in the constraint.
    """

    __tablename__ = "alternative_titles"
    __table_args__ = (
        UniqueConstraint("movie_id", "title", "region", name="uq_movie_title_region"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    region: Mapped[str | None] = mapped_column(String(10), nullable=True)
    type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    source: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Relationships
    movie: Mapped["Movie"] = relationship(back_populates="alternative_titles")

    def __repr__(self) -> str:
        return f"<AlternativeTitle(title={self.title!r}, region={self.region!r})>"
