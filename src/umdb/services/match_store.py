"""Persistence of chosen external matches."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from umdb.exceptions import NotFound, UnsupportedSource, ValidationError
from umdb.models import ExternalMatch, ExternalSource, Movie
from umdb.services.reconciliation import ReconciliationImporter
from umdb.sources import get_adapter, parse_source, source_url
from umdb.sources.base import SourceAdapter
from umdb.sources.models import DetailedRecord

logger = logging.getLogger(__name__)

# Columns overwritten when a (movie, source) match is saved again
SNAPSHOT_COLUMNS = (
    "title",
    "original_title",
    "year",
    "runtime",
    "plot",
    "tagline",
    "language",
    "country",
    "poster_url",
    "backdrop_url",
    "rating",
    "vote_count",
    "release_date",
)


def _insert_for(db: AsyncSession, model: type) -> Any:
    """Dialect-specific INSERT supporting ON CONFLICT (PostgreSQL, or SQLite locally)."""
    dialect = getattr(getattr(db, "bind", None), "dialect", None)
    if getattr(dialect, "name", None) == "sqlite":
        return sqlite_insert(model)
    return pg_insert(model)


class MatchStore:
    """
    Service for saving, listing and removing a movie's external matches.

    A save always re-fetches full detail from the catalog; only the
    (source, external id) pair is taken from the caller.
    """

    def __init__(
        self,
        db: AsyncSession,
        adapters: Mapping[ExternalSource, SourceAdapter] | None = None,
    ) -> None:
        """
        Initialize match store.

        Args:
            db: Database session
            adapters: Adapters by source (registry if not provided)
        """
        self.db = db
        self.adapters = adapters

    def _adapter(self, source: ExternalSource) -> SourceAdapter:
        if self.adapters is None:
            return get_adapter(source)
        adapter = self.adapters.get(source)
        if adapter is None:
            raise UnsupportedSource(source.value)
        return adapter

    async def get_detailed_data(
        self, source: str | ExternalSource, external_id: str
    ) -> DetailedRecord:
        """
        Fetch normalized detail from the adapter for ``source``.

        Raises:
            UnsupportedSource: unknown source tag
            NotFound: the catalog has no such id
            SourceUnavailable: the catalog could not be reached
        """
        return await self._adapter(parse_source(source)).fetch_detail(external_id)

    async def save_match(
        self,
        movie_id: int,
        source: str | ExternalSource,
        external_id: str,
    ) -> ExternalMatch:
        """
        Save (or overwrite) the match of a movie for one source.

        Args:
            movie_id: Local movie id
            source: Source tag
            external_id: Catalog id

        Returns:
            The persisted match, reflecting this save

        Raises:
            ValidationError: missing movie id, source or external id
            UnsupportedSource: unknown source tag
            NotFound: unknown movie, or the catalog has no such id
            SourceUnavailable: the catalog could not be reached
        """
        if not movie_id:
            raise ValidationError("Movie ID is required")
        if not source or not external_id or not str(external_id).strip():
            raise ValidationError("Source and external ID are required")

        source = parse_source(source)
        external_id = str(external_id).strip()

        movie = await self.db.get(Movie, movie_id)
        if movie is None:
            raise NotFound(f"Movie {movie_id} not found")

        record = await self.get_detailed_data(source, external_id)
        return await self.store_record(movie_id, source, external_id, record)

    async def store_record(
        self,
        movie_id: int,
        source: ExternalSource,
        external_id: str,
        record: DetailedRecord,
    ) -> ExternalMatch:
        """
        Upsert an already-fetched record as the (movie, source) match.

        Relies on the (movie_id, source) unique constraint through
        INSERT ... ON CONFLICT, so concurrent saves cannot create two rows.
        """
        values: dict[str, Any] = {
            "external_id": external_id,
            "url": source_url(source, external_id),
            "cached_data": record.raw,
        }
        values.update({column: getattr(record, column) for column in SNAPSHOT_COLUMNS})

        stmt = _insert_for(self.db, ExternalMatch).values(
            movie_id=movie_id,
            source=source,
            **values,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["movie_id", "source"],
            set_={
                **{column: stmt.excluded[column] for column in values},
                "updated_at": func.now(),
            },
        )
        await self.db.execute(stmt)

        # Alternate titles share the importer's (movie, title, region) identity
        if record.alternative_titles:
            await ReconciliationImporter(self.db).import_alternate_titles(movie_id, record)

        match = await self._get_match(movie_id, source)
        logger.info(f"Saved {source.value} match {external_id!r} for movie {movie_id}")
        return match

    async def get_movie_matches(self, movie_id: int) -> list[ExternalMatch]:
        """All persisted matches of a movie, ordered by source."""
        result = await self.db.execute(
            select(ExternalMatch)
            .where(ExternalMatch.movie_id == movie_id)
            .order_by(ExternalMatch.source)
        )
        return list(result.scalars().all())

    async def remove_match(self, movie_id: int, source: str | ExternalSource) -> bool:
        """
        Delete the match of a movie for one source.

        Removing a match that does not exist is a no-op.

        Returns:
            True if a row was deleted
        """
        source = parse_source(source)
        result = await self.db.execute(
            delete(ExternalMatch).where(
                ExternalMatch.movie_id == movie_id,
                ExternalMatch.source == source,
            )
        )
        removed = bool(result.rowcount)
        if removed:
            logger.info(f"Removed {source.value} match for movie {movie_id}")
        else:
            logger.debug(f"No {source.value} match to remove for movie {movie_id}")
        return removed

    def source_url(self, source: str | ExternalSource, external_id: str) -> str:
        return source_url(source, external_id)

    async def _get_match(self, movie_id: int, source: ExternalSource) -> ExternalMatch:
        # populate_existing refreshes a copy already in the identity map
        result = await self.db.execute(
            select(ExternalMatch)
            .where(ExternalMatch.movie_id == movie_id, ExternalMatch.source == source)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
