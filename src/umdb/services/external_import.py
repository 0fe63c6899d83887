"""Import of new movies straight from an external catalog entry."""

import logging
from collections.abc import Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from umdb.exceptions import ValidationError
from umdb.models import ExternalMatch, ExternalSource, Movie, SourceType
from umdb.services.match_store import MatchStore
from umdb.services.reconciliation import ImportSummary, ReconciliationImporter
from umdb.sources import parse_source, sources_sharing_ids
from umdb.sources.base import SourceAdapter
from umdb.sources.models import DetailedRecord

logger = logging.getLogger(__name__)


class ExternalImporter:
    """
    Service for creating a movie from a catalog entry.

    The import runs in three stages:
    1. Reuse the movie already matched to (source, external id), if any
    2. Create the movie from the catalog's detail record
    3. Save the match and reconcile cast, crew, genres and alternate titles
    """

    def __init__(
        self,
        db: AsyncSession,
        adapters: Mapping[ExternalSource, SourceAdapter] | None = None,
    ) -> None:
        self.db = db
        self.store = MatchStore(db, adapters)
        self.importer = ReconciliationImporter(db, adapters)

    async def import_movie(
        self, source: str | ExternalSource, external_id: str
    ) -> tuple[Movie, bool]:
        """
        Import a catalog entry as a movie.

        Args:
            source: Source tag
            external_id: Catalog id

        Returns:
            (movie, created); created is False when the entry was already imported
        """
        if not source or not external_id or not str(external_id).strip():
            raise ValidationError("Source and external ID are required")

        source = parse_source(source)
        external_id = str(external_id).strip()

        movie = await self._find_imported(source, external_id)
        if movie:
            logger.info(f"{source.value} {external_id!r} already imported as movie {movie.id}")
            return movie, False

        record = await self.store.get_detailed_data(source, external_id)
        movie = await self._create_movie(record, external_id)

        await self.store.store_record(movie.id, source, external_id, record)
        summary = await self.importer.import_all(movie.id, record)
        self._log_import(movie, summary)
        return movie, True

    async def _find_imported(self, source: ExternalSource, external_id: str) -> Movie | None:
        """Movie already matched to this catalog entry under any tag sharing its ids."""
        query = (
            select(Movie)
            .join(ExternalMatch, ExternalMatch.movie_id == Movie.id)
            .where(
                ExternalMatch.source.in_(sources_sharing_ids(source)),
                ExternalMatch.external_id == external_id,
            )
            .limit(1)
        )
        result = await self.db.execute(query)
        return result.scalars().first()

    async def _create_movie(self, record: DetailedRecord, external_id: str) -> Movie:
        title = record.title or record.original_title
        if not title:
            raise ValidationError(f"{record.source.value} {external_id!r} has no title")

        movie = Movie(
            title=title,
            original_title=record.original_title,
            year=record.year,
            runtime=record.runtime,
            plot=record.plot,
            tagline=record.tagline,
            language=record.language,
            country=record.country,
            poster_url=record.poster_url,
            backdrop_url=record.backdrop_url,
            rating=record.rating,
            source_type=SourceType(record.source.value),
        )
        self.db.add(movie)
        await self.db.flush()
        return movie

    @staticmethod
    def _log_import(movie: Movie, summary: ImportSummary) -> None:
        logger.info(
            f"Imported movie {movie.id} '{movie.title}' ({movie.year}): "
            f"{summary.people_linked} people, {summary.genres_linked} genres"
        )
