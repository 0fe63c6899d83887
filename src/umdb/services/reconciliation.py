"""Reconciliation of cached catalog payloads into a movie's relational data."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from umdb.exceptions import NotFound, ValidationError
from umdb.models import (
    AlternativeTitle,
    ExternalMatch,
    ExternalSource,
    Genre,
    Movie,
    MovieGenre,
    MoviePerson,
    Person,
    PersonRole,
)
from umdb.sources import get_adapter
from umdb.sources.base import SourceAdapter
from umdb.sources.models import AltTitleRef, CastCredit, CrewCredit, DetailedRecord, GenreRef

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# Crew departments worth keeping beyond directors, writers and producers
KEY_CREW_DEPARTMENTS = ("Camera", "Editing", "Sound", "Art", "Costume & Make-Up")
MAX_KEY_CREW = 20

# Preferred match when reconciling a whole movie, richest payload first
SOURCE_PRIORITY = (ExternalSource.TMDB, ExternalSource.OMDB, ExternalSource.IMDB)


@dataclass
class ImportSummary:
    """Counts of rows created by one reconciliation run."""

    people_linked: int = 0
    alternative_titles_created: int = 0
    genres_linked: int = 0
    failures: int = 0

    def merge(self, other: "ImportSummary") -> "ImportSummary":
        return ImportSummary(
            people_linked=self.people_linked + other.people_linked,
            alternative_titles_created=self.alternative_titles_created
            + other.alternative_titles_created,
            genres_linked=self.genres_linked + other.genres_linked,
            failures=self.failures + other.failures,
        )


def _is_producer(credit: CrewCredit) -> bool:
    return credit.department == "Production" and "Producer" in credit.job


def partition_crew(crew: list[CrewCredit]) -> list[tuple[CrewCredit, PersonRole, str | None]]:
    """
    Pick the crew credits worth importing and assign each a role.

    Directors, writers and producers are all kept. Of the remaining crew only
    key departments survive, capped at MAX_KEY_CREW, tagged CREW with their
    job. Everyone else is dropped.

    Args:
        crew: Normalized crew credits

    Returns:
        (credit, role, job) triples in import order
    """
    directors = [c for c in crew if c.job == "Director"]
    writers = [c for c in crew if c.department == "Writing"]
    producers = [c for c in crew if _is_producer(c)]
    other_crew = [
        c
        for c in crew
        if c.department != "Writing" and c.job != "Director" and not _is_producer(c)
    ]
    key_crew = [c for c in other_crew if c.department in KEY_CREW_DEPARTMENTS][:MAX_KEY_CREW]

    return (
        [(c, PersonRole.DIRECTOR, None) for c in directors]
        + [(c, PersonRole.WRITER, None) for c in writers]
        + [(c, PersonRole.PRODUCER, None) for c in producers]
        + [(c, PersonRole.CREW, c.job) for c in key_crew]
    )


class ReconciliationImporter:
    """
    Merges cast, crew, genres and alternate titles from a catalog record.

    Every operation is find-or-create, so re-running an import from the same
    payload creates nothing new. Each item runs in its own SAVEPOINT; a
    failing item is logged and skipped without aborting the batch.
    """

    def __init__(
        self,
        db: AsyncSession,
        adapters: Mapping[ExternalSource, SourceAdapter] | None = None,
    ) -> None:
        """
        Initialize importer.

        Args:
            db: Database session
            adapters: Adapters used to normalize cached payloads (registry if not provided)
        """
        self.db = db
        self.adapters = adapters

    # ------------------------------------------------------------------
    # Whole-movie reconciliation
    # ------------------------------------------------------------------

    async def reconcile(self, movie_id: int) -> ImportSummary:
        """
        Import from the richest cached match of a movie (TMDB, then OMDB, then IMDB).

        Raises:
            NotFound: the movie does not exist or has no cached match
        """
        movie = await self.db.get(Movie, movie_id)
        if movie is None:
            raise NotFound(f"Movie {movie_id} not found")

        result = await self.db.execute(
            select(ExternalMatch).where(ExternalMatch.movie_id == movie_id)
        )
        cached = {m.source: m for m in result.scalars().all() if m.cached_data}
        for source in SOURCE_PRIORITY:
            if source in cached:
                return await self._import_from_match(cached[source])

        raise NotFound(f"Movie {movie_id} has no cached external match to import from")

    async def reconcile_from_match(self, movie_id: int, match_id: int) -> ImportSummary:
        """
        Import from one specific external match of a movie.

        Raises:
            NotFound: the match does not exist or belongs to another movie
            ValidationError: the match has no cached payload
        """
        match = await self.db.get(ExternalMatch, match_id)
        if match is None or match.movie_id != movie_id:
            raise NotFound(f"External match {match_id} not found for movie {movie_id}")
        if not match.cached_data:
            raise ValidationError(f"External match {match_id} has no cached data")
        return await self._import_from_match(match)

    async def import_all(self, movie_id: int, record: DetailedRecord) -> ImportSummary:
        """Run cast/crew, alternate title and genre imports for one record."""
        summary = await self.import_cast_and_crew(movie_id, record)
        summary = summary.merge(await self.import_alternate_titles(movie_id, record))
        summary = summary.merge(await self.import_genres(movie_id, record))
        logger.info(
            f"Imported {record.source.value} data for movie {movie_id}: "
            f"{summary.people_linked} people, {summary.genres_linked} genres, "
            f"{summary.alternative_titles_created} alternate titles, "
            f"{summary.failures} failures"
        )
        return summary

    async def _import_from_match(self, match: ExternalMatch) -> ImportSummary:
        adapter = self._adapter(match.source)
        record = adapter.normalize(match.cached_data or {})
        return await self.import_all(match.movie_id, record)

    def _adapter(self, source: ExternalSource) -> SourceAdapter:
        if self.adapters is not None and source in self.adapters:
            return self.adapters[source]
        return get_adapter(source)

    # ------------------------------------------------------------------
    # Cast and crew
    # ------------------------------------------------------------------

    async def import_cast_and_crew(self, movie_id: int, record: DetailedRecord) -> ImportSummary:
        """
        Link cast as ACTOR and the relevant crew as DIRECTOR/WRITER/PRODUCER/CREW.

        Args:
            movie_id: Movie to link people to
            record: Normalized catalog record

        Returns:
            Summary with the number of new links and failed items
        """
        summary = ImportSummary()
        if not record.cast and not record.crew:
            logger.info(f"No credits in {record.source.value} data for movie {movie_id}")
            return summary

        people: list[tuple[CastCredit | CrewCredit, PersonRole, str | None, str | None]] = [
            (credit, PersonRole.ACTOR, credit.character, None) for credit in record.cast
        ]
        people += [(credit, role, None, job) for credit, role, job in partition_crew(record.crew)]

        for credit, role, character, job in people:
            try:
                async with self.db.begin_nested():
                    created = await self._import_person(movie_id, credit, role, character, job)
                if created:
                    summary.people_linked += 1
            except Exception as e:
                summary.failures += 1
                logger.error(f"Error importing person {credit.name!r}: {e}", exc_info=True)

        return summary

    async def _import_person(
        self,
        movie_id: int,
        credit: CastCredit | CrewCredit,
        role: PersonRole,
        character: str | None,
        job: str | None,
    ) -> bool:
        """Find or create the person and their link; True when a new link was made."""
        person = await self._find_or_create_person(movie_id, credit)
        order = credit.order if isinstance(credit, CastCredit) else None
        _, created = await self._get_or_create(
            MoviePerson,
            {"movie_id": movie_id, "person_id": person.id, "role": role},
            {"character": character, "order": order, "job": job},
        )
        return created

    async def _find_or_create_person(self, movie_id: int, credit: CastCredit | CrewCredit) -> Person:
        """
        Resolve a credit to a Person.

        The TMDb id is the identity when present. Without one (OMDb credits
        are bare names), a same-named person already linked to this movie is
        reused so repeated imports stay idempotent; otherwise a new person is
        created.
        """
        if credit.tmdb_id is not None:
            person, _ = await self._get_or_create(
                Person,
                {"tmdb_id": credit.tmdb_id},
                {"name": credit.name, "photo_url": credit.profile_url},
            )
            return person

        result = await self.db.execute(
            select(Person)
            .join(MoviePerson, MoviePerson.person_id == Person.id)
            .where(MoviePerson.movie_id == movie_id, Person.name == credit.name)
            .limit(1)
        )
        person = result.scalars().first()
        if person is not None:
            return person

        person = Person(name=credit.name, photo_url=credit.profile_url)
        self.db.add(person)
        await self.db.flush()
        return person

    # ------------------------------------------------------------------
    # Alternate titles
    # ------------------------------------------------------------------

    async def import_alternate_titles(self, movie_id: int, record: DetailedRecord) -> ImportSummary:
        """
        Find-or-create alternate titles by (movie, title, region).

        Existing rows are never updated: title and region are their identity.
        """
        summary = ImportSummary()
        if not record.alternative_titles:
            logger.info(f"No alternate titles in {record.source.value} data for movie {movie_id}")
            return summary

        for alt in record.alternative_titles:
            try:
                async with self.db.begin_nested():
                    created = await self._import_alternate_title(movie_id, alt, record.source)
                if created:
                    summary.alternative_titles_created += 1
            except Exception as e:
                summary.failures += 1
                logger.error(f"Error importing alternate title {alt.title!r}: {e}", exc_info=True)

        return summary

    async def _import_alternate_title(
        self, movie_id: int, alt: AltTitleRef, source: ExternalSource
    ) -> bool:
        _, created = await self._get_or_create(
            AlternativeTitle,
            {"movie_id": movie_id, "title": alt.title, "region": alt.region},
            {"type": alt.type, "source": source.value},
        )
        return created

    # ------------------------------------------------------------------
    # Genres
    # ------------------------------------------------------------------

    async def import_genres(self, movie_id: int, record: DetailedRecord) -> ImportSummary:
        """Find-or-create each genre and its link to the movie."""
        summary = ImportSummary()
        if not record.genres:
            logger.info(f"No genres in {record.source.value} data for movie {movie_id}")
            return summary

        for genre_ref in record.genres:
            try:
                async with self.db.begin_nested():
                    genre = await self._find_or_create_genre(genre_ref)
                    _, created = await self._get_or_create(
                        MovieGenre,
                        {"movie_id": movie_id, "genre_id": genre.id},
                        {},
                    )
                if created:
                    summary.genres_linked += 1
            except Exception as e:
                summary.failures += 1
                logger.error(f"Error importing genre {genre_ref.name!r}: {e}", exc_info=True)

        return summary

    async def _find_or_create_genre(self, genre_ref: GenreRef) -> Genre:
        """
        Resolve a genre by catalog id, then by case-insensitive name.

        A name match without a catalog id adopts the incoming id.
        """
        if genre_ref.tmdb_id is not None:
            result = await self.db.execute(select(Genre).where(Genre.tmdb_id == genre_ref.tmdb_id))
            genre = result.scalar_one_or_none()
            if genre is not None:
                return genre

        result = await self.db.execute(
            select(Genre).where(func.lower(Genre.name) == genre_ref.name.lower()).limit(1)
        )
        genre = result.scalars().first()
        if genre is not None:
            if genre_ref.tmdb_id is not None and genre.tmdb_id is None:
                genre.tmdb_id = genre_ref.tmdb_id
                await self.db.flush()
            return genre

        genre, _ = await self._get_or_create(
            Genre,
            {"name": genre_ref.name},
            {"tmdb_id": genre_ref.tmdb_id},
        )
        return genre

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_or_create(
        self,
        model: type[ModelT],
        lookup: dict[str, Any],
        defaults: dict[str, Any],
    ) -> tuple[ModelT, bool]:
        """
        Return the row matching ``lookup``, creating it with ``defaults`` if absent.

        A concurrent insert of the same natural key surfaces as an
        IntegrityError; the winner's row is then re-read and reused.
        """
        query = select(model).filter_by(**lookup).limit(1)
        result = await self.db.execute(query)
        existing = result.scalars().first()
        if existing is not None:
            return existing, False

        instance = model(**lookup, **defaults)
        try:
            async with self.db.begin_nested():
                self.db.add(instance)
                await self.db.flush()
        except IntegrityError:
            result = await self.db.execute(query)
            existing = result.scalars().first()
            if existing is None:
                raise
            logger.debug(f"{model.__name__} {lookup!r} created concurrently, reusing.")
            return existing, False

        return instance, True
