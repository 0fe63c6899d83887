"""Reconcile every movie that has at least one cached external match."""

import asyncio
import logging

from sqlalchemy import select

from umdb.database import AsyncSessionLocal
from umdb.models import ExternalMatch
from umdb.services.reconciliation import ImportSummary, ReconciliationImporter

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)


async def reconcile_all() -> ImportSummary:
    async with AsyncSessionLocal() as db:
        result = await db.execute(
            select(ExternalMatch.movie_id)
            .where(ExternalMatch.cached_data.is_not(None))
            .distinct()
            .order_by(ExternalMatch.movie_id)
        )
        movie_ids: list[int] = list(result.scalars().all())

    logger.info(f"Found {len(movie_ids)} movies with cached matches")
    total = ImportSummary()
    failed = 0

    # One session per movie so a bad movie cannot roll back the others
    for movie_id in movie_ids:
        try:
            async with AsyncSessionLocal() as db:
                summary = await ReconciliationImporter(db).reconcile(movie_id)
                await db.commit()
        except Exception as e:
            logger.warning(f"Could not reconcile movie {movie_id}: {e}")
            failed += 1
            continue

        total = total.merge(summary)

    logger.info(
        f"Done: {len(movie_ids) - failed} movies reconciled, {failed} failed; "
        f"linked {total.people_linked} people and {total.genres_linked} genres, "
        f"created {total.alternative_titles_created} alternate titles"
    )
    return total


if __name__ == "__main__":
    asyncio.run(reconcile_all())
