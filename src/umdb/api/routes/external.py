"""External catalog search and import endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from umdb.api.errors import as_http_error
from umdb.database import get_db
from umdb.exceptions import UMDBError
from umdb.schemas import ImportRequest, ImportResponse, MovieResponse
from umdb.services.external_import import ExternalImporter
from umdb.services.match_finder import MatchFinder

router = APIRouter()


@router.get("/external/search")
async def search_external(
    query: str = Query(..., min_length=1, description="Title search string"),
    year: int | None = Query(None, description="Release year"),
    source: str | None = Query(None, description="Restrict to one source: TMDB, OMDB or IMDB"),
) -> dict[str, Any]:
    """
    Search external catalogs without scoring.

    Each source gets its own key; a source that fails reports
    {"error": ...} instead of failing the request.
    """
    try:
        return await MatchFinder().search_external(query, year, source)
    except UMDBError as e:
        raise as_http_error(e) from e


@router.post("/external/import", response_model=ImportResponse)
async def import_external(
    request: ImportRequest,
    db: AsyncSession = Depends(get_db),
) -> ImportResponse:
    """
    Create a movie from a catalog entry, with its match and relational data.

    Importing an entry that is already matched returns the existing movie
    with created=false.
    """
    try:
        movie, created = await ExternalImporter(db).import_movie(
            request.source, request.external_id
        )
    except UMDBError as e:
        raise as_http_error(e) from e
    return ImportResponse(movie=MovieResponse.model_validate(movie), created=created)
