"""External match API endpoints: search, save, list, remove and reconcile."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from umdb.api.errors import as_http_error
from umdb.database import get_db
from umdb.exceptions import UMDBError
from umdb.models import ExternalMatch, Movie
from umdb.schemas import (
    DetailedRecordResponse,
    ExternalMatchResponse,
    ImportSummaryResponse,
    RemoveMatchResponse,
    SaveMatchRequest,
    ScoredCandidateResponse,
)
from umdb.services.match_finder import MatchFinder
from umdb.services.match_store import MatchStore
from umdb.services.reconciliation import ImportSummary, ReconciliationImporter
from umdb.sources.models import DetailedRecord, ScoredCandidate

router = APIRouter()


@router.get("/matches/search", response_model=list[ScoredCandidateResponse])
async def search_matches(
    title: str = Query(..., min_length=1, description="Title to match"),
    year: int | None = Query(None, ge=1870, le=2100, description="Release year"),
) -> list[ScoredCandidate]:
    """
    Search every external catalog for a title, ranked by confidence.

    Catalogs that fail are skipped, so the list may be partial or empty.
    """
    return await MatchFinder().find_matches(title, year)


@router.get("/movies/{movie_id}/matches/search", response_model=list[ScoredCandidateResponse])
async def search_movie_matches(
    movie_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[ScoredCandidate]:
    """Find candidate matches for a catalogued movie using its title and year."""
    movie = await db.get(Movie, movie_id)
    if movie is None:
        raise HTTPException(status_code=404, detail=f"Movie {movie_id} not found")
    return await MatchFinder().find_matches(movie.title, movie.year)


@router.get("/sources/{source}/{external_id}", response_model=DetailedRecordResponse)
async def get_source_detail(
    source: str,
    external_id: str,
    db: AsyncSession = Depends(get_db),
) -> DetailedRecord:
    """Fetch full normalized detail for one catalog entry without saving it."""
    try:
        return await MatchStore(db).get_detailed_data(source, external_id)
    except UMDBError as e:
        raise as_http_error(e) from e


@router.get("/movies/{movie_id}/matches", response_model=list[ExternalMatchResponse])
async def get_movie_matches(
    movie_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[ExternalMatch]:
    """
    Get the saved external matches of a movie.

    Args:
        movie_id: Movie ID
        db: Database session

    Returns:
        Matches ordered by source
    """
    return await MatchStore(db).get_movie_matches(movie_id)


@router.post("/movies/{movie_id}/matches", response_model=ExternalMatchResponse)
async def save_match(
    movie_id: int,
    request: SaveMatchRequest,
    db: AsyncSession = Depends(get_db),
) -> ExternalMatch:
    """
    Save a movie's match for one source, replacing any previous match.

    Detail is re-fetched from the catalog; only source and external id are
    taken from the request.
    """
    try:
        return await MatchStore(db).save_match(movie_id, request.source, request.external_id)
    except UMDBError as e:
        raise as_http_error(e) from e


@router.delete("/movies/{movie_id}/matches/{source}", response_model=RemoveMatchResponse)
async def remove_match(
    movie_id: int,
    source: str,
    db: AsyncSession = Depends(get_db),
) -> RemoveMatchResponse:
    """Remove a movie's match for one source. Removing a missing match is not an error."""
    try:
        removed = await MatchStore(db).remove_match(movie_id, source)
    except UMDBError as e:
        raise as_http_error(e) from e
    return RemoveMatchResponse(removed=removed)


@router.post("/movies/{movie_id}/reconcile", response_model=ImportSummaryResponse)
async def reconcile_movie(
    movie_id: int,
    db: AsyncSession = Depends(get_db),
) -> ImportSummary:
    """Import cast, crew, genres and alternate titles from the movie's best saved match."""
    try:
        return await ReconciliationImporter(db).reconcile(movie_id)
    except UMDBError as e:
        raise as_http_error(e) from e


@router.post(
    "/movies/{movie_id}/matches/{match_id}/reconcile",
    response_model=ImportSummaryResponse,
)
async def reconcile_from_match(
    movie_id: int,
    match_id: int,
    db: AsyncSession = Depends(get_db),
) -> ImportSummary:
    """Import cast, crew, genres and alternate titles from one specific saved match."""
    try:
        return await ReconciliationImporter(db).reconcile_from_match(movie_id, match_id)
    except UMDBError as e:
        raise as_http_error(e) from e
