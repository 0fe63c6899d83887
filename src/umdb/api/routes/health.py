"""Health check endpoint."""

from fastapi import APIRouter

from umdb.config import settings

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, object]:
    """
    Health check endpoint.

    Returns:
        Status message plus which external catalogs have an API key configured
    """
    return {
        "status": "ok",
        "sources": {
            "tmdb": bool(settings.tmdb_api_key),
            "omdb": bool(settings.omdb_api_key),
        },
    }
