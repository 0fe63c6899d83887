"""Pydantic schemas for API requests and responses."""

from umdb.schemas.match import (
    CandidateResponse,
    ExternalMatchResponse,
    RemoveMatchResponse,
    SaveMatchRequest,
    ScoredCandidateResponse,
)
from umdb.schemas.movie import (
    ImportRequest,
    ImportResponse,
    ImportSummaryResponse,
    MovieResponse,
)
from umdb.schemas.source import DetailedRecordResponse

__all__ = [
    "CandidateResponse",
    "ScoredCandidateResponse",
    "SaveMatchRequest",
    "ExternalMatchResponse",
    "RemoveMatchResponse",
    "DetailedRecordResponse",
    "MovieResponse",
    "ImportRequest",
    "ImportResponse",
    "ImportSummaryResponse",
]
