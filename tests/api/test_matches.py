"""Tests for the external match API endpoints."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from umdb.database import get_db
from umdb.exceptions import NotFound, SourceNotConfigured, SourceUnavailable, UnsupportedSource, ValidationError
from umdb.models import ExternalMatch, ExternalSource, Movie
from umdb.services.reconciliation import ImportSummary
from umdb.sources.models import CastCredit, DetailedRecord, ScoredCandidate


def make_match(movie_id: int = 1, source: ExternalSource = ExternalSource.TMDB) -> ExternalMatch:
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return ExternalMatch(
        id=10,
        movie_id=movie_id,
        source=source,
        external_id="27205",
        url="https://www.themoviedb.org/movie/27205",
        title="Inception",
        year=2010,
        runtime=148,
        cached_data={"id": 27205},
        created_at=now,
        updated_at=now,
    )


def override_db(test_app: FastAPI, db: AsyncMock | None = None) -> AsyncMock:
    db = db or AsyncMock()

    async def override() -> AsyncMock:
        yield db

    test_app.dependency_overrides[get_db] = override
    return db


async def request(test_app: FastAPI, method: str, url: str, **kwargs):
    try:
        async with AsyncClient(
            transport=ASGITransport(app=test_app), base_url="http://test"
        ) as client:
            return await client.request(method, url, **kwargs)
    finally:
        test_app.dependency_overrides.clear()


class TestSearchMatches:
    async def test_returns_scored_candidates(self, test_app: FastAPI) -> None:
        candidates = [
            ScoredCandidate(
                source=ExternalSource.TMDB,
                external_id="27205",
                title="Inception",
                year=2010,
                confidence=100,
            )
        ]
        with patch("umdb.api.routes.matches.MatchFinder") as finder_cls:
            finder_cls.return_value.find_matches = AsyncMock(return_value=candidates)
            response = await request(test_app, "GET", "/api/matches/search?title=Inception&year=2010")

        assert response.status_code == 200
        assert response.json() == [
            {
                "source": "TMDB",
                "external_id": "27205",
                "title": "Inception",
                "year": 2010,
                "poster_url": None,
                "rating": None,
                "confidence": 100,
            }
        ]
        finder_cls.return_value.find_matches.assert_awaited_once_with("Inception", 2010)

    async def test_requires_title(self, test_app: FastAPI) -> None:
        response = await request(test_app, "GET", "/api/matches/search")
        assert response.status_code == 422

    async def test_movie_search_uses_movie_title_and_year(self, test_app: FastAPI) -> None:
        db = AsyncMock()
        db.get = AsyncMock(return_value=Movie(id=1, title="Heat", year=1995))
        override_db(test_app, db)
        with patch("umdb.api.routes.matches.MatchFinder") as finder_cls:
            finder_cls.return_value.find_matches = AsyncMock(return_value=[])
            response = await request(test_app, "GET", "/api/movies/1/matches/search")

        assert response.status_code == 200
        finder_cls.return_value.find_matches.assert_awaited_once_with("Heat", 1995)

    async def test_movie_search_for_unknown_movie_is_404(self, test_app: FastAPI) -> None:
        db = AsyncMock()
        db.get = AsyncMock(return_value=None)
        override_db(test_app, db)
        response = await request(test_app, "GET", "/api/movies/99/matches/search")
        assert response.status_code == 404


class TestSourceDetail:
    async def test_returns_normalized_detail(self, test_app: FastAPI) -> None:
        override_db(test_app)
        record = DetailedRecord(
            source=ExternalSource.IMDB,
            external_id="tt1375666",
            title="Inception",
            cast=[CastCredit(name="Leonardo DiCaprio", order=0)],
            raw={"Title": "Inception"},
        )
        with patch("umdb.api.routes.matches.MatchStore") as store_cls:
            store_cls.return_value.get_detailed_data = AsyncMock(return_value=record)
            response = await request(test_app, "GET", "/api/sources/imdb/tt1375666")

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "IMDB"
        assert data["cast"][0]["name"] == "Leonardo DiCaprio"
        assert "raw" not in data

    async def test_unknown_source_is_400(self, test_app: FastAPI) -> None:
        override_db(test_app)
        response = await request(test_app, "GET", "/api/sources/netflix/123")
        assert response.status_code == 400
        assert "not supported" in response.json()["detail"]


class TestSaveMatch:
    async def test_returns_saved_match(self, test_app: FastAPI) -> None:
        override_db(test_app)
        with patch("umdb.api.routes.matches.MatchStore") as store_cls:
            store_cls.return_value.save_match = AsyncMock(return_value=make_match())
            response = await request(
                test_app, "POST", "/api/movies/1/matches", json={"source": "TMDB", "external_id": "27205"}
            )

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "TMDB"
        assert data["external_id"] == "27205"
        assert "cached_data" not in data
        store_cls.return_value.save_match.assert_awaited_once_with(1, "TMDB", "27205")

    async def test_missing_body_fields_are_rejected(self, test_app: FastAPI) -> None:
        override_db(test_app)
        response = await request(test_app, "POST", "/api/movies/1/matches", json={"source": "TMDB"})
        assert response.status_code == 422

    async def test_maps_service_errors_to_status_codes(self, test_app: FastAPI) -> None:
        cases = [
            (ValidationError("Source and external ID are required"), 400),
            (UnsupportedSource("NETFLIX"), 400),
            (NotFound("Movie 1 not found"), 404),
            (SourceUnavailable("TMDB", "HTTP 500"), 502),
            (SourceNotConfigured("OMDB"), 503),
        ]
        for error, status_code in cases:
            override_db(test_app)
            with patch("umdb.api.routes.matches.MatchStore") as store_cls:
                store_cls.return_value.save_match = AsyncMock(side_effect=error)
                response = await request(
                    test_app, "POST", "/api/movies/1/matches", json={"source": "TMDB", "external_id": "1"}
                )
            assert response.status_code == status_code, error
            assert response.json() == {"detail": str(error)}


class TestListAndRemove:
    async def test_lists_movie_matches(self, test_app: FastAPI) -> None:
        override_db(test_app)
        with patch("umdb.api.routes.matches.MatchStore") as store_cls:
            store_cls.return_value.get_movie_matches = AsyncMock(
                return_value=[make_match(), make_match(source=ExternalSource.IMDB)]
            )
            response = await request(test_app, "GET", "/api/movies/1/matches")

        assert response.status_code == 200
        assert [m["source"] for m in response.json()] == ["TMDB", "IMDB"]

    async def test_remove_absent_match_succeeds(self, test_app: FastAPI) -> None:
        override_db(test_app)
        with patch("umdb.api.routes.matches.MatchStore") as store_cls:
            store_cls.return_value.remove_match = AsyncMock(return_value=False)
            response = await request(test_app, "DELETE", "/api/movies/1/matches/omdb")

        assert response.status_code == 200
        assert response.json() == {"removed": False}


class TestReconcile:
    async def test_returns_import_summary(self, test_app: FastAPI) -> None:
        override_db(test_app)
        summary = ImportSummary(people_linked=6, alternative_titles_created=2, genres_linked=2)
        with patch("umdb.api.routes.matches.ReconciliationImporter") as importer_cls:
            importer_cls.return_value.reconcile = AsyncMock(return_value=summary)
            response = await request(test_app, "POST", "/api/movies/1/reconcile")

        assert response.status_code == 200
        assert response.json() == {
            "people_linked": 6,
            "alternative_titles_created": 2,
            "genres_linked": 2,
            "failures": 0,
        }

    async def test_match_without_cached_data_is_400(self, test_app: FastAPI) -> None:
        override_db(test_app)
        with patch("umdb.api.routes.matches.ReconciliationImporter") as importer_cls:
            importer_cls.return_value.reconcile_from_match = AsyncMock(
                side_effect=ValidationError("External match 10 has no cached data")
            )
            response = await request(test_app, "POST", "/api/movies/1/matches/10/reconcile")

        assert response.status_code == 400
        importer_cls.return_value.reconcile_from_match.assert_awaited_once_with(1, 10)
