"""Unit tests for MatchStore input handling and error propagation."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from umdb.exceptions import NotFound, SourceUnavailable, UnsupportedSource, ValidationError
from umdb.models import ExternalSource, Movie
from umdb.services.match_store import MatchStore


def make_db(movie: Movie | None = None, rowcount: int = 0) -> AsyncMock:
    db = AsyncMock()
    db.get = AsyncMock(return_value=movie)
    result = MagicMock()
    result.rowcount = rowcount
    db.execute = AsyncMock(return_value=result)
    return db


def make_adapter(source: ExternalSource = ExternalSource.TMDB, error: Exception | None = None) -> MagicMock:
    adapter = MagicMock()
    adapter.source = source
    adapter.fetch_detail = AsyncMock(side_effect=error)
    return adapter


class TestSaveMatchValidation:
    async def test_requires_movie_id(self) -> None:
        with pytest.raises(ValidationError):
            await MatchStore(make_db()).save_match(0, "TMDB", "27205")

    async def test_requires_external_id(self) -> None:
        with pytest.raises(ValidationError):
            await MatchStore(make_db()).save_match(1, "TMDB", "  ")

    async def test_rejects_unknown_source(self) -> None:
        db = make_db()
        with pytest.raises(UnsupportedSource):
            await MatchStore(db).save_match(1, "LETTERBOXD", "inception")
        db.get.assert_not_called()

    async def test_unknown_movie_is_not_found(self) -> None:
        adapter = make_adapter()
        store = MatchStore(make_db(movie=None), adapters={ExternalSource.TMDB: adapter})
        with pytest.raises(NotFound):
            await store.save_match(42, "TMDB", "27205")
        adapter.fetch_detail.assert_not_called()


class TestSaveMatchErrors:
    async def test_source_errors_propagate_without_writing(self) -> None:
        db = make_db(movie=Movie(id=1, title="Inception"))
        adapter = make_adapter(error=SourceUnavailable("TMDB", "HTTP 503", status_code=503))
        store = MatchStore(db, adapters={ExternalSource.TMDB: adapter})

        with pytest.raises(SourceUnavailable):
            await store.save_match(1, "tmdb", " 27205 ")

        adapter.fetch_detail.assert_awaited_once_with("27205")
        db.execute.assert_not_called()

    async def test_catalog_not_found_propagates(self) -> None:
        db = make_db(movie=Movie(id=1, title="Inception"))
        adapter = make_adapter(error=NotFound("no such id"))
        store = MatchStore(db, adapters={ExternalSource.TMDB: adapter})
        with pytest.raises(NotFound):
            await store.save_match(1, "TMDB", "999999999")

    async def test_source_without_adapter_is_unsupported(self) -> None:
        store = MatchStore(make_db(), adapters={ExternalSource.TMDB: make_adapter()})
        with pytest.raises(UnsupportedSource):
            await store.get_detailed_data("OMDB", "tt1375666")


class TestRemoveMatch:
    async def test_absent_match_is_a_noop(self) -> None:
        assert await MatchStore(make_db(rowcount=0)).remove_match(1, "TMDB") is False

    async def test_existing_match_is_removed(self) -> None:
        assert await MatchStore(make_db(rowcount=1)).remove_match(1, "IMDB") is True

    async def test_rejects_unknown_source(self) -> None:
        with pytest.raises(UnsupportedSource):
            await MatchStore(make_db()).remove_match(1, "NETFLIX")


def test_source_url_uses_catalog_page() -> None:
    store = MatchStore(make_db())
    assert store.source_url("TMDB", "27205") == "https://www.themoviedb.org/movie/27205"
