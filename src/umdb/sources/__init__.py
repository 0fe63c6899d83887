"""Source adapter registry mapping source tags to catalog adapters."""

import logging
from collections.abc import Callable
from functools import partial

from umdb.exceptions import UnsupportedSource
from umdb.models.external_match import ExternalSource
from umdb.sources.base import SourceAdapter
from umdb.sources.omdb import OMDbAdapter
from umdb.sources.tmdb import TMDbAdapter

logger = logging.getLogger(__name__)

# Registry mapping source tags to adapter factories. IMDb ids are served by OMDb.
ADAPTER_REGISTRY: dict[ExternalSource, Callable[[], SourceAdapter]] = {
    ExternalSource.TMDB: TMDbAdapter,
    ExternalSource.OMDB: OMDbAdapter,
    ExternalSource.IMDB: partial(OMDbAdapter, source=ExternalSource.IMDB),
}

# Canonical human-facing pages, not API endpoints
SOURCE_URL_TEMPLATES: dict[ExternalSource, str] = {
    ExternalSource.TMDB: "https://www.themoviedb.org/movie/{external_id}",
    ExternalSource.OMDB: "https://www.imdb.com/title/{external_id}/",
    ExternalSource.IMDB: "https://www.imdb.com/title/{external_id}/",
}

# Tags that share one id space (IMDb tt ids)
IMDB_KEYED_SOURCES: tuple[ExternalSource, ...] = (ExternalSource.OMDB, ExternalSource.IMDB)

# Sources queried when searching for matches, in result order
SEARCH_SOURCES: tuple[ExternalSource, ...] = (ExternalSource.TMDB, ExternalSource.OMDB)


def parse_source(value: str | ExternalSource) -> ExternalSource:
    """
    Resolve a source tag, case-insensitively.

    Raises:
        UnsupportedSource: the tag names no known catalog
    """
    if isinstance(value, ExternalSource):
        return value
    try:
        return ExternalSource(str(value).strip().upper())
    except ValueError:
        raise UnsupportedSource(value) from None


def get_adapter(source: str | ExternalSource) -> SourceAdapter:
    """
    Get an adapter instance for a source tag.

    Raises:
        UnsupportedSource: no adapter is registered for the tag
    """
    adapter_factory = ADAPTER_REGISTRY.get(parse_source(source))
    if adapter_factory is None:
        raise UnsupportedSource(source)
    return adapter_factory()


def source_url(source: str | ExternalSource, external_id: str) -> str:
    """
    Build the catalog page URL for an external id.

    Examples:
        source_url("TMDB", "27205") → "https://www.themoviedb.org/movie/27205"
        source_url("IMDB", "tt1375666") → "https://www.imdb.com/title/tt1375666/"
    """
    template = SOURCE_URL_TEMPLATES.get(parse_source(source))
    if template is None:
        raise UnsupportedSource(source)
    return template.format(external_id=external_id)


def sources_sharing_ids(source: str | ExternalSource) -> tuple[ExternalSource, ...]:
    """Source tags whose external ids name the same catalog entries as ``source``."""
    source = parse_source(source)
    if source in IMDB_KEYED_SOURCES:
        return IMDB_KEYED_SOURCES
    return (source,)


def search_adapters() -> list[SourceAdapter]:
    """Adapters queried by match search, one per distinct catalog."""
    return [get_adapter(source) for source in SEARCH_SOURCES]


def log_unconfigured_sources() -> list[ExternalSource]:
    """
    Warn about every searched catalog that has no API key.

    Called once at startup; adapters themselves stay quiet so that
    normalizing cached payloads needs no key and logs nothing.

    Returns:
        Sources without a key
    """
    missing = [adapter.source for adapter in search_adapters() if not adapter.is_configured]
    for source in missing:
        logger.warning(f"{source.value} API key not configured")
    return missing


__all__ = [
    "ADAPTER_REGISTRY",
    "IMDB_KEYED_SOURCES",
    "SEARCH_SOURCES",
    "SOURCE_URL_TEMPLATES",
    "OMDbAdapter",
    "SourceAdapter",
    "TMDbAdapter",
    "get_adapter",
    "log_unconfigured_sources",
    "parse_source",
    "search_adapters",
    "source_url",
    "sources_sharing_ids",
]
