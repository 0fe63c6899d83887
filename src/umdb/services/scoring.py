"""Confidence scoring for external catalog candidates."""

import math

from umdb.utils.text import similarity

# Title similarity dominates: year metadata is often missing or off by one
# between catalogs.
TITLE_WEIGHT = 70
YEAR_WEIGHT = 30
YEAR_PENALTY_PER_YEAR = 5


def confidence(
    search_title: str,
    candidate_title: str,
    search_year: int | None = None,
    candidate_year: int | None = None,
) -> int:
    """
    Score how likely a candidate is the movie being searched for.

    Args:
        search_title: Title of the local record
        candidate_title: Title reported by the catalog
        search_year: Year of the local record, if known
        candidate_year: Year reported by the catalog, if known

    Returns:
        Integer confidence between 0 and 100
    """
    score = similarity(search_title, candidate_title) * TITLE_WEIGHT

    if search_year is not None and candidate_year is not None:
        year_diff = abs(search_year - candidate_year)
        score += max(0, YEAR_WEIGHT - YEAR_PENALTY_PER_YEAR * year_diff)

    # Half rounds up
    return min(100, max(0, math.floor(score + 0.5)))
