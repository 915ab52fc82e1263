"""Resource search and ranking.

Scoring (higher is better):
- 100: name equals the query
- 75: name starts with the query
- 50: name contains the query
- 25: only the description contains the query
- 0: empty query
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Resource
from .models import SearchOptions

SCORE_EXACT = 100
SCORE_PREFIX = 75
SCORE_CONTAINS = 50
SCORE_DESCRIPTION = 25


def search(resources: Iterable[Resource], query: str = "", options: SearchOptions | None = None) -> list[Resource]:
    """Filter and rank resources against a free-text query.

    Filters apply before matching. Matching is case-insensitive substring
    matching on name and description; an empty query matches everything.
    Results are stably sorted by descending score, so equal scores keep
    their input order.

    Args:
        resources: Resource index to search
        query: Free-text query
        options: Type and repository filters

    Returns:
        Matching resources, best first
    """
    options = options or SearchOptions()
    needle = query.lower()

    matches = [r for r in resources if options.matches(r) and (not needle or _matches_query(r, needle))]
    return sorted(matches, key=lambda r: score_match(r, needle), reverse=True)


def score_match(resource: Resource, query: str) -> int:
    """Score one resource against an already lower-cased query."""
    if not query:
        return 0

    name = resource.name.lower()
    if name == query:
        return SCORE_EXACT
    if name.startswith(query):
        return SCORE_PREFIX
    if query in name:
        return SCORE_CONTAINS
    if query in resource.description.lower():
        return SCORE_DESCRIPTION
    return 0


def _matches_query(resource: Resource, query: str) -> bool:
    return query in resource.name.lower() or query in resource.description.lower()
