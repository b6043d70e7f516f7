"""
Shared FastAPI dependencies and response helpers.

Provides:
- Pagination query parameters
- The stale-stats response header
"""

from dataclasses import dataclass

from fastapi import Query, Response

from zencure.config import get_settings

STATS_STALE_HEADER = "X-Remedy-Stats-Stale"

_settings = get_settings()


@dataclass
class Pagination:
    page: int
    limit: int


def get_pagination(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(
        _settings.default_page_size,
        ge=1,
        le=_settings.max_page_size,
        description="Results per page",
    ),
) -> Pagination:
    return Pagination(page=page, limit=limit)


def flag_stale_stats(response: Response, stats_synced: bool) -> None:
    """Tell the client the remedy's rating summary may lag behind this change."""
    if not stats_synced:
        response.headers[STATS_STALE_HEADER] = "true"


__all__ = ["STATS_STALE_HEADER", "Pagination", "flag_stale_stats", "get_pagination"]
