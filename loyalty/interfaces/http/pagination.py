"""Query-string parsing shared by the paginated list endpoints."""
from typing import Collection, Optional

from fastapi import HTTPException

from loyalty.core.config import Settings
from loyalty.modules.common import PageRequest, SortSpec


def build_page_request(
    settings: Settings,
    *,
    page: int,
    limit: Optional[int],
    sort_by: str,
    allowed: Collection[str],
) -> PageRequest:
    """Turn ``page``/``limit``/``sort_by`` into a ``PageRequest``; bad sorts are a 422."""
    try:
        sort = SortSpec.parse(sort_by, allowed)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    page_size = min(limit or settings.pagination.default_page_size, settings.pagination.max_page_size)
    return PageRequest(page=page, limit=page_size, sort=sort)


__all__ = ["build_page_request"]
