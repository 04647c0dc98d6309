from __future__ import annotations

from .config import ACCESSIBLE_CEILING
from .datamodels import PaginationInfo, QueryState


def has_more_pages(page: int, page_size: int, total_results: int) -> bool:
    return page * page_size < total_results


def derive_pagination(page: int, page_size: int, total_results: int) -> PaginationInfo:
    """Work out which pagination controls are usable for a page of results.

    The displayed total is capped at the API's accessible ceiling even when the
    reported total is larger.
    """
    has_more = has_more_pages(page, page_size, total_results)
    return PaginationInfo(
        page=page,
        has_more=has_more,
        prev_enabled=page > 1,
        next_enabled=has_more,
        accessible_total=min(total_results, ACCESSIBLE_CEILING),
    )


def pagination_for(state: QueryState) -> PaginationInfo:
    return derive_pagination(state.page, state.page_size, state.total_results)
