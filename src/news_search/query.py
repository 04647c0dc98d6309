from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Optional

import requests

from .config import (
    EVERYTHING_URL,
    FALLBACK_QUERY,
    MIN_QUERY_LENGTH,
    TOP_HEADLINES_URL,
)
from .datamodels import QueryState
from .exceptions import ValidationError
from .pagination import has_more_pages


@dataclass(frozen=True)
class RequestSpec:
    endpoint: str
    params: Dict[str, str]

    @property
    def url(self) -> str:
        return requests.Request("GET", self.endpoint, params=self.params).prepare().url

    @property
    def redacted_url(self) -> str:
        """URL safe to write to the log."""
        params = dict(self.params)
        if "apiKey" in params:
            params["apiKey"] = "***"
        return requests.Request("GET", self.endpoint, params=params).prepare().url


def build_request(state: QueryState, api_key: str) -> RequestSpec:
    """Pick the endpoint shape for a query state.

    Search text wins over category; with neither, fall back to a keyword
    search for the latest articles. The headlines endpoint rejects sortBy.
    """
    paging = {"pageSize": str(state.page_size), "page": str(state.page)}
    if state.search_text:
        params = {
            "q": state.search_text,
            "searchIn": "title,description",
            **paging,
            "sortBy": "publishedAt",
        }
        endpoint = EVERYTHING_URL
    elif state.category:
        params = {"category": state.category, **paging}
        endpoint = TOP_HEADLINES_URL
    else:
        params = {"q": FALLBACK_QUERY, **paging, "sortBy": "publishedAt"}
        endpoint = EVERYTHING_URL
    params["apiKey"] = api_key
    return RequestSpec(endpoint=endpoint, params=params)


def validate_search_text(text: str) -> str:
    term = (text or "").strip()
    if not term:
        raise ValidationError("Please enter a search term.")
    if len(term) < MIN_QUERY_LENGTH:
        raise ValidationError(
            f"Search term must be at least {MIN_QUERY_LENGTH} characters."
        )
    return term


# --- State transitions ---
def initial_state(page_size: Optional[int] = None) -> QueryState:
    if page_size is None:
        return QueryState()
    return QueryState(page_size=page_size)


def submit_search(state: QueryState, text: str, category: str = "") -> QueryState:
    term = validate_search_text(text)
    return replace(state, search_text=term, category=category or "", page=1)


def change_category(state: QueryState, category: str, text: str = "") -> QueryState:
    return replace(
        state, category=category or "", search_text=(text or "").strip(), page=1
    )


def clear_filters(state: QueryState) -> QueryState:
    return replace(state, search_text="", category="", page=1)


def next_page(state: QueryState) -> Optional[QueryState]:
    if not has_more_pages(state.page, state.page_size, state.total_results):
        return None
    return replace(state, page=state.page + 1)


def previous_page(state: QueryState) -> Optional[QueryState]:
    if state.page <= 1:
        return None
    return replace(state, page=state.page - 1)


def with_total(state: QueryState, total_results: int) -> QueryState:
    return replace(state, total_results=max(0, total_results))
