from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import pytest

from news_search import query
from news_search.config import EVERYTHING_URL, PAGE_SIZE, TOP_HEADLINES_URL
from news_search.datamodels import QueryState
from news_search.exceptions import ValidationError


def _query_of(url):
    return {k: v[0] for k, v in parse_qs(urlparse(url).query).items()}


def test_keyword_search_shape():
    spec = query.build_request(QueryState(search_text="ai", page=1), "key")
    assert spec.endpoint == EVERYTHING_URL
    params = _query_of(spec.url)
    assert params["q"] == "ai"
    assert params["page"] == "1"
    assert params["pageSize"] == str(PAGE_SIZE)
    assert params["searchIn"] == "title,description"
    assert params["sortBy"] == "publishedAt"
    assert params["apiKey"] == "key"


def test_category_headlines_shape_has_no_sort():
    spec = query.build_request(QueryState(category="sports", page=2), "key")
    assert spec.endpoint == TOP_HEADLINES_URL
    params = _query_of(spec.url)
    assert params["category"] == "sports"
    assert params["page"] == "2"
    assert "sortBy" not in params
    assert "q" not in params


def test_fallback_latest_shape():
    spec = query.build_request(QueryState(), "key")
    assert spec.endpoint == EVERYTHING_URL
    params = _query_of(spec.url)
    assert params["q"] == "latest"
    assert params["sortBy"] == "publishedAt"
    assert "searchIn" not in params


@pytest.mark.parametrize("category", ["", "business", "sports"])
def test_search_text_takes_priority_over_category(category):
    spec = query.build_request(QueryState(search_text="climate", category=category), "key")
    assert spec.endpoint == EVERYTHING_URL
    assert spec.params["q"] == "climate"
    assert "category" not in spec.params


def test_search_text_is_url_escaped():
    spec = query.build_request(QueryState(search_text="rock & roll"), "key")
    assert "rock+%26+roll" in spec.url or "rock%20%26%20roll" in spec.url
    assert _query_of(spec.url)["q"] == "rock & roll"


def test_redacted_url_hides_api_key():
    spec = query.build_request(QueryState(), "super-secret")
    assert "super-secret" not in spec.redacted_url
    assert "super-secret" in spec.url


@pytest.mark.parametrize("text", ["", " ", "a", "  b  "])
def test_short_search_text_is_rejected(text):
    state = QueryState(page=3)
    with pytest.raises(ValidationError):
        query.submit_search(state, text)


def test_validation_messages():
    with pytest.raises(ValidationError, match="Please enter a search term."):
        query.validate_search_text("   ")
    with pytest.raises(ValidationError, match="at least 2 characters"):
        query.validate_search_text("x")


def test_submit_search_trims_and_resets_page():
    state = QueryState(page=4, total_results=100)
    new_state = query.submit_search(state, "  ai  ", "science")
    assert new_state.search_text == "ai"
    assert new_state.category == "science"
    assert new_state.page == 1
    assert state.page == 4


def test_change_category_bypasses_length_rule():
    new_state = query.change_category(QueryState(page=5), "health", "a")
    assert new_state.category == "health"
    assert new_state.search_text == "a"
    assert new_state.page == 1


def test_clear_filters_resets_to_fallback():
    state = QueryState(search_text="ai", category="sports", page=3, total_results=50)
    cleared = query.clear_filters(state)
    assert (cleared.search_text, cleared.category, cleared.page) == ("", "", 1)
    assert query.build_request(cleared, "k").params["q"] == "latest"


def test_next_page_only_when_more_results():
    state = QueryState(page=1, page_size=9, total_results=10)
    assert query.next_page(state).page == 2
    assert query.next_page(QueryState(page=2, page_size=9, total_results=18)) is None


def test_previous_page_never_goes_below_one():
    assert query.previous_page(QueryState(page=1)) is None
    assert query.previous_page(QueryState(page=3)).page == 2


def test_page_must_be_positive():
    with pytest.raises(ValueError):
        QueryState(page=0)
