from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from news_search.client import NewsApiClient
from news_search.datamodels import QueryState
from news_search.exceptions import ApiMessageError, ApiStatusError, NetworkError
from news_search.query import build_request


def _response(status_code=200, payload=None, json_error=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    if json_error:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def client():
    return NewsApiClient()


@pytest.fixture
def spec():
    return build_request(QueryState(search_text="ai"), "secret")


def test_fetch_parses_articles(client, spec):
    payload = {
        "status": "ok",
        "totalResults": 42,
        "articles": [
            {
                "source": {"id": None, "name": "Example News"},
                "author": "Jane Doe",
                "title": "AI everywhere",
                "description": "Summary",
                "url": "https://example.com/ai",
                "urlToImage": None,
                "publishedAt": "2024-10-05T12:00:00Z",
            },
            {"title": "No source", "url": "https://example.com/2", "source": None},
        ],
    }
    with patch.object(client.session, "get", return_value=_response(payload=payload)) as mock_get:
        page = client.fetch(spec)

    mock_get.assert_called_once()
    args, kwargs = mock_get.call_args
    assert args[0] == spec.endpoint
    assert kwargs["params"]["q"] == "ai"
    assert kwargs["timeout"] == client.timeout

    assert page.total_results == 42
    assert len(page.articles) == 2
    assert page.articles[0].source_name == "Example News"
    assert page.articles[0].published_at == "2024-10-05T12:00:00Z"
    assert page.articles[1].source_name is None


def test_fetch_non_2xx_raises_status_error(client, spec):
    with patch.object(client.session, "get", return_value=_response(status_code=401)):
        with pytest.raises(ApiStatusError) as exc_info:
            client.fetch(spec)
    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "API Error: 401"


def test_fetch_api_reported_error_uses_message(client, spec):
    payload = {"status": "error", "code": "apiKeyInvalid", "message": "Your API key is invalid."}
    with patch.object(client.session, "get", return_value=_response(payload=payload)):
        with pytest.raises(ApiMessageError) as exc_info:
            client.fetch(spec)
    assert exc_info.value.message == "Your API key is invalid."
    assert exc_info.value.code == "apiKeyInvalid"


def test_fetch_api_reported_error_without_message(client, spec):
    with patch.object(client.session, "get", return_value=_response(payload={"status": "error"})):
        with pytest.raises(ApiMessageError) as exc_info:
            client.fetch(spec)
    assert exc_info.value.message == "Failed to fetch news"


def test_fetch_invalid_json(client, spec):
    resp = _response(json_error=ValueError("bad json"))
    with patch.object(client.session, "get", return_value=resp):
        with pytest.raises(ApiMessageError):
            client.fetch(spec)


def test_fetch_transport_failure_raises_network_error(client, spec):
    with patch.object(
        client.session, "get", side_effect=requests.ConnectionError("offline")
    ):
        with pytest.raises(NetworkError) as exc_info:
            client.fetch(spec)
    assert "try again later" in exc_info.value.message


def test_fetch_tolerates_bad_total(client, spec):
    payload = {"status": "ok", "totalResults": None, "articles": []}
    with patch.object(client.session, "get", return_value=_response(payload=payload)):
        page = client.fetch(spec)
    assert page.total_results == 0
    assert page.articles == []


def test_session_sends_user_agent(client):
    assert "User-Agent" in client.session.headers
