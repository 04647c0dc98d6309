from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from news_search.datamodels import Article, ArticlePage
from news_search.exceptions import ApiStatusError
from news_search.main import build_parser, export_html, main
from news_search.themes import Theme


@pytest.fixture
def client():
    mock = MagicMock()
    mock.fetch.return_value = ArticlePage(
        articles=[Article(title="<b>Bold</b> claim", url="https://example.com/1")],
        total_results=1,
    )
    return mock


def test_export_html_writes_page(tmp_path, client):
    out = tmp_path / "news.html"
    ok = export_html("key", str(out), text="ai", page=2, theme=Theme.DARK, client=client)

    assert ok
    spec = client.fetch.call_args[0][0]
    assert spec.params["q"] == "ai"
    assert spec.params["page"] == "2"
    page = out.read_text()
    assert "&lt;b&gt;Bold&lt;/b&gt; claim" in page
    assert 'data-theme="dark"' in page


def test_export_html_category(tmp_path, client):
    out = tmp_path / "news.html"
    assert export_html("key", str(out), category="sports", client=client)
    assert client.fetch.call_args[0][0].params["category"] == "sports"


def test_export_html_rejects_short_query(tmp_path, client):
    out = tmp_path / "news.html"
    assert export_html("key", str(out), text="a", client=client) is False
    client.fetch.assert_not_called()
    assert "at least 2 characters" in out.read_text()


def test_export_html_reports_api_failure(tmp_path, client):
    client.fetch.side_effect = ApiStatusError(429)
    out = tmp_path / "news.html"
    assert export_html("key", str(out), client=client) is False
    assert "API Error: 429" in out.read_text()


def test_parser_rejects_unknown_category():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--category", "weather"])


def test_main_html_mode_without_key(tmp_path, monkeypatch):
    monkeypatch.delenv("NEWSAPI_KEY", raising=False)
    with patch("news_search.main.load_config", return_value={}):
        assert main(["--html", str(tmp_path / "out.html")]) == 2


def test_main_html_mode(tmp_path):
    out = tmp_path / "out.html"
    with patch("news_search.main.load_config", return_value={}), patch(
        "news_search.main.export_html", return_value=True
    ) as mock_export:
        assert main(["--html", str(out), "--api-key", "k", "--theme", "dark", "--query", "ai"]) == 0
    mock_export.assert_called_once_with("k", str(out), "ai", "", 1, Theme.DARK)
