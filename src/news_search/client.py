from __future__ import annotations

import logging
from typing import Any, Dict, List

import requests

from .config import HTTP_TIMEOUT, REQUEST_HEADERS
from .datamodels import Article, ArticlePage
from .exceptions import ApiMessageError, ApiStatusError, NetworkError
from .query import RequestSpec

logger = logging.getLogger("news_search")


class NewsApiClient:
    """Issues one GET per call against NewsAPI and parses the article page."""

    def __init__(self, session: requests.Session | None = None, timeout: int = HTTP_TIMEOUT):
        self.session = session or self._create_session()
        self.timeout = timeout

    def _create_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update(REQUEST_HEADERS)
        return s

    def fetch(self, spec: RequestSpec) -> ArticlePage:
        logger.debug("Fetching %s", spec.redacted_url)
        try:
            resp = self.session.get(spec.endpoint, params=spec.params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Request failed for %s: %s", spec.redacted_url, e)
            raise NetworkError() from e

        if not resp.ok:
            logger.warning("API returned HTTP %d for %s", resp.status_code, spec.redacted_url)
            raise ApiStatusError(resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            logger.warning("Response from %s was not JSON: %s", spec.redacted_url, e)
            raise ApiMessageError() from e

        if not isinstance(data, dict) or data.get("status") != "ok":
            body: Dict[str, Any] = data if isinstance(data, dict) else {}
            raise ApiMessageError(body.get("message"), code=body.get("code"))

        page = ArticlePage(
            articles=_parse_articles(data.get("articles")),
            total_results=_as_count(data.get("totalResults")),
        )
        logger.debug(
            "Fetched %d articles (total %d)", len(page.articles), page.total_results
        )
        return page


def _parse_articles(items: Any) -> List[Article]:
    if not isinstance(items, list):
        return []
    return [Article.from_api(item) for item in items if isinstance(item, dict)]


def _as_count(value: Any) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0
