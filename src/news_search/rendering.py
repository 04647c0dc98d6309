from __future__ import annotations

import re
from datetime import datetime
from typing import List, Optional, Protocol, Sequence

from .config import PLACEHOLDER_IMAGE_URL
from .datamodels import Article, ArticleCard, PaginationInfo

UNKNOWN_SOURCE = "Unknown Source"
NO_DESCRIPTION = "No description available"
UNKNOWN_DATE = "Unknown date"
BYLINE_LENGTH = 20

_FRACTION = re.compile(r"\.(\d+)")
_COMPACT_OFFSET = re.compile(r"([+-]\d{2})(\d{2})$")

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}


class Renderer(Protocol):
    """Surface the search controller writes into."""

    def render_results(self, cards: Sequence[ArticleCard]) -> None: ...

    def render_notice(self, message: str) -> None: ...

    def render_error(self, message: str) -> None: ...

    def clear_error(self) -> None: ...

    def set_loading(self, loading: bool) -> None: ...

    def render_pagination(self, info: PaginationInfo) -> None: ...


def escape_html(text: str) -> str:
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in text)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp as NewsAPI sends it.

    Accepts a trailing ``Z``, offsets without a colon and any number of
    fractional-second digits. Raises ``ValueError`` when unparseable.
    """
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    text = _COMPACT_OFFSET.sub(r"\1:\2", text)
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


def format_date(published_at: str) -> str:
    """Short en-US date in local time, e.g. ``Oct 5, 2024``."""
    if not published_at:
        return UNKNOWN_DATE
    try:
        dt = parse_timestamp(published_at).astimezone()
    except ValueError:
        return UNKNOWN_DATE
    return f"{dt:%b} {dt.day}, {dt.year}"


def format_byline(author: Optional[str]) -> str:
    if not author or not author.strip():
        return ""
    return f"by {author[:BYLINE_LENGTH]}..."


def format_article(article: Article) -> ArticleCard:
    return ArticleCard(
        title=article.title,
        description=article.description or NO_DESCRIPTION,
        url=article.url,
        image_url=article.url_to_image or PLACEHOLDER_IMAGE_URL,
        source=article.source_name or UNKNOWN_SOURCE,
        date=format_date(article.published_at),
        byline=format_byline(article.author),
    )


class HtmlRenderer:
    """Collects one search outcome as a standalone HTML page."""

    def __init__(self, theme: str = "light"):
        self.theme = theme
        self.cards: List[ArticleCard] = []
        self.error: Optional[str] = None
        self.notice: Optional[str] = None
        self.pagination: Optional[PaginationInfo] = None
        self.loading = False

    def render_results(self, cards: Sequence[ArticleCard]) -> None:
        self.cards = list(cards)
        self.notice = None

    def render_notice(self, message: str) -> None:
        self.cards = []
        self.notice = message

    def render_error(self, message: str) -> None:
        self.error = message

    def clear_error(self) -> None:
        self.error = None

    def set_loading(self, loading: bool) -> None:
        self.loading = loading

    def render_pagination(self, info: PaginationInfo) -> None:
        self.pagination = info

    def card_html(self, card: ArticleCard) -> str:
        byline = f"<span>{escape_html(card.byline)}</span>" if card.byline else "<span></span>"
        return (
            '<div class="news-card">\n'
            f'  <img src="{escape_html(card.image_url)}" alt="{escape_html(card.title)}" class="news-card-image">\n'
            '  <div class="news-card-content">\n'
            f'    <div class="news-card-source">{escape_html(card.source)}</div>\n'
            f'    <h3 class="news-card-title">{escape_html(card.title)}</h3>\n'
            f'    <p class="news-card-description">{escape_html(card.description)}</p>\n'
            '    <div class="news-card-meta">\n'
            f'      <span class="news-card-date">{escape_html(card.date)}</span>\n'
            f"      {byline}\n"
            "    </div>\n"
            f'    <a href="{escape_html(card.url)}" target="_blank" rel="noopener noreferrer" '
            'class="news-card-readmore">Read Full Article</a>\n'
            "  </div>\n"
            "</div>"
        )

    def to_html(self) -> str:
        parts = [
            "<!DOCTYPE html>",
            f'<html lang="en" data-theme="{escape_html(self.theme)}">',
            '<head><meta charset="utf-8"><title>News Search</title></head>',
            "<body>",
        ]
        if self.error:
            parts.append(f'<div id="error" class="show">{escape_html(self.error)}</div>')
        if self.notice:
            parts.append(f'<div id="notice">{escape_html(self.notice)}</div>')
        parts.append('<div id="results">')
        parts.extend(self.card_html(card) for card in self.cards)
        parts.append("</div>")
        if self.pagination:
            parts.append(f'<div id="pageInfo">{escape_html(self.pagination.label)}</div>')
        parts.extend(["</body>", "</html>"])
        return "\n".join(parts) + "\n"
