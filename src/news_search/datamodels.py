from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import PAGE_SIZE


# --- Data models ---
@dataclass(frozen=True)
class QueryState:
    search_text: str = ""
    category: str = ""
    page: int = 1
    page_size: int = PAGE_SIZE
    total_results: int = 0

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.total_results < 0:
            raise ValueError(f"total_results must be >= 0, got {self.total_results}")


@dataclass(frozen=True)
class Article:
    title: str
    url: str
    published_at: str = ""
    description: Optional[str] = None
    url_to_image: Optional[str] = None
    source_name: Optional[str] = None
    author: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Article":
        source = data.get("source") or {}
        return cls(
            title=data.get("title") or "",
            url=data.get("url") or "",
            published_at=data.get("publishedAt") or "",
            description=data.get("description"),
            url_to_image=data.get("urlToImage"),
            source_name=source.get("name") if isinstance(source, dict) else None,
            author=data.get("author"),
        )


@dataclass
class ArticlePage:
    articles: List[Article] = field(default_factory=list)
    total_results: int = 0


@dataclass(frozen=True)
class PaginationInfo:
    page: int
    has_more: bool
    prev_enabled: bool
    next_enabled: bool
    accessible_total: int

    @property
    def label(self) -> str:
        return f"Page {self.page} (Total available: {self.accessible_total} articles)"


@dataclass(frozen=True)
class ArticleCard:
    title: str
    description: str
    url: str
    image_url: str
    source: str
    date: str
    byline: str = ""
