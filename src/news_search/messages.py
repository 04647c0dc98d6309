from __future__ import annotations

from typing import Sequence

from textual.message import Message

from .datamodels import ArticleCard, PaginationInfo


class ResultsReady(Message):
    """Article cards to show in the results list."""
    def __init__(self, cards: Sequence[ArticleCard]) -> None:
        self.cards = list(cards)
        super().__init__()


class NoticeRaised(Message):
    """An informational message, such as an empty result set."""
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__()


class ErrorRaised(Message):
    """A message for the error banner. Empty text clears the banner."""
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__()


class LoadingChanged(Message):
    def __init__(self, loading: bool) -> None:
        self.loading = loading
        super().__init__()


class PaginationChanged(Message):
    def __init__(self, info: PaginationInfo) -> None:
        self.info = info
        super().__init__()
