"""Search controller: owns the query state and drives one fetch at a time."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Union

from .client import NewsApiClient
from .datamodels import ArticlePage, QueryState
from .exceptions import FetchError, ValidationError
from . import query
from .pagination import pagination_for
from .rendering import Renderer, format_article

logger = logging.getLogger("news_search")

EMPTY_RESULTS_MESSAGE = "No articles found. Try a different search or category."

FetchOutcome = Union[ArticlePage, FetchError]
Dispatcher = Callable[[int, QueryState], None]


class SearchController:
    """Maps user actions onto requests and writes the outcome to a renderer.

    Every request gets a sequence number. Only the most recently issued
    request may touch the state or the renderer when it completes; older
    results are dropped.

    ``dispatcher(sequence, state)`` decides where the network call runs. It
    must call ``fetch`` (any thread) and then hand the outcome to ``complete``
    on the thread that owns the controller. It defaults to running both
    inline; the Textual app runs ``fetch`` in a thread worker.
    """

    def __init__(
        self,
        client: NewsApiClient,
        renderer: Renderer,
        api_key: str,
        state: Optional[QueryState] = None,
        dispatcher: Optional[Dispatcher] = None,
    ):
        self.client = client
        self.renderer = renderer
        self.api_key = api_key
        self.state = state or query.initial_state()
        self.dispatcher = dispatcher or self._run_inline
        self._sequence = 0

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    def is_current(self, sequence: int) -> bool:
        return sequence == self._sequence

    # --- User actions ---
    def load_default(self) -> None:
        self.state = query.initial_state(self.state.page_size)
        self._start(self.state)

    def submit_search(self, text: str, category: str = "") -> bool:
        try:
            new_state = query.submit_search(self.state, text, category)
        except ValidationError as e:
            logger.info("Search rejected: %s", e.message)
            self.renderer.render_error(e.message)
            return False
        self._start(new_state)
        return True

    def change_category(self, category: str, text: str = "") -> None:
        self._start(query.change_category(self.state, category, text))

    def clear(self) -> None:
        self._start(query.clear_filters(self.state))

    def next_page(self) -> bool:
        new_state = query.next_page(self.state)
        if new_state is None:
            return False
        self._start(new_state)
        return True

    def previous_page(self) -> bool:
        new_state = query.previous_page(self.state)
        if new_state is None:
            return False
        self._start(new_state)
        return True

    def refresh(self) -> None:
        self._start(self.state)

    # --- Request lifecycle ---
    def _start(self, state: QueryState) -> int:
        self._sequence += 1
        sequence = self._sequence
        self.state = state
        self.renderer.clear_error()
        self.renderer.set_loading(True)
        logger.debug("Issuing request #%d for %s", sequence, state)
        self.dispatcher(sequence, state)
        return sequence

    def _run_inline(self, sequence: int, state: QueryState) -> None:
        self.complete(sequence, state, self.fetch(state))

    def fetch(self, state: QueryState) -> FetchOutcome:
        """Network half of a request. Touches neither state nor renderer,
        so it may run on a worker thread."""
        spec = query.build_request(state, self.api_key)
        try:
            return self.client.fetch(spec)
        except FetchError as e:
            return e

    @contextmanager
    def _loading(self, sequence: int) -> Iterator[None]:
        try:
            yield
        finally:
            if self.is_current(sequence):
                self.renderer.set_loading(False)

    def complete(
        self, sequence: int, state: QueryState, outcome: FetchOutcome
    ) -> Optional[ArticlePage]:
        """Apply a finished request. Must run on the thread that owns the state.

        Returns the page on success (including an empty one) and None on
        failure or when the request has been superseded.
        """
        if not self.is_current(sequence):
            logger.debug("Dropping stale result for request #%d", sequence)
            return None

        with self._loading(sequence):
            if isinstance(outcome, FetchError):
                logger.error("Error fetching news: %s", outcome.message)
                self.renderer.render_error(outcome.message)
                return None

            if not outcome.articles:
                self.state = query.with_total(state, 0)
                self.renderer.render_results([])
                self.renderer.render_pagination(pagination_for(self.state))
                self.renderer.render_notice(EMPTY_RESULTS_MESSAGE)
                return outcome

            self.state = query.with_total(state, outcome.total_results)
            self.renderer.render_results([format_article(a) for a in outcome.articles])
            self.renderer.render_pagination(pagination_for(self.state))
            return outcome

    def fail(self, sequence: int, message: str) -> None:
        """Report a request that died outside the normal fetch error path."""
        if not self.is_current(sequence):
            logger.debug("Ignoring failure of stale request #%d", sequence)
            return
        with self._loading(sequence):
            self.renderer.render_error(message)

    def search(self, state: QueryState) -> Optional[ArticlePage]:
        """Fetch and apply one page synchronously."""
        self._sequence += 1
        sequence = self._sequence
        self.state = state
        self.renderer.set_loading(True)
        return self.complete(sequence, state, self.fetch(state))
