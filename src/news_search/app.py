from __future__ import annotations

import logging
import webbrowser
from functools import partial
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.worker import Worker, WorkerState
from textual.widgets import (
    Button,
    Header,
    Input,
    ListView,
    LoadingIndicator,
    Select,
)

from .client import NewsApiClient
from .config import API_KEY_ENV, CATEGORIES, CONFIG_PATH
from .controller import SearchController
from .datamodels import ArticleCard, PaginationInfo, QueryState
from .exceptions import GENERIC_FETCH_MESSAGE
from .messages import (
    ErrorRaised,
    LoadingChanged,
    NoticeRaised,
    PaginationChanged,
    ResultsReady,
)
from .screens import ErrorScreen
from .themes import Theme, ThemeStore, load_themes
from .widgets import ArticleCardItem, MessageBanner, PaginationBar, StatusBar

logger = logging.getLogger("news_search")

CATEGORY_OPTIONS = [("All Categories", "")] + [(c.title(), c) for c in CATEGORIES]


class TextualRenderer:
    """Renderer that forwards every update to the app as a Textual message.

    ``post_message`` is thread safe, so this may be called from search workers.
    """

    def __init__(self, app: App):
        self.app = app

    def render_results(self, cards: Sequence[ArticleCard]) -> None:
        self.app.post_message(ResultsReady(cards))

    def render_notice(self, message: str) -> None:
        self.app.post_message(NoticeRaised(message))

    def render_error(self, message: str) -> None:
        self.app.post_message(ErrorRaised(message))

    def clear_error(self) -> None:
        self.app.post_message(ErrorRaised(""))

    def set_loading(self, loading: bool) -> None:
        self.app.post_message(LoadingChanged(loading))

    def render_pagination(self, info: PaginationInfo) -> None:
        self.app.post_message(PaginationChanged(info))


class NewsApp(App):
    TITLE = "News Search"
    SUB_TITLE = "Powered by NewsAPI"

    CSS = """
    Screen { background: $background; color: $foreground; }
    #search-bar { height: auto; padding: 0 1; }
    #search-input { width: 1fr; }
    #category-select { width: 28; }
    #theme-bar { height: auto; padding: 0 1; }
    #theme-bar Button.active { background: $accent; text-style: bold; }
    MessageBanner { padding: 0 1; margin: 0 1; display: none; }
    MessageBanner.error { background: $error 20%; color: $error; }
    MessageBanner.notice { background: $panel; }
    #loading { height: 3; }
    #results { height: 1fr; }
    ArticleCardItem { padding: 1 1; border-bottom: solid $panel; }
    .card-source { color: $secondary; }
    .card-title { color: $primary; }
    .card-meta { color: $secondary; }
    PaginationBar { height: auto; align: center middle; padding: 0 1; }
    #page-info { width: auto; padding: 1 2; }
    .error-title { text-style: bold; color: $error; padding: 1; }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("/", "focus_search", "Search"),
        Binding("r", "refresh", "Refresh"),
        Binding("left_square_bracket", "prev_page", "Prev page"),
        Binding("right_square_bracket", "next_page", "Next page"),
        Binding("o", "open_article", "Open in browser"),
        Binding("ctrl+t", "toggle_theme", "Toggle theme"),
    ]

    def __init__(
        self,
        api_key: Optional[str],
        theme_override: Optional[Theme] = None,
        theme_store: Optional[ThemeStore] = None,
        client: Optional[NewsApiClient] = None,
        url_opener: Callable[[str], Any] = webbrowser.open,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.api_key = api_key
        self.theme_store = theme_store or ThemeStore(CONFIG_PATH)
        self.theme_override = theme_override
        self.theme_choice = Theme.LIGHT
        self.url_opener = url_opener
        self.renderer = TextualRenderer(self)
        self._search_requests: Dict[Worker, Tuple[int, QueryState]] = {}
        self.controller = SearchController(
            client or NewsApiClient(),
            self.renderer,
            api_key or "",
            dispatcher=self._dispatch_search,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main"):
            with Horizontal(id="search-bar"):
                yield Input(placeholder="Search news...", id="search-input")
                yield Select(
                    CATEGORY_OPTIONS,
                    value="",
                    allow_blank=False,
                    id="category-select",
                )
                yield Button("Search", id="search-button", variant="primary")
                yield Button("Clear", id="clear-button")
            with Horizontal(id="theme-bar"):
                yield Button("Light", id="theme-light", classes="theme-button")
                yield Button("Dark", id="theme-dark", classes="theme-button")
            yield MessageBanner(id="banner")
            yield LoadingIndicator(id="loading")
            yield ListView(id="results")
            yield PaginationBar(id="pagination")
        yield StatusBar()

    def on_mount(self) -> None:
        for theme in load_themes().values():
            self.register_theme(theme)
        stored = self.theme_store.load()
        self._apply_theme(self.theme_override or stored)

        self.query_one("#loading", LoadingIndicator).display = False
        self.query_one(StatusBar).set_keybindings(
            "[b]/[/] search, [b]o[/] open, [b]ctrl+t[/] theme"
        )

        if not self.api_key:
            self.push_screen(
                ErrorScreen(
                    "No NewsAPI key configured",
                    f"Set `{API_KEY_ENV}`, pass `--api-key`, or add `api_key` to "
                    f"`{CONFIG_PATH}`.",
                )
            )
            return

        self.controller.load_default()

    # --- Search dispatch ---
    def _dispatch_search(self, sequence: int, state: QueryState) -> None:
        worker = self.run_worker(
            partial(self.controller.fetch, state),
            name="search",
            group="search",
            thread=True,
            exclusive=True,
            exit_on_error=False,
        )
        self._search_requests[worker] = (sequence, state)

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        # results are applied here, on the UI thread, never in the worker
        request = self._search_requests.get(event.worker)
        if request is None:
            return
        sequence, state = request
        if event.state is WorkerState.SUCCESS:
            del self._search_requests[event.worker]
            self.controller.complete(sequence, state, event.worker.result)
        elif event.state is WorkerState.ERROR:
            del self._search_requests[event.worker]
            logger.error("Search worker #%d failed: %s", sequence, event.worker.error)
            self.controller.fail(sequence, GENERIC_FETCH_MESSAGE)
        elif event.state is WorkerState.CANCELLED:
            del self._search_requests[event.worker]

    # --- Renderer message handlers ---
    def on_results_ready(self, message: ResultsReady) -> None:
        results = self.query_one("#results", ListView)
        results.clear()
        for card in message.cards:
            results.append(ArticleCardItem(card))
        results.scroll_home(animate=False)

    def on_notice_raised(self, message: NoticeRaised) -> None:
        self.query_one("#banner", MessageBanner).show_notice(message.text)

    def on_error_raised(self, message: ErrorRaised) -> None:
        if message.text:
            self._show_error(message.text)
        else:
            self.query_one("#banner", MessageBanner).hide_message()

    def on_loading_changed(self, message: LoadingChanged) -> None:
        self._set_loading(message.loading)

    def on_pagination_changed(self, message: PaginationChanged) -> None:
        self.query_one(PaginationBar).update_info(message.info)

    def _show_error(self, text: str) -> None:
        self.query_one("#banner", MessageBanner).show_error(text)

    def _set_loading(self, loading: bool) -> None:
        self.query_one("#loading", LoadingIndicator).display = loading
        self.query_one(StatusBar).loading_status = "Loading..." if loading else ""

    # --- User input ---
    def _current_text(self) -> str:
        return self.query_one("#search-input", Input).value.strip()

    def _current_category(self) -> str:
        value = self.query_one("#category-select", Select).value
        return value if isinstance(value, str) else ""

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search-input":
            self.controller.submit_search(event.value, self._current_category())

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "category-select":
            return
        category = event.value if isinstance(event.value, str) else ""
        if category == self.controller.state.category:
            return
        self.controller.change_category(category, self._current_text())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "search-button":
            self.controller.submit_search(self._current_text(), self._current_category())
        elif button_id == "clear-button":
            self.action_clear()
        elif button_id == "prev-page":
            self.action_prev_page()
        elif button_id == "next-page":
            self.action_next_page()
        elif button_id == "theme-light":
            self.action_choose_theme(Theme.LIGHT.value)
        elif button_id == "theme-dark":
            self.action_choose_theme(Theme.DARK.value)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, ArticleCardItem):
            self._open_card(event.item.card)

    # --- Actions ---
    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def action_refresh(self) -> None:
        if self.api_key:
            self.controller.refresh()

    def action_clear(self) -> None:
        self.query_one("#search-input", Input).value = ""
        # state first, so the select change handler sees no change
        self.controller.clear()
        self.query_one("#category-select", Select).value = ""

    def action_prev_page(self) -> None:
        self.controller.previous_page()

    def action_next_page(self) -> None:
        self.controller.next_page()

    def action_open_article(self) -> None:
        item = self.query_one("#results", ListView).highlighted_child
        if isinstance(item, ArticleCardItem):
            self._open_card(item.card)

    def _open_card(self, card: ArticleCard) -> None:
        if card.url:
            self.url_opener(card.url)

    def action_toggle_theme(self) -> None:
        self.action_choose_theme(self.theme_choice.toggled().value)

    def action_choose_theme(self, theme: str) -> None:
        chosen = Theme.parse(theme, self.theme_choice)
        self._apply_theme(chosen)
        self.theme_store.set(chosen)

    def _apply_theme(self, theme: Theme) -> None:
        self.theme_choice = theme
        self.theme = theme.textual_name
        self.sub_title = f"{theme.value.title()} theme"
        for button in self.query(".theme-button"):
            button.set_class(button.id == f"theme-{theme.value}", "active")
