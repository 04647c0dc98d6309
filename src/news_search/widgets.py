from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import Button, ListItem, Static
from rich.text import Text

from .datamodels import ArticleCard, PaginationInfo


# --- UI Widgets ---
class ArticleCardItem(ListItem):
    """One news card. API text goes through Text() so it is never parsed as markup."""

    def __init__(self, card: ArticleCard):
        super().__init__()
        self.card = card

    def compose(self) -> ComposeResult:
        with Vertical(classes="card-container"):
            yield Static(Text(self.card.source, style="bold"), classes="card-source")
            yield Static(Text(self.card.title, style="bold"), classes="card-title")
            yield Static(Text(self.card.description), classes="card-description")
            meta = Text(self.card.date)
            if self.card.byline:
                meta.append("  ")
                meta.append(self.card.byline, style="italic")
            yield Static(meta, classes="card-meta")


class PaginationBar(Horizontal):
    def compose(self) -> ComposeResult:
        yield Button("Prev", id="prev-page", disabled=True)
        yield Static("Page 1", id="page-info")
        yield Button("Next", id="next-page", disabled=True)

    def update_info(self, info: PaginationInfo) -> None:
        self.query_one("#prev-page", Button).disabled = not info.prev_enabled
        self.query_one("#next-page", Button).disabled = not info.next_enabled
        self.query_one("#page-info", Static).update(info.label)


class StatusBar(Static):
    loading_status = reactive("")
    keybinding_hint = reactive("")

    def on_mount(self) -> None:
        self.update_display()

    def set_keybindings(self, hint: str) -> None:
        """Set the keybinding hint text."""
        self.keybinding_hint = hint

    def update_display(self) -> None:
        """Update the status bar display."""
        status_items = []
        if self.loading_status:
            status_items.append(self.loading_status)

        if self.keybinding_hint:
            status_items.append(self.keybinding_hint)

        self.update(" | ".join(status_items))

    def watch_loading_status(self, loading_status: str) -> None:
        self.update_display()

    def watch_keybinding_hint(self, keybinding_hint: str) -> None:
        self.update_display()


class MessageBanner(Static):
    """Error banner or informational notice; hidden when empty."""

    def show_error(self, message: str) -> None:
        self.remove_class("notice")
        self.add_class("error")
        self.update(Text(message, style="bold"))
        self.display = True

    def show_notice(self, message: str) -> None:
        self.remove_class("error")
        self.add_class("notice")
        self.update(Text(message))
        self.display = True

    def hide_message(self) -> None:
        self.update("")
        self.display = False
