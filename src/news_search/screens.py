from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, Markdown


class ErrorScreen(Screen):
    BINDINGS = [
        Binding("q", "app.quit", "Quit"),
    ]

    def __init__(self, title: str, message: str):
        super().__init__()
        self.error_title = title
        self.message = message

    def compose(self) -> ComposeResult:
        yield Header()
        yield Label(self.error_title, classes="error-title")
        yield Markdown(self.message)
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.error_title
