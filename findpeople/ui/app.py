"""
Textual application hosting the user search screen.
"""

import logging
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from findpeople.config.ui_config import get_theme, set_theme
from findpeople.services.directory import UserDirectoryService

from .search import SearchScreen
from .themes import get_theme_names, register_all_themes

logger = logging.getLogger(__name__)


class FindPeopleApp(App):
    """Single-screen app: search the directory, open profiles, send requests."""

    TITLE = "Find People"

    BINDINGS = [
        Binding("ctrl+t", "cycle_theme", "Theme"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, directory: UserDirectoryService, theme: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.directory = directory
        self._requested_theme = theme

    def compose(self) -> ComposeResult:
        yield Header()
        yield SearchScreen(self.directory, id="search-screen")
        yield Footer()

    def on_mount(self) -> None:
        register_all_themes(self)
        theme_name = self._requested_theme or get_theme()
        if theme_name in self.available_themes:
            self.theme = theme_name
        else:
            logger.warning("Unknown theme %r, keeping %r", theme_name, self.theme)
        logger.info("FindPeopleApp started with theme %s", self.theme)

    def action_cycle_theme(self) -> None:
        names = get_theme_names()
        current = names.index(self.theme) if self.theme in names else -1
        self.theme = names[(current + 1) % len(names)]
        set_theme(self.theme)
        self.notify(f"Theme: {self.theme}", timeout=1)
