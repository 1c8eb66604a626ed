"""
Search Screen - find users and send them connection requests.

Features:
- Search bar with submit-on-enter, a Search button and a clear button
- Results list (Enter opens the profile, "a" sends a connection request)
- Spinner, prompt and error message areas driven by the presenter state
"""

import logging
from collections.abc import Callable
from typing import Any

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Button, Input, LoadingIndicator, OptionList, Static
from textual.widgets.option_list import Option

from findpeople.models import Profile
from findpeople.services.directory import UserDirectoryService

from ..profile_screen import ProfileScreen
from .search_presenter import DisplayMode, Notification, SearchPresenter, SearchStateVM

logger = logging.getLogger(__name__)


class SearchScreen(Widget):
    """
    User search widget.

    Layout:
    - Title line
    - Search bar: input, clear button (only while text is present), Search button
    - Results area: spinner, prompt/error message, or the profile list
    """

    BINDINGS = [
        Binding("a", "request_connection", "Connect"),
        Binding("r", "retry_search", "Retry"),
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("slash", "focus_search", "Search"),
        Binding("escape", "clear_search", "Clear"),
    ]

    DEFAULT_CSS = """
    SearchScreen {
        layout: vertical;
        height: 1fr;
    }

    #search-title {
        height: 1;
        padding: 0 1;
        text-style: bold;
    }

    #search-bar {
        height: 3;
        padding: 0 1;
        background: $surface;
    }

    #search-input {
        width: 1fr;
    }

    #clear-button {
        min-width: 5;
        width: 5;
    }

    #search-button {
        min-width: 10;
    }

    #search-loading {
        height: 1fr;
    }

    #search-message {
        height: 1fr;
        width: 100%;
        content-align: center middle;
        text-align: center;
        color: $text-muted;
    }

    #search-message.-failure {
        color: $error;
    }

    #results-list {
        height: 1fr;
        scrollbar-gutter: stable;
    }
    """

    def __init__(
        self,
        directory: UserDirectoryService,
        *,
        title: str | None = None,
        search_hint: str | None = None,
        show_connection_action: bool = True,
        on_user_selected: Callable[[Profile], Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.presenter = SearchPresenter(
            directory,
            on_state_update=self._on_state_update,
            on_notify=self._on_notify,
        )
        self.title_text = title or "Find People"
        self.search_hint = search_hint or "Search by username or display name"
        self.show_connection_action = show_connection_action
        self.on_user_selected = on_user_selected
        self._rendered_results: tuple[Profile, ...] | None = None

    def compose(self) -> ComposeResult:
        yield Static(self.title_text, id="search-title")
        with Horizontal(id="search-bar"):
            yield Input(placeholder=self.search_hint, id="search-input")
            yield Button("✕", id="clear-button")
            yield Button("Search", id="search-button", variant="primary")
        yield LoadingIndicator(id="search-loading")
        yield Static(SearchPresenter.PROMPT, id="search-message")
        yield OptionList(id="results-list")

    def on_mount(self) -> None:
        logger.info("SearchScreen mounted")
        self.presenter.mount()
        self.query_one("#clear-button", Button).display = False
        self._render_state(self.presenter.state)
        self.query_one("#search-input", Input).focus()

    def on_unmount(self) -> None:
        self.presenter.unmount()

    # ------------------------------------------------------------------
    # Presenter callbacks
    # ------------------------------------------------------------------

    async def _on_state_update(self, state: SearchStateVM) -> None:
        self.call_later(self._render_state, state)

    async def _on_notify(self, notification: Notification) -> None:
        self.notify(
            notification.message,
            severity=notification.severity,
            timeout=notification.timeout,
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_state(self, state: SearchStateVM) -> None:
        """Show exactly one of spinner, message or list for the state's display mode."""
        mode = state.display_mode

        loading = self.query_one("#search-loading", LoadingIndicator)
        message = self.query_one("#search-message", Static)
        results_list = self.query_one("#results-list", OptionList)

        loading.display = mode is DisplayMode.LOADING
        message.display = mode in (DisplayMode.INITIAL, DisplayMode.ERROR)
        results_list.display = mode is DisplayMode.RESULTS

        if mode is DisplayMode.ERROR:
            message.update(Text(state.error_message))
            message.set_class(state.is_failure, "-failure")
        elif mode is DisplayMode.INITIAL:
            message.update(Text(SearchPresenter.PROMPT))
            message.remove_class("-failure")

        if state.results != self._rendered_results:
            results_list.clear_options()
            results_list.add_options(
                [Option(self._format_row(profile)) for profile in state.results]
            )
            self._rendered_results = state.results

    def _format_row(self, profile: Profile) -> Text:
        row = Text(profile.label, style="bold")
        if profile.is_verified:
            row.append(" ✓", style="green")
        if profile.handle and profile.handle != f"@{profile.label}":
            row.append(f"  {profile.handle}", style="dim")
        return row

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "search-input":
            return
        self.query_one("#clear-button", Button).display = bool(event.value)
        state = self.presenter.set_query(event.value)
        if event.value == "":
            self._render_state(state)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search-input":
            self._start_search()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "search-button":
            self._start_search()
        elif event.button.id == "clear-button":
            self.action_clear_search()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id != "results-list":
            return
        profile = self.presenter.result_at(event.option_index)
        if profile is not None:
            self._open_profile(profile)

    def _start_search(self) -> None:
        search_input = self.query_one("#search-input", Input)
        self.presenter.set_query(search_input.value)
        self.run_worker(self.presenter.search(), group="search")

    def _open_profile(self, profile: Profile) -> None:
        if self.on_user_selected is not None:
            self.on_user_selected(profile)
        else:
            self.app.push_screen(ProfileScreen(profile.id, self.presenter.directory))

    def _highlighted_profile(self) -> Profile | None:
        results_list = self.query_one("#results-list", OptionList)
        if results_list.highlighted is None:
            return None
        return self.presenter.result_at(results_list.highlighted)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_request_connection(self) -> None:
        """Send a connection request to the highlighted profile."""
        if not self.show_connection_action:
            return
        profile = self._highlighted_profile()
        if profile is None:
            return
        self.run_worker(self.presenter.send_connection_request(profile), group="connect")

    def action_retry_search(self) -> None:
        self._start_search()

    def action_clear_search(self) -> None:
        """Clear the query and go back to the prompt."""
        search_input = self.query_one("#search-input", Input)
        search_input.value = ""
        self.query_one("#clear-button", Button).display = False
        self._render_state(self.presenter.clear())
        search_input.focus()

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def action_cursor_down(self) -> None:
        results_list = self.query_one("#results-list", OptionList)
        if not results_list.has_focus:
            results_list.focus()
        results_list.action_cursor_down()

    def action_cursor_up(self) -> None:
        results_list = self.query_one("#results-list", OptionList)
        if not results_list.has_focus:
            results_list.focus()
        results_list.action_cursor_up()

    def set_query(self, query: str) -> None:
        """Set the query programmatically and search for it."""
        self.query_one("#search-input", Input).value = query
        self._start_search()
