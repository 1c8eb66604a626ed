"""
Profile detail modal, opened from a search result and keyed by user id.
"""

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from findpeople.models import Profile
from findpeople.services.directory import UserDirectoryService
from findpeople.utils.datetime_utils import format_relative_time

logger = logging.getLogger(__name__)


def format_profile(profile: Profile) -> Text:
    """Render a profile as a small card."""
    card = Text(profile.label, style="bold")
    if profile.is_verified:
        card.append(" ✓ verified", style="green")
    if profile.handle:
        card.append(f"\n{profile.handle}", style="dim")
    if profile.bio:
        card.append(f"\n\n{profile.bio}")
    if profile.last_seen_at:
        card.append(f"\n\nLast seen {format_relative_time(profile.last_seen_at)}", style="dim")
    card.append(f"\nid: {profile.id}", style="dim")
    return card


class ProfileScreen(ModalScreen):
    """Modal screen showing one user's profile."""

    DEFAULT_CSS = """
    ProfileScreen {
        align: center middle;
    }

    #profile-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: thick $background 80%;
        background: $surface;
    }

    #profile-body {
        height: auto;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("q", "close", "Close", show=False),
    ]

    def __init__(self, user_id: str, directory: UserDirectoryService):
        super().__init__()
        self.user_id = user_id
        self.directory = directory
        self.profile: Profile | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="profile-dialog"):
            yield Static("Loading profile...", id="profile-body")
            yield Button("Close", id="close-button")

    def on_mount(self) -> None:
        logger.info(f"ProfileScreen mounted for user {self.user_id}")
        self.run_worker(self._load_profile(), exclusive=True)

    async def _load_profile(self) -> None:
        body = self.query_one("#profile-body", Static)
        try:
            self.profile = await self.directory.get_profile(self.user_id)
        except Exception as e:
            logger.warning(f"Could not load profile {self.user_id}: {e}")
            body.update(Text(f"Could not load profile: {e}", style="red"))
            return
        body.update(format_profile(self.profile))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close-button":
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
