"""
User search screen.

Provides:
- SearchScreen: Textual widget with search bar and results list
- SearchPresenter: Search state machine and directory calls
"""

from .search_presenter import DisplayMode, Notification, SearchPresenter, SearchStateVM
from .search_screen import SearchScreen

__all__ = [
    "DisplayMode",
    "Notification",
    "SearchPresenter",
    "SearchScreen",
    "SearchStateVM",
]
