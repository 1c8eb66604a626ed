"""
findpeople TUI theme definitions, built on Textual's theming system.
"""

from typing import Any

from textual.theme import Theme

# =============================================================================
# Dark Theme (Default)
# =============================================================================

FINDPEOPLE_DARK = Theme(
    name="findpeople-dark",
    primary="#3D8BFD",      # Blue - search button, focus borders
    secondary="#6F42C1",    # Purple - secondary accent
    accent="#20C997",       # Teal - highlighted result row
    foreground="#E6E6E6",
    background="#121212",
    surface="#1E1E1E",      # Search bar, dialogs
    panel="#2A2A2A",
    boost="#303030",
    success="#4EBF71",      # Connection request sent
    warning="#FFA62B",
    error="#E5484D",        # Search errors, failed requests
    dark=True,
)

# =============================================================================
# Light Theme
# =============================================================================

FINDPEOPLE_LIGHT = Theme(
    name="findpeople-light",
    primary="#0969DA",
    secondary="#8250DF",
    accent="#1A7F64",
    foreground="#1F2328",
    background="#FFFFFF",
    surface="#F5F5F5",
    panel="#EDEDED",
    boost="#DFE3E8",
    success="#1A7F37",
    warning="#9A6700",
    error="#CF222E",
    dark=False,
)

FINDPEOPLE_THEMES: dict[str, Theme] = {
    "findpeople-dark": FINDPEOPLE_DARK,
    "findpeople-light": FINDPEOPLE_LIGHT,
}


def register_all_themes(app: Any) -> None:
    """Register the custom themes with a Textual App."""
    for theme in FINDPEOPLE_THEMES.values():
        app.register_theme(theme)


def get_theme_names() -> list[str]:
    return list(FINDPEOPLE_THEMES.keys())
