"""
Light/dark theme preference and the matching favicon.

The only persisted flag is the user's explicit choice; without one the theme
follows the system colour-scheme preference.
"""

from typing import Optional

THEMES = ("light", "dark")

_FAVICON_COLOURS = {
    # theme: (glyph fill, background)
    "dark": ("#ffffff", "#1a1a1a"),
    "light": ("#000000", "#f0f0f0"),
}

_FAVICON_TEMPLATE = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 512 512">'
    '<rect width="512" height="512" fill="{background}"/>'
    '<g fill="{fill}">'
    '<rect x="96" y="48" width="320" height="416" rx="40" fill-opacity="0.15"/>'
    '<rect x="136" y="88" width="240" height="96" rx="16"/>'
    '<circle cx="176" cy="256" r="28"/><circle cx="256" cy="256" r="28"/>'
    '<circle cx="336" cy="256" r="28"/><circle cx="176" cy="336" r="28"/>'
    '<circle cx="256" cy="336" r="28"/><circle cx="336" cy="336" r="28"/>'
    '<circle cx="176" cy="416" r="28"/><circle cx="256" cy="416" r="28"/>'
    '<circle cx="336" cy="416" r="28"/>'
    "</g></svg>"
)


def resolve_theme(user_theme: Optional[str], prefers_dark: bool = False) -> str:
    if user_theme in THEMES:
        return user_theme
    return "dark" if prefers_dark else "light"


def toggle_theme(current: str) -> str:
    return "light" if current == "dark" else "dark"


def favicon_svg(theme: str) -> str:
    fill, background = _FAVICON_COLOURS.get(theme, _FAVICON_COLOURS["light"])
    return _FAVICON_TEMPLATE.format(fill=fill, background=background)
