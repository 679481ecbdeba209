from chaincalc.theme import favicon_svg, resolve_theme, toggle_theme


def test_user_choice_wins():
    assert resolve_theme("dark", prefers_dark=False) == "dark"
    assert resolve_theme("light", prefers_dark=True) == "light"


def test_system_preference_without_choice():
    assert resolve_theme(None, prefers_dark=True) == "dark"
    assert resolve_theme("sepia") == "light"


def test_toggle():
    assert toggle_theme("dark") == "light"
    assert toggle_theme("light") == "dark"


def test_favicon_colours():
    dark = favicon_svg("dark")
    assert 'fill="#1a1a1a"' in dark and '<g fill="#ffffff">' in dark
    light = favicon_svg("light")
    assert 'fill="#f0f0f0"' in light and '<g fill="#000000">' in light
