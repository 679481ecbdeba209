"""
Flask server for the chaincalc web widget.

Serves the keypad page and a small JSON API that feeds button presses and
keyboard keys into a per-client calculator.
"""

import logging
from typing import Optional

from flask import Flask, Response, jsonify, render_template, request

from ..config import Settings, configure_logging
from ..keymap import CALCULATOR_BUTTONS, KEYBOARD_MAP, Button, find_button, resolve_key, route
from ..theme import THEMES, favicon_svg, resolve_theme, toggle_theme
from .sessions import CalculatorRegistry

logger = logging.getLogger(__name__)

SESSION_COOKIE = "calc_id"
THEME_COOKIE = "userTheme"
THEME_HINT = "Sec-CH-Prefers-Color-Scheme"
_COOKIE_MAX_AGE = 365 * 24 * 3600

app = Flask(__name__)

# Configuration
settings = Settings.from_env()
registry = CalculatorRegistry(max_sessions=settings.max_sessions)


def _current_theme() -> str:
    prefers_dark = request.headers.get(THEME_HINT) == "dark"
    return resolve_theme(request.cookies.get(THEME_COOKIE), prefers_dark)


def _state_response(session_id: str, state: dict) -> Response:
    response = jsonify(state)
    if session_id != request.cookies.get(SESSION_COOKIE):
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="Lax")
    return response


def _with_theme_hint(response: Response) -> Response:
    """Ask the browser to send its colour-scheme preference on later requests."""
    response.headers["Accept-CH"] = THEME_HINT
    response.headers["Critical-CH"] = THEME_HINT
    response.vary.add(THEME_HINT)
    response.vary.add("Cookie")
    return response


@app.route("/")
def index():
    """
    Render the calculator keypad.

    ``user_theme`` tells the page whether the theme is an explicit choice;
    without one the page keeps following ``prefers-color-scheme``.
    """
    page = render_template(
        "index.html",
        buttons=CALCULATOR_BUTTONS,
        keyboard_map=KEYBOARD_MAP,
        theme=_current_theme(),
        user_theme=request.cookies.get(THEME_COOKIE) or "",
    )
    return _with_theme_hint(Response(page, mimetype="text/html"))


@app.route("/favicon.svg")
def favicon():
    theme = request.args.get("theme")
    if theme not in THEMES:
        theme = _current_theme()
    return _with_theme_hint(Response(favicon_svg(theme), mimetype="image/svg+xml"))


@app.route("/api/press", methods=["POST"])
def press():
    """
    Feed one input event into the client's calculator.

    Expected JSON payload, either a keypad button:
        {"value": "7", "kind": "number"}
    or a browser key name:
        {"key": "Enter"}

    Returns:
        {
            "display": "41+8=49",
            "first_operand": null,
            "second_operand": null,
            "pending_operator": null,
            "reset_pending": true,
            "error": false
        }
    """
    data = request.get_json(silent=True)

    if not data or not isinstance(data, dict):
        return jsonify({"error": "No JSON data provided"}), 400

    button: Optional[Button]
    if "key" in data:
        button = resolve_key(str(data["key"]))
        if button is None:
            return jsonify({"error": f"Unmapped key: {data['key']}"}), 400
    else:
        button = find_button(str(data.get("value", "")))
        if button is None or ("kind" in data and data["kind"] != button.kind):
            return jsonify({"error": f"Unknown button: {data.get('value')}"}), 400

    def apply(calc):
        route(calc, button)
        return calc.snapshot()

    session_id, state = registry.with_calculator(request.cookies.get(SESSION_COOKIE), apply)
    logger.debug("Session %s pressed %r -> %s", session_id, button.value, state["display"])
    return _state_response(session_id, state)


@app.route("/api/state", methods=["GET"])
def get_state():
    session_id, state = registry.snapshot(request.cookies.get(SESSION_COOKIE))
    return _state_response(session_id, state)


@app.route("/api/reset", methods=["POST"])
def reset():
    """Reset the client's calculator to its initial state."""

    def apply(calc):
        calc.reset()
        return calc.snapshot()

    session_id, state = registry.with_calculator(request.cookies.get(SESSION_COOKIE), apply)
    return _state_response(session_id, state)


@app.route("/api/theme", methods=["POST"])
def switch_theme():
    """
    Toggle light/dark and remember the choice in a cookie.

    Expected JSON payload (optional):
        {"current": "dark"}  # theme the page is showing right now
    """
    data = request.get_json(silent=True)
    current = data.get("current") if isinstance(data, dict) else None
    if current not in THEMES:
        current = _current_theme()
    new_theme = toggle_theme(current)
    logger.info("Theme changed to: %s", new_theme)
    response = jsonify({"theme": new_theme})
    response.set_cookie(THEME_COOKIE, new_theme, max_age=_COOKIE_MAX_AGE, samesite="Lax")
    return response


def main():
    """Run the Flask development server."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the chaincalc web server")
    parser.add_argument(
        "--host",
        default=settings.host,
        help=f"Host to bind to (default: {settings.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port to bind to (default: {settings.port})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable the Flask debugger and DEBUG logging",
    )

    args = parser.parse_args()
    serve(args.host, args.port, debug=args.debug)


def serve(host: str, port: int, debug: bool = False) -> None:
    configure_logging("DEBUG" if debug else settings.log_level)
    print("Starting chaincalc web server...")
    print(f"Access at: http://{host}:{port}")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    main()
