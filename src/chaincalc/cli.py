"""Command-line front-end: replay key sequences or start the web widget."""

import json
from typing import List, Tuple

import click

from .config import Settings, configure_logging
from .equation import EquationCalculator
from .keymap import Button, find_button, resolve_key, route


def resolve_token(token: str) -> Button:
    """Accept a keypad value ("7", "×", "AC") or a keyboard name ("Enter", "*")."""
    button = find_button(token) or resolve_key(token)
    if button is None:
        raise click.BadParameter(f"unknown key: {token!r}", param_hint="TOKENS")
    return button


def replay(tokens: List[str]) -> Tuple[EquationCalculator, List[Tuple[str, str]]]:
    """Press each token on a fresh calculator, recording (button, display) pairs."""
    calc = EquationCalculator()
    steps: List[Tuple[str, str]] = []
    for token in tokens:
        button = resolve_token(token)
        steps.append((button.value, route(calc, button)))
    return calc, steps


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log state transitions")
def main(verbose: bool) -> None:
    """Chained-equation calculator."""
    configure_logging("DEBUG" if verbose else Settings.from_env().log_level)


@main.command()
@click.argument("tokens", nargs=-1, required=True)
@click.option("--trace", is_flag=True, default=False, help="Print the display after every key")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the final state as JSON")
def keys(tokens: Tuple[str, ...], trace: bool, as_json: bool) -> None:
    """Replay TOKENS (e.g. `4 1 + 8 =`) and print the resulting display."""
    calc, steps = replay(list(tokens))
    if trace:
        for value, display in steps:
            click.echo(f"{value}\t{display}")
    if as_json:
        click.echo(json.dumps(calc.snapshot(), ensure_ascii=False))
    elif not trace:
        click.echo(calc.display)


@main.command()
@click.option("--host", envvar="CHAINCALC_HOST", default="127.0.0.1", show_default=True)
@click.option("--port", envvar="CHAINCALC_PORT", default=5000, show_default=True, type=int)
@click.option("--debug", is_flag=True, default=False, help="Enable the Flask debugger")
def serve(host: str, port: int, debug: bool) -> None:
    """Run the web widget."""
    from .webapp.server import serve as run_server

    run_server(host, port, debug=debug)


if __name__ == "__main__":  # pragma: no cover
    main()
