"""
Web front-end for chaincalc.

Serves the keypad page and the JSON API behind it.
"""

from .server import app

__all__ = ["app"]
