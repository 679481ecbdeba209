"""
In-memory registry of calculators, one per browser client.

Each calculator is single-writer, so every entry carries its own lock and
callers run handlers through ``with_calculator`` only.
"""

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Callable, Dict, Optional, Tuple, TypeVar

from ..equation import EquationCalculator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Entry:
    __slots__ = ("calculator", "lock")

    def __init__(self) -> None:
        self.calculator = EquationCalculator()
        self.lock = threading.Lock()


class CalculatorRegistry:
    """Maps session ids to calculators, evicting the oldest past ``max_sessions``."""

    def __init__(self, max_sessions: int = 1000) -> None:
        self.max_sessions = max_sessions
        self._entries: "OrderedDict[str, _Entry]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, _Entry]:
        """
        Return the entry for ``session_id``, creating one if it is unknown.

        Args:
            session_id: Id from the client's cookie, or None

        Returns:
            (session_id, entry); the id differs from the input when a new
            session was created
        """
        with self._lock:
            if session_id and session_id in self._entries:
                self._entries.move_to_end(session_id)
                return session_id, self._entries[session_id]

            new_id = str(uuid.uuid4())
            entry = _Entry()
            self._entries[new_id] = entry
            logger.info("Created calculator session %s", new_id)
            while len(self._entries) > self.max_sessions:
                evicted, _ = self._entries.popitem(last=False)
                logger.info("Evicted calculator session %s", evicted)
            return new_id, entry

    def with_calculator(
        self, session_id: Optional[str], fn: Callable[[EquationCalculator], T]
    ) -> Tuple[str, T]:
        """Run ``fn`` against the session's calculator under its lock."""
        sid, entry = self.get_or_create(session_id)
        with entry.lock:
            return sid, fn(entry.calculator)

    def snapshot(self, session_id: Optional[str]) -> Tuple[str, Dict]:
        return self.with_calculator(session_id, lambda calc: calc.snapshot())
