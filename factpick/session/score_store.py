"""
Score Store - Persistence for the best streak.

The best streak is the only durable state in the engine. Sessions read it
when a game starts and write it whenever a run beats it. Where it lives is
up to the implementation:
- InMemoryScoreStore: process lifetime only (tests, API default)
- JsonFileScoreStore: a small JSON file on local disk
"""

from __future__ import annotations
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class ScoreStore(ABC):
    """Interface for reading and writing the best streak."""

    @abstractmethod
    def get(self) -> int:
        """Return the stored best streak (0 when nothing is stored)."""
        pass

    @abstractmethod
    def set(self, value: int):
        """Store a new best streak."""
        pass


class InMemoryScoreStore(ScoreStore):
    def __init__(self, initial: int = 0):
        self._value = initial

    def get(self) -> int:
        return self._value

    def set(self, value: int):
        self._value = value


class JsonFileScoreStore(ScoreStore):
    """
    Stores {"best_streak": n} in a JSON file.

    Usage:
        store = JsonFileScoreStore("~/.factpick/best_streak.json")
        best = store.get()
        store.set(best + 1)
    """

    def __init__(self, path: str | Path | None = None):
        if path is None:
            path = Path.home() / ".factpick" / "best_streak.json"
        self.path = Path(path).expanduser()

    def get(self) -> int:
        if not self.path.exists():
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return int(data.get("best_streak", 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            # A corrupt score file must not stop a game from starting
            logger.warning("Ignoring unreadable score file %s: %s", self.path, e)
            return 0

    def set(self, value: int):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"best_streak": int(value)}, f)
