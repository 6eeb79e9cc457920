"""
High-score persistence
"""

from __future__ import annotations

import json
import logging
import os

logger = logging.getLogger(__name__)


class MemoryHighScoreStore:
    """In-process store, used for headless runs and tests"""

    def __init__(self, value: int = 0):
        self.value = max(0, int(value))
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, score: int):
        self.value = int(score)
        self.saves += 1


class JsonHighScoreStore:
    """
    Best score kept in a small JSON file, e.g. ``{"chase_highscore": 42}``.

    Anything unreadable loads as 0 so a corrupt file never blocks startup.
    """

    def __init__(self, path: str, key: str = "chase_highscore"):
        self.path = path
        self.key = key

    def load(self) -> int:
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
            value = int(data[self.key])
        except FileNotFoundError:
            return 0
        except (OSError, ValueError, TypeError, KeyError, OverflowError) as exc:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, exc)
            return 0
        return value if value > 0 else 0

    def save(self, score: int):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump({self.key: int(score)}, f)
