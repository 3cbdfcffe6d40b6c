"""
score_store.py: Flat-file persistence for the best score.
"""

import logging
from pathlib import Path
from typing import Union

from .constants import FISH_HIGH_SCORE_FILE

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Reads and overwrites a single integer kept as text in one file."""

    def __init__(self, path: Union[str, Path] = FISH_HIGH_SCORE_FILE):
        self.path = Path(path)

    def load(self) -> int:
        """Returns the stored high score, or 0 when it can't be read."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return 0
        except OSError as e:
            logger.warning("Could not read high score from %s: %s", self.path, e)
            return 0

        tokens = text.split()
        if not tokens:
            return 0
        try:
            return int(tokens[0])
        except ValueError:
            logger.warning("Ignoring malformed high score file %s", self.path)
            return 0

    def save(self, score: int) -> bool:
        """Overwrites the stored score. Returns False if the write failed."""
        try:
            self.path.write_text(str(int(score)), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)
            return False
        logger.debug("High score %d saved to %s", score, self.path)
        return True
