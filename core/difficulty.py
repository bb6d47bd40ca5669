"""Per-game difficulty tables."""

from .config import MIN_DIFFICULTY, MAX_DIFFICULTY


class DifficultyTable:
    """Maps a difficulty level (1-10) to a game's own gameplay parameters.

    The session engine never interprets the parameters. A level missing from
    the table falls back to level 1.
    """

    def __init__(self, levels: dict[int, dict]):
        if MIN_DIFFICULTY not in levels:
            raise ValueError(f"Difficulty table must define level {MIN_DIFFICULTY}")
        self.levels = {int(level): dict(params) for level, params in levels.items()}

    def get(self, level) -> dict:
        try:
            key = int(level)
        except (TypeError, ValueError):
            key = MIN_DIFFICULTY
        return dict(self.levels.get(key, self.levels[MIN_DIFFICULTY]))

    def __contains__(self, level) -> bool:
        return level in self.levels

    def __len__(self) -> int:
        return len(self.levels)

    def is_complete(self) -> bool:
        """True when every level from MIN to MAX has its own entry."""
        return all(level in self.levels for level in range(MIN_DIFFICULTY, MAX_DIFFICULTY + 1))
