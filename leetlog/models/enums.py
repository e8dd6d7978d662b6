# leetlog/models/enums.py
from enum import Enum, IntEnum

class DifficultyLevel(IntEnum):
    """Catalog difficulty levels, as encoded in `difficulty.level`."""
    EASY = 1
    MEDIUM = 2
    HARD = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_label(cls, label: str) -> "DifficultyLevel":
        try:
            return cls[label.strip().upper()]
        except KeyError:
            raise ValueError(f"'{label}' is not a valid difficulty (easy, medium, hard)")

class StatsRange(str, Enum):
    """Ranges accepted by the stats and chart queries."""
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
