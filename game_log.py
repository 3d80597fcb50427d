"""Game log for Yahtzee — records player actions for the post-game replay.

Pure Python, no frontend dependency. Captures rolls, freeze changes and
scoring decisions for each turn. The log lives in the frontend layer; the
game session itself keeps no history beyond the active turn.
"""
from __future__ import annotations

from dataclasses import dataclass

from game_engine import Category


@dataclass
class LogEntry:
    """A single logged game event."""
    turn: int                                   # 1-13
    event_type: str                             # "roll", "freeze", "score"
    dice_values: tuple[int, ...]
    frozen_indices: tuple[int, ...] | None = None
    category: Category | None = None
    score: int | None = None
    roll_number: int = 0                        # 1-3 for rolls


class GameLog:
    """Accumulates LogEntry records during a game."""

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []

    def log_roll(self, turn: int, roll_number: int, dice_values: list[int]) -> None:
        """Record a dice roll."""
        self.entries.append(LogEntry(
            turn=turn,
            event_type="roll",
            dice_values=tuple(dice_values),
            roll_number=roll_number,
        ))

    def log_freeze_change(self, turn: int, frozen_indices: list[int], dice_values: list[int]) -> None:
        """Record a freeze/unfreeze change."""
        self.entries.append(LogEntry(
            turn=turn,
            event_type="freeze",
            dice_values=tuple(dice_values),
            frozen_indices=tuple(frozen_indices),
        ))

    def log_score(self, turn: int, category: Category, score: int, dice_values: list[int]) -> None:
        """Record a scoring decision."""
        self.entries.append(LogEntry(
            turn=turn,
            event_type="score",
            dice_values=tuple(dice_values),
            category=category,
            score=score,
        ))

    def get_turn_entries(self, turn: int) -> list[LogEntry]:
        """Return all entries for a specific turn."""
        return [e for e in self.entries if e.turn == turn]

    def get_score_entries(self) -> list[LogEntry]:
        """Return only scoring entries."""
        return [e for e in self.entries if e.event_type == "score"]

    def clear(self) -> None:
        """Remove all entries."""
        self.entries = []
