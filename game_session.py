"""
GameSession — drives a whole single-player game of Yahtzee.

Owns the scorecard and the active turn, opens a new turn after each scored
category, and detects game over. Frontends call the action methods in
response to input and read the properties to decide what to show.
"""
from __future__ import annotations

import logging
from enum import Enum

from game_engine import (
    Category,
    DiceSet,
    Scorecard,
    SessionNotActive,
    TurnController,
    TurnNotScored,
    TurnPhase,
    potential_scores,
)

logger = logging.getLogger(__name__)

NUM_ROUNDS = len(Category)


class SessionStatus(Enum):
    NOT_STARTED = "not started"
    IN_PROGRESS = "in progress"
    GAME_OVER = "game over"
    QUIT = "quit"


class GameSession:
    """Sequence of turns over one scorecard.

    Call start() before playing; select_category() scores the turn and
    immediately advances to the next one (or to game over).
    """

    def __init__(self) -> None:
        self.status = SessionStatus.NOT_STARTED
        self.scorecard: Scorecard | None = None
        self.dice: DiceSet | None = None
        self.turn: TurnController | None = None
        self.current_round = 0

    # ── Lifecycle ─────────────────────────────────────────────────────────

    def start(self) -> None:
        """Begin a new game with an empty scorecard. Discards any game in progress."""
        self.scorecard = Scorecard()
        self.dice = DiceSet()
        self.turn = TurnController(self.dice, self.scorecard)
        self.current_round = 1
        self.status = SessionStatus.IN_PROGRESS
        logger.info("new game started")

    def end_turn_and_advance(self) -> None:
        """Finish a scored turn: end the game if the card is full, else open the next turn."""
        self._check_active()
        if self.turn.phase != TurnPhase.SCORED:
            raise TurnNotScored("the current turn has not been scored yet")
        if self.scorecard.is_complete():
            self.status = SessionStatus.GAME_OVER
            logger.info("game over, final total %d", self.scorecard.total())
            return
        self.dice.reset()
        self.turn = TurnController(self.dice, self.scorecard)
        self.current_round += 1
        logger.debug("round %d/%d", self.current_round, NUM_ROUNDS)

    def quit(self) -> None:
        """Abandon the game. Ignored once the game is already over."""
        if self.status == SessionStatus.GAME_OVER:
            return
        self.turn = None
        self.dice = None
        self.status = SessionStatus.QUIT
        logger.info("game abandoned in round %d", self.current_round)

    def _check_active(self) -> None:
        if self.status != SessionStatus.IN_PROGRESS:
            raise SessionNotActive(f"game is {self.status.value}")

    # ── Actions ───────────────────────────────────────────────────────────

    def roll(self) -> None:
        """Roll the unfrozen dice."""
        self._check_active()
        self.turn.roll()

    def toggle_freeze(self, index: int) -> None:
        """Freeze or unfreeze the die at index (0-4)."""
        self._check_active()
        self.turn.toggle_freeze(index)

    def select_category(self, category: Category) -> int:
        """Score the current dice in category, then advance. Returns the score."""
        self._check_active()
        score = self.turn.select_category(category)
        self.end_turn_and_advance()
        return score

    # ── Queries ───────────────────────────────────────────────────────────

    def is_game_over(self) -> bool:
        return self.status == SessionStatus.GAME_OVER

    def final_total(self) -> int | None:
        """Grand total once the game is over, None otherwise."""
        if not self.is_game_over():
            return None
        return self.scorecard.total()

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.IN_PROGRESS

    @property
    def dice_values(self) -> tuple[int, ...]:
        """Current die values (0 = not rolled yet this turn)."""
        return self.dice.values() if self.dice is not None else ()

    @property
    def frozen(self) -> tuple[bool, ...]:
        """Current freeze flags."""
        return self.dice.frozen() if self.dice is not None else ()

    @property
    def rolls_remaining(self) -> int:
        return self.turn.rolls_remaining if self.turn is not None else 0

    @property
    def has_rolled(self) -> bool:
        return self.turn is not None and self.turn.has_rolled

    @property
    def phase(self) -> TurnPhase | None:
        return self.turn.phase if self.turn is not None else None

    @property
    def can_roll(self) -> bool:
        return self.is_active and self.turn.can_roll()

    def can_select_category(self, category: Category) -> bool:
        return self.is_active and self.turn.can_select_category(category)

    @property
    def scores(self) -> dict[Category, int | None]:
        """Category -> committed score (None if still open)."""
        if self.scorecard is None:
            return {}
        return dict(self.scorecard.scores)

    @property
    def running_total(self) -> int:
        return self.scorecard.total() if self.scorecard is not None else 0

    def potential_scores(self) -> dict[Category, int]:
        """What each open category would score with the current dice.

        Empty before the first roll of a turn or when no game is in progress.
        """
        if not self.has_rolled or not self.is_active:
            return {}
        return potential_scores(self.dice.values(), self.scorecard)
