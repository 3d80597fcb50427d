"""
Yahtzee Game Engine - Turn state machine and scoring rules

This module contains the core game logic for Yahtzee, with no frontend dependencies.
Dice and scorecard are plain mutable objects owned by a single turn/session;
scoring is done by pure functions so every rule can be unit tested directly.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Tuple
from enum import Enum
from collections import Counter
import logging
import random

logger = logging.getLogger(__name__)

NUM_DICE = 5
MAX_ROLLS = 3


# ── Errors ────────────────────────────────────────────────────────────────────

class GameError(Exception):
    """Base class for all recoverable game rule violations"""


class OutOfRange(GameError, IndexError):
    """Die index outside 0-4"""


class NoRollsRemaining(GameError):
    """All three rolls of the turn have been used"""


class NotYetRolled(GameError):
    """Action requires at least one roll this turn"""


class CategoryUnavailable(GameError):
    """Selected category is already filled"""


class AlreadyFilled(GameError):
    """Scorecard guard: a committed score can never be overwritten"""


class TurnOver(GameError):
    """The turn has already been scored"""


class TurnNotScored(GameError):
    """The turn cannot end before a category is scored"""


class SessionNotActive(GameError):
    """The game has not started, is over, or was abandoned"""


class Category(Enum):
    """Yahtzee score categories"""
    ONES = "Ones"
    TWOS = "Twos"
    THREES = "Threes"
    FOURS = "Fours"
    FIVES = "Fives"
    SIXES = "Sixes"
    THREE_OF_KIND = "3 of a Kind"
    FOUR_OF_KIND = "4 of a Kind"
    FULL_HOUSE = "Full House"
    SMALL_STRAIGHT = "Small Straight"
    LARGE_STRAIGHT = "Large Straight"
    YAHTZEE = "Yahtzee"
    CHANCE = "Chance"


UPPER_CATEGORIES = (Category.ONES, Category.TWOS, Category.THREES,
                    Category.FOURS, Category.FIVES, Category.SIXES)

LOWER_CATEGORIES = (Category.THREE_OF_KIND, Category.FOUR_OF_KIND,
                    Category.FULL_HOUSE, Category.SMALL_STRAIGHT,
                    Category.LARGE_STRAIGHT, Category.YAHTZEE, Category.CHANCE)

_UPPER_FACE = {cat: face for face, cat in enumerate(UPPER_CATEGORIES, start=1)}


# ── Dice ──────────────────────────────────────────────────────────────────────

@dataclass
class Die:
    """A single die. value is 0 until the die is rolled in the current turn."""
    value: int = 0
    frozen: bool = False

    def roll(self):
        """Give the die a new random value unless it is frozen"""
        if not self.frozen:
            self.value = random.randint(1, 6)


class DiceSet:
    """Exactly five dice plus their freeze flags"""

    def __init__(self):
        self._dice = [Die() for _ in range(NUM_DICE)]

    def __len__(self):
        return len(self._dice)

    def roll(self):
        """Roll every die that is not frozen"""
        for die in self._dice:
            die.roll()

    def toggle_freeze(self, index):
        """
        Flip the frozen flag of one die.

        Args:
            index: Die index (0-4)

        Raises:
            OutOfRange: if index is not in 0-4
        """
        if not isinstance(index, int) or not (0 <= index < NUM_DICE):
            raise OutOfRange(f"die index {index!r} is not in 0-{NUM_DICE - 1}")
        die = self._dice[index]
        die.frozen = not die.frozen

    def reset(self):
        """Unfreeze every die and clear its value for a new turn"""
        for die in self._dice:
            die.value = 0
            die.frozen = False

    def values(self) -> Tuple[int, ...]:
        """Current die values, in order"""
        return tuple(die.value for die in self._dice)

    def frozen(self) -> Tuple[bool, ...]:
        """Current freeze flags, in order"""
        return tuple(die.frozen for die in self._dice)

    def frozen_indices(self) -> Tuple[int, ...]:
        return tuple(i for i, die in enumerate(self._dice) if die.frozen)


# ── Scorecard ─────────────────────────────────────────────────────────────────

class Scorecard:
    """Manages the Yahtzee scorecard"""

    def __init__(self):
        """Initialize an empty scorecard"""
        # None = not filled
        self._scores = {category: None for category in Category}

    @property
    def scores(self):
        """Read-only view of category -> score (None if not filled)"""
        return MappingProxyType(self._scores)

    def is_filled(self, category):
        """Check if a category has been filled"""
        return self._scores[category] is not None

    def commit(self, category, score):
        """
        Permanently record the score for a category.

        Raises:
            AlreadyFilled: if the category already holds a score
        """
        if self.is_filled(category):
            raise AlreadyFilled(f"{category.value} already scored {self._scores[category]}")
        self._scores[category] = score

    def open_categories(self):
        """Categories still waiting for a score, in scorecard order"""
        return [cat for cat in Category if not self.is_filled(cat)]

    def get_upper_section_total(self):
        """Calculate total for upper section (Ones through Sixes)"""
        return sum(self._scores[cat] or 0 for cat in UPPER_CATEGORIES)

    def get_lower_section_total(self):
        """Calculate total for lower section"""
        return sum(self._scores[cat] or 0 for cat in LOWER_CATEGORIES)

    def total(self):
        """Sum of all committed scores; unfilled categories count as 0"""
        return self.get_upper_section_total() + self.get_lower_section_total()

    def is_complete(self):
        """Check if all categories are filled"""
        return all(score is not None for score in self._scores.values())


# ── Scoring rules ─────────────────────────────────────────────────────────────

def _check_values(values):
    values = tuple(values)
    if len(values) != NUM_DICE or not all(isinstance(v, int) and 1 <= v <= 6 for v in values):
        raise ValueError(f"expected {NUM_DICE} die values in 1-6, got {values!r}")
    return values


def has_n_of_kind(values, n):
    """
    Check if dice contain at least n of the same value

    Args:
        values: Sequence of die values
        n: Number of matching dice required

    Returns:
        True if at least n dice have the same value
    """
    return max(Counter(values).values()) >= n


def has_full_house(values):
    """Check if dice form a full house (3 of one value, 2 of another)"""
    return sorted(Counter(values).values(), reverse=True) == [3, 2]


def has_small_straight(values):
    """
    Check if dice contain a small straight (4 consecutive values)

    Duplicates collapse, so 2-2-3-4-5 qualifies.
    """
    distinct = set(values)
    # Possible small straights: 1-2-3-4, 2-3-4-5, 3-4-5-6
    small_straights = [{1, 2, 3, 4}, {2, 3, 4, 5}, {3, 4, 5, 6}]
    return any(straight.issubset(distinct) for straight in small_straights)


def has_large_straight(values):
    """Check if dice form a large straight (5 consecutive values)"""
    distinct = set(values)
    # Possible large straights: 1-2-3-4-5, 2-3-4-5-6
    large_straights = [{1, 2, 3, 4, 5}, {2, 3, 4, 5, 6}]
    return any(straight == distinct for straight in large_straights)


def has_yahtzee(values):
    """Check if all dice have the same value"""
    return has_n_of_kind(values, 5)


def score_for(category, values):
    """
    Calculate the score for a given category and dice

    Args:
        category: Category enum value
        values: Five die values, each 1-6

    Returns:
        Integer score for the category (0 if doesn't qualify)

    Raises:
        ValueError: if values is not five faces in 1-6
    """
    values = _check_values(values)
    total = sum(values)

    # Upper section - sum of matching dice
    if category in _UPPER_FACE:
        face = _UPPER_FACE[category]
        return values.count(face) * face

    elif category == Category.THREE_OF_KIND:
        return total if has_n_of_kind(values, 3) else 0

    elif category == Category.FOUR_OF_KIND:
        return total if has_n_of_kind(values, 4) else 0

    elif category == Category.FULL_HOUSE:
        return 25 if has_full_house(values) else 0

    elif category == Category.SMALL_STRAIGHT:
        return 30 if has_small_straight(values) else 0

    elif category == Category.LARGE_STRAIGHT:
        return 40 if has_large_straight(values) else 0

    elif category == Category.YAHTZEE:
        return 50 if has_yahtzee(values) else 0

    elif category == Category.CHANCE:
        return total

    raise ValueError(f"unknown category {category!r}")


def potential_scores(values, scorecard):
    """Would-be score of every open category for the given dice"""
    return {cat: score_for(cat, values) for cat in scorecard.open_categories()}


# ── Turn state machine ────────────────────────────────────────────────────────

class TurnPhase(Enum):
    AWAITING_ROLL = "awaiting roll"
    ROLLED_AWAITING_ACTION = "rolled, awaiting action"
    SCORED = "scored"


class TurnController:
    """One player turn: up to three rolls, then exactly one category commit.

    Every method validates before mutating, so a raised GameError leaves the
    dice, the roll counter and the scorecard untouched.
    """

    def __init__(self, dice: DiceSet, scorecard: Scorecard):
        self.dice = dice
        self.scorecard = scorecard
        self.rolls_remaining = MAX_ROLLS
        self.phase = TurnPhase.AWAITING_ROLL

    @property
    def has_rolled(self) -> bool:
        return self.rolls_remaining < MAX_ROLLS

    def can_roll(self) -> bool:
        return self.phase != TurnPhase.SCORED and self.rolls_remaining > 0

    def can_select_category(self, category) -> bool:
        return (self.phase == TurnPhase.ROLLED_AWAITING_ACTION
                and not self.scorecard.is_filled(category))

    def _check_not_scored(self):
        if self.phase == TurnPhase.SCORED:
            raise TurnOver("this turn has already been scored")

    def roll(self):
        """Roll the unfrozen dice, using up one of the turn's rolls."""
        self._check_not_scored()
        if self.rolls_remaining <= 0:
            raise NoRollsRemaining(f"all {MAX_ROLLS} rolls used this turn")
        self.rolls_remaining -= 1
        self.dice.roll()
        self.phase = TurnPhase.ROLLED_AWAITING_ACTION
        logger.debug("roll %d/%d: %s", MAX_ROLLS - self.rolls_remaining, MAX_ROLLS,
                     self.dice.values())

    def toggle_freeze(self, index):
        """Freeze or unfreeze one die between rolls."""
        self._check_not_scored()
        if not self.has_rolled:
            raise NotYetRolled("roll the dice before freezing them")
        self.dice.toggle_freeze(index)
        logger.debug("frozen dice now %s", self.dice.frozen_indices())

    def select_category(self, category):
        """
        Score the current dice in a category and end the turn.

        Returns:
            The committed score

        Raises:
            NotYetRolled: no roll has happened this turn
            CategoryUnavailable: the category is already filled
        """
        self._check_not_scored()
        if not self.has_rolled:
            raise NotYetRolled("roll the dice before choosing a category")
        if self.scorecard.is_filled(category):
            raise CategoryUnavailable(f"{category.value} is already filled")
        score = score_for(category, self.dice.values())
        self.scorecard.commit(category, score)
        self.phase = TurnPhase.SCORED
        logger.debug("scored %d in %s with %s", score, category.value, self.dice.values())
        return score
