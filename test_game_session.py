"""
GameSession Test Suite

Covers: setup, the per-turn flow through the session, advancing rounds,
game over, quitting, and the read-only accessors frontends rely on.

Conventions match the other test files:
- Class grouping by topic
- random.seed() for determinism
- No mocking — exercises the real game engine
"""
import random

import pytest

from game_engine import (
    Category, TurnPhase,
    NoRollsRemaining, NotYetRolled, CategoryUnavailable,
    SessionNotActive, TurnNotScored, OutOfRange,
)
from game_session import GameSession, SessionStatus, NUM_ROUNDS


# ── Helpers ──────────────────────────────────────────────────────────────────

def started():
    session = GameSession()
    session.start()
    return session


def force_dice(session, *values):
    """Force specific values onto the session's dice."""
    for die, value in zip(session.dice._dice, values):
        die.value = value


def play_full_game(session):
    """Roll once and score each category in order. Returns committed scores."""
    committed = {}
    for cat in Category:
        session.roll()
        committed[cat] = session.select_category(cat)
    return committed


# ═══════════════════════════════════════════════════════════════════════════════
# 1. SETUP
# ═══════════════════════════════════════════════════════════════════════════════

class TestSetup:

    def test_new_session_is_not_started(self):
        session = GameSession()
        assert session.status == SessionStatus.NOT_STARTED
        assert not session.is_game_over()
        assert session.final_total() is None

    def test_actions_before_start_raise(self):
        session = GameSession()
        with pytest.raises(SessionNotActive):
            session.roll()
        with pytest.raises(SessionNotActive):
            session.toggle_freeze(0)
        with pytest.raises(SessionNotActive):
            session.select_category(Category.CHANCE)

    def test_accessors_before_start(self):
        session = GameSession()
        assert session.dice_values == ()
        assert session.frozen == ()
        assert session.rolls_remaining == 0
        assert session.scores == {}
        assert session.running_total == 0
        assert session.potential_scores() == {}
        assert session.phase is None
        assert not session.can_roll

    def test_start_opens_first_turn(self):
        session = started()
        assert session.status == SessionStatus.IN_PROGRESS
        assert session.current_round == 1
        assert session.rolls_remaining == 3
        assert session.phase == TurnPhase.AWAITING_ROLL
        assert session.dice_values == (0, 0, 0, 0, 0)
        assert session.frozen == (False,) * 5

    def test_start_creates_empty_scorecard_with_13_categories(self):
        session = started()
        assert len(session.scores) == NUM_ROUNDS == 13
        assert all(score is None for score in session.scores.values())

    def test_start_again_discards_previous_game(self):
        session = started()
        session.roll()
        session.select_category(Category.CHANCE)
        session.start()
        assert session.current_round == 1
        assert session.scores[Category.CHANCE] is None


# ═══════════════════════════════════════════════════════════════════════════════
# 2. TURN FLOW
# ═══════════════════════════════════════════════════════════════════════════════

class TestTurnFlow:

    def test_roll_through_session(self):
        random.seed(5)
        session = started()
        session.roll()
        assert session.rolls_remaining == 2
        assert session.has_rolled
        assert all(1 <= v <= 6 for v in session.dice_values)

    def test_fourth_roll_raises(self):
        session = started()
        for _ in range(3):
            session.roll()
        values = session.dice_values
        with pytest.raises(NoRollsRemaining):
            session.roll()
        assert session.dice_values == values
        assert not session.can_roll

    def test_freeze_through_session(self):
        session = started()
        session.roll()
        session.toggle_freeze(4)
        assert session.frozen == (False, False, False, False, True)

    def test_freeze_out_of_range(self):
        session = started()
        session.roll()
        with pytest.raises(OutOfRange):
            session.toggle_freeze(-1)

    def test_select_before_roll_raises(self):
        session = started()
        with pytest.raises(NotYetRolled):
            session.select_category(Category.ONES)
        assert session.current_round == 1

    def test_select_returns_score_and_advances(self):
        session = started()
        session.roll()
        force_dice(session, 3, 3, 3, 3, 3)
        assert session.select_category(Category.YAHTZEE) == 50
        assert session.scores[Category.YAHTZEE] == 50
        assert session.current_round == 2
        assert session.running_total == 50

    def test_next_turn_starts_fresh(self):
        session = started()
        session.roll()
        session.toggle_freeze(0)
        session.roll()
        session.select_category(Category.CHANCE)
        assert session.rolls_remaining == 3
        assert session.phase == TurnPhase.AWAITING_ROLL
        assert session.dice_values == (0, 0, 0, 0, 0)
        assert session.frozen == (False,) * 5

    def test_reselecting_category_raises_and_keeps_score(self):
        session = started()
        session.roll()
        force_dice(session, 1, 2, 3, 4, 5)
        session.select_category(Category.LARGE_STRAIGHT)
        session.roll()
        force_dice(session, 2, 3, 4, 5, 6)
        with pytest.raises(CategoryUnavailable):
            session.select_category(Category.LARGE_STRAIGHT)
        assert session.scores[Category.LARGE_STRAIGHT] == 40
        assert session.current_round == 2
        assert session.can_select_category(Category.SMALL_STRAIGHT)

    def test_end_turn_before_scoring_raises(self):
        session = started()
        session.roll()
        with pytest.raises(TurnNotScored):
            session.end_turn_and_advance()
        assert session.current_round == 1

    def test_potential_scores(self):
        session = started()
        assert session.potential_scores() == {}
        session.roll()
        force_dice(session, 2, 2, 3, 3, 3)
        potential = session.potential_scores()
        assert potential[Category.FULL_HOUSE] == 25
        assert potential[Category.THREES] == 9
        assert len(potential) == 13


# ═══════════════════════════════════════════════════════════════════════════════
# 3. GAME OVER
# ═══════════════════════════════════════════════════════════════════════════════

class TestGameOver:

    def test_not_over_until_last_category(self):
        random.seed(2)
        session = started()
        for cat in list(Category)[:-1]:
            session.roll()
            session.select_category(cat)
            assert not session.is_game_over()
            assert session.final_total() is None
        assert session.current_round == 13

    def test_full_game_ends_with_sum_of_scores(self):
        random.seed(9)
        session = started()
        committed = play_full_game(session)
        assert session.is_game_over()
        assert session.status == SessionStatus.GAME_OVER
        assert session.final_total() == sum(committed.values())
        assert session.running_total == session.final_total()

    def test_round_stays_at_13_after_game_over(self):
        session = started()
        play_full_game(session)
        assert session.current_round == 13

    def test_actions_after_game_over_raise(self):
        session = started()
        play_full_game(session)
        with pytest.raises(SessionNotActive):
            session.roll()
        with pytest.raises(SessionNotActive):
            session.select_category(Category.CHANCE)

    def test_quit_after_game_over_keeps_total(self):
        session = started()
        play_full_game(session)
        total = session.final_total()
        session.quit()
        assert session.is_game_over()
        assert session.final_total() == total


# ═══════════════════════════════════════════════════════════════════════════════
# 4. QUIT
# ═══════════════════════════════════════════════════════════════════════════════

class TestQuit:

    def test_quit_mid_turn(self):
        session = started()
        session.roll()
        session.toggle_freeze(1)
        session.quit()
        assert session.status == SessionStatus.QUIT
        assert not session.is_game_over()
        assert session.final_total() is None
        assert session.dice_values == ()
        assert session.phase is None

    def test_quit_before_start(self):
        session = GameSession()
        session.quit()
        assert session.status == SessionStatus.QUIT

    def test_actions_after_quit_raise(self):
        session = started()
        session.quit()
        with pytest.raises(SessionNotActive):
            session.roll()
        with pytest.raises(SessionNotActive):
            session.toggle_freeze(0)

    def test_start_after_quit(self):
        session = started()
        session.quit()
        session.start()
        assert session.is_active
        session.roll()
        assert session.rolls_remaining == 2
