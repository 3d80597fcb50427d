"""FrontendAdapter — Shared UI state management for Yahtzee frontends.

Owns zero-score confirmation, keyboard category navigation, the status
message line, the game log used for the replay screen, and settings
persistence. Pure Python — no Textual or other frontend dependency.

A frontend creates a FrontendAdapter wrapping a GameSession and delegates
UI-state logic here, keeping only rendering and input translation
frontend-specific.
"""

import logging

from game_engine import MAX_ROLLS, Category, GameError, score_for
from game_log import GameLog
from game_session import NUM_ROUNDS, GameSession, SessionStatus
from settings import load_settings, save_settings

logger = logging.getLogger(__name__)


# ── Shared constants ──────────────────────────────────────────────────────────

CATEGORY_ORDER = list(Category)

CATEGORY_TOOLTIPS = {
    Category.ONES: "Sum of all dice showing 1",
    Category.TWOS: "Sum of all dice showing 2",
    Category.THREES: "Sum of all dice showing 3",
    Category.FOURS: "Sum of all dice showing 4",
    Category.FIVES: "Sum of all dice showing 5",
    Category.SIXES: "Sum of all dice showing 6",
    Category.THREE_OF_KIND: "3 of the same, score = sum of all dice",
    Category.FOUR_OF_KIND: "4 of the same, score = sum of all dice",
    Category.FULL_HOUSE: "3 of one + 2 of another = 25",
    Category.SMALL_STRAIGHT: "4 consecutive dice = 30",
    Category.LARGE_STRAIGHT: "5 consecutive dice = 40",
    Category.YAHTZEE: "All 5 dice the same = 50",
    Category.CHANCE: "Sum of all dice, no pattern needed",
}


class FrontendAdapter:
    """Shared UI state for Yahtzee frontends.

    Every game action goes through here so that rule violations become a
    status message instead of an exception in the frontend's event loop.
    """

    def __init__(self, session=None, settings_path=None):
        self.session = session or GameSession()
        if self.session.status == SessionStatus.NOT_STARTED:
            self.session.start()
        self.settings_path = settings_path
        self.game_log = GameLog()

        self.message = ""
        self.confirm_zero_category = None
        self.kb_selected_index = None
        self.last_scored_category = None

        # Settings
        self.confirm_zero = True
        self.show_potential = True
        self.dark_mode = False

    # ── Settings ──────────────────────────────────────────────────────────

    def load_settings(self):
        """Load persisted settings and apply them."""
        settings = load_settings(self.settings_path)
        self.confirm_zero = settings["confirm_zero"]
        self.show_potential = settings["show_potential"]
        self.dark_mode = settings["dark_mode"]

    def _save_settings(self):
        """Persist current settings to disk."""
        save_settings({
            "confirm_zero": self.confirm_zero,
            "show_potential": self.show_potential,
            "dark_mode": self.dark_mode,
        }, self.settings_path)

    def toggle_dark_mode(self):
        """Toggle dark mode and save."""
        self.dark_mode = not self.dark_mode
        self._save_settings()

    def toggle_show_potential(self):
        """Toggle would-be score display and save."""
        self.show_potential = not self.show_potential
        self._save_settings()

    # ── Error reporting ───────────────────────────────────────────────────

    def _attempt(self, action, *args):
        """Run a session action; on a rule violation keep the message and return False."""
        try:
            result = action(*args)
        except GameError as exc:
            logger.debug("Rejected %s%r: %s", action.__name__, args, exc)
            self.message = str(exc)
            return False, None
        self.message = ""
        return True, result

    # ── Game actions ──────────────────────────────────────────────────────

    def do_roll(self):
        """Roll the dice. Returns True if the roll happened."""
        session = self.session
        ok, _ = self._attempt(session.roll)
        if ok:
            roll_number = MAX_ROLLS - session.rolls_remaining
            self.game_log.log_roll(session.current_round, roll_number, list(session.dice_values))
            self.confirm_zero_category = None
        return ok

    def do_freeze(self, die_index):
        """Toggle freeze on a die. Returns True if it changed."""
        session = self.session
        ok, _ = self._attempt(session.toggle_freeze, die_index)
        if ok:
            frozen = [i for i, f in enumerate(session.frozen) if f]
            self.game_log.log_freeze_change(session.current_round, frozen, list(session.dice_values))
        return ok

    def try_score_category(self, cat):
        """Attempt to score a category. Asks for confirmation if the score is 0.

        Returns True if scoring happened immediately, False otherwise.
        """
        session = self.session
        if not session.can_select_category(cat):
            # Let the session produce the precise error message
            return self._commit(cat)
        if self.confirm_zero and score_for(cat, session.dice_values) == 0:
            self.confirm_zero_category = cat
            self.message = f"Score 0 in {cat.value}?"
            return False
        return self._commit(cat)

    def confirm_zero_yes(self):
        """Confirm scoring 0 in the pending category. Returns True if scored."""
        cat = self.confirm_zero_category
        if cat is None:
            return False
        self.confirm_zero_category = None
        return self._commit(cat)

    def confirm_zero_no(self):
        """Cancel the zero-score confirmation."""
        self.confirm_zero_category = None
        self.message = ""

    def _commit(self, cat):
        session = self.session
        turn = session.current_round
        dice_vals = list(session.dice_values)
        ok, score = self._attempt(session.select_category, cat)
        if not ok:
            return False
        self.game_log.log_score(turn, cat, score, dice_vals)
        self.last_scored_category = cat
        self.kb_selected_index = None
        if session.is_game_over():
            self.message = f"Game over! Final score: {session.final_total()}"
        else:
            self.message = f"{score} points in {cat.value}"
        return True

    def do_new_game(self):
        """Start a fresh game, abandoning any game in progress."""
        self.session.start()
        self.game_log.clear()
        self.message = ""
        self.confirm_zero_category = None
        self.kb_selected_index = None
        self.last_scored_category = None

    def do_quit(self):
        """Abandon the current game."""
        self.session.quit()
        self.confirm_zero_category = None
        self.kb_selected_index = None

    # ── Keyboard category navigation ──────────────────────────────────────

    def navigate_category(self, direction):
        """Move keyboard selection to next/previous unfilled category.

        Args:
            direction: +1 for forward, -1 for backward
        """
        scores = self.session.scores
        unfilled = [i for i, cat in enumerate(CATEGORY_ORDER)
                    if scores.get(cat) is None]
        if not unfilled:
            return

        if self.kb_selected_index is None:
            self.kb_selected_index = unfilled[0] if direction > 0 else unfilled[-1]
        else:
            if direction > 0:
                candidates = [i for i in unfilled if i > self.kb_selected_index]
                self.kb_selected_index = candidates[0] if candidates else unfilled[0]
            else:
                candidates = [i for i in unfilled if i < self.kb_selected_index]
                self.kb_selected_index = candidates[-1] if candidates else unfilled[-1]

    @property
    def selected_category(self):
        if self.kb_selected_index is None:
            return None
        return CATEGORY_ORDER[self.kb_selected_index]

    # ── Display helpers ───────────────────────────────────────────────────

    def status_line(self):
        """Short description of where the game stands."""
        session = self.session
        if session.is_game_over():
            return "GAME OVER"
        if not session.is_active:
            return "Game abandoned. Press N for a new game."
        if not session.has_rolled:
            return "Roll the dice!"
        return f"Rolls left: {session.rolls_remaining}"

    def round_line(self):
        session = self.session
        return f"Round {min(session.current_round, NUM_ROUNDS)}/{NUM_ROUNDS}  Total: {session.running_total}"

    def replay_lines(self):
        """One line per scored turn: rolls in order, then the category chosen."""
        lines = []
        for entry in self.game_log.get_score_entries():
            rolls = [e for e in self.game_log.get_turn_entries(entry.turn)
                     if e.event_type == "roll"]
            dice_str = " → ".join(
                f"[{','.join(str(v) for v in r.dice_values)}]" for r in rolls)
            lines.append(f"Turn {entry.turn}: {dice_str} → {entry.category.value}: {entry.score}")
        return lines
