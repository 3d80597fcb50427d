#!/usr/bin/env python3
"""
Yahtzee TUI — Terminal frontend using Textual.

Keyboard-driven interface with box-art dice, a scorecard, and help,
replay and zero-score confirmation overlays. All game rules live in
game_engine / game_session; this module only renders and routes keys.
"""

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, Center
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Static

from game_engine import UPPER_CATEGORIES
from frontend_adapter import FrontendAdapter, CATEGORY_ORDER, CATEGORY_TOOLTIPS


# ── Box-art die faces ─────────────────────────────────────────────────────────

BOX_ART = {
    1: [
        "┌───────┐",
        "│       │",
        "│   ●   │",
        "│       │",
        "└───────┘",
    ],
    2: [
        "┌───────┐",
        "│ ●     │",
        "│       │",
        "│     ● │",
        "└───────┘",
    ],
    3: [
        "┌───────┐",
        "│ ●     │",
        "│   ●   │",
        "│     ● │",
        "└───────┘",
    ],
    4: [
        "┌───────┐",
        "│ ●   ● │",
        "│       │",
        "│ ●   ● │",
        "└───────┘",
    ],
    5: [
        "┌───────┐",
        "│ ●   ● │",
        "│   ●   │",
        "│ ●   ● │",
        "└───────┘",
    ],
    6: [
        "┌───────┐",
        "│ ●   ● │",
        "│ ●   ● │",
        "│ ●   ● │",
        "└───────┘",
    ],
}

# Not rolled yet this turn
BOX_ART[0] = [
    "┌───────┐",
    "│       │",
    "│   ?   │",
    "│       │",
    "└───────┘",
]

BOX_ART_FROZEN = {
    v: [
        line.replace("┌", "╔").replace("┐", "╗")
        .replace("└", "╚").replace("┘", "╝")
        .replace("─", "═").replace("│", "║")
        for line in lines
    ]
    for v, lines in BOX_ART.items()
}


def render_dice_box(values, frozen):
    """Render 5 dice as box art, side by side, with index labels below."""
    if not values:
        return ""
    lines = []
    for row in range(5):
        parts = []
        for value, is_frozen in zip(values, frozen):
            art = BOX_ART_FROZEN if is_frozen else BOX_ART
            parts.append(art[value][row])
        lines.append("  ".join(parts))

    label_parts = []
    for i, is_frozen in enumerate(frozen):
        label = f"  [{i + 1}]" + (" FROZEN" if is_frozen else "")
        label_parts.append(label.ljust(11))
    lines.append("".join(label_parts))
    return "\n".join(lines)


# ── Widgets ──────────────────────────────────────────────────────────────────

class DiceDisplay(Static):
    """Renders the 5 dice using box art."""

    def render(self):
        session = self.app.adapter.session
        return render_dice_box(session.dice_values, session.frozen)


class StatusDisplay(Static):
    """Shows roll status and the last message."""

    def render(self):
        adapter = self.app.adapter
        lines = [f"[bold]{adapter.status_line()}[/bold]"]
        if adapter.message:
            # Escape markup
            lines.append(adapter.message.replace("[", r"\["))
        return "\n".join(lines)


class ScorecardDisplay(Static):
    """Renders the scorecard as a text table."""

    def render(self):
        adapter = self.app.adapter
        session = adapter.session
        scores = session.scores
        potential = session.potential_scores() if adapter.show_potential else {}

        lines = ["[bold]── UPPER SECTION ──[/bold]"]
        for cat in CATEGORY_ORDER:
            if cat == CATEGORY_ORDER[len(UPPER_CATEGORIES)]:
                lines.append("[bold]── LOWER SECTION ──[/bold]")
            lines.append(self._format_row(cat, scores.get(cat), potential.get(cat), adapter))

        lines.append(f"[bold]  TOTAL: {session.running_total}[/bold]")

        selected = adapter.selected_category
        if selected is not None and scores.get(selected) is None:
            lines.append(f"\n[dim]{CATEGORY_TOOLTIPS[selected]}[/dim]")
        return "\n".join(lines)

    def _format_row(self, cat, score, potential, adapter):
        """Format a single scorecard row."""
        is_selected = adapter.selected_category == cat
        marker = ">>" if is_selected else "  "

        if score is not None:
            if adapter.last_scored_category == cat:
                return f"{marker}[bold yellow]{cat.value:<18} {score:>3}[/bold yellow]"
            return f"{marker}{cat.value:<18} {score:>3}"
        if potential is None:
            return f"{marker}[dim]{cat.value:<18}  — [/dim]"
        if is_selected:
            return f"{marker}[bold]{cat.value:<18} ({potential:>3})[/bold]"
        if potential > 0:
            return f"{marker}[green]{cat.value:<18} ({potential:>3})[/green]"
        return f"{marker}[dim]{cat.value:<18} ({potential:>3})[/dim]"


class GameOverDisplay(Static):
    """Shows the final score once the card is full."""

    def render(self):
        session = self.app.adapter.session
        if not session.is_game_over():
            return ""
        lines = [
            "",
            "[bold]═══ GAME OVER ═══[/bold]",
            "",
            f"Final Score: [bold]{session.final_total()}[/bold]",
            "",
            "[dim]Press N for new game, R for replay[/dim]",
        ]
        return "\n".join(lines)


# ── Modal Screens ────────────────────────────────────────────────────────────

class HelpScreen(ModalScreen):
    """Help overlay showing key bindings."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
        Binding("question_mark", "dismiss", "Close"),
        Binding("f1", "dismiss", "Close"),
    ]

    def compose(self) -> ComposeResult:
        controls = [
            ("Space", "Roll dice"),
            ("1-5", "Freeze / unfreeze die"),
            ("Tab / ↓", "Next category"),
            ("Shift+Tab / ↑", "Previous category"),
            ("Enter", "Score selected category"),
            ("P", "Show / hide potential scores"),
            ("D", "Dark mode"),
            ("R", "Game replay (after game)"),
            ("N", "New game"),
            ("Q / Esc", "Quit"),
            ("? / F1", "This help screen"),
        ]
        text = "[bold]CONTROLS[/bold]\n\n"
        for key, desc in controls:
            text += f"  {key:<20} {desc}\n"
        text += "\n[dim]Press Esc or ? to close[/dim]"
        yield Center(Static(text, id="help-panel"))


class ReplayScreen(ModalScreen):
    """Post-game replay overlay."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
        Binding("r", "dismiss", "Close"),
    ]

    def compose(self) -> ComposeResult:
        text = "[bold]GAME REPLAY[/bold]\n\n"
        lines = self.app.adapter.replay_lines()
        if not lines:
            text += "  No replay data available.\n"
        for line in lines:
            # Truncate long lines
            if len(line) > 70:
                line = line[:67] + "..."
            text += "  " + line.replace("[", r"\[") + "\n"
        text += "\n[dim]R or Esc to close[/dim]"
        yield Center(Static(text, id="replay-panel"))


class ConfirmZeroScreen(ModalScreen[bool]):
    """Confirm scoring 0 dialog."""

    BINDINGS = [
        Binding("y", "confirm", "Yes"),
        Binding("enter", "confirm", "Yes"),
        Binding("n", "cancel", "No"),
        Binding("escape", "cancel", "No"),
    ]

    def __init__(self, category_name: str):
        super().__init__()
        self.category_name = category_name

    def compose(self) -> ComposeResult:
        text = f"[bold]Score 0 in {self.category_name}?[/bold]\n\n"
        text += "Y / Enter to confirm,  N / Esc to cancel"
        yield Center(Static(text, id="confirm-panel"))

    def action_confirm(self):
        self.dismiss(True)

    def action_cancel(self):
        self.dismiss(False)


# ── Main App ─────────────────────────────────────────────────────────────────

class YahtzeeApp(App):
    """Yahtzee terminal UI application."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #game-area {
        layout: horizontal;
        height: 1fr;
    }

    #dice-panel {
        width: 60;
        padding: 1 2;
    }

    #scorecard-panel {
        width: 1fr;
        padding: 1 2;
    }

    #round-display {
        height: auto;
        padding: 0 2;
    }

    #dice-display, #status-display, #game-over-display {
        height: auto;
    }

    #status-display {
        margin-top: 1;
    }

    #help-panel, #replay-panel, #confirm-panel {
        padding: 2 4;
        border: thick $accent;
        background: $surface;
        width: 80;
        height: auto;
        max-height: 80vh;
    }
    """

    BINDINGS = [
        Binding("space", "roll", "Roll", show=True),
        Binding("1", "freeze(0)", "Freeze 1"),
        Binding("2", "freeze(1)", "Freeze 2"),
        Binding("3", "freeze(2)", "Freeze 3"),
        Binding("4", "freeze(3)", "Freeze 4"),
        Binding("5", "freeze(4)", "Freeze 5"),
        Binding("tab", "next_cat", "Next category", show=True),
        Binding("shift+tab", "prev_cat", "Prev category"),
        Binding("down", "next_cat", "Next"),
        Binding("up", "prev_cat", "Prev"),
        Binding("enter", "score", "Score", show=True),
        Binding("question_mark", "help", "Help"),
        Binding("f1", "help", "Help"),
        Binding("r", "replay", "Replay"),
        Binding("p", "potential", "Potential scores"),
        Binding("d", "dark", "Dark mode"),
        Binding("n", "new_game", "New game"),
        Binding("q", "quit_game", "Quit", show=True),
        Binding("escape", "quit_game", "Quit"),
    ]

    def __init__(self, adapter=None, settings_path=None):
        super().__init__()
        self.adapter = adapter or FrontendAdapter(settings_path=settings_path)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="round-display")
        with Horizontal(id="game-area"):
            with Vertical(id="dice-panel"):
                yield DiceDisplay(id="dice-display")
                yield StatusDisplay(id="status-display")
                yield GameOverDisplay(id="game-over-display")
            with Vertical(id="scorecard-panel"):
                yield ScorecardDisplay(id="scorecard-display")
        yield Footer()

    def on_mount(self):
        self.title = "Yahtzee"
        self.adapter.load_settings()
        self._apply_theme()
        self._refresh_display()

    def _apply_theme(self):
        self.theme = "textual-dark" if self.adapter.dark_mode else "textual-light"

    def _refresh_display(self):
        """Refresh all display widgets."""
        self.query_one("#dice-display", DiceDisplay).refresh()
        self.query_one("#status-display", StatusDisplay).refresh()
        self.query_one("#scorecard-display", ScorecardDisplay).refresh()
        self.query_one("#game-over-display", GameOverDisplay).refresh()
        self.query_one("#round-display", Static).update(self.adapter.round_line())

    # ── Actions ──────────────────────────────────────────────────────────

    def action_roll(self):
        self.adapter.do_roll()
        self._refresh_display()

    def action_freeze(self, index: int):
        self.adapter.do_freeze(index)
        self._refresh_display()

    def action_next_cat(self):
        self.adapter.navigate_category(+1)
        self._refresh_display()

    def action_prev_cat(self):
        self.adapter.navigate_category(-1)
        self._refresh_display()

    def action_score(self):
        adapter = self.adapter
        cat = adapter.selected_category
        if cat is None:
            adapter.message = "Choose a category with Tab or the arrow keys"
            self._refresh_display()
            return

        if adapter.try_score_category(cat) or adapter.confirm_zero_category is None:
            self._refresh_display()
            return

        def on_confirm(result: bool):
            if result:
                adapter.confirm_zero_yes()
            else:
                adapter.confirm_zero_no()
            self._refresh_display()

        self._refresh_display()
        self.push_screen(ConfirmZeroScreen(cat.value), on_confirm)

    def action_help(self):
        self.push_screen(HelpScreen())

    def action_replay(self):
        if self.adapter.session.is_game_over():
            self.push_screen(ReplayScreen())

    def action_potential(self):
        self.adapter.toggle_show_potential()
        self._refresh_display()

    def action_dark(self):
        self.adapter.toggle_dark_mode()
        self._apply_theme()

    def action_new_game(self):
        self.adapter.do_new_game()
        self._refresh_display()

    def action_quit_game(self):
        self.adapter.do_quit()
        self.exit(self.adapter.session.final_total())


def main(adapter=None):
    """Entry point for the TUI. Returns the final total, or None if abandoned."""
    app = YahtzeeApp(adapter=adapter)
    return app.run()


if __name__ == "__main__":
    main()
