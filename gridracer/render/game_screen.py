"""Interactive Textual game: draw a route, submit it, replay the solver."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Static

from gridracer.app import GameSession
from gridracer.engine.pathfinding import TraceStep
from gridracer.engine.scoring import display_score
from gridracer.render.grid_view import render_grid_lines
from gridracer.render.replay import ReplayCursor
from gridracer.render.textual_widgets import (
    CellEntered,
    CellPressed,
    DragReleased,
    GridWidget,
)

TIMER_INTERVAL = 0.05
INSTRUCTIONS = "Hold a mouse button and drag from the blue start to the red end."


class GameScreen(Screen):
    BINDINGS = [
        ("u", "undo", "Undo"),
        ("c", "clear", "Clear"),
        ("s", "submit", "Check score"),
        ("b", "toggle_best", "Best path"),
        ("n", "new_grid", "New grid"),
        ("space", "toggle_replay", "Replay"),
        ("full_stop", "replay_step", "Step"),
        ("comma", "replay_back", "Back"),
        ("left_square_bracket", "previous_level", "Prev level"),
        ("right_square_bracket", "next_level", "Next level"),
        ("q", "quit", "Quit"),
    ]

    DEFAULT_CSS = """
    #board {
        width: auto;
        padding: 1 2;
    }
    #sidebar {
        width: 1fr;
        padding: 1 2;
    }
    """

    def __init__(self, session: GameSession) -> None:
        super().__init__()
        self.session = session
        self.cursor = ReplayCursor(length=len(session.result.trace))
        self.message = INSTRUCTIONS

    def compose(self) -> ComposeResult:
        with Horizontal():
            with Vertical(id="board"):
                yield GridWidget(
                    self._grid_lines,
                    lambda: self.session.grid.size,
                    id="grid",
                )
            yield Static(id="sidebar")
        yield Footer()

    def on_mount(self) -> None:
        self.set_interval(TIMER_INTERVAL, self._on_timer)
        self._refresh_ui()

    def on_cell_pressed(self, message: CellPressed) -> None:
        self.session.draw.begin_draw(message.cell)
        self._refresh_ui()

    def on_cell_entered(self, message: CellEntered) -> None:
        self.session.draw.enter_cell(message.cell)
        self._refresh_ui()

    def on_drag_released(self, message: DragReleased) -> None:
        self.session.draw.end_draw()
        self._refresh_ui()

    def action_undo(self) -> None:
        self.session.draw.undo()
        self._refresh_ui()

    def action_clear(self) -> None:
        self.session.draw.clear()
        self._refresh_ui()

    def action_submit(self) -> None:
        result = self.session.submit()
        if result is None:
            self.message = "Path must run from start to end before it can be scored."
        elif result.is_optimal:
            self.message = f"Perfect route! Score {result.score}."
        elif result.new_record:
            self.message = f"New level best: cost {result.cost}."
        else:
            self.message = f"Scored {result.score} (cost {result.cost})."
        self._refresh_ui()

    def action_toggle_best(self) -> None:
        self.session.toggle_best()
        self._refresh_ui()

    def action_new_grid(self) -> None:
        self.session.new_grid()
        self._reset_for_grid()

    def action_previous_level(self) -> None:
        self.session.change_level(-1)
        self._reset_for_grid()

    def action_next_level(self) -> None:
        self.session.change_level(1)
        self._reset_for_grid()

    def action_toggle_replay(self) -> None:
        self.cursor.toggle()
        self._refresh_ui()

    def action_replay_step(self) -> None:
        self.cursor.step()
        self._refresh_ui()

    def action_replay_back(self) -> None:
        self.cursor.back()
        self._refresh_ui()

    def action_quit(self) -> None:
        self.app.exit()

    def _on_timer(self) -> None:
        if self.cursor.tick():
            self._refresh_ui()

    def _reset_for_grid(self) -> None:
        self.cursor = ReplayCursor(length=len(self.session.result.trace))
        self.message = INSTRUCTIONS
        self._refresh_ui()

    def _current_step(self) -> TraceStep | None:
        if not self.cursor.active:
            return None
        return self.session.result.trace[self.cursor.index]

    def _grid_lines(self) -> list[Text]:
        session = self.session
        return render_grid_lines(
            session.grid,
            start=session.start,
            end=session.end,
            user_path=session.draw.path,
            best_path=session.result.optimal_path,
            show_best=session.show_best,
            step=self._current_step(),
        )

    def _refresh_ui(self) -> None:
        self.query_one("#grid", GridWidget).refresh(layout=True)
        self.query_one("#sidebar", Static).update(self._render_sidebar())

    def _render_sidebar(self) -> RenderableType:
        session = self.session
        table = Table(show_header=False)
        table.add_column("Field")
        table.add_column("Value")
        table.add_row("Level", f"{session.level_number}/{len(session.levels)}")
        table.add_row("Size", f"{session.grid.size}x{session.grid.size}")
        table.add_row("Drawing", session.draw.state.value)
        table.add_row("Path cells", str(len(session.draw.path)))
        table.add_row("Path cost", str(session.live_cost))
        table.add_row("Path score", str(display_score(session.live_cost)))
        best = session.best_cost
        if session.show_best:
            table.add_row(
                "Best score", "Unreachable" if best is None else str(display_score(best))
            )
        high = session.high_score
        table.add_row("Level best cost", "-" if high is None else str(high))
        table.add_row("Replay", self._replay_label())
        return Group(
            Panel(table, title="GridRacer"),
            Panel(Text(self.message), title="Status"),
        )

    def _replay_label(self) -> str:
        total = self.cursor.length
        if not self.cursor.active:
            return f"0/{total}"
        state = "playing" if self.cursor.playing else "paused"
        return f"{self.cursor.index + 1}/{total} ({state})"


class GridRacerApp(App):
    """Run the game screen for one session."""

    def __init__(self, session: GameSession, *, title: str = "GridRacer") -> None:
        super().__init__()
        self._session = session
        self.title = title

    def on_mount(self) -> None:
        self.push_screen(GameScreen(self._session))


def run_game_screen(session: GameSession) -> None:
    GridRacerApp(session).run()
