"""Textual grid widget that turns mouse drags into cell events."""

from __future__ import annotations

from typing import Callable

from rich.console import Group, RenderableType
from rich.text import Text
from textual.events import MouseDown, MouseEvent, MouseMove, MouseUp
from textual.message import Message
from textual.widget import Widget

from gridracer.engine.contracts import Coord
from gridracer.render.grid_view import cell_at


class CellPressed(Message):
    """A drag started on a grid cell."""

    def __init__(self, *, cell: Coord) -> None:
        super().__init__()
        self.cell = cell


class CellEntered(Message):
    """The pointer moved onto a new cell while dragging."""

    def __init__(self, *, cell: Coord) -> None:
        super().__init__()
        self.cell = cell


class DragReleased(Message):
    """The drag ended."""


class GridWidget(Widget):
    DEFAULT_CSS = """
    GridWidget {
        width: auto;
        height: auto;
    }
    """

    def __init__(
        self,
        render_lines: Callable[[], list[Text]],
        grid_size: Callable[[], int],
        *,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self._render_lines = render_lines
        self._grid_size = grid_size
        self._dragging = False
        self._last_cell: Coord | None = None

    def render(self) -> RenderableType:
        return Group(*self._render_lines())

    def on_mouse_down(self, event: MouseDown) -> None:
        cell = self._cell_for(event)
        if cell is None:
            return
        self._dragging = True
        self._last_cell = cell
        self.capture_mouse()
        self.post_message(CellPressed(cell=cell))

    def on_mouse_move(self, event: MouseMove) -> None:
        if not self._dragging:
            return
        cell = self._cell_for(event)
        if cell is None or cell == self._last_cell:
            return
        self._last_cell = cell
        self.post_message(CellEntered(cell=cell))

    def on_mouse_up(self, event: MouseUp) -> None:
        if not self._dragging:
            return
        self._dragging = False
        self._last_cell = None
        self.release_mouse()
        self.post_message(DragReleased())

    def _cell_for(self, event: MouseEvent) -> Coord | None:
        offset = event.get_content_offset(self)
        if offset is None:
            return None
        x, y = offset
        return cell_at(self._grid_size(), x, y)
