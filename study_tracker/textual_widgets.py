# study_tracker/textual_widgets.py

import datetime
import logging
from typing import List, Optional

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Grid
from textual.message import Message
from textual.widgets import Label, ListItem, Static

from .calendar_index import GRID_CELLS, WEEKDAY_NAMES, CalendarCell
from .data_model import Category, Priority, Task

CATEGORY_COLORS = {
    Category.HOMEWORK: "#ff8aa0",
    Category.EXAM: "#c099ff",
    Category.PROJECT: "#7fc7ff",
    Category.PERSONAL_STUDY: "#ffd86b",
}

PRIORITY_STYLES = {
    Priority.HIGH: "bold #ff5f5f",
    Priority.MEDIUM: "#ffaf00",
    Priority.LOW: "#5fd75f",
}


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, "#dddddd")


class TaskItem(ListItem):
    """A ListItem representing a single task row in the ListView."""

    DEFAULT_CSS = """
    TaskItem {
        color: #00dd00;
        text-style: bold;
    }

    TaskItem.-completed,
    TaskItem.-completed > Label {
        color: #666666;
        text-style: strike;
    }

    TaskItem.-dragging {
        background: #444400;
    }
    """

    def __init__(self, task: Task, show_date: bool = True):
        self._study_task = task
        self._show_date = show_date
        self._label = Label(self.render_text())
        super().__init__(self._label)
        self.set_class(task.completed, "-completed")

    def render_text(self) -> Text:
        """Return the row text: completion marker, name, details and priority tag."""
        task = self._study_task
        detail = task.date if self._show_date else task.priority
        return Text.assemble(
            "[x] " if task.completed else "[ ] ",
            (task.name, "bold"),
            "  ",
            ("●", category_color(task.category)),
            f" {task.category} • {detail}  ",
            (task.priority, PRIORITY_STYLES.get(task.priority, "")),
        )

    @property
    def study_task(self) -> Task:
        return self._study_task

    def mark_dragging(self, dragging: bool) -> None:
        self.set_class(dragging, "-dragging")


class CalendarDay(Static):
    """One cell of the month grid; padding cells have no date."""

    DEFAULT_CSS = """
    CalendarDay {
        height: 3;
        border: none;
        padding: 0 1;
    }

    CalendarDay.-today {
        background: #003300;
    }

    CalendarDay.-cursor {
        background: #005f87;
    }

    CalendarDay.-drop-target {
        background: #875f00;
    }
    """

    def __init__(self):
        super().__init__("")
        self.cell: Optional[CalendarCell] = None

    def show_cell(self, cell: Optional[CalendarCell], cursor: bool, dragging: bool) -> None:
        self.cell = cell
        self.set_class(cell is not None and cell.is_today, "-today")
        self.set_class(cursor and not dragging, "-cursor")
        self.set_class(cursor and dragging, "-drop-target")
        if cell is None:
            self.update("")
            return
        text = Text(f"{cell.day_number:>2}\n")
        for task in cell.tasks:
            text.append("●", style=category_color(task.category))
        self.update(text)

    def on_click(self, event: events.Click) -> None:
        if self.cell is not None:
            self.post_message(CalendarGrid.DaySelected(self.cell.date_iso))


class CalendarGrid(Grid):
    """Sunday-first month grid with a keyboard cursor used to pick a day."""

    DEFAULT_CSS = """
    CalendarGrid {
        grid-size: 7;
        grid-rows: 1 3 3 3 3 3 3;
        height: auto;
    }

    CalendarGrid:focus {
        border: tall #00dd00;
    }

    CalendarGrid > .weekday {
        text-style: bold;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("left", "move_cursor(-1)", "Previous day"),
        ("right", "move_cursor(1)", "Next day"),
        ("up", "move_cursor(-7)", "Previous week"),
        ("down", "move_cursor(7)", "Next week"),
        ("enter", "select_day", "Pick day"),
    ]

    can_focus = True

    class DaySelected(Message):
        """A day was clicked or picked with the cursor."""
        def __init__(self, date_iso: str) -> None:
            super().__init__()
            self.date_iso = date_iso

    class CursorMoved(Message):
        """The cursor moved to a new day, possibly in another month."""
        def __init__(self, day: datetime.date) -> None:
            super().__init__()
            self.day = day

    def __init__(self, id: Optional[str] = None):
        super().__init__(id=id)
        self.cursor: Optional[datetime.date] = None
        self.dragging = False
        self._days: List[CalendarDay] = [CalendarDay() for _ in range(GRID_CELLS)]
        self._cells: List[Optional[CalendarCell]] = [None] * GRID_CELLS
        self.logger = logging.getLogger(__name__)

    def compose(self) -> ComposeResult:
        for name in WEEKDAY_NAMES:
            yield Label(name, classes="weekday")
        yield from self._days

    def show(self, cells: List[Optional[CalendarCell]], dragging: bool = False) -> None:
        """Redraw every day cell from a freshly built grid."""
        self._cells = cells
        self.dragging = dragging
        cursor_iso = self.cursor.isoformat() if self.cursor else None
        for day, cell in zip(self._days, cells):
            day.show_cell(cell, cursor=cell is not None and cell.date_iso == cursor_iso, dragging=dragging)

    def place_cursor(self, day: datetime.date) -> None:
        self.cursor = day
        self.show(self._cells, self.dragging)

    def action_move_cursor(self, days: int) -> None:
        if self.cursor is None:
            first = next((c for c in self._cells if c is not None), None)
            if first is None:
                return
            self.cursor = datetime.date.fromisoformat(first.date_iso)
        else:
            self.cursor += datetime.timedelta(days=days)
        self.post_message(self.CursorMoved(self.cursor))

    def action_select_day(self) -> None:
        if self.cursor is not None:
            self.post_message(self.DaySelected(self.cursor.isoformat()))
