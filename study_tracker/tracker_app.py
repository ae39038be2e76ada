# study_tracker/tracker_app.py

import sys
import logging
import datetime
from typing import List, Optional

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Input, Label, ListView, ProgressBar, RichLog, Select

from .confirm_screen import ConfirmDeleteScreen, DeleteConfirmResult, apply_delete_confirmation
from .data_model import ALL, Category, Priority, Status, Task, parse_iso_date
from .day_screen import DayScreen
from .errors import NotFoundError, PersistenceError, ValidationError
from .persistence import LOGS_FILE, TASKS_FILE, JsonTaskRepository, load_logs, log_action, save_logs
from .task_screen import TaskScreen, TaskScreenResult
from .textual_widgets import CalendarGrid, TaskItem
from .tracker import StudyTracker, TrackerViews

DEBUG_LOG = "debug.log"

HELP_TEXT = (
    "a: add  e: edit  r: complete/undo  d: delete  m: move to day  "
    "c: calendar  p/n: prev/next month  /: search  L: log  q: quit"
)


def _choices(values) -> list:
    return [(ALL, ALL)] + [(str(v), str(v)) for v in values]


class TrackerApp(App):
    """Main TUI Application."""
    CSS = """
    Screen {
        color: #00dd00;
    }

    #header {
        dock: top;
        background: black;
        text-style: bold;
        padding: 0 1;
        width: 100%;
        height: 1;
    }

    #main {
        height: 1fr;
    }

    #left {
        width: 1fr;
    }

    #right {
        width: 64;
    }

    #filters {
        height: auto;
    }

    #filters Select {
        width: 1fr;
    }

    #search {
        width: 1fr;
    }

    #tasks {
        height: 1fr;
    }

    #month-title {
        text-style: bold;
        width: 100%;
        content-align: center middle;
    }

    #log {
        dock: bottom;
        height: 8;
        display: none;
    }

    #help {
        dock: bottom;
        height: 1;
        color: #008800;
    }
    """

    def __init__(self, tasks_file: str = TASKS_FILE, logs_file: str = LOGS_FILE):
        super().__init__()
        mode = 'a' if '--release' in sys.argv else 'w'
        logging.basicConfig(
            filename=DEBUG_LOG,
            filemode=mode,
            level=logging.DEBUG,
            format='%(asctime)s - %(levelname)s - %(message)s'
        )
        self.logger = logging.getLogger(__name__)
        self.logger.debug("TrackerApp initialized")

        self.logs_file = logs_file
        self.logs: List[str] = load_logs(logs_file)
        self._startup_notice: Optional[str] = None

        repository = JsonTaskRepository(tasks_file)
        try:
            self.tracker = StudyTracker(repository.load(), saver=repository.save)
        except (PersistenceError, ValidationError) as exc:
            self.logger.warning("Starting with no tasks: %s", exc)
            self._startup_notice = f"Could not load tasks: {exc}"
            self.tracker = StudyTracker(saver=repository.save)
        self.tracker.subscribe(self.on_views_changed)
        self.tracker.subscribe_notices(self.show_error)

        self.list_view: Optional[ListView] = None
        self.calendar: Optional[CalendarGrid] = None
        self.log_panel: Optional[RichLog] = None
        self.count_label: Optional[Label] = None
        self.month_label: Optional[Label] = None
        self.progress_label: Optional[Label] = None
        self.progress_bar: Optional[ProgressBar] = None
        self.search_input: Optional[Input] = None

    def compose(self) -> ComposeResult:
        current_date = datetime.datetime.now().strftime("%d.%m.%Y")
        yield Label(f"Study Tracker ({current_date})", id="header")
        with Horizontal(id="main"):
            with Vertical(id="left"):
                with Horizontal(id="filters"):
                    yield Select(_choices(Category), value=ALL, allow_blank=False, id="filter-category")
                    yield Select(_choices(Priority), value=ALL, allow_blank=False, id="filter-priority")
                    yield Select(_choices([Status.COMPLETED, Status.PENDING]), value=ALL,
                                 allow_blank=False, id="filter-status")
                yield Input(placeholder="Search tasks", id="search")
                yield Label("", id="task-count")
                yield ListView(id="tasks")
            with Vertical(id="right"):
                yield Label("", id="month-title")
                yield CalendarGrid(id="calendar")
                yield Label("", id="progress-text")
                yield ProgressBar(total=100, show_eta=False, id="progress")
        yield RichLog(id="log")
        yield Label(HELP_TEXT, id="help")

    async def on_mount(self) -> None:
        """Called once the app is fully loaded."""
        self.list_view = self.query_one("#tasks", ListView)
        self.calendar = self.query_one("#calendar", CalendarGrid)
        self.log_panel = self.query_one("#log", RichLog)
        self.count_label = self.query_one("#task-count", Label)
        self.month_label = self.query_one("#month-title", Label)
        self.progress_label = self.query_one("#progress-text", Label)
        self.progress_bar = self.query_one("#progress", ProgressBar)
        self.search_input = self.query_one("#search", Input)
        for entry in self.logs[-50:]:
            self.log_panel.write(entry)

        await self.apply_views(self.tracker.views())
        self.list_view.focus()
        if self._startup_notice:
            self.show_error(self._startup_notice)

    # ---- view refresh ----

    def on_views_changed(self, views: TrackerViews) -> None:
        """Tracker listener; redraws after the current handler finishes."""
        self.call_later(self.apply_views, views)

    async def apply_views(self, views: TrackerViews) -> None:
        """Update the list, calendar and progress widgets from a views snapshot."""
        if self.list_view is None or self.calendar is None:
            return

        selected = self.selected_task()
        selected_id = selected.id if selected else None
        dragged_id = self.tracker.dragged_task_id

        await self.list_view.clear()
        items = [TaskItem(task) for task in views.visible]
        for item in items:
            item.mark_dragging(item.study_task.id == dragged_id)
        await self.list_view.extend(items)
        for index, item in enumerate(items):
            if item.study_task.id == selected_id:
                self.list_view.index = index
                break

        self.calendar.show(views.calendar, dragging=dragged_id is not None)
        if self.count_label is not None:
            self.count_label.update(f"Tasks ({len(views.visible)} of {views.total})")
        if self.month_label is not None:
            self.month_label.update(f"< {views.month_title} >")
        if self.progress_label is not None:
            self.progress_label.update(f"Progress: {views.progress}%")
        if self.progress_bar is not None:
            self.progress_bar.update(progress=views.progress)

    def selected_task(self) -> Optional[Task]:
        """Return the highlighted task in the list, if any."""
        if self.list_view is None:
            return None
        item = self.list_view.highlighted_child
        return item.study_task if isinstance(item, TaskItem) else None

    # ---- notices and action log ----

    def show_error(self, message: str) -> None:
        self.notify(message, severity="error")

    def add_log_entry(self, message: str):
        """Add a log entry to logs list and to the log panel."""
        try:
            entry = log_action(self.logs, message, self.logs_file)
        except PersistenceError as exc:
            self.logger.warning("Action log not saved: %s", exc)
            entry = self.logs[-1]
        if self.log_panel is not None:
            self.log_panel.write(entry)

    def action_toggle_log(self) -> None:
        if self.log_panel is not None:
            self.log_panel.display = not self.log_panel.display

    # ---- key handling ----

    async def on_key(self, event: events.Key) -> None:
        """Handle key events for the main application."""
        if len(self.screen_stack) > 1:
            return
        focused = self.focused
        if focused is not None and any(isinstance(n, (Input, Select)) for n in focused.ancestors_with_self):
            if event.key == "escape" and isinstance(focused, Input) and self.list_view is not None:
                self.list_view.focus()
            return

        task = self.selected_task()
        if event.key == "a":
            self.push_screen(TaskScreen(default_date=self.calendar.cursor if self.calendar is not None else None))
        elif event.key == "e" and task is not None:
            self.push_screen(TaskScreen(task))
        elif event.key == "r" and task is not None:
            await self.toggle_task(task)
        elif event.key == "d" and task is not None:
            self.delete_task(task)
        elif event.key == "m" and task is not None:
            self.start_move(task)
        elif event.key == "c":
            self.focus_calendar()
        elif event.key == "p":
            self.tracker.previous_month()
        elif event.key == "n":
            self.tracker.next_month()
        elif event.key == "slash" and self.search_input is not None:
            self.search_input.focus()
        elif event.key == "L":
            self.action_toggle_log()
        elif event.key == "escape":
            self.cancel_move()
        elif event.key == "q":
            self.exit()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if event.list_view is self.list_view and isinstance(event.item, TaskItem):
            self.push_screen(TaskScreen(event.item.study_task))

    # ---- filters ----

    def on_select_changed(self, event: Select.Changed) -> None:
        field = {
            "filter-category": "category",
            "filter-priority": "priority",
            "filter-status": "status",
        }.get(event.select.id or "")
        if field is not None:
            self.tracker.set_filters(**{field: str(event.value)})

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search":
            self.tracker.set_filters(search_text=event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search" and self.list_view is not None:
            self.list_view.focus()

    # ---- task mutations ----

    async def on_task_screen_result(self, message: TaskScreenResult) -> None:
        """Handle the result from TaskScreen."""
        if message.cancelled:
            return
        try:
            if message.task_id is None:
                task = self.tracker.create(**message.fields)
                self.add_log_entry(f"Added task: '{task.name}'")
                self.notify("Task added")
            elif message.fields:
                task = self.tracker.update(message.task_id, **message.fields)
                self.add_log_entry(f"Edited task: '{task.name}'")
        except (ValidationError, NotFoundError) as exc:
            self.show_error(str(exc))

    async def toggle_task(self, task: Task) -> None:
        try:
            self.tracker.toggle_complete(task.id)
        except NotFoundError as exc:
            self.show_error(str(exc))
            return
        self.add_log_entry(f"{'Completed' if task.completed else 'Reopened'} task: '{task.name}'")

    def delete_task(self, task: Task) -> None:
        """Ask first; the answer arrives as a DeleteConfirmResult."""
        self.push_screen(ConfirmDeleteScreen(task))

    def on_delete_confirm_result(self, message: DeleteConfirmResult) -> None:
        task = apply_delete_confirmation(self.tracker, message.task_id, message.confirmed)
        if task is not None:
            self.add_log_entry(f"Deleted task: '{task.name}'")

    # ---- calendar and drag to reschedule ----

    def focus_calendar(self, start: Optional[datetime.date] = None) -> None:
        if self.calendar is None:
            return
        if start is None:
            start = self.calendar.cursor or datetime.date.today()
        self.calendar.place_cursor(start)
        self.tracker.show_month(start.year, start.month)
        self.calendar.focus()

    def start_move(self, task: Task) -> None:
        """Pick up a task; the next day picked on the calendar becomes its date."""
        self.tracker.begin_drag(task.id)
        self.notify(f"Moving '{task.name}': pick a day, escape to cancel")
        self.focus_calendar(parse_iso_date(task.date))

    def cancel_move(self) -> None:
        if self.tracker.dragged_task_id is None:
            return
        self.tracker.cancel_drag()
        self.tracker.publish()
        if self.list_view is not None:
            self.list_view.focus()

    def on_calendar_grid_cursor_moved(self, message: CalendarGrid.CursorMoved) -> None:
        day = message.day
        if self.calendar is not None:
            self.calendar.place_cursor(day)
        if (day.year, day.month) != (self.tracker.year, self.tracker.month):
            self.tracker.show_month(day.year, day.month)

    def on_calendar_grid_day_selected(self, message: CalendarGrid.DaySelected) -> None:
        if self.tracker.dragged_task_id is None:
            self.push_screen(DayScreen(self.tracker, message.date_iso))
            return

        task = self.tracker.drop_on(message.date_iso)
        if task is not None:
            self.add_log_entry(f"Moved '{task.name}' to {message.date_iso}")
            self.notify(f"Moved \"{task.name}\" to {message.date_iso}")
        else:
            self.tracker.publish()
        if self.list_view is not None:
            self.list_view.focus()

    def on_unmount(self) -> None:
        """Called before the app closes; ensure the action log is saved."""
        try:
            save_logs(self.logs, self.logs_file)
        except PersistenceError as exc:
            self.logger.warning("Action log not saved on exit: %s", exc)


def main() -> None:
    app = TrackerApp()
    app.run()
