# study_tracker/day_screen.py

import logging
from typing import Optional

from textual import events
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Label, ListView

from .confirm_screen import ConfirmDeleteScreen, DeleteConfirmResult, apply_delete_confirmation
from .data_model import Task
from .textual_widgets import TaskItem
from .tracker import StudyTracker


class DayScreen(Screen):
    """Screen listing the tasks due on one calendar day."""

    CSS = """
    ListView {
        width: 100%;
        height: 1fr;
    }
    """

    BINDINGS = [
        ("escape", "close", "Back to main view"),
    ]

    def __init__(self, tracker: StudyTracker, date_iso: str):
        super().__init__()
        self.tracker = tracker
        self.date_iso = date_iso
        self.list_view = ListView()
        self.empty_label = Label("No tasks for this day.")
        self.logger = logging.getLogger(__name__)

    def compose(self) -> ComposeResult:
        yield Label(f"Tasks on {self.date_iso}")
        yield self.empty_label
        yield self.list_view
        yield Label("r: complete/undo   d: delete   escape: back")

    async def on_mount(self) -> None:
        await self.refresh_list()
        self.list_view.focus()

    async def refresh_list(self) -> None:
        """Rebuild the list from the tracker's current tasks for this day."""
        current_index = self.list_view.index
        tasks = self.tracker.tasks_on(self.date_iso)
        await self.list_view.clear()
        await self.list_view.extend(TaskItem(task, show_date=False) for task in tasks)
        self.empty_label.display = not tasks
        if tasks and current_index is not None:
            self.list_view.index = min(current_index, len(tasks) - 1)

    def selected_task(self) -> Optional[Task]:
        item = self.list_view.highlighted_child
        return item.study_task if isinstance(item, TaskItem) else None

    async def on_key(self, event: events.Key) -> None:
        """Handle key events for the day screen."""
        task = self.selected_task()
        if event.key == "r" and task is not None:
            event.stop()
            self.tracker.toggle_complete(task.id)
            self.app.add_log_entry(
                f"{'Completed' if task.completed else 'Reopened'} task: '{task.name}'"
            )
            await self.refresh_list()
        elif event.key == "d" and task is not None:
            event.stop()
            self.app.push_screen(ConfirmDeleteScreen(task, parent_screen=self))

    async def on_delete_confirm_result(self, message: DeleteConfirmResult) -> None:
        message.stop()
        task = apply_delete_confirmation(self.tracker, message.task_id, message.confirmed)
        if task is not None:
            self.app.add_log_entry(f"Deleted task: '{task.name}'")
        await self.refresh_list()

    def action_close(self) -> None:
        self.app.pop_screen()
