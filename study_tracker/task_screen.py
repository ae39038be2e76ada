# study_tracker/task_screen.py

import datetime
import logging
from typing import Any, Dict, Optional

from textual.app import ComposeResult
from textual.message import Message
from textual.screen import Screen
from textual.widgets import Input, Label, Select

from .data_model import Category, Priority, Task


class TaskScreenResult(Message):
    """Message containing the result of TaskScreen operations.

    ``fields`` holds every field for a new task, but only the changed
    fields when editing.
    """
    def __init__(self, cancelled: bool, task_id: Optional[str] = None,
                 fields: Optional[Dict[str, Any]] = None) -> None:
        super().__init__()
        self.cancelled = cancelled
        self.task_id = task_id
        self.fields = fields or {}


class TaskScreen(Screen):
    """Screen for adding or editing tasks."""

    DEFAULT_CSS = """
    TaskScreen {
        align: center middle;
    }

    TaskScreen > Label {
        padding-top: 1;
    }

    TaskScreen #error {
        color: #dd0000;
    }
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
    ]

    def __init__(self, task: Optional[Task] = None, default_date: Optional[datetime.date] = None):
        super().__init__()
        self._editing = task
        start_date = task.date if task else (default_date or datetime.date.today()).isoformat()

        self.name_input = Input(
            value=task.name if task else "",
            placeholder="Task name (required)",
            select_on_focus=False,
        )
        self.date_input = Input(
            value=start_date,
            placeholder="Due date (YYYY-MM-DD)",
            select_on_focus=False,
        )
        self.category_select = Select(
            [(c.value, c.value) for c in Category],
            value=task.category if task and task.category in list(Category) else Category.HOMEWORK.value,
            allow_blank=False,
        )
        self.priority_select = Select(
            [(p.value, p.value) for p in Priority],
            value=task.priority if task and task.priority in list(Priority) else Priority.MEDIUM.value,
            allow_blank=False,
        )
        self.error_label = Label("", id="error")

        self.logger = logging.getLogger(__name__)

    def on_mount(self):
        """Called once the screen is mounted."""
        self.name_input.focus()

    def compose(self) -> ComposeResult:
        yield Label("Edit Task" if self._editing else "New Task")
        yield Label("Name:")
        yield self.name_input
        yield Label("Category:")
        yield self.category_select
        yield Label("Due date:")
        yield self.date_input
        yield Label("Priority:")
        yield self.priority_select
        yield self.error_label
        yield Label("Enter: save    Escape: cancel")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_submit()

    def collect_fields(self) -> Optional[Dict[str, Any]]:
        """Read and validate the form; returns None after showing an error."""
        name = self.name_input.value.strip()
        date_text = self.date_input.value.strip()

        if not name:
            self.error_label.update("Please enter a task name")
            return None
        try:
            due = datetime.datetime.strptime(date_text, "%Y-%m-%d").date()
        except ValueError:
            self.error_label.update("Date must look like YYYY-MM-DD")
            return None

        return {
            "name": name,
            "category": str(self.category_select.value),
            "date": due.isoformat(),
            "priority": str(self.priority_select.value),
        }

    def action_submit(self) -> None:
        """Validate and send the task fields to the app."""
        fields = self.collect_fields()
        if fields is None:
            self.logger.debug("Task form invalid, submission aborted")
            return

        if self._editing is None:
            result = TaskScreenResult(cancelled=False, fields=fields)
        else:
            original = self._editing.to_dict()
            changed = {k: v for k, v in fields.items() if original[k] != v}
            result = TaskScreenResult(cancelled=False, task_id=self._editing.id, fields=changed)

        self.app.post_message(result)
        self.app.pop_screen()

    def action_cancel(self) -> None:
        """Handle Escape key for canceling task add/edit."""
        self.logger.debug("Cancel action triggered")
        self.app.post_message(TaskScreenResult(cancelled=True))
        self.app.pop_screen()
