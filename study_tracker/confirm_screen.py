# study_tracker/confirm_screen.py

import logging
from typing import Optional

from textual.app import ComposeResult
from textual.message import Message
from textual.screen import Screen
from textual.widgets import Label

from .data_model import Task
from .tracker import StudyTracker


class DeleteConfirmResult(Message):
    """Message carrying the user's answer to a delete prompt."""
    def __init__(self, task_id: str, confirmed: bool) -> None:
        super().__init__()
        self.task_id = task_id
        self.confirmed = confirmed


def apply_delete_confirmation(tracker: StudyTracker, task_id: str, confirmed: bool) -> Optional[Task]:
    """Delete the task if the user said yes; returns the deleted task, or None."""
    if not confirmed or task_id not in tracker.store:
        return None
    task = tracker.store.get(task_id)
    tracker.delete(task_id)
    return task


class ConfirmDeleteScreen(Screen):
    """Asks before a task is deleted."""

    DEFAULT_CSS = """
    ConfirmDeleteScreen {
        align: center middle;
    }
    """

    BINDINGS = [
        ("y", "confirm", "Delete"),
        ("n", "cancel", "Keep"),
        ("escape", "cancel", "Keep"),
    ]

    def __init__(self, task: Task, parent_screen: Optional[Screen] = None):
        super().__init__()
        self._doomed = task
        self._parent_screen = parent_screen
        self.logger = logging.getLogger(__name__)

    def compose(self) -> ComposeResult:
        yield Label(f"Delete task '{self._doomed.name}'?")
        yield Label("y: delete   n / escape: keep")

    def _reply(self, confirmed: bool) -> None:
        self.logger.debug("Delete of %s confirmed=%s", self._doomed.id, confirmed)
        result = DeleteConfirmResult(self._doomed.id, confirmed)
        # Post to the screen that asked, otherwise to the app
        if self._parent_screen is not None:
            self._parent_screen.post_message(result)
        else:
            self.app.post_message(result)
        self.app.pop_screen()

    def action_confirm(self) -> None:
        self._reply(True)

    def action_cancel(self) -> None:
        self._reply(False)
