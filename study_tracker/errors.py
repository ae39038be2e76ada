# study_tracker/errors.py


class TrackerError(Exception):
    """Base class for study tracker errors."""


class ValidationError(TrackerError):
    """A required task field was missing or empty."""


class NotFoundError(TrackerError):
    """No task exists with the given id."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"No task with id {task_id!r}")
        self.task_id = task_id


class PersistenceError(TrackerError):
    """Loading or saving the task collection failed."""
