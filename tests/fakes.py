# tests/fakes.py

from __future__ import annotations

from study_tracker.data_model import Task
from study_tracker.errors import PersistenceError


class RecordingSaver:
    """
    In-memory persistence collaborator.

    Each save-point stores a copy of the task dicts so tests can assert on
    what would have been written.
    """

    def __init__(self) -> None:
        self.saves: list[list[dict]] = []

    def __call__(self, tasks: list[Task]) -> None:
        self.saves.append([t.to_dict() for t in tasks])

    @property
    def last(self) -> list[dict]:
        return self.saves[-1]


class FailingSaver:
    """Saver that always fails, like a full or read-only disk."""

    def __init__(self) -> None:
        self.attempts = 0

    def __call__(self, tasks: list[Task]) -> None:
        self.attempts += 1
        raise PersistenceError("quota exceeded")
