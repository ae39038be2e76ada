# study_tracker/task_store.py

import datetime
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from .data_model import Task, new_task_id, parse_bool
from .errors import NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "category", "date", "priority")
EDITABLE_FIELDS = REQUIRED_FIELDS + ("completed",)

Saver = Callable[[List[Task]], None]


def _clean(field_name: str, value: Any) -> Any:
    """Normalize a field value, rejecting empty required fields."""
    if field_name == "completed":
        try:
            return parse_bool(value)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
    if isinstance(value, datetime.date):
        value = value.isoformat()
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    value = str(value)
    return value.strip() if field_name == "name" else value


class TaskStore:
    """
    Owns the task collection and is the only place tasks are mutated.

    Every mutation ends in a save-point: the full collection is handed to
    ``saver``. A ``PersistenceError`` from the saver does not undo the
    in-memory change; it is logged and passed to ``on_save_error``.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        saver: Optional[Saver] = None,
        on_save_error: Optional[Callable[[PersistenceError], None]] = None,
    ):
        self._tasks: List[Task] = []
        self._index: Dict[str, Task] = {}
        for task in tasks:
            if task.id in self._index:
                raise ValidationError(f"Duplicate task id {task.id!r}")
            self._tasks.append(task)
            self._index[task.id] = task
        self._saver = saver
        self._on_save_error = on_save_error

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._index

    def _save_point(self) -> None:
        if self._saver is None:
            return
        try:
            self._saver(self.list())
        except PersistenceError as exc:
            logger.warning("Save failed, keeping changes in memory: %s", exc)
            if self._on_save_error is not None:
                self._on_save_error(exc)

    def _new_id(self) -> str:
        task_id = new_task_id()
        while task_id in self._index:
            task_id = new_task_id()
        return task_id

    def list(self) -> List[Task]:
        """Return a snapshot of all tasks in insertion order."""
        return list(self._tasks)

    def get(self, task_id: str) -> Task:
        try:
            return self._index[task_id]
        except KeyError:
            raise NotFoundError(task_id) from None

    def create(self, name: str, category: str, date: str, priority: str) -> Task:
        """Add a new pending task and return it."""
        fields = {
            key: _clean(key, value)
            for key, value in zip(REQUIRED_FIELDS, (name, category, date, priority))
        }
        task = Task(id=self._new_id(), completed=False, **fields)
        self._tasks.append(task)
        self._index[task.id] = task
        logger.debug("Created task %s", task)
        self._save_point()
        return task

    def update(self, task_id: str, **fields: Any) -> Task:
        """Apply the given fields to a task; fields not passed are left alone.

        Text fields are only checked for emptiness. A ``date`` that is not
        zero-padded ``YYYY-MM-DD`` is stored as given and will not land on
        any calendar day, so callers must validate dates themselves.
        """
        task = self.get(task_id)
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown task field(s): {', '.join(sorted(unknown))}")
        changes = {key: _clean(key, value) for key, value in fields.items()}
        for key, value in changes.items():
            setattr(task, key, value)
        logger.debug("Updated task %s with %s", task_id, changes)
        self._save_point()
        return task

    def toggle_complete(self, task_id: str) -> Task:
        task = self.get(task_id)
        task.completed = not task.completed
        logger.debug("Toggled task %s completed=%s", task_id, task.completed)
        self._save_point()
        return task

    def delete(self, task_id: str) -> None:
        """Remove a task. Deleting an unknown id does nothing."""
        task = self._index.pop(task_id, None)
        if task is None:
            logger.debug("Delete ignored, no task %s", task_id)
            return
        self._tasks.remove(task)
        logger.debug("Deleted task %s", task_id)
        self._save_point()
