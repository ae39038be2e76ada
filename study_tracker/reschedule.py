# study_tracker/reschedule.py

import logging
from typing import Any, Optional, Protocol

from .data_model import Task
from .errors import NotFoundError

logger = logging.getLogger(__name__)


class TaskUpdater(Protocol):
    def update(self, task_id: str, **fields: Any) -> Task: ...


class RescheduleCoordinator:
    """
    Drag-to-reschedule state: idle, or dragging one task.

    ``begin_drag`` moves to dragging; ``drop_on`` and ``cancel_drag`` always
    return to idle, whatever happens to the update.
    """

    def __init__(self, store: TaskUpdater):
        self._store = store
        self.dragged_task_id: Optional[str] = None

    @property
    def is_dragging(self) -> bool:
        return self.dragged_task_id is not None

    def begin_drag(self, task_id: str) -> None:
        logger.debug("Drag started for task %s", task_id)
        self.dragged_task_id = task_id

    def drop_on(self, date_iso: str) -> Optional[Task]:
        """Move the dragged task to ``date_iso``; returns the task, or None if nothing moved."""
        task_id = self.dragged_task_id
        if task_id is None:
            return None
        try:
            return self._store.update(task_id, date=date_iso)
        except NotFoundError:
            logger.debug("Dropped task %s no longer exists", task_id)
            return None
        finally:
            self.dragged_task_id = None

    def cancel_drag(self) -> None:
        if self.dragged_task_id is not None:
            logger.debug("Drag cancelled for task %s", self.dragged_task_id)
        self.dragged_task_id = None
