# study_tracker/tracker.py

import datetime
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from .calendar_index import CalendarCell, build_calendar, month_title, shift_month, tasks_on
from .data_model import Task
from .errors import PersistenceError
from .filters import FilterCriteria, apply_filters
from .progress import completion_ratio
from .reschedule import RescheduleCoordinator
from .task_store import Saver, TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackerViews:
    """Everything the UI draws, recomputed after each change."""
    visible: List[Task]
    calendar: List[Optional[CalendarCell]]
    year: int
    month: int
    month_title: str
    progress: int
    total: int


ViewListener = Callable[[TrackerViews], None]
NoticeListener = Callable[[str], None]


class StudyTracker:
    """
    Ties the store to its derived views.

    Mutations, filter changes and month navigation all end by pushing a fresh
    ``TrackerViews`` to every subscribed listener. Save failures are pushed
    to notice listeners as text.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        saver: Optional[Saver] = None,
        today: Optional[datetime.date] = None,
    ):
        self.store = TaskStore(tasks, saver=saver, on_save_error=self._on_save_error)
        self.coordinator = RescheduleCoordinator(self)
        self.criteria = FilterCriteria()
        self._today = today
        start = today or datetime.date.today()
        self.year, self.month = start.year, start.month
        self._view_listeners: List[ViewListener] = []
        self._notice_listeners: List[NoticeListener] = []

    # ---- listeners ----

    def subscribe(self, listener: ViewListener) -> None:
        self._view_listeners.append(listener)

    def subscribe_notices(self, listener: NoticeListener) -> None:
        self._notice_listeners.append(listener)

    def _on_save_error(self, error: PersistenceError) -> None:
        self.notify(f"Changes not saved: {error}")

    def notify(self, message: str) -> None:
        for listener in self._notice_listeners:
            listener(message)

    def views(self) -> TrackerViews:
        tasks = self.store.list()
        return TrackerViews(
            visible=apply_filters(tasks, self.criteria),
            calendar=build_calendar(tasks, self.year, self.month, today=self._today),
            year=self.year,
            month=self.month,
            month_title=month_title(self.year, self.month),
            progress=completion_ratio(tasks),
            total=len(tasks),
        )

    def publish(self) -> TrackerViews:
        views = self.views()
        for listener in self._view_listeners:
            listener(views)
        return views

    # ---- mutations ----

    def create(self, name: str, category: str, date: str, priority: str) -> Task:
        task = self.store.create(name, category, date, priority)
        self.publish()
        return task

    def update(self, task_id: str, **fields: Any) -> Task:
        task = self.store.update(task_id, **fields)
        self.publish()
        return task

    def toggle_complete(self, task_id: str) -> Task:
        task = self.store.toggle_complete(task_id)
        self.publish()
        return task

    def delete(self, task_id: str) -> None:
        self.store.delete(task_id)
        self.publish()

    # ---- drag to reschedule ----

    def begin_drag(self, task_id: str) -> None:
        self.coordinator.begin_drag(task_id)

    def drop_on(self, date_iso: str) -> Optional[Task]:
        """Drop the dragged task on a day. Views are pushed by ``update``."""
        return self.coordinator.drop_on(date_iso)

    def cancel_drag(self) -> None:
        self.coordinator.cancel_drag()

    @property
    def dragged_task_id(self) -> Optional[str]:
        return self.coordinator.dragged_task_id

    # ---- view state ----

    def set_filters(self, **changes: str) -> TrackerViews:
        self.criteria = self.criteria.replace(**changes)
        logger.debug("Filters now %s", self.criteria)
        return self.publish()

    def show_month(self, year: int, month: int) -> TrackerViews:
        self.year, self.month = shift_month(year, month, 0)
        return self.publish()

    def previous_month(self) -> TrackerViews:
        return self.show_month(*shift_month(self.year, self.month, -1))

    def next_month(self) -> TrackerViews:
        return self.show_month(*shift_month(self.year, self.month, 1))

    def tasks_on(self, date_iso: str) -> List[Task]:
        return tasks_on(self.store.list(), date_iso)
