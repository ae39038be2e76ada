# study_tracker/filters.py

from dataclasses import dataclass, replace
from typing import Iterable, List

from .data_model import ALL, Status, Task, priority_rank


@dataclass(frozen=True)
class FilterCriteria:
    """The list-view filters; ``"All"`` disables a filter."""
    category: str = ALL
    priority: str = ALL
    status: str = ALL
    search_text: str = ""

    def replace(self, **changes) -> "FilterCriteria":
        return replace(self, **changes)

    def matches(self, task: Task) -> bool:
        if self.category != ALL and task.category != self.category:
            return False
        if self.priority != ALL and task.priority != self.priority:
            return False
        if self.status == Status.COMPLETED and not task.completed:
            return False
        if self.status == Status.PENDING and task.completed:
            return False
        if self.search_text and self.search_text.lower() not in task.name.lower():
            return False
        return True


def sort_key(task: Task):
    """Date ascending, then High before Medium before Low."""
    return (task.date, -priority_rank(task.priority))


def apply_filters(tasks: Iterable[Task], criteria: FilterCriteria) -> List[Task]:
    """Return the visible tasks for ``criteria`` in list order.

    The sort is stable, so tasks with the same date and priority keep the
    order they were given in.
    """
    return sorted((t for t in tasks if criteria.matches(t)), key=sort_key)
