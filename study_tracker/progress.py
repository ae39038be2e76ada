# study_tracker/progress.py

from typing import Sequence

from .data_model import Task


def completion_ratio(tasks: Sequence[Task]) -> int:
    """Percentage of completed tasks, rounded half up; 0 when there are none."""
    total = len(tasks)
    if total == 0:
        return 0
    done = sum(1 for t in tasks if t.completed)
    return (200 * done + total) // (2 * total)
