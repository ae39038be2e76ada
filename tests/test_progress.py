# tests/test_progress.py

from __future__ import annotations

import pytest

from study_tracker.data_model import Task
from study_tracker.progress import completion_ratio


def _tasks(total: int, done: int) -> list[Task]:
    return [
        Task(id=str(i), name=f"t{i}", category="Exam", date="2024-03-01",
             priority="Low", completed=i < done)
        for i in range(total)
    ]


@pytest.mark.parametrize(
    ("total", "done", "expected"),
    [
        (0, 0, 0),
        (4, 1, 25),
        (3, 2, 67),
        (3, 1, 33),
        (8, 1, 13),  # 12.5 rounds half up
        (2, 2, 100),
    ],
)
def test_completion_ratio(total: int, done: int, expected: int) -> None:
    assert completion_ratio(_tasks(total, done)) == expected
