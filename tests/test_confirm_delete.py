# tests/test_confirm_delete.py

from __future__ import annotations

from study_tracker.confirm_screen import apply_delete_confirmation
from study_tracker.tracker import StudyTracker, TrackerViews

from .fakes import RecordingSaver


def test_confirmed_delete_removes_task(
    tracker: StudyTracker, pushed: list[TrackerViews], saver: RecordingSaver
) -> None:
    task = tracker.create("Essay", "Homework", "2024-03-01", "High")

    deleted = apply_delete_confirmation(tracker, task.id, confirmed=True)

    assert deleted is task
    assert task.id not in tracker.store
    assert pushed[-1].total == 0
    assert saver.last == []


def test_cancelled_delete_keeps_task(
    tracker: StudyTracker, pushed: list[TrackerViews], saver: RecordingSaver
) -> None:
    task = tracker.create("Essay", "Homework", "2024-03-01", "High")
    pushes_before, saves_before = len(pushed), len(saver.saves)

    assert apply_delete_confirmation(tracker, task.id, confirmed=False) is None

    assert task.id in tracker.store
    assert len(pushed) == pushes_before
    assert len(saver.saves) == saves_before


def test_confirming_an_already_deleted_task_is_harmless(tracker: StudyTracker) -> None:
    task = tracker.create("Essay", "Homework", "2024-03-01", "High")
    tracker.delete(task.id)

    assert apply_delete_confirmation(tracker, task.id, confirmed=True) is None
    assert len(tracker.store) == 0
