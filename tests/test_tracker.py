# tests/test_tracker.py

from __future__ import annotations

from study_tracker.data_model import Task
from study_tracker.tracker import StudyTracker, TrackerViews

from .conftest import TODAY
from .fakes import FailingSaver


def test_every_mutation_pushes_fresh_views(tracker: StudyTracker, pushed: list[TrackerViews]) -> None:
    task = tracker.create("Essay", "Homework", "2024-03-15", "High")
    tracker.toggle_complete(task.id)
    tracker.update(task.id, name="Final essay")
    tracker.delete(task.id)

    assert len(pushed) == 4
    assert [v.total for v in pushed] == [1, 1, 1, 0]
    assert [v.progress for v in pushed] == [0, 100, 100, 0]
    assert pushed[2].visible[0].name == "Final essay"


def test_views_are_consistent_across_list_calendar_and_progress(tracker: StudyTracker) -> None:
    tracker.create("Essay", "Homework", "2024-03-15", "High")
    done = tracker.create("Quiz", "Exam", "2024-03-15", "Low")
    tracker.toggle_complete(done.id)

    views = tracker.views()
    day = next(c for c in views.calendar if c is not None and c.day_number == 15)

    assert views.month_title == "March 2024"
    assert [t.name for t in views.visible] == ["Essay", "Quiz"]
    assert [t.name for t in day.tasks] == ["Essay", "Quiz"]
    assert views.progress == 50
    assert next(c for c in views.calendar if c is not None and c.is_today).date_iso == TODAY.isoformat()


def test_filters_change_list_but_not_calendar(tracker: StudyTracker, pushed: list[TrackerViews]) -> None:
    tracker.create("Essay", "Homework", "2024-03-15", "High")
    tracker.create("Midterm Review", "Exam", "2024-03-16", "Low")

    views = tracker.set_filters(search_text="REVIEW")

    assert pushed[-1] is views
    assert [t.name for t in views.visible] == ["Midterm Review"]
    assert sum(len(c.tasks) for c in views.calendar if c is not None) == 2


def test_month_navigation_crosses_years(tracker: StudyTracker, pushed: list[TrackerViews]) -> None:
    tracker.show_month(2024, 1)
    tracker.previous_month()
    assert (tracker.year, tracker.month) == (2023, 12)

    tracker.next_month()
    tracker.next_month()
    assert (tracker.year, tracker.month) == (2024, 2)
    assert pushed[-1].month_title == "February 2024"


def test_drag_and_drop_updates_both_views(tracker: StudyTracker, pushed: list[TrackerViews]) -> None:
    task = tracker.create("Essay", "Homework", "2024-03-01", "High")

    tracker.begin_drag(task.id)
    moved = tracker.drop_on("2024-03-20")

    assert moved is task
    assert tracker.dragged_task_id is None
    views = pushed[-1]
    assert views.visible[0].date == "2024-03-20"
    day = next(c for c in views.calendar if c is not None and c.day_number == 20)
    assert [t.id for t in day.tasks] == [task.id]


def test_drop_of_deleted_task_changes_nothing(tracker: StudyTracker, pushed: list[TrackerViews]) -> None:
    keep = tracker.create("Essay", "Homework", "2024-03-01", "High")
    gone = tracker.create("Quiz", "Exam", "2024-03-02", "Low")

    tracker.begin_drag(gone.id)
    tracker.delete(gone.id)
    pushes_before = len(pushed)
    assert tracker.drop_on("2024-03-15") is None

    assert tracker.dragged_task_id is None
    assert len(pushed) == pushes_before
    assert [(t.id, t.date) for t in tracker.store.list()] == [(keep.id, "2024-03-01")]


def test_save_failures_become_notices_and_state_survives() -> None:
    notices: list[str] = []
    tracker = StudyTracker(
        [Task(id="t1", name="Essay", category="Homework", date="2024-03-01", priority="High")],
        saver=FailingSaver(),
        today=TODAY,
    )
    tracker.subscribe_notices(notices.append)

    tracker.toggle_complete("t1")

    assert tracker.store.get("t1").completed is True
    assert tracker.views().progress == 100
    assert len(notices) == 1
    assert "quota exceeded" in notices[0]


def test_tasks_on_day(tracker: StudyTracker) -> None:
    tracker.create("Essay", "Homework", "2024-03-15", "High")
    tracker.create("Quiz", "Exam", "2024-03-16", "Low")

    assert [t.name for t in tracker.tasks_on("2024-03-16")] == ["Quiz"]


def test_unpadded_date_from_update_is_kept_but_lands_on_no_day(tracker: StudyTracker) -> None:
    task = tracker.create("Essay", "Homework", "2024-03-05", "High")

    tracker.update(task.id, date="2024-3-5")

    assert task.date == "2024-3-5"
    assert tracker.tasks_on("2024-03-05") == []
