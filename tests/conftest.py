# tests/conftest.py

from __future__ import annotations

import datetime

import pytest

from study_tracker.task_store import TaskStore
from study_tracker.tracker import StudyTracker, TrackerViews

from .fakes import RecordingSaver

TODAY = datetime.date(2024, 3, 10)


@pytest.fixture()
def saver() -> RecordingSaver:
    return RecordingSaver()


@pytest.fixture()
def store(saver: RecordingSaver) -> TaskStore:
    return TaskStore(saver=saver)


@pytest.fixture()
def tracker(saver: RecordingSaver) -> StudyTracker:
    """Tracker pinned to March 2024 so calendar output is deterministic."""
    return StudyTracker(saver=saver, today=TODAY)


@pytest.fixture()
def pushed(tracker: StudyTracker) -> list[TrackerViews]:
    views: list[TrackerViews] = []
    tracker.subscribe(views.append)
    return views
