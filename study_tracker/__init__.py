# study_tracker/__init__.py

from .data_model import Category, Priority, Status, Task
from .errors import NotFoundError, PersistenceError, TrackerError, ValidationError
from .task_store import TaskStore
from .tracker import StudyTracker, TrackerViews
