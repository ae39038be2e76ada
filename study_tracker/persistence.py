# study_tracker/persistence.py

import os
import json
import datetime
import logging
from typing import List

from .data_model import Task
from .errors import PersistenceError

TASKS_FILE = "tasks.json"
LOGS_FILE = "logs.json"

logger = logging.getLogger(__name__)


class JsonTaskRepository:
    """Stores the whole task collection as a JSON array in a single file."""

    def __init__(self, path: str = TASKS_FILE):
        self.path = path

    def load(self) -> List[Task]:
        """Load tasks from the JSON file; a missing file means no tasks yet."""
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Could not read {self.path}: {exc}") from exc
        if not isinstance(data, list):
            raise PersistenceError(f"{self.path} does not contain a task list")
        tasks = []
        seen_ids = set()
        for position, item in enumerate(data):
            try:
                task = Task.from_dict(item)
            except (ValueError, TypeError, AttributeError) as exc:
                raise PersistenceError(
                    f"Malformed task record #{position} in {self.path}: {exc}"
                ) from exc
            if task.id in seen_ids:
                raise PersistenceError(f"Duplicate task id {task.id!r} in {self.path}")
            seen_ids.add(task.id)
            tasks.append(task)
        logger.debug("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: List[Task]) -> None:
        """Persist tasks to the JSON file."""
        data = [t.to_dict() for t in tasks]
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as exc:
            raise PersistenceError(f"Could not write {self.path}: {exc}") from exc
        logger.debug("Saved %d tasks to %s", len(tasks), self.path)


def load_logs(path: str = LOGS_FILE) -> List[str]:
    """Load action log entries; an unreadable log starts fresh."""
    if not os.path.exists(path):
        return []
    try:
        with open(path, "r", encoding="utf-8") as f:
            entries = json.load(f)
    except (OSError, ValueError):
        logger.warning("Ignoring unreadable action log %s", path)
        return []
    return [str(e) for e in entries] if isinstance(entries, list) else []


def save_logs(logs: List[str], path: str = LOGS_FILE) -> None:
    """Persist action log entries to JSON file."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(logs, f, indent=2)
    except OSError as exc:
        raise PersistenceError(f"Could not write {path}: {exc}") from exc


def log_action(logs: List[str], message: str, path: str = LOGS_FILE) -> str:
    """Add timestamped log entry, persist, and return the entry."""
    timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    entry = f"[{timestamp}] {message}"
    logs.append(entry)
    save_logs(logs, path)
    return entry
