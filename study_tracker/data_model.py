# study_tracker/data_model.py

from typing import Any, Dict, Optional
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
import uuid

ALL = "All"

_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no", ""}


class Category(StrEnum):
    HOMEWORK = "Homework"
    EXAM = "Exam"
    PROJECT = "Project"
    PERSONAL_STUDY = "Personal Study"


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Status(StrEnum):
    """Completion filter values; ``ALL`` disables the filter."""
    ALL = ALL
    COMPLETED = "Completed"
    PENDING = "Pending"


_PRIORITY_RANK = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


def priority_rank(priority: str) -> int:
    """Return the sort rank of a priority; unknown values rank with Low."""
    return _PRIORITY_RANK.get(priority, 1)


def new_task_id() -> str:
    return uuid.uuid4().hex


def parse_iso_date(text: Any) -> Optional[date]:
    """Parse a zero-padded ``YYYY-MM-DD`` string; anything else gives None."""
    if not isinstance(text, str):
        return None
    try:
        parsed = date.fromisoformat(text)
    except ValueError:
        return None
    # fromisoformat also takes forms like "20240301"
    return parsed if parsed.isoformat() == text else None


def parse_bool(value: Any) -> bool:
    """Accept real bools and the usual string spellings of them."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"Not a boolean: {value!r}")


@dataclass
class Task:
    """Represents a single study task."""
    name: str
    category: str
    date: str
    priority: str
    completed: bool = False
    id: str = field(default_factory=new_task_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert Task to a dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "date": self.date,
            "priority": self.priority,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict):
        """Create Task from a dictionary (JSON deserialization).

        Raises ValueError when a required field is missing, empty or not a
        string, when the date is not ``YYYY-MM-DD``, or when ``completed``
        is not a boolean.
        """
        fields = {}
        for key in ("name", "category", "date", "priority"):
            value = data.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{key} must be a non-empty string, got {value!r}")
            fields[key] = value
        if parse_iso_date(fields["date"]) is None:
            raise ValueError(f"date must look like YYYY-MM-DD, got {fields['date']!r}")
        task_id = data.get("id")
        if task_id is None or str(task_id) == "":
            raise ValueError("id is required")
        return cls(
            id=str(task_id),
            completed=parse_bool(data.get("completed", False)),
            **fields,
        )

    def __repr__(self):
        return f"Task(id={self.id}, name={self.name}, date={self.date}, completed={self.completed})"
