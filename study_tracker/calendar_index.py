# study_tracker/calendar_index.py

import calendar
import datetime
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .data_model import Task

GRID_CELLS = 42  # 6 weeks x 7 days
WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True)
class CalendarCell:
    """One day of the month grid with the tasks due that day."""
    day_number: int
    date_iso: str
    is_today: bool
    tasks: Tuple[Task, ...]


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move ``delta`` months from (year, month), rolling over year boundaries."""
    year_offset, month_index = divmod(month - 1 + delta, 12)
    return year + year_offset, month_index + 1


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def tasks_on(tasks: Iterable[Task], date_iso: str) -> List[Task]:
    """Tasks due on ``date_iso``, in the order given."""
    return [t for t in tasks if t.date == date_iso]


def build_calendar(
    tasks: Iterable[Task],
    year: int,
    month: int,
    today: Optional[datetime.date] = None,
) -> List[Optional[CalendarCell]]:
    """
    Build the Sunday-first month grid for ``month`` (1-12) of ``year``.

    The result always has 42 entries. ``None`` pads the grid before day 1
    and after the last day of the month.
    """
    if today is None:
        today = datetime.date.today()
    today_iso = today.isoformat()

    by_date = {}
    for task in tasks:
        by_date.setdefault(task.date, []).append(task)

    monday_first, days_in_month = calendar.monthrange(year, month)
    leading = (monday_first + 1) % 7

    grid: List[Optional[CalendarCell]] = [None] * leading
    for day in range(1, days_in_month + 1):
        date_iso = f"{year:04d}-{month:02d}-{day:02d}"
        grid.append(CalendarCell(
            day_number=day,
            date_iso=date_iso,
            is_today=date_iso == today_iso,
            tasks=tuple(by_date.get(date_iso, ())),
        ))
    grid.extend([None] * (GRID_CELLS - len(grid)))
    return grid
