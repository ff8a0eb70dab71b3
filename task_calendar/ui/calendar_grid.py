"""Month grid for the date picker.

Weekdays are numbered 0 = Sunday .. 6 = Saturday, matching the column
order of the rendered calendar.
"""

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True)
class DayCell:
    day: Optional[int] = None  # None for a leading placeholder
    selected: bool = False
    today: bool = False

    @property
    def is_placeholder(self) -> bool:
        return self.day is None


@dataclass(frozen=True)
class CalendarGrid:
    year: int
    month: int
    first_weekday: int
    days_in_month: int
    cells: Tuple[DayCell, ...]

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month - 1]

    @property
    def title(self) -> str:
        return f"{self.month_name} {self.year}"

    @property
    def weekdays(self) -> Tuple[str, ...]:
        return WEEKDAYS

    def day_cells(self) -> Tuple[DayCell, ...]:
        return self.cells[self.first_weekday:]


def sunday_weekday(d: date) -> int:
    # date.weekday() counts from Monday
    return (d.weekday() + 1) % 7


def build_grid(reference: date, today: Optional[date] = None) -> CalendarGrid:
    """Cells for `reference`'s month: leading blanks, then one cell per day."""
    today = today or date.today()
    year, month = reference.year, reference.month
    days_in_month = calendar.monthrange(year, month)[1]
    first_weekday = sunday_weekday(date(year, month, 1))

    cells = [DayCell() for _ in range(first_weekday)]
    for day in range(1, days_in_month + 1):
        current = date(year, month, day)
        cells.append(DayCell(day=day, selected=current == reference, today=current == today))

    return CalendarGrid(
        year=year,
        month=month,
        first_weekday=first_weekday,
        days_in_month=days_in_month,
        cells=tuple(cells),
    )


def previous_month(reference: date) -> date:
    if reference.month == 1:
        return date(reference.year - 1, 12, 1)
    return date(reference.year, reference.month - 1, 1)


def next_month(reference: date) -> date:
    if reference.month == 12:
        return date(reference.year + 1, 1, 1)
    return date(reference.year, reference.month + 1, 1)


def select_day(reference: date, day: int) -> date:
    """The clicked day in the month currently displayed for `reference`."""
    return reference.replace(day=day)
