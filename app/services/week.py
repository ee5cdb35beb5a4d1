from datetime import date, timedelta
from typing import List, NamedTuple

DAYS_IN_WEEK = 7


class WeekWindow(NamedTuple):
    start: date
    end: date

    def days(self) -> List[date]:
        return [self.start + timedelta(days=i) for i in range(DAYS_IN_WEEK)]

    def shift(self, weeks: int) -> "WeekWindow":
        delta = timedelta(weeks=weeks)
        return WeekWindow(self.start + delta, self.end + delta)

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


def week_window(reference: date, week_start: int = 0) -> WeekWindow:
    """Return the 7-day window containing ``reference``.

    ``week_start`` uses ``date.weekday()`` numbering (Monday is 0).
    """
    if not 0 <= week_start < DAYS_IN_WEEK:
        raise ValueError(f"week_start must be between 0 and 6, got {week_start}")
    start = reference - timedelta(days=(reference.weekday() - week_start) % DAYS_IN_WEEK)
    return WeekWindow(start, start + timedelta(days=DAYS_IN_WEEK - 1))
