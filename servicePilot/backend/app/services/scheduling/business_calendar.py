"""
Business calendar utilities.
Advances a timestamp across a technician's working hours.
"""

from datetime import datetime, date, time, timedelta

from .errors import InvalidScheduleError, CalendarWalkLimitError
from .types import WorkSchedule


MAX_CALENDAR_DAYS = 3650  # ~10 years


def schedule_day_index(day: date) -> int:
    """Weekday index in schedule convention (0=Sunday ... 6=Saturday)."""
    return (day.weekday() + 1) % 7


def is_work_day(day: date, schedule: WorkSchedule) -> bool:
    return schedule_day_index(day) in schedule.work_days


def validate_schedule(schedule: WorkSchedule) -> None:
    """Raise InvalidScheduleError if the schedule can never provide working time."""
    if not schedule.work_days:
        raise InvalidScheduleError("Schedule has no work days")
    if any(d < 0 or d > 6 for d in schedule.work_days):
        raise InvalidScheduleError(f"Work days must be within 0-6, got {sorted(schedule.work_days)}")
    if schedule.start_time >= schedule.end_time:
        raise InvalidScheduleError(
            f"start_time {schedule.start_time} must be before end_time {schedule.end_time}"
        )
    if schedule.break_duration_minutes < 0:
        raise InvalidScheduleError("break_duration_minutes cannot be negative")
    if schedule.break_duration_minutes >= schedule.window_minutes:
        raise InvalidScheduleError(
            f"Break of {schedule.break_duration_minutes} min does not fit in a "
            f"{schedule.window_minutes} min working window"
        )


def working_hours_per_day(schedule: WorkSchedule) -> float:
    """Capacity of a full work day in hours (window minus break)."""
    return max(0, schedule.window_minutes - schedule.break_duration_minutes) / 60


def day_bounds(day: date, schedule: WorkSchedule, tzinfo=None) -> tuple[datetime, datetime]:
    """Absolute start and end of the working window on a given day."""
    start_dt = datetime.combine(day, schedule.start_time, tzinfo=tzinfo)
    end_dt = datetime.combine(day, schedule.end_time, tzinfo=tzinfo)
    return start_dt, end_dt


def advance(
    start: datetime,
    hours: float,
    schedule: WorkSchedule,
    max_days: int = MAX_CALENDAR_DAYS,
) -> datetime:
    """
    Walk forward from start until `hours` working hours have elapsed.

    The daily break reduces capacity rather than opening a gap in the clock:
    a day's consumable time runs from start_time up to end_time minus the
    break. A cursor before the window snaps to start_time; a cursor after it,
    or on a non-work day, moves to the next work day's start_time.

    Hours are consumed in whole seconds so identical inputs always land on
    the same instant.

    Returns:
        The instant at which the hours are fully consumed. With hours=0 this is
        start itself when it lies inside a working window, otherwise the start
        of the next one.

    Raises:
        InvalidScheduleError: schedule can never provide working time
        CalendarWalkLimitError: max_days simulated without finishing
        ValueError: negative hours
    """
    validate_schedule(schedule)
    if hours < 0:
        raise ValueError(f"hours must be non-negative, got {hours}")

    remaining = round(hours * 3600)
    break_delta = timedelta(minutes=schedule.break_duration_minutes)
    tzinfo = start.tzinfo
    cursor = start

    for _ in range(max_days):
        day = cursor.date()

        if is_work_day(day, schedule):
            day_start, day_end = day_bounds(day, schedule, tzinfo)
            capacity_end = day_end - break_delta

            if cursor < day_start:
                cursor = day_start

            if cursor <= day_end:
                if remaining == 0:
                    return cursor

                available = int((capacity_end - cursor).total_seconds())
                if available > 0:
                    if remaining <= available:
                        return cursor + timedelta(seconds=remaining)
                    remaining -= available

        # Day exhausted or not workable, carry to the next midnight
        cursor = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tzinfo)

    raise CalendarWalkLimitError(
        f"Could not place {hours}h of work within {max_days} days"
    )
