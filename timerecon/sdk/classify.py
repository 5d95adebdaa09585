"""Day classification.

Official day flags can co-occur, so each day gets exactly one category by
walking a fixed priority list; the first flag that is set wins.
"""

from enum import Enum

from .schemas import DayRecord


class DayCategory(str, Enum):
    HOLIDAY = "holiday"
    VACATION = "vacation"
    MEDICAL_LEAVE = "medical_leave"
    CALENDAR_ADJUSTMENT = "calendar_adjustment"
    WEEKEND = "weekend"
    WORK_DAY = "work_day"
    OTHER = "other"


# Order matters: earlier entries win when several flags are set.
CATEGORY_PRIORITY = (
    ("is_holiday", DayCategory.HOLIDAY),
    ("is_vacation", DayCategory.VACATION),
    ("is_medical_leave", DayCategory.MEDICAL_LEAVE),
    ("is_calendar_adjustment", DayCategory.CALENDAR_ADJUSTMENT),
    ("is_weekend", DayCategory.WEEKEND),
    ("is_work_day", DayCategory.WORK_DAY),
)


def classify(day: DayRecord) -> DayCategory:
    """Return the display category of an official day record."""
    for flag, category in CATEGORY_PRIORITY:
        if getattr(day, flag):
            return category
    return DayCategory.OTHER
