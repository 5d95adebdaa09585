"""Build snapshots from raw extracted rows.

The HTML extraction step (outside this package) yields one dict per table
row with the cell text as printed: DD/MM/YYYY dates, clock durations, and a
free-text day type label on the official calendar. These helpers turn such
rows into the snapshot schemas, the same way for every fetch.

Raw official payload:
    {"year": "2025", "expected_worked_time_in_year": "...", ...,
     "monthly_data": [{"month": "January", ...,
                       "daily_data": [{"date": "06/01/2025", "day_type": "Laborable",
                                       "expected_worked_time_in_day": "8h", ...}]}]}

Raw secondary payload:
    {"summary": {"reporting_date_from": "01/01/2025", ...},
     "monthly_data": [{"date": "06/01/2025", "in": "8:00", "out": "12:00",
                       "worked_time": "4:00:00", "project": "...", "activity": "..."}]}
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from .dates import normalize_date, parse_canonical_date
from .durations import parse_clock_duration
from .schemas import (
    DayRecord,
    MonthRecord,
    OfficialSnapshot,
    SecondarySnapshot,
    SecondarySummary,
    TimeEntry,
)

logger = logging.getLogger(__name__)

# Day type labels seen on the official calendar (Spanish and English UI).
HOLIDAY_LABELS = ("festivo", "bank holiday")
VACATION_LABELS = ("vacation", "vacaciones", "ausencia")
MEDICAL_LEAVE_LABELS = ("baja", "medical")
CALENDAR_ADJUSTMENT_LABELS = ("ajuste", "calendar adjustment")
WEEKEND_LABELS = ("fin de semana", "weekend")
# Labels that carry no classification of their own.
NEUTRAL_LABELS = ("", "laborable", "non working day", "working day")


def _text(row: Dict[str, Any], key: str) -> str:
    value = row.get(key)
    return str(value).strip() if value is not None else ""


def _contains_any(label: str, keywords) -> bool:
    return any(keyword in label for keyword in keywords)


def day_flags(day_type: str, date: str, expected: str) -> Dict[str, bool]:
    """Derive classification flags from a day type label.

    Any non-neutral label that isn't recognized is treated as an absence
    (vacation); the official calendar names absence types freely.
    """
    label = day_type.strip().lower()

    is_holiday = _contains_any(label, HOLIDAY_LABELS)
    is_medical_leave = _contains_any(label, MEDICAL_LEAVE_LABELS)
    is_calendar_adjustment = _contains_any(label, CALENDAR_ADJUSTMENT_LABELS)

    parsed = parse_canonical_date(date)
    is_weekend = _contains_any(label, WEEKEND_LABELS) or (parsed is not None and parsed.weekday() >= 5)

    recognized = is_holiday or is_medical_leave or is_calendar_adjustment or _contains_any(label, WEEKEND_LABELS)
    is_vacation = _contains_any(label, VACATION_LABELS) or (label not in NEUTRAL_LABELS and not recognized)

    return {
        "is_holiday": is_holiday,
        "is_vacation": is_vacation,
        "is_medical_leave": is_medical_leave,
        "is_calendar_adjustment": is_calendar_adjustment,
        "is_weekend": is_weekend,
        "is_work_day": bool(expected),
    }


def official_day_from_row(row: Dict[str, Any]) -> Optional[DayRecord]:
    """Build a DayRecord from a raw official row; None if it has no date."""
    date = normalize_date(_text(row, "date"))
    if not date:
        return None

    expected = parse_clock_duration(_text(row, "expected_worked_time_in_day"))
    flags = day_flags(_text(row, "day_type"), date, expected)

    # Rows that already carry flags (re-imported snapshots) keep them.
    for flag in flags:
        if flag in row:
            flags[flag] = bool(row[flag])

    return DayRecord(
        date=date,
        expected_worked_time_in_day=expected,
        worked_time_in_day=parse_clock_duration(_text(row, "worked_time_in_day")),
        overtime_in_day=parse_clock_duration(_text(row, "overtime_in_day")),
        **flags,
    )


def secondary_entry_from_row(row: Dict[str, Any]) -> Optional[TimeEntry]:
    """Build a TimeEntry from a raw secondary row; None if it has no date."""
    raw_date = _text(row, "date")
    date = normalize_date(raw_date)
    if not date:
        return None

    return TimeEntry(
        date=date,
        in_time=parse_clock_duration(_text(row, "in")),
        out_time=parse_clock_duration(_text(row, "out")),
        worked_time=parse_clock_duration(_text(row, "worked_time")),
        customer=_text(row, "customer"),
        project=_text(row, "project"),
        activity=_text(row, "activity"),
    )


def _fetch_stamp(fetched_at: Optional[datetime]) -> Dict[str, str]:
    fetched_at = fetched_at or datetime.now()
    return {
        "fetch_date": fetched_at.strftime("%Y/%m/%d"),
        "fetch_time": fetched_at.strftime("%H:%M"),
    }


def build_official_snapshot(raw: Dict[str, Any], fetched_at: Optional[datetime] = None) -> OfficialSnapshot:
    """Build an OfficialSnapshot from a raw official payload."""
    months: List[MonthRecord] = []
    for raw_month in raw.get("monthly_data") or []:
        days = [official_day_from_row(r) for r in raw_month.get("daily_data") or []]
        days = [d for d in days if d is not None]
        logger.info(f"Official month {_text(raw_month, 'month')!r}: {len(days)} day rows")
        months.append(MonthRecord(
            month=_text(raw_month, "month"),
            expected_worked_time_in_month=parse_clock_duration(_text(raw_month, "expected_worked_time_in_month")),
            worked_time_in_month=parse_clock_duration(_text(raw_month, "worked_time_in_month")),
            overtime_in_month=parse_clock_duration(_text(raw_month, "overtime_in_month")),
            daily_data=days,
        ))

    return OfficialSnapshot(
        **_fetch_stamp(fetched_at),
        year=_text(raw, "year"),
        expected_worked_time_in_year=parse_clock_duration(_text(raw, "expected_worked_time_in_year")),
        worked_time_in_year=parse_clock_duration(_text(raw, "worked_time_in_year")),
        overtime_in_year=parse_clock_duration(_text(raw, "overtime_in_year")),
        monthly_data=months,
    )


def build_secondary_snapshot(raw: Dict[str, Any], fetched_at: Optional[datetime] = None) -> SecondarySnapshot:
    """Build a SecondarySnapshot from a raw secondary payload."""
    raw_summary = raw.get("summary") or {}
    summary = SecondarySummary(
        reporting_date_from=normalize_date(_text(raw_summary, "reporting_date_from")),
        reporting_date_to=normalize_date(_text(raw_summary, "reporting_date_to")),
        worker=_text(raw_summary, "worker"),
        worked_time=parse_clock_duration(_text(raw_summary, "worked_time")),
    )

    entries = [secondary_entry_from_row(r) for r in raw.get("monthly_data") or []]
    entries = [e for e in entries if e is not None]
    logger.info(f"Secondary snapshot: {len(entries)} time entries")

    return SecondarySnapshot(
        **_fetch_stamp(fetched_at),
        summary=summary,
        monthly_data=entries,
    )
