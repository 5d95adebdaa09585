"""Reconciliation of official day records against secondary time entries.

For each official day of the selected month, the secondary system's entries
logged on the same canonical date are summed (breaks and leave excluded) and
compared with the official worked time. Differences beyond a one hour
tolerance are flagged as anomalies.

Unreadable duration text never aborts a report: the value counts as zero
in the totals and the row keeps the raw text for display.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .classify import DayCategory, classify
from .durations import duration_to_minutes, format_duration
from .schemas import DayRecord, MonthRecord, OfficialSnapshot, SecondarySnapshot, TimeEntry

logger = logging.getLogger(__name__)

# A day is anomalous when |diff| exceeds this many minutes (60 flags, 59 doesn't).
ANOMALY_TOLERANCE_MINUTES = 59


@dataclass(frozen=True)
class ReconciledDay:
    """One row of the comparison table."""

    date: str
    category: DayCategory
    official_overtime: str  # raw text as printed by the official system
    official_worked: str  # raw text as printed by the official system
    secondary_worked: int  # minutes, excluded entries left out
    diff: int  # secondary_worked - official worked minutes
    anomaly: bool
    official_overtime_minutes: Optional[int] = None
    official_worked_minutes: Optional[int] = None
    entry_count: int = 0
    excluded_count: int = 0

    @property
    def secondary_worked_text(self) -> str:
        return format_duration(self.secondary_worked)

    @property
    def diff_text(self) -> str:
        return format_duration(self.diff)


@dataclass(frozen=True)
class ReconciledMonth:
    """Reconciled rows for one month plus the running totals."""

    month_index: int
    month: str
    days: List[ReconciledDay] = field(default_factory=list)
    overtime_total: int = 0
    official_total: int = 0
    secondary_total: int = 0
    diff_total: int = 0

    @property
    def anomalies(self) -> List[ReconciledDay]:
        return [day for day in self.days if day.anomaly]

    @property
    def anomaly_count(self) -> int:
        return len(self.anomalies)

    def day(self, date: str) -> Optional[ReconciledDay]:
        for row in self.days:
            if row.date == date:
                return row
        return None


def is_anomaly(diff: int) -> bool:
    return abs(diff) > ANOMALY_TOLERANCE_MINUTES


def clamp_month_index(index: int, count: int) -> int:
    """Clamp a requested month index into [0, count - 1] (0 when empty)."""
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


def _index_entries(entries: Iterable[TimeEntry]) -> Dict[str, List[TimeEntry]]:
    by_date: Dict[str, List[TimeEntry]] = defaultdict(list)
    for entry in entries:
        by_date[entry.date].append(entry)
    return by_date


def aggregate_entries(date: str, entries: Iterable[TimeEntry]) -> int:
    """Sum worked minutes of the entries logged on date.

    Excluded entries (breaks, vacation, holiday, free time) and entries with
    unreadable durations contribute nothing. No entries gives 0.
    """
    total = 0
    for entry in entries:
        if entry.date != date:
            continue
        if entry.is_excluded:
            logger.info(f"Skipping excluded entry for {date}: project={entry.project!r} activity={entry.activity!r}")
            continue
        minutes = duration_to_minutes(entry.worked_time, context=f"secondary entry on {date}")
        if minutes is not None:
            total += minutes
    return total


def reconcile_day(day: DayRecord, entries: List[TimeEntry]) -> ReconciledDay:
    """Compare one official day with the secondary entries of that date."""
    secondary = aggregate_entries(day.date, entries)
    excluded = sum(1 for entry in entries if entry.date == day.date and entry.is_excluded)

    overtime = duration_to_minutes(day.overtime_in_day, context=f"official overtime on {day.date}")
    worked = duration_to_minutes(day.worked_time_in_day, context=f"official worked time on {day.date}")

    diff = secondary - (worked or 0)

    return ReconciledDay(
        date=day.date,
        category=classify(day),
        official_overtime=day.overtime_in_day,
        official_worked=day.worked_time_in_day,
        secondary_worked=secondary,
        diff=diff,
        anomaly=is_anomaly(diff),
        official_overtime_minutes=overtime,
        official_worked_minutes=worked,
        entry_count=sum(1 for entry in entries if entry.date == day.date),
        excluded_count=excluded,
    )


def reconcile(month: MonthRecord, entries: Iterable[TimeEntry], month_index: int = 0) -> ReconciledMonth:
    """Reconcile one official month against the secondary entries.

    Rows keep the official day order. Inputs are not modified.
    """
    by_date = _index_entries(entries)

    rows: List[ReconciledDay] = []
    overtime_total = 0
    official_total = 0
    secondary_total = 0
    diff_total = 0

    for day in month.daily_data:
        row = reconcile_day(day, by_date.get(day.date, []))
        rows.append(row)

        overtime_total += row.official_overtime_minutes or 0
        official_total += row.official_worked_minutes or 0
        secondary_total += row.secondary_worked
        diff_total += row.diff

    logger.debug(
        f"Reconciled {month.month}: {len(rows)} days, "
        f"{sum(1 for r in rows if r.anomaly)} anomalies, diff {format_duration(diff_total)}"
    )

    return ReconciledMonth(
        month_index=month_index,
        month=month.month,
        days=rows,
        overtime_total=overtime_total,
        official_total=official_total,
        secondary_total=secondary_total,
        diff_total=diff_total,
    )


def reconcile_period(
    official: OfficialSnapshot,
    secondary: SecondarySnapshot,
    month_index: int,
) -> Optional[ReconciledMonth]:
    """Reconcile the month at month_index (clamped) of the official snapshot.

    Returns:
        ReconciledMonth, or None if the official snapshot has no months.
    """
    if not official.monthly_data:
        logger.warning("Official snapshot has no months to reconcile")
        return None

    index = clamp_month_index(month_index, official.month_count)
    if index != month_index:
        logger.debug(f"Month index {month_index} clamped to {index}")

    return reconcile(official.monthly_data[index], secondary.monthly_data, month_index=index)
