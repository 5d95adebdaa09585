"""Pydantic schemas for timesheet snapshots.

A snapshot is produced wholesale at fetch time (one per source system) and
never modified afterwards, so every model is frozen. Durations are kept as the
text the source printed ("7h 30m", "-15m", sometimes blank); the engine
converts them to minutes when it needs arithmetic.

Unlike config schemas, snapshot schemas ignore unknown keys: extractors for
older page layouts wrote extra fields that carry nothing we use.
"""

from typing import Any, List, get_origin

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


SNAPSHOT_CONFIG = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class SnapshotModel(BaseModel):
    """Base for snapshot models.

    Extractors write JSON null for cells they couldn't read. Those load as
    the field's empty value so one bad cell doesn't reject the snapshot.
    """

    model_config = SNAPSHOT_CONFIG

    @field_validator("*", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None:
            return value
        field = cls.model_fields.get(info.field_name)
        annotation = field.annotation if field else None
        if annotation is str:
            return ""
        if annotation is bool:
            return False
        if get_origin(annotation) is list:
            return []
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            return {}
        return value


# =============================================================================
# Official system (Source-A): expected vs worked time per official calendar
# =============================================================================


class DayRecord(SnapshotModel):
    """One calendar day as reported by the official system.

    Flags come straight from the source and may overlap (a bank holiday on a
    Saturday has both is_holiday and is_weekend); see classify.classify().
    """

    date: str = Field(..., description="Canonical YYYY/MM/DD date")
    expected_worked_time_in_day: str = Field(default="", description="Expected time; blank on non-workdays")
    worked_time_in_day: str = Field(default="", description="Clocked time")
    overtime_in_day: str = Field(default="", description="Signed overtime for the day")
    is_holiday: bool = False
    is_vacation: bool = False
    is_medical_leave: bool = False
    is_calendar_adjustment: bool = False
    is_weekend: bool = False
    is_work_day: bool = False


class MonthRecord(SnapshotModel):
    """A month of official day records plus the system's monthly summary."""

    month: str = Field(..., description="Month label as printed by the source")
    expected_worked_time_in_month: str = ""
    worked_time_in_month: str = ""
    overtime_in_month: str = ""
    daily_data: List[DayRecord] = Field(default_factory=list)


class OfficialSnapshot(SnapshotModel):
    """Everything fetched from the official system in one run."""

    fetch_date: str = Field(..., description="YYYY/MM/DD of the fetch")
    fetch_time: str = Field(..., description="HH:MM of the fetch")
    year: str = ""
    expected_worked_time_in_year: str = ""
    worked_time_in_year: str = ""
    overtime_in_year: str = ""
    monthly_data: List[MonthRecord] = Field(default_factory=list)

    @property
    def month_count(self) -> int:
        return len(self.monthly_data)


# =============================================================================
# Secondary system (Source-B): itemized time entries
# =============================================================================

EXCLUDED_PROJECT = "break"
EXCLUDED_ACTIVITY_KEYWORDS = ("vacation", "holiday", "free time")


class TimeEntry(SnapshotModel):
    """A single time entry logged in the secondary system."""

    date: str = Field(..., description="Canonical YYYY/MM/DD date")
    in_time: str = Field(default="", alias="in")
    out_time: str = Field(default="", alias="out")
    worked_time: str = ""
    customer: str = ""
    project: str = ""
    activity: str = ""

    @property
    def is_excluded(self) -> bool:
        """Breaks and leave entries don't count as worked time.

        The entry stays in the snapshot; it is only left out of daily sums.
        """
        if self.project.strip().lower() == EXCLUDED_PROJECT:
            return True
        activity = self.activity.lower()
        return any(keyword in activity for keyword in EXCLUDED_ACTIVITY_KEYWORDS)


class SecondarySummary(SnapshotModel):
    """Report-level totals shown by the secondary system."""

    reporting_date_from: str = ""
    reporting_date_to: str = ""
    worker: str = ""
    worked_time: str = ""


class SecondarySnapshot(SnapshotModel):
    """Everything fetched from the secondary system in one run.

    monthly_data is a flat list of entries for the whole reporting range.
    """

    fetch_date: str = Field(..., description="YYYY/MM/DD of the fetch")
    fetch_time: str = Field(..., description="HH:MM of the fetch")
    summary: SecondarySummary = Field(default_factory=SecondarySummary)
    monthly_data: List[TimeEntry] = Field(default_factory=list)

    def entries_for(self, date: str) -> List[TimeEntry]:
        """All entries logged on a canonical date, excluded ones included."""
        return [entry for entry in self.monthly_data if entry.date == date]
