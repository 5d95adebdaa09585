"""Shared fixtures.

Every test that touches config or snapshots runs against isolated
directories via tmp_path and TIMESHEET_RECON_CONFIG_PATH, never real data.
"""

import json

import pytest

from timerecon.sdk.schemas import (
    DayRecord,
    MonthRecord,
    OfficialSnapshot,
    SecondarySnapshot,
    SecondarySummary,
    TimeEntry,
)


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Set up isolated config and data directories."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"

    config_dir.mkdir()
    data_dir.mkdir()

    monkeypatch.setenv("TIMESHEET_RECON_CONFIG_PATH", str(config_dir))

    settings = {"data_dir": str(data_dir)}
    (config_dir / "settings.json").write_text(json.dumps(settings))

    return {
        "config_dir": config_dir,
        "data_dir": data_dir,
        "snapshots_dir": data_dir / "snapshots",
    }


def make_day(date: str, worked: str = "8h", overtime: str = "0m", expected: str = "8h", **flags) -> DayRecord:
    """Create an official day record; plain workday unless flags say otherwise."""
    if not flags:
        flags = {"is_work_day": True}
    return DayRecord(
        date=date,
        expected_worked_time_in_day=expected,
        worked_time_in_day=worked,
        overtime_in_day=overtime,
        **flags,
    )


def make_entry(date: str, worked: str, project: str = "ProjA", activity: str = "dev") -> TimeEntry:
    """Create a secondary time entry."""
    return TimeEntry(date=date, worked_time=worked, project=project, activity=activity)


def make_official(months) -> OfficialSnapshot:
    """Create an official snapshot from (label, [DayRecord]) pairs."""
    return OfficialSnapshot(
        fetch_date="2025/01/31",
        fetch_time="18:15",
        year="2025",
        expected_worked_time_in_year="1760h",
        worked_time_in_year="24h",
        overtime_in_year="1h 30m",
        monthly_data=[
            MonthRecord(
                month=label,
                expected_worked_time_in_month="24h",
                worked_time_in_month="24h 10m",
                overtime_in_month="10m",
                daily_data=days,
            )
            for label, days in months
        ],
    )


def make_secondary(entries) -> SecondarySnapshot:
    """Create a secondary snapshot holding entries."""
    return SecondarySnapshot(
        fetch_date="2025/01/31",
        fetch_time="18:16",
        summary=SecondarySummary(
            reporting_date_from="2025/01/01",
            reporting_date_to="2025/12/31",
            worker="Jo Doe",
            worked_time="23h 45m",
        ),
        monthly_data=entries,
    )


@pytest.fixture
def january_official():
    """Official snapshot with one January week (Mon 6 - Sun 12)."""
    return make_official([
        ("January", [
            make_day("2025/01/06", worked="8h"),
            make_day("2025/01/07", worked="8h 10m", overtime="10m"),
            make_day("2025/01/08", worked="8h"),
            make_day("2025/01/11", worked="", overtime="", expected="", is_weekend=True),
        ]),
    ])


@pytest.fixture
def january_secondary():
    """Secondary entries matching january_official with one short day."""
    return make_secondary([
        make_entry("2025/01/06", "4:00:00"),
        make_entry("2025/01/06", "4:00:00"),
        make_entry("2025/01/07", "8h 10m"),
        make_entry("2025/01/07", "30m", project="Break"),
        make_entry("2025/01/08", "6h"),
    ])
