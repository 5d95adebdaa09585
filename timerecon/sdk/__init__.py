"""Timesheet Recon SDK - Core reconciliation functionality."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    clear_setting,
    get_profile_path,
    load_profile,
    save_profile,
    get_profile_value,
    ProfileNotFoundError,
    ProfileInvalidError,
    SettingsInvalidError,
    DEFAULT_PROFILE,
    get_data_path,
    get_snapshots_path,
    configure_logging,
)

from .durations import (
    InvalidDurationError,
    parse_duration,
    format_duration,
    parse_clock_duration,
    duration_to_minutes,
)

from .dates import (
    normalize_date,
    format_canonical_date,
    parse_canonical_date,
)

from .schemas import (
    DayRecord,
    MonthRecord,
    OfficialSnapshot,
    TimeEntry,
    SecondarySummary,
    SecondarySnapshot,
)

from .classify import (
    DayCategory,
    classify,
)

from .reconcile import (
    ANOMALY_TOLERANCE_MINUTES,
    ReconciledDay,
    ReconciledMonth,
    aggregate_entries,
    clamp_month_index,
    is_anomaly,
    reconcile,
    reconcile_day,
    reconcile_period,
)

from .snapshots import (
    SnapshotKind,
    SnapshotInfo,
    SnapshotRepository,
    SnapshotError,
    SnapshotNotFoundError,
    SnapshotInvalidError,
    parse_snapshot,
)

from .builders import (
    build_official_snapshot,
    build_secondary_snapshot,
    official_day_from_row,
    secondary_entry_from_row,
)
