"""Report entry point: latest snapshots in, report text out."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from timerecon.renderers.summary_renderer import EMOJI_STYLE, PeriodMeta, ReportStyle, render
from timerecon.sdk.config import ProfileInvalidError, SettingsInvalidError, get_profile_value
from timerecon.sdk.reconcile import ReconciledMonth, reconcile_period
from timerecon.sdk.snapshots import SnapshotError, SnapshotInvalidError, SnapshotKind, SnapshotRepository

logger = logging.getLogger(__name__)


def _source_name(source: str, default: str) -> str:
    try:
        name = get_profile_value(f"sources.{source}.name")
    except (ProfileInvalidError, SettingsInvalidError) as e:
        logger.warning(f"Using default name for {source} source: {e}")
        return default
    return str(name) if name else default


@dataclass(frozen=True)
class Report:
    """A reconciled month together with its header values."""

    reconciled: ReconciledMonth
    meta: PeriodMeta


def build_report(
    month_index: int,
    repository: Optional[SnapshotRepository] = None,
    official_name: Optional[str] = None,
    secondary_name: Optional[str] = None,
) -> Report:
    """Reconcile the latest snapshots for one month.

    Source names default to the profile's sources.*.name values.

    Raises:
        SnapshotNotFoundError: If either snapshot is missing.
        SnapshotInvalidError: If either snapshot can't be read, or the
            official snapshot has no months.
        SettingsInvalidError: If settings.json can't be read.
    """
    repository = repository or SnapshotRepository()

    official = repository.load_latest(SnapshotKind.OFFICIAL)
    secondary = repository.load_latest(SnapshotKind.SECONDARY)

    reconciled = reconcile_period(official, secondary, month_index)
    if reconciled is None:
        raise SnapshotInvalidError("Official snapshot contains no months")

    meta = PeriodMeta.from_snapshots(
        official,
        secondary,
        reconciled.month_index,
        official_name=official_name or _source_name("official", "Timenet"),
        secondary_name=secondary_name or _source_name("secondary", "Kimai"),
    )
    return Report(reconciled=reconciled, meta=meta)


def reconcile_and_render(
    month_index: int,
    repository: Optional[SnapshotRepository] = None,
    style: ReportStyle = EMOJI_STYLE,
    today: Optional[date] = None,
) -> str:
    """Render the report for a month of the latest snapshots.

    Returns "" when either snapshot is unavailable or settings.json can't
    be read; the caller decides how to show a "no data" state. An unreadable
    profile only costs the custom source names.
    """
    try:
        report = build_report(month_index, repository=repository)
    except (SnapshotError, SettingsInvalidError) as e:
        logger.info(f"No report available: {e}")
        return ""

    return render(report.reconciled, report.meta, style=style, today=today)
