"""Rich renderer for reconciled months.

Transforms a ReconciledMonth into the summary block and per-day comparison
table. The same renderables go to the terminal (with styles) or through a
recording console to plain text.
"""

import io
from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from timerecon.sdk.classify import DayCategory
from timerecon.sdk.dates import format_canonical_date
from timerecon.sdk.durations import format_duration
from timerecon.sdk.reconcile import ReconciledMonth
from timerecon.sdk.schemas import OfficialSnapshot, SecondarySnapshot

REPORT_WIDTH = 80
LABEL_WIDTH = 38


@dataclass(frozen=True)
class ReportStyle:
    """Formatting context for a report: glyphs and rich style names."""

    name: str
    glyphs: Dict[DayCategory, str]
    total_glyph: str
    anomaly_marker: str
    today_marker: str
    anomaly_style: str = "yellow"
    today_style: str = "reverse"
    fetch_style: str = "red"
    diff_total_style: str = "red"

    def glyph(self, category: DayCategory) -> str:
        return self.glyphs.get(category, "?")


EMOJI_STYLE = ReportStyle(
    name="emoji",
    glyphs={
        DayCategory.HOLIDAY: "🎉",
        DayCategory.VACATION: "🏖",
        DayCategory.MEDICAL_LEAVE: "🩺",
        DayCategory.CALENDAR_ADJUSTMENT: "📅",
        DayCategory.WEEKEND: "💤",
        DayCategory.WORK_DAY: "🚧",
        DayCategory.OTHER: "💩",
    },
    total_glyph="🎲",
    anomaly_marker="⚡",
    today_marker="👈",
)

ASCII_STYLE = ReportStyle(
    name="ascii",
    glyphs={
        DayCategory.HOLIDAY: "H",
        DayCategory.VACATION: "V",
        DayCategory.MEDICAL_LEAVE: "M",
        DayCategory.CALENDAR_ADJUSTMENT: "C",
        DayCategory.WEEKEND: "-",
        DayCategory.WORK_DAY: "W",
        DayCategory.OTHER: "?",
    },
    total_glyph="=",
    anomaly_marker="!",
    today_marker="<",
)

STYLES = {style.name: style for style in (EMOJI_STYLE, ASCII_STYLE)}


def get_style(name: Optional[str]) -> ReportStyle:
    """Look up a style preset by name, falling back to emoji."""
    return STYLES.get(name or "", EMOJI_STYLE)


@dataclass(frozen=True)
class PeriodMeta:
    """Header values for a report, taken from the two snapshots."""

    fetch_date: str
    fetch_time: str
    month: str
    year: str
    month_worked: str
    month_expected: str
    secondary_worked_in_year: str
    overtime_in_year: str
    official_name: str = "Timenet"
    secondary_name: str = "Kimai"
    worker: str = ""

    @classmethod
    def from_snapshots(
        cls,
        official: OfficialSnapshot,
        secondary: SecondarySnapshot,
        month_index: int,
        official_name: str = "Timenet",
        secondary_name: str = "Kimai",
    ) -> "PeriodMeta":
        """month_index must already be clamped to the official months."""
        month = official.monthly_data[month_index]
        return cls(
            fetch_date=official.fetch_date,
            fetch_time=official.fetch_time,
            month=month.month,
            year=official.year,
            month_worked=month.worked_time_in_month,
            month_expected=month.expected_worked_time_in_month,
            secondary_worked_in_year=secondary.summary.worked_time,
            overtime_in_year=official.overtime_in_year,
            official_name=official_name,
            secondary_name=secondary_name,
            worker=secondary.summary.worker,
        )


def _render_header(console: Console, meta: PeriodMeta, style: ReportStyle) -> None:
    """Render the summary block above the table."""
    grid = Table.grid(padding=(0, 1))
    grid.add_column(min_width=LABEL_WIDTH)
    grid.add_column()

    grid.add_row("Last Remote Fetch:", Text(f"{meta.fetch_date} {meta.fetch_time}", style=style.fetch_style))
    grid.add_row("Reporting Date:", f"{meta.month} {meta.year}".strip())
    if meta.worker:
        grid.add_row("Worker:", meta.worker)
    grid.add_row(
        f"{meta.official_name} Monthly Worked Hours:",
        f"{meta.month_worked} of {meta.month_expected}",
    )
    grid.add_row(f"{meta.secondary_name} Yearly Worked Hours:", meta.secondary_worked_in_year)
    grid.add_row("This Year Overtime:", meta.overtime_in_year)

    console.rule("Summary")
    console.print(grid)
    console.print()


def _build_day_table(
    reconciled: ReconciledMonth,
    meta: PeriodMeta,
    style: ReportStyle,
    today: date,
) -> Table:
    """Build the per-day table with a totals footer."""
    today_key = format_canonical_date(today)

    table = Table(box=box.SIMPLE_HEAD, show_footer=True, pad_edge=False)
    table.add_column("Date", no_wrap=True, footer="")
    table.add_column("", no_wrap=True, footer=style.total_glyph)
    table.add_column("Overtime", no_wrap=True, footer=format_duration(reconciled.overtime_total))
    table.add_column(meta.official_name, no_wrap=True, footer=format_duration(reconciled.official_total))
    table.add_column(meta.secondary_name, no_wrap=True, footer=format_duration(reconciled.secondary_total))
    table.add_column(
        "Diff",
        no_wrap=True,
        footer=Text(format_duration(reconciled.diff_total), style=style.diff_total_style),
    )
    table.add_column("", no_wrap=True, footer="")

    for day in reconciled.days:
        is_today = day.date == today_key
        # Plain text exports drop row styles, so today also gets a marker.
        marker = Text()
        if day.anomaly:
            marker.append(style.anomaly_marker, style=style.anomaly_style)
        if is_today:
            marker.append(f" {style.today_marker}" if day.anomaly else style.today_marker)
        table.add_row(
            day.date,
            style.glyph(day.category),
            Text(day.official_overtime),
            Text(day.official_worked),
            day.secondary_worked_text,
            day.diff_text,
            marker,
            style=style.today_style if is_today else None,
        )

    return table


def render_summary(
    console: Console,
    reconciled: ReconciledMonth,
    meta: PeriodMeta,
    style: ReportStyle = EMOJI_STYLE,
    today: Optional[date] = None,
) -> None:
    """Render a reconciled month to a Rich console.

    Args:
        console: Rich Console instance
        reconciled: Output of reconcile()/reconcile_period()
        meta: Header values for the same month
        style: Glyphs and styles to use
        today: Date whose row is highlighted (defaults to today)
    """
    _render_header(console, meta, style)
    console.print(_build_day_table(reconciled, meta, style, today or date.today()))


def render(
    reconciled: ReconciledMonth,
    meta: PeriodMeta,
    style: ReportStyle = EMOJI_STYLE,
    today: Optional[date] = None,
    width: int = REPORT_WIDTH,
) -> str:
    """Render a reconciled month to plain fixed-width text."""
    console = Console(
        file=io.StringIO(),
        width=width,
        record=True,
        color_system=None,
        force_terminal=False,
        legacy_windows=False,
    )
    render_summary(console, reconciled, meta, style=style, today=today)
    return console.export_text()
