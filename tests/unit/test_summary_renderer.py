"""Tests for the summary renderer and the report entry point."""

from datetime import date

import pytest

from conftest import make_official, make_secondary
from timerecon.renderers.summary_renderer import (
    ASCII_STYLE,
    EMOJI_STYLE,
    PeriodMeta,
    _build_day_table,
    get_style,
    render,
)
from timerecon.report import build_report, reconcile_and_render
from timerecon.sdk.reconcile import reconcile_period
from timerecon.sdk.snapshots import SnapshotKind, SnapshotRepository


@pytest.fixture
def reconciled(january_official, january_secondary):
    return reconcile_period(january_official, january_secondary, 0)


@pytest.fixture
def meta(january_official, january_secondary):
    return PeriodMeta.from_snapshots(january_official, january_secondary, 0)


def line_with(text: str, needle: str) -> str:
    for line in text.splitlines():
        if needle in line:
            return line
    raise AssertionError(f"{needle!r} not found in:\n{text}")


class TestRender:

    def test_header_block(self, reconciled, meta):
        text = render(reconciled, meta, style=ASCII_STYLE, today=date(2025, 2, 1))

        assert "2025/01/31 18:15" in line_with(text, "Last Remote Fetch:")
        assert "January 2025" in line_with(text, "Reporting Date:")
        assert "24h 10m of 24h" in line_with(text, "Timenet Monthly Worked Hours:")
        assert "23h 45m" in line_with(text, "Kimai Yearly Worked Hours:")
        assert "1h 30m" in line_with(text, "This Year Overtime:")

    def test_column_order(self, reconciled, meta):
        text = render(reconciled, meta, style=ASCII_STYLE, today=date(2025, 2, 1))

        header = line_with(text, "Diff")
        assert header.index("Date") < header.index("Overtime") < header.index("Timenet") \
            < header.index("Kimai") < header.index("Diff")

        row = line_with(text, "2025/01/08")
        cells = row.split()
        assert cells == ["2025/01/08", "W", "0m", "8h", "6h", "-2h", "!"]

    def test_matching_day_has_no_marker(self, reconciled, meta):
        text = render(reconciled, meta, style=ASCII_STYLE, today=date(2025, 2, 1))
        assert line_with(text, "2025/01/06").split() == ["2025/01/06", "W", "0m", "8h", "8h", "0m"]

    def test_totals_row(self, reconciled, meta):
        text = render(reconciled, meta, style=ASCII_STYLE, today=date(2025, 2, 1))
        totals = [line.split() for line in text.splitlines() if line.split()[:1] == ["="]]
        assert totals == [["=", "10m", "24h", "10m", "22h", "10m", "-2h"]]

    def test_emoji_glyphs(self, reconciled, meta):
        text = render(reconciled, meta, style=EMOJI_STYLE, today=date(2025, 2, 1))
        assert "🚧" in line_with(text, "2025/01/06")
        assert "💤" in line_with(text, "2025/01/11")
        assert "⚡" in line_with(text, "2025/01/08")

    def test_today_row_highlighted(self, reconciled, meta):
        table = _build_day_table(reconciled, meta, EMOJI_STYLE, date(2025, 1, 7))
        styles = [row.style for row in table.rows]
        assert styles == [None, EMOJI_STYLE.today_style, None, None]

    def test_today_marked_in_text(self, reconciled, meta):
        on_day = render(reconciled, meta, style=ASCII_STYLE, today=date(2025, 1, 7))
        after = render(reconciled, meta, style=ASCII_STYLE, today=date(2025, 2, 1))

        assert on_day != after
        assert line_with(on_day, "2025/01/07").split()[-1] == ASCII_STYLE.today_marker
        assert line_with(after, "2025/01/07").split()[-1] == "0m"

    def test_today_marker_follows_anomaly_marker(self, reconciled, meta):
        text = render(reconciled, meta, style=ASCII_STYLE, today=date(2025, 1, 8))
        assert line_with(text, "2025/01/08").split()[-2:] == ["!", "<"]

    def test_emoji_today_marker(self, reconciled, meta):
        text = render(reconciled, meta, style=EMOJI_STYLE, today=date(2025, 1, 6))
        assert "👈" in line_with(text, "2025/01/06")

    def test_source_names_in_columns(self, reconciled, january_official, january_secondary):
        meta = PeriodMeta.from_snapshots(
            january_official, january_secondary, 0,
            official_name="Official", secondary_name="Tracker",
        )
        text = render(reconciled, meta, style=ASCII_STYLE, today=date(2025, 2, 1))
        assert "Tracker" in line_with(text, "Diff")
        assert "Official Monthly Worked Hours:" in text


def test_get_style_falls_back_to_emoji():
    assert get_style("ascii") is ASCII_STYLE
    assert get_style(None) is EMOJI_STYLE
    assert get_style("sparkles") is EMOJI_STYLE


class TestReconcileAndRender:

    def test_empty_without_snapshots(self, isolated_env):
        assert reconcile_and_render(0) == ""

    def test_empty_with_only_one_snapshot(self, isolated_env, january_official):
        SnapshotRepository().save(SnapshotKind.OFFICIAL, january_official)
        assert reconcile_and_render(0) == ""

    def test_empty_when_official_has_no_months(self, isolated_env):
        repository = SnapshotRepository()
        repository.save(SnapshotKind.OFFICIAL, make_official([]))
        repository.save(SnapshotKind.SECONDARY, make_secondary([]))
        assert reconcile_and_render(0, repository=repository) == ""

    def test_empty_with_unreadable_settings(self, isolated_env):
        (isolated_env["config_dir"] / "settings.json").write_text("{not json")
        assert reconcile_and_render(0) == ""

    @pytest.mark.parametrize("content", ["just a string\n", "- HR\n- Jira\n", "sources: [unclosed\n"])
    def test_unreadable_profile_uses_default_names(self, isolated_env, january_official, january_secondary, content):
        repository = SnapshotRepository()
        repository.save(SnapshotKind.OFFICIAL, january_official)
        repository.save(SnapshotKind.SECONDARY, january_secondary)
        (isolated_env["config_dir"] / "profile.yaml").write_text(content)

        text = reconcile_and_render(0, repository=repository, style=ASCII_STYLE, today=date(2025, 2, 1))

        assert "Timenet Monthly Worked Hours:" in text
        assert "Kimai" in line_with(text, "Diff")

    def test_renders_latest_snapshots(self, isolated_env, january_official, january_secondary):
        repository = SnapshotRepository()
        repository.save(SnapshotKind.OFFICIAL, january_official)
        repository.save(SnapshotKind.SECONDARY, january_secondary)

        text = reconcile_and_render(5, repository=repository, style=ASCII_STYLE, today=date(2025, 2, 1))

        assert "January 2025" in text
        assert "2025/01/08" in text

    def test_profile_names_used(self, isolated_env, january_official, january_secondary):
        (isolated_env["config_dir"] / "profile.yaml").write_text(
            "sources:\n  official:\n    name: HR\n  secondary:\n    name: Jira\n"
        )
        repository = SnapshotRepository()
        repository.save(SnapshotKind.OFFICIAL, january_official)
        repository.save(SnapshotKind.SECONDARY, january_secondary)

        report = build_report(0, repository=repository)

        assert report.meta.official_name == "HR"
        assert report.meta.secondary_name == "Jira"
