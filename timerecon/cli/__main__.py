"""Timesheet Recon CLI - Compare official and secondary timesheet records."""

import click
from rich.console import Console

from timerecon import __version__
from timerecon.renderers.summary_renderer import get_style, render_summary
from timerecon.report import build_report
from timerecon.sdk import (
    SettingsInvalidError,
    SnapshotError,
    SnapshotInvalidError,
    SnapshotKind,
    SnapshotNotFoundError,
    SnapshotRepository,
    configure_logging,
    get_setting,
    load_settings,
)

from .profile_commands import profile as profile_group
from .settings_commands import settings as settings_group
from .snapshot_commands import snapshots as snapshots_group


@click.group()
@click.version_option(version=__version__, prog_name="timesheet-recon")
@click.option("--debug", is_flag=True, help="Write DEBUG logs to the temp folder log file.")
def cli(debug):
    """Timesheet Recon - Reconcile official and secondary timesheets.

    Compares the official calendar (expected vs worked time) with the time
    entries logged in the secondary system, day by day.

    Configuration is loaded from (in order):

    \b
    1. TIMESHEET_RECON_CONFIG_PATH environment variable
    2. ~/.config/timesheet-recon/ (XDG default)

    Log level follows the LOG_LEVEL environment variable.
    """
    log_path = configure_logging(debug=debug)
    if log_path:
        click.echo(f"Debug log: {log_path}", err=True)

    try:
        load_settings()
    except SettingsInvalidError as e:
        raise click.ClickException(f"{e}\n\nFix or remove the file, then try again.")


cli.add_command(snapshots_group)
cli.add_command(settings_group)
cli.add_command(profile_group)


@cli.command("report")
@click.option("--month", "-m", "month_index", type=int, default=None,
              help="Month index in the official snapshot (0 = first). Defaults to the latest month.")
@click.option("--style", "style_name", type=click.Choice(["emoji", "ascii"]), default=None,
              help="Glyph style (default: settings 'style' or emoji).")
@click.option("--no-color", is_flag=True, help="Disable colors and highlighting.")
@click.option("--width", type=int, default=None, help="Report width in columns.")
def report(month_index, style_name, no_color, width):
    """Show the day-by-day comparison for a month.

    Out-of-range month indexes are clamped to the available months.

    Examples:
        timesheet-recon report
        timesheet-recon report --month 0 --style ascii
    """
    repository = SnapshotRepository()

    if month_index is None:
        month_index = _latest_month_index(repository)

    try:
        result = build_report(month_index, repository=repository)
    except SnapshotNotFoundError as e:
        raise click.ClickException(
            f"{e}\n\nImport snapshots with: timesheet-recon snapshots import KIND FILE"
        )
    except (SnapshotInvalidError, SettingsInvalidError) as e:
        raise click.ClickException(str(e))

    style = get_style(style_name or get_setting("style"))
    console = Console(no_color=no_color, highlight=False, width=width)
    render_summary(console, result.reconciled, result.meta, style=style)

    anomalies = result.reconciled.anomaly_count
    if anomalies:
        console.print(f"\n{anomalies} day(s) differ by more than an hour.", style=None if no_color else "yellow")


def _latest_month_index(repository: SnapshotRepository) -> int:
    """Index of the last month in the latest official snapshot (0 if unknown)."""
    try:
        official = repository.load_latest(SnapshotKind.OFFICIAL)
    except SnapshotError:
        return 0
    return max(official.month_count - 1, 0)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
