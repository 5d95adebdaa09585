"""Snapshot command group: list, import and inspect stored snapshots."""

import json
from pathlib import Path

import click

from timerecon.sdk import (
    SnapshotError,
    SnapshotKind,
    SnapshotRepository,
    build_official_snapshot,
    build_secondary_snapshot,
    parse_snapshot,
)

KIND_CHOICES = [kind.value for kind in SnapshotKind]


@click.group()
def snapshots():
    """Manage fetched timesheet snapshots.

    Two kinds are stored: 'official' (expected vs worked time per day) and
    'secondary' (itemized time entries). Reports always use the most
    recently stored snapshot of each kind.
    """
    pass


@snapshots.command("list")
@click.option("--kind", type=click.Choice(KIND_CHOICES), default=None, help="Only list one kind.")
def snapshots_list(kind):
    """List stored snapshots, newest first."""
    repository = SnapshotRepository()
    infos = repository.list(SnapshotKind(kind) if kind else None)

    if not infos:
        click.echo(f"No snapshots in {repository.base_dir}")
        return

    click.echo(f"Snapshots in {repository.base_dir}:")
    for info in infos:
        click.echo(f"  {info.kind.value:<10} {info.modified.strftime('%Y-%m-%d %H:%M:%S')}  {info.name}")


@snapshots.command("import")
@click.argument("kind", type=click.Choice(KIND_CHOICES))
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--raw", is_flag=True,
              help="FILE holds raw extracted rows (DD/MM/YYYY dates, clock durations) to normalize.")
def snapshots_import(kind, file, raw):
    """Store a snapshot from a JSON FILE as the latest of its KIND.

    Without --raw, FILE must already match the snapshot schema.

    Examples:
        timesheet-recon snapshots import official official.json
        timesheet-recon snapshots import secondary rows.json --raw
    """
    snapshot_kind = SnapshotKind(kind)
    path = Path(file)

    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}")

    if not isinstance(payload, dict):
        raise click.ClickException(f"Snapshot must be a JSON object, got {type(payload).__name__}")

    try:
        if raw:
            builder = build_official_snapshot if snapshot_kind is SnapshotKind.OFFICIAL else build_secondary_snapshot
            snapshot = builder(payload)
        else:
            snapshot = parse_snapshot(snapshot_kind, payload)
    except (SnapshotError, ValueError) as e:
        raise click.ClickException(str(e))

    saved = SnapshotRepository().save(snapshot_kind, snapshot)
    click.echo(f"Stored {kind} snapshot: {saved}")


@snapshots.command("show")
@click.argument("kind", type=click.Choice(KIND_CHOICES))
def snapshots_show(kind):
    """Summarize the latest snapshot of KIND."""
    snapshot_kind = SnapshotKind(kind)
    repository = SnapshotRepository()

    try:
        path = repository.latest_path(snapshot_kind)
        snapshot = repository.load(snapshot_kind, path)
    except SnapshotError as e:
        raise click.ClickException(str(e))

    click.echo(f"File: {path.name}")
    click.echo(f"Fetched: {snapshot.fetch_date} {snapshot.fetch_time}")

    if snapshot_kind is SnapshotKind.OFFICIAL:
        click.echo(f"Year: {snapshot.year}")
        click.echo(f"Worked: {snapshot.worked_time_in_year} of {snapshot.expected_worked_time_in_year}")
        click.echo(f"Overtime: {snapshot.overtime_in_year}")
        click.echo(f"\nMonths ({snapshot.month_count}):")
        for index, month in enumerate(snapshot.monthly_data):
            click.echo(
                f"  [{index}] {month.month:<12} {len(month.daily_data):>2} days  "
                f"worked {month.worked_time_in_month or '-'} of {month.expected_worked_time_in_month or '-'}"
            )
    else:
        summary = snapshot.summary
        excluded = sum(1 for entry in snapshot.monthly_data if entry.is_excluded)
        click.echo(f"Range: {summary.reporting_date_from} - {summary.reporting_date_to}")
        if summary.worker:
            click.echo(f"Worker: {summary.worker}")
        click.echo(f"Worked: {summary.worked_time}")
        click.echo(f"Entries: {len(snapshot.monthly_data)} ({excluded} breaks/leave)")
