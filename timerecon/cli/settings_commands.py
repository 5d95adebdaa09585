"""Settings CLI commands: where snapshots live and how reports look."""

from pathlib import Path

import click

from timerecon.sdk import (
    clear_setting,
    get_data_path,
    get_setting,
    get_settings_path,
    load_settings,
    set_setting,
)

STYLE_CHOICES = ["emoji", "ascii"]


@click.group()
def settings():
    """Manage settings (settings.json).

    \b
    data_dir  directory holding the snapshots/ folder
    style     report glyph style (emoji or ascii)
    profile   path to profile.yaml, when it isn't in the config dir
    """
    pass


@settings.command("show")
def settings_show():
    """Show effective settings and where each value comes from."""
    current = load_settings()

    click.echo(f"Settings file: {get_settings_path()}")
    effective = {
        "data_dir": get_data_path(),
        "style": current.get("style", "emoji"),
    }
    for key, value in effective.items():
        source = "settings" if key in current else "default"
        click.echo(f"  {key:<10} {value}  ({source})")
    if current.get("profile"):
        click.echo(f"  {'profile':<10} {current['profile']}  (settings)")


@settings.command("data-dir")
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.option("--clear", is_flag=True, help="Forget the custom data_dir and use the default.")
def settings_data_dir(path, clear):
    """Show, set or clear the data directory.

    Examples:
        timesheet-recon settings data-dir ~/timesheets
        timesheet-recon settings data-dir --clear
    """
    if clear:
        if clear_setting("data_dir"):
            click.echo(f"Cleared data_dir, now using {get_data_path()}")
        else:
            click.echo("data_dir was not set.")
        return

    if not path:
        click.echo(f"Data directory: {get_data_path()}")
        return

    data_path = Path(path).expanduser().resolve()
    try:
        data_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise click.ClickException(f"Cannot create directory {data_path}: {e}")

    set_setting("data_dir", str(data_path))
    click.echo(f"Set data_dir: {data_path}")


@settings.command("style")
@click.argument("name", required=False, type=click.Choice(STYLE_CHOICES))
def settings_style(name):
    """Show or set the default report style.

    Use 'ascii' on terminals that can't display emoji.
    """
    if not name:
        click.echo(f"Report style: {get_setting('style', 'emoji')}")
        return

    set_setting("style", name)
    click.echo(f"Set style: {name}")
