"""Profile CLI commands for Timesheet Recon.

Manages user profile data (profile.yaml) - source system names, worker.
"""

import click
import yaml

from timerecon.sdk import (
    DEFAULT_PROFILE,
    ProfileInvalidError,
    get_profile_path,
    load_profile,
    save_profile,
)


@click.group()
def profile():
    """Manage the user profile (profile.yaml)."""
    pass


@profile.command("show")
def profile_show():
    """Show the effective profile (defaults filled in)."""
    path = get_profile_path()
    click.echo(f"Profile file: {path}")
    click.echo(f"File exists: {path.exists()}")
    click.echo()

    try:
        current = load_profile()
    except ProfileInvalidError as e:
        raise click.ClickException(str(e))

    click.echo(yaml.dump(current, default_flow_style=False, sort_keys=False).rstrip())


@profile.command("init")
@click.option("--official-name", default=None, help="Display name of the official system.")
@click.option("--secondary-name", default=None, help="Display name of the secondary system.")
@click.option("--worker", default=None, help="Your name as shown by the secondary system.")
@click.option("--force", is_flag=True, help="Overwrite an existing profile.")
def profile_init(official_name, secondary_name, worker, force):
    """Create profile.yaml with source names.

    Examples:
        timesheet-recon profile init --official-name Timenet --secondary-name Kimai
    """
    path = get_profile_path()
    if path.exists() and not force:
        raise click.ClickException(f"Profile already exists: {path}\nUse --force to overwrite.")

    sources = DEFAULT_PROFILE["sources"]
    data = {
        "sources": {
            "official": {"name": official_name or sources["official"]["name"]},
            "secondary": {
                "name": secondary_name or sources["secondary"]["name"],
                "worker": worker or sources["secondary"]["worker"],
            },
        },
    }

    saved = save_profile(data, path)
    click.echo(f"Created profile: {saved}")
