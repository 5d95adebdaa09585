"""Configuration management for Timesheet Recon.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - data_dir: where snapshots are stored (optional)
   - style: report style preset ("emoji" or "ascii")
   - profile: path to profile.yaml (optional, if not colocated)

2. profile.yaml - User's personal configuration
   - sources: display names of the official and secondary systems
   - sources.secondary.worker: worker name as shown by the secondary system

Config directory resolution:
1. TIMESHEET_RECON_CONFIG_PATH environment variable (if set)
2. ~/.config/timesheet-recon/ (XDG_CONFIG_HOME fallback)

Data directory resolution:
1. settings.json "data_dir" key (if set via CLI)
2. XDG_DATA_HOME/timesheet-recon/ or ~/.local/share/timesheet-recon/
"""

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

import yaml


APP_NAME = "timesheet-recon"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"
DEBUG_LOG_FILENAME = "timesheet-recon-debug.log"

DEFAULT_PROFILE = {
    "sources": {
        "official": {"name": "Timenet"},
        "secondary": {"name": "Kimai", "worker": ""},
    },
}


class SettingsInvalidError(Exception):
    """Raised when settings.json cannot be parsed."""
    pass


class ProfileNotFoundError(Exception):
    """Raised when no profile is found."""
    pass


class ProfileInvalidError(Exception):
    """Raised when profile.yaml cannot be parsed."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. TIMESHEET_RECON_CONFIG_PATH environment variable
    2. ~/.config/timesheet-recon/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("TIMESHEET_RECON_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        SettingsInvalidError: If the file is not a valid JSON object
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        try:
            settings = json.load(f)
        except json.JSONDecodeError as e:
            raise SettingsInvalidError(f"Invalid JSON in {settings_file}: {e}") from e

    if not isinstance(settings, dict):
        raise SettingsInvalidError(f"Settings in {settings_file} must be a JSON object")
    return settings


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def clear_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_profile_path(require_exists: bool = False) -> Path:
    """Get the path to the profile.yaml file.

    Resolution order:
    1. settings.json "profile" key (if set)
    2. profile.yaml in config directory

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    custom_profile = get_setting("profile")
    if custom_profile:
        profile_path = Path(custom_profile)
        if require_exists and not profile_path.exists():
            raise ProfileNotFoundError(
                f"Profile not found at configured path: {profile_path}\n\n"
                f"Create one with: timesheet-recon profile init"
            )
        return profile_path

    profile_path = get_config_dir() / PROFILE_FILENAME
    if require_exists and not profile_path.exists():
        raise ProfileNotFoundError(
            f"No profile found at {profile_path}\n\n"
            f"Create one with: timesheet-recon profile init"
        )

    return profile_path


def load_profile(require_exists: bool = False) -> dict:
    """Load user profile from profile.yaml.

    Missing keys are filled from DEFAULT_PROFILE so callers can always
    read source names.

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
        ProfileInvalidError: If the file is not valid YAML or not a mapping
    """
    profile_path = get_profile_path(require_exists=require_exists)

    loaded = {}
    if profile_path.exists():
        with open(profile_path, "r") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ProfileInvalidError(f"Invalid YAML in {profile_path}: {e}") from e

    if not isinstance(loaded, dict):
        raise ProfileInvalidError(f"Profile in {profile_path} must be a YAML mapping")

    return _merge_defaults(DEFAULT_PROFILE, loaded)


def _merge_defaults(defaults: dict, values: dict) -> dict:
    merged = {}
    for key, default in defaults.items():
        value = values.get(key)
        if isinstance(default, dict) and isinstance(value, dict):
            merged[key] = _merge_defaults(default, value)
        elif value is None:
            merged[key] = copy.deepcopy(default)
        else:
            merged[key] = value
    for key, value in values.items():
        if key not in merged:
            merged[key] = value
    return merged


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    """Save user profile to profile.yaml.

    Args:
        profile: Profile dictionary to save
        path: Optional custom path (uses default if not specified)

    Returns:
        Path to the saved profile file
    """
    if path is None:
        path = get_profile_path(require_exists=False)

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(profile, f, default_flow_style=False, sort_keys=False)

    return path


def get_profile_value(key: str, default: Any = None) -> Any:
    """Get a profile value by dot-notation key.

    Args:
        key: Dot-notation key (e.g., "sources.official.name")
        default: Default value if key not found
    """
    value = load_profile(require_exists=False)

    for part in key.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return default

    return value


def get_data_path() -> Path:
    """Get the data directory path (created if doesn't exist).

    Uses settings.json "data_dir" when set, else XDG_DATA_HOME/timesheet-recon/.
    """
    custom = get_setting("data_dir")
    if custom:
        data_path = Path(custom).expanduser()
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
        data_path = Path(xdg_data_home) / APP_NAME
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path


def get_snapshots_path() -> Path:
    """Get the snapshot storage directory (created if doesn't exist)."""
    path = get_data_path() / "snapshots"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_debug_log_path() -> Path:
    """Debug log lives in the OS temp folder so it never mixes with report output."""
    return Path(tempfile.gettempdir()) / DEBUG_LOG_FILENAME


def configure_logging(debug: bool = False) -> Optional[Path]:
    """Configure root logging for CLI runs.

    Level comes from the LOG_LEVEL environment variable (default WARNING).
    With debug=True, DEBUG output is appended to the debug log file instead
    of stderr.

    Returns:
        Path of the debug log file when debug is enabled, else None
    """
    log_format = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
    date_format = "%H:%M:%S"

    if debug:
        log_path = get_debug_log_path()
        logging.basicConfig(
            level=logging.DEBUG,
            filename=str(log_path),
            format=log_format,
            datefmt=date_format,
        )
        logging.getLogger(__name__).info(f"Running in DEBUG mode, log file: {log_path}")
        return log_path

    level_name = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format=log_format,
        datefmt=date_format,
    )
    return None
