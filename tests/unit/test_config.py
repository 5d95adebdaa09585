"""Tests for settings.json and profile.yaml handling."""

import pytest

from timerecon.sdk.config import (
    ProfileInvalidError,
    ProfileNotFoundError,
    SettingsInvalidError,
    clear_setting,
    get_data_path,
    get_debug_log_path,
    get_profile_path,
    get_profile_value,
    get_snapshots_path,
    load_profile,
    load_settings,
    save_profile,
    set_setting,
)


class TestSettings:

    def test_set_and_clear(self, isolated_env):
        set_setting("style", "ascii")
        assert load_settings()["style"] == "ascii"

        assert clear_setting("style") is True
        assert clear_setting("style") is False
        assert "style" not in load_settings()

    def test_missing_file_is_empty(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TIMESHEET_RECON_CONFIG_PATH", str(tmp_path / "nowhere"))
        assert load_settings() == {}

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
    def test_unreadable_settings(self, isolated_env, content):
        (isolated_env["config_dir"] / "settings.json").write_text(content)

        with pytest.raises(SettingsInvalidError):
            load_settings()
        with pytest.raises(SettingsInvalidError):
            get_snapshots_path()

    def test_data_dir_from_settings(self, isolated_env):
        assert get_data_path() == isolated_env["data_dir"]
        assert get_snapshots_path() == isolated_env["snapshots_dir"]
        assert isolated_env["snapshots_dir"].is_dir()

    def test_data_dir_defaults_to_xdg(self, isolated_env, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
        clear_setting("data_dir")

        assert get_data_path() == tmp_path / "xdg" / "timesheet-recon"


class TestProfile:

    def test_defaults_without_file(self, isolated_env):
        profile = load_profile()
        assert profile["sources"]["official"]["name"] == "Timenet"
        assert profile["sources"]["secondary"]["name"] == "Kimai"

    def test_require_exists(self, isolated_env):
        with pytest.raises(ProfileNotFoundError):
            load_profile(require_exists=True)

    def test_partial_profile_merged_with_defaults(self, isolated_env):
        save_profile({"sources": {"secondary": {"worker": "Jo Doe"}}, "team": "Platform"})

        profile = load_profile(require_exists=True)

        assert profile["sources"]["official"]["name"] == "Timenet"
        assert profile["sources"]["secondary"]["name"] == "Kimai"
        assert profile["sources"]["secondary"]["worker"] == "Jo Doe"
        assert profile["team"] == "Platform"

    def test_invalid_yaml(self, isolated_env):
        get_profile_path().write_text("sources: [unclosed\n")
        with pytest.raises(ProfileInvalidError):
            load_profile()

    @pytest.mark.parametrize("content", ["just a string\n", "- official\n- secondary\n"])
    def test_profile_must_be_a_mapping(self, isolated_env, content):
        get_profile_path().write_text(content)
        with pytest.raises(ProfileInvalidError):
            load_profile()

    def test_custom_profile_location(self, isolated_env, tmp_path):
        custom = tmp_path / "elsewhere" / "me.yaml"
        set_setting("profile", str(custom))

        save_profile({"sources": {"official": {"name": "HR"}}})

        assert custom.exists()
        assert get_profile_value("sources.official.name") == "HR"

    def test_get_profile_value(self, isolated_env):
        assert get_profile_value("sources.secondary.name") == "Kimai"
        assert get_profile_value("sources.missing.name", "n/a") == "n/a"
        assert get_profile_value("sources.official.name.deeper") is None

    def test_defaults_not_shared(self, isolated_env):
        first = load_profile()
        first["sources"]["official"]["name"] = "Changed"
        assert load_profile()["sources"]["official"]["name"] == "Timenet"


def test_debug_log_path_in_temp_dir():
    assert get_debug_log_path().name == "timesheet-recon-debug.log"
