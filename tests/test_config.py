import tomllib
from unittest import mock

import pytest

from byedroid.config import (
    GlobalConfig,
    ProjectConfig,
    global_config_paths,
    load_global_config,
    load_merged_config,
    project_config_path,
    save_global_config,
    save_project_config,
)


def test_project_config_round_trip(tmp_path):
    cfg = ProjectConfig(
        package="com.example.app",
        packages=["com.example.app", "com.example.app.dev"],
        variant="DevDebug",
        gradle_tasks=["lint"],
        exclude_filters=["chatty"],
        log_level="E,W",
        assemble_task="assembleDevDebug",
        install_task="installDevDebug",
        scrcpy_args=["--turn-screen-off"],
    )
    save_project_config(tmp_path, cfg)
    merged = load_merged_config(tmp_path)
    assert merged.project == cfg
    assert merged.project_root == tmp_path


def test_saved_project_config_omits_unset_options(tmp_path):
    save_project_config(tmp_path, ProjectConfig(variant="debug"))
    data = tomllib.loads((tmp_path / ".byedroid.toml").read_text())
    assert "package" not in data
    assert "packages" not in data
    assert data["variant"] == "debug"
    assert data["gradle_tasks"] == []


def test_missing_project_config_gives_defaults(tmp_path):
    assert project_config_path(tmp_path) is None
    merged = load_merged_config(tmp_path)
    assert merged.project == ProjectConfig()


def test_primary_project_config_preferred_over_legacy(tmp_path):
    (tmp_path / ".droid-loop.toml").write_text('variant = "legacy"\n')
    assert project_config_path(tmp_path) == tmp_path / ".droid-loop.toml"
    (tmp_path / ".byedroid.toml").write_text('variant = "primary"\n')
    assert project_config_path(tmp_path) == tmp_path / ".byedroid.toml"
    assert load_merged_config(tmp_path).project.variant == "primary"


def test_legacy_project_config_is_loaded(tmp_path):
    (tmp_path / ".droid-loop.toml").write_text('log_filters = ["MyTag"]\n')
    assert load_merged_config(tmp_path).project.log_filters == ["MyTag"]


def test_unknown_keys_are_ignored(tmp_path):
    (tmp_path / ".byedroid.toml").write_text('package = "com.example.x"\nextra = 3\n')
    assert load_merged_config(tmp_path).project.package == "com.example.x"


def test_invalid_project_toml_raises(tmp_path):
    (tmp_path / ".byedroid.toml").write_text("package = \n")
    with pytest.raises(ValueError, match="parse project config"):
        load_merged_config(tmp_path)


def test_wrong_type_in_project_config_raises(tmp_path):
    (tmp_path / ".byedroid.toml").write_text("scrcpy_args = 5\n")
    with pytest.raises(ValueError):
        load_merged_config(tmp_path)


def test_global_config_paths_under_config_dir(tmp_path):
    with mock.patch("platformdirs.user_config_path", return_value=tmp_path):
        primary, legacy = global_config_paths()
    assert primary == tmp_path / "byedroid" / "config.toml"
    assert legacy == tmp_path / "droid-loop" / "config.toml"


def test_global_config_round_trip(tmp_path):
    cfg = GlobalConfig(preferred_device_serial="emulator-5554", default_log_level="I")
    with mock.patch("platformdirs.user_config_path", return_value=tmp_path):
        save_global_config(cfg)
        loaded = load_global_config()
    assert loaded == cfg
    assert (tmp_path / "byedroid" / "config.toml").is_file()


def test_global_config_missing_gives_defaults(tmp_path):
    with mock.patch("platformdirs.user_config_path", return_value=tmp_path):
        assert load_global_config() == GlobalConfig()


def test_global_config_legacy_location(tmp_path):
    legacy = tmp_path / "droid-loop"
    legacy.mkdir()
    (legacy / "config.toml").write_text('default_log_level = "W"\n')
    with mock.patch("platformdirs.user_config_path", return_value=tmp_path):
        assert load_global_config().default_log_level == "W"


def test_broken_global_config_falls_back_in_merged(tmp_path):
    cfg_dir = tmp_path / "cfg" / "byedroid"
    cfg_dir.mkdir(parents=True)
    (cfg_dir / "config.toml").write_text("not valid toml ===\n")
    project = tmp_path / "proj"
    project.mkdir()
    with mock.patch("platformdirs.user_config_path", return_value=tmp_path / "cfg"):
        with pytest.raises(ValueError):
            load_global_config()
        merged = load_merged_config(project)
    assert merged.global_config == GlobalConfig()