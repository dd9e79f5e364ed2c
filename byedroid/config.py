"""Global and per-project TOML configuration."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import platformdirs
import tomli_w

PROJECT_CONFIG_NAME = ".byedroid.toml"
LEGACY_PROJECT_CONFIG_NAME = ".droid-loop.toml"


@dataclass
class GlobalConfig:
    """User-wide settings shared by every project."""

    preferred_device_serial: str | None = None
    default_log_level: str | None = None


@dataclass
class ProjectConfig:
    """Settings stored in a project's `.byedroid.toml`."""

    package: str | None = None
    # Overrides the inferred application IDs (multiple packages / flavors).
    packages: list[str] | None = None
    variant: str | None = None
    gradle_tasks: list[str] = field(default_factory=list)
    log_filters: list[str] = field(default_factory=list)
    # A log line is dropped if it contains any of these substrings.
    exclude_filters: list[str] = field(default_factory=list)
    log_level: str | None = None
    assemble_task: str | None = None
    install_task: str | None = None
    scrcpy_args: list[str] = field(default_factory=list)


@dataclass
class MergedConfig:
    """Global and project configuration loaded together."""

    global_config: GlobalConfig
    project: ProjectConfig
    project_root: Path


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"{key}: expected a string, found {type(value).__name__}")


def _str_list(data: dict[str, Any], key: str) -> list[str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{key}: expected a list of strings")
    return list(value)


def _global_from_toml(data: dict[str, Any]) -> GlobalConfig:
    return GlobalConfig(
        preferred_device_serial=_optional_str(data, "preferred_device_serial"),
        default_log_level=_optional_str(data, "default_log_level"),
    )


def _project_from_toml(data: dict[str, Any]) -> ProjectConfig:
    return ProjectConfig(
        package=_optional_str(data, "package"),
        packages=_str_list(data, "packages"),
        variant=_optional_str(data, "variant"),
        gradle_tasks=_str_list(data, "gradle_tasks") or [],
        log_filters=_str_list(data, "log_filters") or [],
        exclude_filters=_str_list(data, "exclude_filters") or [],
        log_level=_optional_str(data, "log_level"),
        assemble_task=_optional_str(data, "assemble_task"),
        install_task=_optional_str(data, "install_task"),
        scrcpy_args=_str_list(data, "scrcpy_args") or [],
    )


def _to_toml(cfg: GlobalConfig | ProjectConfig) -> str:
    data = {key: value for key, value in vars(cfg).items() if value is not None}
    return tomli_w.dumps(data)


def load_merged_config(project_root: str | Path) -> MergedConfig:
    """Load the global config (falling back to defaults) and the project config."""
    root = Path(project_root)
    try:
        global_config = load_global_config()
    except (OSError, ValueError):
        global_config = GlobalConfig()

    path = project_config_path(root)
    if path is None:
        project = ProjectConfig()
    else:
        text = path.read_text(encoding="utf-8")
        try:
            project = _project_from_toml(tomllib.loads(text))
        except ValueError as exc:
            raise ValueError(f"parse project config: {exc}") from exc

    return MergedConfig(global_config=global_config, project=project, project_root=root)


def project_config_path(project_root: str | Path) -> Path | None:
    """Prefer `.byedroid.toml`, then fall back to the legacy project config name."""
    root = Path(project_root)
    for name in (PROJECT_CONFIG_NAME, LEGACY_PROJECT_CONFIG_NAME):
        candidate = root / name
        if candidate.exists():
            return candidate
    return None


def global_config_paths() -> tuple[Path, Path]:
    """Return the primary and legacy global config file paths."""
    base = Path(platformdirs.user_config_path())
    return base / "byedroid" / "config.toml", base / "droid-loop" / "config.toml"


def load_global_config() -> GlobalConfig:
    """Read the global config, or return defaults when no file exists."""
    primary, legacy = global_config_paths()
    if primary.exists():
        path = primary
    elif legacy.exists():
        path = legacy
    else:
        return GlobalConfig()
    return _global_from_toml(tomllib.loads(path.read_text(encoding="utf-8")))


def save_global_config(cfg: GlobalConfig) -> None:
    """Write the global config to the primary location."""
    path, _ = global_config_paths()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_to_toml(cfg), encoding="utf-8")


def save_project_config(project_root: str | Path, cfg: ProjectConfig) -> None:
    """Write `.byedroid.toml` in the project root."""
    path = Path(project_root) / PROJECT_CONFIG_NAME
    path.write_text(_to_toml(cfg), encoding="utf-8")