"""Create `.byedroid.toml` from what can be inferred about the project."""

from __future__ import annotations

import json
from pathlib import Path

from byedroid.config import ProjectConfig, save_project_config
from byedroid.project import infer_project

DEFAULT_LOG_LEVEL = "D,I,W,E,V"


def run_init(project_root: str | Path) -> ProjectConfig:
    """Write a project config from Gradle inference, report it, and return it."""
    root = Path(project_root)
    inference = infer_project(root)

    cfg = ProjectConfig(
        packages=list(inference.application_ids) or None,
        assemble_task=inference.assemble_task,
        install_task=inference.install_task,
        variant=inference.variant_summary,
        log_level=DEFAULT_LOG_LEVEL,
    )
    save_project_config(root, cfg)

    print(f"Wrote .byedroid.toml in {root}")
    if cfg.assemble_task is not None:
        print(f"  assemble_task = {json.dumps(cfg.assemble_task, ensure_ascii=False)}")
    if cfg.install_task is not None:
        print(f"  install_task  = {json.dumps(cfg.install_task, ensure_ascii=False)}")
    if cfg.packages is not None:
        print(f"  packages      = {json.dumps(cfg.packages, ensure_ascii=False)}")
    return cfg