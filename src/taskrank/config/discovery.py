"""Config file discovery and loading.

Walk-up finder locates taskrank.toml, similar to how git finds .git/.
Supports TASKRANK_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from taskrank.config.models import TaskrankConfig

CONFIG_FILENAME = "taskrank.toml"
CONFIG_ENV_VAR = "TASKRANK_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for taskrank.toml.

    Returns the path to the config file, or None if not found.
    Checks TASKRANK_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> TaskrankConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default TaskrankConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return TaskrankConfig()

    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    return TaskrankConfig.model_validate(data)
