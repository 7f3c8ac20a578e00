"""Project configuration: root discovery, config file, snapshot location."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)

CONFIG_DIR = ".kbgraph"
CONFIG_NAME = "config.json"
DEFAULT_DATABASE = Path("src") / "data" / "database.json"
DATABASE_ENV = "KBGRAPH_DATABASE"

DEFAULTS: dict = {
    "walk_depth": 1,
    "top_limit": 10,
}

# Settings used as integer CLI defaults; bad values fall back to DEFAULTS
_INT_SETTINGS = ("walk_depth", "top_limit")


def find_project_root(start: str = ".") -> Path:
    """Find the project root by looking for .git directory."""
    current = Path(start).resolve()
    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent
    return Path(start).resolve()


def load_project_config(project_root: Path | None = None) -> dict:
    """Load .kbgraph/config.json merged over :data:`DEFAULTS`.

    A missing or malformed file yields the defaults, and so does a
    ``walk_depth`` or ``top_limit`` that is not a non-negative integer.
    """
    if project_root is None:
        project_root = find_project_root()
    config = dict(DEFAULTS)
    config_path = project_root / CONFIG_DIR / CONFIG_NAME
    if config_path.exists():
        try:
            loaded = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.debug("Ignoring unreadable config %s: %s", config_path, exc)
            loaded = {}
        if isinstance(loaded, dict):
            config.update(loaded)
    for key in _INT_SETTINGS:
        value = config[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            log.debug("Ignoring %s=%r in %s: expected a non-negative integer", key, value, config_path)
            config[key] = DEFAULTS[key]
    return config


def write_project_config(config: dict, project_root: Path | None = None) -> Path:
    """Write (or update) .kbgraph/config.json.

    Merges *config* into the existing file so other keys are preserved.
    Returns the path of the written file.
    """
    if project_root is None:
        project_root = find_project_root()
    config_dir = project_root / CONFIG_DIR
    config_dir.mkdir(exist_ok=True)
    config_path = config_dir / CONFIG_NAME
    existing: dict = {}
    if config_path.exists():
        try:
            existing = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            existing = {}
    existing.update(config)
    config_path.write_text(json.dumps(existing, indent=2) + "\n", encoding="utf-8")
    return config_path


def get_database_path(override: str | os.PathLike | None = None, project_root: Path | None = None) -> Path:
    """Locate the compiled entity snapshot.

    Resolution order (first match wins):

    1. *override* (the ``--database`` CLI option).
    2. ``KBGRAPH_DATABASE`` environment variable.
    3. ``.kbgraph/config.json`` -> ``"database"`` key, relative to the
       project root.
    4. Default: ``<project_root>/src/data/database.json``.
    """
    if override:
        return Path(override)
    env = os.environ.get(DATABASE_ENV)
    if env:
        return Path(env)
    if project_root is None:
        project_root = find_project_root()
    configured = load_project_config(project_root).get("database")
    if configured:
        path = Path(configured)
        return path if path.is_absolute() else project_root / path
    return project_root / DEFAULT_DATABASE
