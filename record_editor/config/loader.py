"""TOML configuration loader.

The editor ships its TOML files in the repository's config/ directory. An
installed copy of the package may run somewhere with no config/ at all; it
then starts from the model defaults and RECORD_EDITOR_* variables only.
"""

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from record_editor.observability.logging import get_logger

logger = get_logger(__name__)

CONFIG_DIR_ENV = "RECORD_EDITOR_CONFIG_DIR"
ENVIRONMENT_ENV = "RECORD_EDITOR_ENV"
SEARCH_DEPTH = 5

# config/ next to the package in a source checkout
PACKAGE_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


def _candidate_dirs() -> Iterator[Path]:
    current = Path.cwd()
    for _ in range(SEARCH_DEPTH):
        yield current / "config"
        current = current.parent
    yield PACKAGE_CONFIG_DIR


def get_config_dir() -> Path | None:
    """Locate the directory holding default.toml.

    RECORD_EDITOR_CONFIG_DIR wins and must exist. Otherwise the working
    directory and its parents are searched, then the source checkout.

    Returns:
        The config directory, or None when no candidate exists
    """
    explicit = os.environ.get(CONFIG_DIR_ENV)
    if explicit:
        path = Path(explicit)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {explicit}")
        return path

    for candidate in _candidate_dirs():
        if (candidate / "default.toml").is_file():
            return candidate
    return None


def get_environment() -> str:
    """Name of the environment overlay (RECORD_EDITOR_ENV, default 'development')."""
    return os.environ.get(ENVIRONMENT_ENV, "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Read one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base, recursing into nested tables."""
    result = base.copy()
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


def load_config() -> dict[str, Any]:
    """Load default.toml merged with the {RECORD_EDITOR_ENV}.toml overlay.

    An explicit RECORD_EDITOR_CONFIG_DIR must contain default.toml. Without
    one, a missing config directory yields an empty mapping.
    """
    config_dir = get_config_dir()
    if config_dir is None:
        logger.debug("config_dir_not_found", using="defaults")
        return {}

    default_path = config_dir / "default.toml"
    if not default_path.is_file():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            f"Create config/default.toml or point {CONFIG_DIR_ENV} elsewhere."
        )

    config = load_toml(default_path)

    env_path = config_dir / f"{get_environment()}.toml"
    if env_path.is_file():
        config = deep_merge(config, load_toml(env_path))

    return config
