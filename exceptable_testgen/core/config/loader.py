"""
Configuration loader — reads testgen.yml into domain models.

It reads YAML, validates against Pydantic schemas, and returns a typed
GeneratorConfig. Paths inside the file are relative to the directory
holding it.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from exceptable_testgen.core.models.config import GeneratorConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "testgen.yml"


class ConfigError(Exception):
    """Raised when generator configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for testgen.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to testgen.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit path to testgen.yml. If None, searches upward.

    Returns:
        Validated GeneratorConfig model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(
            f"No {CONFIG_FILE} found. Create one, or specify --config."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading generator config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "testgen" key or be flat
    if isinstance(data.get("testgen"), dict):
        data = data["testgen"]

    try:
        config = GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid generator configuration: {e}") from e

    logger.info(
        "Loaded config with %d declaration(s), %d source root(s)",
        len(config.declarations), len(config.source_roots),
    )
    return config


def config_root(config_path: Path) -> Path:
    """Get the directory relative paths in the config resolve against."""
    return config_path.parent.resolve()


def resolve_path(root: Path, raw: str) -> Path:
    """Resolve a config path against *root* unless it is absolute."""
    p = Path(raw).expanduser()
    return p if p.is_absolute() else (root / p)
