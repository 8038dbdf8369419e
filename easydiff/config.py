"""Configuration management for easydiff.

Settings are read from two YAML files, merged over the built-in defaults:
- ~/.easydiff/config.yaml: user-level settings
- <repo>/.easydiff/config.yaml: repository overrides
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is invalid."""
    pass


class KeymapConfig(BaseModel):
    """Key bindings for the explorer and diff views."""

    stage: str = "s"
    stage_file: str = "S"
    unstage: str = "u"
    unstage_file: str = "U"
    next_file: str = "<Tab>"
    prev_file: str = "<S-Tab>"
    close: str = "q"
    select: str = "<CR>"
    focus_explorer: str = "h"
    focus_diff: str = "l"


class SignConfig(BaseModel):
    """Gutter sign characters."""

    add: str = "+"
    delete: str = "-"
    change: str = "~"


class ColorConfig(BaseModel):
    """Hex colors used to build the highlight groups."""

    add_bg: str = "#2d4a30"
    delete_bg: str = "#4a2d2d"
    add_fg: str = "#98c379"
    delete_fg: str = "#e06c75"
    add_line_bg: str = "#1e3320"
    delete_line_bg: str = "#3d1f1f"


class EasyDiffConfig(BaseModel):
    """Complete easydiff configuration."""

    explorer_width: int = Field(default=35, ge=10)
    keymaps: KeymapConfig = Field(default_factory=KeymapConfig)
    signs: SignConfig = Field(default_factory=SignConfig)
    colors: ColorConfig = Field(default_factory=ColorConfig)
    # Re-read status and redraw after stage/unstage
    auto_refresh: bool = True


_CONFIG_DIR = Path.home() / ".easydiff"


def get_global_config_dir() -> Path:
    """Get the global easydiff configuration directory.

    Returns:
        Path to ~/.easydiff/
    """
    return _CONFIG_DIR


def get_global_config_file() -> Path:
    """Get path to the global config.yaml file.

    Returns:
        Path to ~/.easydiff/config.yaml
    """
    return get_global_config_dir() / "config.yaml"


def get_repo_config_file(repo_root: Path) -> Path:
    """Return path to the repository config.yaml file.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to <repo>/.easydiff/config.yaml
    """
    return repo_root / ".easydiff" / "config.yaml"


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two dictionaries, recursing into nested dictionaries.

    Args:
        base: The base values.
        override: Values that take precedence.

    Returns:
        A new merged dictionary; neither input is modified.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from a file.

    Returns:
        The mapping, or an empty dict if the file doesn't exist.

    Raises:
        ConfigError: If the file cannot be read or isn't a mapping.
    """
    if not path.exists():
        return {}

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def load_config(
    repo_root: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> EasyDiffConfig:
    """Load the effective configuration.

    Precedence (lowest to highest): defaults, global file, repository file,
    explicit overrides.

    Args:
        repo_root: The root directory of the git repository (optional).
        overrides: Extra values, e.g. from the command line.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If a file is unreadable or a value is invalid.
    """
    data = load_yaml_file(get_global_config_file())
    if repo_root is not None:
        data = deep_merge(data, load_yaml_file(get_repo_config_file(repo_root)))
    if overrides:
        data = deep_merge(data, overrides)

    try:
        return EasyDiffConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")


def save_config(path: Path, config: EasyDiffConfig) -> None:
    """Save a configuration to a YAML file.

    Args:
        path: Destination file; parent directories are created.
        config: Configuration to save.

    Raises:
        ConfigError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(
                config.model_dump(),
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
    except OSError as e:
        raise ConfigError(f"Failed to save config to {path}: {e}")
