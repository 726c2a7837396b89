"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Project-level config (.chromedriver-installer.yml)
- Global config (~/.chromedriver-installer/config/config.yml)
- Environment variables (CHROMEDRIVER_ZIP_FILE, CHROMEDRIVER_BIN_DIR)
- Environment variable expansion in values (${VAR})
- Config merging with proper precedence

This is the only place the installer's environment overrides are read.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from chromedriver_installer.bootstrap.paths import get_installer_home
from chromedriver_installer.config.models import InstallerConfig
from chromedriver_installer.config.validation import (
    ValidationSeverity,
    validate_config,
)
from chromedriver_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

# Config file names
PROJECT_CONFIG_NAMES = [
    ".chromedriver-installer.yml",
    ".chromedriver-installer.yaml",
    "chromedriver-installer.yml",
    "chromedriver-installer.yaml",
]
GLOBAL_CONFIG_NAME = "config.yml"

# Environment overrides, mapped to config keys
ZIP_FILE_ENV = "CHROMEDRIVER_ZIP_FILE"
BIN_DIR_ENV = "CHROMEDRIVER_BIN_DIR"
ENV_OVERRIDES = {
    ZIP_FILE_ENV: "zip_file",
    BIN_DIR_ENV: "bin_dir",
}

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


def load_config(
    project_root: Path,
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> InstallerConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. Custom config file (cli_config_path) OR project config
    3. Global config (~/.chromedriver-installer/config/config.yml)
    4. Environment overrides (CHROMEDRIVER_ZIP_FILE, CHROMEDRIVER_BIN_DIR)
    5. Built-in defaults

    Args:
        project_root: Directory searched for a project config file.
        cli_config_path: Optional path to custom config file (--config flag).
        cli_overrides: Dict of CLI flag overrides; None values are ignored.
        environ: Environment mapping (default: os.environ).

    Returns:
        Merged InstallerConfig instance.

    Raises:
        ConfigError: If a config file is missing, unparsable or invalid.
    """
    environ = os.environ if environ is None else environ
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    # Layer 1: Environment
    env_dict = env_overrides(environ)
    if env_dict:
        merged.update(env_dict)
        sources.append("env")

    # Layer 2: Global config
    global_path = find_global_config()
    if global_path is not None:
        merged.update(_load_validated(global_path, environ))
        sources.append(f"global:{global_path}")
        LOGGER.debug(f"Loaded global config from {global_path}")

    # Layer 3: Project or custom config
    if cli_config_path:
        if not cli_config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        merged.update(_load_validated(cli_config_path, environ))
        sources.append(f"custom:{cli_config_path}")
        LOGGER.debug(f"Loaded custom config from {cli_config_path}")
    else:
        project_path = find_project_config(project_root)
        if project_path is not None:
            merged.update(_load_validated(project_path, environ))
            sources.append(f"project:{project_path}")
            LOGGER.debug(f"Loaded project config from {project_path}")

    # Layer 4: CLI overrides
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    if overrides:
        merged.update(overrides)
        sources.append("cli")

    config = InstallerConfig.from_dict(merged)
    config._config_sources = sources

    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def env_overrides(environ: Mapping[str, str]) -> Dict[str, str]:
    """Config values taken from the installer's environment variables."""
    return {key: environ[var] for var, key in ENV_OVERRIDES.items() if environ.get(var)}


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find config file in project root.

    Args:
        project_root: Directory to search in.

    Returns:
        Path to config file if found, None otherwise.
    """
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if config_path.is_file():
            return config_path
    return None


def find_global_config() -> Optional[Path]:
    """Find global config at ~/.chromedriver-installer/config/config.yml."""
    config_path = get_installer_home() / "config" / GLOBAL_CONFIG_NAME
    if config_path.is_file():
        return config_path
    return None


def _load_validated(path: Path, environ: Mapping[str, str]) -> Dict[str, Any]:
    try:
        data = load_yaml_file(path, environ)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    errors = [
        issue for issue in validate_config(data, source=str(path))
        if issue.severity == ValidationSeverity.ERROR
    ]
    if errors:
        raise ConfigError("; ".join(f"{e.source}: {e.message}" for e in errors))
    return data


def load_yaml_file(path: Path, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Performs environment variable expansion on string values.

    Args:
        path: Path to YAML file.
        environ: Environment used for expansion (default: os.environ).

    Returns:
        Parsed dictionary.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data, os.environ if environ is None else environ)


def expand_env_vars(data: Any, environ: Mapping[str, str]) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} in config values."""
    if isinstance(data, dict):
        return {k: expand_env_vars(v, environ) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item, environ) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(lambda m: _env_var_replacement(m, environ), data)
    else:
        return data


def _env_var_replacement(match: "re.Match[str]", environ: Mapping[str, str]) -> str:
    var_name = match.group(1)
    default_value = match.group(2)

    value = environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""
