"""Configuration loading and startup validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .contracts import DEFAULT_TEMPLATE, TEMPLATE_OPTIONS

DEFAULT_CONFIG_PATH = "config/config.yaml"
DEFAULT_STORAGE_PATH = "~/.resume_builder/store.json"

# Env var -> config key. Env wins over the YAML file.
ENV_OVERRIDES = {
    "RESUME_BUILDER_STORAGE_PATH": "storage_path",
    "RESUME_BUILDER_TEMPLATE": "default_template",
    "RESUME_BUILDER_VERBOSE": "verbose",
}


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""

    field: str
    message: str
    severity: Severity


@dataclass
class BuilderConfig:
    storage_path: str = DEFAULT_STORAGE_PATH
    default_template: str = DEFAULT_TEMPLATE
    verbose: bool = False


def load_raw_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Read the YAML config (missing file -> empty) and apply env overrides."""
    path = Path(config_path or DEFAULT_CONFIG_PATH)
    data: Dict[str, Any] = {}
    if path.exists():
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        if loaded is not None:
            if not isinstance(loaded, dict):
                raise ValueError(f"Config file {path} must contain a mapping")
            data.update(loaded)
    elif config_path:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var, "")
        if value:
            data[key] = _parse_bool(value) if key == "verbose" else value
    return data


def load_config(config_path: Optional[str] = None) -> BuilderConfig:
    data = load_raw_config(config_path)
    return BuilderConfig(
        storage_path=str(data.get("storage_path") or DEFAULT_STORAGE_PATH),
        default_template=str(data.get("default_template") or DEFAULT_TEMPLATE),
        verbose=bool(data.get("verbose", False)),
    )


def validate_config(raw_config: Dict[str, Any]) -> List[ConfigError]:
    """Validate raw configuration and return a list of issues.

    Args:
        raw_config: Raw config dict from YAML (after env overrides)

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []

    # --- Storage path ---
    storage_path = raw_config.get("storage_path", DEFAULT_STORAGE_PATH)
    if not isinstance(storage_path, str) or not storage_path.strip():
        errors.append(
            ConfigError(
                field="storage_path",
                message="storage_path must be a non-empty string",
                severity=Severity.ERROR,
            )
        )
    else:
        target = Path(storage_path).expanduser()
        if target.exists() and target.is_dir():
            errors.append(
                ConfigError(
                    field="storage_path",
                    message=f"storage_path points to a directory: {storage_path}",
                    severity=Severity.ERROR,
                )
            )
        elif not target.parent.exists():
            errors.append(
                ConfigError(
                    field="storage_path",
                    message=f"Directory will be created on first save: {target.parent}",
                    severity=Severity.WARNING,
                )
            )

    # --- Template ---
    template = raw_config.get("default_template", DEFAULT_TEMPLATE)
    if template not in TEMPLATE_OPTIONS:
        errors.append(
            ConfigError(
                field="default_template",
                message=f"Unknown template {template!r}. Expected one of: {', '.join(TEMPLATE_OPTIONS)}",
                severity=Severity.WARNING,
            )
        )

    # --- Verbose ---
    verbose = raw_config.get("verbose", False)
    if not isinstance(verbose, bool):
        errors.append(
            ConfigError(
                field="verbose",
                message=f"verbose must be true or false, got {verbose!r}",
                severity=Severity.ERROR,
            )
        )

    return errors


def has_errors(issues: List[ConfigError]) -> bool:
    """Check if any issues are errors (not just warnings)."""
    return any(e.severity == Severity.ERROR for e in issues)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}
