"""Config loading and normalization for Codeproof runs."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from codeproof.config.model import CodeproofConfig
from codeproof.constants.config import (
    ALLOWED_CONFIG_KEYS,
    CONFIG_FILENAME,
    DEFAULT_BACKUP_DIR,
    DEFAULT_ENV_FILE,
    DEFAULT_ENV_KEY_PREFIX,
    DEFAULT_EXCLUDED_DIRS,
    DEFAULT_REFERENCE_TEMPLATES,
    DEFAULT_REPORTS_DIR,
    REFERENCE_KEY_PLACEHOLDER,
)
from codeproof.constants.remediation import ENV_KEY_NAME_PATTERN
from codeproof.exceptions import ConfigError


def load_config(root: Path, config_path: Path | None = None) -> CodeproofConfig:
    """Load and validate config from ``codeproof.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return CodeproofConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    unknown = sorted(str(key) for key in raw if key not in ALLOWED_CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")

    env_key_prefix = _ensure_string(raw.get("env_key_prefix", DEFAULT_ENV_KEY_PREFIX), "env_key_prefix")
    if not ENV_KEY_NAME_PATTERN.match(env_key_prefix):
        raise ConfigError(f"env_key_prefix must be a valid environment variable name, got {env_key_prefix!r}")

    return CodeproofConfig(
        secret_remediation=_ensure_bool(raw.get("secret_remediation", True), "secret_remediation"),
        verbose=_ensure_bool(raw.get("verbose", False), "verbose"),
        exclude_dirs=tuple(
            entry.strip().strip("/").lower()
            for entry in _ensure_string_list(raw.get("exclude_dirs", list(DEFAULT_EXCLUDED_DIRS)), "exclude_dirs")
            if entry.strip().strip("/")
        ),
        reports_dir=_ensure_relative_dir(raw.get("reports_dir", DEFAULT_REPORTS_DIR), "reports_dir"),
        backup_dir=_ensure_relative_dir(raw.get("backup_dir", DEFAULT_BACKUP_DIR), "backup_dir"),
        env_file=_ensure_relative_dir(raw.get("env_file", DEFAULT_ENV_FILE), "env_file"),
        env_key_prefix=env_key_prefix,
        reference_templates=_build_reference_templates(raw.get("reference_templates")),
    )


def _ensure_bool(value: Any, key_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{key_name} must be a boolean")
    return value


def _ensure_string(value: Any, key_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key_name} must be a non-empty string")
    return value.strip()


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _ensure_relative_dir(value: Any, key_name: str) -> str:
    """Accept only root-relative locations that stay inside the repository."""
    text = _ensure_string(value, key_name)
    posix = PurePosixPath(text.replace("\\", "/"))
    if posix.is_absolute() or ".." in posix.parts:
        raise ConfigError(f"{key_name} must be a path relative to the repository root, got {text!r}")
    return posix.as_posix()


def _build_reference_templates(raw: Any) -> dict[str, str]:
    """Merge user reference templates over the defaults, keyed by file suffix."""
    templates = dict(DEFAULT_REFERENCE_TEMPLATES)
    if raw is None:
        return templates
    if not isinstance(raw, dict):
        raise ConfigError("reference_templates must be a mapping")

    for suffix, template in raw.items():
        if not isinstance(suffix, str) or not suffix.strip():
            raise ConfigError("reference_templates keys must be file extensions")
        if not isinstance(template, str) or REFERENCE_KEY_PLACEHOLDER not in template:
            raise ConfigError(
                f"reference_templates.{suffix} must be a string containing {REFERENCE_KEY_PLACEHOLDER}"
            )
        normalized = suffix.strip().lower()
        if not normalized.startswith("."):
            normalized = f".{normalized}"
        templates[normalized] = template
    return templates
