"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "codeproof.yaml"

DEFAULT_REPORTS_DIR: str = ".codeproof/reports"
DEFAULT_BACKUP_DIR: str = ".codeproof-backup"
DEFAULT_ENV_FILE: str = ".env"
DEFAULT_ENV_KEY_PREFIX: str = "CODEPROOF_SECRET_"

DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = (
    "node_modules",
    ".git",
    "dist",
    "build",
    "vendor",
    ".venv",
    "venv",
    "__pycache__",
    "coverage",
    ".next",
    ".codeproof",
    ".codeproof-backup",
)

REFERENCE_KEY_PLACEHOLDER: str = "{key}"
DEFAULT_REFERENCE_TEMPLATE: str = "process.env.{key}"

# Keyed by lowercase file suffix including the leading dot.
DEFAULT_REFERENCE_TEMPLATES: dict[str, str] = {
    ".js": "process.env.{key}",
    ".jsx": "process.env.{key}",
    ".mjs": "process.env.{key}",
    ".cjs": "process.env.{key}",
    ".ts": "process.env.{key}",
    ".tsx": "process.env.{key}",
    ".py": 'os.environ["{key}"]',
    ".rb": 'ENV["{key}"]',
    ".go": 'os.Getenv("{key}")',
    ".java": 'System.getenv("{key}")',
    ".kt": 'System.getenv("{key}")',
    ".php": 'getenv("{key}")',
    ".yaml": "${key}",
    ".yml": "${key}",
    ".sh": "${key}",
    ".properties": "${key}",
}

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "secret_remediation",
        "verbose",
        "exclude_dirs",
        "reports_dir",
        "backup_dir",
        "env_file",
        "env_key_prefix",
        "reference_templates",
    }
)
