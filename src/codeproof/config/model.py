"""Config data model for Codeproof runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from codeproof.constants.config import (
    DEFAULT_BACKUP_DIR,
    DEFAULT_ENV_FILE,
    DEFAULT_ENV_KEY_PREFIX,
    DEFAULT_EXCLUDED_DIRS,
    DEFAULT_REFERENCE_TEMPLATE,
    DEFAULT_REFERENCE_TEMPLATES,
    DEFAULT_REPORTS_DIR,
)


@dataclass(frozen=True)
class CodeproofConfig:
    """Resolved remediation config."""

    secret_remediation: bool = True
    verbose: bool = False
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDED_DIRS
    reports_dir: str = DEFAULT_REPORTS_DIR
    backup_dir: str = DEFAULT_BACKUP_DIR
    env_file: str = DEFAULT_ENV_FILE
    env_key_prefix: str = DEFAULT_ENV_KEY_PREFIX
    reference_templates: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_REFERENCE_TEMPLATES))

    def reports_path(self, root: Path) -> Path:
        """Directory holding persisted scan reports."""
        return root / self.reports_dir

    def backup_path(self, root: Path) -> Path:
        """Directory mirroring original copies of rewritten files."""
        return root / self.backup_dir

    def env_path(self, root: Path) -> Path:
        """Location of the env store file."""
        return root / self.env_file

    def reference_template_for(self, path: Path) -> str:
        """Template for the reference expression that replaces a secret in ``path``."""
        return self.reference_templates.get(path.suffix.lower(), DEFAULT_REFERENCE_TEMPLATE)
