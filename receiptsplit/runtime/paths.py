"""Centralized path management for receiptsplit.

This module provides a single source of truth for on-disk locations: user
configuration (locale overrides) and saved OCR payloads.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Project root: $RECEIPTSPLIT_HOME if set, else the working directory."""
    home = os.environ.get("RECEIPTSPLIT_HOME", "").strip()
    return Path(home).expanduser() if home else Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths.

    All paths are computed relative to the project root, ensuring consistency
    across all modules regardless of the current working directory.
    """

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    # --- Source code paths ---
    @property
    def src(self) -> Path:
        """receiptsplit package directory."""
        return Path(__file__).resolve().parent.parent

    @property
    def bundled_locale_rules(self) -> Path:
        """Locale presets shipped with the package."""
        return self.src / "receipt" / "rules"

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def locale_rules(self) -> Path:
        """User locale presets; a file here shadows the bundled preset of the same name."""
        return self.config / "locales"

    # --- Receipt paths ---
    @property
    def receipts(self) -> Path:
        """Root receipts directory."""
        return self.root / "receipts"

    @property
    def receipts_ocr_json(self) -> Path:
        """Raw OCR results (JSON), reusable with ``receiptsplit parse``."""
        return self.receipts / "ocr_json"


# Module-level singleton
_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached instance so the next call re-reads the environment."""
    global _paths
    _paths = None
