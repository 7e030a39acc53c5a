"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path


def pytest_sessionstart() -> None:
    """Add the project root and src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    for import_root in (project_root, project_root / "src"):
        if str(import_root) not in sys.path:
            sys.path.insert(0, str(import_root))
