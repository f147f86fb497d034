"""Test setup for the press app."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import django
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def pytest_configure(config: pytest.Config) -> None:
    """Load Django settings before any test module imports press."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "siteproject.settings")
    django.setup()
    config.addinivalue_line(
        "markers",
        "git: needs a git executable (real clone/commit/push against a local bare repo)",
    )


@pytest.fixture
def site_config(tmp_path: Path) -> dict:
    """A resolved PRESS_SITE config rooted in a temporary directory."""
    return {
        "BUILD_COMMAND": ["bundle", "exec", "jekyll", "build"],
        "CONFIG_FILE": "_prod_config.yml",
        "SOURCE_DIR": tmp_path,
        "OUTPUT_DIR": tmp_path / "_site",
        "CONTENT_DIR": tmp_path / "content",
        "REMOTE": "origin",
        "BRANCH": "gh-pages",
        "PUSH": True,
        "COMMIT_MESSAGE": "Update {timestamp}",
    }
