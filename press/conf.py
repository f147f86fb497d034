# press/conf.py
"""
Settings for the press app, read from Django settings with in-code defaults.

    PRESS_MARKDOWN = {
        "EXTENSIONS": ["fenced_code", "tables"],
        "ANCHOR_POLICY": "scoped",
    }

    PRESS_SITE = {
        "BUILD_COMMAND": ["bundle", "exec", "jekyll", "build"],
        "CONFIG_FILE": "_prod_config.yml",
        ...
    }

Relative directories in PRESS_SITE are resolved against SOURCE_DIR, which
itself defaults to settings.BASE_DIR.
"""

from pathlib import Path

from django.conf import settings

MARKDOWN_DEFAULTS = {
    "EXTENSIONS": ["fenced_code", "tables"],
    "ANCHOR_POLICY": "scoped",
}

SITE_DEFAULTS = {
    "BUILD_COMMAND": ["bundle", "exec", "jekyll", "build"],
    "CONFIG_FILE": "_prod_config.yml",
    "SOURCE_DIR": None,
    "OUTPUT_DIR": "_site",
    "CONTENT_DIR": "content",
    "REMOTE": "origin",
    "BRANCH": "gh-pages",
    "PUSH": True,
    "COMMIT_MESSAGE": "Update {timestamp}",
}


def get_markdown_settings():
    """Return PRESS_MARKDOWN merged over the defaults."""
    return {**MARKDOWN_DEFAULTS, **getattr(settings, "PRESS_MARKDOWN", {})}


def get_site_config():
    """
    Return PRESS_SITE merged over the defaults, with directories as absolute Paths.

    BUILD_COMMAND may be given as a string; it is split on whitespace.
    """
    config = {**SITE_DEFAULTS, **getattr(settings, "PRESS_SITE", {})}

    source_dir = config["SOURCE_DIR"] or getattr(settings, "BASE_DIR", None) or Path.cwd()
    source_dir = Path(source_dir).resolve()
    config["SOURCE_DIR"] = source_dir

    for key in ("OUTPUT_DIR", "CONTENT_DIR"):
        path = Path(config[key])
        config[key] = path if path.is_absolute() else source_dir / path

    command = config["BUILD_COMMAND"]
    if isinstance(command, str):
        command = command.split()
    config["BUILD_COMMAND"] = list(command)

    return config
