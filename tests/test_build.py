"""Tests for running the external site generator and the build_site command."""

from __future__ import annotations

import subprocess
import sys
from io import StringIO
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import override_settings

from press.build import build_command, run_build
from press.conf import get_site_config
from press.exceptions import BuildError


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    result = MagicMock(spec=subprocess.CompletedProcess)
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


class TestBuildCommand:
    """Tests for build_command."""

    def test_appends_config_file(self, site_config: dict) -> None:
        assert build_command(site_config) == [
            "bundle", "exec", "jekyll", "build", "--config", "_prod_config.yml",
        ]

    def test_override_config_file(self, site_config: dict) -> None:
        assert build_command(site_config, "_staging.yml")[-2:] == ["--config", "_staging.yml"]

    def test_no_config_file(self, site_config: dict) -> None:
        site_config["CONFIG_FILE"] = ""
        assert build_command(site_config) == ["bundle", "exec", "jekyll", "build"]


class TestRunBuild:
    """Tests for run_build."""

    def test_success_returns_output(self, site_config: dict) -> None:
        with patch("press.build.subprocess.run", return_value=_completed(0, "done\n", "warn\n")) as run:
            result = run_build(site_config)

        assert result.stdout == "done\n"
        assert result.stderr == "warn\n"
        assert result.returncode == 0
        args, kwargs = run.call_args
        assert args[0][-2:] == ["--config", "_prod_config.yml"]
        assert kwargs["cwd"] == str(site_config["SOURCE_DIR"])
        assert kwargs["capture_output"] is True

    def test_non_zero_exit_raises(self, site_config: dict) -> None:
        failed = _completed(1, "partial\n", "Liquid Exception\n")
        with patch("press.build.subprocess.run", return_value=failed):
            with pytest.raises(BuildError) as excinfo:
                run_build(site_config)

        assert excinfo.value.returncode == 1
        assert excinfo.value.stdout == "partial\n"
        assert excinfo.value.stderr == "Liquid Exception\n"

    def test_missing_executable_raises(self, site_config: dict) -> None:
        with patch("press.build.subprocess.run", side_effect=FileNotFoundError("bundle")):
            with pytest.raises(BuildError, match="Could not start 'bundle'"):
                run_build(site_config)

    def test_empty_command_raises(self, site_config: dict) -> None:
        site_config["BUILD_COMMAND"] = []
        with pytest.raises(BuildError, match="No site generator configured"):
            run_build(site_config)

    def test_real_process(self, site_config: dict) -> None:
        site_config["BUILD_COMMAND"] = [sys.executable, "-c", "import sys; print(sys.argv[1:])"]
        result = run_build(site_config)
        assert "'--config', '_prod_config.yml'" in result.stdout

    def test_real_process_failure(self, site_config: dict) -> None:
        site_config["BUILD_COMMAND"] = [sys.executable, "-c", "import sys; sys.exit(3)"]
        with pytest.raises(BuildError) as excinfo:
            run_build(site_config)
        assert excinfo.value.returncode == 3


class TestSiteConfig:
    """Tests for get_site_config."""

    @override_settings(PRESS_SITE={"SOURCE_DIR": "/srv/site", "BUILD_COMMAND": "hugo --minify"})
    def test_resolves_paths_and_splits_command(self) -> None:
        config = get_site_config()
        assert config["SOURCE_DIR"] == Path("/srv/site").resolve()
        assert config["OUTPUT_DIR"] == Path("/srv/site").resolve() / "_site"
        assert config["CONTENT_DIR"] == Path("/srv/site").resolve() / "content"
        assert config["BUILD_COMMAND"] == ["hugo", "--minify"]
        assert config["BRANCH"] == "gh-pages"
        assert config["PUSH"] is True

    @override_settings(PRESS_SITE={"SOURCE_DIR": "/srv/site", "OUTPUT_DIR": "/tmp/out"})
    def test_absolute_output_dir_kept(self) -> None:
        assert get_site_config()["OUTPUT_DIR"] == Path("/tmp/out")


class TestBuildSiteCommand:
    """Tests for the build_site management command."""

    def test_relays_output(self, tmp_path: Path) -> None:
        out, err = StringIO(), StringIO()
        with override_settings(PRESS_SITE={"SOURCE_DIR": tmp_path}):
            with patch("press.build.subprocess.run", return_value=_completed(0, "Generating...\n", "deprecation\n")):
                call_command("build_site", stdout=out, stderr=err)

        assert "Generating..." in out.getvalue()
        assert "Site built into" in out.getvalue()
        assert "deprecation" in err.getvalue()

    def test_config_option(self, tmp_path: Path) -> None:
        with override_settings(PRESS_SITE={"SOURCE_DIR": tmp_path}):
            with patch("press.build.subprocess.run", return_value=_completed()) as run:
                call_command("build_site", config="_dev_config.yml", stdout=StringIO())

        assert run.call_args[0][0][-2:] == ["--config", "_dev_config.yml"]

    def test_failure_raises_command_error(self, tmp_path: Path) -> None:
        err = StringIO()
        with override_settings(PRESS_SITE={"SOURCE_DIR": tmp_path}):
            with patch("press.build.subprocess.run", return_value=_completed(1, "", "boom\n")):
                with pytest.raises(CommandError, match="Build failed"):
                    call_command("build_site", stdout=StringIO(), stderr=err)

        assert "boom" in err.getvalue()
