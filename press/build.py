"""
Run the external static-site generator.

The generator is invoked once, as configured in PRESS_SITE:

    <BUILD_COMMAND...> --config <CONFIG_FILE>

from SOURCE_DIR. Its output is captured and handed back to the caller; a
non-zero exit status raises BuildError straight away. There is no retry.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from .conf import get_site_config
from .exceptions import BuildError

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    command: List[str]
    returncode: int
    stdout: str
    stderr: str


def build_command(config: dict, config_file: Optional[str] = None) -> List[str]:
    command = list(config["BUILD_COMMAND"])
    config_file = config_file or config["CONFIG_FILE"]
    if config_file:
        command += ["--config", str(config_file)]
    return command


def run_build(config: Optional[dict] = None, config_file: Optional[str] = None) -> BuildResult:
    """
    Run the generator and return its captured output.

    Args:
        config: Site config (default: get_site_config())
        config_file: Generator config file overriding CONFIG_FILE

    Raises:
        BuildError: if the command cannot be started or exits non-zero
    """
    config = config or get_site_config()
    if not config["BUILD_COMMAND"]:
        raise BuildError("No site generator configured (PRESS_SITE['BUILD_COMMAND'] is empty)")

    command = build_command(config, config_file)
    cwd = config["SOURCE_DIR"]

    logger.info(f"Building site: {' '.join(command)} (in {cwd})")

    try:
        result = subprocess.run(
            command,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logger.error(f"Could not start site generator: {e}")
        raise BuildError(f"Could not start {command[0]!r}: {e}") from e

    if result.returncode != 0:
        logger.error(f"Site generator exited with status {result.returncode}")
        raise BuildError(
            f"{' '.join(command)} exited with status {result.returncode}",
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    logger.info("Site build finished")
    return BuildResult(
        command=command,
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )
