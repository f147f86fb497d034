"""
Publish a built site directory to a hosting branch (gh-pages style).

Steps:
1. Look up the URL of the configured remote in the local repository
2. Clone it into a temporary directory
3. Check out the hosting branch, or start it as an orphan when the remote lacks it
4. Replace the tracked tree with the contents of the output directory
5. Commit when something changed, and push when asked to

Every git step that fails raises PublishError with git's own message.
"""

import logging
import shutil
import subprocess
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from .exceptions import PublishError

logger = logging.getLogger(__name__)


def _git(args, cwd) -> str:
    command = ["git", *args]
    logger.debug(f"Running {' '.join(command)} in {cwd}")

    try:
        result = subprocess.run(
            command,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise PublishError(f"Could not run git: {e}") from e

    if result.returncode != 0:
        detail = (result.stderr or result.stdout).strip()
        raise PublishError(f"git {args[0]} failed ({result.returncode}): {detail}")
    return result.stdout


def remote_url(remote: str, repo_dir) -> str:
    return _git(["remote", "get-url", remote], repo_dir).strip()


def remote_has_branch(workdir, branch: str) -> bool:
    return bool(_git(["ls-remote", "--heads", "origin", branch], workdir).strip())


def publish_directory(
    output_dir,
    *,
    remote: str = "origin",
    branch: str = "gh-pages",
    push: bool = True,
    message: str = "Update {timestamp}",
    repo_dir=None,
) -> bool:
    """
    Commit the contents of output_dir to branch on remote.

    Args:
        output_dir: Directory holding the generated site
        remote: Name of the remote in repo_dir to publish to
        branch: Hosting branch
        push: Push the commit (False leaves it in the throwaway clone)
        message: Commit message, may use {timestamp}
        repo_dir: Local repository the remote is looked up in (default: cwd)

    Returns:
        True if a commit was made, False if the branch already matched
    """
    output_dir = Path(output_dir)
    if not output_dir.is_dir():
        raise PublishError(f"Output directory {output_dir} does not exist")
    if not any(output_dir.iterdir()):
        raise PublishError(f"Output directory {output_dir} is empty")

    repo_dir = Path(repo_dir) if repo_dir else Path.cwd()
    url = remote_url(remote, repo_dir)
    logger.info(f"Publishing {output_dir} to {remote} ({url}) branch {branch}")

    with tempfile.TemporaryDirectory(prefix="press-publish-") as tmp:
        workdir = Path(tmp) / "repo"
        _git(["clone", "--quiet", url, str(workdir)], tmp)

        if remote_has_branch(workdir, branch):
            _git(["checkout", "--quiet", branch], workdir)
        else:
            logger.info(f"Branch {branch} not found on {remote}, starting it")
            _git(["symbolic-ref", "HEAD", f"refs/heads/{branch}"], workdir)

        _git(["rm", "-r", "--quiet", "--force", "--ignore-unmatch", "."], workdir)
        shutil.copytree(
            output_dir,
            workdir,
            dirs_exist_ok=True,
            ignore=shutil.ignore_patterns(".git"),
        )
        _git(["add", "--all", "."], workdir)

        if not _git(["status", "--porcelain"], workdir).strip():
            logger.info("Nothing to publish, branch is up to date")
            return False

        timestamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
        _git(["commit", "--quiet", "-m", message.format(timestamp=timestamp)], workdir)

        if push:
            _git(["push", "--quiet", "origin", branch], workdir)
            logger.info(f"Pushed {branch} to {remote}")
        else:
            logger.info("Push disabled, commit left unpushed")

    return True
