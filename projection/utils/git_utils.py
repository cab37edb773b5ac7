"""Git operation utilities"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..api.exceptions import CommandTimeoutError, GitCommandError
from ..constants import DEFAULT_GIT_TIMEOUT, ENV_GIT_TIMEOUT
from .env_utils import get_timeout

logger = logging.getLogger(__name__)

GIT_EXECUTABLE = "git"


def git_timeout() -> float:
    """Deadline for read-only git queries"""
    return get_timeout(ENV_GIT_TIMEOUT, DEFAULT_GIT_TIMEOUT)


def run_git(args: Sequence[str],
            cwd: Union[str, Path, None] = None,
            timeout: Optional[float] = None,
            check: bool = True) -> subprocess.CompletedProcess:
    """
    Run a git command

    Args:
        args: Arguments after ``git``
        cwd: Working directory
        timeout: Deadline in seconds (defaults to the git query timeout)
        check: Raise on a non-zero exit status

    Returns:
        Completed process with text output

    Raises:
        GitCommandError: If check is set and the command fails
        CommandTimeoutError: If the command exceeds its deadline
        FileNotFoundError: If the git binary is missing
    """
    command: List[str] = [GIT_EXECUTABLE, *args]
    if timeout is None:
        timeout = git_timeout()

    logger.debug(f"Running {' '.join(command)} in {cwd or '.'}")

    try:
        result = subprocess.run(
            command,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except subprocess.TimeoutExpired:
        raise CommandTimeoutError(command, timeout)

    if check and result.returncode != 0:
        raise GitCommandError(command, result.returncode, result.stderr, result.stdout)

    return result


def is_git_installed() -> bool:
    """
    Check if git is installed and available in PATH

    Returns:
        True if ``git --version`` succeeds
    """
    try:
        run_git(['--version'])
        return True
    except (GitCommandError, FileNotFoundError, PermissionError):
        return False
    except CommandTimeoutError as e:
        logger.warning(str(e))
        return False


def is_git_repository(path: Path) -> bool:
    """
    Check if directory is a Git repository

    Args:
        path: Directory path

    Returns:
        True if it's a Git repository
    """
    try:
        run_git(['rev-parse', '--git-dir'], cwd=path)
        return True
    except (GitCommandError, FileNotFoundError, NotADirectoryError):
        return False
    except CommandTimeoutError as e:
        logger.warning(str(e))
        return False


def get_current_branch(path: Path) -> Optional[str]:
    """
    Get current Git branch

    Args:
        path: Repository path

    Returns:
        Branch name or None
    """
    try:
        result = run_git(['rev-parse', '--abbrev-ref', 'HEAD'], cwd=path)
        return result.stdout.strip()
    except (GitCommandError, FileNotFoundError, NotADirectoryError):
        return None
    except CommandTimeoutError as e:
        logger.warning(str(e))
        return None


def get_remote_url(path: Path, remote: str = 'origin') -> Optional[str]:
    """
    Get Git remote URL

    Args:
        path: Repository path
        remote: Remote name

    Returns:
        Remote URL or None
    """
    try:
        result = run_git(['remote', 'get-url', remote], cwd=path)
        return result.stdout.strip() or None
    except (GitCommandError, FileNotFoundError, NotADirectoryError):
        return None
    except CommandTimeoutError as e:
        logger.warning(str(e))
        return None


def get_config_value(path: Path, key: str) -> Optional[str]:
    """
    Read a git config value as seen from a repository

    Args:
        path: Repository path
        key: Config key, e.g. ``user.name``

    Returns:
        Value or None when unset
    """
    try:
        result = run_git(['config', '--get', key], cwd=path)
        return result.stdout.strip() or None
    except (GitCommandError, FileNotFoundError, NotADirectoryError):
        return None
    except CommandTimeoutError as e:
        logger.warning(str(e))
        return None


def remote_branch_exists(repository_url: str, branch: str,
                         cwd: Union[str, Path, None] = None,
                         timeout: Optional[float] = None) -> bool:
    """
    Check whether a branch exists on a remote

    Args:
        repository_url: Remote URL or path
        branch: Branch name
        cwd: Working directory
        timeout: Deadline in seconds

    Returns:
        True if the branch exists

    Raises:
        GitCommandError: If the remote cannot be queried
    """
    result = run_git(
        ['ls-remote', '--exit-code', '--heads', repository_url, branch],
        cwd=cwd,
        timeout=timeout,
        check=False
    )

    # ls-remote exits with 2 when the remote is reachable but has no match
    if result.returncode == 2:
        return False
    if result.returncode != 0:
        raise GitCommandError(
            [GIT_EXECUTABLE, 'ls-remote', '--exit-code', '--heads', repository_url, branch],
            result.returncode,
            result.stderr,
            result.stdout
        )
    return True


def has_staged_changes(path: Path, timeout: Optional[float] = None) -> bool:
    """
    Check if the index differs from HEAD

    Args:
        path: Repository path
        timeout: Deadline in seconds

    Returns:
        True if there is something to commit
    """
    result = run_git(['diff', '--cached', '--quiet', '--exit-code'],
                     cwd=path, timeout=timeout, check=False)
    if result.returncode not in (0, 1):
        # Unborn branch: there is no HEAD to diff against
        listing = run_git(['ls-files'], cwd=path, timeout=timeout)
        return bool(listing.stdout.strip())
    return result.returncode == 1
