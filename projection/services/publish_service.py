"""Publishing of the built site to the pages branch"""

import logging
import re
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ..api.exceptions import ConfigError, PublishError
from ..constants import (
    CNAME_FILE,
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_PUBLISH_TIMEOUT,
    ENV_PUBLISH_TIMEOUT,
    NOJEKYLL_FILE,
    ErrorCode,
)
from ..models.config import DeployOptions, DeploymentPlan
from ..utils import git_utils
from ..utils.env_utils import get_timeout
from ..utils.file_utils import copy_tree, write_if_missing

logger = logging.getLogger(__name__)

# scheme://... or scp-like user@host:path
REMOTE_URL_PATTERN = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*://|[^/\\]+@[^/\\]+:)")


@dataclass
class PublishRequest:
    """Arguments for one publish-directory-to-branch operation"""

    source_dir: Path
    branch: str
    message: str
    remote: str
    repository_url: str
    dotfiles: bool = True
    add: bool = True
    force: bool = False
    cwd: Optional[Path] = None


class BranchPublisher(ABC):
    """Abstract publish-directory-to-branch operation"""

    @abstractmethod
    def publish(self, request: PublishRequest) -> bool:
        """
        Commit the source directory to the target branch and push it

        Args:
            request: Publish arguments

        Returns:
            True if a new commit was pushed
        """
        pass


class GitBranchPublisher(BranchPublisher):
    """Publishes through a throwaway clone of the target branch"""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout or get_timeout(ENV_PUBLISH_TIMEOUT, DEFAULT_PUBLISH_TIMEOUT)

    def resolve_url(self, repository_url: str, cwd: Optional[Path]) -> str:
        """Make a relative local remote path usable from another directory"""
        if REMOTE_URL_PATTERN.match(repository_url) or cwd is None:
            return repository_url

        path = Path(repository_url)
        if path.is_absolute():
            return repository_url
        return str((cwd / path).resolve())

    def publish(self, request: PublishRequest) -> bool:
        url = self.resolve_url(request.repository_url, request.cwd)

        with tempfile.TemporaryDirectory(prefix="projection-publish-") as tmp:
            worktree = Path(tmp) / "site"
            self._prepare_worktree(worktree, url, request)

            if not request.add:
                self._git(['rm', '-r', '-f', '-q', '--ignore-unmatch', '.'], worktree)

            copied = copy_tree(request.source_dir, worktree, include_dotfiles=request.dotfiles)
            logger.info(f"Copied {len(copied)} files from {request.source_dir}")

            self._git(['add', '--all'], worktree)
            if not git_utils.has_staged_changes(worktree, timeout=self.timeout):
                logger.info(f"Branch '{request.branch}' is already up to date")
                return False

            self._git(self._identity(request.cwd) + ['commit', '-q', '-m', request.message], worktree)

            push = ['push']
            if request.force:
                push.append('--force')
            push += [request.remote, f'HEAD:refs/heads/{request.branch}']
            self._git(push, worktree)

        logger.info(f"Pushed to {request.remote}/{request.branch}")
        return True

    def _prepare_worktree(self, worktree: Path, url: str, request: PublishRequest) -> None:
        exists = git_utils.remote_branch_exists(
            url, request.branch, cwd=request.cwd, timeout=self.timeout
        )

        if exists:
            logger.debug(f"Cloning existing branch '{request.branch}'")
            git_utils.run_git(
                ['clone', '--quiet', '--depth', '1', '--branch', request.branch,
                 '--single-branch', '--origin', request.remote, url, str(worktree)],
                cwd=request.cwd,
                timeout=self.timeout
            )
            return

        logger.debug(f"Branch '{request.branch}' not found on remote, starting an orphan branch")
        git_utils.run_git(['init', '--quiet', str(worktree)], timeout=self.timeout)
        self._git(['remote', 'add', request.remote, url], worktree)
        self._git(['symbolic-ref', 'HEAD', f'refs/heads/{request.branch}'], worktree)

    def _identity(self, cwd: Optional[Path]) -> List[str]:
        if cwd is None:
            return []

        args = []
        for key in ('user.name', 'user.email'):
            value = git_utils.get_config_value(cwd, key)
            if value:
                args.extend(['-c', f'{key}={value}'])
        return args

    def _git(self, args: List[str], worktree: Path):
        return git_utils.run_git(args, cwd=worktree, timeout=self.timeout)


def default_commit_message() -> str:
    """Commit message stamped with the current UTC time"""
    timestamp = datetime.now(timezone.utc).isoformat(timespec='milliseconds')
    return DEFAULT_COMMIT_MESSAGE.format(timestamp=timestamp.replace('+00:00', 'Z'))


class PublishEngine:
    """Stages marker files into the build output and publishes it"""

    def __init__(self, publisher: Optional[BranchPublisher] = None):
        self.publisher = publisher or GitBranchPublisher()

    def publish(self, build_dir: Path, plan: DeploymentPlan,
                options: Optional[DeployOptions] = None,
                cwd: Optional[Path] = None) -> bool:
        """
        Publish the build directory to the plan's branch

        Args:
            build_dir: Built site
            plan: Resolved deployment plan
            options: Caller options (message, force)
            cwd: Project directory

        Returns:
            True if a new commit was pushed

        Raises:
            ConfigError: If the build directory does not exist
            PublishError: If the marker files cannot be written
            GitCommandError: If a git command fails
            CommandTimeoutError: If a git command exceeds its deadline
        """
        options = options or DeployOptions()
        build_dir = Path(build_dir)

        if not build_dir.is_dir():
            raise ConfigError(
                f"Build directory not found: {build_dir}",
                solution="Run the build first or check the --dir option"
            )

        self._write_markers(build_dir, plan)

        request = PublishRequest(
            source_dir=build_dir,
            branch=plan.branch,
            message=options.message or default_commit_message(),
            remote=plan.remote,
            repository_url=plan.repository_url,
            dotfiles=True,
            add=True,
            force=options.force,
            cwd=cwd,
        )
        return self.publisher.publish(request)

    def _write_markers(self, build_dir: Path, plan: DeploymentPlan) -> None:
        try:
            if write_if_missing(build_dir / NOJEKYLL_FILE):
                logger.debug(f"Created {NOJEKYLL_FILE}")

            if plan.homepage:
                (build_dir / CNAME_FILE).write_text(plan.homepage, encoding='utf-8')
                logger.debug(f"Wrote {CNAME_FILE} for {plan.homepage}")
        except OSError as e:
            raise PublishError(
                f"Cannot write site files to {build_dir}: {e.strerror or e}",
                ErrorCode.DEPLOYMENT_ERROR,
                details=str(e),
                solution=f"Check that {build_dir} is writable by the current user"
            )
