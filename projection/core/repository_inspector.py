"""Read-only inspection of the Git environment"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..constants import DEFAULT_REMOTE
from ..models.git import GitRepositoryStatus
from ..utils import git_utils

logger = logging.getLogger(__name__)


class RepositoryInspector:
    """Answers questions about the repository rooted at a directory

    Every answer is computed fresh from ``git`` subprocess calls; nothing
    is cached between calls.
    """

    def is_installed(self) -> bool:
        """Check if the git binary is available"""
        return git_utils.is_git_installed()

    def validate(self, cwd: Union[str, Path],
                 remote_name: str = DEFAULT_REMOTE) -> GitRepositoryStatus:
        """
        Snapshot the repository state

        Args:
            cwd: Project directory
            remote_name: Remote to look up

        Returns:
            GitRepositoryStatus (remote fields stay empty outside a repository)
        """
        path = Path(cwd)
        status = GitRepositoryStatus(remote_name=remote_name)

        if not git_utils.is_git_repository(path):
            logger.debug(f"{path} is not a git repository")
            return status

        status.is_git_repo = True
        status.current_branch = self.get_current_branch(path)

        remote_url = self.get_remote_url(path, remote_name)
        if remote_url:
            status.has_remote = True
            status.remote_url = remote_url
        else:
            logger.debug(f"No remote '{remote_name}' configured in {path}")

        return status

    def get_remote_url(self, cwd: Union[str, Path],
                       remote_name: str = DEFAULT_REMOTE) -> Optional[str]:
        """URL of the named remote, or None when it is not configured"""
        return git_utils.get_remote_url(Path(cwd), remote_name)

    def get_current_branch(self, cwd: Union[str, Path]) -> str:
        """Current branch name, empty when it cannot be determined"""
        return git_utils.get_current_branch(Path(cwd)) or ""
