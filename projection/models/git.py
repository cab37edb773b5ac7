"""Git environment models"""

from dataclasses import dataclass
from typing import Any, Dict

from ..constants import DEFAULT_REMOTE


@dataclass
class GitRepositoryStatus:
    """Read-only snapshot of the Git environment rooted at a directory"""

    is_git_repo: bool = False
    has_remote: bool = False
    remote_name: str = DEFAULT_REMOTE
    remote_url: str = ""
    current_branch: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "isGitRepo": self.is_git_repo,
            "hasRemote": self.has_remote,
            "remoteName": self.remote_name,
            "remoteUrl": self.remote_url,
            "currentBranch": self.current_branch,
        }
