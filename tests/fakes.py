"""Test doubles for the deployment collaborators."""

import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from projection.core.repository_inspector import RepositoryInspector
from projection.models import GitRepositoryStatus
from projection.services.build_service import SiteBuilder
from projection.services.publish_service import BranchPublisher, PublishRequest

GITHUB_URL = "https://github.com/u/r.git"

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


class FakeInspector(RepositoryInspector):
    """Inspector answering from fixed values instead of git."""

    def __init__(self, installed: bool = True, is_repo: bool = True,
                 remotes: Optional[Dict[str, str]] = None, branch: str = "main"):
        self.installed = installed
        self.is_repo = is_repo
        self.remotes = {"origin": GITHUB_URL} if remotes is None else remotes
        self.branch = branch

    def is_installed(self) -> bool:
        return self.installed

    def validate(self, cwd, remote_name="origin") -> GitRepositoryStatus:
        status = GitRepositoryStatus(remote_name=remote_name)
        if not self.is_repo:
            return status
        status.is_git_repo = True
        status.current_branch = self.branch
        url = self.get_remote_url(cwd, remote_name)
        if url:
            status.has_remote = True
            status.remote_url = url
        return status

    def get_remote_url(self, cwd, remote_name="origin") -> Optional[str]:
        if not self.is_repo:
            return None
        return self.remotes.get(remote_name)

    def get_current_branch(self, cwd) -> str:
        return self.branch


class RecordingBuilder(SiteBuilder):
    """Builder writing a single page and remembering its calls."""

    def __init__(self, error: Optional[Exception] = None):
        self.calls: List[tuple] = []
        self.error = error

    def build(self, cwd: Path, output_dir: Path, base_url: str) -> None:
        self.calls.append((cwd, output_dir, base_url))
        if self.error:
            raise self.error
        output_dir.mkdir(parents=True, exist_ok=True)
        (output_dir / "index.html").write_text(f"<base href='{base_url}'>", encoding="utf-8")


class RecordingPublisher(BranchPublisher):
    """Publisher remembering requests instead of pushing."""

    def __init__(self, error: Optional[Exception] = None):
        self.requests: List[PublishRequest] = []
        self.error = error

    def publish(self, request: PublishRequest) -> bool:
        self.requests.append(request)
        if self.error:
            raise self.error
        return True


def git(*args: str, cwd: Optional[Path] = None) -> str:
    """Run git for test setup."""
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()
