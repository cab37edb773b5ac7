"""Remote URL helpers"""

import re

from ..constants import PAGES_HOST_SUFFIX

GITHUB_REMOTE_PATTERN = re.compile(
    r"github\.com[/:](?P<owner>[\w-]+)/(?P<repo>[\w.-]+?)/?$"
)


def strip_git_suffix(repository_url: str) -> str:
    """Remove trailing slashes and a trailing ``.git``"""
    url = repository_url.strip().rstrip("/")
    if url.endswith(".git"):
        url = url[:-len(".git")]
    return url


def extract_repo_name(repository_url: str) -> str:
    """
    Extract the repository name from a remote URL

    Handles HTTPS (``https://host/owner/repo.git``) and SCP-like SSH
    (``user@host:owner/repo.git``) remotes.

    Args:
        repository_url: Git remote URL

    Returns:
        Repository name, e.g. ``my-portfolio``
    """
    url = strip_git_suffix(repository_url)
    repo_name = url.split("/")[-1]

    # user@host:repo without an owner segment
    if ":" in repo_name:
        repo_name = repo_name.split(":")[-1]

    return repo_name


def generate_pages_url(repository_url: str) -> str:
    """
    Build the hosted pages URL for a GitHub remote

    Args:
        repository_url: Git remote URL

    Returns:
        ``https://<owner>.github.io/<repo>`` for GitHub remotes, otherwise
        the remote URL unchanged
    """
    match = GITHUB_REMOTE_PATTERN.search(strip_git_suffix(repository_url))
    if match:
        return f"https://{match.group('owner')}.{PAGES_HOST_SUFFIX}/{match.group('repo')}"

    return repository_url


def default_base_url(repository_url: str) -> str:
    """Base URL for a project site served under the repository name"""
    return f"/{extract_repo_name(repository_url)}/"


def normalize_site_url(homepage: str) -> str:
    """Turn a custom domain into a browsable URL"""
    if re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", homepage):
        return homepage
    return f"https://{homepage.strip('/')}"
