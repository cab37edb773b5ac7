"""Utility functions for projection deploy"""

from .file_utils import (
    clean_directory,
    copy_tree,
    write_if_missing,
)

from .git_utils import (
    run_git,
    is_git_installed,
    is_git_repository,
    get_current_branch,
    get_remote_url,
    get_config_value,
    remote_branch_exists,
    has_staged_changes,
)

from .url_utils import (
    extract_repo_name,
    generate_pages_url,
    default_base_url,
    normalize_site_url,
)

from .env_utils import get_timeout

__all__ = [
    # File utilities
    "clean_directory",
    "copy_tree",
    "write_if_missing",

    # Git utilities
    "run_git",
    "is_git_installed",
    "is_git_repository",
    "get_current_branch",
    "get_remote_url",
    "get_config_value",
    "remote_branch_exists",
    "has_staged_changes",

    # URL utilities
    "extract_repo_name",
    "generate_pages_url",
    "default_base_url",
    "normalize_site_url",

    # Environment utilities
    "get_timeout",
]
