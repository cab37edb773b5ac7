"""Global constants for projection deploy"""

APP_NAME = "projection"
LOG_FORMAT = "%(message)s"

# Project data files, searched in order
PROJECT_DATA_FILES = [
    "projects.yaml",
    "projects.yml",
    "projects.json",
]

# Generator configuration files, searched in order
PROJECT_CONFIG_FILES = [
    "projection.config.json",
    "projection.config.yaml",
    "projection.config.yml",
]

# Key holding configuration embedded in a project data file
EMBEDDED_CONFIG_KEY = "config"

# Deployment defaults
DEFAULT_REMOTE = "origin"
DEFAULT_DEPLOY_BRANCH = "gh-pages"
DEFAULT_BUILD_DIR = "dist"
DEFAULT_BASE_URL = "./"
DEFAULT_COMMIT_MESSAGE = "Deploy to GitHub Pages - {timestamp}"
PAGES_HOST_SUFFIX = "github.io"

# Files staged into the build output before publishing
NOJEKYLL_FILE = ".nojekyll"
CNAME_FILE = "CNAME"

# Subprocess deadlines (seconds)
DEFAULT_GIT_TIMEOUT = 30
DEFAULT_BUILD_TIMEOUT = 600
DEFAULT_PUBLISH_TIMEOUT = 300

# Admin server
DEFAULT_ADMIN_HOST = "127.0.0.1"
DEFAULT_ADMIN_PORT = 3000
API_PREFIX = "/api"

# Environment variables
ENV_GIT_TIMEOUT = "PROJECTION_GIT_TIMEOUT"
ENV_BUILD_TIMEOUT = "PROJECTION_BUILD_TIMEOUT"
ENV_PUBLISH_TIMEOUT = "PROJECTION_PUBLISH_TIMEOUT"
ENV_LOG_LEVEL = "PROJECTION_LOG_LEVEL"
ENV_ADMIN_HOST = "PROJECTION_ADMIN_HOST"
ENV_ADMIN_PORT = "PROJECTION_ADMIN_PORT"
ENV_OUTPUT_DIR = "PROJECTION_OUTPUT_DIR"
ENV_BASE_URL = "PROJECTION_BASE_URL"


# Error codes
class ErrorCode:
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"
    BUILD_ERROR = "BUILD_ERROR"
    GIT_ERROR = "GIT_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PUSH_REJECTED = "PUSH_REJECTED"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    DEPLOYMENT_ERROR = "DEPLOYMENT_ERROR"


# Human readable summary per error code
ERROR_MESSAGES = {
    ErrorCode.VALIDATION_ERROR: "Deployment pre-flight checks failed.",
    ErrorCode.CONFIG_ERROR: "Deployment configuration is invalid.",
    ErrorCode.BUILD_ERROR: "Build failed. There are errors in your project data or build setup.",
    ErrorCode.GIT_ERROR: "Git error. Check your repository configuration.",
    ErrorCode.AUTH_ERROR: "Authentication failed. Unable to push to the remote repository.",
    ErrorCode.PUSH_REJECTED: "Push rejected. The remote branch has changes that conflict with this deployment.",
    ErrorCode.NETWORK_ERROR: "Network error. Check your internet connection.",
    ErrorCode.TIMEOUT: "A deployment step did not finish in time.",
    ErrorCode.DEPLOYMENT_ERROR: "Deployment failed.",
}

# Remediation hint per error code
ERROR_SOLUTIONS = {
    ErrorCode.VALIDATION_ERROR: "Fix the reported environment problem and run the deployment again.",
    ErrorCode.CONFIG_ERROR: "Check projection.config.json and your Git remote configuration.",
    ErrorCode.BUILD_ERROR: "Fix the build errors first, or use --no-build to deploy existing files.",
    ErrorCode.GIT_ERROR: "Verify the remote URL with 'git remote -v' and ensure the repository exists.",
    ErrorCode.AUTH_ERROR: (
        "Configure Git credentials: use SSH keys "
        "(https://docs.github.com/en/authentication/connecting-to-github-with-ssh), "
        "a credential helper (git config credential.helper store) or a personal access token."
    ),
    ErrorCode.PUSH_REJECTED: (
        "Use --force to force push (overwrites the remote branch history), "
        "or resolve the conflicts on the target branch manually."
    ),
    ErrorCode.NETWORK_ERROR: "Check your network connection and that the remote host is reachable.",
    ErrorCode.TIMEOUT: (
        f"Retry the deployment, or raise the limits with {ENV_GIT_TIMEOUT}, "
        f"{ENV_BUILD_TIMEOUT} or {ENV_PUBLISH_TIMEOUT}."
    ),
    ErrorCode.DEPLOYMENT_ERROR: "Inspect the original error below and run the deployment again.",
}

# Readiness issues reported by the status check
ISSUE_GIT_NOT_INSTALLED = "Git is not installed or not in PATH"
ISSUE_NOT_A_REPOSITORY = "Not a Git repository"
ISSUE_NO_REMOTE = "No Git remote configured"
ISSUE_NO_PROJECTS_FILE = "No projects file found"
ISSUE_CONFIG_FAILED = "Failed to load deployment configuration"

# Pipeline stages
STAGE_CHECK_GIT = "check_git"
STAGE_VALIDATE_REPOSITORY = "validate_repository"
STAGE_LOCATE_PROJECT_DATA = "locate_project_data"
STAGE_RESOLVE_CONFIG = "resolve_config"
STAGE_DRY_RUN = "dry_run"
STAGE_BUILD = "build"
STAGE_PUBLISH = "publish"
STAGE_DONE = "done"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_INFO = "ℹ"
EMOJI_ROCKET = "🚀"
EMOJI_PACKAGE = "📦"
EMOJI_HAMMER = "🔨"
EMOJI_CLIPBOARD = "📋"
EMOJI_PARTY = "🎉"
