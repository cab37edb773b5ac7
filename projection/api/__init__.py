"""Public API for projection deploy"""

from .exceptions import (
    ProjectionError,
    ValidationError,
    DeploymentInProgressError,
    ConfigError,
    BuildError,
    PublishError,
    GitCommandError,
    CommandTimeoutError,
)

__all__ = [
    "ProjectionError",
    "ValidationError",
    "DeploymentInProgressError",
    "ConfigError",
    "BuildError",
    "PublishError",
    "GitCommandError",
    "CommandTimeoutError",
]
