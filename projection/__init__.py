"""Projection Deploy - publishes a projection portfolio site to GitHub Pages.

The same deployment pipeline backs the ``projection deploy`` command and the
admin server's deploy endpoints.
"""

from .__version__ import __version__, __version_info__, __author__, __license__

# Core API
from .api.deployer import Deployer, deploy, status

# Data models
from .models import (
    DeployOptions,
    DeploymentPlan,
    DeploymentResult,
    DeploymentStatus,
    ErrorDetail,
    GitRepositoryStatus,
)

# Exceptions
from .api.exceptions import (
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
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__license__",

    # Main classes
    "Deployer",

    # Core API functions
    "deploy",
    "status",

    # Data models
    "DeployOptions",
    "DeploymentPlan",
    "DeploymentResult",
    "DeploymentStatus",
    "ErrorDetail",
    "GitRepositoryStatus",

    # Exceptions
    "ProjectionError",
    "ValidationError",
    "DeploymentInProgressError",
    "ConfigError",
    "BuildError",
    "PublishError",
    "GitCommandError",
    "CommandTimeoutError",
]
