"""Data models for projection deploy"""

from .git import GitRepositoryStatus
from .config import DeployOptions, ProjectConfig, DeploymentPlan
from .project import ProjectDataFile
from .result import ErrorDetail, DeploymentResult, DeploymentStatus

__all__ = [
    # Git models
    "GitRepositoryStatus",

    # Config models
    "DeployOptions",
    "ProjectConfig",
    "DeploymentPlan",

    # Project models
    "ProjectDataFile",

    # Result models
    "ErrorDetail",
    "DeploymentResult",
    "DeploymentStatus",
]
